"""Domain errors of the club catalog.

Raised where the condition is detected (services, version guard, search
validation) and mapped to protocol status codes only at the transport layer
(``routes.errors`` for REST, the GraphQL error list for ``/graphql``).
Every error carries the context needed to explain the rejection.
"""

from __future__ import annotations

import json
from typing import Any, Iterable, List, Mapping, Optional


class ClubError(Exception):
    """Base class for all errors surfaced by the club services."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class NotFound(ClubError):
    """No club for an id, or no club matching a valid filter on the requested page."""

    def __init__(
        self,
        message: str,
        *,
        id: Optional[int] = None,
        filter: Optional[Mapping[str, Any]] = None,
        page: Optional[int] = None,
    ) -> None:
        super().__init__(message)
        self.id = id
        self.filter = dict(filter) if filter is not None else None
        self.page = page

    @classmethod
    def for_id(cls, id: int) -> "NotFound":
        return cls(f"There is no club with id {id}.", id=id)

    @classmethod
    def for_filter(cls, filter: Mapping[str, Any], page: int) -> "NotFound":
        return cls(
            f"No clubs found: {json.dumps(dict(filter), default=str, sort_keys=True)}, page {page}",
            filter=filter,
            page=page,
        )

    @classmethod
    def for_page(cls, page: int) -> "NotFound":
        return cls(f'Invalid page "{page}"', filter={}, page=page)


class ValidationFailed(ClubError):
    """One or more input fields are malformed; all violations are listed."""

    def __init__(self, violations: Iterable[str]) -> None:
        self.violations: List[str] = list(violations)
        super().__init__("; ".join(self.violations) or "Invalid input")


class NameExists(ClubError):
    def __init__(self, name: str) -> None:
        super().__init__(f'The name "{name}" already exists.')
        self.name = name


class PreconditionRequired(ClubError):
    def __init__(self, header: str = "If-Match") -> None:
        super().__init__(f'Header "{header}" is missing')
        self.header = header


class VersionInvalid(ClubError):
    def __init__(self, version: Optional[str]) -> None:
        super().__init__(f'Version "{version}" is not a valid version')
        self.version = version


class VersionOutdated(ClubError):
    def __init__(self, version: int, current: Optional[int] = None) -> None:
        super().__init__(f'Version "{version}" is outdated')
        self.version = version
        self.current = current


class Forbidden(ClubError):
    """The resolved identity lacks the role required for an action."""

    def __init__(self, action: str) -> None:
        super().__init__(f"Not allowed to {action}")
        self.action = action


__all__ = [
    "ClubError",
    "NotFound",
    "ValidationFailed",
    "NameExists",
    "PreconditionRequired",
    "VersionInvalid",
    "VersionOutdated",
    "Forbidden",
]
