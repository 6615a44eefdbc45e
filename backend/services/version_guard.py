"""Optimistic concurrency control on the ``version`` column of clubs.

Writes carry the version the caller last saw (REST: ``If-Match: "3"``;
GraphQL: the ``version`` input field). The update is applied only when that
version equals the persisted one, and the persisted version then moves to
exactly ``version + 1``. Reads never change the version; conditional reads
(``If-None-Match``) compare the caller's token with the persisted version.
"""

from __future__ import annotations

import logging
import re
from typing import Any, Dict, Optional

from core.errors import NotFound, PreconditionRequired, VersionInvalid, VersionOutdated
from repositories.club_repo import ClubRepository

logger = logging.getLogger(__name__)

# If-Match uses strong comparison: a quoted version, no W/ prefix
VERSION_TOKEN_PATTERN = re.compile(r'^"(\d{1,9})"$')


def etag_for(version: int) -> str:
    """Version token as sent in ETag headers: the version in double quotes."""
    return f'"{version}"'


def parse_version_token(token: Optional[str]) -> int:
    """Parse a version token.

    Raises PreconditionRequired when no token is given and VersionInvalid
    when the token is not a quoted non-negative integer. Weak tags are
    invalid for writes.
    """
    if token is None or not token.strip():
        raise PreconditionRequired()
    match = VERSION_TOKEN_PATTERN.match(token.strip())
    if match is None:
        logger.debug("parse_version_token: invalid token %r", token)
        raise VersionInvalid(token)
    return int(match.group(1))


def is_not_modified(if_none_match: Optional[str], version: int) -> bool:
    """True when a conditional-read token list names the current version (weak comparison)."""
    if not if_none_match:
        return False
    current = etag_for(version)
    for candidate in if_none_match.split(","):
        candidate = candidate.strip()
        if candidate == "*":
            return True
        if candidate.startswith("W/"):
            candidate = candidate[2:]
        if candidate == current:
            return True
    return False


def check_version(expected: int, persisted: int) -> None:
    """Reject any version other than the persisted one.

    A version above the persisted one cannot have been observed by a client,
    so it is rejected the same way as a stale one.
    """
    if expected != persisted:
        logger.debug("check_version: expected=%d persisted=%d", expected, persisted)
        raise VersionOutdated(expected, current=persisted)


class VersionGuard:
    """Version-checked updates against the club store.

    Preconditions are checked before the caller looks at the new values:
    missing token, absent club, unparseable token, version mismatch. Only
    then is the body validated and ``apply_version`` called.
    """

    def __init__(self, repo: ClubRepository) -> None:
        self._repo = repo

    async def persisted_version(self, id: int) -> int:
        """Current version of club ``id``, read fresh from the store."""
        persisted = await self._repo.current_version(id)
        if persisted is None:
            raise NotFound.for_id(id)
        return persisted

    async def check_token(self, id: int, token: Optional[str]) -> int:
        """Return the version named by ``token`` once all preconditions hold."""
        if token is None or not token.strip():
            raise PreconditionRequired()
        persisted = await self.persisted_version(id)
        expected = parse_version_token(token)
        check_version(expected, persisted)
        return expected

    async def check_number(self, id: int, version: int) -> int:
        """Same as ``check_token`` for a version given as a number (GraphQL)."""
        persisted = await self.persisted_version(id)
        if version < 0:
            raise VersionInvalid(str(version))
        check_version(version, persisted)
        return version

    async def apply(self, id: int, token: Optional[str], values: Dict[str, Any]) -> int:
        """Apply ``values`` to club ``id`` if ``token`` names its persisted version."""
        expected = await self.check_token(id, token)
        return await self.apply_version(id, expected, values)

    async def apply_version(self, id: int, expected: int, values: Dict[str, Any]) -> int:
        """Conditional update from ``expected`` to ``expected + 1``; returns the new version."""
        new_version = await self._repo.update_versioned(id, expected, values)
        if new_version is None:
            # Another writer committed between the check and the conditional UPDATE.
            current = await self._repo.current_version(id)
            if current is None:
                raise NotFound.for_id(id)
            raise VersionOutdated(expected, current=current)

        logger.debug("apply_version: id=%d version %d -> %d", id, expected, new_version)
        return new_version
