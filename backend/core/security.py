"""Identity resolution and role guards for the club endpoints.

Authentication happens in front of this service: the gateway forwards the
authenticated subject as ``X-User-Id`` and its roles as ``X-User-Roles``
(comma-separated). This module only turns those headers into an
``Identity`` and decides whether an action is permitted.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable, Optional, Tuple

from fastapi import Depends, Header

from .config import get_settings
from .errors import Forbidden

logger = logging.getLogger(__name__)

ROLE_ADMIN = "admin"
ROLE_USER = "user"


@dataclass(frozen=True)
class Identity:
    user_id: Optional[str] = None
    roles: Tuple[str, ...] = field(default_factory=tuple)

    @property
    def is_anonymous(self) -> bool:
        return self.user_id is None

    def has_role(self, role: str) -> bool:
        return role in self.roles


def parse_roles(raw: Optional[str]) -> Tuple[str, ...]:
    """Split a comma-separated role header into a tuple of lower-case role names."""
    if not raw:
        return ()
    return tuple(part.strip().lower() for part in raw.split(",") if part.strip())


async def get_identity(
    x_user_id: Optional[str] = Header(default=None, alias="X-User-Id"),
    x_user_roles: Optional[str] = Header(default=None, alias="X-User-Roles"),
) -> Identity:
    """Resolve the caller from gateway headers; without a user id the caller is anonymous."""
    user_id = (x_user_id or "").strip() or None
    if user_id is not None:
        return Identity(user_id=user_id, roles=parse_roles(x_user_roles))
    # In dev only, local tools may send roles without a subject.
    if x_user_roles and get_settings().is_dev():
        return Identity(user_id="dev", roles=parse_roles(x_user_roles))
    return Identity()


def ensure_role(identity: Identity, action: str, *roles: str) -> None:
    """Raise Forbidden unless the identity holds at least one of the roles."""
    if any(identity.has_role(r) for r in roles):
        return
    logger.debug("ensure_role: %s denied for user=%s roles=%s", action, identity.user_id, identity.roles)
    raise Forbidden(action)


def require_roles(*roles: str, action: str = "perform this action") -> Callable:
    """Return a dependency that enforces the presence of any of the given roles.

    Usage:
        @router.delete("/{id}", dependencies=[Depends(require_roles("admin"))])
    """

    async def _dep(identity: Identity = Depends(get_identity)) -> Identity:
        ensure_role(identity, action, *roles)
        return identity

    return _dep
