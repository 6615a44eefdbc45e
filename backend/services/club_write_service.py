"""Write access to clubs: create, version-checked update, idempotent delete."""

from __future__ import annotations

import logging
from typing import Any, Mapping, Optional, Union

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from core.errors import NameExists
from repositories.club_repo import ClubRepository
from schemas.club import ClubCreate, ClubUpdate, parse_model
from .version_guard import VersionGuard

logger = logging.getLogger(__name__)


class ClubWriteService:
    """Creates, updates and deletes clubs.

    Authorization is checked by the caller; this service assumes the action
    is permitted.
    """

    def __init__(self, repo: ClubRepository, guard: VersionGuard) -> None:
        self._repo = repo
        self._guard = guard

    @classmethod
    def for_session(cls, session: AsyncSession) -> "ClubWriteService":
        repo = ClubRepository(session)
        return cls(repo, VersionGuard(repo))

    async def create(self, data: Union[ClubCreate, Mapping[str, Any]]) -> int:
        """Insert a new club with version 0 and return its id.

        Raises ValidationFailed for malformed input and NameExists when the
        name is already taken.
        """
        club_in = parse_model(ClubCreate, data)
        logger.debug("create: name=%s", club_in.name)

        if await self._repo.find_by_name(club_in.name) is not None:
            logger.debug("create: name %r exists", club_in.name)
            raise NameExists(club_in.name)

        try:
            club = await self._repo.create(club_in.to_entity())
        except IntegrityError as e:
            # unique(name) raced with a concurrent insert
            raise NameExists(club_in.name) from e

        logger.debug("create: id=%d", club.id)
        return club.id

    async def update(
        self,
        id: int,
        data: Union[ClubUpdate, Mapping[str, Any]],
        version_token: Optional[str],
    ) -> int:
        """Replace the scalar properties of club ``id`` if ``version_token`` is current.

        Returns the new version. Checks run in this order: PreconditionRequired
        (no token), NotFound, VersionInvalid, VersionOutdated, then the body
        (ValidationFailed, NameExists).
        """
        logger.debug("update: id=%d, version=%s", id, version_token)
        expected = await self._guard.check_token(id, version_token)
        return await self._apply(id, data, expected)

    async def update_version(
        self,
        id: int,
        data: Union[ClubUpdate, Mapping[str, Any]],
        version: int,
    ) -> int:
        """Like ``update`` for callers holding the version as a number (GraphQL)."""
        logger.debug("update_version: id=%d, version=%d", id, version)
        expected = await self._guard.check_number(id, version)
        return await self._apply(id, data, expected)

    async def delete(self, id: int) -> bool:
        """Remove club ``id`` with its stadium and players.

        Returns whether a club was removed; an unknown id is not an error.
        """
        deleted = await self._repo.delete(id)
        logger.debug("delete: id=%d, deleted=%s", id, deleted)
        return deleted

    async def _check_name_free(self, id: int, name: str) -> None:
        owner = await self._repo.find_by_name(name)
        if owner is not None and owner.id != id:
            logger.debug("_check_name_free: %r belongs to club %d", name, owner.id)
            raise NameExists(name)

    async def _apply(
        self, id: int, data: Union[ClubUpdate, Mapping[str, Any]], expected: int
    ) -> int:
        club_in = parse_model(ClubUpdate, data)
        await self._check_name_free(id, club_in.name)
        try:
            return await self._guard.apply_version(id, expected, club_in.column_values())
        except IntegrityError as e:
            raise NameExists(club_in.name) from e
