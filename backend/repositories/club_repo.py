from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Tuple

from sqlalchemy import ColumnElement, delete, func, select, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload
from sqlalchemy.orm.interfaces import LoaderOption

from models.club import Club
from .base import BaseRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ClubInclusion:
    """Which associations of a club to load with it."""

    with_stadium: bool = True
    with_players: bool = False

    def loader_options(self) -> Tuple[LoaderOption, ...]:
        """Resolve the flags into a fixed tuple of SQLAlchemy loader options."""
        options: List[LoaderOption] = []
        if self.with_stadium:
            options.append(selectinload(Club.stadium))
        if self.with_players:
            options.append(selectinload(Club.players))
        return tuple(options)


STADIUM_ONLY = ClubInclusion(with_stadium=True, with_players=False)
STADIUM_AND_PLAYERS = ClubInclusion(with_stadium=True, with_players=True)


class ClubRepository(BaseRepository[Club]):
    """Store for clubs: lookups, bounded queries, counts and versioned writes."""

    model = Club

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session)

    async def find_unique(
        self, id: int, inclusion: ClubInclusion = STADIUM_ONLY
    ) -> Optional[Club]:
        """Get one club with the requested associations, or None."""
        stmt = select(Club).where(Club.id == id).options(*inclusion.loader_options())
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def find_many(
        self,
        predicate: Optional[ColumnElement[bool]],
        skip: int,
        take: int,
        inclusion: ClubInclusion = STADIUM_ONLY,
    ) -> List[Club]:
        """Bounded query ordered by id."""
        stmt = select(Club).options(*inclusion.loader_options())
        if predicate is not None:
            stmt = stmt.where(predicate)
        stmt = stmt.order_by(Club.id).offset(skip).limit(take)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def count(self, predicate: Optional[ColumnElement[bool]] = None) -> int:
        """Number of clubs matching the predicate (all clubs when None)."""
        stmt = select(func.count()).select_from(Club)
        if predicate is not None:
            stmt = stmt.where(predicate)
        result = await self.session.execute(stmt)
        return int(result.scalar_one())

    async def find_by_name(self, name: str) -> Optional[Club]:
        """Get club by exact name."""
        stmt = select(Club).where(Club.name == name)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def current_version(self, id: int) -> Optional[int]:
        """Persisted version of a club read straight from the table, or None if absent."""
        stmt = select(Club.version).where(Club.id == id)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def create(self, club: Club) -> Club:
        """Insert a club (and its cascaded stadium/players); the store assigns the id."""
        return await self.add(club)

    async def update_versioned(
        self, id: int, expected_version: int, values: Dict[str, Any]
    ) -> Optional[int]:
        """Apply ``values`` only if the row still holds ``expected_version``.

        Returns the new version, or None when no row matched (absent or
        concurrently modified).
        """
        new_version = expected_version + 1
        stmt = (
            update(Club)
            .where(Club.id == id, Club.version == expected_version)
            .values(
                **values,
                version=new_version,
                updated_at=datetime.now(timezone.utc),
            )
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)
        if result.rowcount != 1:
            logger.debug(
                "update_versioned: id=%d expected_version=%d matched %d rows",
                id,
                expected_version,
                result.rowcount,
            )
            return None
        return new_version

    async def delete(self, id: int) -> bool:
        """Delete a club by id; returns whether a row was removed."""
        stmt = delete(Club).where(Club.id == id).execution_options(synchronize_session=False)
        result = await self.session.execute(stmt)
        return result.rowcount > 0

