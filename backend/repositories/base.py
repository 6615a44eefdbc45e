from __future__ import annotations

from typing import Generic, Type, TypeVar

from sqlalchemy.ext.asyncio import AsyncSession

from models.base import Base

T = TypeVar("T", bound=Base)


class BaseRepository(Generic[T]):
    """Base repository holding the session and the mapped model.

    No commits are performed here - commit responsibility is left to the
    session owner (request dependency or seed runner).
    """

    model: Type[T]

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with an async session."""
        self.session = session

    async def add(self, entity: T) -> T:
        """Add an entity to the session and flush so the store assigns keys."""
        self.session.add(entity)
        await self.session.flush()
        return entity
