from typing import AsyncGenerator

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from services.club_service import ClubService
from services.club_write_service import ClubWriteService

from .database import get_database_manager


async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency yielding an AsyncSession from the DatabaseManager."""
    manager = get_database_manager()
    async with manager.session() as session:
        yield session


def get_club_service(session: AsyncSession = Depends(get_db_session)) -> ClubService:
    """Read service bound to the request session."""
    return ClubService.for_session(session)


def get_club_write_service(session: AsyncSession = Depends(get_db_session)) -> ClubWriteService:
    """Write service bound to the request session."""
    return ClubWriteService.for_session(session)
