"""Repository layer for DB access only (CRUD + simple queries).

Repositories accept an AsyncSession explicitly and use the DatabaseManager
from core/database.py; they never commit and contain no business rules.
"""

from .base import BaseRepository
from .club_repo import (
    STADIUM_AND_PLAYERS,
    STADIUM_ONLY,
    ClubInclusion,
    ClubRepository,
)

__all__ = [
    "BaseRepository",
    "ClubInclusion",
    "ClubRepository",
    "STADIUM_AND_PLAYERS",
    "STADIUM_ONLY",
]
