"""SQLAlchemy models for the club catalog (clubs, stadiums, players)."""

from .base import Base
from .club import Club, ClubType, Player, PreferredFoot, Stadium

__all__ = [
    "Base",
    "Club",
    "ClubType",
    "Player",
    "PreferredFoot",
    "Stadium",
]
