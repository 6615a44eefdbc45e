"""Pydantic schemas for request bodies and response payloads."""

from .club import (
    ClubCreate,
    ClubOut,
    ClubUpdate,
    PlayerIn,
    PlayerOut,
    StadiumIn,
    StadiumOut,
    parse_model,
)

__all__ = [
    "ClubCreate",
    "ClubOut",
    "ClubUpdate",
    "PlayerIn",
    "PlayerOut",
    "StadiumIn",
    "StadiumOut",
    "parse_model",
]
