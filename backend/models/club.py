from __future__ import annotations

import enum
from datetime import date, datetime, timezone
from typing import List, Optional

from sqlalchemy import (
    JSON,
    CheckConstraint,
    Date,
    DateTime,
    Enum,
    ForeignKey,
    Integer,
    String,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ClubType(str, enum.Enum):
    AMATEUR = "AMATEUR"
    SEMI_PROFESSIONAL = "SEMI_PROFESSIONAL"
    PROFESSIONAL = "PROFESSIONAL"


class PreferredFoot(str, enum.Enum):
    LEFT = "LEFT"
    RIGHT = "RIGHT"
    BOTH = "BOTH"


class Club(Base):
    """Football club; ``version`` is the optimistic-concurrency token."""

    __tablename__ = "clubs"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    version: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    name: Mapped[str] = mapped_column(String(60), nullable=False, unique=True)
    type: Mapped[Optional[ClubType]] = mapped_column(
        Enum(ClubType, native_enum=False, length=32), nullable=True
    )
    league: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    country: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    member_count: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    website: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    email: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    phone: Mapped[Optional[str]] = mapped_column(String(40), nullable=True)
    founding_date: Mapped[Optional[date]] = mapped_column(Date, nullable=True)
    keywords: Mapped[List[str]] = mapped_column(JSON, nullable=False, default=list)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utcnow
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utcnow
    )

    stadium: Mapped[Optional["Stadium"]] = relationship(
        back_populates="club",
        uselist=False,
        cascade="all, delete-orphan",
        passive_deletes=True,
        lazy="raise",
    )
    players: Mapped[List["Player"]] = relationship(
        back_populates="club",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="Player.id",
        lazy="raise",
    )

    __table_args__ = (
        CheckConstraint("version >= 0", name="ck_clubs_version_non_negative"),
        CheckConstraint("member_count IS NULL OR member_count >= 0", name="ck_clubs_member_count"),
    )


class Stadium(Base):
    """Home ground of a club (one-to-one)."""

    __tablename__ = "stadiums"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    club_id: Mapped[int] = mapped_column(
        ForeignKey("clubs.id", ondelete="CASCADE"), nullable=False, unique=True
    )
    city: Mapped[str] = mapped_column(String(100), nullable=False)
    capacity: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    street: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    house_number: Mapped[Optional[str]] = mapped_column(String(10), nullable=True)

    club: Mapped[Club] = relationship(back_populates="stadium", lazy="raise")

    __table_args__ = (
        CheckConstraint(
            "capacity IS NULL OR (capacity >= 0 AND capacity <= 200000)",
            name="ck_stadiums_capacity",
        ),
    )


class Player(Base):
    """Squad member of a club (many-to-one)."""

    __tablename__ = "players"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    club_id: Mapped[int] = mapped_column(
        ForeignKey("clubs.id", ondelete="CASCADE"), nullable=False, index=True
    )
    first_name: Mapped[str] = mapped_column(String(60), nullable=False)
    last_name: Mapped[str] = mapped_column(String(60), nullable=False)
    age: Mapped[int] = mapped_column(Integer, nullable=False)
    preferred_foot: Mapped[Optional[PreferredFoot]] = mapped_column(
        Enum(PreferredFoot, native_enum=False, length=8), nullable=True
    )

    club: Mapped[Club] = relationship(back_populates="players", lazy="raise")

    __table_args__ = (CheckConstraint("age >= 16", name="ck_players_age"),)
