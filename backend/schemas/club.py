"""
Input and output schemas for clubs, stadiums and players.

The pydantic models are the field-schema table of the write path: every
constraint lives on the field, and ``parse_model`` reports all violations of
one payload in a single ValidationFailed. JSON uses camelCase names.
"""

from __future__ import annotations

import re
from datetime import date, datetime
from typing import Annotated, Any, Dict, List, Optional, Type, TypeVar

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    StringConstraints,
    ValidationError,
    field_validator,
)
from pydantic.alias_generators import to_camel
from sqlalchemy import inspect as sa_inspect

from core.errors import ValidationFailed
from models.club import Club, ClubType, Player, PreferredFoot, Stadium

M = TypeVar("M", bound=BaseModel)

URL_PATTERN = r"^https?://[^\s/$.?#][^\s]*$"
EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+\.[^@\s]+$"
# +49-89-699310, 089 699310, +49 (89) 699310
PHONE_PATTERN = r"^\+?[0-9][0-9 ()/\-]{4,24}$"
# INTEGER columns and GraphQL Int are 32-bit
MAX_INT32 = 2**31 - 1

_ISO_DATE = re.compile(r"^\d{4}-\d{2}-\d{2}$")
_ISO_DATETIME = re.compile(
    r"^\d{4}-\d{2}-\d{2}T\d{2}:\d{2}(:\d{2}(\.\d{1,6})?)?(Z|[+-]\d{2}:\d{2})?$"
)

Name = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=60)]
ShortText = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=100)]


def parse_iso_date(value: Any) -> Optional[date]:
    """Strict ISO-8601: ``YYYY-MM-DD`` or a full date-time; the date part is kept."""
    if value is None or (isinstance(value, date) and not isinstance(value, datetime)):
        return value
    if isinstance(value, datetime):
        return value.date()
    if not isinstance(value, str):
        raise ValueError("must be an ISO-8601 date string")
    text = value.strip()
    try:
        if _ISO_DATE.match(text):
            return date.fromisoformat(text)
        if _ISO_DATETIME.match(text):
            return datetime.fromisoformat(text.replace("Z", "+00:00")).date()
    except ValueError as e:
        raise ValueError(f"is not a valid ISO-8601 date: {value!r}") from e
    raise ValueError(f"is not a valid ISO-8601 date: {value!r}")


class _CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="forbid",
    )


class StadiumIn(_CamelModel):
    city: ShortText
    capacity: Optional[int] = Field(None, ge=0, le=200000)
    street: Optional[ShortText] = None
    house_number: Optional[Annotated[str, StringConstraints(strip_whitespace=True, max_length=10)]] = None


class PlayerIn(_CamelModel):
    first_name: Name
    last_name: Name
    age: int = Field(..., ge=16, le=99)
    preferred_foot: Optional[PreferredFoot] = None


class ClubFields(_CamelModel):
    """Scalar club properties shared by create and update."""

    name: Name
    type: Optional[ClubType] = None
    league: Optional[ShortText] = None
    country: Optional[ShortText] = None
    member_count: Optional[int] = Field(None, ge=0, le=MAX_INT32)
    website: Optional[str] = Field(None, max_length=255, pattern=URL_PATTERN)
    email: Optional[str] = Field(None, max_length=255, pattern=EMAIL_PATTERN)
    phone: Optional[str] = Field(None, pattern=PHONE_PATTERN)
    founding_date: Optional[date] = None
    keywords: List[str] = Field(default_factory=list)

    @field_validator("founding_date", mode="before")
    @classmethod
    def _strict_iso_date(cls, value: Any) -> Optional[date]:
        return parse_iso_date(value)

    @field_validator("keywords")
    @classmethod
    def _normalize_keywords(cls, value: List[str]) -> List[str]:
        out: List[str] = []
        for raw in value:
            keyword = raw.strip().upper()
            if not keyword or len(keyword) > 40:
                raise ValueError(f"invalid keyword {raw!r}")
            if keyword not in out:
                out.append(keyword)
        return out

    def column_values(self) -> Dict[str, Any]:
        """Column name -> value for every scalar field (absent optionals become NULL)."""
        return self.model_dump(include=set(ClubFields.model_fields))


class ClubCreate(ClubFields):
    stadium: Optional[StadiumIn] = None
    players: List[PlayerIn] = Field(default_factory=list)

    def to_entity(self) -> Club:
        """New Club (version 0) with its stadium and players."""
        stadium = Stadium(**self.stadium.model_dump()) if self.stadium is not None else None
        players = [Player(**p.model_dump()) for p in self.players]
        return Club(version=0, stadium=stadium, players=players, **self.column_values())


class ClubUpdate(ClubFields):
    """Full replacement of the scalar properties; associations are not touched."""


def parse_model(model: Type[M], data: Any) -> M:
    """Validate ``data`` against ``model``; all violations end up in one ValidationFailed."""
    if isinstance(data, model):
        return data
    try:
        return model.model_validate(data)
    except ValidationError as e:
        violations = []
        for err in e.errors():
            loc = ".".join(str(part) for part in err.get("loc", ())) or "body"
            violations.append(f"{loc}: {err.get('msg', 'invalid')}")
        raise ValidationFailed(violations) from e


# --- Output ---


class StadiumOut(_CamelModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)

    city: str
    capacity: Optional[int] = None
    street: Optional[str] = None
    house_number: Optional[str] = None


class PlayerOut(_CamelModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)

    id: int
    first_name: str
    last_name: str
    age: int
    preferred_foot: Optional[PreferredFoot] = None


class ClubOut(_CamelModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: int
    version: int
    name: str
    type: Optional[ClubType] = None
    league: Optional[str] = None
    country: Optional[str] = None
    member_count: Optional[int] = None
    website: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    founding_date: Optional[date] = None
    keywords: List[str] = Field(default_factory=list)
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    stadium: Optional[StadiumOut] = None
    players: Optional[List[PlayerOut]] = None

    @classmethod
    def from_club(cls, club: Club) -> "ClubOut":
        """Copy a Club; associations that were not loaded stay None."""
        unloaded = sa_inspect(club).unloaded
        stadium = None
        if "stadium" not in unloaded and club.stadium is not None:
            stadium = StadiumOut.model_validate(club.stadium)
        players = None
        if "players" not in unloaded:
            players = [PlayerOut.model_validate(p) for p in club.players]
        return cls(
            id=club.id,
            version=club.version,
            name=club.name,
            type=club.type,
            league=club.league,
            country=club.country,
            member_count=club.member_count,
            website=club.website,
            email=club.email,
            phone=club.phone,
            founding_date=club.founding_date,
            keywords=list(club.keywords or []),
            created_at=club.created_at,
            updated_at=club.updated_at,
            stadium=stadium,
            players=players,
        )

    def to_json(self) -> Dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)
