"""
Unit tests for club input/output schemas: constraints, ISO dates, violation aggregation.
"""

from __future__ import annotations

import sys
from datetime import date
from pathlib import Path

_backend = Path(__file__).resolve().parent.parent.parent
if str(_backend) not in sys.path:
    sys.path.insert(0, str(_backend))

import pytest

from core.errors import ValidationFailed
from models.club import ClubType, PreferredFoot
from schemas.club import ClubCreate, ClubUpdate, parse_iso_date, parse_model


def _payload(**overrides):
    data = {
        "name": "FC Bayern München",
        "type": "PROFESSIONAL",
        "memberCount": 295000,
        "website": "https://fcbayern.com",
        "email": "service@fcbayern.com",
        "phone": "+49-89-699310",
        "foundingDate": "1900-02-27",
        "keywords": ["tradition", " Tradition ", "academy"],
        "stadium": {"city": "München", "capacity": 75000, "houseNumber": "25"},
        "players": [{"firstName": "Thomas", "lastName": "Müller", "age": 34, "preferredFoot": "RIGHT"}],
    }
    data.update(overrides)
    return data


def test_parse_iso_date_accepts_date_and_datetime() -> None:
    assert parse_iso_date("2025-01-01") == date(2025, 1, 1)
    assert parse_iso_date("2025-01-01T00:00:00Z") == date(2025, 1, 1)
    assert parse_iso_date("2025-01-01T23:30:00+02:00") == date(2025, 1, 1)
    assert parse_iso_date(None) is None


@pytest.mark.parametrize("raw", ["01.01.2025", "2025-13-01", "2025/01/01", "yesterday", 20250101])
def test_parse_iso_date_rejects_other_formats(raw) -> None:
    with pytest.raises(ValueError):
        parse_iso_date(raw)


def test_create_from_camel_case_payload() -> None:
    club = parse_model(ClubCreate, _payload())
    assert club.type is ClubType.PROFESSIONAL
    assert club.member_count == 295000
    assert club.founding_date == date(1900, 2, 27)
    assert club.keywords == ["TRADITION", "ACADEMY"]
    assert club.stadium.house_number == "25"
    assert club.players[0].preferred_foot is PreferredFoot.RIGHT


def test_to_entity_starts_at_version_zero() -> None:
    entity = parse_model(ClubCreate, _payload()).to_entity()
    assert entity.version == 0
    assert entity.name == "FC Bayern München"
    assert entity.stadium.city == "München"
    assert [p.last_name for p in entity.players] == ["Müller"]


def test_all_violations_in_one_error() -> None:
    data = _payload(name="  ", email="not-an-email")
    data["players"][0]["age"] = 10
    with pytest.raises(ValidationFailed) as exc_info:
        parse_model(ClubCreate, data)
    violations = exc_info.value.violations
    assert len(violations) == 3
    assert any(v.startswith("name") for v in violations)
    assert any(v.startswith("email") for v in violations)
    assert any("age" in v for v in violations)


def test_unknown_fields_are_rejected() -> None:
    with pytest.raises(ValidationFailed, match="stadiumName"):
        parse_model(ClubCreate, _payload(stadiumName="Allianz Arena"))


def test_update_does_not_accept_associations() -> None:
    with pytest.raises(ValidationFailed):
        parse_model(ClubUpdate, {"name": "X", "stadium": {"city": "Y"}})


def test_update_column_values_reset_absent_fields() -> None:
    values = parse_model(ClubUpdate, {"name": "Karlsruher SC", "memberCount": 12000}).column_values()
    assert values["name"] == "Karlsruher SC"
    assert values["member_count"] == 12000
    assert values["league"] is None
    assert values["keywords"] == []
    assert "stadium" not in values


@pytest.mark.parametrize(
    "field,value",
    [
        ("memberCount", -1),
        ("memberCount", 2**31),
        ("memberCount", 10**20),
        ("website", "fcbayern.com"),
        ("phone", "call me"),
        ("type", "HOBBY"),
        ("name", "x" * 61),
    ],
)
def test_field_constraints(field, value) -> None:
    with pytest.raises(ValidationFailed):
        parse_model(ClubCreate, _payload(**{field: value}))


def test_stadium_capacity_bounds() -> None:
    with pytest.raises(ValidationFailed):
        parse_model(ClubCreate, _payload(stadium={"city": "X", "capacity": 250000}))
