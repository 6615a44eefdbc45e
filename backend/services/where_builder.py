from __future__ import annotations

import logging
from typing import Any, Callable, Dict, List, Mapping

from sqlalchemy import ColumnElement, String, and_, cast, extract, true

from core.errors import ValidationFailed
from models.club import Club, ClubType, Stadium
from .search_params import KEYWORD_FLAGS

logger = logging.getLogger(__name__)

_LIKE_ESCAPE = "\\"


def _contains_pattern(text: str) -> str:
    """LIKE pattern for a literal substring; wildcards in the input match themselves."""
    escaped = (
        text.replace(_LIKE_ESCAPE, _LIKE_ESCAPE * 2)
        .replace("%", _LIKE_ESCAPE + "%")
        .replace("_", _LIKE_ESCAPE + "_")
    )
    return f"%{escaped}%"


def _ilike(column: Any, text: str) -> ColumnElement[bool]:
    return column.ilike(_contains_pattern(text), escape=_LIKE_ESCAPE)


class WhereBuilder:
    """Translate validated search parameters into one SQLAlchemy predicate.

    All parameters are combined with AND. Text parameters match
    case-insensitively by substring, ``memberCount`` is a minimum,
    ``foundingYear`` matches the year of the founding date exactly.
    """

    def __init__(self) -> None:
        self._clauses: Dict[str, Callable[[Any], ColumnElement[bool]]] = {
            "id": lambda v: Club.id == v,
            "name": lambda v: _ilike(Club.name, v),
            "league": lambda v: _ilike(Club.league, v),
            "country": lambda v: _ilike(Club.country, v),
            "city": lambda v: Club.stadium.has(_ilike(Stadium.city, v)),
            "memberCount": lambda v: Club.member_count >= v,
            "foundingYear": lambda v: extract("year", Club.founding_date) == v,
            "type": lambda v: Club.type == ClubType(v),
        }

    def build(self, params: Mapping[str, Any]) -> ColumnElement[bool]:
        logger.debug("build: params=%s", dict(params))
        clauses: List[ColumnElement[bool]] = []
        for key, value in params.items():
            if key in KEYWORD_FLAGS:
                if value:
                    clauses.append(self._keyword(key))
                continue
            factory = self._clauses.get(key)
            if factory is None:
                # Unknown keys are rejected by validate_search_parameters first.
                raise ValidationFailed([f'Invalid search parameter "{key}"'])
            clauses.append(factory(value))

        if not clauses:
            return true()
        return and_(*clauses)

    @staticmethod
    def _keyword(flag: str) -> ColumnElement[bool]:
        # keywords is a JSON array of upper-case strings
        return cast(Club.keywords, String).like(f'%"{flag.upper()}"%')
