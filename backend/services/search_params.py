"""Search parameters for club listings: allow-list, enum checks, normalization.

REST passes every value as a query-string ``str``; GraphQL passes typed
values. Both go through ``validate_search_parameters`` so the predicate
builder only ever sees known keys with normalized values.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Mapping, Optional, Tuple

from core.errors import ValidationFailed
from models.club import ClubType

logger = logging.getLogger(__name__)

# Filterable club properties (camelCase, as exposed by REST and GraphQL)
SEARCH_PARAMETER_NAMES: Tuple[str, ...] = (
    "id",
    "name",
    "foundingYear",
    "memberCount",
    "league",
    "city",
    "country",
    "type",
)

# Keyword flags: ``?academy=true`` matches clubs tagged ACADEMY
KEYWORD_FLAGS: Tuple[str, ...] = ("tradition", "academy", "women", "esports")

INTEGER_PARAMETERS: Tuple[str, ...] = ("id", "foundingYear", "memberCount")
# Largest value the store accepts in an INTEGER column
MAX_INTEGER = 2**63 - 1
ENUM_PARAMETERS: Dict[str, Tuple[str, ...]] = {
    "type": tuple(t.value for t in ClubType),
}

_TRUE = ("true", "1", "yes")
_FALSE = ("false", "0", "no")


def is_allowed_key(key: str) -> bool:
    return key in SEARCH_PARAMETER_NAMES or key in KEYWORD_FLAGS


def strip_absent(params: Optional[Mapping[str, Any]]) -> Dict[str, Any]:
    """Drop keys whose value is None (unset GraphQL input fields)."""
    if not params:
        return {}
    return {k: v for k, v in params.items() if v is not None}


def _to_int(key: str, value: Any, violations: List[str]) -> Optional[int]:
    if isinstance(value, bool):
        violations.append(f'Search parameter "{key}" must be an integer: {value!r}')
        return None
    if isinstance(value, int):
        result = value
    else:
        try:
            result = int(str(value).strip())
        except ValueError:
            violations.append(f'Search parameter "{key}" must be an integer: {value!r}')
            return None
    if result < 0:
        violations.append(f'Search parameter "{key}" must not be negative: {result}')
        return None
    if result > MAX_INTEGER:
        violations.append(f'Search parameter "{key}" is too large: {result}')
        return None
    return result


def _to_flag(key: str, value: Any, violations: List[str]) -> Optional[bool]:
    if isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text in _TRUE:
        return True
    if text in _FALSE:
        return False
    violations.append(f'Search parameter "{key}" must be true or false: {value!r}')
    return None


def validate_search_parameters(params: Mapping[str, Any]) -> Dict[str, Any]:
    """Check every key against the allow-list and every enum against its values.

    Returns the normalized parameters. Raises ValidationFailed listing every
    offending key and value; nothing is filtered when any check fails.
    """
    violations: List[str] = []
    normalized: Dict[str, Any] = {}

    unknown = [key for key in params if not is_allowed_key(key)]
    for key in unknown:
        logger.debug("validate_search_parameters: invalid key %r", key)
        violations.append(f'Invalid search parameter "{key}"')

    for key, value in params.items():
        if key in unknown:
            continue
        if key in INTEGER_PARAMETERS:
            number = _to_int(key, value, violations)
            if number is not None:
                normalized[key] = number
        elif key in ENUM_PARAMETERS:
            text = str(getattr(value, "value", value)).strip().upper()
            if text not in ENUM_PARAMETERS[key]:
                logger.debug("validate_search_parameters: %s=%r not in enum", key, value)
                violations.append(
                    f'Invalid value for "{key}": {value!r} (allowed: {", ".join(ENUM_PARAMETERS[key])})'
                )
            else:
                normalized[key] = text
        elif key in KEYWORD_FLAGS:
            flag = _to_flag(key, value, violations)
            if flag is not None:
                normalized[key] = flag
        else:
            text = str(value).strip()
            if not text:
                violations.append(f'Search parameter "{key}" must not be empty')
            else:
                normalized[key] = text

    if violations:
        raise ValidationFailed(violations)
    return normalized
