"""Paging: page number/size, bounded result slices and page metadata."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from typing import Any, Dict, Generic, List, Optional, TypeVar, Union

from sqlalchemy import ColumnElement

from core.errors import ValidationFailed
from repositories.club_repo import STADIUM_ONLY, ClubInclusion, ClubRepository

logger = logging.getLogger(__name__)

T = TypeVar("T")

DEFAULT_PAGE_NUMBER = 0
DEFAULT_PAGE_SIZE = 5
MAX_PAGE_SIZE = 100


@dataclass(frozen=True)
class Pageable:
    """Zero-based page index and page size."""

    number: int = DEFAULT_PAGE_NUMBER
    size: int = DEFAULT_PAGE_SIZE

    def __post_init__(self) -> None:
        violations: List[str] = []
        if self.number < 0:
            violations.append(f"Page number must not be negative: {self.number}")
        if self.size <= 0:
            violations.append(f"Page size must be positive: {self.size}")
        if violations:
            raise ValidationFailed(violations)

    @property
    def skip(self) -> int:
        return self.number * self.size

    @property
    def take(self) -> int:
        return self.size


@dataclass(frozen=True)
class Slice(Generic[T]):
    """One page of results plus the number of all matching rows."""

    content: List[T] = field(default_factory=list)
    total_elements: int = 0


def _parse_int(raw: Union[str, int, None]) -> Optional[int]:
    if raw is None or isinstance(raw, bool):
        return None
    if isinstance(raw, int):
        return raw
    try:
        return int(raw.strip())
    except ValueError:
        return None


def create_pageable(
    number: Union[str, int, None] = None,
    size: Union[str, int, None] = None,
    default_size: int = DEFAULT_PAGE_SIZE,
    max_size: int = MAX_PAGE_SIZE,
) -> Pageable:
    """Build a Pageable from raw query values, falling back to defaults.

    A missing, unparseable or negative page number becomes 0; a missing,
    unparseable or non-positive size becomes ``default_size``; sizes above
    ``max_size`` are capped.
    """
    page_number = _parse_int(number)
    if page_number is None or page_number < 0:
        page_number = DEFAULT_PAGE_NUMBER

    page_size = _parse_int(size)
    if page_size is None or page_size <= 0:
        page_size = default_size
    page_size = min(page_size, max_size)

    return Pageable(number=page_number, size=page_size)


async def paginate(
    repo: ClubRepository,
    predicate: Optional[ColumnElement[bool]],
    pageable: Pageable,
    inclusion: ClubInclusion = STADIUM_ONLY,
) -> Slice[Any]:
    """Run the bounded query and the unbounded count for the same predicate.

    Both statements share one session, so they run one after the other.
    """
    content = await repo.find_many(
        predicate, skip=pageable.skip, take=pageable.take, inclusion=inclusion
    )
    if not content:
        logger.debug("paginate: page %d is empty", pageable.number)
        return Slice(content=[], total_elements=0)
    total_elements = await repo.count(predicate)
    logger.debug(
        "paginate: page=%d size=%d rows=%d total=%d",
        pageable.number,
        pageable.size,
        len(content),
        total_elements,
    )
    return Slice(content=content, total_elements=total_elements)


def page_metadata(slice_: Slice[Any], pageable: Pageable) -> Dict[str, int]:
    """Page block of a list response: size, number, totalElements, totalPages."""
    total_pages = math.ceil(slice_.total_elements / pageable.size) if pageable.size else 0
    return {
        "size": pageable.size,
        "number": pageable.number,
        "totalElements": slice_.total_elements,
        "totalPages": total_pages,
    }
