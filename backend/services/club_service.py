"""Read access to clubs: lookup by id, filtered and paged listing, count."""

from __future__ import annotations

import json
import logging
import re
from typing import Any, Mapping, Optional, Union

from sqlalchemy.ext.asyncio import AsyncSession

from core.errors import NotFound
from models.club import Club
from repositories.club_repo import STADIUM_ONLY, ClubInclusion, ClubRepository
from .pageable import Pageable, Slice, paginate
from .search_params import strip_absent, validate_search_parameters
from .where_builder import WhereBuilder

logger = logging.getLogger(__name__)

ID_PATTERN = re.compile(r"^[1-9]\d{0,10}$")


def parse_club_id(raw: Union[str, int]) -> int:
    """Club id from a path segment or GraphQL ID; anything else is an unknown club."""
    text = str(raw).strip()
    if not ID_PATTERN.match(text):
        raise NotFound(f"There is no club with id {raw}.")
    return int(text)


class ClubService:
    """Reads clubs through the repository; never changes ``version``."""

    def __init__(self, repo: ClubRepository, where_builder: WhereBuilder) -> None:
        self._repo = repo
        self._where_builder = where_builder

    @classmethod
    def for_session(cls, session: AsyncSession) -> "ClubService":
        return cls(ClubRepository(session), WhereBuilder())

    async def find_by_id(self, id: int, inclusion: ClubInclusion = STADIUM_ONLY) -> Club:
        """Club with the requested associations.

        Raises NotFound if there is no club with this id.
        """
        logger.debug("find_by_id: id=%d, inclusion=%s", id, inclusion)
        club = await self._repo.find_unique(id, inclusion)
        if club is None:
            logger.debug("find_by_id: no club with id %d", id)
            raise NotFound.for_id(id)
        return club

    async def find(
        self, params: Optional[Mapping[str, Any]], pageable: Pageable
    ) -> Slice[Club]:
        """One page of clubs matching ``params`` (all clubs when empty).

        Raises ValidationFailed for unknown keys or illegal enum values before
        any query runs, and NotFound when the requested page holds no club.
        """
        filter_ = strip_absent(params)
        logger.debug(
            "find: params=%s, pageable=%s",
            json.dumps(filter_, default=str),
            pageable,
        )

        if not filter_:
            return await self._find_all(pageable)

        normalized = validate_search_parameters(filter_)
        predicate = self._where_builder.build(normalized)
        slice_ = await paginate(self._repo, predicate, pageable)
        if not slice_.content:
            logger.debug("find: no clubs found")
            raise NotFound.for_filter(filter_, pageable.number)
        return slice_

    async def count(self) -> int:
        """Number of all clubs."""
        count = await self._repo.count()
        logger.debug("count: %d", count)
        return count

    async def _find_all(self, pageable: Pageable) -> Slice[Club]:
        slice_ = await paginate(self._repo, None, pageable)
        if not slice_.content:
            logger.debug("_find_all: no clubs on page %d", pageable.number)
            raise NotFound.for_page(pageable.number)
        return slice_
