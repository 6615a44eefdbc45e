"""GET /api/v1/clubs: read clubs by id (with ETag) and list them with filters and paging."""

from __future__ import annotations

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Header, Query, Request, Response, status
from fastapi.responses import JSONResponse

from core.config import get_settings
from core.dependencies import get_club_service
from repositories.club_repo import ClubInclusion
from schemas.club import ClubOut
from services.club_service import ClubService, parse_club_id
from services.pageable import create_pageable, page_metadata
from services.version_guard import etag_for, is_not_modified

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/clubs", tags=["clubs"])

PAGING_PARAMETERS = ("page", "size")
_JSON_MEDIA_TYPES = ("application/json", "application/*", "*/*", "text/html", "text/*")


def accepts_json(accept: Optional[str]) -> bool:
    """True when the Accept header allows a JSON (or HTML) response."""
    if not accept:
        return True
    for part in accept.split(","):
        media_type = part.split(";", 1)[0].strip().lower()
        if media_type in _JSON_MEDIA_TYPES or media_type.endswith("+json"):
            return True
    return False


@router.get(
    "/{id}",
    summary="Find a club by id",
    description="Returns the club with an ETag header; 304 when If-None-Match names the current version.",
    responses={304: {"description": "Club unchanged"}, 404: {"description": "No club with this id"}},
)
async def get_club(
    id: str,
    request: Request,
    if_none_match: Optional[str] = Header(default=None, alias="If-None-Match"),
    with_players: bool = Query(default=False, alias="withPlayers"),
    service: ClubService = Depends(get_club_service),
):
    """GET /api/v1/clubs/{id} -> club JSON + ETag, or 304 without body."""
    logger.debug("get_club: id=%s, if_none_match=%s", id, if_none_match)
    if not accepts_json(request.headers.get("accept")):
        return Response(status_code=status.HTTP_406_NOT_ACCEPTABLE)

    club_id = parse_club_id(id)
    club = await service.find_by_id(club_id, ClubInclusion(with_stadium=True, with_players=with_players))

    etag = etag_for(club.version)
    if is_not_modified(if_none_match, club.version):
        logger.debug("get_club: not modified")
        return Response(status_code=status.HTTP_304_NOT_MODIFIED, headers={"ETag": etag})

    return JSONResponse(content=ClubOut.from_club(club).to_json(), headers={"ETag": etag})


@router.get(
    "",
    summary="Search clubs",
    description="Query keys: id, name, foundingYear, memberCount, league, city, country, type and "
    "the keyword flags tradition, academy, women, esports; paging via page and size.",
)
async def list_clubs(
    request: Request,
    service: ClubService = Depends(get_club_service),
) -> dict:
    """GET /api/v1/clubs?name=...&page=0&size=5 -> { content: Club[], page: {...} }."""
    settings = get_settings()
    query = request.query_params
    pageable = create_pageable(
        query.get("page"),
        query.get("size"),
        default_size=settings.default_page_size,
        max_size=settings.max_page_size,
    )
    params = {key: value for key, value in query.items() if key not in PAGING_PARAMETERS}
    logger.debug("list_clubs: params=%s, pageable=%s", params, pageable)

    slice_ = await service.find(params, pageable)
    return {
        "content": [ClubOut.from_club(club).to_json() for club in slice_.content],
        "page": page_metadata(slice_, pageable),
    }
