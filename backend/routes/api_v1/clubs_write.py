"""POST/PUT/DELETE /api/v1/clubs: create, version-checked update, delete."""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from fastapi import APIRouter, Body, Depends, Header, Response, status

from core.dependencies import get_club_write_service
from core.errors import NotFound
from core.security import ROLE_ADMIN, ROLE_USER, require_roles
from services.club_service import parse_club_id
from services.club_write_service import ClubWriteService
from services.version_guard import etag_for

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/clubs", tags=["clubs"])


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    summary="Create a club",
    description="Creates a club with version 0. Location header points to the new club.",
    dependencies=[Depends(require_roles(ROLE_ADMIN, ROLE_USER, action="create clubs"))],
)
async def post_club(
    response: Response,
    body: Dict[str, Any] = Body(...),
    service: ClubWriteService = Depends(get_club_write_service),
) -> dict:
    """POST /api/v1/clubs -> 201 { id } + Location."""
    club_id = await service.create(body)
    logger.debug("post_club: id=%d", club_id)
    response.headers["Location"] = f"/api/v1/clubs/{club_id}"
    return {"id": club_id}


@router.put(
    "/{id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Update a club",
    description='Requires If-Match with the current version, e.g. "0". Responds with the new ETag.',
    dependencies=[Depends(require_roles(ROLE_ADMIN, ROLE_USER, action="update clubs"))],
)
async def put_club(
    id: str,
    body: Dict[str, Any] = Body(...),
    if_match: Optional[str] = Header(default=None, alias="If-Match"),
    service: ClubWriteService = Depends(get_club_write_service),
) -> Response:
    """PUT /api/v1/clubs/{id} -> 204 + ETag of the new version."""
    logger.debug("put_club: id=%s, if_match=%s", id, if_match)
    club_id = parse_club_id(id)
    new_version = await service.update(club_id, body, if_match)
    return Response(status_code=status.HTTP_204_NO_CONTENT, headers={"ETag": etag_for(new_version)})


@router.delete(
    "/{id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a club",
    description="Removes the club with its stadium and players; unknown ids are not an error.",
    dependencies=[Depends(require_roles(ROLE_ADMIN, action="delete clubs"))],
)
async def delete_club(
    id: str,
    service: ClubWriteService = Depends(get_club_write_service),
) -> Response:
    """DELETE /api/v1/clubs/{id} -> 204."""
    try:
        club_id = parse_club_id(id)
    except NotFound:
        logger.debug("delete_club: %r is not a club id", id)
        return Response(status_code=status.HTTP_204_NO_CONTENT)
    await service.delete(club_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
