"""GraphQL schema for clubs, mounted at /graphql.

Queries are public; ``createClub``/``updateClub`` need role admin or user,
``deleteClub`` needs admin. Filters share the allow-list and semantics of
the REST query string.
"""

import dataclasses
import datetime
import logging
from typing import Any, Dict, List, Optional

import strawberry
from fastapi import Depends
from pydantic.alias_generators import to_camel
from sqlalchemy.ext.asyncio import AsyncSession
from strawberry.fastapi import BaseContext, GraphQLRouter
from strawberry.types import Info

from core.config import get_settings
from core.dependencies import get_db_session
from core.errors import NotFound
from core.security import ROLE_ADMIN, ROLE_USER, Identity, ensure_role, get_identity
from models.club import Club, ClubType, PreferredFoot
from repositories.club_repo import STADIUM_AND_PLAYERS, STADIUM_ONLY
from schemas.club import ClubOut
from services.club_service import ClubService, parse_club_id
from services.club_write_service import ClubWriteService
from services.pageable import create_pageable
from .errors import translate_errors
from .formatting import format_member_count

logger = logging.getLogger(__name__)

ClubTypeEnum = strawberry.enum(ClubType, name="ClubType")
PreferredFootEnum = strawberry.enum(PreferredFoot, name="PreferredFoot")


class ClubContext(BaseContext):
    def __init__(self, session: AsyncSession, identity: Identity) -> None:
        super().__init__()
        self.session = session
        self.identity = identity


async def get_context(
    session: AsyncSession = Depends(get_db_session),
    identity: Identity = Depends(get_identity),
) -> ClubContext:
    return ClubContext(session, identity)


# --- Output types ---


@strawberry.type(name="Stadium")
class StadiumGql:
    city: str
    capacity: Optional[int] = None
    street: Optional[str] = None
    house_number: Optional[str] = None


@strawberry.type(name="Player")
class PlayerGql:
    id: strawberry.ID
    first_name: str
    last_name: str
    age: int
    preferred_foot: Optional[PreferredFootEnum] = None


@strawberry.type(name="Club")
class ClubGql:
    id: strawberry.ID
    version: int
    name: str
    type: Optional[ClubTypeEnum] = None
    league: Optional[str] = None
    country: Optional[str] = None
    member_count: Optional[int] = None
    website: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    founding_date: Optional[datetime.date] = None
    keywords: List[str] = strawberry.field(default_factory=list)
    stadium: Optional[StadiumGql] = None
    players: Optional[List[PlayerGql]] = None

    @strawberry.field
    def member_count_label(self, short: bool = True) -> Optional[str]:
        return format_member_count(self.member_count, short)


@strawberry.type(name="ClubSlice")
class ClubSliceGql:
    content: List[ClubGql]
    total_elements: int


@strawberry.type
class CreatePayload:
    id: strawberry.ID


@strawberry.type
class UpdatePayload:
    version: int


@strawberry.type
class DeletePayload:
    success: bool


def club_to_gql(club: Club) -> ClubGql:
    out = ClubOut.from_club(club)
    stadium = StadiumGql(**out.stadium.model_dump()) if out.stadium is not None else None
    players = None
    if out.players is not None:
        players = [
            PlayerGql(
                id=strawberry.ID(str(p.id)),
                first_name=p.first_name,
                last_name=p.last_name,
                age=p.age,
                preferred_foot=p.preferred_foot,
            )
            for p in out.players
        ]
    return ClubGql(
        id=strawberry.ID(str(out.id)),
        version=out.version,
        name=out.name,
        type=out.type,
        league=out.league,
        country=out.country,
        member_count=out.member_count,
        website=out.website,
        email=out.email,
        phone=out.phone,
        founding_date=out.founding_date,
        keywords=out.keywords,
        stadium=stadium,
        players=players,
    )


# --- Inputs ---


@strawberry.input
class SearchInput:
    id: Optional[int] = None
    name: Optional[str] = None
    founding_year: Optional[int] = None
    member_count: Optional[int] = None
    league: Optional[str] = None
    city: Optional[str] = None
    country: Optional[str] = None
    type: Optional[ClubTypeEnum] = None
    tradition: Optional[bool] = None
    academy: Optional[bool] = None
    women: Optional[bool] = None
    esports: Optional[bool] = None


@strawberry.input
class StadiumInput:
    city: str
    capacity: Optional[int] = None
    street: Optional[str] = None
    house_number: Optional[str] = None


@strawberry.input
class PlayerInput:
    first_name: str
    last_name: str
    age: int
    preferred_foot: Optional[PreferredFootEnum] = None


@strawberry.input
class ClubInput:
    name: str
    type: Optional[ClubTypeEnum] = None
    league: Optional[str] = None
    country: Optional[str] = None
    member_count: Optional[int] = None
    website: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    founding_date: Optional[str] = None
    keywords: Optional[List[str]] = None
    stadium: Optional[StadiumInput] = None
    players: Optional[List[PlayerInput]] = None


@strawberry.input
class ClubUpdateInput:
    id: strawberry.ID
    version: int
    name: str
    type: Optional[ClubTypeEnum] = None
    league: Optional[str] = None
    country: Optional[str] = None
    member_count: Optional[int] = None
    website: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    founding_date: Optional[str] = None
    keywords: Optional[List[str]] = None


def _without_none(value: Any) -> Any:
    if isinstance(value, dict):
        return {k: _without_none(v) for k, v in value.items() if v is not None}
    if isinstance(value, list):
        return [_without_none(v) for v in value]
    return value


def input_to_dict(obj: Any, exclude: tuple = ()) -> Dict[str, Any]:
    """Strawberry input -> plain dict (snake_case keys, unset fields dropped)."""
    data = _without_none(dataclasses.asdict(obj))
    for key in exclude:
        data.pop(key, None)
    return data


def search_input_to_params(search: Optional[SearchInput]) -> Dict[str, Any]:
    """Search input -> the camelCase parameter map used by REST as well."""
    if search is None:
        return {}
    return {to_camel(k): v for k, v in input_to_dict(search).items()}


# --- Resolvers ---


@strawberry.type
class Query:
    @strawberry.field
    async def club(
        self, info: Info, id: strawberry.ID, with_players: bool = False
    ) -> ClubGql:
        logger.debug("club: id=%s", id)
        service = ClubService.for_session(info.context.session)
        inclusion = STADIUM_AND_PLAYERS if with_players else STADIUM_ONLY
        async with translate_errors():
            club = await service.find_by_id(parse_club_id(id), inclusion)
        return club_to_gql(club)

    @strawberry.field
    async def clubs(
        self,
        info: Info,
        filter: Optional[SearchInput] = None,
        page: Optional[int] = None,
        size: Optional[int] = None,
    ) -> ClubSliceGql:
        settings = get_settings()
        params = search_input_to_params(filter)
        logger.debug("clubs: params=%s, page=%s, size=%s", params, page, size)
        service = ClubService.for_session(info.context.session)
        async with translate_errors():
            pageable = create_pageable(
                page, size, default_size=settings.default_page_size, max_size=settings.max_page_size
            )
            slice_ = await service.find(params, pageable)
        return ClubSliceGql(
            content=[club_to_gql(c) for c in slice_.content],
            total_elements=slice_.total_elements,
        )


@strawberry.type
class Mutation:
    @strawberry.mutation
    async def create_club(self, info: Info, input: ClubInput) -> CreatePayload:
        session = info.context.session
        async with translate_errors(session):
            ensure_role(info.context.identity, "create clubs", ROLE_ADMIN, ROLE_USER)
            club_id = await ClubWriteService.for_session(session).create(input_to_dict(input))
        logger.debug("create_club: id=%d", club_id)
        return CreatePayload(id=strawberry.ID(str(club_id)))

    @strawberry.mutation
    async def update_club(self, info: Info, input: ClubUpdateInput) -> UpdatePayload:
        session = info.context.session
        async with translate_errors(session):
            ensure_role(info.context.identity, "update clubs", ROLE_ADMIN, ROLE_USER)
            version = await ClubWriteService.for_session(session).update_version(
                parse_club_id(input.id),
                input_to_dict(input, exclude=("id", "version")),
                input.version,
            )
        logger.debug("update_club: id=%s, version=%d", input.id, version)
        return UpdatePayload(version=version)

    @strawberry.mutation
    async def delete_club(self, info: Info, id: strawberry.ID) -> DeletePayload:
        session = info.context.session
        async with translate_errors(session):
            ensure_role(info.context.identity, "delete clubs", ROLE_ADMIN)
            try:
                club_id = parse_club_id(id)
            except NotFound:
                logger.debug("delete_club: %r is not a club id", id)
                return DeletePayload(success=True)
            await ClubWriteService.for_session(session).delete(club_id)
        return DeletePayload(success=True)


schema = strawberry.Schema(query=Query, mutation=Mutation)

graphql_router = GraphQLRouter(schema, context_getter=get_context)
