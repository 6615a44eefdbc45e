"""Translate domain errors into GraphQL errors with an ``extensions.code``."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from graphql import GraphQLError
from sqlalchemy.ext.asyncio import AsyncSession

from core.errors import (
    ClubError,
    Forbidden,
    NameExists,
    NotFound,
    PreconditionRequired,
    ValidationFailed,
    VersionInvalid,
    VersionOutdated,
)

logger = logging.getLogger(__name__)

_CODE_BY_ERROR = (
    (NotFound, "NOT_FOUND"),
    (NameExists, "BAD_USER_INPUT"),
    (ValidationFailed, "BAD_USER_INPUT"),
    (PreconditionRequired, "PRECONDITION_REQUIRED"),
    (VersionInvalid, "PRECONDITION_FAILED"),
    (VersionOutdated, "PRECONDITION_FAILED"),
    (Forbidden, "FORBIDDEN"),
)


def code_for(exc: ClubError) -> str:
    for error_type, code in _CODE_BY_ERROR:
        if isinstance(exc, error_type):
            return code
    return "INTERNAL_SERVER_ERROR"


@asynccontextmanager
async def translate_errors(session: Optional[AsyncSession] = None) -> AsyncIterator[None]:
    """Re-raise ClubError as GraphQLError; roll back ``session`` first for writes."""
    try:
        yield
    except ClubError as exc:
        if session is not None:
            await session.rollback()
        logger.debug("translate_errors: %s: %s", type(exc).__name__, exc.message)
        raise GraphQLError(exc.message, extensions={"code": code_for(exc)}) from exc
