"""Services: search validation, predicate building, paging, version guard, club read/write."""

from .club_service import ClubService, parse_club_id
from .club_write_service import ClubWriteService
from .pageable import Pageable, Slice, create_pageable, page_metadata, paginate
from .search_params import validate_search_parameters
from .version_guard import VersionGuard, etag_for, is_not_modified, parse_version_token
from .where_builder import WhereBuilder

__all__ = [
    "ClubService",
    "ClubWriteService",
    "Pageable",
    "Slice",
    "VersionGuard",
    "WhereBuilder",
    "create_pageable",
    "etag_for",
    "is_not_modified",
    "page_metadata",
    "paginate",
    "parse_club_id",
    "parse_version_token",
    "validate_search_parameters",
]
