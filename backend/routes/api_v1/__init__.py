"""API v1: club read and write endpoints."""

from fastapi import APIRouter

from .clubs import router as clubs_router
from .clubs_write import router as clubs_write_router

router = APIRouter(prefix="/api/v1", tags=["api_v1"])
router.include_router(clubs_router)
router.include_router(clubs_write_router)

api_v1_router = router
