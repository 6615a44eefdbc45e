import logging

from fastapi import FastAPI

from core.config import get_settings
from core.database import dispose_database, init_database
from core.logging import ResponseTimeMiddleware, setup_logging
from graphql_api import graphql_router
from routes.api_v1 import api_v1_router
from routes.errors import install_error_handlers

settings = get_settings()
setup_logging(settings)
logger = logging.getLogger(__name__)

app = FastAPI(title=settings.app_name)

app.add_middleware(ResponseTimeMiddleware)
install_error_handlers(app)

app.include_router(api_v1_router)
app.include_router(graphql_router, prefix="/graphql")


@app.on_event("startup")
async def on_startup() -> None:
    """Application startup hook."""
    manager = await init_database(settings.database_url)
    await manager.create_schema()
    if settings.seed_on_startup:
        from seed.seed_clubs import seed_clubs

        async with manager.session() as session:
            counts = await seed_clubs(session)
        logger.info("Seeded clubs: %s", counts)
    logger.info("Application startup complete (env=%s)", settings.env)


@app.on_event("shutdown")
async def on_shutdown() -> None:
    """Application shutdown hook."""
    await dispose_database()
    logger.info("Application shutdown complete")


@app.get("/health")
async def health() -> dict:
    """Simple health check endpoint."""
    return {"status": "ok"}
