"""FastAPI application entrypoint."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from cityledger.api.errors import register_exception_handlers
from cityledger.api.router import api_router
from cityledger.config import get_settings, parse_origins
from cityledger.database.migrations import run_migrations, should_run_migrations
from cityledger.database.session import db_manager
from cityledger.logging_config import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Apply migrations when enabled and release the engine on shutdown."""

    if should_run_migrations():
        await run_migrations()
    logger.info("%s started", app.title)
    try:
        yield
    finally:
        await db_manager.dispose()
        logger.info("%s stopped", app.title)


settings = get_settings()
setup_logging(settings.log_level)

app = FastAPI(title=settings.app_name, debug=settings.debug, lifespan=lifespan)
app.add_middleware(
    CORSMiddleware,
    allow_origins=parse_origins(settings.cors_origins) or ["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)
app.include_router(api_router, prefix=settings.api_prefix)
register_exception_handlers(app)


@app.get("/health", tags=["system"])
async def health() -> dict[str, bool]:
    """Liveness probe for uptime checks."""

    return {"ok": True}
