"""Helpers to run Alembic migrations programmatically."""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path

from alembic import command
from alembic.config import Config

from cityledger.config import get_settings

logger = logging.getLogger(__name__)


def _alembic_config() -> Config:
    """Load Alembic configuration and inject runtime DB URL."""

    settings = get_settings()
    cfg = Config(str(Path(__file__).resolve().parents[2] / "alembic.ini"))
    cfg.set_main_option("sqlalchemy.url", settings.database_url)
    cfg.attributes["configure_logger"] = False
    return cfg


def should_run_migrations() -> bool:
    """Upgrade on startup only when explicitly enabled."""

    return get_settings().run_migrations_on_startup


async def run_migrations() -> None:
    """Apply latest Alembic migrations."""

    cfg = _alembic_config()
    logger.info("Applying database migrations")
    # Alembic is synchronous and env.py starts its own event loop.
    await asyncio.to_thread(command.upgrade, cfg, "head")
