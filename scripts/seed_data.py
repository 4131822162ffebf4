"""Seed the initial exchange rate and a starter set of cities."""

from __future__ import annotations

import asyncio
import logging

from cityledger.api.errors import ConflictError
from cityledger.config import get_settings
from cityledger.database.session import db_manager
from cityledger.logging_config import setup_logging
from cityledger.services.city_service import CityService
from cityledger.services.exchange_rate_service import ExchangeRateService

logger = logging.getLogger("cityledger.seed")

CITIES = ["Tashkent", "Samarkand", "Bukhara", "Moscow"]


async def seed() -> None:
    """Create the default rate row and any missing cities."""

    cities = CityService()
    rates = ExchangeRateService()

    async with db_manager.session_factory() as session:
        rate = await rates.get_current(session)
        logger.info("Current rate: 1 USD = %s UZS = %s RUB", rate.usd_to_uzs, rate.usd_to_rub)

        for name in CITIES:
            try:
                await cities.create_city(session, name)
            except ConflictError:
                logger.info("City %s already exists", name)

    await db_manager.dispose()
    logger.info("Seed completed")


if __name__ == "__main__":
    setup_logging(get_settings().log_level)
    asyncio.run(seed())
