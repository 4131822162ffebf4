"""Exchange rate log service."""

from __future__ import annotations

import logging
from decimal import Decimal
from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from cityledger.config import get_settings
from cityledger.database.models import ExchangeRate
from cityledger.validators.business import ensure_positive_decimal

logger = logging.getLogger(__name__)


class ExchangeRateService:
    """Read the current rate and append new versions."""

    def __init__(self, default_usd_to_uzs: Optional[Decimal] = None, default_usd_to_rub: Optional[Decimal] = None) -> None:
        settings = get_settings()
        self.default_usd_to_uzs = default_usd_to_uzs or settings.default_usd_to_uzs
        self.default_usd_to_rub = default_usd_to_rub or settings.default_usd_to_rub

    async def get_current(self, session: AsyncSession) -> ExchangeRate:
        """Return the newest rate, seeding the default row on first use."""

        result = await session.execute(
            select(ExchangeRate).order_by(ExchangeRate.updated_at.desc(), ExchangeRate.id.desc()).limit(1)
        )
        rate = result.scalar_one_or_none()
        if rate is not None:
            return rate

        logger.info("No exchange rate stored; creating default %s UZS / %s RUB",
                    self.default_usd_to_uzs, self.default_usd_to_rub)
        return await self._append(session, self.default_usd_to_uzs, self.default_usd_to_rub, None)

    async def set_rate(
        self,
        session: AsyncSession,
        usd_to_uzs: Decimal,
        usd_to_rub: Decimal,
        updated_by: Optional[str] = None,
    ) -> ExchangeRate:
        """Record a new rate version; earlier rows are left untouched."""

        ensure_positive_decimal(usd_to_uzs, "usd_to_uzs")
        ensure_positive_decimal(usd_to_rub, "usd_to_rub")
        rate = await self._append(session, usd_to_uzs, usd_to_rub, updated_by)
        logger.info("Exchange rate %s set by %s: %s UZS / %s RUB",
                    rate.id, updated_by or "unknown", rate.usd_to_uzs, rate.usd_to_rub)
        return rate

    async def history(self, session: AsyncSession, limit: int = 50) -> list[ExchangeRate]:
        """Return rate versions newest first."""

        result = await session.execute(
            select(ExchangeRate).order_by(ExchangeRate.updated_at.desc(), ExchangeRate.id.desc()).limit(limit)
        )
        return list(result.scalars().all())

    async def _append(
        self,
        session: AsyncSession,
        usd_to_uzs: Decimal,
        usd_to_rub: Decimal,
        updated_by: Optional[str],
    ) -> ExchangeRate:
        rate = ExchangeRate(usd_to_uzs=usd_to_uzs, usd_to_rub=usd_to_rub, updated_by=updated_by)
        session.add(rate)
        await session.commit()
        await session.refresh(rate)
        return rate
