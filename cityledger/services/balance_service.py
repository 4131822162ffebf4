"""Balance projection service."""

from __future__ import annotations

import uuid
from typing import Optional
from zoneinfo import ZoneInfo

from sqlalchemy.ext.asyncio import AsyncSession

from cityledger.accounting.engine import (
    LedgerFilter,
    balance_usd,
    compute_period_totals,
    filter_entries,
    from_usd,
)
from cityledger.config import get_settings
from cityledger.ledger.service import LedgerService
from cityledger.schemas.exchange_rate import ExchangeRateRead
from cityledger.schemas.ledger import ClientLedgerSummary, LedgerEntryRead, PeriodTotalsRead
from cityledger.services.exchange_rate_service import ExchangeRateService
from cityledger.utils.formatters import format_balance


class BalanceService:
    """Facade combining stored entries, the current rate and the accounting engine."""

    def __init__(
        self,
        ledger_service: Optional[LedgerService] = None,
        rate_service: Optional[ExchangeRateService] = None,
    ) -> None:
        self._ledger_service = ledger_service or LedgerService()
        self._rate_service = rate_service or ExchangeRateService()

    async def client_summary(
        self,
        session: AsyncSession,
        client_id: uuid.UUID,
        criteria: LedgerFilter,
        display_currency: str = "USD",
    ) -> ClientLedgerSummary:
        """Balance over the whole ledger plus totals over the filtered slice."""

        entries = await self._ledger_service.list_entries(session, client_id)
        rate = await self._rate_service.get_current(session)
        tz = ZoneInfo(get_settings().timezone)

        total_usd = balance_usd(entries, rate)
        shown = from_usd(total_usd, display_currency, rate)
        filtered = filter_entries(entries, criteria, tz=tz)
        totals = compute_period_totals(filtered, rate)

        return ClientLedgerSummary(
            client_id=client_id,
            display_currency=display_currency,
            rate=ExchangeRateRead.model_validate(rate),
            balance_usd=total_usd,
            balance=shown,
            balance_text=format_balance(shown, display_currency),
            totals=PeriodTotalsRead(debts=totals.debts, payments=totals.payments, net=totals.net),
            total_count=len(entries),
            entries=[LedgerEntryRead.model_validate(entry) for entry in filtered],
        )
