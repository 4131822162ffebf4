"""Ledger entry and client summary schemas."""

from __future__ import annotations

import uuid
from datetime import datetime
from decimal import Decimal
from typing import Literal, Optional

from pydantic import BaseModel, Field, field_validator

from cityledger.database.models import LedgerEntryType
from cityledger.schemas.common import ORMBaseSchema
from cityledger.schemas.exchange_rate import ExchangeRateRead
from cityledger.utils.currency import normalize_currency

DisplayCurrency = Literal["USD", "UZS", "RUB"]


class LedgerEntryCreate(BaseModel):
    """Payload for recording one ledger entry. Notes may omit the amount."""

    type: LedgerEntryType
    amount: Optional[Decimal] = Field(default=None, max_digits=24, decimal_places=8)
    currency: str = Field(default="USD", min_length=1, max_length=16)
    note: str = Field(min_length=1, max_length=1024)
    entry_date: Optional[datetime] = None
    created_by: Optional[str] = Field(default=None, max_length=128)

    @field_validator("currency")
    @classmethod
    def normalize_code(cls, value: str) -> str:
        return normalize_currency(value)


class LedgerEntryUpdate(BaseModel):
    """Partial update; omitted fields keep the stored value."""

    type: Optional[LedgerEntryType] = None
    amount: Optional[Decimal] = Field(default=None, max_digits=24, decimal_places=8)
    currency: Optional[str] = Field(default=None, min_length=1, max_length=16)
    note: Optional[str] = Field(default=None, min_length=1, max_length=1024)
    entry_date: Optional[datetime] = None

    @field_validator("currency")
    @classmethod
    def normalize_code(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return None
        return normalize_currency(value)


class LedgerEntryRead(ORMBaseSchema):
    """Response model for one ledger entry."""

    id: uuid.UUID
    client_id: uuid.UUID
    type: LedgerEntryType
    amount: Decimal
    currency: str
    note: str
    entry_date: datetime
    created_by: Optional[str]
    created_at: datetime
    updated_at: datetime


class PeriodTotalsRead(BaseModel):
    """USD sums over the filtered entries."""

    debts: Decimal
    payments: Decimal
    net: Decimal


class ClientLedgerSummary(BaseModel):
    """Balance and filtered period view of one client's ledger."""

    client_id: uuid.UUID
    display_currency: DisplayCurrency
    rate: ExchangeRateRead
    balance_usd: Decimal
    balance: Decimal
    balance_text: str
    totals: PeriodTotalsRead
    total_count: int
    entries: list[LedgerEntryRead] = Field(default_factory=list)
