"""Exchange rate schemas."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field

from cityledger.schemas.common import ORMBaseSchema


class ExchangeRateUpdate(BaseModel):
    """New rate version; both multipliers must be positive."""

    usd_to_uzs: Decimal = Field(gt=0, max_digits=24, decimal_places=8)
    usd_to_rub: Decimal = Field(gt=0, max_digits=24, decimal_places=8)
    updated_by: Optional[str] = Field(default=None, max_length=128)


class ExchangeRateRead(ORMBaseSchema):
    """Read model for one rate version."""

    id: int
    usd_to_uzs: Decimal
    usd_to_rub: Decimal
    updated_at: datetime
    updated_by: Optional[str]
