"""Ledger entry endpoints."""

from __future__ import annotations

import uuid
from datetime import date
from typing import Literal, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from cityledger.accounting.engine import LedgerFilter
from cityledger.api.deps import get_balance_service, get_ledger_service, get_session
from cityledger.schemas.common import ApiResponse, OkResponse
from cityledger.schemas.ledger import (
    ClientLedgerSummary,
    DisplayCurrency,
    LedgerEntryCreate,
    LedgerEntryRead,
    LedgerEntryUpdate,
)
from cityledger.ledger.service import LedgerService
from cityledger.services.balance_service import BalanceService

router = APIRouter(tags=["ledger"])

TypeFilter = Literal["ALL", "DEBT_ADD", "PAYMENT", "ADJUSTMENT", "NOTE"]


@router.get("/clients/{client_id}/ledger", response_model=ApiResponse[list[LedgerEntryRead]])
async def list_client_ledger(
    client_id: uuid.UUID,
    session: AsyncSession = Depends(get_session),
    service: LedgerService = Depends(get_ledger_service),
) -> ApiResponse[list[LedgerEntryRead]]:
    """Entries of one client, newest entry date first."""

    rows = await service.list_entries(session, client_id)
    return ApiResponse(data=[LedgerEntryRead.model_validate(row) for row in rows])


@router.post("/clients/{client_id}/ledger", response_model=ApiResponse[LedgerEntryRead])
async def create_ledger_entry(
    client_id: uuid.UUID,
    payload: LedgerEntryCreate,
    session: AsyncSession = Depends(get_session),
    service: LedgerService = Depends(get_ledger_service),
) -> ApiResponse[LedgerEntryRead]:
    """Record a debt, payment, adjustment or note."""

    entry = await service.create_entry(session, client_id, payload)
    return ApiResponse(data=LedgerEntryRead.model_validate(entry))


@router.get("/clients/{client_id}/summary", response_model=ApiResponse[ClientLedgerSummary])
async def client_ledger_summary(
    client_id: uuid.UUID,
    currency: DisplayCurrency = Query(default="USD"),
    entry_type: TypeFilter = Query(default="ALL", alias="type"),
    from_date: Optional[date] = Query(default=None),
    to_date: Optional[date] = Query(default=None),
    q: Optional[str] = Query(default=None, max_length=256),
    session: AsyncSession = Depends(get_session),
    service: BalanceService = Depends(get_balance_service),
) -> ApiResponse[ClientLedgerSummary]:
    """Balance in the chosen currency plus USD totals for the filtered period."""

    criteria = LedgerFilter(type=entry_type, from_date=from_date, to_date=to_date, note_query=q)
    summary = await service.client_summary(session, client_id, criteria, display_currency=currency)
    return ApiResponse(data=summary)


@router.patch("/ledger/{entry_id}", response_model=ApiResponse[LedgerEntryRead])
async def update_ledger_entry(
    entry_id: uuid.UUID,
    payload: LedgerEntryUpdate,
    session: AsyncSession = Depends(get_session),
    service: LedgerService = Depends(get_ledger_service),
) -> ApiResponse[LedgerEntryRead]:
    entry = await service.update_entry(session, entry_id, payload)
    return ApiResponse(data=LedgerEntryRead.model_validate(entry))


@router.delete("/ledger/{entry_id}", response_model=OkResponse)
async def delete_ledger_entry(
    entry_id: uuid.UUID,
    session: AsyncSession = Depends(get_session),
    service: LedgerService = Depends(get_ledger_service),
) -> OkResponse:
    await service.delete_entry(session, entry_id)
    return OkResponse()
