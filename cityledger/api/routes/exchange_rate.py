"""Exchange rate endpoints."""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from cityledger.api.deps import get_exchange_rate_service, get_session
from cityledger.schemas.common import ApiResponse
from cityledger.schemas.exchange_rate import ExchangeRateRead, ExchangeRateUpdate
from cityledger.services.exchange_rate_service import ExchangeRateService

router = APIRouter(prefix="/exchange-rate", tags=["exchange-rate"])


@router.get("", response_model=ApiResponse[ExchangeRateRead])
async def get_exchange_rate(
    session: AsyncSession = Depends(get_session),
    service: ExchangeRateService = Depends(get_exchange_rate_service),
) -> ApiResponse[ExchangeRateRead]:
    """Current rate; a default row is created on first request."""

    rate = await service.get_current(session)
    return ApiResponse(data=ExchangeRateRead.model_validate(rate))


@router.put("", response_model=ApiResponse[ExchangeRateRead])
async def set_exchange_rate(
    payload: ExchangeRateUpdate,
    session: AsyncSession = Depends(get_session),
    service: ExchangeRateService = Depends(get_exchange_rate_service),
) -> ApiResponse[ExchangeRateRead]:
    """Append a new rate version."""

    rate = await service.set_rate(session, payload.usd_to_uzs, payload.usd_to_rub, payload.updated_by)
    return ApiResponse(data=ExchangeRateRead.model_validate(rate))


@router.get("/history", response_model=ApiResponse[list[ExchangeRateRead]])
async def exchange_rate_history(
    limit: int = Query(default=50, ge=1, le=500),
    session: AsyncSession = Depends(get_session),
    service: ExchangeRateService = Depends(get_exchange_rate_service),
) -> ApiResponse[list[ExchangeRateRead]]:
    """Rate versions, newest first."""

    rows = await service.history(session, limit=limit)
    return ApiResponse(data=[ExchangeRateRead.model_validate(row) for row in rows])
