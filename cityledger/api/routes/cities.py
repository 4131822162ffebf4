"""City endpoints."""

import uuid
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from cityledger.api.deps import get_city_service, get_client_service, get_session
from cityledger.schemas.city import CityCreate, CityRead, CityUpdate
from cityledger.schemas.client import ClientRead
from cityledger.schemas.common import ApiResponse, OkResponse
from cityledger.services.city_service import CityService
from cityledger.services.client_service import ClientService

router = APIRouter(prefix="/cities", tags=["cities"])


@router.get("", response_model=ApiResponse[list[CityRead]])
async def list_cities(
    session: AsyncSession = Depends(get_session),
    service: CityService = Depends(get_city_service),
) -> ApiResponse[list[CityRead]]:
    """List cities alphabetically."""

    rows = await service.list_cities(session)
    return ApiResponse(data=[CityRead.model_validate(row) for row in rows])


@router.post("", response_model=ApiResponse[CityRead])
async def create_city(
    payload: CityCreate,
    session: AsyncSession = Depends(get_session),
    service: CityService = Depends(get_city_service),
) -> ApiResponse[CityRead]:
    city = await service.create_city(session, payload.name)
    return ApiResponse(data=CityRead.model_validate(city))


@router.patch("/{city_id}", response_model=ApiResponse[CityRead])
async def rename_city(
    city_id: uuid.UUID,
    payload: CityUpdate,
    session: AsyncSession = Depends(get_session),
    service: CityService = Depends(get_city_service),
) -> ApiResponse[CityRead]:
    city = await service.rename_city(session, city_id, payload.name)
    return ApiResponse(data=CityRead.model_validate(city))


@router.delete("/{city_id}", response_model=OkResponse)
async def delete_city(
    city_id: uuid.UUID,
    session: AsyncSession = Depends(get_session),
    service: CityService = Depends(get_city_service),
) -> OkResponse:
    """Delete a city; refused with CityHasClients while it has active clients."""

    await service.delete_city(session, city_id)
    return OkResponse()


@router.get("/{city_id}/clients", response_model=ApiResponse[list[ClientRead]])
async def list_city_clients(
    city_id: uuid.UUID,
    search: Optional[str] = Query(default=None, max_length=128),
    session: AsyncSession = Depends(get_session),
    service: ClientService = Depends(get_client_service),
) -> ApiResponse[list[ClientRead]]:
    """Active clients of a city, optionally filtered by name or phone."""

    rows = await service.list_by_city(session, city_id, search=search)
    return ApiResponse(data=[ClientRead.model_validate(row) for row in rows])
