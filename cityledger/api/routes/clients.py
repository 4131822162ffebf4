"""Client endpoints."""

import uuid

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from cityledger.api.deps import get_client_service, get_session
from cityledger.schemas.client import ClientCreate, ClientRead, ClientUpdate
from cityledger.schemas.common import ApiResponse
from cityledger.services.client_service import ClientService

router = APIRouter(prefix="/clients", tags=["clients"])


@router.post("", response_model=ApiResponse[ClientRead])
async def create_client(
    payload: ClientCreate,
    session: AsyncSession = Depends(get_session),
    service: ClientService = Depends(get_client_service),
) -> ApiResponse[ClientRead]:
    """Create a new client profile."""

    client = await service.create_client(session, payload)
    return ApiResponse(data=ClientRead.model_validate(client))


@router.patch("/{client_id}", response_model=ApiResponse[ClientRead])
async def update_client(
    client_id: uuid.UUID,
    payload: ClientUpdate,
    session: AsyncSession = Depends(get_session),
    service: ClientService = Depends(get_client_service),
) -> ApiResponse[ClientRead]:
    client = await service.update_client(session, client_id, payload)
    return ApiResponse(data=ClientRead.model_validate(client))


@router.delete("/{client_id}", response_model=ApiResponse[ClientRead])
async def archive_client(
    client_id: uuid.UUID,
    session: AsyncSession = Depends(get_session),
    service: ClientService = Depends(get_client_service),
) -> ApiResponse[ClientRead]:
    """Archive instead of deleting, so the ledger keeps its owner."""

    client = await service.archive_client(session, client_id)
    return ApiResponse(data=ClientRead.model_validate(client))
