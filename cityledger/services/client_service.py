"""Client CRUD/use-case service."""

from __future__ import annotations

import logging
import uuid
from typing import Optional

from sqlalchemy import func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from cityledger.api.errors import NotFoundError, ValidationError
from cityledger.database.models import City, Client
from cityledger.schemas.client import ClientCreate, ClientUpdate

logger = logging.getLogger(__name__)


class ClientService:
    """Service for creating, editing and archiving clients."""

    async def list_by_city(
        self,
        session: AsyncSession,
        city_id: uuid.UUID,
        search: Optional[str] = None,
    ) -> list[Client]:
        """Return the city's active clients, most recently updated first."""

        if await session.get(City, city_id) is None:
            raise NotFoundError(f"City not found: {city_id}")

        query = select(Client).where(Client.city_id == city_id, Client.archived.is_(False))
        needle = (search or "").strip().lower()
        if needle:
            pattern = f"%{needle}%"
            query = query.where(
                or_(
                    func.lower(Client.name).like(pattern),
                    func.lower(func.coalesce(Client.phone, "")).like(pattern),
                )
            )
        result = await session.execute(query.order_by(Client.updated_at.desc()))
        return list(result.scalars().all())

    async def get_client(self, session: AsyncSession, client_id: uuid.UUID) -> Client:
        """Load one client (archived included) or fail with 404."""

        client = await session.get(Client, client_id)
        if client is None:
            raise NotFoundError(f"Client not found: {client_id}")
        return client

    async def create_client(self, session: AsyncSession, payload: ClientCreate) -> Client:
        """Create and persist a new client in an existing city."""

        if await session.get(City, payload.city_id) is None:
            raise NotFoundError(f"City not found: {payload.city_id}")

        client = Client(
            city_id=payload.city_id,
            name=payload.name,
            phone=payload.phone,
            tags=list(payload.tags),
        )
        session.add(client)
        await session.commit()
        await session.refresh(client)
        logger.info("Client %s created in city %s", client.id, client.city_id)
        return client

    async def update_client(self, session: AsyncSession, client_id: uuid.UUID, payload: ClientUpdate) -> Client:
        """Apply only the fields present in the request; ``phone: null`` clears it."""

        client = await self.get_client(session, client_id)
        changes = payload.model_dump(exclude_unset=True)
        if changes.get("archived") is False and client.city_id is None:
            raise ValidationError("Client has no city; it cannot be restored")

        if changes.get("name") is not None:
            client.name = changes["name"]
        if "phone" in changes:
            client.phone = changes["phone"]
        if changes.get("tags") is not None:
            client.tags = list(changes["tags"])
        if changes.get("archived") is not None:
            client.archived = changes["archived"]

        await session.commit()
        await session.refresh(client)
        logger.info("Client %s updated: %s", client.id, sorted(changes))
        return client

    async def archive_client(self, session: AsyncSession, client_id: uuid.UUID) -> Client:
        """Soft-delete: hide the client from listings, keep its ledger."""

        client = await self.get_client(session, client_id)
        client.archived = True
        await session.commit()
        await session.refresh(client)
        logger.info("Client %s archived", client.id)
        return client
