"""City CRUD service."""

from __future__ import annotations

import logging
import uuid
from typing import Optional

from sqlalchemy import delete, func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from cityledger.api.errors import CityHasClientsError, ConflictError, NotFoundError
from cityledger.database.models import City, Client
from cityledger.validators.business import ensure_min_length

logger = logging.getLogger(__name__)


class CityService:
    """Service for listing, naming and removing cities."""

    async def list_cities(self, session: AsyncSession) -> list[City]:
        """Return all cities sorted by name."""

        result = await session.execute(select(City).order_by(City.name.asc()))
        return list(result.scalars().all())

    async def get_city(self, session: AsyncSession, city_id: uuid.UUID) -> City:
        """Load one city or fail with 404."""

        city = await session.get(City, city_id)
        if city is None:
            raise NotFoundError(f"City not found: {city_id}")
        return city

    async def create_city(self, session: AsyncSession, name: str) -> City:
        """Create and persist a new city."""

        normalized = ensure_min_length(name, 2, "name")
        await self._ensure_name_free(session, normalized)
        city = City(name=normalized)
        session.add(city)
        await session.commit()
        await session.refresh(city)
        logger.info("City %s created: %s", city.id, city.name)
        return city

    async def rename_city(self, session: AsyncSession, city_id: uuid.UUID, name: str) -> City:
        """Change a city's display name."""

        city = await self.get_city(session, city_id)
        normalized = ensure_min_length(name, 2, "name")
        await self._ensure_name_free(session, normalized, exclude_id=city.id)
        city.name = normalized
        await session.commit()
        await session.refresh(city)
        logger.info("City %s renamed to %s", city.id, city.name)
        return city

    async def delete_city(self, session: AsyncSession, city_id: uuid.UUID) -> None:
        """Delete a city that has no active clients.

        Archived clients of the city stay, with their ledger, detached from it.
        """

        city = await self.get_city(session, city_id)
        active = await self.count_active_clients(session, city.id)
        if active > 0:
            logger.info("Refused to delete city %s: %d active clients", city.id, active)
            raise CityHasClientsError()

        detached = await session.execute(
            update(Client).where(Client.city_id == city.id).values(city_id=None)
        )
        await session.execute(delete(City).where(City.id == city.id))
        await session.commit()
        logger.info("City %s deleted; %d archived clients detached", city_id, detached.rowcount)

    async def count_active_clients(self, session: AsyncSession, city_id: uuid.UUID) -> int:
        """Number of non-archived clients in the city."""

        result = await session.execute(
            select(func.count(Client.id)).where(Client.city_id == city_id, Client.archived.is_(False))
        )
        return int(result.scalar_one())

    async def _ensure_name_free(
        self,
        session: AsyncSession,
        name: str,
        exclude_id: Optional[uuid.UUID] = None,
    ) -> None:
        query = select(City.id).where(func.lower(City.name) == name.lower())
        if exclude_id is not None:
            query = query.where(City.id != exclude_id)
        result = await session.execute(query.limit(1))
        if result.scalar_one_or_none() is not None:
            raise ConflictError(f"City already exists: {name}")
