"""Ledger entry persistence with payment sign normalization."""

from __future__ import annotations

import logging
import uuid
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from cityledger.accounting.engine import normalize_amount
from cityledger.api.errors import NotFoundError
from cityledger.database.models import Client, LedgerEntry, utcnow
from cityledger.schemas.ledger import LedgerEntryCreate, LedgerEntryUpdate
from cityledger.utils.currency import is_supported

logger = logging.getLogger(__name__)


def _as_utc(moment: Optional[datetime]) -> datetime:
    """Store timestamps in UTC; naive input is taken to be UTC already."""

    if moment is None:
        return utcnow()
    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(timezone.utc)


class LedgerService:
    """Create, edit and list a client's ledger entries."""

    async def list_entries(self, session: AsyncSession, client_id: uuid.UUID) -> list[LedgerEntry]:
        """Return the client's entries, most recent entry date first."""

        await self._get_client(session, client_id)
        result = await session.execute(
            select(LedgerEntry)
            .where(LedgerEntry.client_id == client_id)
            .order_by(LedgerEntry.entry_date.desc(), LedgerEntry.created_at.desc())
        )
        return list(result.scalars().all())

    async def get_entry(self, session: AsyncSession, entry_id: uuid.UUID) -> LedgerEntry:
        """Load one entry or fail with 404."""

        entry = await session.get(LedgerEntry, entry_id)
        if entry is None:
            raise NotFoundError(f"Ledger entry not found: {entry_id}")
        return entry

    async def create_entry(
        self,
        session: AsyncSession,
        client_id: uuid.UUID,
        payload: LedgerEntryCreate,
    ) -> LedgerEntry:
        """Persist one entry; positive payments are stored negated."""

        await self._get_client(session, client_id)
        self._warn_unsupported_currency(payload.currency)

        entry = LedgerEntry(
            client_id=client_id,
            type=payload.type.value,
            amount=normalize_amount(payload.type, payload.amount),
            currency=payload.currency,
            note=payload.note,
            entry_date=_as_utc(payload.entry_date),
            created_by=payload.created_by,
        )
        session.add(entry)
        await session.commit()
        await session.refresh(entry)
        logger.info("Ledger entry %s created: client=%s type=%s amount=%s %s",
                    entry.id, client_id, entry.type, entry.amount, entry.currency)
        return entry

    async def update_entry(
        self,
        session: AsyncSession,
        entry_id: uuid.UUID,
        payload: LedgerEntryUpdate,
    ) -> LedgerEntry:
        """Apply a partial update and re-normalize the merged type/amount."""

        entry = await self.get_entry(session, entry_id)

        new_type = payload.type.value if payload.type is not None else entry.type
        new_amount = payload.amount if payload.amount is not None else entry.amount

        entry.type = new_type
        entry.amount = normalize_amount(new_type, new_amount)
        if payload.currency is not None:
            self._warn_unsupported_currency(payload.currency)
            entry.currency = payload.currency
        if payload.note is not None:
            entry.note = payload.note
        if payload.entry_date is not None:
            entry.entry_date = _as_utc(payload.entry_date)

        await session.commit()
        await session.refresh(entry)
        logger.info("Ledger entry %s updated: type=%s amount=%s %s",
                    entry.id, entry.type, entry.amount, entry.currency)
        return entry

    async def delete_entry(self, session: AsyncSession, entry_id: uuid.UUID) -> None:
        """Physically remove one entry."""

        entry = await self.get_entry(session, entry_id)
        await session.delete(entry)
        await session.commit()
        logger.info("Ledger entry %s deleted", entry_id)

    async def _get_client(self, session: AsyncSession, client_id: uuid.UUID) -> Client:
        client = await session.get(Client, client_id)
        if client is None:
            raise NotFoundError(f"Client not found: {client_id}")
        return client

    @staticmethod
    def _warn_unsupported_currency(code: str) -> None:
        if not is_supported(code):
            logger.warning("Currency %s has no rate; balances count it 1:1 as USD", code)
