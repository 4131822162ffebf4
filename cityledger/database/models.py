"""ORM models: cities, clients, ledger entries and the exchange rate log."""

from __future__ import annotations

import uuid
from datetime import datetime, timezone
from decimal import Decimal
from enum import Enum
from typing import Optional

from sqlalchemy import JSON, Boolean, CheckConstraint, DateTime, ForeignKey, Index, Numeric, String, Uuid, event
from sqlalchemy.orm import Mapped, mapped_column, relationship

from cityledger.database.base import Base


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class LedgerEntryType(str, Enum):
    """Kind of movement recorded against a client."""

    DEBT_ADD = "DEBT_ADD"
    PAYMENT = "PAYMENT"
    ADJUSTMENT = "ADJUSTMENT"
    NOTE = "NOTE"


class City(Base):
    """Grouping of clients by location."""

    __tablename__ = "cities"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    name: Mapped[str] = mapped_column(String(128), index=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow, onupdate=utcnow)

    clients: Mapped[list[Client]] = relationship(back_populates="city")


class Client(Base):
    """Customer owing or paying money; archived instead of deleted."""

    __tablename__ = "clients"
    __table_args__ = (Index("ix_clients_city_archived", "city_id", "archived"),)

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    # Cleared when the city is deleted; only archived clients can lose their city.
    city_id: Mapped[Optional[uuid.UUID]] = mapped_column(
        ForeignKey("cities.id", ondelete="SET NULL"), nullable=True, index=True
    )
    name: Mapped[str] = mapped_column(String(128), index=True)
    phone: Mapped[Optional[str]] = mapped_column(String(32), nullable=True)
    tags: Mapped[list[str]] = mapped_column(JSON, default=list)
    archived: Mapped[bool] = mapped_column(Boolean, default=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow, onupdate=utcnow, index=True)

    city: Mapped[Optional[City]] = relationship(back_populates="clients")
    entries: Mapped[list[LedgerEntry]] = relationship(back_populates="client")


class LedgerEntry(Base):
    """One debt, payment, adjustment or note in a client's ledger."""

    __tablename__ = "ledger_entries"
    __table_args__ = (
        CheckConstraint(
            "type IN ('DEBT_ADD', 'PAYMENT', 'ADJUSTMENT', 'NOTE')",
            name="type_allowed",
        ),
        CheckConstraint("type != 'PAYMENT' OR amount <= 0", name="payment_not_positive"),
        Index("ix_ledger_entries_client_entry_date", "client_id", "entry_date"),
    )

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    client_id: Mapped[uuid.UUID] = mapped_column(ForeignKey("clients.id"), index=True)
    type: Mapped[str] = mapped_column(String(16), index=True)
    amount: Mapped[Decimal] = mapped_column(Numeric(24, 8), default=Decimal("0"))
    currency: Mapped[str] = mapped_column(String(16), default="USD")
    note: Mapped[str] = mapped_column(String(1024))
    entry_date: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)
    created_by: Mapped[Optional[str]] = mapped_column(String(128), nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow, onupdate=utcnow)

    client: Mapped[Client] = relationship(back_populates="entries")


class ExchangeRate(Base):
    """One version of the USD conversion rates. The newest row is current."""

    __tablename__ = "exchange_rates"
    __table_args__ = (
        CheckConstraint("usd_to_uzs > 0", name="usd_to_uzs_positive"),
        CheckConstraint("usd_to_rub > 0", name="usd_to_rub_positive"),
    )

    # Integer key doubles as insertion order for rows sharing a timestamp.
    id: Mapped[int] = mapped_column(primary_key=True)
    usd_to_uzs: Mapped[Decimal] = mapped_column(Numeric(24, 8))
    usd_to_rub: Mapped[Decimal] = mapped_column(Numeric(24, 8))
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow, index=True)
    updated_by: Mapped[Optional[str]] = mapped_column(String(128), nullable=True)


@event.listens_for(ExchangeRate, "before_update", propagate=True)
def _prevent_rate_update(*_args, **_kwargs):
    """Rates are versioned by inserting new rows, never by editing old ones."""

    raise ValueError("Exchange rate rows are append-only and cannot be updated")


@event.listens_for(ExchangeRate, "before_delete", propagate=True)
def _prevent_rate_delete(*_args, **_kwargs):
    """Keep the full rate history."""

    raise ValueError("Exchange rate rows are append-only and cannot be deleted")
