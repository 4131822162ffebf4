"""Ledger accounting engine: sign normalization, USD conversion and aggregation.

Everything here is pure and synchronous. Functions accept ORM rows, pydantic
models or any object exposing the same attribute names, and never raise on
bad numeric data: unparseable or non-finite values fall back to zero.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, datetime, time, timezone, tzinfo
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Any, Iterable, Optional, Protocol

from cityledger.database.models import LedgerEntryType

logger = logging.getLogger(__name__)

ZERO = Decimal("0")
ALL_TYPES = "ALL"
DEBT_TYPES = frozenset({LedgerEntryType.DEBT_ADD.value, LedgerEntryType.ADJUSTMENT.value})

_DAY_START = time(0, 0, 0)
_DAY_END = time(23, 59, 59)


class EntryLike(Protocol):
    type: Any
    amount: Any
    currency: Optional[str]
    note: Optional[str]
    entry_date: Optional[datetime]


class RateLike(Protocol):
    usd_to_uzs: Any
    usd_to_rub: Any


@dataclass(frozen=True)
class Coerced:
    """Result of numeric coercion; ``fell_back`` is True when ``value`` is the fallback."""

    value: Decimal
    fell_back: bool = False


@dataclass(frozen=True)
class PeriodTotals:
    """USD-equivalent sums over a filtered slice of a ledger."""

    debts: Decimal = ZERO
    payments: Decimal = ZERO
    net: Decimal = ZERO


@dataclass(frozen=True)
class LedgerFilter:
    """Criteria applied by :func:`filter_entries`; every field is optional."""

    type: Optional[str] = None
    from_date: Optional[date] = None
    to_date: Optional[date] = None
    note_query: Optional[str] = None


def coerce_decimal(raw: Any, fallback: Decimal = ZERO) -> Coerced:
    """Parse ``raw`` into a finite Decimal, or report the fallback."""

    if isinstance(raw, Decimal):
        value = raw
    elif isinstance(raw, bool) or raw is None:
        return Coerced(fallback, fell_back=True)
    elif isinstance(raw, int):
        value = Decimal(raw)
    elif isinstance(raw, (float, str)):
        text = str(raw).strip()
        if not text:
            return Coerced(fallback, fell_back=True)
        try:
            value = Decimal(text)
        except InvalidOperation:
            return Coerced(fallback, fell_back=True)
    else:
        return Coerced(fallback, fell_back=True)

    if not value.is_finite():
        return Coerced(fallback, fell_back=True)
    return Coerced(value)


def to_decimal(raw: Any, fallback: Decimal = ZERO) -> Decimal:
    """Shorthand for :func:`coerce_decimal` that logs and drops the flag."""

    result = coerce_decimal(raw, fallback)
    if result.fell_back and raw is not None:
        logger.debug("Non-numeric value %r replaced by %s", raw, fallback)
    return result.value


def _type_value(entry_type: Any) -> str:
    if isinstance(entry_type, Enum):
        return str(entry_type.value)
    return str(entry_type or "").upper()


def normalize_amount(entry_type: Any, amount: Any) -> Decimal:
    """Store payments as non-positive amounts; other types pass through."""

    value = to_decimal(amount)
    if _type_value(entry_type) == LedgerEntryType.PAYMENT.value and value > 0:
        return -value
    return value


def rate_values(rate: Optional[RateLike]) -> tuple[Decimal, Decimal]:
    """Return ``(usd_to_uzs, usd_to_rub)``; a missing rate reads as zeros."""

    if rate is None:
        return ZERO, ZERO
    return to_decimal(getattr(rate, "usd_to_uzs", None)), to_decimal(getattr(rate, "usd_to_rub", None))


def _divide(amount: Decimal, divisor: Decimal) -> Decimal:
    # Conversion is unavailable without a positive rate.
    if divisor > 0:
        return amount / divisor
    return ZERO


def to_usd(amount: Any, currency: Optional[str], rate: Optional[RateLike]) -> Decimal:
    """Convert an amount in ``currency`` to USD.

    Unknown currency codes are counted 1:1 as USD.
    """

    value = to_decimal(amount)
    code = (currency or "USD").strip().upper()
    if code == "USD":
        return value

    usd_to_uzs, usd_to_rub = rate_values(rate)
    if code == "UZS":
        return _divide(value, usd_to_uzs)
    if code == "RUB":
        return _divide(value, usd_to_rub)
    return value


def from_usd(amount_usd: Decimal, currency: Optional[str], rate: Optional[RateLike]) -> Decimal:
    """Express a USD amount in a display currency (USD for anything unsupported)."""

    code = (currency or "USD").strip().upper()
    usd_to_uzs, usd_to_rub = rate_values(rate)
    if code == "UZS":
        return amount_usd * usd_to_uzs
    if code == "RUB":
        return amount_usd * usd_to_rub
    return amount_usd


def balance_usd(entries: Iterable[EntryLike], rate: Optional[RateLike]) -> Decimal:
    """Sum of USD equivalents over every entry, notes included."""

    total = ZERO
    for entry in entries:
        total += to_usd(entry.amount, entry.currency, rate)
    return total


def compute_balance(
    entries: Iterable[EntryLike],
    rate: Optional[RateLike],
    display_currency: Optional[str] = "USD",
) -> Decimal:
    """Client balance expressed in ``display_currency``."""

    return from_usd(balance_usd(entries, rate), display_currency, rate)


def compute_period_totals(entries: Iterable[EntryLike], rate: Optional[RateLike]) -> PeriodTotals:
    """Aggregate debts, payments and net in USD over already-filtered entries."""

    debts = ZERO
    payments = ZERO
    net = ZERO
    for entry in entries:
        usd = to_usd(entry.amount, entry.currency, rate)
        entry_type = _type_value(entry.type)
        if entry_type in DEBT_TYPES:
            debts += usd
        elif entry_type == LedgerEntryType.PAYMENT.value:
            payments += usd
        net += usd
    return PeriodTotals(debts=debts, payments=payments, net=net)


def _wall_clock(moment: datetime, tz: Optional[tzinfo]) -> datetime:
    """Naive local time for comparison against day bounds.

    Naive timestamps are taken as UTC when a timezone is given.
    """

    if tz is None:
        if moment.tzinfo is None:
            return moment
        return moment.astimezone(timezone.utc).replace(tzinfo=None)
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(tz).replace(tzinfo=None)


def matches(entry: EntryLike, criteria: LedgerFilter, tz: Optional[tzinfo] = None) -> bool:
    """Return whether one entry satisfies every criterion."""

    if criteria.type and _type_value(criteria.type) != ALL_TYPES:
        if _type_value(entry.type) != _type_value(criteria.type):
            return False

    if entry.entry_date is not None:
        moment = _wall_clock(entry.entry_date, tz)
        if criteria.from_date is not None and moment < datetime.combine(criteria.from_date, _DAY_START):
            return False
        if criteria.to_date is not None and moment > datetime.combine(criteria.to_date, _DAY_END):
            return False

    query = (criteria.note_query or "").strip().lower()
    if query and query not in (entry.note or "").lower():
        return False

    return True


def filter_entries(
    entries: Iterable[EntryLike],
    criteria: LedgerFilter,
    tz: Optional[tzinfo] = None,
) -> list:
    """Keep entries matching ``criteria``, preserving input order."""

    return [entry for entry in entries if matches(entry, criteria, tz)]
