from __future__ import annotations

import random
from datetime import date, datetime, timezone
from decimal import Decimal
from types import SimpleNamespace
from zoneinfo import ZoneInfo

import pytest

from cityledger.accounting.engine import (
    LedgerFilter,
    balance_usd,
    coerce_decimal,
    compute_balance,
    compute_period_totals,
    filter_entries,
    from_usd,
    normalize_amount,
    to_decimal,
    to_usd,
)
from cityledger.database.models import LedgerEntryType

RATE = SimpleNamespace(usd_to_uzs=Decimal("12000"), usd_to_rub=Decimal("100"))


def make_entry(entry_type: str, amount, currency: str = "USD", note: str = "", entry_date=None):
    return SimpleNamespace(
        type=entry_type,
        amount=amount,
        currency=currency,
        note=note,
        entry_date=entry_date or datetime(2026, 3, 10, 12, 0, tzinfo=timezone.utc),
    )


@pytest.mark.parametrize(
    ("amount", "currency", "expected"),
    [
        (Decimal("25"), "USD", Decimal("25")),
        (Decimal("120000"), "UZS", Decimal("10")),
        (Decimal("1000"), "RUB", Decimal("10")),
        (Decimal("7"), "EUR", Decimal("7")),
        (Decimal("7"), "", Decimal("7")),
        (Decimal("7"), None, Decimal("7")),
        (Decimal("300"), " rub ", Decimal("3")),
    ],
)
def test_to_usd_conversions(amount: Decimal, currency, expected: Decimal) -> None:
    assert to_usd(amount, currency, RATE) == expected


def test_to_usd_without_positive_rate_yields_zero() -> None:
    zero_rate = SimpleNamespace(usd_to_uzs=Decimal("0"), usd_to_rub=Decimal("-5"))

    assert to_usd(Decimal("12000"), "UZS", zero_rate) == Decimal("0")
    assert to_usd(Decimal("100"), "RUB", zero_rate) == Decimal("0")
    assert to_usd(Decimal("100"), "RUB", None) == Decimal("0")
    assert to_usd(Decimal("100"), "USD", None) == Decimal("100")


def test_normalize_amount_negates_positive_payments_only() -> None:
    assert normalize_amount(LedgerEntryType.PAYMENT, Decimal("40")) == Decimal("-40")
    assert normalize_amount("PAYMENT", Decimal("-40")) == Decimal("-40")
    assert normalize_amount("payment", "15.5") == Decimal("-15.5")
    assert normalize_amount(LedgerEntryType.DEBT_ADD, Decimal("100")) == Decimal("100")
    assert normalize_amount(LedgerEntryType.ADJUSTMENT, Decimal("-5")) == Decimal("-5")
    assert normalize_amount(LedgerEntryType.NOTE, None) == Decimal("0")


def test_debt_then_payment_leaves_sixty() -> None:
    entries = [
        make_entry("DEBT_ADD", Decimal("100")),
        make_entry("PAYMENT", normalize_amount("PAYMENT", Decimal("40"))),
    ]

    assert balance_usd(entries, RATE) == Decimal("60")
    assert compute_balance(entries, RATE, "UZS") == Decimal("720000")


def test_uzs_debt_displayed_in_rub() -> None:
    entries = [make_entry("DEBT_ADD", Decimal("120000"), currency="UZS")]

    assert balance_usd(entries, RATE) == Decimal("10")
    assert compute_balance(entries, RATE, "RUB") == Decimal("1000")
    assert compute_balance(entries, RATE, "GBP") == Decimal("10")


def test_balance_is_order_independent() -> None:
    entries = [
        make_entry("DEBT_ADD", Decimal("100")),
        make_entry("DEBT_ADD", Decimal("240000"), currency="UZS"),
        make_entry("PAYMENT", Decimal("-500"), currency="RUB"),
        make_entry("ADJUSTMENT", Decimal("-2.5")),
        make_entry("NOTE", Decimal("0"), note="called"),
    ]
    expected = balance_usd(entries, RATE)
    shuffled = list(entries)
    random.Random(7).shuffle(shuffled)

    assert expected == Decimal("112.5")
    assert balance_usd(shuffled, RATE) == expected
    assert balance_usd(list(reversed(entries)), RATE) == expected


def test_from_usd_uses_multipliers() -> None:
    assert from_usd(Decimal("2"), "UZS", RATE) == Decimal("24000")
    assert from_usd(Decimal("2"), "RUB", RATE) == Decimal("200")
    assert from_usd(Decimal("2"), "USD", RATE) == Decimal("2")


def test_period_totals_split_debts_and_payments() -> None:
    entries = [
        make_entry("DEBT_ADD", Decimal("100")),
        make_entry("ADJUSTMENT", Decimal("12000"), currency="UZS"),
        make_entry("PAYMENT", Decimal("-3000"), currency="RUB"),
        make_entry("NOTE", Decimal("0"), note="promised friday"),
    ]

    totals = compute_period_totals(entries, RATE)

    assert totals.debts == Decimal("101")
    assert totals.payments == Decimal("-30")
    assert totals.net == Decimal("71")


def test_note_query_is_case_insensitive_substring() -> None:
    entries = [
        make_entry("DEBT_ADD", Decimal("10"), note="Delivery to shop"),
        make_entry("DEBT_ADD", Decimal("20"), note="cash advance"),
        make_entry("NOTE", Decimal("0"), note="Redelivered parcel"),
    ]

    kept = filter_entries(entries, LedgerFilter(note_query="  DELIV "))

    assert [entry.note for entry in kept] == ["Delivery to shop", "Redelivered parcel"]


def test_type_filter_all_keeps_everything() -> None:
    entries = [
        make_entry("DEBT_ADD", Decimal("10")),
        make_entry("PAYMENT", Decimal("-5")),
        make_entry("NOTE", Decimal("0")),
    ]

    assert filter_entries(entries, LedgerFilter(type="ALL")) == entries
    assert filter_entries(entries, LedgerFilter()) == entries
    assert filter_entries(entries, LedgerFilter(type=LedgerEntryType.PAYMENT)) == [entries[1]]
    assert filter_entries(entries, LedgerFilter(type="payment")) == [entries[1]]


def test_date_bounds_cover_whole_days() -> None:
    start = make_entry("DEBT_ADD", 1, entry_date=datetime(2026, 3, 1, 0, 0, 0, tzinfo=timezone.utc))
    end = make_entry("DEBT_ADD", 2, entry_date=datetime(2026, 3, 5, 23, 59, 59, tzinfo=timezone.utc))
    before = make_entry("DEBT_ADD", 3, entry_date=datetime(2026, 2, 28, 23, 59, 59, tzinfo=timezone.utc))
    after = make_entry("DEBT_ADD", 4, entry_date=datetime(2026, 3, 6, 0, 0, 0, tzinfo=timezone.utc))

    criteria = LedgerFilter(from_date=date(2026, 3, 1), to_date=date(2026, 3, 5))
    kept = filter_entries([before, start, end, after], criteria)

    assert kept == [start, end]


def test_date_bounds_follow_configured_timezone() -> None:
    # 20:00 UTC on March 1st is already March 2nd in Tashkent (UTC+5).
    late = make_entry("DEBT_ADD", 1, entry_date=datetime(2026, 3, 1, 20, 0, tzinfo=timezone.utc))
    criteria = LedgerFilter(from_date=date(2026, 3, 2), to_date=date(2026, 3, 2))

    assert filter_entries([late], criteria) == []
    assert filter_entries([late], criteria, tz=ZoneInfo("Asia/Tashkent")) == [late]


def test_naive_entry_dates_are_read_as_utc() -> None:
    naive = make_entry("DEBT_ADD", 1, entry_date=datetime(2026, 3, 1, 20, 0))
    criteria = LedgerFilter(from_date=date(2026, 3, 2))

    assert filter_entries([naive], criteria, tz=ZoneInfo("Asia/Tashkent")) == [naive]


@pytest.mark.parametrize("raw", ["abc", "", None, "NaN", float("inf"), Decimal("-Infinity"), True, object()])
def test_coerce_decimal_falls_back_on_bad_input(raw) -> None:
    result = coerce_decimal(raw, Decimal("0"))

    assert result.fell_back is True
    assert result.value == Decimal("0")


def test_coerce_decimal_accepts_numbers_and_strings() -> None:
    assert coerce_decimal(" 12.50 ").value == Decimal("12.50")
    assert coerce_decimal(3).value == Decimal("3")
    assert coerce_decimal(Decimal("-1")).fell_back is False
    assert to_decimal("oops", Decimal("5")) == Decimal("5")


def test_garbage_amounts_do_not_break_balance() -> None:
    entries = [make_entry("DEBT_ADD", "not-a-number"), make_entry("DEBT_ADD", Decimal("15"))]

    assert balance_usd(entries, RATE) == Decimal("15")
