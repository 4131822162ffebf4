"""Money formatting for balances shown next to clients."""

from decimal import ROUND_HALF_UP, Decimal
from typing import Union

from cityledger.accounting.engine import to_decimal

_CENTS = Decimal("0.01")


def format_money(amount: Union[Decimal, float, int, str]) -> str:
    """Two-decimal amount with a leading minus for negatives: ``-1234.50``."""

    value = to_decimal(amount).quantize(_CENTS, rounding=ROUND_HALF_UP)
    sign = "-" if value < 0 else ""
    return f"{sign}{abs(value):.2f}"


def format_balance(amount: Union[Decimal, float, int, str], currency: str) -> str:
    """Money followed by the currency code, as shown next to a client."""

    return f"{format_money(amount)} {currency.upper()}"
