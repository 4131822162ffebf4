"""Domain validation helpers."""

from decimal import Decimal

from cityledger.api.errors import ValidationError


def ensure_positive_decimal(value: Decimal, field_name: str) -> None:
    """Validate that a decimal value is finite and strictly positive."""

    if not value.is_finite() or value <= 0:
        raise ValidationError(f"{field_name} must be greater than 0")


def ensure_min_length(value: str, minimum: int, field_name: str) -> str:
    """Return the stripped value, or fail when it is too short."""

    stripped = value.strip()
    if len(stripped) < minimum:
        raise ValidationError(f"{field_name} must be at least {minimum} characters")
    return stripped
