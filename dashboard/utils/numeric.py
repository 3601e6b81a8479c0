"""Utility helpers for parsing monetary input and converting to cents."""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any, Optional

CENTS_PER_UNIT = Decimal(100)
# Largest value a 64-bit INTEGER column holds
MAX_MINOR_UNITS = 2**63 - 1
MAX_AMOUNT = Decimal(MAX_MINOR_UNITS) / CENTS_PER_UNIT


def coerce_decimal(
    raw_value: Any,
    *,
    default: Optional[Decimal] = None,
) -> Optional[Decimal]:
    """Best-effort conversion of user-provided values to :class:`Decimal`.

    ``default`` is returned if the value is empty or cannot be parsed.
    Non-finite values such as ``NaN`` and ``Infinity`` are rejected.
    """

    if raw_value is None or isinstance(raw_value, bool):
        return default

    if isinstance(raw_value, Decimal):
        value = raw_value
    elif isinstance(raw_value, (int, float)):
        try:
            value = Decimal(str(raw_value))
        except InvalidOperation:
            return default
    else:
        text = str(raw_value).strip()
        if not text:
            return default
        try:
            value = Decimal(text)
        except InvalidOperation:
            return default

    if not value.is_finite():
        return default
    return value


def to_minor_units(amount: Decimal) -> int:
    """Return ``amount`` in cents, rounding half away from zero."""

    cents = (amount * CENTS_PER_UNIT).quantize(Decimal(1), rounding=ROUND_HALF_UP)
    return int(cents)


def from_minor_units(cents: int) -> Decimal:
    return (Decimal(cents) / CENTS_PER_UNIT).quantize(Decimal("0.01"))


def format_currency(cents: Optional[int]) -> str:
    """Jinja filter rendering stored cents as a dollar amount."""

    if cents is None:
        return ""
    return f"${from_minor_units(cents):,.2f}"
