"""Coercion helpers for money and date column values."""

from __future__ import annotations

from datetime import date, datetime
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Optional

CENTS = Decimal("0.01")


def to_money(value: Any) -> Optional[Decimal]:
    """
    Normalize a numeric value to a two-place Decimal, matching DECIMAL(10,2).

    Floats are converted through their string form so that 0.1 becomes
    Decimal("0.10") rather than the binary expansion.

    Example:
        >>> to_money(120)
        Decimal('120.00')
        >>> to_money(None) is None
        True
    """
    if value is None:
        return None
    if not isinstance(value, Decimal):
        value = Decimal(str(value))
    return value.quantize(CENTS, rounding=ROUND_HALF_UP)


def to_date(value: Any) -> Optional[date]:
    """
    Accept a date, a datetime or an ISO "YYYY-MM-DD" string.

    Raises:
        ValueError: if a string is not an ISO date
        TypeError: for any other type
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        return date.fromisoformat(value)
    raise TypeError(f"Expected a date or ISO date string, got {type(value).__name__}")


def month_label(year: Any, month: Any) -> str:
    """Format a (year, month) pair as "YYYY-MM"."""
    return f"{int(year):04d}-{int(month):02d}"
