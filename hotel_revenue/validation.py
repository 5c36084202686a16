"""
Write-time invariants for rooms and reservations.

These checks stand in for the BEFORE INSERT triggers of a trigger-based
schema. Writers call them inside their transaction, before any row is sent
to the database, so an invalid row is never visible to a reader.

A missing (None) value passes, the same way a NULL comparison never fires
a trigger condition.
"""

from __future__ import annotations

from typing import Any, Mapping

from hotel_revenue.errors import InvalidDateRange, NegativeRate
from hotel_revenue.utils.values import to_date, to_money


def validate_room(candidate: Mapping[str, Any]) -> None:
    """
    Reject rooms with a negative rate.

    Args:
        candidate: Room row (room_number, room_type, room_rate)

    Raises:
        NegativeRate: if room_rate < 0. A rate of exactly 0 is valid.
    """
    rate = to_money(candidate.get("room_rate"))
    if rate is not None and rate < 0:
        raise NegativeRate(candidate.get("room_number"), rate)


def validate_reservation(candidate: Mapping[str, Any]) -> None:
    """
    Reject reservations whose check-out is not strictly after check-in.

    Args:
        candidate: Reservation row

    Raises:
        InvalidDateRange: if check_out_date <= check_in_date
    """
    check_in = to_date(candidate.get("check_in_date"))
    check_out = to_date(candidate.get("check_out_date"))
    if check_in is None or check_out is None:
        return
    if check_out <= check_in:
        raise InvalidDateRange(candidate.get("reservation_id"), check_in, check_out)
