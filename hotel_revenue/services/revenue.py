"""
Revenue views and routines computed from the current reservations.

Nothing here is materialized: each call aggregates the rows visible on the
given connection, so a committed write shows up in the very next call.

The date-range routines keep the historical filter
``check_in_date >= start_date AND check_out_date <= end_date``. The two
bounds apply to different columns on purpose; existing figures were
produced with this filter and must be reproducible.
"""

from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import Any, Optional

import structlog
from sqlalchemy import extract, func, select
from sqlalchemy.engine import Connection

from hotel_revenue.config import EMPTY_REVENUE_AS_NULL
from hotel_revenue.errors import NoMatchingRows
from hotel_revenue.metrics import view_duration
from hotel_revenue.models.reservations import Reservation
from hotel_revenue.models.rooms import Room
from hotel_revenue.utils.values import month_label, to_date, to_money

logger = structlog.get_logger(__name__)

ZERO = Decimal("0.00")


def _empty_revenue(empty_as_null: Optional[bool]) -> Optional[Decimal]:
    if empty_as_null is None:
        empty_as_null = EMPTY_REVENUE_AS_NULL
    return None if empty_as_null else ZERO


def monthly_revenue(conn: Connection) -> list[dict[str, Any]]:
    """
    Total reservation revenue per calendar month of check-in.

    Returns:
        list[dict[str, Any]]: One {"month": "YYYY-MM", "revenue": Decimal} per
        month present in the data, in ascending month order

    Example:
        >>> monthly_revenue(conn)
        [{'month': '2023-01', 'revenue': Decimal('500.00')}, ...]
    """
    year = extract("year", Reservation.check_in_date)
    month = extract("month", Reservation.check_in_date)
    stmt = (
        select(year.label("year"), month.label("month"), func.sum(Reservation.total_cost))
        .where(Reservation.check_in_date.is_not(None))
        .group_by(year, month)
        .order_by(year, month)
    )

    with view_duration.labels(view="monthly_revenue").time():
        rows = conn.execute(stmt).all()

    return [
        {"month": month_label(row[0], row[1]), "revenue": to_money(row[2]) or ZERO}
        for row in rows
    ]


def revenue_for_room_type(
    conn: Connection,
    room_type: str,
    start_date: date | str,
    end_date: date | str,
    empty_as_null: Optional[bool] = None,
) -> Optional[Decimal]:
    """
    Revenue from reservations of one room type within a date range.

    Args:
        conn: Active database connection
        room_type: Room type to filter on, e.g. "Double"
        start_date: Lower bound on check_in_date (inclusive)
        end_date: Upper bound on check_out_date (inclusive)
        empty_as_null: Return None instead of 0.00 when nothing matches
            (defaults to the EMPTY_REVENUE_AS_NULL setting)

    Returns:
        Optional[Decimal]: Sum of total_cost
    """
    stmt = (
        select(func.sum(Reservation.total_cost))
        .select_from(Reservation)
        .join(Room, Reservation.room_number == Room.room_number)
        .where(
            Room.room_type == room_type,
            Reservation.check_in_date >= to_date(start_date),
            Reservation.check_out_date <= to_date(end_date),
        )
    )

    with view_duration.labels(view="revenue_for_room_type").time():
        revenue = conn.execute(stmt).scalar()

    if revenue is None:
        return _empty_revenue(empty_as_null)
    return to_money(revenue)


def total_revenue(
    conn: Connection,
    start_date: date | str,
    end_date: date | str,
    empty_as_null: Optional[bool] = None,
) -> Optional[Decimal]:
    """
    Revenue from all reservations within a date range.

    Same bounds as revenue_for_room_type, without the room-type restriction.
    """
    stmt = select(func.sum(Reservation.total_cost)).where(
        Reservation.check_in_date >= to_date(start_date),
        Reservation.check_out_date <= to_date(end_date),
    )

    with view_duration.labels(view="total_revenue").time():
        revenue = conn.execute(stmt).scalar()

    if revenue is None:
        return _empty_revenue(empty_as_null)
    return to_money(revenue)


def revenue_for_month(
    conn: Connection, month: int, empty_as_null: Optional[bool] = None
) -> Optional[Decimal]:
    """
    Revenue from reservations checking in during a month number, across all years.

    Args:
        conn: Active database connection
        month: Month number 1-12
        empty_as_null: See revenue_for_room_type

    Raises:
        ValueError: if month is outside 1-12
    """
    if not 1 <= month <= 12:
        raise ValueError(f"month must be between 1 and 12, got {month}")

    stmt = select(func.sum(Reservation.total_cost)).where(
        extract("month", Reservation.check_in_date) == month
    )

    with view_duration.labels(view="revenue_for_month").time():
        revenue = conn.execute(stmt).scalar()

    if revenue is None:
        return _empty_revenue(empty_as_null)
    return to_money(revenue)


def average_room_rate(conn: Connection, room_type: str) -> Decimal:
    """
    Mean nightly rate over rooms of one type, rounded to cents.

    Raises:
        NoMatchingRows: if no room of that type has a rate
    """
    stmt = select(func.avg(Room.room_rate)).where(Room.room_type == room_type)

    with view_duration.labels(view="average_room_rate").time():
        average = conn.execute(stmt).scalar()

    if average is None:
        logger.info("average_room_rate_empty", room_type=room_type)
        raise NoMatchingRows(f"no rooms of type {room_type!r}")
    return to_money(average)  # type: ignore[return-value]
