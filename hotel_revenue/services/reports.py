"""Read-only reports over rooms, reservations and payments."""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal
from typing import Any

from sqlalchemy import extract, func, select
from sqlalchemy.engine import Connection

from hotel_revenue.metrics import view_duration
from hotel_revenue.models.payments import Payment
from hotel_revenue.models.reservations import Reservation
from hotel_revenue.models.rooms import Room
from hotel_revenue.utils.values import CENTS, to_money

HUNDRED = Decimal(100)


def occupancy_by_room_type(conn: Connection) -> list[dict[str, Any]]:
    """
    Share of all reservations held by each room type.

    occupancy_pct is reservation_count / total reservations * 100, rounded to
    cents. Reservations without a matching room count toward the total but
    belong to no type. With no reservations at all the report is empty.

    Returns:
        list[dict[str, Any]]: {"room_type", "reservation_count", "occupancy_pct"}
        per room type, ordered by room_type
    """
    total_reservations = (
        select(func.count()).select_from(Reservation).correlate(None).scalar_subquery()
    )
    reservation_count = func.count(Reservation.reservation_id)
    stmt = (
        select(Room.room_type, reservation_count, total_reservations.label("total"))
        .select_from(Reservation)
        .join(Room, Reservation.room_number == Room.room_number)
        .group_by(Room.room_type)
        .order_by(Room.room_type)
    )

    with view_duration.labels(view="occupancy_by_room_type").time():
        rows = conn.execute(stmt).all()

    return [
        {
            "room_type": room_type,
            "reservation_count": int(count),
            "occupancy_pct": (Decimal(int(count)) / Decimal(int(total)) * HUNDRED).quantize(
                CENTS, rounding=ROUND_HALF_UP
            ),
        }
        for room_type, count, total in rows
    ]


def payment_history(conn: Connection, guest_name: str) -> list[dict[str, Any]]:
    """
    Every payment made for a guest's reservations.

    Inner join: reservations without a payment produce no rows.

    Args:
        conn: Active database connection
        guest_name: Exact guest name, e.g. "John Doe"

    Returns:
        list[dict[str, Any]]: Reservation columns plus payment_id, payment_date,
        payment_amount and payment_method, ordered by payment date
    """
    stmt = (
        select(
            Reservation.__table__,
            Payment.payment_id,
            Payment.payment_date,
            Payment.payment_amount,
            Payment.payment_method,
        )
        .join(Payment, Reservation.reservation_id == Payment.reservation_id)
        .where(Reservation.guest_name == guest_name)
        .order_by(Payment.payment_date, Payment.payment_id)
    )

    with view_duration.labels(view="payment_history").time():
        rows = conn.execute(stmt).mappings().all()

    history = []
    for row in rows:
        entry = dict(row)
        entry["total_cost"] = to_money(entry["total_cost"])
        entry["payment_amount"] = to_money(entry["payment_amount"])
        history.append(entry)
    return history


def revenue_by_month_and_type(conn: Connection) -> list[dict[str, Any]]:
    """
    Reservation revenue grouped by check-in month number and room type.

    Months are 1-12 and are not split by year.

    Returns:
        list[dict[str, Any]]: {"month", "room_type", "revenue"}, ordered by
        month then room_type
    """
    month = extract("month", Reservation.check_in_date)
    stmt = (
        select(month.label("month"), Room.room_type, func.sum(Reservation.total_cost))
        .select_from(Reservation)
        .join(Room, Reservation.room_number == Room.room_number)
        .where(Reservation.check_in_date.is_not(None))
        .group_by(month, Room.room_type)
        .order_by(month, Room.room_type)
    )

    with view_duration.labels(view="revenue_by_month_and_type").time():
        rows = conn.execute(stmt).all()

    return [
        {
            "month": int(row[0]),
            "room_type": row[1],
            "revenue": to_money(row[2]) or Decimal("0.00"),
        }
        for row in rows
    ]
