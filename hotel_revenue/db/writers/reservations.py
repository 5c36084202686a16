from typing import Any, Mapping

import structlog
from sqlalchemy import delete, insert, update
from sqlalchemy.engine import Engine

from hotel_revenue.config import DEBUG
from hotel_revenue.db.writers._integrity import (
    clean_patch,
    ensure_key_available,
    ensure_no_dependents,
    ensure_reference,
    require_row,
    tracked_write,
)
from hotel_revenue.models.payments import Payment
from hotel_revenue.models.reservations import Reservation
from hotel_revenue.models.rooms import Room
from hotel_revenue.utils.values import to_date, to_money
from hotel_revenue.validation import validate_reservation

logger = structlog.get_logger(__name__)

COLUMNS = (
    "reservation_id",
    "guest_name",
    "check_in_date",
    "check_out_date",
    "room_number",
    "total_cost",
)


def _normalize(data: Mapping[str, Any]) -> dict[str, Any]:
    row = dict(data)
    for column in ("check_in_date", "check_out_date"):
        if column in row:
            row[column] = to_date(row[column])
    if "total_cost" in row:
        row["total_cost"] = to_money(row["total_cost"])
    return row


def insert_reservation(engine: Engine, data: Mapping[str, Any]) -> dict[str, Any]:
    """
    Insert a new reservation.

    Checks run in trigger order: the date range first, then the key, then
    the room reference.

    Args:
        engine: SQLAlchemy Engine
        data: Reservation row; dates may be date objects or ISO strings

    Returns:
        dict[str, Any]: The row as stored

    Raises:
        InvalidDateRange: if check_out_date <= check_in_date
        DuplicateKey: if reservation_id is already taken
        DanglingReference: if room_number does not match an existing room
    """
    row = _normalize({column: data.get(column) for column in COLUMNS})
    if row["reservation_id"] is None:
        raise ValueError("reservation_id is required")

    if DEBUG:
        logger.debug("reservation_to_insert", row=row)

    with tracked_write("reservations", "insert", reservation_id=row["reservation_id"]):
        with engine.begin() as conn:
            validate_reservation(row)
            ensure_key_available(conn, Reservation, row["reservation_id"])
            ensure_reference(conn, Room, row["room_number"], "reservations", "room_number")
            conn.execute(insert(Reservation).values(row))

    logger.info(
        "reservation_inserted",
        reservation_id=row["reservation_id"],
        room_number=row["room_number"],
    )
    return row


def update_reservation(
    engine: Engine, reservation_id: int, patch: Mapping[str, Any]
) -> dict[str, Any]:
    """
    Apply a partial update to a reservation, re-validating the merged row.

    Raises:
        RecordNotFound: if the reservation does not exist
        InvalidDateRange: if the merged dates are out of order
        DanglingReference: if a new room_number does not exist
    """
    changes = _normalize(clean_patch(Reservation, patch))

    with tracked_write("reservations", "update", reservation_id=reservation_id):
        with engine.begin() as conn:
            current = require_row(conn, Reservation, reservation_id)
            merged = {**current, **changes}
            validate_reservation(merged)
            if "room_number" in changes:
                ensure_reference(
                    conn, Room, changes["room_number"], "reservations", "room_number"
                )
            if changes:
                conn.execute(
                    update(Reservation)
                    .where(Reservation.reservation_id == reservation_id)
                    .values(**changes)
                )

    logger.info("reservation_updated", reservation_id=reservation_id, fields=sorted(changes))
    return merged


def delete_reservation(engine: Engine, reservation_id: int) -> None:
    """
    Delete a reservation that no payment references.

    Raises:
        RecordNotFound: if the reservation does not exist
        DependentRowsExist: if any payment references the reservation
    """
    with tracked_write("reservations", "delete", reservation_id=reservation_id):
        with engine.begin() as conn:
            require_row(conn, Reservation, reservation_id)
            ensure_no_dependents(
                conn, Reservation, reservation_id, Payment, Payment.reservation_id
            )
            conn.execute(
                delete(Reservation).where(Reservation.reservation_id == reservation_id)
            )

    logger.info("reservation_deleted", reservation_id=reservation_id)
