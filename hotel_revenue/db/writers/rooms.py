from decimal import Decimal
from typing import Any, Mapping

import structlog
from sqlalchemy import delete, insert, update
from sqlalchemy.engine import Engine

from hotel_revenue.db.writers._integrity import (
    clean_patch,
    ensure_key_available,
    ensure_no_dependents,
    require_row,
    tracked_write,
)
from hotel_revenue.models.reservations import Reservation
from hotel_revenue.models.rooms import Room
from hotel_revenue.utils.values import to_money
from hotel_revenue.validation import validate_room

logger = structlog.get_logger(__name__)


def _normalize(data: Mapping[str, Any]) -> dict[str, Any]:
    row = dict(data)
    if "room_rate" in row:
        row["room_rate"] = to_money(row["room_rate"])
    return row


def insert_room(engine: Engine, data: Mapping[str, Any]) -> dict[str, Any]:
    """
    Insert a new room.

    Args:
        engine: SQLAlchemy Engine
        data: Room row with room_number, room_type and room_rate

    Returns:
        dict[str, Any]: The row as stored

    Raises:
        NegativeRate: if room_rate < 0
        DuplicateKey: if room_number is already taken
    """
    row = _normalize(
        {
            "room_number": data.get("room_number"),
            "room_type": data.get("room_type"),
            "room_rate": data.get("room_rate"),
        }
    )
    if row["room_number"] is None:
        raise ValueError("room_number is required")

    with tracked_write("rooms", "insert", room_number=row["room_number"]):
        with engine.begin() as conn:
            validate_room(row)
            ensure_key_available(conn, Room, row["room_number"])
            conn.execute(insert(Room).values(row))

    logger.info("room_inserted", room_number=row["room_number"], room_type=row["room_type"])
    return row


def update_room(engine: Engine, room_number: int, patch: Mapping[str, Any]) -> dict[str, Any]:
    """
    Apply a partial update to a room, re-validating the merged row.

    Args:
        engine: SQLAlchemy Engine
        room_number: Room to update
        patch: Columns to change (room_type and/or room_rate)

    Returns:
        dict[str, Any]: The room after the update

    Raises:
        RecordNotFound: if the room does not exist
        NegativeRate: if the new rate is negative; the stored row is left unchanged
    """
    changes = _normalize(clean_patch(Room, patch))

    with tracked_write("rooms", "update", room_number=room_number):
        with engine.begin() as conn:
            current = require_row(conn, Room, room_number)
            merged = {**current, **changes}
            validate_room(merged)
            if changes:
                conn.execute(
                    update(Room).where(Room.room_number == room_number).values(**changes)
                )

    logger.info("room_updated", room_number=room_number, fields=sorted(changes))
    return merged


def update_room_rate(engine: Engine, room_number: int, new_rate: Decimal) -> dict[str, Any]:
    """
    Set the nightly rate of a room.

    Args:
        engine: SQLAlchemy Engine
        room_number: Room to update
        new_rate: New rate; must not be negative

    Returns:
        dict[str, Any]: The room after the update
    """
    return update_room(engine, room_number, {"room_rate": new_rate})


def delete_room(engine: Engine, room_number: int) -> None:
    """
    Delete a room that no reservation references.

    Raises:
        RecordNotFound: if the room does not exist
        DependentRowsExist: if any reservation references the room
    """
    with tracked_write("rooms", "delete", room_number=room_number):
        with engine.begin() as conn:
            require_row(conn, Room, room_number)
            ensure_no_dependents(conn, Room, room_number, Reservation, Reservation.room_number)
            conn.execute(delete(Room).where(Room.room_number == room_number))

    logger.info("room_deleted", room_number=room_number)
