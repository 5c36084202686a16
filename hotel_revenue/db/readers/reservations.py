from typing import Any, Optional

from sqlalchemy import ColumnElement
from sqlalchemy.engine import Connection

from hotel_revenue.db.readers._rows import fetch_all, fetch_one, key_exists
from hotel_revenue.models.reservations import Reservation


def reservation_exists(conn: Connection, reservation_id: int) -> bool:
    """
    Check if a reservation already exists in the database.

    Args:
        conn (Connection): An active SQLAlchemy database connection.
        reservation_id (int): Reservation ID to check.

    Returns:
        bool: True if the reservation exists, False otherwise.
    """
    return key_exists(conn, Reservation, reservation_id)


def get_reservation(conn: Connection, reservation_id: int) -> Optional[dict[str, Any]]:
    """
    Fetch a single reservation.

    Args:
        conn (Connection): An active SQLAlchemy database connection.
        reservation_id (int): Reservation ID.

    Returns:
        Optional[dict[str, Any]]: Reservation columns or None if not found
    """
    return fetch_one(conn, Reservation, reservation_id)


def query_reservations(
    conn: Connection, *criteria: ColumnElement[bool]
) -> list[dict[str, Any]]:
    """List reservations matching every given predicate, ordered by reservation_id."""
    return fetch_all(conn, Reservation, *criteria)

