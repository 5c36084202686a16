from typing import Any, Optional

from sqlalchemy import ColumnElement
from sqlalchemy.engine import Connection

from hotel_revenue.db.readers._rows import fetch_all, fetch_one, key_exists
from hotel_revenue.models.rooms import Room


def room_exists(conn: Connection, room_number: int) -> bool:
    """
    Check if a room already exists in the database.

    Args:
        conn (Connection): An active SQLAlchemy database connection.
        room_number (int): Room number to check.

    Returns:
        bool: True if the room exists, False otherwise.
    """
    return key_exists(conn, Room, room_number)


def get_room(conn: Connection, room_number: int) -> Optional[dict[str, Any]]:
    """
    Fetch a single room.

    Args:
        conn (Connection): An active SQLAlchemy database connection.
        room_number (int): Room number.

    Returns:
        Optional[dict[str, Any]]: Room columns or None if not found
    """
    return fetch_one(conn, Room, room_number)


def query_rooms(conn: Connection, *criteria: ColumnElement[bool]) -> list[dict[str, Any]]:
    """
    List rooms matching every given predicate, ordered by room number.

    Example:
        >>> query_rooms(conn, Room.room_type == "Double", Room.room_rate < 200)
    """
    return fetch_all(conn, Room, *criteria)
