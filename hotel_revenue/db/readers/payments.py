from typing import Any, Optional

from sqlalchemy import ColumnElement
from sqlalchemy.engine import Connection

from hotel_revenue.db.readers._rows import fetch_all, fetch_one, key_exists
from hotel_revenue.models.payments import Payment


def payment_exists(conn: Connection, payment_id: int) -> bool:
    return key_exists(conn, Payment, payment_id)


def get_payment(conn: Connection, payment_id: int) -> Optional[dict[str, Any]]:
    """
    Fetch a single payment.

    Args:
        conn (Connection): An active SQLAlchemy database connection.
        payment_id (int): Payment ID.

    Returns:
        Optional[dict[str, Any]]: Payment columns or None if not found
    """
    return fetch_one(conn, Payment, payment_id)


def query_payments(conn: Connection, *criteria: ColumnElement[bool]) -> list[dict[str, Any]]:
    """List payments matching every given predicate, ordered by payment_id."""
    return fetch_all(conn, Payment, *criteria)

