from typing import Any, Mapping

import structlog
from sqlalchemy import delete, insert, update
from sqlalchemy.engine import Engine

from hotel_revenue.db.writers._integrity import (
    clean_patch,
    ensure_key_available,
    ensure_reference,
    require_row,
    tracked_write,
)
from hotel_revenue.models.payments import Payment
from hotel_revenue.models.reservations import Reservation
from hotel_revenue.utils.values import to_date, to_money

logger = structlog.get_logger(__name__)

COLUMNS = ("payment_id", "reservation_id", "payment_date", "payment_amount", "payment_method")


def _normalize(data: Mapping[str, Any]) -> dict[str, Any]:
    row = dict(data)
    if "payment_date" in row:
        row["payment_date"] = to_date(row["payment_date"])
    if "payment_amount" in row:
        row["payment_amount"] = to_money(row["payment_amount"])
    return row


def insert_payment(engine: Engine, data: Mapping[str, Any]) -> dict[str, Any]:
    """
    Insert a payment against an existing reservation.

    Args:
        engine: SQLAlchemy Engine
        data: Payment row

    Returns:
        dict[str, Any]: The row as stored

    Raises:
        DuplicateKey: if payment_id is already taken
        DanglingReference: if reservation_id does not match an existing reservation
    """
    row = _normalize({column: data.get(column) for column in COLUMNS})
    if row["payment_id"] is None:
        raise ValueError("payment_id is required")

    with tracked_write("payments", "insert", payment_id=row["payment_id"]):
        with engine.begin() as conn:
            ensure_key_available(conn, Payment, row["payment_id"])
            ensure_reference(
                conn, Reservation, row["reservation_id"], "payments", "reservation_id"
            )
            conn.execute(insert(Payment).values(row))

    logger.info(
        "payment_inserted",
        payment_id=row["payment_id"],
        reservation_id=row["reservation_id"],
    )
    return row


def update_payment(engine: Engine, payment_id: int, patch: Mapping[str, Any]) -> dict[str, Any]:
    """
    Apply a partial update to a payment.

    Raises:
        RecordNotFound: if the payment does not exist
        DanglingReference: if a new reservation_id does not exist
    """
    changes = _normalize(clean_patch(Payment, patch))

    with tracked_write("payments", "update", payment_id=payment_id):
        with engine.begin() as conn:
            current = require_row(conn, Payment, payment_id)
            if "reservation_id" in changes:
                ensure_reference(
                    conn, Reservation, changes["reservation_id"], "payments", "reservation_id"
                )
            if changes:
                conn.execute(
                    update(Payment).where(Payment.payment_id == payment_id).values(**changes)
                )

    logger.info("payment_updated", payment_id=payment_id, fields=sorted(changes))
    return {**current, **changes}


def delete_payment(engine: Engine, payment_id: int) -> None:
    """
    Delete a payment. Payments have no dependents.

    Raises:
        RecordNotFound: if the payment does not exist
    """
    with tracked_write("payments", "delete", payment_id=payment_id):
        with engine.begin() as conn:
            require_row(conn, Payment, payment_id)
            conn.execute(delete(Payment).where(Payment.payment_id == payment_id))

    logger.info("payment_deleted", payment_id=payment_id)
