"""
Key, reference and dependency checks shared by the table writers.

Each check runs on the writer's open transaction, so a failed check rolls
the whole write back and nothing partial is ever committed. The checks are
explicit (rather than relying on IntegrityError from the driver) so every
backend reports the same typed error.
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import Any, Iterator, Mapping

import structlog
from sqlalchemy.engine import Connection

from hotel_revenue.db.readers._rows import count_where, fetch_one, key_exists
from hotel_revenue.errors import (
    DanglingReference,
    DependentRowsExist,
    DuplicateKey,
    HotelRevenueError,
    RecordNotFound,
)
from hotel_revenue.metrics import db_operations, write_rejections
from hotel_revenue.models.base import Base

logger = structlog.get_logger(__name__)


@contextmanager
def tracked_write(table: str, operation: str, **context: Any) -> Iterator[None]:
    """
    Count and log the outcome of one write.

    Domain errors are logged, counted under their class name and re-raised
    unchanged; a clean exit counts as a committed operation.

    Example:
        >>> with tracked_write("rooms", "insert", room_number=101):
        ...     with engine.begin() as conn:
        ...         conn.execute(stmt)
    """
    try:
        yield
    except HotelRevenueError as e:
        reason = type(e).__name__
        write_rejections.labels(table=table, reason=reason).inc()
        logger.warning(
            "write_rejected",
            table=table,
            operation=operation,
            reason=reason,
            error=str(e),
            **context,
        )
        raise
    db_operations.labels(operation=operation, table=table).inc()


def ensure_key_available(conn: Connection, model: type[Base], key: Any) -> None:
    """Raise DuplicateKey if a row with this primary key already exists."""
    if key_exists(conn, model, key):
        raise DuplicateKey(model.__tablename__, key)


def ensure_reference(
    conn: Connection, parent: type[Base], key: Any, child_table: str, child_column: str
) -> None:
    """
    Raise DanglingReference if a non-null foreign key has no parent row.

    Args:
        conn: Open transaction
        parent: Model the foreign key points at
        key: Foreign key value from the candidate row
        child_table: Table being written (for the error message)
        child_column: Foreign key column being written
    """
    if key is None:
        return
    if not key_exists(conn, parent, key):
        raise DanglingReference(child_table, child_column, key)


def ensure_no_dependents(
    conn: Connection, model: type[Base], key: Any, dependent: type[Base], column: Any
) -> None:
    """Raise DependentRowsExist if any dependent row still references this key."""
    count = count_where(conn, dependent, column == key)
    if count:
        raise DependentRowsExist(model.__tablename__, key, dependent.__tablename__, count)


def require_row(conn: Connection, model: type[Base], key: Any) -> dict[str, Any]:
    """Fetch a row by primary key or raise RecordNotFound."""
    row = fetch_one(conn, model, key)
    if row is None:
        raise RecordNotFound(model.__tablename__, key)
    return row


def clean_patch(model: type[Base], patch: Mapping[str, Any]) -> dict[str, Any]:
    """
    Restrict an update patch to the model's non-key columns.

    Raises:
        ValueError: if the patch names an unknown column or the primary key
    """
    table = model.__table__
    key_columns = {c.name for c in table.primary_key.columns}
    allowed = {c.name for c in table.columns} - key_columns
    unknown = set(patch) - allowed
    if unknown:
        raise ValueError(f"Cannot update {sorted(unknown)} on {model.__tablename__}")
    return dict(patch)
