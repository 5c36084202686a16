"""
Generic row lookups shared by the per-table readers.

Rows come back as plain dicts keyed by column name so callers never hold
on to ORM or Row objects after the connection is closed.
"""

from __future__ import annotations

from typing import Any, Optional

from sqlalchemy import ColumnElement, func, select
from sqlalchemy.engine import Connection

from hotel_revenue.models.base import Base


def primary_key_column(model: type[Base]) -> Any:
    """Return the single primary-key column of a model."""
    (column,) = model.__table__.primary_key.columns
    return column


def fetch_one(conn: Connection, model: type[Base], key: Any) -> Optional[dict[str, Any]]:
    """
    Fetch one row by primary key.

    Returns:
        Optional[dict[str, Any]]: Column values, or None if the key is absent
    """
    table = model.__table__
    row = (
        conn.execute(select(table).where(primary_key_column(model) == key)).mappings().fetchone()
    )
    return dict(row) if row else None


def fetch_all(
    conn: Connection, model: type[Base], *criteria: ColumnElement[bool]
) -> list[dict[str, Any]]:
    """
    Fetch every row matching all criteria, ordered by primary key.

    Args:
        conn: Active database connection
        model: ORM model whose table to read
        *criteria: SQLAlchemy boolean expressions, e.g. Room.room_type == "Single"
    """
    table = model.__table__
    stmt = select(table).where(*criteria).order_by(primary_key_column(model))
    return [dict(row) for row in conn.execute(stmt).mappings()]


def key_exists(conn: Connection, model: type[Base], key: Any) -> bool:
    column = primary_key_column(model)
    result = conn.execute(select(column).where(column == key))
    return result.fetchone() is not None


def count_where(conn: Connection, model: type[Base], *criteria: ColumnElement[bool]) -> int:
    stmt = select(func.count()).select_from(model.__table__).where(*criteria)
    return int(conn.execute(stmt).scalar_one())
