"""
SQLAlchemy engine factory and the application-wide engine singleton.

Every data-layer function takes an engine or connection argument; the
singleton here is only what the HTTP app and scripts hand in by default.
PostgreSQL URLs get production connection pooling. SQLite URLs get foreign key
enforcement switched on; an in-memory SQLite database also gets a static pool
so it survives across connections. File-backed SQLite keeps the default pool,
one DBAPI connection per checkout, so an open transaction stays private to
its connection.
"""

from __future__ import annotations

from typing import Any

import structlog
from sqlalchemy import create_engine, event, text
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.pool import StaticPool

from hotel_revenue.config import DATABASE_URL
from hotel_revenue.models.base import Base

# Imported for their side effect of registering tables on Base.metadata
from hotel_revenue.models.payments import Payment  # noqa: F401
from hotel_revenue.models.reservations import Reservation  # noqa: F401
from hotel_revenue.models.rooms import Room  # noqa: F401

logger = structlog.get_logger(__name__)


def _enable_sqlite_foreign_keys(dbapi_connection: Any, connection_record: Any) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def _is_in_memory_sqlite(url: str) -> bool:
    database = make_url(url).database
    return database in (None, "", ":memory:")


def build_engine(url: str, echo: bool = False) -> Engine:
    """
    Create an engine for the given database URL.

    Args:
        url: SQLAlchemy database URL, e.g. "postgresql+psycopg2://..." or "sqlite://"
        echo: Log every SQL statement (development only)

    Returns:
        Engine: Configured SQLAlchemy engine

    Example:
        >>> test_engine = build_engine("sqlite://")
        >>> create_schema(test_engine)
    """
    if url.startswith("sqlite"):
        if _is_in_memory_sqlite(url):
            sqlite_engine = create_engine(
                url,
                connect_args={"check_same_thread": False},
                poolclass=StaticPool,
                echo=echo,
            )
        else:
            sqlite_engine = create_engine(
                url,
                connect_args={"check_same_thread": False},
                echo=echo,
            )
        event.listen(sqlite_engine, "connect", _enable_sqlite_foreign_keys)
        return sqlite_engine

    return create_engine(
        url,
        # Connection pool settings
        pool_size=10,  # Number of connections to maintain in the pool
        max_overflow=20,  # Additional connections when pool is exhausted
        pool_pre_ping=True,  # Verify connections before using (detect stale connections)
        pool_recycle=3600,  # Recycle connections after 1 hour
        echo=echo,
    )


if not DATABASE_URL:
    raise RuntimeError("DATABASE_URL is not set.")

engine: Engine = build_engine(DATABASE_URL)


def create_schema(target: Engine) -> None:
    """
    Provision the rooms, reservations and payments tables if they do not exist.

    Args:
        target: Engine to create the tables on
    """
    Base.metadata.create_all(target)
    logger.info("schema_provisioned", tables=[t.name for t in Base.metadata.sorted_tables])


def check_engine_health(target: Engine | None = None) -> bool:
    """
    Check if the database is reachable.

    Used by the /ready endpoint before allowing traffic to the service.

    Args:
        target: Engine to probe (defaults to the application engine)

    Returns:
        bool: True if a trivial query succeeds, False otherwise
    """
    try:
        with (target or engine).connect() as conn:
            conn.execute(text("SELECT 1"))
        return True
    except Exception:
        logger.exception("engine_health_check_failed")
        return False
