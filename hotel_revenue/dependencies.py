"""
FastAPI dependency injection providers.

Route handlers receive the engine through Depends(get_db_engine) so tests
can swap in a throwaway database with app.dependency_overrides.
"""

from __future__ import annotations

from typing import Generator

from sqlalchemy.engine import Engine

from hotel_revenue.db.engine import engine


def get_db_engine() -> Generator[Engine, None, None]:
    """
    Provide database engine for dependency injection.

    Yields:
        Engine: SQLAlchemy database engine

    Testing Example:
        >>> test_engine = build_engine("sqlite://")
        >>> create_schema(test_engine)
        >>> app.dependency_overrides[get_db_engine] = lambda: test_engine
    """
    yield engine
