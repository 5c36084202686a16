"""
Shared fixtures: a fresh in-memory database per test.
"""

from __future__ import annotations

import os

# Must be set before hotel_revenue.config is imported
os.environ.setdefault("DATABASE_URL", "sqlite://")

from typing import Generator  # noqa: E402

import pytest  # noqa: E402
from sqlalchemy.engine import Engine  # noqa: E402

from hotel_revenue.db.engine import build_engine, create_schema  # noqa: E402
from hotel_revenue.services.sample_data import load_sample_data  # noqa: E402


@pytest.fixture
def engine() -> Generator[Engine, None, None]:
    """Empty schema on a private in-memory SQLite database."""
    test_engine = build_engine("sqlite://")
    create_schema(test_engine)
    yield test_engine
    test_engine.dispose()


@pytest.fixture
def canonical_engine(engine: Engine) -> Engine:
    """Database loaded with the clean five-month sample dataset."""
    load_sample_data(engine, dataset="canonical")
    return engine


@pytest.fixture
def script_engine(engine: Engine) -> Engine:
    """Database loaded with the historical demo rows (three of which are rejected)."""
    load_sample_data(engine, dataset="script")
    return engine
