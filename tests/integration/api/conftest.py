"""
API test client bound to the per-test database.
"""

from __future__ import annotations

from typing import Generator

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.engine import Engine

from hotel_revenue.dependencies import get_db_engine
from hotel_revenue.main import app


@pytest.fixture
def client(engine: Engine) -> Generator[TestClient, None, None]:
    """TestClient whose routes use the test engine instead of the application engine."""
    app.dependency_overrides[get_db_engine] = lambda: engine
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def canonical_client(canonical_engine: Engine, client: TestClient) -> TestClient:
    return client
