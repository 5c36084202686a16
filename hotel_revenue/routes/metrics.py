"""
Prometheus metrics endpoint.

Example:
    GET /metrics

    Response:
        # HELP hotel_revenue_db_operations_total Total committed write operations
        # TYPE hotel_revenue_db_operations_total counter
        hotel_revenue_db_operations_total{operation="insert",table="rooms"} 5.0
        ...
"""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter
from fastapi.responses import Response
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest

router = APIRouter()


@router.get("/metrics", response_class=Response)
async def metrics() -> Any:
    """Return all registered metrics in Prometheus text exposition format."""
    return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)
