"""
Revenue and occupancy report endpoints.

All endpoints are read-only and computed from the current table contents.
"""

from __future__ import annotations

from datetime import date
from typing import Any, Optional

from fastapi import APIRouter, Depends, Path, Query
from sqlalchemy.engine import Engine

from hotel_revenue.dependencies import get_db_engine
from hotel_revenue.errors import HotelRevenueError
from hotel_revenue.routes._errors import http_error_for
from hotel_revenue.services.reports import (
    occupancy_by_room_type,
    payment_history,
    revenue_by_month_and_type,
)
from hotel_revenue.services.revenue import (
    average_room_rate,
    monthly_revenue,
    revenue_for_month,
    revenue_for_room_type,
    total_revenue,
)

router = APIRouter()


@router.get("/monthly-revenue")
def get_monthly_revenue(engine: Engine = Depends(get_db_engine)) -> list[dict[str, Any]]:
    """
    Revenue per check-in month.

    Example:
        >>> GET /reports/monthly-revenue
        [{"month": "2023-01", "revenue": "500.00"}, ...]
    """
    with engine.connect() as conn:
        return monthly_revenue(conn)


@router.get("/monthly-revenue/{month}")
def get_revenue_for_month(
    month: int = Path(..., ge=1, le=12, description="Month number 1-12"),
    engine: Engine = Depends(get_db_engine),
) -> dict[str, Any]:
    with engine.connect() as conn:
        return {"month": month, "revenue": revenue_for_month(conn, month)}


@router.get("/revenue")
def get_revenue(
    start_date: date = Query(..., description="Earliest check-in date (inclusive)"),
    end_date: date = Query(..., description="Latest check-out date (inclusive)"),
    room_type: Optional[str] = Query(None, description="Restrict to one room type"),
    engine: Engine = Depends(get_db_engine),
) -> dict[str, Any]:
    """
    Revenue for a date range, optionally for one room type.

    Revenue is null rather than 0 when nothing matches and
    EMPTY_REVENUE_AS_NULL is enabled.
    """
    with engine.connect() as conn:
        if room_type is None:
            revenue = total_revenue(conn, start_date, end_date)
        else:
            revenue = revenue_for_room_type(conn, room_type, start_date, end_date)

    return {
        "room_type": room_type,
        "start_date": start_date,
        "end_date": end_date,
        "revenue": revenue,
    }


@router.get("/average-rate")
def get_average_rate(
    room_type: str = Query(..., description="Room type"),
    engine: Engine = Depends(get_db_engine),
) -> dict[str, Any]:
    """Average nightly rate for a room type. Returns 404 if no such rooms exist."""
    try:
        with engine.connect() as conn:
            average = average_room_rate(conn, room_type)
    except HotelRevenueError as e:
        raise http_error_for(e) from e
    return {"room_type": room_type, "average_rate": average}


@router.get("/occupancy")
def get_occupancy(engine: Engine = Depends(get_db_engine)) -> list[dict[str, Any]]:
    with engine.connect() as conn:
        return occupancy_by_room_type(conn)


@router.get("/payment-history")
def get_payment_history(
    guest_name: str = Query(..., description="Exact guest name"),
    engine: Engine = Depends(get_db_engine),
) -> list[dict[str, Any]]:
    with engine.connect() as conn:
        return payment_history(conn, guest_name)


@router.get("/revenue-by-month-and-type")
def get_revenue_by_month_and_type(
    engine: Engine = Depends(get_db_engine),
) -> list[dict[str, Any]]:
    with engine.connect() as conn:
        return revenue_by_month_and_type(conn)
