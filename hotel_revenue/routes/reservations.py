from typing import Any, Optional

import structlog
from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.engine import Engine

from hotel_revenue.db.readers.reservations import get_reservation, query_reservations
from hotel_revenue.db.writers.reservations import (
    delete_reservation,
    insert_reservation,
    update_reservation,
)
from hotel_revenue.dependencies import get_db_engine
from hotel_revenue.errors import HotelRevenueError
from hotel_revenue.models.reservations import Reservation
from hotel_revenue.routes._errors import http_error_for, not_found
from hotel_revenue.schemas.reservations import ReservationCreatePayload, ReservationUpdatePayload

logger = structlog.get_logger(__name__)
router = APIRouter()


@router.post("/reservations", status_code=status.HTTP_201_CREATED)
def create_reservation(
    payload: ReservationCreatePayload, engine: Engine = Depends(get_db_engine)
) -> dict[str, Any]:
    """
    Create a reservation.

    Returns 400 if check-out is not after check-in, 422 if the ID is taken or
    the room does not exist.
    """
    try:
        return insert_reservation(engine, payload.model_dump(mode="json"))
    except HotelRevenueError as e:
        raise http_error_for(e) from e
    except Exception as e:
        logger.exception(
            "reservation_creation_failed", reservation_id=payload.reservation_id, error=str(e)
        )
        raise HTTPException(status_code=500, detail="Internal server error")


@router.get("/reservations")
def list_reservations(
    guest_name: Optional[str] = Query(None, description="Exact guest name"),
    room_number: Optional[int] = Query(None, description="Booked room"),
    engine: Engine = Depends(get_db_engine),
) -> list[dict[str, Any]]:
    criteria = []
    if guest_name is not None:
        criteria.append(Reservation.guest_name == guest_name)
    if room_number is not None:
        criteria.append(Reservation.room_number == room_number)
    with engine.connect() as conn:
        return query_reservations(conn, *criteria)


@router.get("/reservations/{reservation_id}")
def read_reservation(
    reservation_id: int, engine: Engine = Depends(get_db_engine)
) -> dict[str, Any]:
    with engine.connect() as conn:
        reservation = get_reservation(conn, reservation_id)
    if reservation is None:
        raise not_found("reservations", reservation_id)
    return reservation


@router.patch("/reservations/{reservation_id}")
def patch_reservation(
    reservation_id: int,
    payload: ReservationUpdatePayload,
    engine: Engine = Depends(get_db_engine),
) -> dict[str, Any]:
    changes = payload.model_dump(mode="json", exclude_unset=True)
    try:
        return update_reservation(engine, reservation_id, changes)
    except HotelRevenueError as e:
        raise http_error_for(e) from e
    except Exception as e:
        logger.exception("reservation_update_failed", reservation_id=reservation_id, error=str(e))
        raise HTTPException(status_code=500, detail="Internal server error")


@router.delete("/reservations/{reservation_id}")
def remove_reservation(
    reservation_id: int, engine: Engine = Depends(get_db_engine)
) -> dict[str, str]:
    """Delete a reservation. Returns 409 while any payment references it."""
    try:
        delete_reservation(engine, reservation_id)
    except HotelRevenueError as e:
        raise http_error_for(e) from e
    return {"message": f"Reservation {reservation_id} deleted"}
