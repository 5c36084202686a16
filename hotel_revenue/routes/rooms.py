from typing import Any, Optional

import structlog
from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.engine import Engine

from hotel_revenue.db.readers.rooms import get_room, query_rooms
from hotel_revenue.db.writers.rooms import delete_room, insert_room, update_room, update_room_rate
from hotel_revenue.dependencies import get_db_engine
from hotel_revenue.errors import HotelRevenueError
from hotel_revenue.models.rooms import Room
from hotel_revenue.routes._errors import http_error_for, not_found
from hotel_revenue.schemas.rooms import RoomCreatePayload, RoomRatePayload, RoomUpdatePayload

logger = structlog.get_logger(__name__)
router = APIRouter()


@router.post("/rooms", status_code=status.HTTP_201_CREATED)
def create_room(
    payload: RoomCreatePayload, engine: Engine = Depends(get_db_engine)
) -> dict[str, Any]:
    """
    Create a room.

    Returns 400 for a negative rate and 422 if the room number is taken.
    """
    try:
        return insert_room(engine, payload.model_dump(mode="json"))
    except HotelRevenueError as e:
        raise http_error_for(e) from e
    except Exception as e:
        logger.exception("room_creation_failed", room_number=payload.room_number, error=str(e))
        raise HTTPException(status_code=500, detail="Internal server error")


@router.get("/rooms")
def list_rooms(
    room_type: Optional[str] = Query(None, description="Only rooms of this type"),
    engine: Engine = Depends(get_db_engine),
) -> list[dict[str, Any]]:
    criteria = [Room.room_type == room_type] if room_type is not None else []
    with engine.connect() as conn:
        return query_rooms(conn, *criteria)


@router.get("/rooms/{room_number}")
def read_room(room_number: int, engine: Engine = Depends(get_db_engine)) -> dict[str, Any]:
    with engine.connect() as conn:
        room = get_room(conn, room_number)
    if room is None:
        raise not_found("rooms", room_number)
    return room


@router.patch("/rooms/{room_number}")
def patch_room(
    room_number: int,
    payload: RoomUpdatePayload,
    engine: Engine = Depends(get_db_engine),
) -> dict[str, Any]:
    """
    Update a room's type and/or rate. Only fields present in the body change.
    """
    changes = payload.model_dump(mode="json", exclude_unset=True)
    try:
        return update_room(engine, room_number, changes)
    except HotelRevenueError as e:
        raise http_error_for(e) from e
    except Exception as e:
        logger.exception("room_update_failed", room_number=room_number, error=str(e))
        raise HTTPException(status_code=500, detail="Internal server error")


@router.put("/rooms/{room_number}/rate")
def set_room_rate(
    room_number: int,
    payload: RoomRatePayload,
    engine: Engine = Depends(get_db_engine),
) -> dict[str, Any]:
    """
    Set a room's nightly rate.

    A negative rate returns 400 and leaves the stored rate unchanged.
    """
    try:
        return update_room_rate(engine, room_number, payload.room_rate)
    except HotelRevenueError as e:
        raise http_error_for(e) from e
    except Exception as e:
        logger.exception("room_rate_update_failed", room_number=room_number, error=str(e))
        raise HTTPException(status_code=500, detail="Internal server error")


@router.delete("/rooms/{room_number}")
def remove_room(room_number: int, engine: Engine = Depends(get_db_engine)) -> dict[str, str]:
    """Delete a room. Returns 409 while any reservation references it."""
    try:
        delete_room(engine, room_number)
    except HotelRevenueError as e:
        raise http_error_for(e) from e
    return {"message": f"Room {room_number} deleted"}
