from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field


class RoomCreatePayload(BaseModel):
    """
    Schema for creating a room.

    room_rate is deliberately unconstrained here; the write path rejects
    negative rates with a NegativeRate error.
    """

    room_number: int = Field(..., description="Room number (primary key)")
    room_type: Optional[str] = Field(None, max_length=50, description="Single, Double, Suite...")
    room_rate: Optional[Decimal] = Field(None, description="Nightly rate")


class RoomUpdatePayload(BaseModel):
    """Schema for a partial room update. All fields are optional."""

    room_type: Optional[str] = Field(None, max_length=50, description="Room type")
    room_rate: Optional[Decimal] = Field(None, description="Nightly rate")


class RoomRatePayload(BaseModel):
    room_rate: Decimal = Field(..., description="New nightly rate")
