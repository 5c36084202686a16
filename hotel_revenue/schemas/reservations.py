from datetime import date
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field


class ReservationCreatePayload(BaseModel):
    """
    Schema for creating a reservation.

    Date order is checked by the write path, not by this schema, so that
    every caller gets the same InvalidDateRange error.
    """

    reservation_id: int = Field(..., description="Reservation ID (primary key)")
    guest_name: Optional[str] = Field(None, max_length=50, description="Guest full name")
    check_in_date: Optional[date] = Field(None, description="Check-in date")
    check_out_date: Optional[date] = Field(None, description="Check-out date")
    room_number: Optional[int] = Field(None, description="Booked room")
    total_cost: Optional[Decimal] = Field(None, description="Total cost of the stay")


class ReservationUpdatePayload(BaseModel):
    """Schema for a partial reservation update. All fields are optional."""

    guest_name: Optional[str] = Field(None, max_length=50)
    check_in_date: Optional[date] = None
    check_out_date: Optional[date] = None
    room_number: Optional[int] = None
    total_cost: Optional[Decimal] = None
