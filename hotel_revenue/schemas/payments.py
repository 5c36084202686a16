from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class PaymentMethod(str, Enum):
    CREDIT = "Credit"
    CASH = "Cash"
    DEBIT = "Debit"


class PaymentCreatePayload(BaseModel):
    """Schema for recording a payment against a reservation."""

    payment_id: int = Field(..., description="Payment ID (primary key)")
    reservation_id: Optional[int] = Field(None, description="Reservation being paid")
    payment_date: Optional[date] = Field(None, description="Date the payment was made")
    payment_amount: Optional[Decimal] = Field(None, description="Amount paid")
    payment_method: Optional[PaymentMethod] = Field(None, description="Credit, Cash or Debit")
