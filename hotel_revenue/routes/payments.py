from typing import Any, Optional

import structlog
from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.engine import Engine

from hotel_revenue.db.readers.payments import get_payment, query_payments
from hotel_revenue.db.writers.payments import delete_payment, insert_payment
from hotel_revenue.dependencies import get_db_engine
from hotel_revenue.errors import HotelRevenueError
from hotel_revenue.models.payments import Payment
from hotel_revenue.routes._errors import http_error_for, not_found
from hotel_revenue.schemas.payments import PaymentCreatePayload

logger = structlog.get_logger(__name__)
router = APIRouter()


@router.post("/payments", status_code=status.HTTP_201_CREATED)
def create_payment(
    payload: PaymentCreatePayload, engine: Engine = Depends(get_db_engine)
) -> dict[str, Any]:
    """
    Record a payment. Returns 422 if the ID is taken or the reservation does not exist.
    """
    try:
        return insert_payment(engine, payload.model_dump(mode="json"))
    except HotelRevenueError as e:
        raise http_error_for(e) from e
    except Exception as e:
        logger.exception("payment_creation_failed", payment_id=payload.payment_id, error=str(e))
        raise HTTPException(status_code=500, detail="Internal server error")


@router.get("/payments")
def list_payments(
    reservation_id: Optional[int] = Query(None, description="Only payments for this reservation"),
    engine: Engine = Depends(get_db_engine),
) -> list[dict[str, Any]]:
    criteria = [Payment.reservation_id == reservation_id] if reservation_id is not None else []
    with engine.connect() as conn:
        return query_payments(conn, *criteria)


@router.get("/payments/{payment_id}")
def read_payment(payment_id: int, engine: Engine = Depends(get_db_engine)) -> dict[str, Any]:
    with engine.connect() as conn:
        payment = get_payment(conn, payment_id)
    if payment is None:
        raise not_found("payments", payment_id)
    return payment


@router.delete("/payments/{payment_id}")
def remove_payment(payment_id: int, engine: Engine = Depends(get_db_engine)) -> dict[str, str]:
    try:
        delete_payment(engine, payment_id)
    except HotelRevenueError as e:
        raise http_error_for(e) from e
    return {"message": f"Payment {payment_id} deleted"}
