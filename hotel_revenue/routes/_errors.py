"""
Translation of domain errors into HTTP responses for route handlers.
"""

from __future__ import annotations

from fastapi import HTTPException, status

from hotel_revenue.errors import (
    DanglingReference,
    DependentRowsExist,
    DuplicateKey,
    HotelRevenueError,
    NoMatchingRows,
    RecordNotFound,
    ValidationError,
)

_STATUS_BY_ERROR: list[tuple[type[HotelRevenueError], int]] = [
    (ValidationError, status.HTTP_400_BAD_REQUEST),
    (DuplicateKey, status.HTTP_422_UNPROCESSABLE_ENTITY),
    (DanglingReference, status.HTTP_422_UNPROCESSABLE_ENTITY),
    (RecordNotFound, status.HTTP_404_NOT_FOUND),
    (NoMatchingRows, status.HTTP_404_NOT_FOUND),
    (DependentRowsExist, status.HTTP_409_CONFLICT),
]


def http_error_for(error: HotelRevenueError) -> HTTPException:
    """
    Map a domain error to an HTTPException.

    The response detail carries the error class name so clients can branch
    on it without parsing the message.

    Args:
        error: Error raised by a writer, reader or view

    Returns:
        HTTPException: 400, 404, 409 or 422 (500 for anything unmapped)
    """
    for error_type, status_code in _STATUS_BY_ERROR:
        if isinstance(error, error_type):
            return HTTPException(
                status_code=status_code,
                detail={"error": type(error).__name__, "message": str(error)},
            )
    return HTTPException(status_code=500, detail="Internal server error")


def not_found(table: str, key: int) -> HTTPException:
    return http_error_for(RecordNotFound(table, key))
