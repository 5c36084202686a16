"""
Typed outcomes for rejected writes and empty aggregates.

Every error here is recoverable: callers may correct the input and retry.
Nothing in the data layer retries on its own.
"""

from __future__ import annotations

from typing import Any


class HotelRevenueError(Exception):
    """Base class for all domain errors raised by the data layer."""


class ValidationError(HotelRevenueError):
    """A candidate row breaks a write-time invariant."""


class NegativeRate(ValidationError):
    def __init__(self, room_number: Any, room_rate: Any) -> None:
        self.room_number = room_number
        self.room_rate = room_rate
        super().__init__(f"Room rate cannot be negative (room {room_number}, rate {room_rate})")


class InvalidDateRange(ValidationError):
    def __init__(self, reservation_id: Any, check_in_date: Any, check_out_date: Any) -> None:
        self.reservation_id = reservation_id
        self.check_in_date = check_in_date
        self.check_out_date = check_out_date
        super().__init__(
            f"Check-out date must be after check-in date "
            f"(reservation {reservation_id}: {check_in_date} -> {check_out_date})"
        )


class StoreError(HotelRevenueError):
    """The store refused a write because of key or reference integrity."""


class DuplicateKey(StoreError):
    def __init__(self, table: str, key: Any) -> None:
        self.table = table
        self.key = key
        super().__init__(f"{table} row with key {key} already exists")


class DanglingReference(StoreError):
    def __init__(self, table: str, column: str, key: Any) -> None:
        self.table = table
        self.column = column
        self.key = key
        super().__init__(f"{table}.{column}={key} does not reference an existing row")


class RecordNotFound(StoreError):
    def __init__(self, table: str, key: Any) -> None:
        self.table = table
        self.key = key
        super().__init__(f"{table} row with key {key} not found")


class DependentRowsExist(StoreError):
    """Raised by deletes: parent rows with dependents are never removed."""

    def __init__(self, table: str, key: Any, dependent_table: str, count: int) -> None:
        self.table = table
        self.key = key
        self.dependent_table = dependent_table
        self.count = count
        super().__init__(
            f"{table} row with key {key} is referenced by {count} {dependent_table} row(s)"
        )


class NoMatchingRows(HotelRevenueError):
    """An aggregate has no defined value because no rows matched its filter."""

    def __init__(self, description: str) -> None:
        self.description = description
        super().__init__(f"No rows matched: {description}")
