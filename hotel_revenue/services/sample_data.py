"""
Sample hotel datasets and their loader.

Two datasets are provided:

- ``script``: the historical demo rows, including the three that the
  write-time checks reject (room 102 has a negative rate, reservation 2
  checks out before it checks in, and payment 2 therefore has no
  reservation to point at).
- ``canonical``: the same hotel with those rows corrected, giving one
  reservation per month from January to May 2023 and 2700.00 of revenue.

Loading is a sequence of independent inserts. A rejected row is logged and
recorded in the summary; rows before and after it still load.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Mapping

import structlog
from sqlalchemy.engine import Engine

from hotel_revenue.db.writers.payments import insert_payment
from hotel_revenue.db.writers.reservations import insert_reservation
from hotel_revenue.db.writers.rooms import insert_room
from hotel_revenue.errors import HotelRevenueError

logger = structlog.get_logger(__name__)

Row = dict[str, Any]

SCRIPT_ROOMS: list[Row] = [
    {"room_number": 101, "room_type": "Single", "room_rate": "100.00"},
    {"room_number": 102, "room_type": "Single", "room_rate": "-100.00"},
    {"room_number": 103, "room_type": "Double", "room_rate": "150.00"},
    {"room_number": 104, "room_type": "Double", "room_rate": "150.00"},
    {"room_number": 105, "room_type": "Suite", "room_rate": "250.00"},
]

SCRIPT_RESERVATIONS: list[Row] = [
    {
        "reservation_id": 1,
        "guest_name": "John Doe",
        "check_in_date": "2023-01-01",
        "check_out_date": "2023-01-05",
        "room_number": 101,
        "total_cost": "500.00",
    },
    {
        "reservation_id": 2,
        "guest_name": "Jane Doe",
        "check_in_date": "2023-02-16",
        "check_out_date": "2023-02-12",
        "room_number": 102,
        "total_cost": "300.00",
    },
    {
        "reservation_id": 3,
        "guest_name": "Bob Smith",
        "check_in_date": "2023-03-15",
        "check_out_date": "2023-03-20",
        "room_number": 103,
        "total_cost": "750.00",
    },
    {
        "reservation_id": 4,
        "guest_name": "Alice Johnson",
        "check_in_date": "2023-04-01",
        "check_out_date": "2023-04-04",
        "room_number": 104,
        "total_cost": "400.00",
    },
    {
        "reservation_id": 5,
        "guest_name": "Sarah Lee",
        "check_in_date": "2023-05-05",
        "check_out_date": "2023-05-09",
        "room_number": 105,
        "total_cost": "600.00",
    },
]

SCRIPT_PAYMENTS: list[Row] = [
    {
        "payment_id": 1,
        "reservation_id": 1,
        "payment_date": "2023-01-05",
        "payment_amount": "500.00",
        "payment_method": "Credit",
    },
    {
        "payment_id": 2,
        "reservation_id": 2,
        "payment_date": "2023-02-12",
        "payment_amount": "300.00",
        "payment_method": "Cash",
    },
    {
        "payment_id": 3,
        "reservation_id": 3,
        "payment_date": "2023-03-20",
        "payment_amount": "750.00",
        "payment_method": "Credit",
    },
    {
        "payment_id": 4,
        "reservation_id": 4,
        "payment_date": "2023-04-04",
        "payment_amount": "400.00",
        "payment_method": "Debit",
    },
    {
        "payment_id": 5,
        "reservation_id": 5,
        "payment_date": "2023-05-09",
        "payment_amount": "600.00",
        "payment_method": "Cash",
    },
]


def _corrected(rows: list[Row], key: str, fixes: Mapping[Any, Row]) -> list[Row]:
    return [{**row, **fixes.get(row[key], {})} for row in rows]


CANONICAL_ROOMS = _corrected(SCRIPT_ROOMS, "room_number", {102: {"room_rate": "100.00"}})
CANONICAL_RESERVATIONS = _corrected(
    SCRIPT_RESERVATIONS,
    "reservation_id",
    {
        2: {
            "check_in_date": "2023-02-12",
            "check_out_date": "2023-02-16",
            "total_cost": "450.00",
        }
    },
)
CANONICAL_PAYMENTS = _corrected(
    SCRIPT_PAYMENTS,
    "payment_id",
    {2: {"payment_date": "2023-02-16", "payment_amount": "450.00"}},
)

DATASETS: dict[str, tuple[list[Row], list[Row], list[Row]]] = {
    "script": (SCRIPT_ROOMS, SCRIPT_RESERVATIONS, SCRIPT_PAYMENTS),
    "canonical": (CANONICAL_ROOMS, CANONICAL_RESERVATIONS, CANONICAL_PAYMENTS),
}


@dataclass
class LoadSummary:
    """Outcome of loading one dataset."""

    loaded: dict[str, int] = field(
        default_factory=lambda: {"rooms": 0, "reservations": 0, "payments": 0}
    )
    rejected: list[dict[str, Any]] = field(default_factory=list)


def _load_rows(
    engine: Engine,
    table: str,
    key: str,
    rows: list[Row],
    writer: Callable[[Engine, Mapping[str, Any]], Row],
    summary: LoadSummary,
) -> None:
    for row in rows:
        try:
            writer(engine, row)
        except HotelRevenueError as e:
            summary.rejected.append(
                {"table": table, "key": row[key], "reason": type(e).__name__, "error": str(e)}
            )
            continue
        summary.loaded[table] += 1


def load_sample_data(engine: Engine, dataset: str = "canonical") -> LoadSummary:
    """
    Insert a sample dataset row by row.

    Args:
        engine: SQLAlchemy Engine with the schema already provisioned
        dataset: "canonical" or "script"

    Returns:
        LoadSummary: Counts of loaded rows per table and the rejected rows

    Raises:
        ValueError: for an unknown dataset name
    """
    if dataset not in DATASETS:
        raise ValueError(f"Unknown dataset {dataset!r}; expected one of {sorted(DATASETS)}")

    rooms, reservations, payments = DATASETS[dataset]
    summary = LoadSummary()

    logger.info("sample_load_started", dataset=dataset)
    _load_rows(engine, "rooms", "room_number", rooms, insert_room, summary)
    _load_rows(engine, "reservations", "reservation_id", reservations, insert_reservation, summary)
    _load_rows(engine, "payments", "payment_id", payments, insert_payment, summary)

    logger.info(
        "sample_load_completed",
        dataset=dataset,
        loaded=summary.loaded,
        rejected_count=len(summary.rejected),
    )
    return summary
