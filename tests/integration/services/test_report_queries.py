"""
Integration tests for occupancy, payment history and month x type reports.
"""

from __future__ import annotations

from datetime import date
from decimal import Decimal

import pytest
from sqlalchemy import event

from hotel_revenue.db.writers.payments import insert_payment
from hotel_revenue.db.writers.reservations import insert_reservation
from hotel_revenue.services.reports import (
    occupancy_by_room_type,
    payment_history,
    revenue_by_month_and_type,
)


@pytest.mark.integration
def test_occupancy_by_room_type(canonical_engine):
    with canonical_engine.connect() as conn:
        rows = occupancy_by_room_type(conn)

    assert rows == [
        {"room_type": "Double", "reservation_count": 2, "occupancy_pct": Decimal("40.00")},
        {"room_type": "Single", "reservation_count": 2, "occupancy_pct": Decimal("40.00")},
        {"room_type": "Suite", "reservation_count": 1, "occupancy_pct": Decimal("20.00")},
    ]
    assert sum(r["occupancy_pct"] for r in rows) == Decimal("100.00")


@pytest.mark.integration
def test_occupancy_on_script_data_sums_to_100(script_engine):
    with script_engine.connect() as conn:
        rows = occupancy_by_room_type(conn)

    assert {r["room_type"]: r["reservation_count"] for r in rows} == {
        "Double": 2,
        "Single": 1,
        "Suite": 1,
    }
    assert abs(sum(r["occupancy_pct"] for r in rows) - Decimal("100")) <= Decimal("0.01")


@pytest.mark.integration
def test_occupancy_reads_counts_and_total_in_one_statement(canonical_engine):
    statements = []

    def record(conn, cursor, statement, parameters, context, executemany):
        statements.append(statement)

    event.listen(canonical_engine, "before_cursor_execute", record)
    try:
        with canonical_engine.connect() as conn:
            rows = occupancy_by_room_type(conn)
    finally:
        event.remove(canonical_engine, "before_cursor_execute", record)

    assert len(statements) == 1
    assert sum(r["occupancy_pct"] for r in rows) == Decimal("100.00")


@pytest.mark.integration
def test_occupancy_total_includes_reservations_without_a_room(canonical_engine):
    insert_reservation(
        canonical_engine,
        {
            "reservation_id": 6,
            "guest_name": "Walk In",
            "check_in_date": "2023-06-01",
            "check_out_date": "2023-06-02",
            "room_number": None,
            "total_cost": "80.00",
        },
    )

    with canonical_engine.connect() as conn:
        rows = occupancy_by_room_type(conn)

    assert [r["occupancy_pct"] for r in rows] == [
        Decimal("33.33"),
        Decimal("33.33"),
        Decimal("16.67"),
    ]


@pytest.mark.integration
def test_occupancy_without_reservations_is_empty(engine):
    with engine.connect() as conn:
        assert occupancy_by_room_type(conn) == []


@pytest.mark.integration
def test_payment_history_joins_reservation_and_payment(canonical_engine):
    with canonical_engine.connect() as conn:
        rows = payment_history(conn, "John Doe")

    assert len(rows) == 1
    row = rows[0]
    assert row["reservation_id"] == 1
    assert row["room_number"] == 101
    assert row["check_in_date"] == date(2023, 1, 1)
    assert row["total_cost"] == Decimal("500.00")
    assert row["payment_id"] == 1
    assert row["payment_date"] == date(2023, 1, 5)
    assert row["payment_amount"] == Decimal("500.00")
    assert row["payment_method"] == "Credit"


@pytest.mark.integration
def test_payment_history_lists_every_payment_in_date_order(canonical_engine):
    insert_payment(
        canonical_engine,
        {
            "payment_id": 6,
            "reservation_id": 1,
            "payment_date": "2023-01-01",
            "payment_amount": "100.00",
            "payment_method": "Cash",
        },
    )

    with canonical_engine.connect() as conn:
        rows = payment_history(conn, "John Doe")

    assert [r["payment_id"] for r in rows] == [6, 1]


@pytest.mark.integration
def test_payment_history_skips_reservations_without_payments(canonical_engine):
    insert_reservation(
        canonical_engine,
        {
            "reservation_id": 6,
            "guest_name": "Walk In",
            "check_in_date": "2023-07-01",
            "check_out_date": "2023-07-02",
            "room_number": 101,
            "total_cost": "100.00",
        },
    )

    with canonical_engine.connect() as conn:
        assert payment_history(conn, "Walk In") == []
        assert payment_history(conn, "Nobody") == []


@pytest.mark.integration
def test_revenue_by_month_and_type(canonical_engine):
    with canonical_engine.connect() as conn:
        rows = revenue_by_month_and_type(conn)

    assert rows == [
        {"month": 1, "room_type": "Single", "revenue": Decimal("500.00")},
        {"month": 2, "room_type": "Single", "revenue": Decimal("450.00")},
        {"month": 3, "room_type": "Double", "revenue": Decimal("750.00")},
        {"month": 4, "room_type": "Double", "revenue": Decimal("400.00")},
        {"month": 5, "room_type": "Suite", "revenue": Decimal("600.00")},
    ]


@pytest.mark.integration
def test_revenue_by_month_and_type_merges_years(canonical_engine):
    insert_reservation(
        canonical_engine,
        {
            "reservation_id": 6,
            "guest_name": "Return Guest",
            "check_in_date": "2024-01-10",
            "check_out_date": "2024-01-12",
            "room_number": 102,
            "total_cost": "200.00",
        },
    )
    insert_reservation(
        canonical_engine,
        {
            "reservation_id": 7,
            "guest_name": "Return Guest",
            "check_in_date": "2024-01-15",
            "check_out_date": "2024-01-16",
            "room_number": 105,
            "total_cost": "250.00",
        },
    )

    with canonical_engine.connect() as conn:
        rows = revenue_by_month_and_type(conn)

    january = [r for r in rows if r["month"] == 1]
    assert january == [
        {"month": 1, "room_type": "Single", "revenue": Decimal("700.00")},
        {"month": 1, "room_type": "Suite", "revenue": Decimal("250.00")},
    ]
