"""
Integration tests for the reservations writer.
"""

from __future__ import annotations

from datetime import date
from decimal import Decimal

import pytest

from hotel_revenue.db.readers.reservations import get_reservation
from hotel_revenue.db.writers.payments import insert_payment
from hotel_revenue.db.writers.reservations import (
    delete_reservation,
    insert_reservation,
    update_reservation,
)
from hotel_revenue.db.writers.rooms import insert_room
from hotel_revenue.errors import (
    DanglingReference,
    DependentRowsExist,
    DuplicateKey,
    InvalidDateRange,
    RecordNotFound,
)


@pytest.fixture
def room_engine(engine):
    """Schema with rooms 101 (Single) and 103 (Double)."""
    insert_room(engine, {"room_number": 101, "room_type": "Single", "room_rate": "100.00"})
    insert_room(engine, {"room_number": 103, "room_type": "Double", "room_rate": "150.00"})
    return engine


def _reservation(**overrides):
    row = {
        "reservation_id": 1,
        "guest_name": "John Doe",
        "check_in_date": "2023-01-01",
        "check_out_date": "2023-01-05",
        "room_number": 101,
        "total_cost": "500.00",
    }
    row.update(overrides)
    return row


@pytest.mark.integration
def test_insert_reservation_stores_typed_values(room_engine):
    insert_reservation(room_engine, _reservation())

    with room_engine.connect() as conn:
        stored = get_reservation(conn, 1)

    assert stored["check_in_date"] == date(2023, 1, 1)
    assert stored["check_out_date"] == date(2023, 1, 5)
    assert stored["total_cost"] == Decimal("500.00")
    assert stored["room_number"] == 101


@pytest.mark.integration
@pytest.mark.parametrize(
    "check_in, check_out", [("2023-02-16", "2023-02-12"), ("2023-02-12", "2023-02-12")]
)
def test_insert_reservation_rejects_invalid_date_range(room_engine, check_in, check_out):
    with pytest.raises(InvalidDateRange):
        insert_reservation(
            room_engine, _reservation(check_in_date=check_in, check_out_date=check_out)
        )

    with room_engine.connect() as conn:
        assert get_reservation(conn, 1) is None


@pytest.mark.integration
def test_insert_reservation_rejects_unknown_room(room_engine):
    with pytest.raises(DanglingReference) as exc_info:
        insert_reservation(room_engine, _reservation(room_number=999))

    assert exc_info.value.column == "room_number"
    assert exc_info.value.key == 999


@pytest.mark.integration
def test_insert_reservation_checks_dates_before_room_reference(room_engine):
    with pytest.raises(InvalidDateRange):
        insert_reservation(
            room_engine,
            _reservation(check_in_date="2023-02-16", check_out_date="2023-02-12", room_number=102),
        )


@pytest.mark.integration
def test_insert_reservation_rejects_duplicate_id(room_engine):
    insert_reservation(room_engine, _reservation())

    with pytest.raises(DuplicateKey):
        insert_reservation(room_engine, _reservation(guest_name="Someone Else"))


@pytest.mark.integration
def test_many_reservations_may_share_a_room(room_engine):
    insert_reservation(room_engine, _reservation())
    insert_reservation(
        room_engine,
        _reservation(reservation_id=2, check_in_date="2023-06-01", check_out_date="2023-06-03"),
    )

    with room_engine.connect() as conn:
        assert get_reservation(conn, 2)["room_number"] == 101


@pytest.mark.integration
def test_update_reservation_revalidates_merged_dates(room_engine):
    insert_reservation(room_engine, _reservation())

    with pytest.raises(InvalidDateRange):
        update_reservation(room_engine, 1, {"check_out_date": "2022-12-31"})

    with room_engine.connect() as conn:
        assert get_reservation(conn, 1)["check_out_date"] == date(2023, 1, 5)


@pytest.mark.integration
def test_update_reservation_moves_to_existing_room(room_engine):
    insert_reservation(room_engine, _reservation())

    updated = update_reservation(room_engine, 1, {"room_number": 103, "total_cost": 750})

    assert updated["room_number"] == 103
    with room_engine.connect() as conn:
        assert get_reservation(conn, 1)["total_cost"] == Decimal("750.00")


@pytest.mark.integration
def test_update_reservation_rejects_unknown_room(room_engine):
    insert_reservation(room_engine, _reservation())

    with pytest.raises(DanglingReference):
        update_reservation(room_engine, 1, {"room_number": 999})


@pytest.mark.integration
def test_update_unknown_reservation(room_engine):
    with pytest.raises(RecordNotFound):
        update_reservation(room_engine, 42, {"guest_name": "Nobody"})


@pytest.mark.integration
def test_delete_reservation_with_payment_is_restricted(room_engine):
    insert_reservation(room_engine, _reservation())
    insert_payment(
        room_engine,
        {
            "payment_id": 1,
            "reservation_id": 1,
            "payment_date": "2023-01-05",
            "payment_amount": "500.00",
            "payment_method": "Credit",
        },
    )

    with pytest.raises(DependentRowsExist):
        delete_reservation(room_engine, 1)


@pytest.mark.integration
def test_delete_reservation_without_payments(room_engine):
    insert_reservation(room_engine, _reservation())

    delete_reservation(room_engine, 1)

    with room_engine.connect() as conn:
        assert get_reservation(conn, 1) is None
