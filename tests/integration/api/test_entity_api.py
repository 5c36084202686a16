"""
Integration tests for the room, reservation and payment endpoints.
"""

from __future__ import annotations

from decimal import Decimal

import pytest


def _money(value) -> Decimal:
    return Decimal(str(value))


@pytest.mark.integration
def test_create_and_read_room(client):
    response = client.post(
        "/rooms", json={"room_number": 101, "room_type": "Single", "room_rate": "100.00"}
    )

    assert response.status_code == 201
    room = client.get("/rooms/101").json()
    assert room["room_type"] == "Single"
    assert _money(room["room_rate"]) == Decimal("100.00")


@pytest.mark.integration
def test_create_room_with_negative_rate_returns_400(client):
    response = client.post(
        "/rooms", json={"room_number": 102, "room_type": "Single", "room_rate": "-100.00"}
    )

    assert response.status_code == 400
    assert response.json()["detail"]["error"] == "NegativeRate"
    assert client.get("/rooms/102").status_code == 404


@pytest.mark.integration
def test_create_duplicate_room_returns_422(canonical_client):
    response = canonical_client.post(
        "/rooms", json={"room_number": 101, "room_type": "Suite", "room_rate": "300.00"}
    )

    assert response.status_code == 422
    assert response.json()["detail"]["error"] == "DuplicateKey"


@pytest.mark.integration
def test_list_rooms_by_type(canonical_client):
    response = canonical_client.get("/rooms", params={"room_type": "Double"})

    assert response.status_code == 200
    assert [r["room_number"] for r in response.json()] == [103, 104]


@pytest.mark.integration
def test_set_room_rate(canonical_client):
    response = canonical_client.put("/rooms/101/rate", json={"room_rate": "120.00"})

    assert response.status_code == 200
    assert _money(canonical_client.get("/rooms/101").json()["room_rate"]) == Decimal("120.00")


@pytest.mark.integration
def test_set_negative_room_rate_returns_400_and_keeps_rate(canonical_client):
    response = canonical_client.put("/rooms/101/rate", json={"room_rate": "-10.00"})

    assert response.status_code == 400
    assert response.json()["detail"]["error"] == "NegativeRate"
    assert _money(canonical_client.get("/rooms/101").json()["room_rate"]) == Decimal("100.00")


@pytest.mark.integration
def test_patch_unknown_room_returns_404(client):
    response = client.patch("/rooms/999", json={"room_type": "Suite"})

    assert response.status_code == 404


@pytest.mark.integration
def test_delete_room_with_reservations_returns_409(canonical_client):
    response = canonical_client.delete("/rooms/101")

    assert response.status_code == 409
    assert response.json()["detail"]["error"] == "DependentRowsExist"


@pytest.mark.integration
def test_create_reservation_with_bad_dates_returns_400(canonical_client):
    response = canonical_client.post(
        "/reservations",
        json={
            "reservation_id": 6,
            "guest_name": "Jane Doe",
            "check_in_date": "2023-02-16",
            "check_out_date": "2023-02-12",
            "room_number": 101,
            "total_cost": "300.00",
        },
    )

    assert response.status_code == 400
    assert response.json()["detail"]["error"] == "InvalidDateRange"


@pytest.mark.integration
def test_create_reservation_for_unknown_room_returns_422(canonical_client):
    response = canonical_client.post(
        "/reservations",
        json={
            "reservation_id": 6,
            "guest_name": "Jane Doe",
            "check_in_date": "2023-02-12",
            "check_out_date": "2023-02-16",
            "room_number": 999,
            "total_cost": "300.00",
        },
    )

    assert response.status_code == 422
    assert response.json()["detail"]["error"] == "DanglingReference"


@pytest.mark.integration
def test_create_and_filter_reservations(canonical_client):
    response = canonical_client.post(
        "/reservations",
        json={
            "reservation_id": 6,
            "guest_name": "John Doe",
            "check_in_date": "2023-08-01",
            "check_out_date": "2023-08-03",
            "room_number": 105,
            "total_cost": "500.00",
        },
    )
    assert response.status_code == 201

    rows = canonical_client.get("/reservations", params={"guest_name": "John Doe"}).json()

    assert [r["reservation_id"] for r in rows] == [1, 6]
    assert rows[1]["check_in_date"] == "2023-08-01"


@pytest.mark.integration
def test_patch_reservation_dates_are_revalidated(canonical_client):
    response = canonical_client.patch("/reservations/1", json={"check_out_date": "2022-12-31"})

    assert response.status_code == 400


@pytest.mark.integration
def test_create_payment_and_reject_unknown_method(canonical_client):
    ok = canonical_client.post(
        "/payments",
        json={
            "payment_id": 6,
            "reservation_id": 3,
            "payment_date": "2023-03-21",
            "payment_amount": "50.00",
            "payment_method": "Debit",
        },
    )
    bad_method = canonical_client.post(
        "/payments",
        json={"payment_id": 7, "reservation_id": 3, "payment_method": "Cheque"},
    )
    dangling = canonical_client.post("/payments", json={"payment_id": 8, "reservation_id": 99})

    assert ok.status_code == 201
    assert bad_method.status_code == 422
    assert dangling.status_code == 422
    assert dangling.json()["detail"]["error"] == "DanglingReference"
    assert [p["payment_id"] for p in canonical_client.get(
        "/payments", params={"reservation_id": 3}
    ).json()] == [3, 6]


@pytest.mark.integration
def test_delete_payment_then_reservation(canonical_client):
    assert canonical_client.delete("/reservations/5").status_code == 409
    assert canonical_client.delete("/payments/5").status_code == 200
    assert canonical_client.delete("/reservations/5").status_code == 200
    assert canonical_client.get("/reservations/5").status_code == 404
