"""
Unit tests for money and date coercion helpers.
"""

from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal

import pytest

from hotel_revenue.utils.values import month_label, to_date, to_money


@pytest.mark.unit
def test_to_money_quantizes_to_cents() -> None:
    assert to_money(120) == Decimal("120.00")
    assert str(to_money(120)) == "120.00"
    assert to_money(0.1) == Decimal("0.10")
    assert to_money("116.665") == Decimal("116.67")
    assert to_money(None) is None


@pytest.mark.unit
def test_to_date_accepts_dates_datetimes_and_iso_strings() -> None:
    assert to_date("2023-03-15") == date(2023, 3, 15)
    assert to_date(datetime(2023, 3, 15, 14, 0)) == date(2023, 3, 15)
    assert to_date(date(2023, 3, 15)) == date(2023, 3, 15)
    assert to_date(None) is None


@pytest.mark.unit
def test_to_date_rejects_other_types() -> None:
    with pytest.raises(TypeError):
        to_date(20230315)
    with pytest.raises(ValueError):
        to_date("15/03/2023")


@pytest.mark.unit
def test_month_label_zero_pads() -> None:
    assert month_label(2023, 1) == "2023-01"
    assert month_label(Decimal("2023"), Decimal("11")) == "2023-11"
