import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

import argparse
from decimal import Decimal

import structlog

from hotel_revenue.db.engine import create_schema, engine
from hotel_revenue.db.writers.rooms import update_room_rate
from hotel_revenue.errors import HotelRevenueError
from hotel_revenue.logging_config import setup_logging
from hotel_revenue.services.reports import (
    occupancy_by_room_type,
    payment_history,
    revenue_by_month_and_type,
)
from hotel_revenue.services.revenue import (
    average_room_rate,
    monthly_revenue,
    revenue_for_month,
    revenue_for_room_type,
    total_revenue,
)
from hotel_revenue.services.sample_data import DATASETS, load_sample_data

setup_logging()
logger = structlog.get_logger(__name__)


def main() -> None:
    """
    Provision the schema, load a sample dataset and print every report.

    Runs the same sequence as the historical demo: load, monthly revenue,
    Double-room revenue for March-April, a rate change for room 101, range
    totals, average rates, May revenue, occupancy, John Doe's payments and
    the month x type breakdown.
    """
    parser = argparse.ArgumentParser(description=main.__doc__)
    parser.add_argument("--dataset", choices=sorted(DATASETS), default="script")
    args = parser.parse_args()

    create_schema(engine)
    summary = load_sample_data(engine, dataset=args.dataset)
    for rejected in summary.rejected:
        print(f"rejected {rejected['table']} {rejected['key']}: {rejected['error']}")

    try:
        update_room_rate(engine, 101, Decimal("120.00"))
    except HotelRevenueError:
        logger.exception("room_rate_update_failed", room_number=101)
        raise

    with engine.connect() as conn:
        print("monthly revenue:")
        for row in monthly_revenue(conn):
            print(f"  {row['month']}  {row['revenue']}")

        print("Double revenue 2023-03-01..2023-04-30:", end=" ")
        print(revenue_for_room_type(conn, "Double", "2023-03-01", "2023-04-30"))
        print("total revenue 2023-01-01..2023-02-28:", total_revenue(conn, "2023-01-01", "2023-02-28"))
        print("total revenue 2023-05-01..2023-05-31:", total_revenue(conn, "2023-05-01", "2023-05-31"))

        for room_type in ("Single", "Double"):
            try:
                print(f"average {room_type} rate:", average_room_rate(conn, room_type))
            except HotelRevenueError as e:
                print(f"average {room_type} rate: {e}")

        print("May revenue:", revenue_for_month(conn, 5))

        print("occupancy:")
        for row in occupancy_by_room_type(conn):
            print(f"  {row['room_type']:<8} {row['reservation_count']}  {row['occupancy_pct']}%")

        print("payment history for John Doe:")
        for row in payment_history(conn, "John Doe"):
            print(f"  {row['payment_date']}  {row['payment_amount']}  {row['payment_method']}")

        print("revenue by month and room type:")
        for row in revenue_by_month_and_type(conn):
            print(f"  {row['month']:>2}  {row['room_type']:<8} {row['revenue']}")


if __name__ == "__main__":
    main()
