"""
Prometheus metrics for writes, rejected writes and derived views.

Metrics are exposed via the /metrics endpoint for scraping by Prometheus.

Example:
    >>> from hotel_revenue.metrics import db_operations, view_duration
    >>> with view_duration.labels(view="monthly_revenue").time():
    ...     rows = monthly_revenue(conn)
"""

from __future__ import annotations

from prometheus_client import Counter, Histogram

# =============================================================================
# Database Metrics
# =============================================================================

db_operations = Counter(
    "hotel_revenue_db_operations_total",
    "Total committed write operations",
    ["operation", "table"],
)
"""
Counter for committed writes.

Labels:
    operation: insert, update or delete
    table: rooms, reservations or payments
"""

write_rejections = Counter(
    "hotel_revenue_write_rejections_total",
    "Total writes rejected by validation or integrity checks",
    ["table", "reason"],
)
"""
Counter for rejected writes.

Labels:
    table: rooms, reservations or payments
    reason: error class name (NegativeRate, DuplicateKey, ...)
"""

# =============================================================================
# View Metrics
# =============================================================================

view_duration = Histogram(
    "hotel_revenue_view_duration_seconds",
    "Time spent computing derived views and reports",
    ["view"],
    buckets=(0.005, 0.01, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, float("inf")),
)
"""
Histogram for derived view computation time.

Labels:
    view: function name (monthly_revenue, occupancy_by_room_type, ...)
"""
