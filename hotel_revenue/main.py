# hotel_revenue/main.py

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from hotel_revenue.config import ALLOWED_ORIGINS
from hotel_revenue.logging_config import setup_logging
from hotel_revenue.middleware import RequestIDMiddleware
from hotel_revenue.routes.health import router as health_router
from hotel_revenue.routes.metrics import router as metrics_router
from hotel_revenue.routes.payments import router as payments_router
from hotel_revenue.routes.reports import router as reports_router
from hotel_revenue.routes.reservations import router as reservations_router
from hotel_revenue.routes.rooms import router as rooms_router

# Initialize structured logging
setup_logging()
logger = structlog.get_logger(__name__)

app = FastAPI(
    title="Hotel Revenue API",
    description="Rooms, reservations and payments with revenue and occupancy reports",
    version="1.0.0",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=ALLOWED_ORIGINS if "*" not in ALLOWED_ORIGINS else ["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(RequestIDMiddleware)

# Register routers
app.include_router(health_router, tags=["Health"])
app.include_router(metrics_router, tags=["Metrics"])
app.include_router(rooms_router, tags=["Rooms"])
app.include_router(reservations_router, tags=["Reservations"])
app.include_router(payments_router, tags=["Payments"])
app.include_router(reports_router, prefix="/reports", tags=["Reports"])


@app.on_event("startup")
def startup_event() -> None:
    """Provision the schema on the application engine."""
    from hotel_revenue.db.engine import create_schema, engine

    logger.info("FastAPI application starting up...")
    create_schema(engine)
    logger.info("FastAPI application initialized")
