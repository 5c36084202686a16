"""
structlog configuration for the API and the sample-data script.

Events are snake_case names with key/value context, e.g. ``write_rejected``
(table, operation, reason, key columns) from the table writers,
``sample_load_completed`` (loaded and rejected counts) from the loader and
``schema_provisioned`` from the engine module. The request middleware binds
``request_id`` through contextvars, so every event logged while handling a
request carries it.
"""

from __future__ import annotations

import logging
import sys
from typing import Any, Callable, MutableMapping, cast

import structlog

from hotel_revenue.config import LOG_LEVEL

# Type alias for structlog processor
Processor = Callable[[Any, str, MutableMapping[str, Any]], Any]


def setup_logging() -> None:
    """
    Configure stdlib logging and structlog once per process.

    LOG_LEVEL=INFO renders JSON lines; any other level renders colored
    console output. SQLAlchemy and uvicorn access logs are held at WARNING so
    write rejections are not buried under SQL echo.
    """
    logging.basicConfig(
        format="[%(asctime)s] %(levelname)s in %(name)s:%(lineno)d: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stdout,
        level=LOG_LEVEL,
    )

    # SQL echo is controlled by the engine, not the root level
    for noisy_logger in ["sqlalchemy.engine", "sqlalchemy.pool", "uvicorn.access"]:
        logging.getLogger(noisy_logger).setLevel(logging.WARNING)

    renderer: Processor = cast(
        Processor,
        (
            structlog.processors.JSONRenderer()
            if LOG_LEVEL == "INFO"
            else structlog.dev.ConsoleRenderer(colors=True)
        ),
    )

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.StackInfoRenderer(),
            structlog.dev.set_exc_info,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(logging.getLevelName(LOG_LEVEL)),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )
