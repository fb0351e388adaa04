"""
core/logging.py
---------------
structlog setup for the board service.

The active tenant is bound into structlog.contextvars by the request
dependency, so service log lines carry tenant_id without passing it around.
"""

import logging
import sys
from typing import Optional

import structlog

from pippin.core.config import settings

# Per-query and per-request chatter; only surfaced when DEBUG is on.
QUIET_LOGGERS = ("uvicorn.access", "sqlalchemy.engine", "aiosqlite")


def _renderer(debug: bool):
    if debug:
        return structlog.dev.ConsoleRenderer()
    return structlog.processors.JSONRenderer()


def configure_logging(debug: Optional[bool] = None) -> None:
    if debug is None:
        debug = settings.DEBUG
    level = logging.DEBUG if debug else logging.INFO

    logging.basicConfig(format="%(message)s", stream=sys.stdout, level=level)
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(level if debug else logging.WARNING)

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.processors.format_exc_info,
            _renderer(debug),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )


def bind_tenant(tenant_id: str) -> None:
    """Tag all log lines for the rest of this request with the tenant."""
    structlog.contextvars.bind_contextvars(tenant_id=tenant_id)


def get_logger(name: str = __name__):
    return structlog.get_logger(name)
