"""Tests for logging setup."""

import logging

import structlog

from pippin.core.logging import QUIET_LOGGERS, bind_tenant, configure_logging


def test_quiet_loggers_raised_outside_debug():
    configure_logging(debug=False)

    for name in QUIET_LOGGERS:
        assert logging.getLogger(name).level == logging.WARNING


def test_bound_tenant_is_in_context():
    structlog.contextvars.clear_contextvars()
    bind_tenant("acme")

    assert structlog.contextvars.get_contextvars() == {"tenant_id": "acme"}
    structlog.contextvars.clear_contextvars()
