"""
Tests for logging setup.
"""

import logging

import structlog

from eventdesk.core.logging import get_logger, setup_logging


def test_setup_logging_is_repeatable():
    """Re-running setup replaces the structlog handler instead of stacking it."""
    setup_logging()
    setup_logging()

    handlers = [
        h for h in logging.getLogger().handlers
        if isinstance(h.formatter, structlog.stdlib.ProcessorFormatter)
    ]
    assert len(handlers) == 1


def test_get_logger_accepts_keyword_context():
    setup_logging()
    get_logger("eventdesk.tests").info("employee_created", service_number=1)
