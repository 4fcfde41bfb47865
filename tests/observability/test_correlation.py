"""
Tests for correlation ID propagation and logging setup.

System role: Verification of request tracing context
"""

import asyncio
import logging

from auditscan.observability import (
    clear_correlation_id,
    configure_logging,
    get_correlation_id,
    set_correlation_id,
)
from auditscan.observability.log_utils import log_exception_with_context, safe_log_value
from auditscan.observability.logger import CorrelationIdFilter


def test_set_generates_id_when_missing():
    value = set_correlation_id()

    assert value
    assert get_correlation_id() == value
    clear_correlation_id()
    assert get_correlation_id() == ""


def test_set_keeps_supplied_id():
    assert set_correlation_id("req-42") == "req-42"
    clear_correlation_id()


async def test_dispatched_task_inherits_correlation_id():
    set_correlation_id("req-7")

    async def read_id():
        return get_correlation_id()

    task = asyncio.create_task(read_id())
    clear_correlation_id()

    assert await task == "req-7"


def test_filter_injects_correlation_id():
    set_correlation_id("req-9")
    record = logging.LogRecord("auditscan", logging.INFO, __file__, 1, "msg", None, None)

    assert CorrelationIdFilter().filter(record) is True
    assert record.correlation_id == "req-9"
    clear_correlation_id()


def test_filter_uses_placeholder_outside_request():
    clear_correlation_id()
    record = logging.LogRecord("auditscan", logging.INFO, __file__, 1, "msg", None, None)

    CorrelationIdFilter().filter(record)

    assert record.correlation_id == "-"


def test_configure_logging_replaces_handlers():
    root = logging.getLogger()
    original_handlers = root.handlers[:]
    original_level = root.level
    try:
        configure_logging("debug")
        configure_logging("warning")

        assert len(root.handlers) == 1
        assert root.level == logging.WARNING
    finally:
        for handler in root.handlers[:]:
            root.removeHandler(handler)
        for handler in original_handlers:
            root.addHandler(handler)
        root.setLevel(original_level)


def test_safe_log_value_truncates():
    assert safe_log_value("x" * 10, max_length=4).startswith("xxxx")
    assert safe_log_value("x" * 1000).endswith("(truncated, 1000 total)")


def test_log_exception_with_context(caplog):
    logger = logging.getLogger("auditscan.tests")

    with caplog.at_level(logging.ERROR, logger="auditscan.tests"):
        log_exception_with_context(logger, "Compensation failed", RuntimeError("boom"), scan_id="s-1")

    record = caplog.records[-1]
    assert record.getMessage() == "Compensation failed"
    assert record.error_type == "RuntimeError"
    assert record.error_msg == "boom"
    assert record.scan_id == "s-1"
