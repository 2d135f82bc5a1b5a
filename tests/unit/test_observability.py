"""Unit tests for structured logging utilities in ``observability``."""

from __future__ import annotations

import logging

import pytest

from lib_food_data import bind_trace_id, get_logger
from lib_food_data.observability import TRACE_ID, log_info, make_event


def test_null_handler_present() -> None:
    """Package logger should always include a NullHandler to stay silent by default."""

    logger = get_logger()
    assert logger.name == "lib_food_data"
    assert any(isinstance(handler, logging.NullHandler) for handler in logger.handlers)


def test_trace_id_in_log(caplog: pytest.LogCaptureFixture) -> None:
    """Structured logs should include the bound trace identifier and contextual fields."""

    caplog.set_level(logging.INFO, logger="lib_food_data")
    bind_trace_id("trace-123")
    try:
        log_info("tree_loaded", path="/data/ingredients", files=3)
    finally:
        bind_trace_id(None)
    record = caplog.records[-1]
    assert record.getMessage() == "tree_loaded"
    assert getattr(record, "context") == {"trace_id": "trace-123", "path": "/data/ingredients", "files": 3}


def test_bind_trace_id_clears_context() -> None:
    bind_trace_id("trace-temp")
    bind_trace_id(None)
    assert TRACE_ID.get() is None


def test_make_event_merges_optional_payload() -> None:
    assert make_event("ingredients", None, {"count": 3}) == {"category": "ingredients", "path": None, "count": 3}
    assert make_event(None, "/data") == {"category": None, "path": "/data"}
