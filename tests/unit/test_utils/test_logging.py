"""Unit tests for logging helpers."""

import io
import logging
import sys
from collections.abc import Generator

import pytest

from litequery.exceptions import PrepareError

from litequery.utils.logging import (
    CorrelationIDFilter,
    StructuredFormatter,
    configure_logging,
    get_correlation_id,
    get_logger,
    log_with_context,
    set_correlation_id,
)
from litequery.utils.serializers import from_json


@pytest.fixture(autouse=True)
def _reset_correlation_id():
    yield
    set_correlation_id(None)


def _record(message: str = "hello", **extra: object) -> logging.LogRecord:
    record = logging.LogRecord("litequery.test", logging.INFO, __file__, 10, message, (), None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_get_logger_namespaces_names() -> None:
    assert get_logger().name == "litequery"
    assert get_logger("adapters.sqlite").name == "litequery.adapters.sqlite"
    assert get_logger("litequery.builder").name == "litequery.builder"


def test_get_logger_adds_single_filter() -> None:
    logger = get_logger("test.filters")
    get_logger("test.filters")

    assert sum(isinstance(f, CorrelationIDFilter) for f in logger.filters) == 1


def test_correlation_id_roundtrip() -> None:
    assert get_correlation_id() is None
    set_correlation_id("abc")
    assert get_correlation_id() == "abc"


def test_structured_formatter() -> None:
    set_correlation_id("req-1")
    payload = from_json(StructuredFormatter().format(_record(extra_fields={"operation": "SELECT"})))

    assert payload["message"] == "hello"
    assert payload["level"] == "INFO"
    assert payload["logger"] == "litequery.test"
    assert payload["correlation_id"] == "req-1"
    assert payload["operation"] == "SELECT"
    assert "exception" not in payload


def test_correlation_filter_sets_attribute() -> None:
    set_correlation_id("req-2")
    record = _record()

    assert CorrelationIDFilter().filter(record) is True
    assert record.correlation_id == "req-2"  # type: ignore[attr-defined]


def test_log_with_context(caplog: pytest.LogCaptureFixture) -> None:
    logger = get_logger("test.context")
    with caplog.at_level(logging.DEBUG, logger="litequery.test.context"):
        log_with_context(logger, logging.DEBUG, "SELECT 1", operation="SELECT", parameter_count=0)

    assert caplog.records[-1].getMessage() == "SELECT 1"
    assert caplog.records[-1].extra_fields == {"operation": "SELECT", "parameter_count": 0}  # type: ignore[attr-defined]


def test_log_with_context_skips_disabled_level(caplog: pytest.LogCaptureFixture) -> None:
    logger = get_logger("test.disabled")
    with caplog.at_level(logging.WARNING, logger="litequery.test.disabled"):
        log_with_context(logger, logging.DEBUG, "hidden")

    assert not caplog.records


@pytest.fixture
def restore_root_logger() -> Generator[logging.Logger, None, None]:
    root_logger = logging.getLogger("litequery")
    handlers, level, propagate = list(root_logger.handlers), root_logger.level, root_logger.propagate
    yield root_logger
    root_logger.handlers[:] = handlers
    root_logger.setLevel(level)
    root_logger.propagate = propagate


def test_structured_formatter_drops_empty_fields() -> None:
    payload = from_json(StructuredFormatter().format(_record(extra_fields={"sql": "SELECT 1", "error_code": None})))

    assert payload["sql"] == "SELECT 1"
    assert "error_code" not in payload


def test_structured_formatter_database_error_fields() -> None:
    error = PrepareError("Failed to prepare statement", code=1, sql="SELEC 1")
    try:
        raise error
    except PrepareError:
        record = _record("Statement failed")
        record.exc_info = sys.exc_info()

    payload = from_json(StructuredFormatter().format(record))

    assert payload["error"] == "PrepareError"
    assert payload["error_kind"] == "prepare"
    assert payload["error_code"] == 1
    assert payload["sql"] == "SELEC 1"
    assert "PrepareError" in payload["exception"]


@pytest.mark.usefixtures("restore_root_logger")
def test_configure_logging_structured() -> None:
    stream = io.StringIO()
    root_logger = configure_logging("debug", stream=stream)

    log_with_context(get_logger("test.configured"), logging.DEBUG, "Executing statement", operation="SELECT")

    assert root_logger.level == logging.DEBUG
    assert root_logger.propagate is False
    payload = from_json(stream.getvalue().splitlines()[-1])
    assert payload["logger"] == "litequery.test.configured"
    assert payload["operation"] == "SELECT"


@pytest.mark.usefixtures("restore_root_logger")
def test_configure_logging_simple_with_extra_handlers() -> None:
    stream = io.StringIO()
    extra = logging.StreamHandler(io.StringIO())
    root_logger = configure_logging(logging.INFO, structured=False, stream=stream, handlers=[extra])

    get_logger("test.simple").info("hello")

    assert len(root_logger.handlers) == 2
    assert stream.getvalue().rstrip().endswith("litequery.test.simple - INFO - hello")
