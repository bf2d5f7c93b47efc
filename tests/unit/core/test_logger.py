"""
Unit tests for the shared logger helpers.
"""

import json
import logging

import pytest

from app.core.shared import (
    ColoredFormatter,
    JSONFormatter,
    configure_logging,
    get_logger,
    get_repository_logger,
    get_service_logger,
)


def make_record(message: str = "hello", extra_data: dict | None = None) -> logging.LogRecord:
    record = logging.LogRecord("test", logging.INFO, __file__, 10, message, None, None)
    if extra_data is not None:
        record.extra_data = extra_data
    return record


@pytest.mark.unit
def test_json_formatter_includes_extra_data():
    output = json.loads(JSONFormatter().format(make_record(extra_data={"customer_id": 5})))

    assert output["message"] == "hello"
    assert output["level"] == "INFO"
    assert output["extra"] == {"customer_id": 5}


@pytest.mark.unit
def test_colored_formatter_does_not_mutate_record():
    record = make_record(extra_data={"fitter_id": 7})

    output = ColoredFormatter("%(levelname)s %(message)s").format(record)

    assert "fitter_id=7" in output
    assert record.levelname == "INFO"


@pytest.mark.unit
def test_context_logger_merges_context(caplog):
    logger = get_logger("tests.context", {"component": "test"}).with_context(request="abc")

    with caplog.at_level(logging.INFO, logger="tests.context"):
        logger.info("Customer created", customer_id=1)

    record = caplog.records[-1]
    assert record.extra_data == {"component": "test", "request": "abc", "customer_id": 1}
    assert logger.context == {"component": "test", "request": "abc"}


@pytest.mark.unit
def test_service_logger_name():
    logger = get_service_logger("customers")

    assert logger.name == "service.customers"
    assert logger.context["service"] == "customers"


@pytest.mark.unit
def test_repository_logger_name():
    logger = get_repository_logger("customers")

    assert logger.name == "repository.customers"
    assert logger.context == {"component": "repository", "repository": "customers"}


@pytest.mark.unit
def test_configure_logging_quiets_noisy_loggers():
    root = logging.getLogger()
    previous_handlers, previous_level = list(root.handlers), root.level
    try:
        configure_logging(level="INFO", format_type="json")

        assert logging.getLogger("sqlalchemy.engine").level == logging.WARNING
        assert isinstance(root.handlers[0].formatter, JSONFormatter)
    finally:
        root.handlers[:] = previous_handlers
        root.setLevel(previous_level)
