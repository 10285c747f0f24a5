"""Tests for structured logging configuration.

Run with: pytest tests/test_logging_config.py -v --noconftest
"""

import json
import logging

import structlog


def test_configure_logging_sets_root_level():
    from app.core.logging_config import configure_logging

    configure_logging(log_level="warning")

    assert logging.getLogger().level == logging.WARNING
    configure_logging()


def test_outbound_http_loggers_are_quieted():
    from app.core.logging_config import configure_logging

    configure_logging(log_level="DEBUG")

    assert logging.getLogger("httpx").level == logging.WARNING
    assert logging.getLogger("httpcore").level == logging.WARNING


def test_json_logs_carry_request_id_and_event_fields(capsys):
    from app.core.logging_config import configure_logging

    configure_logging(log_level="INFO", json_logs=True)
    structlog.contextvars.clear_contextvars()
    structlog.contextvars.bind_contextvars(request_id="test-123")

    structlog.stdlib.get_logger("test.weaviate").info(
        "weaviate_query_started", url="http://weaviate.test/v1/graphql"
    )

    structlog.contextvars.clear_contextvars()
    line = capsys.readouterr().out.strip().splitlines()[-1]
    record = json.loads(line)
    assert record["event"] == "weaviate_query_started"
    assert record["request_id"] == "test-123"
    assert record["url"] == "http://weaviate.test/v1/graphql"
    assert record["level"] == "info"
    configure_logging()


def test_stdlib_logger_is_rendered_as_json(capsys):
    from app.core.logging_config import configure_logging

    configure_logging(json_logs=True)

    logging.getLogger("test.stdlib").warning("plain stdlib message")

    record = json.loads(capsys.readouterr().out.strip().splitlines()[-1])
    assert record["event"] == "plain stdlib message"
    assert record["logger"] == "test.stdlib"
    configure_logging()
