"""Structured logging configuration via structlog.

Uses structlog.contextvars for async-safe per-request context (request_id).
Wraps stdlib logging so existing logging.getLogger(__name__) calls get structured output.
"""

import logging
import sys

import structlog

from app.core.config import settings

# Libraries that log every outbound request at INFO
_NOISY_LOGGERS = ("uvicorn.access", "httpx", "httpcore")


def configure_logging(
    log_level: str | None = None,
    json_logs: bool | None = None,
) -> None:
    """Configure structlog as the logging backend. Call once at app startup.

    Defaults come from settings: console rendering in development, JSON elsewhere.
    """
    level = (log_level or settings.log_level).upper()
    if json_logs is None:
        json_logs = settings.app_env != "development"

    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]

    renderer: structlog.types.Processor
    if json_logs:
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer()

    structlog.configure(
        processors=[
            *shared_processors,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    formatter = structlog.stdlib.ProcessorFormatter(
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            renderer,
        ],
        foreign_pre_chain=shared_processors,
    )

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(level)

    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
