"""
Structured logging configuration using structlog.

The API logs JSON lines to stdout; the CLI logs to stderr so its stdout stays
a clean JSON document.
"""

import logging
from typing import Optional, TextIO

import structlog

from .config import settings


def setup_logging(
    stream: Optional[TextIO] = None,
    level: Optional[str] = None,
    json_output: Optional[bool] = None,
) -> None:
    """
    Configure structlog.

    Processors: context variables (request_id etc.), log level, exception
    info, ISO timestamp, then JSON or console rendering.

    Args:
        stream: Output stream for log lines (default: stdout)
        level: Minimum level name (default: LOG_LEVEL)
        json_output: Render JSON instead of console lines (default: LOG_JSON)
    """
    level_name = (level or settings.log_level).upper()
    use_json = settings.log_json if json_output is None else json_output

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.StackInfoRenderer(),
            structlog.dev.set_exc_info,
            structlog.processors.TimeStamper(fmt="iso"),
            (
                structlog.processors.JSONRenderer(ensure_ascii=False)
                if use_json
                else structlog.dev.ConsoleRenderer()
            ),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(
            logging.getLevelName(level_name)
        ),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=stream),
        cache_logger_on_first_use=True,
    )
