"""
Structured logging setup - Assessment Platform
assessment_platform/core/logging.py

Configures structlog once for the service: ISO timestamps, log level,
JSON output (LOG_FORMAT=json) or a console renderer for local runs.
Engine modules only call structlog.get_logger(); nothing here is imported
by the scoring package.
"""

import logging
import sys
from typing import Any, List

import structlog


def configure_logging(level: str = "INFO", fmt: str = "json") -> None:
    """Configure stdlib logging and structlog with the same level."""
    level_value = getattr(logging, level.upper(), logging.INFO)
    logging.basicConfig(
        level=level_value,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
        stream=sys.stdout,
    )

    processors: List[Any] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]
    if fmt == "json":
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=sys.stdout.isatty()))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(level_value),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stdout),
        cache_logger_on_first_use=True,
    )


def bind_candidate(candidate_id: str) -> None:
    """Attach candidate_id to every log line of the current request context."""
    structlog.contextvars.bind_contextvars(candidate_id=candidate_id)


def clear_context() -> None:
    structlog.contextvars.clear_contextvars()
