"""Logging configuration for faketake."""

import logging
import sys
from typing import Any

import structlog
from structlog.types import Processor

from faketake.config import Settings, get_settings
from faketake.exceptions import FaketakeError


def setup_logging(level: str | None = None, settings: Settings | None = None) -> None:
    """Configure structured logging to stderr.

    The network and container names are bound as context variables, so every
    event of a run carries them without each call site passing them along.

    Args:
        level: Overrides the configured log level (e.g. for --verbose)
        settings: Settings to read; defaults to the cached settings
    """
    settings = settings or get_settings()

    structlog.contextvars.clear_contextvars()
    structlog.contextvars.bind_contextvars(
        network=settings.network_name,
        container=settings.container_name,
    )

    processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.format_exc_info,
    ]

    if settings.log_format == "json":
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(
            structlog.dev.ConsoleRenderer(
                colors=sys.stderr.isatty(),
                exception_formatter=structlog.dev.plain_traceback,
            )
        )

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    # stdout belongs to the container's pass-through output
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stderr,
        level=getattr(logging, level or settings.log_level),
        force=True,
    )


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Get a logger instance."""
    return structlog.get_logger(name)


def log_error(
    logger: structlog.stdlib.BoundLogger,
    error: Exception,
    operation: str,
    **kwargs: Any,
) -> None:
    """Log a failed docker operation, with the error's own context if it has one."""
    context: dict[str, Any] = {
        "operation": operation,
        "error_type": type(error).__name__,
        "error_message": str(error),
    }
    if isinstance(error, FaketakeError):
        context.update(error.context)
    context.update(kwargs)

    logger.error("operation_failed", **context)
