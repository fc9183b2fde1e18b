"""Structured logging setup for the records core."""

import logging
import sys

import structlog
from structlog.typing import Processor

from medrecords.config import Settings

# Chatty third-party loggers, raised to WARNING unless debugging
NOISY_LOGGERS = ("sqlalchemy.engine", "sqlalchemy.pool")


def _renderer(log_format: str) -> list[Processor]:
    if log_format == "console":
        return [structlog.processors.format_exc_info, structlog.dev.ConsoleRenderer()]
    return [structlog.processors.dict_tracebacks, structlog.processors.JSONRenderer()]


def configure_logging(settings: Settings) -> None:
    """
    Route structlog events through stdlib logging.

    Every event carries the application name and environment. Pool, cache
    and store events (``pool_exhausted``, ``cache_refreshed``,
    ``store_operation_failed`` ...) are rendered as JSON lines unless
    ``LOG_FORMAT=console``.

    Args:
        settings: Application settings supplying level, format and labels
    """
    level = logging.getLevelNamesMapping().get(settings.log_level.upper(), logging.INFO)

    processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
        *_renderer(settings.log_format),
    ]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )
    structlog.contextvars.bind_contextvars(
        app=settings.app_name,
        environment=settings.environment,
    )

    logging.basicConfig(format="%(message)s", stream=sys.stdout, level=level)
    logging.getLogger("medrecords").setLevel(level)
    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.DEBUG if settings.debug else logging.WARNING)
