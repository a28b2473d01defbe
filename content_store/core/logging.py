"""
Structured logging configuration using structlog.

Storage events are rendered as JSON lines in production and as coloured
console output in development. Credentials never reach the output.
"""

import logging
import sys

import structlog
from structlog.types import EventDict, Processor, WrappedLogger

from content_store.core.config import Settings, get_settings

# Event keys whose values are replaced before rendering
SECRET_KEYS = frozenset({"password", "secret", "token"})
REDACTED = "***"

# Third-party loggers that echo every FTP command and reply
QUIET_LOGGERS = ("aioftp", "aioftp.client", "asyncio")


def drop_secrets(logger: WrappedLogger, method_name: str, event_dict: EventDict) -> EventDict:
    """Mask credential values bound to a log event."""
    for key in SECRET_KEYS.intersection(event_dict):
        event_dict[key] = REDACTED
    return event_dict


def build_processors(log_format: str) -> list[Processor]:
    """Processor chain for the given output format."""
    processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        drop_secrets,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
    ]

    if log_format == "json":
        processors += [
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=sys.stdout.isatty()))

    return processors


def configure_logging(settings: Settings | None = None) -> None:
    """
    Configure structured logging for the content store.

    Args:
        settings: Application settings. If None, uses default settings.
    """
    if settings is None:
        settings = get_settings()

    level = logging.getLevelName(settings.log_level)

    structlog.configure(
        processors=build_processors(settings.log_format),
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(format="%(message)s", stream=sys.stdout, level=level)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Get a structured logger, named after the calling module by convention."""
    return structlog.get_logger(name)
