"""
Structured Logging Configuration
================================

structlog setup shared by the API, the CLI and library callers.

Rendering follows ``Settings.log_format``: JSON lines for log shippers,
a console renderer for people. ``auto`` picks JSON in production.
"""

import logging
import sys
from typing import Any, TextIO

import structlog

from insight_ingest.config.settings import Settings, get_settings


def _use_json(settings: Settings) -> bool:
    if settings.log_format == "auto":
        return settings.is_production
    return settings.log_format == "json"


def configure_logging(
    stream: TextIO | None = None,
    settings: Settings | None = None,
) -> None:
    """
    Configure structured logging for the application.

    Args:
        stream: Output stream (defaults to stdout; the CLI passes stderr
            so its JSON result stays alone on stdout)
        settings: Explicit settings (defaults to get_settings())
    """
    settings = settings or get_settings()
    stream = stream or sys.stdout

    logging.basicConfig(
        format="%(message)s",
        stream=stream,
        level=getattr(logging, settings.log_level, logging.INFO),
    )

    processors: list[Any] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
    ]

    if _use_json(settings):
        processors += [
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=stream.isatty()))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Get a structlog logger, typically for ``__name__``."""
    return structlog.get_logger(name)
