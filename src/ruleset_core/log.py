"""structlog setup driven by ``Settings.log_level`` and ``Settings.log_format``."""

import logging

import structlog

from ruleset_core.config import Settings, get_settings


def configure_logging(settings: Settings | None = None) -> None:
    """Configure structlog for console or JSON output.

    Args:
        settings: Settings to read from; defaults to the cached instance
    """
    if settings is None:
        settings = get_settings()

    level = logging.getLevelName(settings.log_level.upper())
    if not isinstance(level, int):
        level = logging.INFO

    renderer: structlog.types.Processor
    if settings.log_format == "json":
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer()

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        cache_logger_on_first_use=False,
    )
