"""structlog configuration for threadclean.

The library only logs through `structlog.get_logger()`; hosts that want the
standard processor chain call `configure_logging()` once at startup.
"""

from __future__ import annotations

import logging

import structlog

from threadclean.config import Settings, get_settings


def _get_log_level(settings: Settings) -> int:
    return getattr(logging, settings.log_level.upper(), logging.INFO)


def build_processors(settings: Settings) -> list:
    renderer = (
        structlog.processors.JSONRenderer()
        if settings.log_format == "json"
        else structlog.dev.ConsoleRenderer()
    )
    return [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        renderer,
    ]


def configure_logging(settings: Settings | None = None) -> None:
    """Configure structlog for the host process."""
    settings = settings or get_settings()
    structlog.configure(
        processors=build_processors(settings),
        wrapper_class=structlog.make_filtering_bound_logger(_get_log_level(settings)),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )
