"""
Logging setup — structlog.

    from checkout_flow._log import configure_logging
    configure_logging("INFO")

Modules get their logger with ``structlog.get_logger(__name__)`` and log
snake_case events with key/value context.
"""

from __future__ import annotations

import logging

import structlog

_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def configure_logging(level: str = "INFO", json: bool = False) -> None:
    level = level.upper()
    if level not in _LEVELS:
        level = "INFO"

    renderer: structlog.types.Processor = (
        structlog.processors.JSONRenderer() if json else structlog.dev.ConsoleRenderer()
    )

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(getattr(logging, level)),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=False,
    )


__all__ = ("configure_logging",)
