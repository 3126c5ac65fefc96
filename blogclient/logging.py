"""Structured logging helpers."""

from __future__ import annotations

import logging

import structlog


def configure_logging(level: int = logging.INFO, *, json_output: bool = True) -> None:
    """Route structlog events to stdout, one JSON object per line by default.

    ``json_output=False`` switches to the colourless console renderer for
    local debugging.
    """

    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[logging.StreamHandler()],
    )
    renderer = (
        structlog.processors.JSONRenderer()
        if json_output
        else structlog.dev.ConsoleRenderer(colors=False)
    )
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        logger_factory=structlog.PrintLoggerFactory(),
        # Loggers must pick up sys.stdout at call time, not at first use.
        cache_logger_on_first_use=False,
    )


def bind_context(**values) -> None:
    """Attach key/value pairs to every event logged from the current task."""

    structlog.contextvars.bind_contextvars(**values)


logger = structlog.get_logger()

__all__ = ["bind_context", "configure_logging", "logger"]
