"""structlog configuration for the topo-strict command line.

Library modules obtain loggers with ``structlog.get_logger(__name__)`` and
emit snake_case events with keyword fields; nothing is configured at import
time. The command line calls ``configure_logging`` once at startup.
"""

from __future__ import annotations

import logging
import sys
from typing import IO, Any

import structlog


def configure_logging(
    level: int | str = "WARNING",
    *,
    json_logs: bool = False,
    stream: IO[str] | None = None,
) -> None:
    """Route structlog events at or above ``level`` to ``stream`` (stderr by default)."""

    renderer: Any
    if json_logs:
        renderer = structlog.processors.JSONRenderer(sort_keys=True)
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=False)

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(_parse_log_level(level)),
        logger_factory=structlog.PrintLoggerFactory(file=stream or sys.stderr),
        cache_logger_on_first_use=False,
    )


def reset_logging() -> None:
    """Restore structlog's default configuration."""

    structlog.reset_defaults()


def _parse_log_level(value: int | str) -> int:
    if isinstance(value, int):
        return value

    parsed = logging.getLevelName(value.strip().upper())
    if isinstance(parsed, int):
        return parsed

    raise ValueError(f"unsupported logging level {value!r}")


__all__ = ["configure_logging", "reset_logging"]
