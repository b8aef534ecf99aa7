#!/usr/bin/env python3
"""
Purpose:
    Configures structlog for docschema: ISO timestamps, console rendering to
    stderr, and a level filter taken from configuration.
"""

from __future__ import annotations

import logging
import sys
from typing import Any, Union

import structlog


def configure_logging(level: Union[str, int] = "INFO") -> None:
    """
    Configure structlog process-wide.

    Args:
        level: logging level name (e.g. "DEBUG") or number.

    Raises:
        ValueError: if `level` names no known logging level.
    """
    structlog.configure(
        processors=[
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer(),
        ],
        logger_factory=lambda *args: structlog.PrintLogger(file=sys.stderr),
        wrapper_class=structlog.make_filtering_bound_logger(_level_number(level)),
        context_class=dict,
        cache_logger_on_first_use=False,
    )


def get_logger(name: str, **initial_values: Any) -> Any:
    """Return a structlog logger bound to `name` and any initial context."""
    return structlog.get_logger(name, **initial_values)


def _level_number(level: Union[str, int]) -> int:
    if isinstance(level, int):
        return level
    number = logging.getLevelName(str(level).strip().upper())
    if not isinstance(number, int):
        raise ValueError(f"Unknown log level {level!r}")
    return number
