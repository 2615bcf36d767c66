# Copyright (c) 2025-2026 provide.io llc
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Process-wide structlog setup.

Everything goes to stderr. The level comes from ``BEDROCKBOT_LOG_LEVEL``
(default WARNING). ``BEDROCKBOT_LOG_JSON=true`` switches the console
renderer for one JSON object per line, which is what fleet hosts ship to
their log collectors.
"""

from __future__ import annotations

import logging
import sys
from typing import TYPE_CHECKING, Any

import structlog

if TYPE_CHECKING:
    from bedrockbot.settings import Settings

__all__ = ["LOGGER_NAME", "get_logger", "configure_logging"]

LOGGER_NAME = "bedrockbot"


def configure_logging(settings: Settings | None = None) -> None:
    """Configure structlog once at startup.

    Args:
        settings: Settings instance (read from the environment if None)
    """
    if settings is None:
        from bedrockbot.settings import Settings

        settings = Settings()

    level = logging.getLevelName(settings.log_level.upper())
    if not isinstance(level, int):
        level = logging.WARNING

    processors: list[Any] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
    ]
    if settings.log_json:
        processors += [structlog.processors.format_exc_info, structlog.processors.JSONRenderer()]
    else:
        processors.append(structlog.dev.ConsoleRenderer())

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(level),
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
    )


def get_logger(name: str | None = None) -> Any:
    """Return a structlog logger, named after the package by default."""
    return structlog.get_logger(name or LOGGER_NAME)
