# Copyright (c) 2025-2026 provide.io llc
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Logging layer for bot sessions."""

from __future__ import annotations

from bedrockbot.logging.config import configure_logging, get_logger
from bedrockbot.logging.session_logger import SessionLogger

__all__ = ["SessionLogger", "configure_logging", "get_logger"]
