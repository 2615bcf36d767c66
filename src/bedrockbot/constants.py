# Copyright (c) 2025-2026 provide.io llc
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Shared constants for bedrockbot."""

from __future__ import annotations

# Default server settings
DEFAULT_HOST = "localhost"
DEFAULT_PORT = 19132
DEFAULT_CHUNK_RADIUS = 4

# Scripted scenario
DEFAULT_COMMAND = "/tpa"
DEFAULT_SLOT_INDEX = 16
COMMAND_REQUEST_VERSION = "52"

# Default timings (seconds)
DEFAULT_SETTLE_DELAY_S = 0.6
DEFAULT_READINESS_FALLBACK_S = 15.0
DEFAULT_UI_RESPONSE_TIMEOUT_S = 10.0
DEFAULT_INTERACTION_CONFIRM_S = 5.0
DEFAULT_LOGIN_TIMEOUT_S = 60.0
DEFAULT_CONNECT_TIMEOUT_S = 30.0
DEFAULT_RESTART_DELAY_S = 2.0

# Reconnect backoff (milliseconds)
RECONNECT_BASE_MS = 2000
RECONNECT_MAX_MS = 60000
RECONNECT_MAX_EXPONENT = 6
RECONNECT_JITTER_MS = 500
RECONNECT_MIN_MS = 250
RECONNECT_COOLDOWN_MS = 30000
RECONNECT_COOLDOWN_REASONS = ("already online",)

# Transport errors that are known decoder noise on some servers
BENIGN_ERROR_MARKERS = ("Read error", "Invalid tag")
CONNECT_TIMEOUT_MARKER = "connect timed out"

# Player inventory geometry
PLAYER_INVENTORY_SIZE = 36

# Session limits
DEFAULT_MAX_SESSIONS = 10
HISTORY_LIMIT = 200
