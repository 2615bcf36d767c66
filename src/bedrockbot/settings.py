# Copyright (c) 2025-2026 provide.io llc
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Application settings."""

from __future__ import annotations

from pydantic_settings import BaseSettings, SettingsConfigDict

from bedrockbot.constants import DEFAULT_MAX_SESSIONS


class Settings(BaseSettings):
    log_level: str = "WARNING"
    log_packets: bool = True
    log_state_changes: bool = True
    log_json: bool = False
    max_sessions: int = DEFAULT_MAX_SESSIONS

    model_config = SettingsConfigDict(
        env_prefix="BEDROCKBOT_",
        env_nested_delimiter="__",
        extra="ignore",
    )
