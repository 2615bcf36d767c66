# Copyright (c) 2025-2026 provide.io llc
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Configuration management for bot sessions."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from bedrockbot.constants import (
    COMMAND_REQUEST_VERSION,
    DEFAULT_CHUNK_RADIUS,
    DEFAULT_COMMAND,
    DEFAULT_CONNECT_TIMEOUT_S,
    DEFAULT_HOST,
    DEFAULT_INTERACTION_CONFIRM_S,
    DEFAULT_LOGIN_TIMEOUT_S,
    DEFAULT_PORT,
    DEFAULT_READINESS_FALLBACK_S,
    DEFAULT_SETTLE_DELAY_S,
    DEFAULT_SLOT_INDEX,
    DEFAULT_UI_RESPONSE_TIMEOUT_S,
    RECONNECT_BASE_MS,
    RECONNECT_COOLDOWN_MS,
    RECONNECT_COOLDOWN_REASONS,
    RECONNECT_JITTER_MS,
    RECONNECT_MAX_EXPONENT,
    RECONNECT_MAX_MS,
    RECONNECT_MIN_MS,
)
from bedrockbot.errors import ConfigError
from bedrockbot.logging import get_logger

logger = get_logger(__name__)


class ServerConfig(BaseModel):
    """Game server address."""

    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    version: str | None = None  # None lets the transport auto-detect

    model_config = ConfigDict(extra="ignore")


class AuthConfig(BaseModel):
    """Identity used for login."""

    username: str = "bot"
    offline: bool = False

    model_config = ConfigDict(extra="ignore")


class BehaviorConfig(BaseModel):
    """Scripted scenario run after the session becomes ready."""

    command: str = DEFAULT_COMMAND
    slot_index: int = DEFAULT_SLOT_INDEX
    auto_command: bool = True
    settle_delay_s: float = DEFAULT_SETTLE_DELAY_S
    chunk_radius: int = DEFAULT_CHUNK_RADIUS
    command_version: str = COMMAND_REQUEST_VERSION
    # Some servers never send early inventory content; treat game start as enough.
    assume_inventory_on_game_start: bool = False

    model_config = ConfigDict(extra="ignore")

    @field_validator("slot_index")
    @classmethod
    def _slot_non_negative(cls, value: int) -> int:
        if value < 0:
            raise ValueError("slot_index must be >= 0")
        return value


class TimeoutConfig(BaseModel):
    """Controller timeouts, in seconds."""

    readiness_fallback_s: float = DEFAULT_READINESS_FALLBACK_S
    ui_response_s: float = DEFAULT_UI_RESPONSE_TIMEOUT_S
    interaction_confirm_s: float = DEFAULT_INTERACTION_CONFIRM_S
    login_s: float = DEFAULT_LOGIN_TIMEOUT_S
    connect_s: float = DEFAULT_CONNECT_TIMEOUT_S

    model_config = ConfigDict(extra="ignore")


class ReconnectConfig(BaseModel):
    """Reconnect backoff, in milliseconds."""

    enabled: bool = True
    base_delay_ms: int = RECONNECT_BASE_MS
    max_delay_ms: int = RECONNECT_MAX_MS
    max_exponent: int = RECONNECT_MAX_EXPONENT
    jitter_ms: int = RECONNECT_JITTER_MS
    min_delay_ms: int = RECONNECT_MIN_MS
    cooldown_ms: int = RECONNECT_COOLDOWN_MS
    cooldown_reasons: list[str] = Field(default_factory=lambda: list(RECONNECT_COOLDOWN_REASONS))

    model_config = ConfigDict(extra="ignore")


class ChaosConfig(BaseModel):
    """Deterministic fault injection (resilience testing only)."""

    seed: int = 1
    fail_every_n_sends: int = 0
    noise_every_n_receives: int = 0
    disconnect_every_n_receives: int = 0
    max_jitter_ms: int = 0

    model_config = ConfigDict(extra="ignore")


class BotConfig(BaseModel):
    """Complete configuration for one bot session."""

    server: ServerConfig = Field(default_factory=ServerConfig)
    auth: AuthConfig = Field(default_factory=AuthConfig)
    behavior: BehaviorConfig = Field(default_factory=BehaviorConfig)
    timeouts: TimeoutConfig = Field(default_factory=TimeoutConfig)
    reconnect: ReconnectConfig = Field(default_factory=ReconnectConfig)
    chaos: ChaosConfig | None = None

    model_config = ConfigDict(extra="ignore")

    @classmethod
    def from_yaml(cls, path: Path | str) -> BotConfig:
        path = Path(path)
        logger.info("config_loading", path=str(path))
        try:
            data = yaml.safe_load(path.read_text()) or {}
            return cls.model_validate(data)
        except (OSError, yaml.YAMLError, ValidationError) as e:
            raise ConfigError(f"Invalid configuration in {path}: {e}") from e

    def to_yaml(self, path: Path | str) -> None:
        path = Path(path)
        logger.info("config_saving", path=str(path))
        data = self.model_dump(mode="json")
        path.write_text(yaml.dump(data, default_flow_style=False, sort_keys=False))

    @classmethod
    def from_command_payload(cls, payload: dict[str, Any], base: BotConfig | None = None) -> BotConfig:
        """Build a config from a remote ``create``/``start`` payload.

        Recognized keys: ``username``, ``server_ip``, ``server_port``,
        ``offline_mode``, ``auto_reconnect``, ``version``, ``command``,
        ``slot_index``.
        """
        config = (base or cls()).model_copy(deep=True)
        try:
            if "username" in payload:
                config.auth.username = str(payload["username"])
            if "offline_mode" in payload:
                config.auth.offline = bool(payload["offline_mode"])
            if "auto_reconnect" in payload:
                config.reconnect.enabled = bool(payload["auto_reconnect"])
            if "server_ip" in payload:
                config.server.host = str(payload["server_ip"])
            if "server_port" in payload:
                config.server.port = int(payload["server_port"])
            if payload.get("version"):
                config.server.version = str(payload["version"])
            if payload.get("command"):
                config.behavior.command = str(payload["command"])
            if "slot_index" in payload:
                config.behavior.slot_index = int(payload["slot_index"])
            return cls.model_validate(config.model_dump())
        except (TypeError, ValueError) as e:
            raise ConfigError(f"Invalid command payload: {e}") from e


def load_config(path: Path | str) -> BotConfig:
    return BotConfig.from_yaml(path)
