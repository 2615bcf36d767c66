# Copyright (c) 2025-2026 provide.io llc
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Pytest configuration and fixtures."""

from __future__ import annotations

import random
from collections.abc import Callable

import pytest

from bedrockbot.clock import ManualClock
from bedrockbot.config import BotConfig, ReconnectConfig
from bedrockbot.core.session import Session
from bedrockbot.settings import Settings
from mock_transport import MockTransport


@pytest.fixture
def clock() -> ManualClock:
    """Deterministic clock; time only moves when a test advances it."""
    return ManualClock()


@pytest.fixture
def settings() -> Settings:
    return Settings(log_level="DEBUG", max_sessions=3)


@pytest.fixture
def bot_config() -> BotConfig:
    """Default config with jitter disabled so delays are exact."""
    return BotConfig(reconnect=ReconnectConfig(jitter_ms=0))


@pytest.fixture
def transports() -> list[MockTransport]:
    """Every transport handed out by ``transport_factory``, in order."""
    return []


@pytest.fixture
def transport_factory(transports: list[MockTransport]) -> Callable[[BotConfig], MockTransport]:
    def factory(config: BotConfig) -> MockTransport:
        transport = MockTransport()
        transports.append(transport)
        return transport

    return factory


@pytest.fixture
def session(
    bot_config: BotConfig,
    clock: ManualClock,
    settings: Settings,
    transport_factory: Callable[[BotConfig], MockTransport],
) -> Session:
    return Session(
        "bot-1",
        bot_config,
        transport_factory,
        clock=clock,
        settings=settings,
        rng=random.Random(7),
    )
