"""Tests for the reconnect supervisor."""

from __future__ import annotations

import asyncio
import random

import pytest

from bedrockbot.clock import ManualClock
from bedrockbot.config import ReconnectConfig
from bedrockbot.core.reconnect import ReconnectSupervisor, compute_base_delay_ms


class Connector:
    def __init__(self) -> None:
        self.calls = 0
        self.connected = False

    async def connect(self) -> None:
        self.calls += 1

    def is_connected(self) -> bool:
        return self.connected


def make_supervisor(clock: ManualClock, connector: Connector, **policy: object) -> ReconnectSupervisor:
    return ReconnectSupervisor(
        clock,
        connector.connect,
        connector.is_connected,
        policy=ReconnectConfig(**{"jitter_ms": 0, **policy}),
        rng=random.Random(3),
    )


@pytest.mark.parametrize(
    ("attempt", "expected"),
    [(0, 2000), (1, 4000), (2, 8000), (3, 16000), (4, 32000), (5, 60000), (6, 60000), (7, 60000), (50, 60000)],
)
def test_base_delay_doubles_then_caps(attempt: int, expected: int) -> None:
    assert compute_base_delay_ms(attempt, base_ms=2000, max_ms=60000, max_exponent=6) == expected


def test_base_delay_is_monotonic() -> None:
    delays = [compute_base_delay_ms(a, base_ms=2000, max_ms=60000, max_exponent=6) for a in range(12)]
    assert delays == sorted(delays)


def test_exponent_cap_applies_before_max() -> None:
    assert compute_base_delay_ms(10, base_ms=100, max_ms=10**9, max_exponent=6) == 6400


def test_nothing_scheduled_without_user_connect(clock: ManualClock) -> None:
    supervisor = make_supervisor(clock, Connector())
    assert supervisor.schedule_reconnect("lost") is None
    assert not supervisor.scheduled


def test_nothing_scheduled_while_connected(clock: ManualClock) -> None:
    connector = Connector()
    connector.connected = True
    supervisor = make_supervisor(clock, connector)
    supervisor.mark_user_connect()

    assert supervisor.schedule_reconnect("lost") is None


def test_scheduling_is_idempotent(clock: ManualClock) -> None:
    supervisor = make_supervisor(clock, Connector())
    supervisor.mark_user_connect()

    assert supervisor.schedule_reconnect("lost") == 2000
    assert supervisor.schedule_reconnect("lost again") is None
    assert supervisor.attempt == 1
    assert len(clock.pending()) == 1


def test_attempt_grows_backoff(clock: ManualClock) -> None:
    supervisor = make_supervisor(clock, Connector())
    supervisor.mark_user_connect()

    delays = []
    for _ in range(4):
        delays.append(supervisor.schedule_reconnect("lost"))
        supervisor.cancel()

    assert delays == [2000, 4000, 8000, 16000]


def test_jitter_and_floor() -> None:
    clock = ManualClock()
    connector = Connector()
    supervisor = ReconnectSupervisor(
        clock,
        connector.connect,
        connector.is_connected,
        policy=ReconnectConfig(base_delay_ms=10, jitter_ms=500, min_delay_ms=250),
        rng=random.Random(1),
    )
    supervisor.mark_user_connect()

    delay = supervisor.schedule_reconnect("lost")
    assert delay is not None
    assert 250 <= delay <= 510


def test_already_online_rejection_uses_cooldown(clock: ManualClock) -> None:
    supervisor = make_supervisor(clock, Connector())
    supervisor.mark_user_connect()

    supervisor.note_rejection("You are Already Online on this server")
    assert supervisor.schedule_reconnect("closed") == 30000

    # The override is one-shot.
    supervisor.cancel()
    assert supervisor.schedule_reconnect("closed") == 4000


def test_other_rejections_keep_backoff(clock: ManualClock) -> None:
    supervisor = make_supervisor(clock, Connector())
    supervisor.mark_user_connect()

    supervisor.note_rejection("server full")
    assert supervisor.pending_reason == "kicked: server full"
    assert supervisor.schedule_reconnect("closed") == 2000


def test_explicit_delay_wins(clock: ManualClock) -> None:
    supervisor = make_supervisor(clock, Connector())
    supervisor.mark_user_connect()
    assert supervisor.schedule_reconnect("lost", explicit_delay_ms=900) == 900


def test_user_disconnect_resets_and_cancels(clock: ManualClock) -> None:
    supervisor = make_supervisor(clock, Connector())
    supervisor.mark_user_connect()
    supervisor.schedule_reconnect("lost")

    supervisor.mark_user_disconnect()

    assert not supervisor.scheduled
    assert supervisor.attempt == 0
    assert supervisor.schedule_reconnect("lost") is None


def test_disabled_policy_never_schedules(clock: ManualClock) -> None:
    supervisor = make_supervisor(clock, Connector(), enabled=False)
    supervisor.mark_user_connect()
    assert supervisor.schedule_reconnect("lost") is None


@pytest.mark.asyncio
async def test_timer_fires_connect_callback(clock: ManualClock) -> None:
    connector = Connector()
    supervisor = make_supervisor(clock, connector)
    supervisor.mark_user_connect()
    supervisor.schedule_reconnect("lost")

    clock.advance(1.5)
    await asyncio.sleep(0)
    assert connector.calls == 0

    clock.advance(0.5)
    await asyncio.sleep(0)
    assert connector.calls == 1
    assert not supervisor.scheduled

    status = supervisor.status()
    assert status["attempt"] == 1
    assert status["want_connected"] is True


@pytest.mark.asyncio
async def test_fire_skipped_after_user_disconnect(clock: ManualClock) -> None:
    connector = Connector()
    supervisor = make_supervisor(clock, connector)
    supervisor.mark_user_connect()
    supervisor.schedule_reconnect("lost")
    supervisor.want_connected = False

    clock.advance(5)
    await asyncio.sleep(0)

    assert connector.calls == 0
    await supervisor.stop()
