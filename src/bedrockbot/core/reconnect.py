# Copyright (c) 2025-2026 provide.io llc
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Reconnection supervisor with exponential backoff and jitter."""

from __future__ import annotations

import asyncio
import random
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel

from bedrockbot.config import ReconnectConfig
from bedrockbot.logging import get_logger

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

    from bedrockbot.clock import Clock, Timer

logger = get_logger(__name__)


class ReconnectStatus(BaseModel):
    want_connected: bool
    attempt: int
    scheduled: bool
    scheduled_delay_ms: int | None
    pending_reason: str | None
    pending_delay_override_ms: int | None


def compute_base_delay_ms(
    attempt: int,
    *,
    base_ms: int,
    max_ms: int,
    max_exponent: int,
) -> int:
    """Backoff before jitter: ``min(max, base * 2**min(attempt, max_exponent))``."""
    exponent = min(max(attempt, 0), max_exponent)
    return min(max_ms, base_ms * (2**exponent))


class ReconnectSupervisor:
    """Schedules at most one reconnect at a time for a single session.

    Reconnects only happen while ``want_connected`` is set (user connected
    and has not disconnected) and no connection is live.
    """

    def __init__(
        self,
        clock: Clock,
        connect_cb: Callable[[], Awaitable[Any]],
        is_connected: Callable[[], bool],
        *,
        policy: ReconnectConfig | None = None,
        rng: random.Random | None = None,
        log: Any = None,
    ) -> None:
        self._clock = clock
        self._connect_cb = connect_cb
        self._is_connected = is_connected
        self.policy = policy or ReconnectConfig()
        self._rng = rng or random.Random()
        self._log = log or logger
        self._timer: Timer | None = None
        self._task: asyncio.Task[Any] | None = None
        self.want_connected = False
        self.attempt = 0
        self.pending_reason: str | None = None
        self.pending_delay_override_ms: int | None = None
        self.scheduled_delay_ms: int | None = None

    @property
    def scheduled(self) -> bool:
        return self._timer is not None

    def base_delay_ms(self, attempt: int | None = None) -> int:
        return compute_base_delay_ms(
            self.attempt if attempt is None else attempt,
            base_ms=self.policy.base_delay_ms,
            max_ms=self.policy.max_delay_ms,
            max_exponent=self.policy.max_exponent,
        )

    def mark_user_connect(self) -> None:
        """User asked to connect: enable reconnects and drop any pending timer."""
        self.want_connected = True
        self.cancel()

    def mark_user_disconnect(self) -> None:
        """User asked to disconnect: disable reconnects and reset the backoff."""
        self.want_connected = False
        self.cancel()
        self.attempt = 0
        self.pending_reason = None
        self.pending_delay_override_ms = None

    def note_rejection(self, message: str) -> None:
        """Record why the server dropped us; some reasons impose a long cooldown."""
        self.pending_reason = f"kicked: {message or 'unknown'}"
        lowered = (message or "").lower()
        if any(marker.lower() in lowered for marker in self.policy.cooldown_reasons):
            self.pending_delay_override_ms = self.policy.cooldown_ms
            self._log.info("reconnect_cooldown_requested", reason=message, delay_ms=self.policy.cooldown_ms)

    def schedule_reconnect(self, reason: str, explicit_delay_ms: int | None = None) -> int | None:
        """Schedule one reconnect.

        Args:
            reason: Why the connection was lost (logged)
            explicit_delay_ms: Overrides the computed backoff when given

        Returns:
            The delay in milliseconds, or None if nothing was scheduled
        """
        if not self.policy.enabled or not self.want_connected:
            self._log.debug("reconnect_skipped", reason=reason, want_connected=self.want_connected)
            return None
        if self._is_connected():
            self._log.debug("reconnect_skipped_connected", reason=reason)
            return None
        if self._timer is not None:
            return None

        override = explicit_delay_ms if explicit_delay_ms is not None else self.pending_delay_override_ms
        reason = self.pending_reason or reason
        self.pending_reason = None
        self.pending_delay_override_ms = None

        base = override if override is not None else self.base_delay_ms()
        jitter = self._rng.randint(0, self.policy.jitter_ms) if self.policy.jitter_ms > 0 else 0
        delay_ms = max(self.policy.min_delay_ms, base + jitter)

        self.attempt += 1
        self.scheduled_delay_ms = delay_ms
        self._timer = self._clock.call_later(delay_ms / 1000.0, self._fire)
        self._log.warning(
            "reconnect_scheduled",
            reason=reason,
            delay_ms=delay_ms,
            attempt=self.attempt,
            override=override is not None,
        )
        return delay_ms

    def cancel(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None
            self.scheduled_delay_ms = None
            self._log.debug("reconnect_cancelled")

    def _fire(self) -> None:
        self._timer = None
        self.scheduled_delay_ms = None
        if not self.want_connected or self._is_connected():
            return
        self._log.info("reconnect_attempt", attempt=self.attempt)
        self._task = asyncio.get_running_loop().create_task(self._connect_cb())
        self._task.add_done_callback(self._on_connect_done)

    def _on_connect_done(self, task: asyncio.Task[Any]) -> None:
        if self._task is task:
            self._task = None
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            self._log.error("reconnect_failed", error=str(exc))

    async def stop(self) -> None:
        """Cancel the timer and any reconnect in flight."""
        self.cancel()
        task = self._task
        self._task = None
        if task is not None and not task.done() and task is not asyncio.current_task():
            task.cancel()
            try:
                await task
            except asyncio.CancelledError:
                pass

    def status(self) -> dict[str, Any]:
        return ReconnectStatus(
            want_connected=self.want_connected,
            attempt=self.attempt,
            scheduled=self.scheduled,
            scheduled_delay_ms=self.scheduled_delay_ms,
            pending_reason=self.pending_reason,
            pending_delay_override_ms=self.pending_delay_override_ms,
        ).model_dump()
