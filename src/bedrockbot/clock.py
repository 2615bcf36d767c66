# Copyright (c) 2025-2026 provide.io llc
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Clock abstraction used for every session timer.

Production code runs on ``AsyncioClock`` (``loop.call_later``). Tests drive
``ManualClock`` forward explicitly so timeouts are deterministic.
"""

from __future__ import annotations

import asyncio
import heapq
import itertools
import time
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Callable


class Timer(ABC):
    """Handle for a pending callback."""

    @abstractmethod
    def cancel(self) -> None:
        """Cancel the callback. Safe to call more than once."""

    @abstractmethod
    def cancelled(self) -> bool:
        """Return True if the timer was cancelled."""

    @property
    @abstractmethod
    def when(self) -> float:
        """Clock time at which the callback fires."""


class Clock(ABC):
    """Source of time and delayed callbacks."""

    @abstractmethod
    def now(self) -> float:
        """Return the current time in seconds."""

    @abstractmethod
    def call_later(self, delay_s: float, callback: Callable[[], None]) -> Timer:
        """Schedule ``callback`` to run after ``delay_s`` seconds."""


class _AsyncioTimer(Timer):
    def __init__(self, handle: asyncio.TimerHandle) -> None:
        self._handle = handle

    def cancel(self) -> None:
        self._handle.cancel()

    def cancelled(self) -> bool:
        return self._handle.cancelled()

    @property
    def when(self) -> float:
        return self._handle.when()


class AsyncioClock(Clock):
    """Clock backed by the running event loop."""

    def now(self) -> float:
        try:
            return asyncio.get_running_loop().time()
        except RuntimeError:
            return time.monotonic()

    def call_later(self, delay_s: float, callback: Callable[[], None]) -> Timer:
        loop = asyncio.get_running_loop()
        return _AsyncioTimer(loop.call_later(max(0.0, delay_s), callback))


class _ManualTimer(Timer):
    def __init__(self, when: float, callback: Callable[[], None]) -> None:
        self._when = when
        self.callback = callback
        self._cancelled = False

    def cancel(self) -> None:
        self._cancelled = True

    def cancelled(self) -> bool:
        return self._cancelled

    @property
    def when(self) -> float:
        return self._when


class ManualClock(Clock):
    """Deterministic clock for tests; time only moves on ``advance()``."""

    def __init__(self, start: float = 0.0) -> None:
        self._now = start
        self._seq = itertools.count()
        self._heap: list[tuple[float, int, _ManualTimer]] = []

    def now(self) -> float:
        return self._now

    def call_later(self, delay_s: float, callback: Callable[[], None]) -> Timer:
        timer = _ManualTimer(self._now + max(0.0, delay_s), callback)
        heapq.heappush(self._heap, (timer.when, next(self._seq), timer))
        return timer

    def pending(self) -> list[Timer]:
        """Return timers that have neither fired nor been cancelled, soonest first."""
        return [entry[2] for entry in sorted(self._heap) if not entry[2].cancelled()]

    def advance(self, seconds: float) -> int:
        """Move time forward, firing due callbacks in order.

        Callbacks scheduled while advancing fire too if they fall inside the
        window. Returns the number of callbacks fired.
        """
        target = self._now + seconds
        fired = 0
        while self._heap and self._heap[0][0] <= target:
            when, _, timer = heapq.heappop(self._heap)
            if timer.cancelled():
                continue
            self._now = when
            fired += 1
            timer.callback()
        self._now = target
        return fired
