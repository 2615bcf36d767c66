# Copyright (c) 2025-2026 provide.io llc
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Readiness gate: two sticky preconditions plus a forced-timeout fallback."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from pydantic import BaseModel

from bedrockbot.constants import DEFAULT_READINESS_FALLBACK_S
from bedrockbot.logging import get_logger

if TYPE_CHECKING:
    from collections.abc import Callable

    from bedrockbot.clock import Clock, Timer

logger = get_logger(__name__)

FALLBACK_REASON = "fallback timeout"


class ReadinessStatus(BaseModel):
    commands_available: bool
    commands_available_at: float | None
    inventory_ready: bool
    inventory_ready_at: float | None
    inventory_ready_reason: str | None
    forced: bool
    fallback_armed: bool
    ready: bool


class ReadinessGate:
    """Tracks "command catalog seen" AND "inventory initialized".

    Both flags are sticky: once true, later signals cannot retract them
    (some servers resend conflicting values). ``on_change`` runs after every
    call that may have completed the AND so the owner can re-check.
    """

    def __init__(
        self,
        clock: Clock,
        *,
        fallback_s: float = DEFAULT_READINESS_FALLBACK_S,
        on_change: Callable[[], None] | None = None,
        log: Any = None,
    ) -> None:
        self._clock = clock
        self._fallback_s = fallback_s
        self._on_change = on_change
        self._log = log or logger
        self._fallback: Timer | None = None
        self.reset()

    def reset(self) -> None:
        """Forget all signals (new connection)."""
        self.cancel_fallback()
        self.commands_available = False
        self.commands_available_at: float | None = None
        self.inventory_ready = False
        self.inventory_ready_at: float | None = None
        self.inventory_ready_reason: str | None = None
        self.forced = False

    def is_ready(self) -> bool:
        return self.commands_available and self.inventory_ready

    def set_commands_available(self, available: bool) -> None:
        if not available:
            if self.commands_available:
                self._log.debug("readiness_retraction_ignored", flag="commands_available")
            return
        if not self.commands_available:
            self.commands_available = True
            self.commands_available_at = self._clock.now()
            self._log.info("readiness_signal", flag="commands_available")
        self._after_signal()

    def set_inventory_ready(self, ready: bool, reason: str) -> None:
        if not ready:
            if self.inventory_ready:
                self._log.debug("readiness_retraction_ignored", flag="inventory_ready", reason=reason)
            return
        if not self.inventory_ready:
            self.inventory_ready = True
            self.inventory_ready_at = self._clock.now()
            self.inventory_ready_reason = reason
            self._log.info("readiness_signal", flag="inventory_ready", reason=reason)
        self._after_signal()

    def arm_fallback(self) -> None:
        """Start the fallback timer unless already armed or already ready."""
        if self.is_ready() or self._fallback is not None:
            return
        self._fallback = self._clock.call_later(self._fallback_s, self._fire_fallback)
        self._log.debug("readiness_fallback_armed", delay_s=self._fallback_s)

    def cancel_fallback(self) -> None:
        if self._fallback is not None:
            self._fallback.cancel()
            self._fallback = None

    @property
    def fallback_armed(self) -> bool:
        return self._fallback is not None

    def _fire_fallback(self) -> None:
        self._fallback = None
        if self.is_ready():
            return
        missing = [
            name
            for name, value in (
                ("commands_available", self.commands_available),
                ("inventory_ready", self.inventory_ready),
            )
            if not value
        ]
        self._log.warning(
            "readiness_forced",
            reason=FALLBACK_REASON,
            missing=missing,
            delay_s=self._fallback_s,
        )
        self.forced = True
        now = self._clock.now()
        if not self.commands_available:
            self.commands_available = True
            self.commands_available_at = now
        if not self.inventory_ready:
            self.inventory_ready = True
            self.inventory_ready_at = now
            self.inventory_ready_reason = FALLBACK_REASON
        self._notify()

    def _after_signal(self) -> None:
        if self.is_ready():
            self.cancel_fallback()
        self._notify()

    def _notify(self) -> None:
        if self._on_change is not None:
            self._on_change()

    def status(self) -> dict[str, Any]:
        return ReadinessStatus(
            commands_available=self.commands_available,
            commands_available_at=self.commands_available_at,
            inventory_ready=self.inventory_ready,
            inventory_ready_at=self.inventory_ready_at,
            inventory_ready_reason=self.inventory_ready_reason,
            forced=self.forced,
            fallback_armed=self.fallback_armed,
            ready=self.is_ready(),
        ).model_dump()
