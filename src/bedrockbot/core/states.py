# Copyright (c) 2025-2026 provide.io llc
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Session states and the explicit transition table."""

from __future__ import annotations

from collections import deque
from enum import StrEnum
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel

from bedrockbot.constants import HISTORY_LIMIT
from bedrockbot.logging import get_logger

if TYPE_CHECKING:
    from collections.abc import Callable

    from bedrockbot.clock import Clock

logger = get_logger(__name__)


class SessionState(StrEnum):
    DISCONNECTED = "DISCONNECTED"
    CONNECTING = "CONNECTING"
    AUTHENTICATING = "AUTHENTICATING"
    RESOURCE_NEGOTIATION = "RESOURCE_NEGOTIATION"
    SPAWNING = "SPAWNING"
    AWAITING_READINESS = "AWAITING_READINESS"
    READY = "READY"
    COMMAND_DISPATCHED = "COMMAND_DISPATCHED"
    AWAITING_UI = "AWAITING_UI"
    CONTAINER_OPEN = "CONTAINER_OPEN"
    AWAITING_CONTENT = "AWAITING_CONTENT"
    SLOT_INTERACTED = "SLOT_INTERACTED"
    COMPLETED = "COMPLETED"
    COMPLETED_UNCONFIRMED = "COMPLETED_UNCONFIRMED"
    ERROR = "ERROR"


S = SessionState

TERMINAL_STATES = frozenset({S.COMPLETED, S.COMPLETED_UNCONFIRMED, S.ERROR})

# States from which a (new) command flow may start.
COMMAND_SOURCE_STATES = frozenset(
    {
        S.READY,
        S.COMMAND_DISPATCHED,
        S.AWAITING_UI,
        S.CONTAINER_OPEN,
        S.AWAITING_CONTENT,
        S.SLOT_INTERACTED,
        S.COMPLETED,
        S.COMPLETED_UNCONFIRMED,
        S.ERROR,
    }
)

# States in which readiness has already been established on this connection.
POST_READY_STATES = COMMAND_SOURCE_STATES - {S.ERROR}

_TRANSITIONS: dict[SessionState, frozenset[SessionState]] = {
    S.DISCONNECTED: frozenset({S.CONNECTING}),
    S.CONNECTING: frozenset({S.AUTHENTICATING, S.RESOURCE_NEGOTIATION, S.SPAWNING}),
    S.AUTHENTICATING: frozenset({S.RESOURCE_NEGOTIATION, S.SPAWNING}),
    S.RESOURCE_NEGOTIATION: frozenset({S.SPAWNING}),
    S.SPAWNING: frozenset({S.AWAITING_READINESS, S.READY}),
    S.AWAITING_READINESS: frozenset({S.READY}),
    S.READY: frozenset({S.COMMAND_DISPATCHED}),
    S.COMMAND_DISPATCHED: frozenset({S.AWAITING_UI}),
    S.AWAITING_UI: frozenset({S.CONTAINER_OPEN, S.COMMAND_DISPATCHED}),
    S.CONTAINER_OPEN: frozenset({S.AWAITING_CONTENT, S.COMMAND_DISPATCHED}),
    S.AWAITING_CONTENT: frozenset({S.SLOT_INTERACTED, S.CONTAINER_OPEN, S.COMMAND_DISPATCHED}),
    S.SLOT_INTERACTED: frozenset(
        {S.COMPLETED, S.COMPLETED_UNCONFIRMED, S.AWAITING_CONTENT, S.CONTAINER_OPEN, S.COMMAND_DISPATCHED}
    ),
    S.COMPLETED: frozenset({S.CONTAINER_OPEN, S.COMMAND_DISPATCHED}),
    S.COMPLETED_UNCONFIRMED: frozenset({S.COMPLETED, S.AWAITING_CONTENT, S.CONTAINER_OPEN, S.COMMAND_DISPATCHED}),
    S.ERROR: frozenset({S.COMMAND_DISPATCHED}),
}

# ERROR from every non-terminal state; DISCONNECTED from every state but itself.
for _state in SessionState:
    extra = set()
    if _state not in TERMINAL_STATES and _state is not S.DISCONNECTED:
        extra.add(S.ERROR)
    if _state is not S.DISCONNECTED:
        extra.add(S.DISCONNECTED)
    _TRANSITIONS[_state] = _TRANSITIONS[_state] | extra
del _state, extra


def allowed_transitions(state: SessionState) -> frozenset[SessionState]:
    return _TRANSITIONS[state]


def can_transition(current: SessionState, target: SessionState) -> bool:
    return target in _TRANSITIONS[current]


class TransitionRecord(BaseModel):
    at: float
    old: SessionState
    new: SessionState
    reason: str = ""


class StateMachine:
    """Holds the current state and enforces the transition table."""

    def __init__(
        self,
        clock: Clock,
        *,
        initial: SessionState = SessionState.DISCONNECTED,
        on_transition: Callable[[SessionState, SessionState, str], None] | None = None,
        log: Any = None,
        history_limit: int = HISTORY_LIMIT,
    ) -> None:
        self._clock = clock
        self._state = initial
        self._on_transition = on_transition
        self._log = log or logger
        self.history: deque[TransitionRecord] = deque(maxlen=history_limit)
        self.rejected = 0

    @property
    def state(self) -> SessionState:
        return self._state

    def can_transition(self, target: SessionState) -> bool:
        return target == self._state or can_transition(self._state, target)

    def transition(self, target: SessionState, reason: str = "") -> bool:
        """Move to ``target`` if the table allows it.

        Same-state requests are accepted as no-ops. Illegal requests are
        logged with the disallowed pair and leave the state untouched.

        Returns:
            True if the machine is in ``target`` afterwards
        """
        if target == self._state:
            return True
        if not can_transition(self._state, target):
            self.rejected += 1
            self._log.warning(
                "illegal_transition",
                old=self._state.value,
                new=target.value,
                reason=reason,
                allowed=sorted(s.value for s in _TRANSITIONS[self._state]),
            )
            return False
        old = self._state
        self._state = target
        self.history.append(TransitionRecord(at=self._clock.now(), old=old, new=target, reason=reason))
        if self._on_transition is not None:
            self._on_transition(old, target, reason)
        return True

    def recent_history(self, limit: int = 20) -> list[dict[str, Any]]:
        return [record.model_dump(mode="json") for record in list(self.history)[-limit:]]
