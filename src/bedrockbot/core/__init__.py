"""Core session control."""

from __future__ import annotations

from bedrockbot.core.fleet import CommandResult, FleetSupervisor, RemoteCommand
from bedrockbot.core.inference import ContainerClassification, classify
from bedrockbot.core.readiness import ReadinessGate
from bedrockbot.core.reconnect import ReconnectSupervisor
from bedrockbot.core.session import Session
from bedrockbot.core.states import SessionState, StateMachine
from bedrockbot.core.transactions import SlotTransactionBuilder, Transaction

__all__ = [
    "CommandResult",
    "ContainerClassification",
    "FleetSupervisor",
    "ReadinessGate",
    "ReconnectSupervisor",
    "RemoteCommand",
    "Session",
    "SessionState",
    "SlotTransactionBuilder",
    "StateMachine",
    "Transaction",
    "classify",
]
