# Copyright (c) 2025-2026 provide.io llc
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Multi-session supervision and the remote command router."""

from __future__ import annotations

import asyncio
import uuid
from collections.abc import Awaitable, Callable
from typing import Any, Literal

import structlog
from pydantic import BaseModel, ConfigDict, Field

from bedrockbot.clock import AsyncioClock, Clock
from bedrockbot.config import BotConfig
from bedrockbot.constants import DEFAULT_RESTART_DELAY_S
from bedrockbot.core.session import Session, TransportFactory
from bedrockbot.errors import BotError, SessionLimitError, SessionNotFoundError
from bedrockbot.settings import Settings
from bedrockbot.transport.base import PacketTransport
from bedrockbot.transport.chaos import ChaosTransport

log = structlog.get_logger()


class RemoteCommand(BaseModel):
    """One command from a remote controller, independent of how it arrived."""

    action: str
    id: str | None = None
    bot_id: str | None = None
    payload: dict[str, Any] = Field(default_factory=dict)

    model_config = ConfigDict(extra="ignore")


class CommandResult(BaseModel):
    command_id: str | None = None
    status: Literal["completed", "failed"]
    result: dict[str, Any] = Field(default_factory=dict)


class FleetSupervisor:
    """Manages multiple concurrent bot sessions."""

    def __init__(
        self,
        transport_factory: TransportFactory,
        *,
        settings: Settings | None = None,
        base_config: BotConfig | None = None,
        clock: Clock | None = None,
        max_sessions: int | None = None,
        restart_delay_s: float = DEFAULT_RESTART_DELAY_S,
        sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
    ) -> None:
        """Initialize fleet supervisor.

        Args:
            transport_factory: Builds a fresh transport for a session config
            settings: Application settings (logging flags, session limit)
            base_config: Defaults merged under remote ``create`` payloads
            clock: Shared clock for all session timers
            max_sessions: Overrides ``settings.max_sessions``
            restart_delay_s: Pause between stop and start on restart
            sleep: Awaitable sleep used for the restart pause
        """
        self._transport_factory = transport_factory
        self.settings = settings or Settings()
        self.base_config = base_config or BotConfig()
        self.clock = clock or AsyncioClock()
        self._max_sessions = max_sessions if max_sessions is not None else self.settings.max_sessions
        self._restart_delay_s = restart_delay_s
        self._sleep = sleep
        self._sessions: dict[str, Session] = {}
        self._lock = asyncio.Lock()

    def _build_transport(self, config: BotConfig) -> PacketTransport:
        transport = self._transport_factory(config)
        if config.chaos is not None:
            # Deterministic fault injection for resilience testing.
            transport = ChaosTransport(transport, label=config.auth.username, **config.chaos.model_dump())
        return transport

    async def create_session(self, config: BotConfig | None = None, session_id: str | None = None) -> str:
        """Register a new, not yet connected session.

        Returns:
            Session ID

        Raises:
            SessionLimitError: If max sessions reached
            ValueError: If the session id is already taken
        """
        async with self._lock:
            if len(self._sessions) >= self._max_sessions:
                raise SessionLimitError(f"Max sessions ({self._max_sessions}) reached")
            if not session_id:
                session_id = str(uuid.uuid4())
            if session_id in self._sessions:
                raise ValueError(f"Session already exists: {session_id}")
            session = Session(
                session_id,
                config or self.base_config.model_copy(deep=True),
                self._build_transport,
                clock=self.clock,
                settings=self.settings,
            )
            self._sessions[session_id] = session

        log.info(
            "session_created",
            session_id=session_id,
            username=session.config.auth.username,
            host=session.config.server.host,
            port=session.config.server.port,
        )
        return session_id

    async def get_session(self, session_id: str) -> Session:
        """Get session by ID.

        Raises:
            SessionNotFoundError: If session not found
        """
        if session_id not in self._sessions:
            raise SessionNotFoundError(f"Session not found: {session_id}")
        return self._sessions[session_id]

    async def start(self, session_id: str) -> bool:
        session = await self.get_session(session_id)
        return await session.connect()

    async def stop(self, session_id: str) -> None:
        session = await self.get_session(session_id)
        await session.disconnect()
        log.info("session_stopped", session_id=session_id)

    async def restart(self, session_id: str) -> bool:
        await self.stop(session_id)
        await self._sleep(self._restart_delay_s)
        return await self.start(session_id)

    async def delete_session(self, session_id: str) -> None:
        """Disconnect and remove a session.

        Raises:
            SessionNotFoundError: If session not found
        """
        session = await self.get_session(session_id)
        await session.shutdown()
        async with self._lock:
            self._sessions.pop(session_id, None)
        log.info("session_deleted", session_id=session_id)

    async def dispatch_command(self, session_id: str, command: str | None = None) -> bool:
        session = await self.get_session(session_id)
        return session.dispatch_command(command)

    async def take(self, session_id: str, slot: int | None = None) -> bool:
        session = await self.get_session(session_id)
        return session.take(slot)

    async def set_target_slot(self, session_id: str, slot: int) -> bool:
        session = await self.get_session(session_id)
        return session.set_target_slot(slot)

    def list_sessions(self) -> list[dict[str, Any]]:
        return [session.get_status() for session in self._sessions.values()]

    async def close_all(self) -> None:
        """Delete all sessions."""
        for session_id in list(self._sessions):
            try:
                await self.delete_session(session_id)
            except Exception as e:
                log.warning("session_close_failed", session_id=session_id, error=str(e))

    # ------------------------------------------------------------------
    # Remote commands
    # ------------------------------------------------------------------

    async def handle_command(self, command: RemoteCommand) -> CommandResult:
        """Route one remote command and report its outcome."""
        log.info("remote_command", action=command.action, bot_id=command.bot_id, command_id=command.id)
        handlers: dict[str, Callable[[RemoteCommand], Awaitable[dict[str, Any]]]] = {
            "create": self._cmd_start,
            "start": self._cmd_start,
            "stop": self._cmd_stop,
            "restart": self._cmd_restart,
            "delete": self._cmd_delete,
            "command": self._cmd_command,
            "exec": self._cmd_command,
            "take": self._cmd_take,
            "slot": self._cmd_slot,
            "status": self._cmd_status,
        }
        handler = handlers.get(command.action.lower())
        if handler is None:
            result: dict[str, Any] = {"error": f"Unknown action: {command.action}"}
        else:
            try:
                result = await handler(command)
            except BotError as e:
                log.warning("remote_command_failed", action=command.action, bot_id=command.bot_id, error=str(e))
                result = {"error": str(e)}
        return CommandResult(
            command_id=command.id,
            status="failed" if "error" in result else "completed",
            result=result,
        )

    def _require_bot_id(self, command: RemoteCommand) -> str:
        if not command.bot_id:
            raise SessionNotFoundError(f"Action '{command.action}' requires a bot_id")
        return command.bot_id

    async def _cmd_start(self, command: RemoteCommand) -> dict[str, Any]:
        session_id = command.bot_id or str(uuid.uuid4())
        existing = self._sessions.get(session_id)
        if existing is not None and existing.reconnect.want_connected:
            return {
                "message": "Bot already running",
                "bot_id": session_id,
                "username": existing.config.auth.username,
            }
        config = BotConfig.from_command_payload(
            command.payload,
            base=existing.config if existing is not None else self.base_config,
        )
        if existing is not None:
            # A stopped session is rebuilt so the new payload fully applies.
            await self.delete_session(session_id)
        await self.create_session(config, session_id=session_id)
        connected = await self.start(session_id)
        return {
            "message": "Bot started",
            "bot_id": session_id,
            "username": config.auth.username,
            "connected": connected,
        }

    async def _cmd_stop(self, command: RemoteCommand) -> dict[str, Any]:
        session_id = self._require_bot_id(command)
        if session_id not in self._sessions:
            return {"message": "Bot not found", "bot_id": session_id}
        await self.stop(session_id)
        return {"message": "Bot stopped", "bot_id": session_id}

    async def _cmd_restart(self, command: RemoteCommand) -> dict[str, Any]:
        session_id = self._require_bot_id(command)
        if session_id in self._sessions:
            await self.stop(session_id)
            await self._sleep(self._restart_delay_s)
        return await self._cmd_start(command)

    async def _cmd_delete(self, command: RemoteCommand) -> dict[str, Any]:
        session_id = self._require_bot_id(command)
        if session_id not in self._sessions:
            return {"message": "Bot not found", "bot_id": session_id}
        await self.delete_session(session_id)
        return {"message": "Bot deleted", "bot_id": session_id}

    async def _cmd_command(self, command: RemoteCommand) -> dict[str, Any]:
        session_id = self._require_bot_id(command)
        session = self._sessions.get(session_id)
        if session is None:
            return {"error": "Bot not found", "bot_id": session_id}
        text = command.payload.get("command")
        if not session.dispatch_command(str(text) if text else None):
            return {"error": f"Command rejected in state {session.state.value}", "bot_id": session_id}
        return {"message": "Command executed", "bot_id": session_id, "command": text or session.config.behavior.command}

    async def _cmd_take(self, command: RemoteCommand) -> dict[str, Any]:
        session_id = self._require_bot_id(command)
        session = self._sessions.get(session_id)
        if session is None:
            return {"error": "Bot not found", "bot_id": session_id}
        slot = command.payload.get("slot")
        if slot is not None and not session.set_target_slot(slot):
            return {"error": f"Invalid slot: {slot!r}", "bot_id": session_id}
        sent = session.take()
        return {"message": "Take requested", "bot_id": session_id, "slot": session.target_slot, "sent": sent}

    async def _cmd_slot(self, command: RemoteCommand) -> dict[str, Any]:
        session_id = self._require_bot_id(command)
        session = self._sessions.get(session_id)
        if session is None:
            return {"error": "Bot not found", "bot_id": session_id}
        slot = command.payload.get("slot")
        if not session.set_target_slot(slot):
            return {"error": f"Invalid slot: {slot!r}", "bot_id": session_id}
        return {"message": "Target slot set", "bot_id": session_id, "slot": slot}

    async def _cmd_status(self, command: RemoteCommand) -> dict[str, Any]:
        if command.bot_id:
            session = self._sessions.get(command.bot_id)
            if session is None:
                return {"error": "Bot not found", "bot_id": command.bot_id}
            return {"session": session.get_status()}
        return {"sessions": self.list_sessions()}
