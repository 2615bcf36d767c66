# Copyright (c) 2025-2026 provide.io llc
# SPDX-License-Identifier: AGPL-3.0-or-later

"""One bot session: connection, handshake, readiness and the UI flow."""

from __future__ import annotations

import asyncio
import random
from collections.abc import Callable, Coroutine
from typing import Any

from bedrockbot.clock import AsyncioClock, Clock, Timer
from bedrockbot.config import BotConfig
from bedrockbot.constants import BENIGN_ERROR_MARKERS, CONNECT_TIMEOUT_MARKER
from bedrockbot.core.inference import classify, snapshot_signature
from bedrockbot.core.readiness import ReadinessGate
from bedrockbot.core.reconnect import ReconnectSupervisor
from bedrockbot.core.states import (
    COMMAND_SOURCE_STATES,
    POST_READY_STATES,
    TERMINAL_STATES,
    SessionState,
    StateMachine,
)
from bedrockbot.core.transactions import SlotTransactionBuilder, Transaction
from bedrockbot.core.window import Window, WindowKind
from bedrockbot.errors import EmptySlotError, InvalidSlotError
from bedrockbot.logging.session_logger import SessionLogger
from bedrockbot.protocol import packets
from bedrockbot.protocol.items import EMPTY_ITEM, Item, parse_items
from bedrockbot.protocol.window_ids import (
    PLAYER_INVENTORY_WINDOW_ID,
    is_player_inventory_window,
    normalize_window_id,
)
from bedrockbot.settings import Settings
from bedrockbot.transport.base import PacketTransport, TransportEvent

S = SessionState

TransportFactory = Callable[[BotConfig], PacketTransport]


class Session:
    """A single bot identity and its connection lifecycle.

    All inbound traffic is handled on one reader task, in arrival order, by
    synchronous handlers. Timers go through the injected clock so tests can
    drive them deterministically.
    """

    def __init__(
        self,
        session_id: str,
        config: BotConfig,
        transport_factory: TransportFactory,
        *,
        clock: Clock | None = None,
        settings: Settings | None = None,
        rng: random.Random | None = None,
    ) -> None:
        self.session_id = session_id
        self.config = config
        self._transport_factory = transport_factory
        self.clock = clock or AsyncioClock()
        settings = settings or Settings()

        self.logger = SessionLogger(
            session_id,
            log_packets=settings.log_packets,
            log_state_changes=settings.log_state_changes,
        )
        self.logger.set_context(
            {
                "username": config.auth.username,
                "server": f"{config.server.host}:{config.server.port}",
            }
        )
        self._log = self.logger.log

        self.machine = StateMachine(self.clock, on_transition=self._on_transition, log=self._log)
        self.readiness = ReadinessGate(
            self.clock,
            fallback_s=config.timeouts.readiness_fallback_s,
            on_change=self._check_ready,
            log=self._log,
        )
        self.reconnect = ReconnectSupervisor(
            self.clock,
            self._open_connection,
            self._has_transport,
            policy=config.reconnect,
            rng=rng,
            log=self._log,
        )
        self.builder = SlotTransactionBuilder()

        self.window: Window | None = None
        self.player_inventory: list[Item] | None = None
        self.target_slot = config.behavior.slot_index
        self.last_transaction: Transaction | None = None
        self.last_disconnect_reason: str | None = None
        self.commands_sent = 0
        self.interactions_sent = 0
        self.suppressed_noise = 0

        self._transport: PacketTransport | None = None
        self._reader_task: asyncio.Task[None] | None = None
        self._timers: dict[str, Timer] = {}
        self._background: set[asyncio.Task[Any]] = set()
        self._interaction_sent = False
        self._auto_command_sent = False
        self._last_candidate: str | None = None

        self._handlers: dict[str, Callable[[dict[str, Any]], None]] = {
            packets.PLAY_STATUS: self._on_play_status,
            packets.RESOURCE_PACKS_INFO: self._on_pack_info,
            packets.RESOURCE_PACK_STACK: self._on_pack_stack,
            packets.START_GAME: self._on_start_game,
            packets.AVAILABLE_COMMANDS: self._on_available_commands,
            packets.INVENTORY_CONTENT: self._on_inventory_content,
            packets.INVENTORY_SLOT: self._on_inventory_slot,
            packets.CONTAINER_OPEN: self._on_container_open,
            packets.CONTAINER_CLOSE: self._on_container_close,
            packets.MODAL_FORM_REQUEST: self._on_modal_form,
            packets.TEXT: self._on_text,
            packets.COMMAND_OUTPUT: self._on_command_output,
            packets.DISCONNECT: self._on_kick,
            packets.KICK: self._on_kick,
            packets.ERROR: self._on_error,
            packets.CLOSE: self._on_close,
        }

    # ------------------------------------------------------------------
    # Connection lifecycle
    # ------------------------------------------------------------------

    @property
    def state(self) -> SessionState:
        return self.machine.state

    def is_connected(self) -> bool:
        return self._transport is not None and self._transport.is_connected()

    def _has_transport(self) -> bool:
        return self._transport is not None

    async def connect(self) -> bool:
        """User-initiated connect. Enables automatic reconnects."""
        if self._transport is not None:
            self._log.info("session_already_connected", state=self.state.value)
            return False
        self.reconnect.mark_user_connect()
        return await self._open_connection()

    async def _open_connection(self) -> bool:
        if self._transport is not None:
            return False
        transport = self._transport_factory(self.config)
        self._transport = transport
        self.machine.transition(S.CONNECTING, "opening connection")

        server = self.config.server
        options: dict[str, Any] = {
            "username": self.config.auth.username,
            "offline": self.config.auth.offline,
        }
        if server.version:
            options["version"] = server.version
        self._log.info("session_connecting", host=server.host, port=server.port, **options)

        try:
            await asyncio.wait_for(
                transport.connect(server.host, server.port, **options),
                timeout=self.config.timeouts.connect_s,
            )
        except Exception as e:
            if self._transport is transport:
                self._log.warning("session_connect_failed", error=str(e) or type(e).__name__)
                self._connection_lost(transport, f"connect failed: {e or type(e).__name__}")
            return False

        if self._transport is not transport:
            # Disconnected while the handshake was in flight.
            await transport.close()
            return False

        self._arm("login", self.config.timeouts.login_s, self._on_login_timeout)
        self._reader_task = asyncio.create_task(self._reader_loop(transport))
        self._log.info("session_connected")
        return True

    async def _reader_loop(self, transport: PacketTransport) -> None:
        try:
            while self._transport is transport:
                try:
                    event = await transport.receive()
                except ConnectionError as e:
                    if self._transport is transport:
                        self._connection_lost(transport, str(e) or "connection closed")
                    return
                if self._transport is not transport:
                    return
                try:
                    self.handle_event(event)
                except Exception:
                    self._log.exception("event_handler_failed", packet=event.name)
        except asyncio.CancelledError:
            return

    async def disconnect(self) -> None:
        """User-initiated disconnect. Disables reconnects and closes the transport."""
        self.reconnect.mark_user_disconnect()
        transport = self._transport
        if transport is not None:
            self._detach(transport, "user disconnect")
        await self.reconnect.stop()
        await self._stop_reader()
        if transport is not None:
            await transport.close()
        self._log.info("session_disconnected")

    async def _stop_reader(self) -> None:
        task = self._reader_task
        self._reader_task = None
        if task is None or task is asyncio.current_task():
            return
        task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            return

    def _detach(self, transport: PacketTransport, reason: str) -> None:
        """Forget the connection and every per-connection flag."""
        if self._transport is not transport:
            return
        self._transport = None
        self._cancel_all_timers()
        self.readiness.reset()
        self._clear_window()
        self.player_inventory = None
        self._interaction_sent = False
        self._auto_command_sent = False
        self.last_disconnect_reason = reason
        self.machine.transition(S.DISCONNECTED, reason)

    def _connection_lost(self, transport: PacketTransport | None, reason: str) -> None:
        if transport is None or self._transport is not transport:
            return
        self._log.warning("connection_lost", reason=reason, state=self.state.value)
        self._detach(transport, reason)
        task = self._reader_task
        if task is not None and task is not asyncio.current_task():
            task.cancel()
        self._reader_task = None
        self._spawn(self._close_transport(transport))
        self.reconnect.schedule_reconnect(reason)

    async def _close_transport(self, transport: PacketTransport) -> None:
        try:
            await transport.close()
        except Exception as e:
            self._log.warning("transport_close_failed", error=str(e))

    def _spawn(self, coro: Coroutine[Any, Any, Any]) -> None:
        task = asyncio.get_running_loop().create_task(coro)
        self._background.add(task)
        task.add_done_callback(self._background.discard)

    async def shutdown(self) -> None:
        """Disconnect and wait for background cleanup."""
        await self.disconnect()
        if self._background:
            await asyncio.gather(*self._background, return_exceptions=True)

    # ------------------------------------------------------------------
    # Timers
    # ------------------------------------------------------------------

    def _arm(self, name: str, delay_s: float, callback: Callable[[], None]) -> None:
        self._cancel_timer(name)

        def fire() -> None:
            self._timers.pop(name, None)
            callback()

        self._timers[name] = self.clock.call_later(delay_s, fire)

    def _cancel_timer(self, name: str) -> None:
        timer = self._timers.pop(name, None)
        if timer is not None:
            timer.cancel()

    def _cancel_all_timers(self) -> None:
        for timer in self._timers.values():
            timer.cancel()
        self._timers.clear()
        self.readiness.cancel_fallback()

    def _on_transition(self, old: SessionState, new: SessionState, reason: str) -> None:
        self.logger.log_state(old.value, new.value, reason)
        if old is S.AWAITING_UI:
            self._cancel_timer("ui")
        if old is S.SLOT_INTERACTED:
            self._cancel_timer("confirm")
        if new is S.AWAITING_UI:
            self._arm("ui", self.config.timeouts.ui_response_s, self._on_ui_timeout)
        elif new is S.SLOT_INTERACTED:
            self._arm("confirm", self.config.timeouts.interaction_confirm_s, self._on_confirm_timeout)
        elif new is S.READY:
            self._cancel_timer("login")
            self.readiness.cancel_fallback()
            if self.config.behavior.auto_command and not self._auto_command_sent:
                self._arm("settle", self.config.behavior.settle_delay_s, self._run_scripted_command)

    def _on_login_timeout(self) -> None:
        if self.state in POST_READY_STATES or self.state is S.DISCONNECTED:
            return
        self._log.error("login_timeout", timeout_s=self.config.timeouts.login_s, state=self.state.value)
        self.machine.transition(S.ERROR, "login timeout")
        self._connection_lost(self._transport, "login timeout")

    def _on_ui_timeout(self) -> None:
        if self.state is not S.AWAITING_UI:
            return
        self._log.warning(
            "ui_response_timeout",
            timeout_s=self.config.timeouts.ui_response_s,
            last_candidate=self._last_candidate,
        )
        self.machine.transition(S.ERROR, f"no UI within {self.config.timeouts.ui_response_s}s")

    def _on_confirm_timeout(self) -> None:
        if self.state is not S.SLOT_INTERACTED:
            return
        self._log.warning("interaction_unconfirmed", timeout_s=self.config.timeouts.interaction_confirm_s)
        self.machine.transition(S.COMPLETED_UNCONFIRMED, "no container close; assuming success")

    def _run_scripted_command(self) -> None:
        if self.state is not S.READY or self._auto_command_sent:
            return
        self._auto_command_sent = True
        self.dispatch_command(self.config.behavior.command)

    # ------------------------------------------------------------------
    # Inbound dispatch
    # ------------------------------------------------------------------

    def handle_event(self, event: TransportEvent) -> None:
        """Route one inbound packet or pseudo-event to its handler."""
        params = event.params or {}
        self.logger.log_packet("recv", event.name, _packet_summary(event.name, params))
        handler = self._handlers.get(event.name)
        if handler is not None:
            handler(params)

    def _on_play_status(self, params: dict[str, Any]) -> None:
        status = str(params.get("status", ""))
        if status == packets.LOGIN_SUCCESS:
            if self.state is S.CONNECTING:
                self.machine.transition(S.AUTHENTICATING, "login successful")
        elif status == packets.PLAYER_SPAWN:
            self._log.info("player_spawned")
        elif status.startswith("failed"):
            self._log.error("login_rejected", status=status)
            self.machine.transition(S.ERROR, f"login rejected: {status}")
        else:
            self._log.debug("play_status", status=status)

    def _on_pack_info(self, params: dict[str, Any]) -> None:
        self._negotiate_packs(packets.RESOURCE_PACKS_INFO)

    def _on_pack_stack(self, params: dict[str, Any]) -> None:
        self._negotiate_packs(packets.RESOURCE_PACK_STACK)

    def _negotiate_packs(self, stage: str) -> None:
        if not self.machine.transition(S.RESOURCE_NEGOTIATION, f"{stage} received"):
            return
        self._send(packets.RESOURCE_PACK_CLIENT_RESPONSE, packets.build_pack_response(stage))

    def _on_start_game(self, params: dict[str, Any]) -> None:
        self._log.info(
            "game_started",
            runtime_entity_id=params.get("runtime_entity_id"),
            gamemode=params.get("player_gamemode"),
        )
        if not self.machine.transition(S.SPAWNING, "start_game received"):
            return
        # Best effort; some servers never answer it.
        self._send(
            packets.REQUEST_CHUNK_RADIUS,
            packets.build_chunk_radius_request(self.config.behavior.chunk_radius),
        )
        if self.readiness.is_ready():
            self._check_ready()
            return
        self.machine.transition(S.AWAITING_READINESS, "waiting for commands and inventory")
        self.readiness.arm_fallback()
        if self.config.behavior.assume_inventory_on_game_start:
            self.readiness.set_inventory_ready(True, "start_game")

    def _on_available_commands(self, params: dict[str, Any]) -> None:
        self.readiness.set_commands_available(True)

    def _check_ready(self) -> None:
        if not self.readiness.is_ready():
            return
        if self.state not in (S.SPAWNING, S.AWAITING_READINESS):
            return
        reason = "readiness forced by fallback" if self.readiness.forced else "commands and inventory ready"
        self.machine.transition(S.READY, reason)

    def _on_inventory_content(self, params: dict[str, Any]) -> None:
        raw_id = params.get("window_id")
        window_id = normalize_window_id(raw_id)
        if window_id is None:
            self._log.debug("window_id_unrecognized", window_id=raw_id)
            return
        container = params.get("container")
        if not isinstance(container, dict):
            container = {}
        container_id = container.get("container_id")
        dynamic_id = container.get("dynamic_container_id")
        items = parse_items(params.get("input"))

        if self.state is S.AWAITING_UI:
            signature = snapshot_signature(raw_id, window_id, container_id, dynamic_id, len(items))
            if signature != self._last_candidate:
                self._last_candidate = signature
                self._log.info("ui_candidate", signature=signature)
            if self.window is None:
                verdict = classify(window_id, container_id, dynamic_id, len(items))
                if verdict.is_foreign_ui:
                    self._track_window(window_id, source="inferred", reason=f"inferred ({verdict.rule})")

        tracked = self._is_tracked(window_id)
        if is_player_inventory_window(window_id) and not tracked:
            self.readiness.set_inventory_ready(True, "inventory_content")
        if window_id == PLAYER_INVENTORY_WINDOW_ID and not tracked:
            self.player_inventory = list(items)

        window = self.window
        if window is None or not tracked:
            return
        window.apply_snapshot(items)
        if not window.dumped_once:
            window.dumped_once = True
            self._dump_window(window)
        self._maybe_interact()

    def _on_inventory_slot(self, params: dict[str, Any]) -> None:
        window_id = normalize_window_id(params.get("window_id"))
        slot = params.get("slot")
        if window_id is None or isinstance(slot, bool) or not isinstance(slot, int) or slot < 0:
            return
        item = Item.from_wire(params.get("item"))
        tracked = self._is_tracked(window_id)

        if is_player_inventory_window(window_id) and not tracked:
            self.readiness.set_inventory_ready(True, "inventory_slot")
        if window_id == PLAYER_INVENTORY_WINDOW_ID and not tracked:
            inventory = self.player_inventory if self.player_inventory is not None else []
            if slot >= len(inventory):
                inventory.extend([EMPTY_ITEM] * (slot + 1 - len(inventory)))
            inventory[slot] = item
            self.player_inventory = inventory

        if tracked and self.window is not None:
            self.window.apply_slot(slot, item)
            if slot == self.target_slot:
                self._maybe_interact()

    def _on_container_open(self, params: dict[str, Any]) -> None:
        raw_id = params.get("window_id")
        window_id = normalize_window_id(raw_id)
        window_type = params.get("window_type", params.get("type"))
        self._log.info("container_open", window_id=raw_id, window_type=window_type)
        if window_id is None:
            self._log.warning("container_open_unrecognized", window_id=raw_id)
            return
        window = self.window
        if window is not None and window.window_id == window_id and window.source == "inferred":
            window.source = "container_open"
            window.window_type = None if window_type is None else str(window_type)
            self._log.info("container_inference_confirmed", window_id=window_id)
            return
        self._track_window(
            window_id,
            source="container_open",
            window_type=window_type,
            reason="container_open received",
        )

    def _on_container_close(self, params: dict[str, Any]) -> None:
        window_id = normalize_window_id(params.get("window_id"))
        if window_id is None or not self._is_tracked(window_id):
            self._log.debug("container_close_ignored", window_id=params.get("window_id"))
            return
        self._log.info("container_closed", window_id=window_id, state=self.state.value)
        self._clear_window()
        if self.state in (S.SLOT_INTERACTED, S.COMPLETED_UNCONFIRMED):
            self.machine.transition(S.COMPLETED, "container closed after interaction")
        elif self.state in (S.CONTAINER_OPEN, S.AWAITING_CONTENT):
            self.machine.transition(S.ERROR, "container closed before interaction")

    def _on_modal_form(self, params: dict[str, Any]) -> None:
        self._log.warning("modal_form_received", form_id=params.get("form_id"), state=self.state.value)

    def _on_text(self, params: dict[str, Any]) -> None:
        self._log.info("chat", source=params.get("source_name"), message=params.get("message"))

    def _on_command_output(self, params: dict[str, Any]) -> None:
        self._log.info("command_output", output=params.get("output"), success=params.get("success_count"))

    def _on_kick(self, params: dict[str, Any]) -> None:
        message = str(params.get("message") or params.get("reason") or "")
        self._log.error("kicked", message=message, state=self.state.value)
        self.reconnect.note_rejection(message)
        self._connection_lost(self._transport, f"kicked: {message or 'unknown'}")

    def _on_error(self, params: dict[str, Any]) -> None:
        message = str(params.get("message") or params.get("error") or "")
        if any(marker in message for marker in BENIGN_ERROR_MARKERS):
            self.suppressed_noise += 1
            self._log.debug("decoder_noise_suppressed", message=message, count=self.suppressed_noise)
            return
        if CONNECT_TIMEOUT_MARKER in message.lower():
            self._connection_lost(self._transport, "connect timed out")
            return
        self._log.error("transport_error", message=message, state=self.state.value)
        if self.state not in TERMINAL_STATES and self.state is not S.DISCONNECTED:
            self.machine.transition(S.ERROR, message or "transport error")

    def _on_close(self, params: dict[str, Any]) -> None:
        self._connection_lost(self._transport, str(params.get("reason") or "connection closed"))

    # ------------------------------------------------------------------
    # Command and container flow
    # ------------------------------------------------------------------

    def dispatch_command(self, command: str | None = None) -> bool:
        """Send a chat command and start waiting for the UI it should open.

        Returns:
            True if the command was sent
        """
        text = packets.normalize_command(command or self.config.behavior.command)
        if self._transport is None:
            self._log.warning("command_rejected", command=text, reason="not connected")
            return False
        if not self.readiness.is_ready():
            self._log.warning("command_rejected", command=text, reason="not ready", state=self.state.value)
            return False
        if self.state not in COMMAND_SOURCE_STATES:
            self._log.warning("command_rejected", command=text, reason="busy", state=self.state.value)
            return False

        self._clear_window()
        self._last_candidate = None
        if not self.machine.transition(S.COMMAND_DISPATCHED, f"dispatching {text}"):
            return False
        payload = packets.build_command_request(text, version=self.config.behavior.command_version)
        if not self._send(packets.COMMAND_REQUEST, payload):
            return False
        self.commands_sent += 1
        self.machine.transition(S.AWAITING_UI, "waiting for UI")
        return True

    def set_target_slot(self, slot: int) -> bool:
        if isinstance(slot, bool) or not isinstance(slot, int) or slot < 0:
            self._log.warning("target_slot_invalid", slot=slot)
            return False
        self.target_slot = slot
        self._log.info("target_slot_set", slot=slot)
        return True

    def take(self, slot: int | None = None) -> bool:
        """Manually interact with a slot of the tracked container.

        Re-arms the interaction even if one was already sent for this
        window. If the content has not arrived yet, the interaction happens
        as soon as it does.
        """
        if slot is not None and not self.set_target_slot(slot):
            return False
        window = self.window
        if window is None:
            self._log.info("take_without_container", last_candidate=self._last_candidate)
            return False
        if window.content_received:
            slot = self.target_slot
            if slot >= window.size:
                self._log.warning("target_slot_out_of_range", slot=slot, size=window.size)
                return False
            item = window.item_at(slot)
            if item is None or item.is_empty:
                self._log.info("target_slot_empty", slot=slot, window_id=window.window_id)
                return False
        if self.state is not S.AWAITING_CONTENT and not self.machine.transition(
            S.AWAITING_CONTENT, f"manual take of slot {self.target_slot}"
        ):
            return False
        self._interaction_sent = False
        if not window.content_received:
            self._log.info("take_waiting_for_content", window_id=window.window_id)
            return False
        return self._maybe_interact()

    def _is_tracked(self, window_id: int) -> bool:
        return self.window is not None and self.window.window_id == window_id

    def _track_window(
        self,
        window_id: int,
        *,
        source: str,
        reason: str,
        window_type: Any = None,
    ) -> bool:
        if not self.machine.transition(S.CONTAINER_OPEN, reason):
            return False
        if source == "container_open" and is_player_inventory_window(window_id):
            kind = WindowKind.PLAYER_INVENTORY
        else:
            kind = WindowKind.FOREIGN_UI
        self.window = Window(
            window_id=window_id,
            kind=kind,
            window_type=None if window_type is None else str(window_type),
            source=source,
        )
        self._interaction_sent = False
        self._log.info("container_tracked", window_id=window_id, source=source, kind=kind.value)
        self.machine.transition(S.AWAITING_CONTENT, "waiting for container content")
        return True

    def _clear_window(self) -> None:
        self.window = None
        self._interaction_sent = False

    def _dump_window(self, window: Window) -> None:
        self._log.info(
            "container_contents",
            window_id=window.window_id,
            size=window.size,
            target_slot=self.target_slot,
            items={index: item.short() for index, item in window.occupied()},
        )

    def _maybe_interact(self) -> bool:
        window = self.window
        if window is None or self._interaction_sent or self.state is not S.AWAITING_CONTENT:
            return False
        if not window.content_received:
            return False
        slot = self.target_slot
        if slot >= window.size:
            self._log.warning("target_slot_out_of_range", slot=slot, size=window.size)
            return False
        item = window.item_at(slot)
        if item is None or item.is_empty:
            self._log.info("target_slot_empty", slot=slot, window_id=window.window_id)
            return False
        return self._interact(window, slot, item)

    def _interact(self, window: Window, slot: int, item: Item) -> bool:
        try:
            transaction = self.builder.build(window.window_id, slot, item, self.player_inventory)
        except (InvalidSlotError, EmptySlotError) as e:
            self._log.warning("interaction_rejected", error=str(e))
            return False
        if transaction.kind == "relocation":
            self._log.info(
                "slot_relocation",
                window_id=window.window_id,
                slot=slot,
                destination=transaction.destination_slot,
                item=item.short(),
            )
        else:
            self._log.info("slot_acknowledgment", window_id=window.window_id, slot=slot, item=item.short())
        if not self._send(packets.INVENTORY_TRANSACTION, transaction.to_payload()):
            return False
        self._interaction_sent = True
        self.interactions_sent += 1
        self.last_transaction = transaction
        self.machine.transition(S.SLOT_INTERACTED, f"interacted with slot {slot}")
        return True

    def _send(self, name: str, payload: dict[str, Any]) -> bool:
        """Single outbound path; every packet is logged here."""
        self.logger.log_packet("send", name, payload)
        transport = self._transport
        if transport is None:
            self._log.warning("send_failed", packet=name, error="not connected")
            return False
        try:
            transport.send(name, payload)
        except ConnectionError as e:
            self._log.warning("send_failed", packet=name, error=str(e))
            return False
        return True

    # ------------------------------------------------------------------
    # Status
    # ------------------------------------------------------------------

    def get_status(self) -> dict[str, Any]:
        return {
            "session_id": self.session_id,
            "state": self.state.value,
            "connected": self.is_connected(),
            "username": self.config.auth.username,
            "host": self.config.server.host,
            "port": self.config.server.port,
            "target_slot": self.target_slot,
            "window": self.window.summary() if self.window is not None else None,
            "player_inventory_slots": None if self.player_inventory is None else len(self.player_inventory),
            "readiness": self.readiness.status(),
            "reconnect": self.reconnect.status(),
            "commands_sent": self.commands_sent,
            "interactions_sent": self.interactions_sent,
            "suppressed_noise": self.suppressed_noise,
            "last_disconnect_reason": self.last_disconnect_reason,
            "history": self.machine.recent_history(10),
        }


def _packet_summary(name: str, params: dict[str, Any]) -> dict[str, Any]:
    if name == packets.INVENTORY_CONTENT:
        raw = params.get("input")
        return {
            "window_id": params.get("window_id"),
            "slots": len(raw) if isinstance(raw, list) else 0,
        }
    if name in (packets.START_GAME, packets.AVAILABLE_COMMANDS):
        return {}
    return params
