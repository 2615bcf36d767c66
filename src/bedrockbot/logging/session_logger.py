# Copyright (c) 2025-2026 provide.io llc
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Per-session structured logger for packets and state changes."""

from __future__ import annotations

import base64
from typing import Any

from bedrockbot.logging.config import get_logger

# Inbound packets worth logging; the rest is chunk/entity churn.
KEY_INBOUND_PACKETS = frozenset(
    {
        "play_status",
        "resource_packs_info",
        "resource_pack_stack",
        "start_game",
        "available_commands",
        "inventory_content",
        "inventory_slot",
        "container_open",
        "container_close",
        "modal_form_request",
        "command_output",
        "disconnect",
    }
)


def _json_safe(value: Any) -> Any:
    if isinstance(value, dict):
        return {str(k): _json_safe(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_json_safe(v) for v in value]
    if isinstance(value, (bytes, bytearray)):
        return base64.b64encode(bytes(value)).decode("ascii")
    if isinstance(value, int) and not isinstance(value, bool) and abs(value) > 2**53:
        return str(value)
    return value


class SessionLogger:
    """Structured logger bound to one session id."""

    def __init__(
        self,
        session_id: str,
        *,
        log_packets: bool = True,
        log_state_changes: bool = True,
    ) -> None:
        """Initialize session logger.

        Args:
            session_id: Session identifier bound onto every entry
            log_packets: Emit packet_in/packet_out entries
            log_state_changes: Emit state_transition entries
        """
        self.session_id = session_id
        self.log_packets = log_packets
        self.log_state_changes = log_state_changes
        self._context: dict[str, str] = {}
        self._log = get_logger("bedrockbot.session").bind(session_id=session_id)

    @property
    def log(self) -> Any:
        """Bound structlog logger including the current context."""
        if self._context:
            return self._log.bind(**self._context)
        return self._log

    def set_context(self, context: dict[str, str]) -> None:
        """Set context metadata for log entries (e.g. username, host)."""
        self._context = {str(k): str(v) for k, v in context.items()}

    def clear_context(self) -> None:
        """Clear context metadata."""
        self._context = {}

    def log_packet(self, direction: str, name: str, data: dict[str, Any] | None = None) -> None:
        """Log an inbound ("recv") or outbound ("send") packet.

        Inbound packets outside KEY_INBOUND_PACKETS are not logged.
        """
        if not self.log_packets:
            return
        if direction == "recv" and name not in KEY_INBOUND_PACKETS:
            return
        event = "packet_out" if direction == "send" else "packet_in"
        if data:
            self.log.info(event, packet=name, data=_json_safe(data))
        else:
            self.log.info(event, packet=name)

    def log_state(self, old: str, new: str, reason: str = "") -> None:
        """Log an accepted state transition."""
        if not self.log_state_changes:
            return
        self.log.info("state_transition", old=old, new=new, reason=reason)
