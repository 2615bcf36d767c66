# Copyright (c) 2025-2026 provide.io llc
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Packet names and outbound payload builders."""

from __future__ import annotations

import uuid
from typing import Any

from bedrockbot.constants import COMMAND_REQUEST_VERSION, DEFAULT_CHUNK_RADIUS

# Inbound packets
PLAY_STATUS = "play_status"
RESOURCE_PACKS_INFO = "resource_packs_info"
RESOURCE_PACK_STACK = "resource_pack_stack"
START_GAME = "start_game"
AVAILABLE_COMMANDS = "available_commands"
INVENTORY_CONTENT = "inventory_content"
INVENTORY_SLOT = "inventory_slot"
CONTAINER_OPEN = "container_open"
CONTAINER_CLOSE = "container_close"
MODAL_FORM_REQUEST = "modal_form_request"
TEXT = "text"
COMMAND_OUTPUT = "command_output"
DISCONNECT = "disconnect"

# Transport pseudo-events
KICK = "kick"
ERROR = "error"
CLOSE = "close"

# Outbound packets
RESOURCE_PACK_CLIENT_RESPONSE = "resource_pack_client_response"
REQUEST_CHUNK_RADIUS = "request_chunk_radius"
COMMAND_REQUEST = "command_request"
INVENTORY_TRANSACTION = "inventory_transaction"

LOGIN_SUCCESS = "login_success"
PLAYER_SPAWN = "player_spawn"


def build_pack_response(stage: str) -> dict[str, Any]:
    """Accept every pack the server offers.

    ``resource_packs_info`` is answered with ``have_all_packs`` and
    ``resource_pack_stack`` with ``completed``.
    """
    status = "have_all_packs" if stage == RESOURCE_PACKS_INFO else "completed"
    return {"response_status": status, "resourcepackids": []}


def build_chunk_radius_request(radius: int = DEFAULT_CHUNK_RADIUS) -> dict[str, Any]:
    return {"chunk_radius": int(radius)}


def normalize_command(text: str) -> str:
    text = text.strip()
    return text if text.startswith("/") else f"/{text}"


def build_command_request(
    command: str,
    *,
    version: str = COMMAND_REQUEST_VERSION,
    request_uuid: str | None = None,
) -> dict[str, Any]:
    """Build a player-issued command request.

    ``version`` must be a string; some decoders reject a number here.
    """
    return {
        "command": normalize_command(command),
        "origin": {
            "type": "player",
            "uuid": request_uuid or str(uuid.uuid4()),
            "request_id": "",
            "player_entity_id": 0,
        },
        "internal": False,
        "version": str(version),
    }
