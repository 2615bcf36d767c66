# Copyright (c) 2025-2026 provide.io llc
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Protocol-level values: window ids, items and packet payloads."""

from __future__ import annotations

from bedrockbot.protocol.items import EMPTY_ITEM, Item, first_empty_index, is_empty_item, parse_items
from bedrockbot.protocol.window_ids import (
    PLAYER_INVENTORY_WINDOW_ID,
    is_player_inventory_window,
    normalize_window_id,
)

__all__ = [
    "EMPTY_ITEM",
    "PLAYER_INVENTORY_WINDOW_ID",
    "Item",
    "first_empty_index",
    "is_empty_item",
    "is_player_inventory_window",
    "normalize_window_id",
    "parse_items",
]
