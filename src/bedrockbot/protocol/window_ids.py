# Copyright (c) 2025-2026 provide.io llc
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Window id namespace and normalization.

Servers and decoders hand window ids over as ints, numeric strings, large
integers or named aliases. Everything is reduced to one canonical ``int`` on
ingestion; raw forms are never compared.
"""

from __future__ import annotations

import math
from typing import Any

PLAYER_INVENTORY_WINDOW_ID = 0

WINDOW_ID_NAMES: dict[str, int] = {
    "inventory": 0,
    "first": 1,
    "last": 100,
    "offhand": 119,
    "armor": 120,
    "creative": 121,
    "hotbar": 122,
    "fixed_inventory": 123,
    "ui": 124,
    "none": -1,
    # Virtual containers
    "drop_contents": -100,
    "beacon": -24,
    "trading_output": -23,
    "trading_use_inputs": -22,
    "trading_input_2": -21,
    "trading_input_1": -20,
    "enchant_output": -17,
    "enchant_material": -16,
    "enchant_input": -15,
    "anvil_output": -13,
    "anvil_result": -12,
    "anvil_material": -11,
    "container_input": -10,
    "crafting_use_ingredient": -5,
    "crafting_result": -4,
    "crafting_remove_ingredient": -3,
    "crafting_add_ingredient": -2,
}

# Window 0 is the main inventory; 119/120 are offhand/armor.
PLAYER_INVENTORY_WINDOW_IDS = frozenset({0, 1, 2, 119, 120})


def normalize_window_id(raw: Any) -> int | None:
    """Return the canonical integer for a raw window id, or None if unusable."""
    if raw is None or isinstance(raw, bool):
        return None
    if isinstance(raw, int):
        return raw
    if isinstance(raw, float):
        if math.isfinite(raw) and raw.is_integer():
            return int(raw)
        return None
    if isinstance(raw, str):
        text = raw.strip()
        try:
            return int(text)
        except ValueError:
            pass
        try:
            as_float = float(text)
        except ValueError:
            return WINDOW_ID_NAMES.get(text)
        if math.isfinite(as_float) and as_float.is_integer():
            return int(as_float)
        return None
    return None


def is_player_inventory_window(window_id: Any) -> bool:
    return normalize_window_id(window_id) in PLAYER_INVENTORY_WINDOW_IDS


def window_id_name(window_id: int) -> str | None:
    """Reverse lookup for logging."""
    for name, value in WINDOW_ID_NAMES.items():
        if value == window_id:
            return name
    return None
