# Copyright (c) 2025-2026 provide.io llc
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Container inference: player inventory vs. server-generated UI.

Servers differ in how explicitly they frame a UI open. When the explicit
container-open packet is missing (or cannot be decoded) an inventory snapshot
is classified with an ordered rule list; the first matching rule wins and
anything ambiguous is treated as ordinary inventory traffic.

Only consult this while a UI response is actually expected, otherwise normal
inventory churn would be misread as a UI.
"""

from __future__ import annotations

import math
from typing import Any

from pydantic import BaseModel

from bedrockbot.constants import PLAYER_INVENTORY_SIZE

INVENTORY_CONTAINER_ALIASES = frozenset(
    {
        "inventory",
        "hotbar",
        "hotbar_and_inventory",
        "offhand",
        "armor",
    }
)


class ContainerClassification(BaseModel):
    is_foreign_ui: bool
    rule: str


def _is_number(value: Any) -> bool:
    if isinstance(value, bool):
        return False
    if isinstance(value, int):
        return True
    return isinstance(value, float) and math.isfinite(value)


def classify(
    window_id: int | None,
    container_id_hint: Any = None,
    dynamic_id_hint: Any = None,
    slot_count: int = 0,
) -> ContainerClassification:
    """Classify one inventory snapshot.

    Args:
        window_id: Normalized window id (informational; rules do not use it)
        container_id_hint: Optional ``container.container_id`` string
        dynamic_id_hint: Optional ``container.dynamic_container_id`` number
        slot_count: Number of slots in the snapshot

    Returns:
        Classification with the name of the rule that decided it
    """
    _ = window_id
    if slot_count == PLAYER_INVENTORY_SIZE:
        return ContainerClassification(is_foreign_ui=False, rule="player_inventory_size")
    if isinstance(container_id_hint, str) and container_id_hint not in INVENTORY_CONTAINER_ALIASES:
        return ContainerClassification(is_foreign_ui=True, rule="foreign_container_id")
    if dynamic_id_hint is not None and _is_number(dynamic_id_hint):
        return ContainerClassification(is_foreign_ui=True, rule="dynamic_container_id")
    if slot_count > 0:
        return ContainerClassification(is_foreign_ui=True, rule="non_inventory_size")
    return ContainerClassification(is_foreign_ui=False, rule="ambiguous")


def snapshot_signature(
    raw_window_id: Any,
    window_id: int | None,
    container_id_hint: Any,
    dynamic_id_hint: Any,
    slot_count: int,
) -> str:
    """One-line description used to de-duplicate UI candidate logging."""
    dyn = "-" if dynamic_id_hint is None else str(dynamic_id_hint)
    return f"win={raw_window_id!s}(norm={window_id!s}) cid={container_id_hint!s} dyn={dyn} size={slot_count}"
