# Copyright (c) 2025-2026 provide.io llc
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Open container state."""

from __future__ import annotations

from enum import StrEnum
from typing import Any, Literal

from pydantic import BaseModel, Field

from bedrockbot.protocol.items import EMPTY_ITEM, Item


class WindowKind(StrEnum):
    PLAYER_INVENTORY = "player_inventory"
    FOREIGN_UI = "foreign_ui"


class Window(BaseModel):
    """The one server-driven container a session currently tracks."""

    window_id: int
    kind: WindowKind = WindowKind.FOREIGN_UI
    window_type: str | None = None
    source: Literal["container_open", "inferred"] = "container_open"
    items: list[Item] = Field(default_factory=list)
    content_received: bool = False
    dumped_once: bool = False

    def apply_snapshot(self, items: list[Item]) -> None:
        """Replace all slots with a full snapshot."""
        self.items = list(items)
        self.content_received = True

    def apply_slot(self, slot: int, item: Item) -> None:
        """Apply an incremental single-slot update, growing the list as needed."""
        if slot < 0:
            return
        if slot >= len(self.items):
            self.items.extend([EMPTY_ITEM] * (slot + 1 - len(self.items)))
        self.items[slot] = item

    def item_at(self, slot: int) -> Item | None:
        if 0 <= slot < len(self.items):
            return self.items[slot]
        return None

    @property
    def size(self) -> int:
        return len(self.items)

    def occupied(self) -> list[tuple[int, Item]]:
        return [(index, item) for index, item in enumerate(self.items) if not item.is_empty]

    def summary(self) -> dict[str, Any]:
        return {
            "window_id": self.window_id,
            "kind": self.kind.value,
            "window_type": self.window_type,
            "source": self.source,
            "size": self.size,
            "content_received": self.content_received,
            "occupied": len(self.occupied()),
        }
