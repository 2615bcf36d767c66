# Copyright (c) 2025-2026 provide.io llc
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Slot interaction transactions.

Two shapes exist:

* relocation: move the item out of the container slot into the first empty
  player inventory slot (two actions).
* acknowledgment: an identity old/new pair on the source slot, used when the
  player inventory is unknown, stale or full (one action).
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict

from bedrockbot.errors import EmptySlotError, InvalidSlotError
from bedrockbot.protocol.items import EMPTY_ITEM, Item, first_empty_index, is_empty_item
from bedrockbot.protocol.window_ids import PLAYER_INVENTORY_WINDOW_ID


class SlotAction(BaseModel):
    window_id: int
    slot: int
    old_item: Item
    new_item: Item
    source_type: str = "container"

    model_config = ConfigDict(frozen=True)

    def to_wire(self) -> dict[str, Any]:
        return {
            "source_type": self.source_type,
            "inventory_id": self.window_id,
            "slot": self.slot,
            "old_item": self.old_item.to_wire(),
            "new_item": self.new_item.to_wire(),
        }


class Transaction(BaseModel):
    kind: Literal["relocation", "acknowledgment"]
    actions: tuple[SlotAction, ...]
    legacy_request_id: int = 0

    model_config = ConfigDict(frozen=True)

    @property
    def destination_slot(self) -> int | None:
        if self.kind != "relocation":
            return None
        return self.actions[-1].slot

    def to_payload(self) -> dict[str, Any]:
        return {
            "transaction": {
                "legacy": {"legacy_request_id": self.legacy_request_id},
                "transaction_type": "normal",
                "actions": [action.to_wire() for action in self.actions],
            }
        }


class SlotTransactionBuilder:
    """Builds the outbound transaction for "interact with slot N"."""

    def __init__(self, player_window_id: int = PLAYER_INVENTORY_WINDOW_ID) -> None:
        self.player_window_id = player_window_id

    def build(
        self,
        window_id: int,
        slot_index: int,
        item: Item | None,
        destination_slots: Sequence[Item | None] | None,
    ) -> Transaction:
        """Build a relocation or acknowledgment transaction.

        Raises:
            InvalidSlotError: If slot_index is not a non-negative int
            EmptySlotError: If the source slot holds nothing
        """
        if isinstance(slot_index, bool) or not isinstance(slot_index, int) or slot_index < 0:
            raise InvalidSlotError(f"Invalid slot index: {slot_index!r}")
        if is_empty_item(item):
            raise EmptySlotError(f"Slot {slot_index} of window {window_id} is empty")

        dest = first_empty_index(destination_slots)
        if dest is None:
            return Transaction(
                kind="acknowledgment",
                actions=(SlotAction(window_id=window_id, slot=slot_index, old_item=item, new_item=item),),
            )
        return Transaction(
            kind="relocation",
            actions=(
                SlotAction(window_id=window_id, slot=slot_index, old_item=item, new_item=EMPTY_ITEM),
                SlotAction(window_id=self.player_window_id, slot=dest, old_item=EMPTY_ITEM, new_item=item),
            ),
        )
