# Copyright (c) 2025-2026 provide.io llc
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Item slot values."""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class Item(BaseModel):
    """Immutable slot content.

    ``item_id == 0`` is the empty sentinel regardless of the other fields.
    Unknown wire fields are kept so the item can be echoed back unchanged.
    """

    item_id: int = Field(default=0, alias="network_id")
    count: int = 0
    metadata: int = 0
    stack_id: int | None = None

    model_config = ConfigDict(frozen=True, extra="allow", populate_by_name=True)

    @property
    def is_empty(self) -> bool:
        return self.item_id == 0

    @classmethod
    def from_wire(cls, raw: Any) -> Item:
        if isinstance(raw, Item):
            return raw
        if not isinstance(raw, dict):
            return EMPTY_ITEM
        return cls.model_validate(raw)

    def to_wire(self) -> dict[str, Any]:
        if self.is_empty:
            return {"network_id": 0}
        return self.model_dump(by_alias=True, exclude_none=True)

    def short(self) -> str:
        if self.is_empty:
            return "<empty>"
        text = f"id={self.item_id} x{self.count} meta={self.metadata}"
        if self.stack_id is not None:
            text += f" stackId={self.stack_id}"
        return text


EMPTY_ITEM = Item()


def is_empty_item(item: Item | None) -> bool:
    return item is None or item.is_empty


def parse_items(raw: Any) -> list[Item]:
    """Parse a wire item array; anything that is not a list yields []."""
    if not isinstance(raw, (list, tuple)):
        return []
    return [Item.from_wire(entry) for entry in raw]


def first_empty_index(slots: Iterable[Item | None] | None) -> int | None:
    if slots is None:
        return None
    for index, item in enumerate(slots):
        if is_empty_item(item):
            return index
    return None
