"""Tests for slot transaction building."""

from __future__ import annotations

from typing import Any

import pytest

from bedrockbot.core.transactions import SlotTransactionBuilder
from bedrockbot.errors import EmptySlotError, InvalidSlotError
from bedrockbot.protocol.items import EMPTY_ITEM, Item


def apply_actions(containers: dict[int, list[dict[str, Any]]], payload: dict[str, Any]) -> None:
    """Apply a transaction payload to plain slot lists the way a server would."""
    for action in payload["transaction"]["actions"]:
        slots = containers[action["inventory_id"]]
        assert slots[action["slot"]]["network_id"] == action["old_item"]["network_id"]
        slots[action["slot"]] = action["new_item"]


def player_inventory(occupied: int, size: int = 36) -> list[Item]:
    return [Item(item_id=1, count=64) if index < occupied else EMPTY_ITEM for index in range(size)]


def test_relocation_moves_item_to_first_empty_slot() -> None:
    stone = Item(item_id=7, count=1)
    transaction = SlotTransactionBuilder().build(12, 5, stone, player_inventory(occupied=3))

    assert transaction.kind == "relocation"
    assert transaction.destination_slot == 3
    assert len(transaction.actions) == 2

    container = [{"network_id": 0} for _ in range(27)]
    container[5] = {"network_id": 7, "count": 1}
    player = [{"network_id": 1, "count": 64}] * 3 + [{"network_id": 0} for _ in range(33)]
    apply_actions({12: container, 0: player}, transaction.to_payload())

    assert container[5]["network_id"] == 0
    assert player[3]["network_id"] == 7
    assert player[3]["count"] == 1


def test_relocation_payload_shape() -> None:
    stone = Item(item_id=7, count=1)
    payload = SlotTransactionBuilder().build(12, 5, stone, player_inventory(occupied=3)).to_payload()

    transaction = payload["transaction"]
    assert transaction["legacy"] == {"legacy_request_id": 0}
    assert transaction["transaction_type"] == "normal"
    source, destination = transaction["actions"]
    assert source == {
        "source_type": "container",
        "inventory_id": 12,
        "slot": 5,
        "old_item": {"network_id": 7, "count": 1, "metadata": 0},
        "new_item": {"network_id": 0},
    }
    assert destination["inventory_id"] == 0
    assert destination["slot"] == 3
    assert destination["old_item"] == {"network_id": 0}


def test_acknowledgment_when_player_inventory_unknown() -> None:
    stone = Item(item_id=7, count=1)
    transaction = SlotTransactionBuilder().build(12, 5, stone, None)

    assert transaction.kind == "acknowledgment"
    assert transaction.destination_slot is None
    (action,) = transaction.actions
    assert action.slot == 5
    assert action.old_item == action.new_item == stone


def test_acknowledgment_when_player_inventory_full() -> None:
    transaction = SlotTransactionBuilder().build(12, 5, Item(item_id=7, count=1), player_inventory(occupied=36))
    assert transaction.kind == "acknowledgment"


def test_unknown_item_fields_are_echoed_back() -> None:
    enchanted = Item.from_wire({"network_id": 300, "count": 1, "block_runtime_id": 0, "extra": {"has_nbt": True}})
    transaction = SlotTransactionBuilder().build(12, 0, enchanted, None)

    wire = transaction.to_payload()["transaction"]["actions"][0]["old_item"]
    assert wire["extra"] == {"has_nbt": True}
    assert wire["block_runtime_id"] == 0


@pytest.mark.parametrize("item", [None, EMPTY_ITEM, Item(item_id=0, count=5)])
def test_empty_source_is_rejected(item: Item | None) -> None:
    with pytest.raises(EmptySlotError):
        SlotTransactionBuilder().build(12, 5, item, player_inventory(occupied=0))


@pytest.mark.parametrize("slot", [-1, True, "5", 2.0])
def test_invalid_slot_is_rejected(slot) -> None:  # noqa: ANN001
    with pytest.raises(InvalidSlotError):
        SlotTransactionBuilder().build(12, slot, Item(item_id=7, count=1), None)


def test_errors_are_value_errors() -> None:
    with pytest.raises(ValueError):
        SlotTransactionBuilder().build(12, 5, None, None)
