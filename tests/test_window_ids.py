"""Tests for window id normalization and item parsing."""

from __future__ import annotations

import pytest

from bedrockbot.protocol.items import EMPTY_ITEM, Item, first_empty_index, parse_items
from bedrockbot.protocol.window_ids import (
    is_player_inventory_window,
    normalize_window_id,
    window_id_name,
)


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        (0, 0),
        (12, 12),
        ("12", 12),
        (" 7 ", 7),
        ("-2", -2),
        (3.0, 3),
        ("4.0", 4),
        (2**40, 2**40),
        ("inventory", 0),
        ("first", 1),
        ("last", 100),
        ("offhand", 119),
        ("armor", 120),
        ("ui", 124),
        ("none", -1),
        ("drop_contents", -100),
        ("beacon", -24),
        ("crafting_add_ingredient", -2),
    ],
)
def test_normalize_window_id(raw, expected: int) -> None:  # noqa: ANN001
    assert normalize_window_id(raw) == expected


@pytest.mark.parametrize("raw", [None, True, False, "chest_of_doom", 2.5, float("nan"), [], {}])
def test_unusable_window_ids_normalize_to_none(raw) -> None:  # noqa: ANN001
    assert normalize_window_id(raw) is None


@pytest.mark.parametrize("raw", [0, 1, 2, 119, 120, "inventory", "offhand", "armor", "0"])
def test_player_inventory_windows(raw) -> None:  # noqa: ANN001
    assert is_player_inventory_window(raw)


@pytest.mark.parametrize("raw", [3, 5, 124, -1, "ui", None, "bogus"])
def test_foreign_windows(raw) -> None:  # noqa: ANN001
    assert not is_player_inventory_window(raw)


def test_window_id_name_reverse_lookup() -> None:
    assert window_id_name(119) == "offhand"
    assert window_id_name(55) is None


def test_parse_items_handles_non_lists() -> None:
    assert parse_items(None) == []
    assert parse_items({"network_id": 1}) == []


def test_parse_items_treats_garbage_entries_as_empty() -> None:
    items = parse_items([{"network_id": 5, "count": 2}, None, "x", {"network_id": 0, "count": 9}])

    assert items[0] == Item(item_id=5, count=2)
    assert items[1] is EMPTY_ITEM
    assert items[2] is EMPTY_ITEM
    assert items[3].is_empty


def test_first_empty_index() -> None:
    full = Item(item_id=1, count=1)
    assert first_empty_index([full, full, EMPTY_ITEM, full]) == 2
    assert first_empty_index([full, None]) == 1
    assert first_empty_index([full]) is None
    assert first_empty_index([]) is None
    assert first_empty_index(None) is None
