"""Tests for container inference."""

from __future__ import annotations

import pytest
from hypothesis import given
from hypothesis import strategies as st

from bedrockbot.core.inference import INVENTORY_CONTAINER_ALIASES, classify, snapshot_signature

window_ids = st.one_of(st.none(), st.integers(min_value=-100, max_value=200))
container_hints = st.one_of(st.none(), st.text(max_size=12), st.sampled_from(sorted(INVENTORY_CONTAINER_ALIASES)))
dynamic_hints = st.one_of(st.none(), st.integers(), st.floats(allow_nan=False, allow_infinity=False))


@given(window_id=window_ids, container_id=container_hints, dynamic_id=dynamic_hints)
def test_player_inventory_size_is_never_foreign(window_id, container_id, dynamic_id) -> None:  # noqa: ANN001
    result = classify(window_id, container_id, dynamic_id, 36)
    assert not result.is_foreign_ui
    assert result.rule == "player_inventory_size"


@given(
    window_id=window_ids,
    dynamic_id=st.one_of(st.integers(), st.floats(allow_nan=False, allow_infinity=False)),
    size=st.integers(min_value=0, max_value=120).filter(lambda n: n != 36),
)
def test_dynamic_container_id_is_foreign(window_id, dynamic_id, size: int) -> None:  # noqa: ANN001
    assert classify(window_id, None, dynamic_id, size).is_foreign_ui


@pytest.mark.parametrize(
    ("container_id", "dynamic_id", "size", "foreign", "rule"),
    [
        ("barrel", None, 27, True, "foreign_container_id"),
        ("inventory", None, 27, True, "non_inventory_size"),
        ("hotbar", None, 0, False, "ambiguous"),
        (None, 12, 0, True, "dynamic_container_id"),
        (None, True, 0, False, "ambiguous"),
        (None, float("nan"), 0, False, "ambiguous"),
        (None, None, 54, True, "non_inventory_size"),
        (None, None, 0, False, "ambiguous"),
        ("chest", 3, 36, False, "player_inventory_size"),
    ],
)
def test_rule_order(container_id, dynamic_id, size: int, foreign: bool, rule: str) -> None:  # noqa: ANN001
    result = classify(5, container_id, dynamic_id, size)
    assert result.is_foreign_ui is foreign
    assert result.rule == rule


def test_snapshot_signature_distinguishes_snapshots() -> None:
    first = snapshot_signature("first", 1, None, None, 27)
    second = snapshot_signature("first", 1, None, 9, 27)

    assert first != second
    assert "size=27" in first
    assert "dyn=-" in first
    assert "dyn=9" in second
