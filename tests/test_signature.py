from __future__ import annotations

import pytest

from structure_id.engine.signature import (
    build_structure_signature,
    char_sum,
    format_structure_id,
    level_count,
    split_structure_id,
    structure_signature_of,
)


def test_build_structure_signature_skips_root_and_orders_depths() -> None:
    signature = build_structure_signature({2: 40, 0: 999, 1: 7})
    assert signature == "L1:7-L2:40"


def test_build_structure_signature_of_root_only_levels_is_empty() -> None:
    assert build_structure_signature({0: 5}) == ""


def test_format_structure_id_prefixes_root_segment() -> None:
    assert format_structure_id(3, "L1:5") == "L0:3-L1:5"
    assert format_structure_id(0, "") == "L0:0"


def test_format_structure_id_keeps_full_precision() -> None:
    wide = 1 << 15_000
    structure_id = format_structure_id(0, build_structure_signature({1: wide}))
    assert split_structure_id(structure_id) == [(0, 0), (1, wide)]


def test_split_and_count_levels() -> None:
    structure_id = "L0:12-L1:5-L2:99"
    assert split_structure_id(structure_id) == [(0, 12), (1, 5), (2, 99)]
    assert level_count(structure_id) == 3
    assert structure_signature_of(structure_id) == "L1:5-L2:99"
    assert structure_signature_of("L0:1") == ""


@pytest.mark.parametrize("bad", ["L0", "X0:1", "L0:1-", "Lx:1"])
def test_split_structure_id_rejects_malformed_segments(bad: str) -> None:
    with pytest.raises(ValueError):
        split_structure_id(bad)


def test_char_sum_adds_code_points() -> None:
    assert char_sum("") == 0
    assert char_sum("L1:5") == ord("L") + ord("1") + ord(":") + ord("5")
