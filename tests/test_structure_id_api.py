from __future__ import annotations

from decimal import Decimal
from enum import Enum
from fractions import Fraction

import pytest

import structure_id
from structure_id import MISSING, StructureIdConfig, StructureIdContext
from structure_id.engine.signature import split_structure_id, structure_signature_of

_SEGMENT_DIGITS = set("0123456789")


class Color(Enum):
    RED = "red"


def _nested(depth: int) -> dict[str, object]:
    node: dict[str, object] = {"leaf": 1}
    for index in range(depth):
        node = {f"level{index}": node}
    return node


def _assert_well_formed(structure_id_text: str) -> None:
    assert structure_id_text.isascii()
    for index, part in enumerate(structure_id_text.split("-")):
        label, _, digits = part.partition(":")
        assert label == f"L{index}"
        assert digits and set(digits) <= _SEGMENT_DIGITS
        assert digits == "0" or not digits.startswith("0")


def test_field_order_and_values_do_not_matter() -> None:
    assert structure_id.generate({"count": 0, "name": "x"}) == structure_id.generate(
        {"name": "y", "count": 1}
    )


def test_field_names_change_the_signature() -> None:
    left = structure_id.generate({"count": 0, "name": "x"})
    right = structure_id.generate({"count": 0, "title": "x"})
    assert structure_signature_of(left) != structure_signature_of(right)


def test_element_types_change_the_signature() -> None:
    left = structure_id.generate({"value": 1})
    right = structure_id.generate({"value": "1"})
    assert structure_signature_of(left) != structure_signature_of(right)


def test_five_levels_of_nesting_yield_six_segments() -> None:
    payload = {"a": {"b": {"c": {"d": {"e": 1}}}}}
    generated = structure_id.generate(payload)
    assert [depth for depth, _ in split_structure_id(generated)] == [0, 1, 2, 3, 4, 5]
    assert structure_id.info(payload).level_count == 6


def test_array_length_matters_but_element_values_do_not() -> None:
    short = structure_id.signature({"items": [1, 2, 3]})
    longer = structure_id.signature({"items": [1, 2, 3, 4]})
    other = structure_id.signature({"items": [4, 5, 6]})
    assert short != longer
    assert short == other


def test_tuples_and_lists_share_a_shape() -> None:
    assert structure_id.generate({"pair": (1, 2)}) == structure_id.generate({"pair": [3, 4]})


def test_cyclic_graphs_terminate_and_match_when_isomorphic() -> None:
    me: dict[str, object] = {"name": "me"}
    me["self"] = me
    other: dict[str, object] = {"name": "other"}
    other["self"] = other
    generated = structure_id.generate(me)
    _assert_well_formed(generated)
    assert generated == structure_id.generate(other)

    def _ring(tag: str) -> dict[str, object]:
        first: dict[str, object] = {"id": tag}
        second: dict[str, object] = {"id": tag}
        third: dict[str, object] = {"id": tag}
        first["next"] = second
        second["next"] = third
        third["next"] = first
        return first

    assert structure_id.signature(_ring("a")) == structure_id.signature(_ring("b"))
    assert structure_id.signature(_ring("a")) != structure_id.signature(me)


@pytest.mark.parametrize(
    "value",
    [
        0,
        -7,
        10**40,
        1.5,
        Decimal("2.5"),
        Fraction(1, 3),
        complex(1, 2),
        "",
        b"raw",
        True,
        None,
        MISSING,
        Color.RED,
        Ellipsis,
        {},
        [],
        set(),
        frozenset({1}),
    ],
)
def test_every_value_yields_a_well_formed_id(value: object) -> None:
    _assert_well_formed(structure_id.generate(value))


def test_deep_chains_do_not_exhaust_the_stack() -> None:
    generated = structure_id.generate(_nested(3000))
    _assert_well_formed(generated)
    assert structure_id.info(_nested(3000)).level_count == 3002


def test_wide_inputs_keep_full_precision() -> None:
    payload = {f"field{index}": index for index in range(400)}
    generated = structure_id.generate(payload)
    _assert_well_formed(generated)
    (_, root), (_, level_one) = split_structure_id(generated)
    assert level_one.bit_length() > 400
    assert root.bit_length() > 32


def test_module_level_config_round_trip() -> None:
    assert structure_id.get_config() == StructureIdConfig()
    structure_id.set_config(collision_mode=True)
    assert structure_id.get_config().collision_mode is True
    first = structure_id.generate({"k": 1})
    second = structure_id.generate({"k": 2})
    assert split_structure_id(first)[0] == (0, 0)
    assert split_structure_id(second)[0] == (0, 1)
    assert structure_id.info({"k": 3}).collision_count == 2
    assert structure_id.info({"k": 3}).collision_count == 2


def test_module_level_reset_changes_default_ids() -> None:
    payload = {"name": "x"}
    before = structure_id.generate(payload)
    assert structure_id.generate(payload) == before
    structure_id.reset()
    after = structure_id.generate(payload)
    assert after != before
    assert structure_id.generate({"name": "y"}) == after


def test_use_context_swaps_the_default() -> None:
    isolated = StructureIdContext(StructureIdConfig(collision_mode=True))
    previous = structure_id.use_context(isolated)
    try:
        assert structure_id.default_context() is isolated
        structure_id.generate({"a": 1})
        assert isolated.export_state()["collision_counters"]
    finally:
        structure_id.use_context(previous)
    assert structure_id.default_context() is previous
