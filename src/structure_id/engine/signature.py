from __future__ import annotations

from typing import Mapping

from structure_id.engine.decimal_text import format_decimal, parse_decimal
from structure_id.order_contract import sort_once

SEGMENT_SEPARATOR = "-"


def format_segment(depth: int, value: int) -> str:
    return f"L{depth}:{format_decimal(value)}"


def build_structure_signature(levels: Mapping[int, int]) -> str:
    """Render depths >= 1 as `L{d}:{sum}` segments in ascending depth order.

    Depth 0 is left out: the root segment is minted separately so that it can
    carry the collision counter.
    """
    depths = sort_once(
        (depth for depth in levels if depth >= 1),
        source="build_structure_signature.depths",
    )
    return SEGMENT_SEPARATOR.join(format_segment(depth, levels[depth]) for depth in depths)


def format_structure_id(root_segment: int, signature: str) -> str:
    root = format_segment(0, root_segment)
    if not signature:
        return root
    return f"{root}{SEGMENT_SEPARATOR}{signature}"


def char_sum(text: str) -> int:
    return sum(ord(ch) for ch in text)


def split_structure_id(structure_id: str) -> list[tuple[int, int]]:
    segments: list[tuple[int, int]] = []
    for part in structure_id.split(SEGMENT_SEPARATOR):
        label, sep, digits = part.partition(":")
        if not sep or not label.startswith("L") or not label[1:].isdigit():
            raise ValueError(f"malformed structure id segment: {part!r}")
        segments.append((int(label[1:]), parse_decimal(digits)))
    return segments


def level_count(structure_id: str) -> int:
    return structure_id.count(SEGMENT_SEPARATOR) + 1


def structure_signature_of(structure_id: str) -> str:
    """Drop the root segment of a structure id, leaving its signature."""
    _, _, signature = structure_id.partition(SEGMENT_SEPARATOR)
    return signature
