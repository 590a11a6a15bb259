from __future__ import annotations

from dataclasses import dataclass
from operator import itemgetter
import logging

from structure_id.engine.classify import (
    CONTAINER_TAGS,
    TYPE_BITS,
    OpaquePolicy,
    TypeTag,
    classify,
    elements,
    is_opaque,
    opaque_key,
    own_fields,
)
from structure_id.engine.registry import BitRegistry
from structure_id.order_contract import sort_once

logger = logging.getLogger(__name__)

_field_name = itemgetter(0)


@dataclass(frozen=True)
class LevelSums:
    """Per-depth sums of one traversal, plus what the root itself contributed.

    `root_marker` is the `opaque:` bit of an atomic root, 0 otherwise.
    """

    levels: dict[int, int]
    root_tag: TypeTag
    root_marker: int = 0

    @property
    def depth_count(self) -> int:
        return len(self.levels)


def traverse(
    root: object,
    registry: BitRegistry,
    *,
    opaque_policy: OpaquePolicy = OpaquePolicy.FIELDS,
) -> LevelSums:
    """Walk `root` and accumulate registry bits per depth.

    Every node adds its tag bit at its own depth. Containers additionally add
    their `type:` marker, their field names in `sort_once` order or their
    `length:` and `[i]` markers, and each child re-adds the edge label that reached it at
    the child's depth. A container whose identity was already entered during
    this call adds a `circular:` marker built from its first-visit local
    signature and is not entered again.

    The walk is depth-first pre-order over an explicit stack, so nesting
    depth is bounded by memory rather than by the interpreter's recursion
    limit.
    """
    levels: dict[int, int] = {}
    # id -> (value, local signature); holding the value pins its id for the call.
    visited: dict[int, tuple[object, str]] = {}
    stack: list[tuple[object, int, str | None]] = [(root, 0, None)]
    root_tag = classify(root)
    root_marker = 0
    while stack:
        value, depth, label = stack.pop()
        if depth not in levels:
            levels[depth] = 1 << depth
        if label is not None:
            label_bit = registry.get_or_assign(label)
            levels[depth - 1] += label_bit
            levels[depth] += label_bit
        tag = classify(value)
        levels[depth] += TYPE_BITS[tag]
        if tag not in CONTAINER_TAGS:
            continue
        if is_opaque(value, opaque_policy):
            marker = registry.get_or_assign(opaque_key(value))
            levels[depth] += marker
            if depth == 0:
                root_marker = marker
            continue
        seen = visited.get(id(value))
        if seen is not None:
            levels[depth] += registry.get_or_assign(f"circular:{seen[1]}")
            continue
        if tag is TypeTag.OBJECT:
            fields = sort_once(
                own_fields(value),
                source="traverse.object_fields",
                key=_field_name,
                on_unsorted=_log_unsorted_fields,
            )
            visited[id(value)] = (value, "{" + ",".join(name for name, _ in fields) + "}")
            levels[depth] += registry.get_or_assign(f"type:{tag.value}")
            for name, child in reversed(fields):
                stack.append((child, depth + 1, name))
            continue
        items = elements(value)
        visited[id(value)] = (value, f"[{len(items)}]")
        levels[depth] += registry.get_or_assign(f"type:{tag.value}")
        levels[depth] += registry.get_or_assign(f"length:{len(items)}")
        for index in range(len(items) - 1, -1, -1):
            stack.append((items[index], depth + 1, f"[{index}]"))
    return LevelSums(levels=levels, root_tag=root_tag, root_marker=root_marker)


def _log_unsorted_fields(payload: dict[str, object]) -> None:
    logger.debug("object fields arrived out of order: %s", payload)
