"""Export / import of a context's registry and collision counters.

The exported form is JSON-friendly: bits travel as decimal strings so that
arbitrary-precision values survive any JSON implementation, counters travel
as plain integers.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping

from pydantic import ValidationError

from structure_id.engine.classify import FIRST_APPLICATION_BIT
from structure_id.engine.collisions import CollisionCounter
from structure_id.engine.decimal_text import parse_decimal
from structure_id.engine.registry import BitRegistry
from structure_id.exceptions import StateImportError
from structure_id.json_types import JSONObject
from structure_id.schema import ExportedStateDTO


@dataclass(frozen=True)
class ImportedState:
    registry: BitRegistry
    counters: CollisionCounter


def export_payload(registry: BitRegistry, counters: CollisionCounter) -> JSONObject:
    return {
        "registry_mapping": dict(registry.seed_payload()),
        "collision_counters": dict(counters.payload()),
    }


def parse_state(state: object) -> ImportedState:
    """Validate an exported payload completely and build fresh state from it.

    Nothing is applied here; callers swap the result in only once this
    returns, which keeps imports all-or-nothing.
    """
    if not isinstance(state, Mapping):
        raise StateImportError(
            f"exported state must be a mapping, got {type(state).__name__}"
        )
    try:
        dto = ExportedStateDTO.model_validate(dict(state))
    except ValidationError as exc:
        raise StateImportError(f"malformed exported state: {exc}") from exc

    bits: dict[str, int] = {}
    owners: dict[int, str] = {}
    for key, text in dto.registry_mapping.items():
        bit = parse_decimal(text)
        if bit < FIRST_APPLICATION_BIT:
            raise StateImportError(
                f"bit for {key!r} falls inside the reserved type range: {text}"
            )
        other = owners.get(bit)
        if other is not None:
            raise StateImportError(
                f"keys {other!r} and {key!r} share the same bit {text}"
            )
        owners[bit] = key
        bits[key] = bit
    return ImportedState(
        registry=BitRegistry.from_bits(bits),
        counters=CollisionCounter(counts=dict(dto.collision_counters)),
    )
