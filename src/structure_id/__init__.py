"""structure-id: value-independent fingerprints of nested data shapes.

The module-level functions operate on a process-wide default context;
construct a `StructureIdContext` for an independent fingerprint domain.
"""

from __future__ import annotations

from typing import Mapping
import threading

from structure_id.config import StructureIdConfig, load_config
from structure_id.context import CallConfig, StructureIdContext, StructureInfo
from structure_id.engine.classify import MISSING, OpaquePolicy, TypeTag, classify
from structure_id.exceptions import (
    ConfigError,
    NeverRaise,
    NeverThrown,
    StateImportError,
    StructureIdError,
)
from structure_id.invariants import never
from structure_id.json_types import JSONObject

__all__ = [
    "__version__",
    "ConfigError",
    "MISSING",
    "NeverRaise",
    "NeverThrown",
    "OpaquePolicy",
    "StateImportError",
    "StructureIdConfig",
    "StructureIdContext",
    "StructureIdError",
    "StructureInfo",
    "TypeTag",
    "classify",
    "default_context",
    "export_state",
    "generate",
    "get_config",
    "import_state",
    "info",
    "load_config",
    "never",
    "reset",
    "set_config",
    "signature",
    "use_context",
]

__version__ = "1.2.8"

_DEFAULT_CONTEXT: StructureIdContext | None = None
_DEFAULT_CONTEXT_LOCK = threading.Lock()


def default_context() -> StructureIdContext:
    global _DEFAULT_CONTEXT
    with _DEFAULT_CONTEXT_LOCK:
        if _DEFAULT_CONTEXT is None:
            _DEFAULT_CONTEXT = StructureIdContext()
        return _DEFAULT_CONTEXT


def use_context(context: StructureIdContext) -> StructureIdContext | None:
    """Install `context` as the process default and return the previous one."""
    global _DEFAULT_CONTEXT
    with _DEFAULT_CONTEXT_LOCK:
        previous = _DEFAULT_CONTEXT
        _DEFAULT_CONTEXT = context
        return previous


def generate(value: object, config: CallConfig = None, *, collision_mode: bool | None = None) -> str:
    return default_context().generate(value, config, collision_mode=collision_mode)


def info(
    value: object, config: CallConfig = None, *, collision_mode: bool | None = None
) -> StructureInfo:
    return default_context().info(value, config, collision_mode=collision_mode)


def signature(value: object, config: CallConfig = None) -> str:
    return default_context().signature(value, config)


def set_config(config: CallConfig = None, **overrides: object) -> StructureIdConfig:
    return default_context().set_config(config, **overrides)


def get_config() -> StructureIdConfig:
    return default_context().get_config()


def reset() -> None:
    default_context().reset()


def export_state() -> JSONObject:
    return default_context().export_state()


def import_state(state: Mapping[str, object]) -> None:
    default_context().import_state(state)
