from __future__ import annotations

from dataclasses import dataclass, replace
from pathlib import Path
from typing import Mapping
import logging
import threading

from structure_id.config import StructureIdConfig, load_config
from structure_id.engine.classify import TYPE_BITS, OpaquePolicy
from structure_id.engine.collisions import (
    CollisionCounter,
    default_root_segment,
    draw_epoch_seed,
)
from structure_id.engine.identity_cache import IdentityCache
from structure_id.engine.registry import BitRegistry
from structure_id.engine.signature import (
    build_structure_signature,
    format_structure_id,
    level_count,
)
from structure_id.engine.traversal import traverse
from structure_id.json_types import JSONObject
from structure_id.state import export_payload, parse_state

logger = logging.getLogger(__name__)

CallConfig = StructureIdConfig | Mapping[str, object] | None


@dataclass(frozen=True)
class StructureInfo:
    id: str
    level_count: int
    collision_count: int

    def as_dict(self) -> dict[str, object]:
        return {
            "id": self.id,
            "level_count": self.level_count,
            "collision_count": self.collision_count,
        }


@dataclass(frozen=True)
class _Shape:
    signature: str
    root_term: int
    opaque_policy: OpaquePolicy


@dataclass(frozen=True)
class _MintedId:
    structure_id: str
    signature: str
    counter: int
    opaque_policy: OpaquePolicy


@dataclass(frozen=True)
class _CachedInfo:
    info: StructureInfo
    signature: str
    collision_mode: bool
    opaque_policy: OpaquePolicy


class StructureIdContext:
    """One fingerprint domain: registry, collision counters, caches and epoch.

    Contexts are independent of each other; two contexts never share bits or
    counters. Public operations are serialised on a per-context lock.

    The identity caches only hold inputs that support weak references (class
    instances, dataclasses). Plain `dict`, `list` and `tuple` inputs are
    traversed again on every call.
    """

    def __init__(self, config: StructureIdConfig | None = None) -> None:
        self._lock = threading.RLock()
        self._config = config if config is not None else StructureIdConfig()
        self._epoch = 0
        self._epoch_seed = draw_epoch_seed()
        self._registry = BitRegistry()
        self._counters = CollisionCounter()
        self._ids: IdentityCache[_MintedId] = IdentityCache()
        self._shapes: IdentityCache[_Shape] = IdentityCache()
        self._infos: IdentityCache[_CachedInfo] = IdentityCache()

    @classmethod
    def from_config(
        cls, root: Path | None = None, config_path: Path | None = None
    ) -> "StructureIdContext":
        return cls(load_config(root=root, config_path=config_path))

    @property
    def epoch(self) -> int:
        return self._epoch

    @property
    def epoch_seed(self) -> int:
        return self._epoch_seed

    @property
    def registry(self) -> BitRegistry:
        return self._registry

    def get_config(self) -> StructureIdConfig:
        return self._config

    def set_config(self, config: CallConfig = None, **overrides: object) -> StructureIdConfig:
        with self._lock:
            updated = self._config.merged(config)
            if overrides:
                updated = updated.merged(overrides)
            if updated.opaque_policy is not self._config.opaque_policy:
                self._clear_caches()
            self._config = updated
            logger.debug("structure-id config set: %s", updated.as_dict())
            return updated

    def generate(
        self,
        value: object,
        config: CallConfig = None,
        *,
        collision_mode: bool | None = None,
    ) -> str:
        with self._lock:
            resolved = self._resolve(config, collision_mode)
            policy = resolved.opaque_policy
            if resolved.collision_mode:
                shape = self._shape(value, policy)
                counter = self._counters.advance(shape.signature)
                self._ids.discard(value)
                self._infos.discard(value)
                return format_structure_id(counter, shape.signature)
            minted = self._ids.get(value)
            if (
                minted is not None
                and minted.opaque_policy is policy
                and self._counters.current(minted.signature) == minted.counter
            ):
                return minted.structure_id
            shape = self._shape(value, policy)
            return self._mint_default(value, shape).structure_id

    def info(
        self,
        value: object,
        config: CallConfig = None,
        *,
        collision_mode: bool | None = None,
    ) -> StructureInfo:
        """Describe `value` without advancing any collision counter."""
        with self._lock:
            resolved = self._resolve(config, collision_mode)
            policy = resolved.opaque_policy
            cached = self._infos.get(value)
            if (
                cached is not None
                and cached.collision_mode == resolved.collision_mode
                and cached.opaque_policy is policy
                and self._counters.current(cached.signature) == cached.info.collision_count
            ):
                return cached.info
            shape = self._shape(value, policy)
            counter = self._counters.current(shape.signature)
            if resolved.collision_mode:
                structure_id = format_structure_id(counter, shape.signature)
            else:
                structure_id = self._mint_default(value, shape).structure_id
            info = StructureInfo(
                id=structure_id,
                level_count=level_count(structure_id),
                collision_count=counter,
            )
            self._infos.put(
                value,
                _CachedInfo(
                    info=info,
                    signature=shape.signature,
                    collision_mode=resolved.collision_mode,
                    opaque_policy=policy,
                ),
            )
            return info

    def signature(self, value: object, config: CallConfig = None) -> str:
        """Return the structure signature (every segment but the root)."""
        with self._lock:
            return self._shape(value, self._resolve(config, None).opaque_policy).signature

    def reset(self) -> None:
        with self._lock:
            self._registry = BitRegistry()
            self._counters = CollisionCounter()
            self._clear_caches()
            self._epoch += 1
            self._epoch_seed = draw_epoch_seed(self._epoch_seed)
            logger.debug("structure-id context reset; epoch=%d", self._epoch)

    def export_state(self) -> JSONObject:
        with self._lock:
            return export_payload(self._registry, self._counters)

    def import_state(self, state: Mapping[str, object]) -> None:
        imported = parse_state(state)
        with self._lock:
            self.reset()
            self._registry = imported.registry
            self._counters = imported.counters
            logger.debug(
                "structure-id state imported: %d keys, %d counters",
                len(imported.registry),
                len(imported.counters),
            )

    def _resolve(self, config: CallConfig, collision_mode: bool | None) -> StructureIdConfig:
        resolved = self._config.merged(config)
        if collision_mode is not None:
            resolved = replace(resolved, collision_mode=bool(collision_mode))
        return resolved

    def _shape(self, value: object, policy: OpaquePolicy) -> _Shape:
        cached = self._shapes.get(value)
        if cached is not None and cached.opaque_policy is policy:
            return cached
        sums = traverse(value, self._registry, opaque_policy=policy)
        shape = _Shape(
            signature=build_structure_signature(sums.levels),
            root_term=TYPE_BITS[sums.root_tag] + sums.root_marker,
            opaque_policy=policy,
        )
        self._shapes.put(value, shape)
        return shape

    def _mint_default(self, value: object, shape: _Shape) -> _MintedId:
        counter = self._counters.current(shape.signature)
        root = default_root_segment(
            shape.signature,
            root_term=shape.root_term,
            epoch_seed=self._epoch_seed,
            counter=counter,
        )
        minted = _MintedId(
            structure_id=format_structure_id(root, shape.signature),
            signature=shape.signature,
            counter=counter,
            opaque_policy=shape.opaque_policy,
        )
        self._ids.put(value, minted)
        return minted

    def _clear_caches(self) -> None:
        self._ids.clear()
        self._shapes.clear()
        self._infos.clear()
