from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import date, datetime, time
from pathlib import Path
from typing import Mapping, TypeAlias
import logging
import tomllib

from pydantic import ValidationError

from structure_id.engine.classify import OpaquePolicy
from structure_id.exceptions import ConfigError
from structure_id.runtime.env_policy import config_env_overrides
from structure_id.schema import ConfigUpdateDTO

DEFAULT_CONFIG_NAME = "structure_id.toml"
CONFIG_SECTION = "structure_id"

TomlScalar: TypeAlias = str | int | float | bool | None | date | datetime | time
TomlValue: TypeAlias = TomlScalar | list["TomlValue"] | dict[str, "TomlValue"]
TomlTable: TypeAlias = dict[str, TomlValue]

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StructureIdConfig:
    collision_mode: bool = False
    opaque_policy: OpaquePolicy = OpaquePolicy.FIELDS

    def as_dict(self) -> dict[str, object]:
        return {
            "collision_mode": self.collision_mode,
            "opaque_policy": self.opaque_policy.value,
        }

    def merged(self, overrides: "StructureIdConfig | Mapping[str, object] | None") -> "StructureIdConfig":
        if overrides is None:
            return self
        if isinstance(overrides, StructureIdConfig):
            return overrides
        update = parse_config_update(overrides)
        changes: dict[str, object] = {}
        if update.collision_mode is not None:
            changes["collision_mode"] = update.collision_mode
        if update.opaque_policy is not None:
            changes["opaque_policy"] = OpaquePolicy(update.opaque_policy)
        return replace(self, **changes) if changes else self


def parse_config_update(payload: Mapping[str, object]) -> ConfigUpdateDTO:
    if not isinstance(payload, Mapping):
        raise ConfigError(f"config must be a mapping, got {type(payload).__name__}")
    try:
        return ConfigUpdateDTO.model_validate(dict(payload))
    except ValidationError as exc:
        raise ConfigError(str(exc)) from exc


def _load_toml(path: Path) -> TomlTable:
    try:
        raw = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        return {}
    except OSError:
        return {}
    try:
        data = tomllib.loads(raw)
    except tomllib.TOMLDecodeError:
        logger.warning("Ignoring unparsable config file: %s", path)
        return {}
    return data if isinstance(data, dict) else {}


def structure_id_defaults(
    root: Path | None = None, config_path: Path | None = None
) -> TomlTable:
    if config_path is None:
        base = root if root is not None else Path.cwd()
        config_path = base / DEFAULT_CONFIG_NAME
    data = _load_toml(config_path)
    section = data.get(CONFIG_SECTION, {})
    return section if isinstance(section, dict) else {}


def _as_bool(value: TomlValue) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, int):
        return value != 0
    if isinstance(value, str):
        return value.strip().lower() in {"1", "true", "yes", "on"}
    return False


def _normalize_section(section: TomlTable) -> dict[str, object]:
    normalized: dict[str, object] = {}
    if "collision_mode" in section:
        normalized["collision_mode"] = _as_bool(section["collision_mode"])
    policy = section.get("opaque_policy")
    if isinstance(policy, str) and policy.strip():
        normalized["opaque_policy"] = policy.strip().lower()
    elif policy is not None:
        raise ConfigError(f"opaque_policy must be a string, got {policy!r}")
    return normalized


def load_config(
    root: Path | None = None, config_path: Path | None = None
) -> StructureIdConfig:
    """Resolve defaults, then the TOML section, then env overrides."""
    config = StructureIdConfig()
    config = config.merged(_normalize_section(structure_id_defaults(root, config_path)))
    config = config.merged(config_env_overrides())
    logger.debug("Loaded structure-id config: %s", config.as_dict())
    return config
