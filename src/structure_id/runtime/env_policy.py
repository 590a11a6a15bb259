from __future__ import annotations

import os
from typing import Sequence

from structure_id.exceptions import ConfigError

_TRUTHY_VALUES = {"1", "true", "yes", "on"}
_FALSEY_VALUES = {"0", "false", "no", "off"}

COLLISION_MODE_ENV = "STRUCTURE_ID_COLLISION_MODE"
OPAQUE_POLICY_ENV = "STRUCTURE_ID_OPAQUE_POLICY"

CONFIG_ENV_KEYS: tuple[str, ...] = (
    COLLISION_MODE_ENV,
    OPAQUE_POLICY_ENV,
)


def env_text(name: str, *, default: str = "") -> str:
    return os.getenv(name, default).strip()


def env_flag(name: str) -> bool | None:
    """Parse a boolean env override; unset or empty means no override."""
    raw = env_text(name).lower()
    if not raw:
        return None
    if raw in _TRUTHY_VALUES:
        return True
    if raw in _FALSEY_VALUES:
        return False
    raise ConfigError(f"{name} must be one of {sorted(_TRUTHY_VALUES | _FALSEY_VALUES)}, got {raw!r}")


def env_choice(name: str, choices: Sequence[str]) -> str | None:
    raw = env_text(name).lower()
    if not raw:
        return None
    if raw not in choices:
        raise ConfigError(f"{name} must be one of {list(choices)}, got {raw!r}")
    return raw


def config_env_overrides() -> dict[str, object]:
    overrides: dict[str, object] = {}
    collision_mode = env_flag(COLLISION_MODE_ENV)
    if collision_mode is not None:
        overrides["collision_mode"] = collision_mode
    opaque_policy = env_choice(OPAQUE_POLICY_ENV, ("fields", "atomic"))
    if opaque_policy is not None:
        overrides["opaque_policy"] = opaque_policy
    return overrides
