"""Exception types raised by structure-id."""

from __future__ import annotations

from typing import Mapping


class StructureIdError(Exception):
    """Base class for every error raised by the package."""


class StateImportError(StructureIdError, ValueError):
    """An exported state payload could not be imported.

    Raised before any state is touched: a failed import leaves the target
    context exactly as it was.
    """


class ConfigError(StructureIdError, ValueError):
    """A configuration mapping, TOML section or env override is malformed."""


class NeverRaise(RuntimeError):
    """Sentinel exception that should be statically unreachable.

    Raising this exception signals that a code path expected to be impossible
    was reached; `env` carries the diagnostic payload given to `never()`.
    """

    def __init__(self, message: str, *, env: Mapping[str, object] | None = None):
        super().__init__(message)
        self.reason = message
        self.env = dict(env or {})

    @property
    def marker_payload_dict(self) -> dict[str, object]:
        return {
            "marker_kind": "never",
            "reason": self.reason,
            "env": {key: repr(value) for key, value in self.env.items()},
        }


class NeverThrown(NeverRaise):
    """Alias for NeverRaise used by the explicit never() marker."""
