from __future__ import annotations

"""JSON-like value types used at the export / import boundary.

Exported state is meant to be JSON; these aliases keep that value space
explicit instead of falling back to `object`/`Any`.
"""

from typing import TypeAlias


JSONScalar: TypeAlias = str | int | float | bool | None
JSONValue: TypeAlias = JSONScalar | list["JSONValue"] | dict[str, "JSONValue"]
JSONObject: TypeAlias = dict[str, JSONValue]
JSONArray: TypeAlias = list[JSONValue]
