from __future__ import annotations

from collections.abc import Mapping, Sequence, Set
from datetime import date, time, timedelta
from enum import Enum
from pathlib import PurePath
from uuid import UUID
import numbers


class TypeTag(str, Enum):
    NUMBER = "number"
    TEXT = "text"
    BOOLEAN = "boolean"
    BIG_INTEGER = "big_integer"
    NULL = "null"
    ABSENT = "absent"
    SYMBOLIC_ATOM = "symbolic_atom"
    OBJECT = "object"
    ARRAY = "array"


class OpaquePolicy(str, Enum):
    """How opaque library values (dates, UUIDs, paths) are fingerprinted.

    FIELDS enters them like any other object, through their own fields; most
    of them have none, so every date shares one shape. ATOMIC keeps them as
    leaves distinguished by their class.
    """

    FIELDS = "fields"
    ATOMIC = "atomic"


class _MissingType:
    __slots__ = ()

    def __repr__(self) -> str:
        return "MISSING"

    def __reduce__(self) -> str:
        return "MISSING"


MISSING = _MissingType()

# Reserved low bit space; application keys start above it.
TYPE_BITS: dict[TypeTag, int] = {
    TypeTag.NUMBER: 1,
    TypeTag.TEXT: 2,
    TypeTag.BOOLEAN: 4,
    TypeTag.BIG_INTEGER: 8,
    TypeTag.NULL: 16,
    TypeTag.ABSENT: 32,
    TypeTag.SYMBOLIC_ATOM: 64,
    TypeTag.OBJECT: 128,
    TypeTag.ARRAY: 256,
}
FIRST_APPLICATION_BIT = 512

CONTAINER_TAGS = frozenset({TypeTag.OBJECT, TypeTag.ARRAY})

_TEXT_TYPES = (str, bytes, bytearray, memoryview)
OPAQUE_TYPES: tuple[type, ...] = (date, time, timedelta, UUID, PurePath)


def classify(value: object) -> TypeTag:
    if value is MISSING:
        return TypeTag.ABSENT
    if value is None:
        return TypeTag.NULL
    if isinstance(value, bool):
        return TypeTag.BOOLEAN
    if isinstance(value, Enum) or value is Ellipsis or value is NotImplemented:
        return TypeTag.SYMBOLIC_ATOM
    if isinstance(value, numbers.Integral):
        return TypeTag.BIG_INTEGER
    if isinstance(value, numbers.Number):
        return TypeTag.NUMBER
    if isinstance(value, _TEXT_TYPES):
        return TypeTag.TEXT
    if isinstance(value, Mapping):
        return TypeTag.OBJECT
    if isinstance(value, (Sequence, Set)):
        return TypeTag.ARRAY
    return TypeTag.OBJECT


def is_opaque(value: object, policy: OpaquePolicy) -> bool:
    return policy is OpaquePolicy.ATOMIC and isinstance(value, OPAQUE_TYPES)


def opaque_key(value: object) -> str:
    cls = type(value)
    return f"opaque:{cls.__module__}.{cls.__qualname__}"


def own_fields(value: object) -> list[tuple[str, object]]:
    """Return the (name, value) pairs an OBJECT is fingerprinted by.

    Mappings contribute their items with keys rendered through `str`; other
    objects contribute their instance `__dict__`, or failing that whichever
    `__slots__` attributes are currently set. Order is unspecified.
    """
    if isinstance(value, Mapping):
        return [(str(key), item) for key, item in value.items()]
    instance_dict = getattr(value, "__dict__", None)
    if isinstance(instance_dict, Mapping):
        return [(str(key), item) for key, item in instance_dict.items()]
    fields: list[tuple[str, object]] = []
    seen: set[str] = set()
    for cls in type(value).__mro__:
        slots = cls.__dict__.get("__slots__", ())
        if isinstance(slots, str):
            slots = (slots,)
        for name in slots:
            if name in seen or name in {"__dict__", "__weakref__"}:
                continue
            seen.add(name)
            attribute = name
            if name.startswith("__") and not name.endswith("__"):
                attribute = f"_{cls.__name__.lstrip('_')}{name}"
            try:
                fields.append((name, getattr(value, attribute)))
            except AttributeError:
                continue
    return fields


def elements(value: object) -> list[object]:
    return list(value)  # type: ignore[call-overload]
