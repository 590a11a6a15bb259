from __future__ import annotations

from typing import Generic, TypeVar
import weakref

V = TypeVar("V")


class IdentityCache(Generic[V]):
    """Memo table keyed by object identity that never owns its keys.

    Each entry pairs a `weakref.ref` to the input with the cached item; the
    entry is dropped when the input is collected. Inputs that do not support
    weak references (plain dicts, lists, tuples, scalars) are never stored,
    so `put` reports whether the item was cached.

    `WeakKeyDictionary` is not usable here: it keys by `__eq__`/`__hash__`,
    and two equal but distinct inputs must not share an entry.
    """

    def __init__(self) -> None:
        self._entries: dict[int, tuple[weakref.ref[object], V]] = {}

    def get(self, value: object) -> V | None:
        entry = self._entries.get(id(value))
        if entry is None:
            return None
        ref, item = entry
        if ref() is not value:
            return None
        return item

    def put(self, value: object, item: V) -> bool:
        key = id(value)
        try:
            ref = weakref.ref(value, self._evictor(key))
        except TypeError:
            return False
        self._entries[key] = (ref, item)
        return True

    def discard(self, value: object) -> None:
        entry = self._entries.get(id(value))
        if entry is not None and entry[0]() is value:
            del self._entries[id(value)]

    def clear(self) -> None:
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)

    def _evictor(self, key: int):
        cache_ref = weakref.ref(self)

        def _evict(dead: weakref.ref[object]) -> None:
            cache = cache_ref()
            if cache is None:
                return
            entry = cache._entries.get(key)
            if entry is not None and entry[0] is dead:
                cache._entries.pop(key, None)

        return _evict
