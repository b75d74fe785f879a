"""OrderedMapping: an insertion-ordered key/value map.

Insertion order is tracked explicitly with a key list and a key-to-slot
index instead of relying on ``dict`` ordering, so the ordering contract
is part of this type and not an interpreter detail:

- setting a new key appends it
- setting an existing key updates its value in place without moving it
- deleting a key closes the gap

Equality is order-insensitive (:meth:`OrderedMapping.equals_unordered`);
order only affects iteration and display.

Example::

    m = OrderedMapping([("b", 1), ("a", 2)])
    m["b"] = 3
    list(m.keys())   # ["b", "a"]
    m == OrderedMapping([("a", 2), ("b", 3)])   # True
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping, MutableMapping
from typing import Any, Generic, TypeVar

__all__ = ["OrderedMapping"]

K = TypeVar("K")
V = TypeVar("V")


class OrderedMapping(MutableMapping[K, V], Generic[K, V]):
    """Mutable mapping that preserves insertion order of its keys."""

    __slots__ = ("_index", "_keys", "_values")

    def __init__(self, items: Iterable[tuple[K, V]] | Mapping[K, V] | None = None) -> None:
        self._keys: list[K] = []
        self._values: list[V] = []
        self._index: dict[K, int] = {}
        if items is None:
            return
        pairs = items.items() if isinstance(items, Mapping) else items
        for key, value in pairs:
            self[key] = value

    # ------------------------------------------------------------------
    # MutableMapping surface
    # ------------------------------------------------------------------

    def __getitem__(self, key: K) -> V:
        return self._values[self._index[key]]

    def __setitem__(self, key: K, value: V) -> None:
        slot = self._index.get(key)
        if slot is None:
            self._index[key] = len(self._keys)
            self._keys.append(key)
            self._values.append(value)
        else:
            self._values[slot] = value

    def __delitem__(self, key: K) -> None:
        slot = self._index.pop(key)
        del self._keys[slot]
        del self._values[slot]
        for moved in range(slot, len(self._keys)):
            self._index[self._keys[moved]] = moved

    def __iter__(self) -> Iterator[K]:
        return iter(self._keys)

    def __len__(self) -> int:
        return len(self._keys)

    def __contains__(self, key: object) -> bool:
        return key in self._index

    # ------------------------------------------------------------------
    # Named operations
    # ------------------------------------------------------------------

    def set(self, key: K, value: V) -> None:
        """Insert or update ``key``; an existing key keeps its position."""
        self[key] = value

    def delete(self, key: K) -> None:
        """Remove ``key``.  Raises ``KeyError`` when absent."""
        del self[key]

    def copy(self) -> OrderedMapping[K, V]:
        """Return a shallow copy with the same key order."""
        return OrderedMapping(zip(self._keys, self._values, strict=True))

    def equals_unordered(self, other: Mapping[Any, Any]) -> bool:
        """Return True when both maps hold the same key/value pairs in any order."""
        if len(self) != len(other):
            return False
        for key, value in zip(self._keys, self._values, strict=True):
            if key not in other or other[key] != value:
                return False
        return True

    # ------------------------------------------------------------------
    # Dunder helpers
    # ------------------------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Mapping):
            return NotImplemented
        return self.equals_unordered(other)

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        body = ", ".join(
            f"{key!r}: {value!r}" for key, value in zip(self._keys, self._values, strict=True)
        )
        return f"OrderedMapping({{{body}}})"
