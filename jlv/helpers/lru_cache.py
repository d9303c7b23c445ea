"""Fixed capacity least-recently-used cache"""

import collections
from typing import Generic, Hashable, Iterator, TypeVar

K = TypeVar("K", bound=Hashable)
V = TypeVar("V")


class LRUCache(Generic[K, V]):
    """Mapping that holds at most `capacity` entries, evicting the least
    recently touched one first.

    Both `get` hits and `put` count as a touch.
    """

    def __init__(self, capacity: int) -> None:
        if capacity < 1:
            raise ValueError(f"cache capacity must be positive, got {capacity}")
        self._capacity = capacity
        self._entries: collections.OrderedDict[K, V] = collections.OrderedDict()

    @property
    def capacity(self) -> int:
        """Maximum number of entries held at once"""
        return self._capacity

    def get(self, key: K, default: V | None = None) -> V | None:
        """Get the value of the key and mark it as most recently used"""
        try:
            value = self._entries[key]
        except KeyError:
            return default
        self._entries.move_to_end(key)
        return value

    def put(self, key: K, value: V) -> None:
        """Insert or replace a value, evicting the oldest entry when full"""
        if key in self._entries:
            self._entries.move_to_end(key)
        elif len(self._entries) >= self._capacity:
            self._entries.popitem(last=False)
        self._entries[key] = value

    def clear(self) -> None:
        """Drop every entry"""
        self._entries.clear()

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[K]:
        return iter(self._entries)
