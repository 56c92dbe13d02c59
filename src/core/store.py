"""Capacity-bounded, insertion-ordered key/value store.

Eviction is FIFO by insertion: reading a key never moves it, and updating
an existing key keeps its position.
"""

from __future__ import annotations

from collections import OrderedDict
from typing import Generic, Hashable, List, Optional, Tuple, TypeVar

from core.errors import CapacityExceeded, EvictionEmpty
from core.logs import get_logger

K = TypeVar("K", bound=Hashable)
V = TypeVar("V")

log = get_logger(__name__)


class BoundedStore(Generic[K, V]):
    def __init__(self, *, capacity: int) -> None:
        if int(capacity) < 0:
            raise ValueError("capacity must be >= 0")
        self._capacity = int(capacity)
        self._entries: "OrderedDict[K, V]" = OrderedDict()

    @property
    def capacity(self) -> int:
        return self._capacity

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def keys(self) -> List[K]:
        return list(self._entries.keys())

    def get(self, key: K) -> Optional[V]:
        return self._entries.get(key)

    def check_capacity(self) -> None:
        if len(self._entries) >= self._capacity:
            raise CapacityExceeded(f"store holds {len(self._entries)}/{self._capacity} entries")

    def clean_up(self) -> Tuple[K, V]:
        # Oldest insertion goes first
        if not self._entries:
            raise EvictionEmpty("nothing to evict")
        key, value = self._entries.popitem(last=False)
        log.debug("cache.evicted", key=repr(key))
        return key, value

    def make_room(self) -> bool:
        """Evict one entry if the store is full.

        Returns True when an entry was evicted. A zero-capacity store has
        nothing to evict, so it is cleared instead.
        """
        try:
            self.check_capacity()
        except CapacityExceeded:
            try:
                self.clean_up()
                return True
            except EvictionEmpty:
                self.clear()
        return False

    def insert(self, key: K, value: V) -> bool:
        # Updates keep their slot and never evict
        if key in self._entries:
            self._entries[key] = value
            return False
        evicted = self.make_room()
        if self._capacity == 0:
            # Zero capacity retains nothing
            return evicted
        self._entries[key] = value
        return evicted

    def remove(self, key: K) -> Optional[V]:
        return self._entries.pop(key, None)

    def clear(self) -> int:
        n = len(self._entries)
        self._entries.clear()
        return n

    def copy(self) -> "BoundedStore[K, V]":
        other: BoundedStore[K, V] = BoundedStore(capacity=self._capacity)
        other._entries = OrderedDict(self._entries)
        return other

    def with_capacity(self, capacity: int) -> "BoundedStore[K, V]":
        other: BoundedStore[K, V] = BoundedStore(capacity=capacity)
        for key, value in self._entries.items():
            other.insert(key, value)
        return other
