"""Cache nodes: a bounded store plus a TTL policy, with staged construction.

A CacheNode starts unconfigured. Its builder methods (expires, revalidate,
capacity, ttl_setting, configure) each return a new node, leaving the
receiver untouched. Binding a computation with with_calc() returns a
MemoNode, which adds memoize() and value() and refuses any further
configuration.

    node = CacheNode().expires(10).capacity(2).with_calc(lambda x: x * x)
    node.value(3)  # computes 9
    node.value(3)  # served from the store

Calling value() or memoize() on a node without a computation raises
ConfigurationError.
"""

from __future__ import annotations

from typing import Callable, Generic, Hashable, List, Optional, Tuple, TypeVar

from config import DEFAULT_CAPACITY
from core.errors import ConfigurationError, Expired
from core.logs import get_logger
from core.models import CacheStats
from core.policy import Clock, RevalidationAction, StaleOutcome, TtlPolicy, TtlSetting, default_clock
from core.store import BoundedStore

K = TypeVar("K", bound=Hashable)
V = TypeVar("V")

log = get_logger(__name__)


class CacheNode(Generic[K, V]):
    def __init__(self, *, capacity: int = DEFAULT_CAPACITY, clock: Optional[Clock] = None) -> None:
        self._store: BoundedStore[K, V] = BoundedStore(capacity=capacity)
        self._policy = TtlPolicy(clock=clock or default_clock)
        self._stats = CacheStats()

    @classmethod
    def _from_parts(
        cls,
        store: BoundedStore[K, V],
        policy: TtlPolicy,
        stats: CacheStats,
    ) -> "CacheNode[K, V]":
        node = cls.__new__(cls)
        node._store = store
        node._policy = policy
        node._stats = stats
        return node

    def _derive(
        self,
        *,
        store: Optional[BoundedStore[K, V]] = None,
        policy: Optional[TtlPolicy] = None,
    ) -> "CacheNode[K, V]":
        self._ensure_configurable()
        return CacheNode._from_parts(
            store if store is not None else self._store.copy(),
            policy if policy is not None else self._policy.copy(),
            self._stats.snapshot(),
        )

    def _ensure_configurable(self) -> None:
        return None

    # ---- configuration -------------------------------------------------

    def expires(self, seconds: int) -> "CacheNode[K, V]":
        return self._derive(policy=self._policy.expires(seconds))

    def revalidate(self, status: bool) -> "CacheNode[K, V]":
        return self._derive(policy=self._policy.revalidate(status))

    def capacity(self, capacity: int) -> "CacheNode[K, V]":
        return self._derive(store=self._store.with_capacity(capacity))

    def ttl_setting(self, setting: TtlSetting) -> "CacheNode[K, V]":
        return self._derive(policy=self._policy.with_setting(setting))

    def configure(
        self,
        *,
        expires: Optional[int] = None,
        revalidate: Optional[bool] = None,
        capacity: Optional[int] = None,
    ) -> "CacheNode[K, V]":
        node: CacheNode[K, V] = self._derive()
        if expires is not None:
            node = node.expires(expires)
        if revalidate is not None:
            node = node.revalidate(revalidate)
        if capacity is not None:
            node = node.capacity(capacity)
        return node

    def with_calc(self, calculation: Callable[[K], V]) -> "MemoNode[K, V]":
        self._ensure_configurable()
        return MemoNode(
            calculation,
            store=self._store.copy(),
            policy=self._policy.copy(),
            stats=self._stats.snapshot(),
        )

    # ---- inspection ----------------------------------------------------

    @property
    def max_entries(self) -> int:
        return self._store.capacity

    @property
    def expiration(self) -> Optional[float]:
        return self._policy.expiration

    @property
    def action(self) -> RevalidationAction:
        return self._policy.action

    @property
    def setting(self) -> TtlSetting:
        return self._policy.setting

    @property
    def duration(self) -> int:
        return self._policy.duration

    @property
    def memo_bound(self) -> bool:
        return False

    def __len__(self) -> int:
        return len(self._store)

    def __contains__(self, key: object) -> bool:
        return key in self._store

    def keys(self) -> List[K]:
        return self._store.keys()

    def stats(self) -> CacheStats:
        return self._stats.snapshot()

    # ---- reads and writes ----------------------------------------------

    def _read(self, key: K) -> Tuple[bool, Optional[V]]:
        if key not in self._store:
            self._stats.misses += 1
            return False, None

        value = self._store.get(key)
        try:
            self._policy.validate_expiration()
        except Expired:
            outcome = self._policy.on_stale()
            if outcome is StaleOutcome.SERVE_STALE:
                self._stats.stale_hits += 1
                log.debug("cache.revalidated", key=repr(key), expiration=self._policy.expiration)
                return True, value
            cleared = self.clear()
            self._stats.misses += 1
            log.debug("cache.expired", key=repr(key), cleared=cleared, expiration=self._policy.expiration)
            return False, None

        self._stats.hits += 1
        return True, value

    def get(self, key: K) -> Optional[V]:
        """Look up key without ever computing.

        A stale entry is handled by the revalidation policy: REVALIDATE
        hands back the stored value, EXPIRE empties the node and returns
        None.
        """
        _, value = self._read(key)
        return value

    def insert(self, key: K, value: V) -> None:
        if self._store.insert(key, value):
            self._stats.evictions += 1

    def remove(self, key: K) -> Optional[V]:
        return self._store.remove(key)

    def clear(self) -> int:
        n = self._store.clear()
        self._stats.clears += 1
        return n

    def memoize(self, key: K) -> V:
        raise ConfigurationError("memoize() requires a computation; call with_calc() first")

    def value(self, key: K) -> V:
        raise ConfigurationError("value() requires a computation; call with_calc() first")

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(size={len(self._store)}, capacity={self._store.capacity}, "
            f"action={self._policy.action.value}, duration={self._policy.duration})"
        )


class MemoNode(CacheNode[K, V]):
    """A cache node with a bound computation."""

    def __init__(
        self,
        calculation: Callable[[K], V],
        *,
        store: BoundedStore[K, V],
        policy: TtlPolicy,
        stats: CacheStats,
    ) -> None:
        if not callable(calculation):
            raise ConfigurationError("calculation must be callable")
        self._calculation = calculation
        self._store = store
        self._policy = policy
        self._stats = stats

    def _ensure_configurable(self) -> None:
        raise ConfigurationError("node already has a computation; configure before with_calc()")

    @property
    def memo_bound(self) -> bool:
        return True

    def memoize(self, key: K) -> V:
        """Always compute, store (subject to eviction) and return."""
        value = self._calculation(key)
        self._stats.computations += 1
        self.insert(key, value)
        return value

    def value(self, key: K) -> V:
        found, value = self._read(key)
        if found:
            return value  # type: ignore[return-value]

        if self._store.make_room():
            self._stats.evictions += 1
        return self.memoize(key)
