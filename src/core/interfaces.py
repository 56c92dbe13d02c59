"""Core protocol definitions.

Defines the Memoize protocol implemented by memo-bound cache nodes so
callers can depend on the lookup contract rather than a concrete node.
"""

from __future__ import annotations

from typing import Hashable, Protocol, TypeVar, runtime_checkable

K = TypeVar("K", bound=Hashable, contravariant=True)
V = TypeVar("V", covariant=True)


@runtime_checkable
class Memoize(Protocol[K, V]):
    """Contract for anything that turns a key into a (possibly cached) value."""

    def memoize(self, key: K) -> V:
        ...

    def value(self, key: K) -> V:
        ...
