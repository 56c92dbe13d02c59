"""Dataclasses describing cache node state for callers and tools.

CacheStats counts what a node did; NodeInfo is the read-only view the
inspection tools hand back.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, replace
from typing import Any, Dict, Optional


@dataclass
class CacheStats:
    """Running counters for a single node.

    Field groups:
    - Reads: hits, misses, stale_hits
    - Writes: computations, evictions, clears
    """

    hits: int = 0
    misses: int = 0
    stale_hits: int = 0

    computations: int = 0
    evictions: int = 0
    clears: int = 0

    def snapshot(self) -> "CacheStats":
        return replace(self)

    def as_dict(self) -> Dict[str, int]:
        return asdict(self)


@dataclass(frozen=True)
class NodeInfo:
    handle: str
    memo_bound: bool
    size: int
    capacity: int
    action: str
    setting: str
    duration: int
    expiration: Optional[float]
    stats: CacheStats

    def as_dict(self) -> Dict[str, Any]:
        return asdict(self)
