"""Registry of independently-typed cache nodes keyed by explicit handles.

Nodes are never compared with each other: the handle given (or generated)
at registration time is the only identity the registry knows about.
"""

from __future__ import annotations

import uuid
from typing import Any, Dict, List, Optional

from core.errors import DuplicateHandleError, UnknownHandleError, ValidationError
from core.logs import get_logger
from core.models import NodeInfo
from core.node import CacheNode

log = get_logger(__name__)


class CacheRegistry:
    def __init__(self) -> None:
        self._nodes: Dict[str, CacheNode[Any, Any]] = {}

    def __len__(self) -> int:
        return len(self._nodes)

    def __contains__(self, handle: object) -> bool:
        return handle in self._nodes

    def handles(self) -> List[str]:
        return list(self._nodes.keys())

    def register(self, node: CacheNode[Any, Any], name: Optional[str] = None) -> str:
        if not isinstance(node, CacheNode):
            raise ValidationError(f"Expected a CacheNode, got {type(node).__name__}")

        if name is None:
            handle = uuid.uuid4().hex
        else:
            handle = name.strip()
            if not handle:
                raise ValidationError("Handle must not be blank")
            if handle in self._nodes:
                raise DuplicateHandleError(f"Handle already registered: {handle}")

        self._nodes[handle] = node
        log.info("registry.registered", handle=handle, node=repr(node))
        return handle

    def replace(self, handle: str, node: CacheNode[Any, Any]) -> None:
        """Swap the node behind an existing handle (e.g. after with_calc())."""
        self._require(handle)
        self._nodes[handle] = node

    def get(self, handle: str) -> CacheNode[Any, Any]:
        return self._require(handle)

    def remove(self, handle: str) -> CacheNode[Any, Any]:
        node = self._require(handle)
        del self._nodes[handle]
        log.info("registry.removed", handle=handle)
        return node

    def clear_all(self) -> int:
        total = 0
        for node in self._nodes.values():
            total += node.clear()
        return total

    def info(self, handle: str) -> NodeInfo:
        node = self._require(handle)
        return NodeInfo(
            handle=handle,
            memo_bound=node.memo_bound,
            size=len(node),
            capacity=node.max_entries,
            action=node.action.value,
            setting=node.setting.value,
            duration=node.duration,
            expiration=node.expiration,
            stats=node.stats(),
        )

    def _require(self, handle: str) -> CacheNode[Any, Any]:
        try:
            return self._nodes[handle]
        except KeyError:
            raise UnknownHandleError(f"No cache registered under handle: {handle}") from None
