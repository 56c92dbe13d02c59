"""MCP tools that inspect the caches held by a registry.

Registers 'list_caches', 'cache_stats', 'cache_keys' and 'clear_cache'.
Every tool takes a registry handle; nodes are never looked up any other
way.
"""

from __future__ import annotations

from typing import Any, Dict, List

from mcp.server.fastmcp import FastMCP

from core.errors import ValidationError
from core.registry import CacheRegistry


def _normalize_handle(handle: str) -> str:
    handle = (handle or "").strip()
    if not handle:
        raise ValidationError("Missing cache handle")
    return handle


def register(mcp: FastMCP, *, registry: CacheRegistry) -> None:
    @mcp.tool(name="list_caches")
    async def list_caches() -> List[str]:
        """Return the handles of all registered caches, sorted."""
        return sorted(registry.handles())

    @mcp.tool(name="cache_stats")
    async def cache_stats(handle: str) -> Dict[str, Any]:
        """Describe one cache: size, capacity, TTL settings and counters.

        Params:
          - handle: registry handle of the cache.

        Raises:
          ValidationError for a blank handle; UnknownHandleError if nothing
          is registered under it.
        """
        return registry.info(_normalize_handle(handle)).as_dict()

    @mcp.tool(name="cache_keys")
    async def cache_keys(handle: str) -> List[str]:
        """Return repr() of each stored key, oldest first (eviction order)."""
        node = registry.get(_normalize_handle(handle))
        return [repr(k) for k in node.keys()]

    @mcp.tool(name="clear_cache")
    async def clear_cache(handle: str) -> int:
        """Drop every entry of one cache and return how many were removed."""
        node = registry.get(_normalize_handle(handle))
        return node.clear()
