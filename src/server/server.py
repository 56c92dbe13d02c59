"""Server bootstrap for the memo-cache inspection service.

Creates the FastMCP instance and the process-wide cache registry, wires
the inspection tools, and starts the MCP server (stdio transport).
Applications register their nodes on `registry` before calling main().
"""

from mcp.server.fastmcp import FastMCP

from config import LOG_JSON, LOG_LEVEL, SERVER_NAME
from core.logs import configure_logging
from core.registry import CacheRegistry

from tools.cache_tools import register as register_cache_tools

mcp = FastMCP(SERVER_NAME)
registry = CacheRegistry()


def register_tools() -> None:
    register_cache_tools(mcp, registry=registry)


def register_all() -> None:
    register_tools()


register_all()


def main() -> None:
    configure_logging(LOG_LEVEL, json=LOG_JSON)
    mcp.run(transport="stdio")


if __name__ == "__main__":
    main()
