import sys
import types
import uuid
import importlib.util
from pathlib import Path


def _find_server_py() -> Path:
    root = Path(__file__).resolve().parents[2]
    candidates = [
        root / "server.py",
        root / "server" / "server.py",
        root / "src" / "server" / "server.py",
    ]
    for p in candidates:
        if p.exists():
            return p
    raise FileNotFoundError(f"Could not find server.py. Tried: {candidates}")


def _install_fake_modules(monkeypatch, captures: dict):
    # ---- Fake mcp.server.fastmcp.FastMCP ----
    mcp_mod = types.ModuleType("mcp")
    mcp_server_mod = types.ModuleType("mcp.server")
    fastmcp_mod = types.ModuleType("mcp.server.fastmcp")

    class DummyFastMCP:
        def __init__(self, name: str):
            captures["fastmcp_name"] = name
            captures["mcp_instance"] = self
            self.run_calls = []

        def run(self, *, transport: str):
            self.run_calls.append({"transport": transport})
            captures["run_calls"] = list(self.run_calls)

    fastmcp_mod.FastMCP = DummyFastMCP

    mcp_mod.__path__ = []
    mcp_server_mod.__path__ = []

    monkeypatch.setitem(sys.modules, "mcp", mcp_mod)
    monkeypatch.setitem(sys.modules, "mcp.server", mcp_server_mod)
    monkeypatch.setitem(sys.modules, "mcp.server.fastmcp", fastmcp_mod)

    # ---- Fake tools ----
    tools_pkg = types.ModuleType("tools")
    tools_pkg.__path__ = []
    monkeypatch.setitem(sys.modules, "tools", tools_pkg)

    cache_tools_mod = types.ModuleType("tools.cache_tools")

    def register_cache_tools(mcp, *, registry):
        captures["register_cache_tools_calls"] = captures.get("register_cache_tools_calls", []) + [
            {"mcp": mcp, "registry": registry}
        ]

    cache_tools_mod.register = register_cache_tools
    monkeypatch.setitem(sys.modules, "tools.cache_tools", cache_tools_mod)


def _load_server_module(monkeypatch, captures: dict):
    _install_fake_modules(monkeypatch, captures)

    server_path = _find_server_py()
    mod_name = f"server_under_test_{uuid.uuid4().hex}"
    spec = importlib.util.spec_from_file_location(mod_name, server_path)
    assert spec and spec.loader

    module = importlib.util.module_from_spec(spec)
    sys.modules[mod_name] = module
    spec.loader.exec_module(module)
    return module


def test_server_register_all_and_di(monkeypatch):
    captures = {}
    module = _load_server_module(monkeypatch, captures)

    assert captures["fastmcp_name"] == module.SERVER_NAME
    mcp = captures["mcp_instance"]

    # Tools receive the same registry the module exposes
    calls = captures.get("register_cache_tools_calls", [])
    assert len(calls) == 1
    assert calls[0]["mcp"] is mcp
    assert calls[0]["registry"] is module.registry

    def fake_configure_logging(level, *, json=False):
        captures["configure_logging_calls"] = captures.get("configure_logging_calls", []) + [
            {"level": level, "json": json}
        ]

    monkeypatch.setattr(module, "configure_logging", fake_configure_logging)

    # main() configures logging, then runs stdio transport
    module.main()
    assert len(captures["configure_logging_calls"]) == 1
    assert captures["run_calls"] == [{"transport": "stdio"}]
