"""Configuration and environment helpers for the project.

Provides small helpers to read typed environment variables and exposes
the defaults used when a cache node is created (TTL, capacity) plus the
logging and server settings.
"""

from __future__ import annotations

import os


def _env_bool(name: str, default: bool) -> bool:
    raw = os.environ.get(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name)
    if raw is None:
        return default
    try:
        return int(raw.strip())
    except ValueError:
        return default


def _env_str(name: str, default: str) -> str:
    raw = os.environ.get(name)
    if raw is None or not raw.strip():
        return default
    return raw.strip()


# Node defaults
DEFAULT_TTL_SECONDS = max(0, _env_int("MEMO_DEFAULT_TTL_SECONDS", 10))
DEFAULT_CAPACITY = max(0, _env_int("MEMO_DEFAULT_CAPACITY", 8))

# Logging
LOG_LEVEL = _env_str("MEMO_LOG_LEVEL", "info")
LOG_JSON = _env_bool("MEMO_LOG_JSON", False)

# MCP inspection server
SERVER_NAME = _env_str("MEMO_SERVER_NAME", "memo-cache")
