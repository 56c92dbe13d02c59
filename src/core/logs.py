"""Structured logging setup.

Loggers are structlog wrappers around stdlib loggers, so a library user
who never calls configure_logging() only sees what their own stdlib
logging config lets through. configure_logging() picks the renderer and
attaches a stderr handler; stdout carries the MCP stdio transport when
the inspection server runs.
"""

from __future__ import annotations

import logging
import sys
from typing import Any, Dict

import structlog

_renderer: Any = structlog.processors.KeyValueRenderer(key_order=["event"])


def _render(logger: Any, method_name: str, event_dict: Dict[str, Any]) -> Any:
    return _renderer(logger, method_name, event_dict)


_PROCESSORS = [
    structlog.stdlib.filter_by_level,
    structlog.stdlib.add_logger_name,
    structlog.stdlib.add_log_level,
    structlog.processors.TimeStamper(fmt="iso"),
    structlog.processors.StackInfoRenderer(),
    structlog.processors.format_exc_info,
    _render,
]


def configure_logging(level: str = "info", *, json: bool = False) -> None:
    global _renderer
    if json:
        _renderer = structlog.processors.JSONRenderer()
    else:
        _renderer = structlog.dev.ConsoleRenderer(colors=False)

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stderr,
        level=getattr(logging, level.upper(), logging.INFO),
    )


def get_logger(name: str) -> Any:
    return structlog.wrap_logger(
        logging.getLogger(name),
        processors=_PROCESSORS,
        wrapper_class=structlog.stdlib.BoundLogger,
    )
