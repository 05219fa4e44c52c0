"""CLI console helpers with optional Rich support.

Optional UI dependencies are never imported at module level, so
``--help`` and ``--version`` keep working without Rich.  Everything is
written to stderr: stdout belongs to the MCP protocol stream.
"""

from __future__ import annotations

import sys
from typing import Any

from aws_cli_mcp.exceptions import EnvironmentError, missing_dependency


def _load_rich_console_class() -> type[Any]:
    """Return ``rich.console.Console`` or raise ``EnvironmentError``."""
    try:
        from rich.console import Console
    except ModuleNotFoundError as exc:
        raise missing_dependency("rich") from exc
    return Console


def get_rich_console() -> Any:
    """Create a Rich console instance targeting stderr."""
    console_class = _load_rich_console_class()
    return console_class(stderr=True)


def rich_available() -> bool:
    try:
        _load_rich_console_class()
    except EnvironmentError:
        return False
    return True


class _ConsoleProxy:
    """Minimal ``print``-compatible proxy with a plain-stderr fallback."""

    def print(self, *objects: object) -> None:
        try:
            rich_console = get_rich_console()
        except EnvironmentError:
            print(*objects, file=sys.stderr)
            return
        rich_console.print(*objects)


console = _ConsoleProxy()
