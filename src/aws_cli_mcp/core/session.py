"""Per-session state: the default AWS region.

A :class:`Session` is created once per logical session (one per MCP
server run) and injected into the operation service.  Reads and writes
are serialized by a lock so several concurrent callers sharing one
session always observe a consistent value.  There is no snapshot
isolation: a request reads whatever value is current when its command
is built.
"""

from __future__ import annotations

import logging
import threading

from aws_cli_mcp.core.models import Success

logger = logging.getLogger(__name__)


class Session:
    """Mutable holder for the session-wide default region."""

    def __init__(self, default_region: str | None = None) -> None:
        self._lock = threading.Lock()
        self._default_region: str | None = _clean(default_region)

    @property
    def default_region(self) -> str | None:
        with self._lock:
            return self._default_region

    def set_default_region(self, value: str | None) -> Success:
        """Store *value* as the default region, or clear it when blank."""
        region = _clean(value)
        with self._lock:
            self._default_region = region

        if region is None:
            logger.info("Default region cleared")
            return Success("Default region cleared for this session.")

        logger.info("Default region set to %s", region)
        return Success(f"Default region set to '{region}' for this session.")

    def effective_region(self, region: str | None) -> str | None:
        """Resolve the region for one call: per-request beats default."""
        return _clean(region) or self.default_region


def _clean(value: str | None) -> str | None:
    if value is None:
        return None
    stripped = value.strip()
    return stripped or None
