"""Runtime settings for aws-cli-mcp.

Settings come from the environment and may be overridden by CLI flags.

Environment variables
---------------------
``AWS_CLI_MCP_BACKEND``
    ``cli`` (default) runs the AWS CLI; ``api`` calls boto3 directly.
``AWS_CLI_MCP_TOOL``
    AWS CLI executable name or path.  Defaults to ``aws``.
``AWS_CLI_MCP_LOG_LEVEL``
    Standard logging level name.  Defaults to ``WARNING``.
``AWS_CLI_MCP_DEFAULT_REGION``
    Optional initial session default region.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass, replace

from aws_cli_mcp.core.command_builder import DEFAULT_TOOL
from aws_cli_mcp.core.models import BackendKind
from aws_cli_mcp.exceptions import ConfigurationError

ENV_BACKEND: str = "AWS_CLI_MCP_BACKEND"
ENV_TOOL: str = "AWS_CLI_MCP_TOOL"
ENV_LOG_LEVEL: str = "AWS_CLI_MCP_LOG_LEVEL"
ENV_DEFAULT_REGION: str = "AWS_CLI_MCP_DEFAULT_REGION"

_LOG_LEVELS: tuple[str, ...] = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass(frozen=True, slots=True)
class Settings:
    """Validated runtime configuration."""

    backend: BackendKind = BackendKind.CLI
    cli_tool: str = DEFAULT_TOOL
    log_level: str = "WARNING"
    default_region: str | None = None

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> Settings:
        env = os.environ if environ is None else environ
        return cls().with_overrides(
            backend=env.get(ENV_BACKEND),
            cli_tool=env.get(ENV_TOOL),
            log_level=env.get(ENV_LOG_LEVEL),
            default_region=env.get(ENV_DEFAULT_REGION),
        )

    def with_overrides(
        self,
        *,
        backend: str | None = None,
        cli_tool: str | None = None,
        log_level: str | None = None,
        default_region: str | None = None,
    ) -> Settings:
        """Return a copy with every non-empty override applied."""
        changes: dict[str, object] = {}
        if backend:
            changes["backend"] = parse_backend(backend)
        if cli_tool and cli_tool.strip():
            changes["cli_tool"] = cli_tool.strip()
        if log_level:
            changes["log_level"] = parse_log_level(log_level)
        if default_region and default_region.strip():
            changes["default_region"] = default_region.strip()
        return replace(self, **changes)

    @property
    def log_level_number(self) -> int:
        return logging.getLevelName(self.log_level)


def parse_backend(value: str) -> BackendKind:
    try:
        return BackendKind(value.strip().lower())
    except ValueError as exc:
        choices = ", ".join(kind.value for kind in BackendKind)
        raise ConfigurationError(
            f"Unknown backend: {value!r}",
            hint=f"Choose one of: {choices} (set {ENV_BACKEND} or pass --backend).",
        ) from exc


def parse_log_level(value: str) -> str:
    level = value.strip().upper()
    if level not in _LOG_LEVELS:
        raise ConfigurationError(
            f"Unknown log level: {value!r}",
            hint=f"Choose one of: {', '.join(_LOG_LEVELS)}.",
        )
    return level
