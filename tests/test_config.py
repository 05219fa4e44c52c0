"""Tests for runtime settings (config.py)."""

from __future__ import annotations

import logging

import pytest

from aws_cli_mcp.config import (
    ENV_BACKEND,
    ENV_DEFAULT_REGION,
    ENV_LOG_LEVEL,
    ENV_TOOL,
    Settings,
)
from aws_cli_mcp.core.models import BackendKind
from aws_cli_mcp.exceptions import ConfigurationError


class TestFromEnv:
    def test_defaults(self) -> None:
        settings = Settings.from_env({})
        assert settings == Settings(
            backend=BackendKind.CLI, cli_tool="aws", log_level="WARNING", default_region=None,
        )

    def test_values_read(self) -> None:
        settings = Settings.from_env(
            {
                ENV_BACKEND: "API",
                ENV_TOOL: "/usr/local/bin/aws",
                ENV_LOG_LEVEL: "debug",
                ENV_DEFAULT_REGION: " us-west-2 ",
            },
        )
        assert settings.backend is BackendKind.API
        assert settings.cli_tool == "/usr/local/bin/aws"
        assert settings.log_level == "DEBUG"
        assert settings.log_level_number == logging.DEBUG
        assert settings.default_region == "us-west-2"

    def test_unknown_backend(self) -> None:
        with pytest.raises(ConfigurationError, match="Unknown backend") as exc_info:
            Settings.from_env({ENV_BACKEND: "shell"})
        assert exc_info.value.hint is not None

    def test_unknown_log_level(self) -> None:
        with pytest.raises(ConfigurationError, match="Unknown log level"):
            Settings.from_env({ENV_LOG_LEVEL: "loud"})


class TestOverrides:
    def test_flags_beat_environment(self) -> None:
        settings = Settings.from_env({ENV_BACKEND: "cli"}).with_overrides(backend="api")
        assert settings.backend is BackendKind.API

    def test_none_and_blank_keep_values(self) -> None:
        base = Settings(cli_tool="aws2", default_region="eu-west-1")
        assert base.with_overrides(cli_tool="  ", default_region=None) == base
