"""Infrastructure: AWS CLI detection and platform guidance.

Locates the AWS CLI on the system PATH and provides platform-specific
installation guidance when it is missing.

Rules
-----
* Detection via :func:`shutil.which` only, never a subprocess.
* No automatic installation.
* No ``print()``; callers handle user-facing output.
"""

from __future__ import annotations

import platform
import shutil
from dataclasses import dataclass
from pathlib import Path

from aws_cli_mcp.core.command_builder import DEFAULT_TOOL
from aws_cli_mcp.exceptions import EnvironmentError


# ---------------------------------------------------------------------------
# Detection result
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class CliStatus:
    """Result of an AWS CLI detection check.

    Attributes
    ----------
    found : bool
        Whether the executable was located on PATH.
    path : Path | None
        Absolute path to the executable, or ``None``.
    install_commands : tuple[str, ...]
        Suggested commands for installing the AWS CLI on the current
        platform.  Empty when it is already present.
    """

    found: bool
    path: Path | None
    install_commands: tuple[str, ...]


# ---------------------------------------------------------------------------
# Detection logic
# ---------------------------------------------------------------------------

def detect_cli(tool: str = DEFAULT_TOOL) -> CliStatus:
    """Look up *tool*.

    Returns a :class:`CliStatus` regardless of the outcome; the caller
    decides whether to abort or merely warn.
    """
    result = shutil.which(tool)
    if result is not None:
        return CliStatus(found=True, path=Path(result).resolve(), install_commands=())
    return CliStatus(found=False, path=None, install_commands=_platform_install_commands())


def require_cli(tool: str = DEFAULT_TOOL) -> Path:
    """Locate *tool* or raise :class:`EnvironmentError` with install hints."""
    status = detect_cli(tool)
    if not status.found or status.path is None:
        hint_lines: list[str] = []
        if status.install_commands:
            hint_lines.append("Install the AWS CLI using one of:")
            hint_lines.extend(f"  {cmd}" for cmd in status.install_commands)
        raise EnvironmentError(
            f"'{tool}' is not installed or not on PATH.",
            hint="\n".join(hint_lines) if hint_lines else None,
        )
    return status.path


# ---------------------------------------------------------------------------
# Platform-specific install guidance
# ---------------------------------------------------------------------------

def _platform_install_commands() -> tuple[str, ...]:
    system = platform.system().lower()
    if system == "windows":
        return (
            "winget install Amazon.AWSCLI",
            "msiexec.exe /i https://awscli.amazonaws.com/AWSCLIV2.msi",
        )
    if system == "linux":
        return (
            "sudo snap install aws-cli --classic",
            "sudo apt install awscli",
            "pip install awscli",
        )
    if system == "darwin":
        return ("brew install awscli",)
    return ("See https://aws.amazon.com/cli/ for installation instructions",)
