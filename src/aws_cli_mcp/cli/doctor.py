"""``aws-cli-mcp doctor`` — environment diagnostics command.

Gathers system information and renders a Rich table summarising whether
the runtime environment can serve read-only AWS operations.  No
business logic lives here; it only collects and displays data.
"""

from __future__ import annotations

import platform
import sys
from importlib.metadata import PackageNotFoundError, version

from aws_cli_mcp.cli import exit_codes
from aws_cli_mcp.cli.console import console, rich_available
from aws_cli_mcp.core.command_builder import DEFAULT_TOOL
from aws_cli_mcp.infra.cli_detector import detect_cli
from aws_cli_mcp.version import __version__

OK = "[green]OK[/green]"
WARN = "[yellow]WARN[/yellow]"
FAIL = "[red]FAIL[/red]"


# ---------------------------------------------------------------------------
# Diagnostic collectors
# ---------------------------------------------------------------------------

def _package_version_check() -> tuple[str, str, str]:
    return "aws-cli-mcp", __version__, OK


def _python_version_check() -> tuple[str, str, str]:
    """Return (label, value, status) for the Python version row."""
    python_version = platform.python_version()
    ok = sys.version_info[:2] >= (3, 10)
    status = OK if ok else "[red]FAIL (>=3.10 required)[/red]"
    return "Python", python_version, status


def _aws_cli_check(tool: str = DEFAULT_TOOL) -> tuple[str, str, str]:
    """The CLI backend needs it; the API backend does not, hence WARN."""
    status = detect_cli(tool)
    if status.found:
        return "AWS CLI", str(status.path) if status.path else "found", OK
    return "AWS CLI", "not found", WARN


def _boto3_check() -> tuple[str, str, str]:
    try:
        import boto3
    except ImportError:
        return "boto3", "NOT INSTALLED", FAIL
    return "boto3", getattr(boto3, "__version__", "unknown"), OK


def _mcp_check() -> tuple[str, str, str]:
    try:
        return "mcp", version("mcp"), OK
    except PackageNotFoundError:
        return "mcp", "NOT INSTALLED", FAIL


def _os_check() -> tuple[str, str, str]:
    system_raw = platform.system()
    system_display = {"Darwin": "macOS"}.get(system_raw, system_raw)
    value = f"{system_display} {platform.release()} ({platform.machine()})"
    return "OS", value, OK


def _status_plain(status: str) -> str:
    """Convert rich-markup status to plain text."""
    for word in ("FAIL", "WARN", "OK"):
        if word in status:
            return word
    return status


def _print_plain_table(checks: list[tuple[str, str, str]]) -> None:
    print("\naws-cli-mcp doctor", file=sys.stderr)
    print("=" * 64, file=sys.stderr)
    print(f"{'Component':<12} {'Value':<40} {'Status':<8}", file=sys.stderr)
    print("-" * 64, file=sys.stderr)
    for label, value, status in checks:
        print(f"{label:<12} {value:<40} {_status_plain(status):<8}", file=sys.stderr)
    print(file=sys.stderr)


def _print_rich_table(checks: list[tuple[str, str, str]]) -> None:
    from rich.table import Table

    table = Table(
        title="aws-cli-mcp doctor",
        show_header=True,
        header_style="bold cyan",
        border_style="dim",
    )
    table.add_column("Component", style="bold", min_width=12)
    table.add_column("Value", min_width=20)
    table.add_column("Status", justify="center", min_width=8)
    for label, value, status in checks:
        table.add_row(label, value, status)

    console.print()
    console.print(table)
    console.print()


# ---------------------------------------------------------------------------
# Public entry point
# ---------------------------------------------------------------------------

def run_doctor(tool: str = DEFAULT_TOOL) -> int:
    """Execute all diagnostic checks and render a summary table.

    Returns
    -------
    int
        :data:`exit_codes.SUCCESS` when no check fails,
        :data:`exit_codes.GENERAL_ERROR` otherwise.
    """
    checks = [
        _package_version_check(),
        _python_version_check(),
        _aws_cli_check(tool),
        _boto3_check(),
        _mcp_check(),
        _os_check(),
    ]
    has_failure = any("FAIL" in status for _, _, status in checks)
    use_rich = rich_available()

    if use_rich:
        _print_rich_table(checks)
    else:
        _print_plain_table(checks)

    cli_status = detect_cli(tool)
    if not cli_status.found and cli_status.install_commands:
        console.print("The AWS CLI is not installed (needed for the cli backend).")
        console.print("Install using one of the following commands:\n")
        for cmd in cli_status.install_commands:
            console.print(f"  {cmd}")
        console.print()

    if has_failure:
        console.print("[bold red]Some checks failed.[/bold red]" if use_rich else "Some checks failed.")
        return exit_codes.GENERAL_ERROR

    console.print("[bold green]All checks passed.[/bold green]" if use_rich else "All checks passed.")
    return exit_codes.SUCCESS
