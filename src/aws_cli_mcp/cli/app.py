"""CLI application entry point and command routing for aws-cli-mcp.

This module is the **sole process-level error boundary**.  It catches
:class:`~aws_cli_mcp.exceptions.AwsCliMcpError`, ``KeyboardInterrupt``
and any unexpected ``Exception``, renders a short message on stderr and
returns a well-defined exit code.

Commands
--------
* ``aws-cli-mcp serve``   — run the MCP server over stdio
* ``aws-cli-mcp doctor``  — environment diagnostics
* ``aws-cli-mcp --version``
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from typing import TYPE_CHECKING

from aws_cli_mcp.cli import exit_codes
from aws_cli_mcp.cli.console import console
from aws_cli_mcp.config import Settings
from aws_cli_mcp.core.models import BackendKind
from aws_cli_mcp.exceptions import AwsCliMcpError, EnvironmentError
from aws_cli_mcp.version import __version__

if TYPE_CHECKING:
    from aws_cli_mcp.core.operation_service import OperationService

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Argument parser
# ---------------------------------------------------------------------------

def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="aws-cli-mcp",
        description="MCP server exposing read-only AWS operations.",
    )
    parser.add_argument(
        "-V",
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "command",
        nargs="?",
        default=None,
        choices=("serve", "doctor"),
        help="'serve' runs the MCP server over stdio; 'doctor' checks the environment.",
    )
    parser.add_argument(
        "--backend",
        choices=[kind.value for kind in BackendKind],
        default=None,
        help="Execution backend (default: $AWS_CLI_MCP_BACKEND or 'cli').",
    )
    parser.add_argument(
        "--tool",
        default=None,
        help="AWS CLI executable for the cli backend (default: 'aws').",
    )
    parser.add_argument(
        "--region",
        default=None,
        help="Initial default region for the session.",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        help="Logging level for stderr diagnostics (default: WARNING).",
    )
    return parser


# ---------------------------------------------------------------------------
# Command dispatch
# ---------------------------------------------------------------------------

def _build_service(settings: Settings) -> OperationService:
    """Wire the configured backend, builder and session together."""
    from aws_cli_mcp.core.command_builder import CommandBuilder
    from aws_cli_mcp.core.operation_service import OperationService
    from aws_cli_mcp.core.session import Session

    if settings.backend is BackendKind.API:
        from aws_cli_mcp.infra.api_backend import ApiBackend

        backend = ApiBackend()
    else:
        from aws_cli_mcp.infra.subprocess_backend import SubprocessBackend

        backend = SubprocessBackend()

    return OperationService(
        backend,
        session=Session(settings.default_region),
        builder=CommandBuilder(settings.cli_tool),
    )


def _handle_serve(settings: Settings) -> int:
    from aws_cli_mcp.cli.logging_setup import configure_logging
    from aws_cli_mcp.cli.mcp_server import serve_stdio

    configure_logging(settings.log_level_number)

    if settings.backend is BackendKind.CLI:
        from aws_cli_mcp.infra.cli_detector import require_cli

        try:
            require_cli(settings.cli_tool)
        except EnvironmentError as exc:
            logger.warning("%s Operations will fail until it is installed.", exc)

    logger.info("Serving over stdio with the %s backend", settings.backend.value)
    asyncio.run(serve_stdio(_build_service(settings)))
    return exit_codes.SUCCESS


def _handle_doctor(settings: Settings) -> int:
    from aws_cli_mcp.cli.doctor import run_doctor

    return run_doctor(settings.cli_tool)


# ---------------------------------------------------------------------------
# Main entry point
# ---------------------------------------------------------------------------

def main(argv: list[str] | None = None) -> int:
    """Run the aws-cli-mcp CLI.

    Parameters
    ----------
    argv:
        Explicit argument list.  When ``None``, ``sys.argv[1:]`` is used.

    Returns
    -------
    int
        OS process exit code.
    """
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help(sys.stderr)
        return exit_codes.SUCCESS

    settings = Settings.from_env().with_overrides(
        backend=args.backend,
        cli_tool=args.tool,
        log_level=args.log_level,
        default_region=args.region,
    )

    if args.command == "doctor":
        return _handle_doctor(settings)
    return _handle_serve(settings)


# ---------------------------------------------------------------------------
# Script-level error boundary
# ---------------------------------------------------------------------------

def cli() -> None:
    """Top-level error boundary invoked by the console-script entry point."""
    try:
        code = main()
        sys.exit(code)
    except AwsCliMcpError as exc:
        console.print(f"[bold red]Error:[/bold red] {exc}")
        if exc.hint:
            console.print(f"[yellow]Hint:[/yellow] {exc.hint}")
        sys.exit(exit_codes.GENERAL_ERROR)
    except KeyboardInterrupt:
        console.print("\n[yellow]Aborted by user.[/yellow]")
        sys.exit(exit_codes.KEYBOARD_INTERRUPT)
    except Exception as exc:  # noqa: BLE001
        console.print(
            "[bold red]Unexpected error.[/bold red] "
            "Please report this issue.\n"
            f"  {type(exc).__name__}: {exc}"
        )
        sys.exit(exit_codes.UNEXPECTED_ERROR)
