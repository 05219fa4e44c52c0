"""Allow ``python -m aws_cli_mcp`` invocation.

Delegates to the CLI error-boundary entry point so that
``python -m aws_cli_mcp`` behaves identically to the ``aws-cli-mcp``
console script.
"""

from __future__ import annotations

from aws_cli_mcp.cli.app import cli

if __name__ == "__main__":
    cli()
