"""AWS CLI subprocess implementation of :class:`~aws_cli_mcp.core.protocols.Backend`.

This module is the **only** place in the codebase that spawns a
process.  The command line is split with :func:`shlex.split` and run
through :func:`asyncio.create_subprocess_exec`; no shell is involved,
so parameter values cannot inject extra commands.
"""

from __future__ import annotations

import asyncio
import logging
import shlex

from aws_cli_mcp.core.models import (
    BackendKind,
    Failure,
    Invocation,
    Result,
    ShellInvocation,
    Success,
    UnmappedInvocation,
)

logger = logging.getLogger(__name__)


class SubprocessBackend:
    """Concrete :class:`Backend` that shells out to the AWS CLI.

    Satisfies the protocol structurally without explicit inheritance.
    """

    kind: BackendKind = BackendKind.CLI

    async def dispatch(self, invocation: Invocation) -> Result:
        if isinstance(invocation, UnmappedInvocation):
            return Failure.unmapped(invocation)
        if not isinstance(invocation, ShellInvocation):
            return Failure(f"Unsupported invocation for the CLI backend: {invocation!r}")
        return await self._run(invocation.command_line)

    # ------------------------------------------------------------------
    # Process execution
    # ------------------------------------------------------------------

    @staticmethod
    async def _run(command_line: str) -> Result:
        try:
            argv = shlex.split(command_line)
        except ValueError as exc:
            return Failure(f"Malformed command line: {exc}")
        if not argv:
            return Failure("Empty command line.")

        logger.debug("Running %s", command_line)
        try:
            process = await asyncio.create_subprocess_exec(
                *argv,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
            stdout_bytes, stderr_bytes = await process.communicate()
        except OSError as exc:
            logger.warning("Could not launch %s: %s", argv[0], exc)
            return Failure(str(exc) or f"Could not launch {argv[0]}")

        stdout = stdout_bytes.decode("utf-8", errors="replace")
        stderr = stderr_bytes.decode("utf-8", errors="replace")

        if process.returncode != 0:
            logger.info("%s exited with status %s", argv[0], process.returncode)
            return Failure(
                stderr.strip() or f"Command exited with status {process.returncode}",
            )
        return Success(stdout)
