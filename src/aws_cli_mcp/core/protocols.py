"""Protocols (interfaces) consumed by the core layer.

Core code depends only on these protocols, never on the concrete
backends in ``infra``.
"""

from __future__ import annotations

from typing import Protocol

from aws_cli_mcp.core.models import BackendKind, Invocation, Result


class Backend(Protocol):
    """Contract for execution backends.

    Any object with a :attr:`kind` and an async :meth:`dispatch`
    satisfies this protocol structurally.  Backends trust that the
    policy gate already ran; they never re-check read-only-ness.
    """

    kind: BackendKind
    """Invocation form the backend consumes."""

    async def dispatch(self, invocation: Invocation) -> Result:
        """Execute *invocation* and return its result.

        Implementations must never raise: launch failures, non-zero
        exits, network and auth faults are all returned as
        :class:`~aws_cli_mcp.core.models.Failure`.  An
        :class:`~aws_cli_mcp.core.models.UnmappedInvocation` must fail
        immediately without executing anything.
        """
        ...  # pragma: no cover
