"""Core / service layer — policy, command building and orchestration.

Rules
-----
* No ``print()`` calls.
* No process spawning or network I/O; backends are injected.
* No imports from ``cli`` or ``infra``.
"""

from aws_cli_mcp.core.command_builder import CommandBuilder
from aws_cli_mcp.core.models import (
    ApiInvocation,
    BackendKind,
    Failure,
    FaultKind,
    OperationRequest,
    OperationResponse,
    PolicyDecision,
    ShellInvocation,
    Success,
    UnmappedInvocation,
)
from aws_cli_mcp.core.operation_service import OperationService
from aws_cli_mcp.core.protocols import Backend
from aws_cli_mcp.core.session import Session

__all__: list[str] = [
    "ApiInvocation",
    "Backend",
    "BackendKind",
    "CommandBuilder",
    "Failure",
    "FaultKind",
    "OperationRequest",
    "OperationResponse",
    "OperationService",
    "PolicyDecision",
    "Session",
    "ShellInvocation",
    "Success",
    "UnmappedInvocation",
]
