"""Domain models for aws-cli-mcp.

All models are **frozen** dataclasses — immutable value objects with no
behaviour beyond data access and construction helpers.  They carry zero
I/O and no dependencies on external packages.
"""

from __future__ import annotations

import enum
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Union

from aws_cli_mcp.exceptions import (
    AwsCliMcpError,
    BackendUnmappedError,
    PolicyDeniedError,
    ValidationFaultError,
)

ParameterValue = Union[str, bool]


# ---------------------------------------------------------------------------
# Inbound request
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class OperationRequest:
    """A caller-supplied operation descriptor."""

    service: str
    """AWS service name as the CLI spells it (e.g. ``s3``, ``ec2``)."""

    operation: str | None = None
    """Operation name (e.g. ``describe-instances``).  Empty means absent."""

    parameters: Mapping[str, ParameterValue] = field(default_factory=dict)
    """Option flags in insertion order."""

    region: str | None = None
    """Per-request region; takes precedence over the session default."""


# ---------------------------------------------------------------------------
# Policy
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class PolicyDecision:
    """Outcome of a read-only policy evaluation."""

    allowed: bool
    reason: str | None = None
    """Denial reason.  Present iff :attr:`allowed` is ``False``."""

    @classmethod
    def allow(cls) -> PolicyDecision:
        return cls(allowed=True)

    @classmethod
    def deny(cls, reason: str) -> PolicyDecision:
        return cls(allowed=False, reason=reason)


# ---------------------------------------------------------------------------
# Invocations (backend-specific instructions)
# ---------------------------------------------------------------------------

class BackendKind(str, enum.Enum):
    """Which execution strategy an invocation targets."""

    CLI = "cli"
    API = "api"


@dataclass(frozen=True, slots=True)
class ShellInvocation:
    """A complete AWS CLI command line."""

    command_line: str


@dataclass(frozen=True, slots=True)
class ApiInvocation:
    """A typed boto3 call resolved from the operation catalog."""

    backend_id: str
    """``<client>.<method>``, e.g. ``ec2.describe_instances``."""

    request_payload: Mapping[str, Any]
    """Keyword arguments for the boto3 method."""

    region: str | None = None


@dataclass(frozen=True, slots=True)
class UnmappedInvocation:
    """Explicit fallback for pairs the catalog does not know."""

    service: str
    operation: str | None

    def describe(self) -> str:
        return " ".join(part for part in (self.service, self.operation) if part)


Invocation = Union[ShellInvocation, ApiInvocation, UnmappedInvocation]


# ---------------------------------------------------------------------------
# Results
# ---------------------------------------------------------------------------

class FaultKind(str, enum.Enum):
    """Error taxonomy for :class:`Failure` results."""

    POLICY_DENIED = "policy_denied"
    BACKEND_UNMAPPED = "backend_unmapped"
    EXECUTION = "execution"
    VALIDATION = "validation"


_FAULT_KINDS: tuple[tuple[type[AwsCliMcpError], FaultKind], ...] = (
    (PolicyDeniedError, FaultKind.POLICY_DENIED),
    (BackendUnmappedError, FaultKind.BACKEND_UNMAPPED),
    (ValidationFaultError, FaultKind.VALIDATION),
)


@dataclass(frozen=True, slots=True)
class Success:
    """Terminal successful result."""

    text: str


@dataclass(frozen=True, slots=True)
class Failure:
    """Terminal failed result."""

    message: str
    kind: FaultKind = FaultKind.EXECUTION

    @classmethod
    def from_error(cls, exc: AwsCliMcpError) -> Failure:
        """Map a typed exception onto the matching fault kind."""
        for exc_class, kind in _FAULT_KINDS:
            if isinstance(exc, exc_class):
                return cls(message=str(exc), kind=kind)
        return cls(message=str(exc), kind=FaultKind.EXECUTION)

    @classmethod
    def unmapped(cls, invocation: UnmappedInvocation) -> Failure:
        """Result for an operation the active backend cannot run."""
        return cls.from_error(
            BackendUnmappedError(
                f"operation '{invocation.describe()}' is not implemented for this backend",
            ),
        )


Result = Union[Success, Failure]


# ---------------------------------------------------------------------------
# Outbound response
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class OperationResponse:
    """Uniform external response shape."""

    text: str
