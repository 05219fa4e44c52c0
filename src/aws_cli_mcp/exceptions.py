"""Custom exception hierarchy for aws-cli-mcp.

Every fault raised inside the package inherits from
:class:`AwsCliMcpError`.  Raw third-party exceptions (botocore, OS
errors from process launch) must never cross the infrastructure
boundary; they are caught there and turned into a
:class:`~aws_cli_mcp.core.models.Failure` or re-raised as a typed
subclass defined here.

Hierarchy
---------
AwsCliMcpError
├── PolicyDeniedError
├── BackendUnmappedError
├── ExecutionFaultError
├── ValidationFaultError
├── ConfigurationError
└── EnvironmentError
"""

from __future__ import annotations


class AwsCliMcpError(Exception):
    """Base exception for all aws-cli-mcp errors.

    The CLI error boundary renders ``str(exc)`` and the optional
    :attr:`hint` without a stack trace.
    """

    def __init__(self, message: str, *, hint: str | None = None) -> None:
        super().__init__(message)
        self.hint: str | None = hint
        """Optional actionable guidance shown below the error message."""


# --- Operation pipeline ----------------------------------------------------

class PolicyDeniedError(AwsCliMcpError):
    """Raised when an operation is not on the read-only allow-list."""


class BackendUnmappedError(AwsCliMcpError):
    """Raised when the active backend has no handler for an operation."""


class ExecutionFaultError(AwsCliMcpError):
    """Raised when the AWS CLI or an AWS API call fails."""


class ValidationFaultError(AwsCliMcpError):
    """Raised when a request is missing a required field."""


# --- Configuration / environment -------------------------------------------

class ConfigurationError(AwsCliMcpError):
    """Raised when settings from the environment or flags are invalid."""


class EnvironmentError(AwsCliMcpError):
    """Raised when a required runtime dependency is not available."""


def missing_dependency(package: str) -> EnvironmentError:
    """Build the standard error for an absent optional import."""
    return EnvironmentError(
        f"{package} is not installed. Install with: pip install {package}",
    )
