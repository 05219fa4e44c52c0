"""Infrastructure layer — AWS CLI processes and boto3 clients.

Every raw third-party or OS exception is caught here and returned as a
:class:`~aws_cli_mcp.core.models.Failure` or re-raised as an
:class:`~aws_cli_mcp.exceptions.AwsCliMcpError` subclass.

Rules
-----
* No imports from ``cli``.
* No user-facing output.
"""

from aws_cli_mcp.infra.api_backend import ApiBackend
from aws_cli_mcp.infra.cli_detector import CliStatus, detect_cli, require_cli
from aws_cli_mcp.infra.subprocess_backend import SubprocessBackend

__all__: list[str] = [
    "ApiBackend",
    "CliStatus",
    "SubprocessBackend",
    "detect_cli",
    "require_cli",
]
