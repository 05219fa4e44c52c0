"""aws-cli-mcp — read-only AWS operations for MCP agents.

Every operation passes a read-only policy gate before it is handed to
either the AWS CLI or boto3.
"""

from aws_cli_mcp.version import __version__

__all__: list[str] = ["__version__"]
