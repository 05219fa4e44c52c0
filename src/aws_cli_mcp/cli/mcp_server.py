"""MCP transport — exposes the operation service as MCP tools.

Five tools are registered: ``setDefaultRegion``, ``executeOperation``,
``describeService``, ``testIdentity`` and ``crawlResources``.  Each call
is routed to :class:`~aws_cli_mcp.core.operation_service.OperationService`
and answered with a single text content block.  Malformed arguments
and unknown tool names are answered in-band; the handler never raises.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from mcp.server import Server
from mcp.server.stdio import stdio_server
from mcp.types import TextContent, Tool

from aws_cli_mcp.core.models import Failure, OperationResponse, ParameterValue
from aws_cli_mcp.core.normalizer import is_error, normalize
from aws_cli_mcp.core.operation_service import OperationService
from aws_cli_mcp.exceptions import ValidationFaultError
from aws_cli_mcp.version import __version__

logger = logging.getLogger(__name__)

SERVER_NAME: str = "aws-cli-mcp"

INSTRUCTIONS: str = (
    "You are an agent that can run read-only AWS operations on behalf of the "
    "user. Only operations whose name starts with get, list, describe or help, "
    "the 'ls' operation, and 'sts get-caller-identity' are permitted; anything "
    "else is refused. You can set the AWS region per operation or for the "
    "session using setDefaultRegion. If both are set, the per-operation region "
    "takes precedence."
)

_REGION_PROPERTY: dict[str, Any] = {
    "type": "string",
    "description": "AWS region for this call (e.g. us-west-2).",
}


def tool_definitions() -> list[Tool]:
    """Describe the five tools with their JSON-schema inputs."""
    return [
        Tool(
            name="setDefaultRegion",
            description="Set the default AWS region for this session. "
            "An empty string clears it.",
            inputSchema={
                "type": "object",
                "properties": {
                    "region": {
                        "type": "string",
                        "description": "AWS region, or an empty string to clear.",
                    },
                },
                "required": ["region"],
            },
        ),
        Tool(
            name="executeOperation",
            description="Run a read-only AWS operation, "
            "e.g. service 'ec2' with operation 'describe-instances'.",
            inputSchema={
                "type": "object",
                "properties": {
                    "service": {
                        "type": "string",
                        "description": "AWS service (e.g. s3, ec2, lambda).",
                    },
                    "operation": {
                        "type": "string",
                        "description": "Operation to run (e.g. ls, describe-instances).",
                    },
                    "parameters": {
                        "type": "object",
                        "description": "Options as key/value pairs. "
                        "true renders a bare flag; false is omitted.",
                        "additionalProperties": {"type": ["string", "boolean"]},
                    },
                    "region": _REGION_PROPERTY,
                },
                "required": ["service"],
            },
        ),
        Tool(
            name="describeService",
            description="List the known read-only operations for an AWS service.",
            inputSchema={
                "type": "object",
                "properties": {
                    "service": {
                        "type": "string",
                        "description": "AWS service name (e.g. s3, ec2, lambda).",
                    },
                    "region": _REGION_PROPERTY,
                },
                "required": ["service"],
            },
        ),
        Tool(
            name="testIdentity",
            description="Check which AWS identity the credentials resolve to.",
            inputSchema={
                "type": "object",
                "properties": {"region": _REGION_PROPERTY},
            },
        ),
        Tool(
            name="crawlResources",
            description="List tagged resources in one AWS region. "
            "The region must be given explicitly.",
            inputSchema={
                "type": "object",
                "properties": {
                    "region": {
                        "type": "string",
                        "description": "AWS region to crawl (e.g. us-west-2).",
                    },
                },
                "required": ["region"],
            },
        ),
    ]


# ---------------------------------------------------------------------------
# Argument coercion
# ---------------------------------------------------------------------------

def _optional_str(arguments: Mapping[str, Any], key: str) -> str | None:
    value = arguments.get(key)
    if value is None:
        return None
    if not isinstance(value, str):
        raise ValidationFaultError(f"'{key}' must be a string.")
    return value


def _parameters(arguments: Mapping[str, Any]) -> dict[str, ParameterValue]:
    raw = arguments.get("parameters")
    if raw is None:
        return {}
    if not isinstance(raw, Mapping):
        raise ValidationFaultError("'parameters' must be an object.")
    parameters: dict[str, ParameterValue] = {}
    for key, value in raw.items():
        if not isinstance(value, (str, bool)):
            raise ValidationFaultError(
                f"Parameter '{key}' must be a string or a boolean.",
            )
        parameters[str(key)] = value
    return parameters


# ---------------------------------------------------------------------------
# Routing
# ---------------------------------------------------------------------------

async def handle_tool_call(
    service: OperationService,
    name: str,
    arguments: Mapping[str, Any] | None,
) -> OperationResponse:
    """Route one tool call to the operation service."""
    args: Mapping[str, Any] = arguments or {}
    try:
        if name == "setDefaultRegion":
            return service.set_default_region(_optional_str(args, "region") or "")
        if name == "executeOperation":
            return await service.execute_operation(
                _optional_str(args, "service") or "",
                _optional_str(args, "operation"),
                _parameters(args),
                _optional_str(args, "region"),
            )
        if name == "describeService":
            return await service.describe_service(
                _optional_str(args, "service") or "",
                _optional_str(args, "region"),
            )
        if name == "testIdentity":
            return await service.test_identity(_optional_str(args, "region"))
        if name == "crawlResources":
            return await service.crawl_resources(_optional_str(args, "region"))
    except ValidationFaultError as exc:
        return normalize(Failure.from_error(exc))

    return normalize(Failure(f"Unknown tool: {name}"))


def build_server(service: OperationService) -> Server:
    """Create an MCP server bound to *service*."""
    server: Server = Server(SERVER_NAME, version=__version__, instructions=INSTRUCTIONS)

    @server.list_tools()
    async def list_tools() -> list[Tool]:
        return tool_definitions()

    @server.call_tool()
    async def call_tool(name: str, arguments: dict[str, Any]) -> list[TextContent]:
        response = await handle_tool_call(service, name, arguments)
        if is_error(response):
            logger.info("Tool %s answered with an error: %s", name, response.text)
        return [TextContent(type="text", text=response.text)]

    return server


async def serve_stdio(service: OperationService) -> None:
    """Serve *service* over stdio until the client disconnects."""
    server = build_server(service)
    async with stdio_server() as (read_stream, write_stream):
        await server.run(read_stream, write_stream, server.create_initialization_options())
