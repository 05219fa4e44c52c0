"""Convert backend results into the uniform response shape.

Errors are signalled in-band: callers match on the leading
``"Error:"`` prefix.  Validation faults keep their fixed message.
"""

from __future__ import annotations

from aws_cli_mcp.core.models import Failure, FaultKind, OperationResponse, Result

ERROR_PREFIX: str = "Error:"


def normalize(result: Result) -> OperationResponse:
    if isinstance(result, Failure):
        if result.kind is FaultKind.VALIDATION:
            return OperationResponse(text=result.message)
        return OperationResponse(text=f"{ERROR_PREFIX} {result.message}")
    return OperationResponse(text=result.text)


def is_error(response: OperationResponse) -> bool:
    return response.text.startswith(ERROR_PREFIX)
