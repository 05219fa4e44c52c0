"""Build backend-specific invocations from allowed requests.

The builder is shared by both backends and contains no I/O.

CLI form
--------
``<tool> <service> [<operation>] [--<key> <value> | --<key>] [--region <region>]``

* Boolean ``True`` renders as a bare flag; ``False`` is omitted.
* Parameters keep their insertion order so output is reproducible.
* The region flag is appended last, and only when a region is present.
* String values are split with :func:`shlex.split`, so
  ``"i-1 i-2"`` passes two ids; quote inside the value to keep spaces.
* Every token goes through :func:`shlex.quote`.  Plain tokens render
  verbatim; tokens with whitespace or shell metacharacters stay one
  argument when the line is split again.

API form
--------
The ``(service, operation)`` pair is looked up in the static catalog.
Unknown pairs become an :class:`UnmappedInvocation` and there is no
fallback to the CLI form.  Values are passed through as given; the API
backend coerces them to the operation's member types.
"""

from __future__ import annotations

import shlex
from collections.abc import Mapping
from typing import Any

from aws_cli_mcp.core import catalog
from aws_cli_mcp.core.models import (
    ApiInvocation,
    BackendKind,
    Invocation,
    ParameterValue,
    ShellInvocation,
    UnmappedInvocation,
)
from aws_cli_mcp.exceptions import ValidationFaultError

DEFAULT_TOOL: str = "aws"


class CommandBuilder:
    """Turn an allowed request into an :data:`Invocation`.

    Parameters
    ----------
    tool:
        Executable name (or path) for the CLI form.
    """

    def __init__(self, tool: str = DEFAULT_TOOL) -> None:
        self._tool: str = tool

    @property
    def tool(self) -> str:
        return self._tool

    def build(
        self,
        service: str,
        operation: str | None,
        parameters: Mapping[str, ParameterValue] | None,
        effective_region: str | None,
        *,
        target: BackendKind,
    ) -> Invocation:
        params = parameters or {}
        if target is BackendKind.API:
            return self.build_api(service, operation, params, effective_region)
        return self.build_shell(service, operation, params, effective_region)

    # ------------------------------------------------------------------
    # CLI
    # ------------------------------------------------------------------

    def build_shell(
        self,
        service: str,
        operation: str | None,
        parameters: Mapping[str, ParameterValue],
        effective_region: str | None,
    ) -> ShellInvocation:
        tokens: list[str] = [self._tool, service]
        if operation:
            tokens.append(operation)

        for key, value in parameters.items():
            if isinstance(value, bool):
                if value:
                    tokens.append(f"--{key}")
                continue
            tokens.append(f"--{key}")
            tokens.extend(_split_value(key, str(value)))

        if effective_region:
            tokens.extend(("--region", effective_region))

        return ShellInvocation(" ".join(shlex.quote(token) for token in tokens))

    # ------------------------------------------------------------------
    # API
    # ------------------------------------------------------------------

    @staticmethod
    def build_api(
        service: str,
        operation: str | None,
        parameters: Mapping[str, ParameterValue],
        effective_region: str | None,
    ) -> ApiInvocation | UnmappedInvocation:
        handler = catalog.lookup(service, operation)
        if handler is None:
            return UnmappedInvocation(service=service, operation=operation)

        payload: dict[str, Any] = {}
        for key, value in parameters.items():
            if value is False:
                continue
            payload[to_api_name(key)] = value

        return ApiInvocation(
            backend_id=handler.backend_id,
            request_payload=payload,
            region=effective_region,
        )


def to_api_name(key: str) -> str:
    """Convert a CLI option name to its API member name.

    ``instance-ids`` -> ``InstanceIds``; ``Bucket`` is left unchanged.
    """
    parts = key.lstrip("-").replace("_", "-").split("-")
    return "".join(part[:1].upper() + part[1:] for part in parts if part)


def _split_value(key: str, value: str) -> list[str]:
    try:
        return shlex.split(value)
    except ValueError as exc:
        raise ValidationFaultError(
            f"Parameter '{key}' must be a well-formed value: {exc}",
        ) from exc
