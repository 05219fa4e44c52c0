"""boto3 backed implementation of :class:`~aws_cli_mcp.core.protocols.Backend`.

This module is the **only** place in the codebase that imports
``boto3`` and ``botocore``.  All botocore exceptions are caught here and
returned as :class:`~aws_cli_mcp.core.models.Failure` results; nothing
raw escapes the infrastructure boundary.

Only methods named by the static operation catalog are ever resolved on
a client; arbitrary attribute lookups are refused.
"""

from __future__ import annotations

import asyncio
import json
import logging
import shlex
from collections.abc import Callable, Mapping
from datetime import date, datetime
from decimal import Decimal
from typing import Any, Optional

from aws_cli_mcp.core import catalog
from aws_cli_mcp.core.catalog import ApiHandler
from aws_cli_mcp.core.models import (
    ApiInvocation,
    BackendKind,
    Failure,
    Invocation,
    Result,
    Success,
    UnmappedInvocation,
)
from aws_cli_mcp.exceptions import (
    AwsCliMcpError,
    BackendUnmappedError,
    ExecutionFaultError,
    ValidationFaultError,
    missing_dependency,
)

logger = logging.getLogger(__name__)

ClientFactory = Callable[[str, Optional[str]], Any]
"""``(client_name, region) -> boto3 client``."""


def boto3_client_factory(client_name: str, region: str | None) -> Any:
    """Create a boto3 client from the default credential chain."""
    try:
        import boto3
    except ModuleNotFoundError as exc:
        raise missing_dependency("boto3") from exc

    session = boto3.Session(region_name=region)
    return session.client(client_name)


class ApiBackend:
    """Concrete :class:`Backend` that calls AWS through boto3.

    Parameters
    ----------
    client_factory:
        Callable building a client for ``(client_name, region)``.
        Defaults to :func:`boto3_client_factory`.
    """

    kind: BackendKind = BackendKind.API

    def __init__(self, client_factory: ClientFactory | None = None) -> None:
        self._client_factory: ClientFactory = client_factory or boto3_client_factory

    async def dispatch(self, invocation: Invocation) -> Result:
        if isinstance(invocation, UnmappedInvocation):
            return Failure.unmapped(invocation)
        if not isinstance(invocation, ApiInvocation):
            return Failure(f"Unsupported invocation for the API backend: {invocation!r}")

        try:
            response = await asyncio.to_thread(self._call, invocation)
        except AwsCliMcpError as exc:
            return Failure.from_error(exc)
        return Success(serialize_response(response))

    # ------------------------------------------------------------------
    # Blocking call (runs in a worker thread)
    # ------------------------------------------------------------------

    def _call(self, invocation: ApiInvocation) -> Any:
        handler = ApiHandler.from_backend_id(invocation.backend_id)
        if handler not in catalog.CATALOG.values():
            raise BackendUnmappedError(
                f"'{invocation.backend_id}' is not a registered read-only operation",
            )

        try:
            from botocore.exceptions import BotoCoreError, ClientError
        except ModuleNotFoundError as exc:
            raise missing_dependency("botocore") from exc

        logger.debug("Calling %s in %s", handler.backend_id, invocation.region or "<default>")
        try:
            client = self._client_factory(handler.client, invocation.region)
            method = getattr(client, handler.method)
            payload = coerce_payload(client, handler.method, invocation.request_payload)
            return method(**payload)
        except ClientError as exc:
            error = exc.response.get("Error", {})
            code = error.get("Code", "ClientError")
            message = error.get("Message") or str(exc)
            raise ExecutionFaultError(f"{code}: {message}") from exc
        except BotoCoreError as exc:
            raise ExecutionFaultError(str(exc)) from exc
        except AwsCliMcpError:
            raise
        except Exception as exc:
            raise ExecutionFaultError(
                f"Unexpected API error: {exc}",
            ) from exc


# ---------------------------------------------------------------------------
# Payload coercion
# ---------------------------------------------------------------------------

_INTEGER_TYPES = frozenset({"integer", "long"})
_FLOAT_TYPES = frozenset({"float", "double"})
_TRUE_WORDS = frozenset({"true", "yes", "1"})
_FALSE_WORDS = frozenset({"false", "no", "0"})


def coerce_payload(client: Any, method: str, payload: Mapping[str, Any]) -> dict[str, Any]:
    """Convert string values in *payload* to the operation's member types.

    Transport values arrive as strings or booleans.  The operation's
    input shape is read from the client's service model; members it does
    not describe are passed through unchanged.
    """
    members = _input_members(client, method)
    return {
        key: _coerce_value(key, members.get(key), value)
        for key, value in payload.items()
    }


def _input_members(client: Any, method: str) -> Mapping[str, Any]:
    meta = getattr(client, "meta", None)
    mapping = getattr(meta, "method_to_api_mapping", None)
    if not isinstance(mapping, Mapping) or method not in mapping:
        return {}
    input_shape = meta.service_model.operation_model(mapping[method]).input_shape
    members = getattr(input_shape, "members", None)
    return members if isinstance(members, Mapping) else {}


def _coerce_value(key: str, shape: Any, value: Any) -> Any:
    if shape is None or not isinstance(value, str):
        return value

    type_name = shape.type_name
    try:
        if type_name in _INTEGER_TYPES:
            return int(value)
        if type_name in _FLOAT_TYPES:
            return float(value)
        if type_name == "boolean":
            return _parse_bool(value)
        if type_name == "list":
            return [_coerce_value(key, shape.member, item) for item in shlex.split(value)]
        if type_name in ("structure", "map"):
            return json.loads(value)
    except ValueError as exc:
        raise ValidationFaultError(
            f"Parameter '{key}' must be a valid {type_name}: {value!r}",
        ) from exc
    return value


def _parse_bool(value: str) -> bool:
    word = value.strip().lower()
    if word in _TRUE_WORDS:
        return True
    if word in _FALSE_WORDS:
        return False
    raise ValueError(value)


# ---------------------------------------------------------------------------
# Serialization
# ---------------------------------------------------------------------------

def _serialize_value(obj: Any) -> Any:
    """Recursively convert a boto3 response to JSON-serializable form."""
    if obj is None or isinstance(obj, (bool, int, float, str)):
        return obj
    if isinstance(obj, (datetime, date)):
        return obj.isoformat()
    if isinstance(obj, Decimal):
        return int(obj) if obj == obj.to_integral_value() else float(obj)
    if isinstance(obj, bytes):
        return "<binary data omitted>"
    if isinstance(obj, Mapping):
        return {
            str(key): _serialize_value(value)
            for key, value in obj.items()
            if key != "ResponseMetadata"
        }
    if isinstance(obj, (list, tuple)):
        return [_serialize_value(item) for item in obj]
    return str(obj)


def serialize_response(response: Any) -> str:
    """Render *response* as stable, pretty-printed JSON."""
    return json.dumps(_serialize_value(response), indent=2, sort_keys=True)
