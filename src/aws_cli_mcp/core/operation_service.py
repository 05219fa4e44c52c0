"""Core operation service — the authorization/dispatch pipeline.

This is the central service consumed by the transport layer.  It owns
no I/O itself: execution is delegated to a
:class:`~aws_cli_mcp.core.protocols.Backend` injected at construction
time, and session state to an injected
:class:`~aws_cli_mcp.core.session.Session`.

Pipeline
--------
request → policy → (deny: short-circuit) → command builder → backend →
normalizer → response

Guarantees
----------
* Every public method returns an :class:`OperationResponse`; no
  exception escapes to the caller.
* A denied request never reaches the backend.
* The effective region is resolved when the command is built.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping

from aws_cli_mcp.core import catalog, policy
from aws_cli_mcp.core.command_builder import CommandBuilder
from aws_cli_mcp.core.models import (
    BackendKind,
    Failure,
    Invocation,
    OperationRequest,
    OperationResponse,
    ParameterValue,
    Result,
    Success,
)
from aws_cli_mcp.core.normalizer import normalize
from aws_cli_mcp.core.protocols import Backend
from aws_cli_mcp.core.session import Session
from aws_cli_mcp.exceptions import (
    AwsCliMcpError,
    PolicyDeniedError,
    ValidationFaultError,
)

logger = logging.getLogger(__name__)

REGION_REQUIRED: str = "Region is required."
SERVICE_REQUIRED: str = "Service is required."

CRAWL_SERVICE: str = "resourcegroupstaggingapi"
CRAWL_OPERATION: str = "get-resources"
CLI_HELP_OPERATION: str = "help"


class OperationService:
    """Gate, build, dispatch and normalize AWS operations.

    Parameters
    ----------
    backend:
        Any object satisfying the :class:`Backend` protocol.
    session:
        Session holding the default region.  A fresh one is created
        when omitted.
    builder:
        Command builder; defaults to one targeting ``aws``.
    """

    def __init__(
        self,
        backend: Backend,
        *,
        session: Session | None = None,
        builder: CommandBuilder | None = None,
    ) -> None:
        self._backend: Backend = backend
        self._session: Session = session if session is not None else Session()
        self._builder: CommandBuilder = builder if builder is not None else CommandBuilder()

    @property
    def session(self) -> Session:
        return self._session

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def set_default_region(self, region: str | None) -> OperationResponse:
        return normalize(self._session.set_default_region(region))

    async def execute_operation(
        self,
        service: str,
        operation: str | None = None,
        parameters: Mapping[str, ParameterValue] | None = None,
        region: str | None = None,
    ) -> OperationResponse:
        """Run ``service operation`` if it is read-only."""
        request = OperationRequest(
            service=service,
            operation=operation or None,
            parameters=dict(parameters or {}),
            region=region,
        )
        return normalize(await self._run(request))

    async def describe_service(
        self,
        service: str,
        region: str | None = None,
    ) -> OperationResponse:
        """List the known read-only operations for *service*."""
        operations = catalog.operations_for(service)
        if not operations:
            return normalize(self._uncatalogued(service))

        effective_region = self._session.effective_region(region)
        header = f"Read-only operations for '{service}'"
        if effective_region:
            header += f" (region {effective_region})"
        lines = [f"{header}:"]
        lines.extend(f"  {op}" for op in operations)
        return normalize(Success("\n".join(lines)))

    async def test_identity(self, region: str | None = None) -> OperationResponse:
        service, operation = policy.IDENTITY_CHECK
        return await self.execute_operation(service, operation, region=region)

    async def crawl_resources(self, region: str | None) -> OperationResponse:
        """Discover tagged resources in an explicitly named region.

        The session default region is not consulted.
        """
        if region is None or not region.strip():
            return normalize(Failure.from_error(ValidationFaultError(REGION_REQUIRED)))
        return await self.execute_operation(
            CRAWL_SERVICE, CRAWL_OPERATION, region=region.strip(),
        )

    def _uncatalogued(self, service: str) -> Result:
        if self._backend.kind is BackendKind.CLI:
            return Success(
                f"No catalogued operations for '{service}'. Call executeOperation "
                f"with service '{service}' and operation '{CLI_HELP_OPERATION}' "
                "to list what the AWS CLI offers.",
            )
        return Failure(
            f"Service '{service}' is not supported. "
            f"Supported services: {', '.join(catalog.supported_services())}.",
        )

    # ------------------------------------------------------------------
    # Pipeline
    # ------------------------------------------------------------------

    async def _run(self, request: OperationRequest) -> Result:
        try:
            invocation = self._prepare(request)
        except AwsCliMcpError as exc:
            return Failure.from_error(exc)

        logger.debug("Dispatching %r via %s backend", invocation, self._backend.kind.value)
        try:
            return await self._backend.dispatch(invocation)
        except AwsCliMcpError as exc:
            return Failure.from_error(exc)
        except Exception as exc:
            logger.exception("Backend raised for %s %s", request.service, request.operation)
            return Failure(f"Unexpected backend error: {exc}")

    def _prepare(self, request: OperationRequest) -> Invocation:
        """Validate, authorize and build the invocation for *request*."""
        if not request.service or not request.service.strip():
            raise ValidationFaultError(SERVICE_REQUIRED)

        decision = policy.evaluate(request.service, request.operation)
        if not decision.allowed:
            logger.info(
                "Denied %s %s: %s",
                request.service,
                request.operation or "<none>",
                decision.reason,
            )
            raise PolicyDeniedError(decision.reason or policy.DENIAL_REASON)

        return self._builder.build(
            request.service,
            request.operation,
            request.parameters,
            self._session.effective_region(request.region),
            target=self._backend.kind,
        )
