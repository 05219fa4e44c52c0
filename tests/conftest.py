"""Shared pytest fixtures and configuration for the aws-cli-mcp test suite.

Guidelines
----------
* No internet access and no real AWS CLI in any test.
* Processes and boto3 clients are mocked at the infra boundary.
* Core tests use :class:`RecordingBackend` instead of a real backend.
"""

from __future__ import annotations

from typing import Any

import pytest

from aws_cli_mcp.core.command_builder import CommandBuilder
from aws_cli_mcp.core.models import BackendKind, Invocation, Result, Success
from aws_cli_mcp.core.operation_service import OperationService
from aws_cli_mcp.core.session import Session


class RecordingBackend:
    """Backend double that records invocations and returns a canned result."""

    def __init__(
        self,
        result: Result | None = None,
        kind: BackendKind = BackendKind.CLI,
    ) -> None:
        self.kind = kind
        self.result: Result = result if result is not None else Success("mocked output")
        self.invocations: list[Invocation] = []

    async def dispatch(self, invocation: Invocation) -> Result:
        self.invocations.append(invocation)
        return self.result


@pytest.fixture
def backend() -> RecordingBackend:
    return RecordingBackend()


@pytest.fixture
def session() -> Session:
    return Session()


@pytest.fixture
def service(backend: RecordingBackend, session: Session) -> OperationService:
    return OperationService(backend, session=session, builder=CommandBuilder("aws"))


@pytest.fixture
def make_service() -> Any:
    """Factory for a service around a custom backend."""

    def _make(backend: Any, session: Session | None = None) -> OperationService:
        return OperationService(backend, session=session, builder=CommandBuilder("aws"))

    return _make


@pytest.fixture
def make_backend() -> type[RecordingBackend]:
    return RecordingBackend
