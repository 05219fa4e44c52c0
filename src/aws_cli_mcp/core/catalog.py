"""Static catalog of known read-only operations.

Each entry maps a CLI-style ``(service, operation)`` pair onto the boto3
client and method that performs the same call.  The catalog is the
finite registry used by the typed-API backend and the source of
``describeService`` listings.  Pairs absent from it are unmapped for the
API backend; the CLI backend does not consult it.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class ApiHandler:
    """A boto3 ``client.method`` pair."""

    client: str
    method: str

    @property
    def backend_id(self) -> str:
        return f"{self.client}.{self.method}"

    @classmethod
    def from_backend_id(cls, backend_id: str) -> ApiHandler:
        client, _, method = backend_id.partition(".")
        return cls(client=client, method=method)


def _entries(
    service: str,
    operations: Iterable[str],
    *,
    client: str | None = None,
) -> dict[tuple[str, str], ApiHandler]:
    """Map CLI operation names to snake_case boto3 methods."""
    return {
        (service, op): ApiHandler(client or service, op.replace("-", "_"))
        for op in operations
    }


CATALOG: dict[tuple[str, str], ApiHandler] = {
    # ``aws s3 ls`` without a path lists buckets.
    ("s3", "ls"): ApiHandler("s3", "list_buckets"),
    **_entries(
        "s3api",
        (
            "list-buckets",
            "list-objects-v2",
            "get-bucket-location",
            "get-bucket-policy",
            "get-bucket-versioning",
            "get-bucket-encryption",
        ),
        client="s3",
    ),
    **_entries(
        "ec2",
        (
            "describe-instances",
            "describe-regions",
            "describe-vpcs",
            "describe-subnets",
            "describe-security-groups",
            "describe-volumes",
            "describe-images",
        ),
    ),
    **_entries("iam", ("list-users", "list-roles", "list-policies", "get-user")),
    **_entries("lambda", ("list-functions", "get-function")),
    **_entries("dynamodb", ("list-tables", "describe-table")),
    **_entries("rds", ("describe-db-instances", "describe-db-clusters")),
    **_entries("cloudformation", ("list-stacks", "describe-stacks")),
    **_entries("logs", ("describe-log-groups",)),
    **_entries("sts", ("get-caller-identity",)),
    **_entries("resourcegroupstaggingapi", ("get-resources",)),
}


def lookup(service: str, operation: str | None) -> ApiHandler | None:
    if not operation:
        return None
    return CATALOG.get((service, operation))


def supported_services() -> list[str]:
    return sorted({service for service, _ in CATALOG})


def operations_for(service: str) -> list[str]:
    """Return the catalog's operations for *service*, sorted."""
    return sorted(op for svc, op in CATALOG if svc == service)
