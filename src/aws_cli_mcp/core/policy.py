"""Read-only policy evaluation.

The decision is made on the (service, operation) identity alone.
Parameters are never inspected, so flags cannot turn a denied
operation into an allowed one or the other way round.
"""

from __future__ import annotations

import re

from aws_cli_mcp.core.models import PolicyDecision

DENIAL_REASON: str = "Only read-only operations are permitted."

READ_ONLY_PATTERNS: tuple[re.Pattern[str], ...] = (
    re.compile(r"^get"),
    re.compile(r"^list"),
    re.compile(r"^describe"),
    re.compile(r"^help"),
    re.compile(r"^ls$"),
)

# The identity check is always allowed even if the generic patterns change.
IDENTITY_CHECK: tuple[str, str] = ("sts", "get-caller-identity")


def is_identity_check(service: str, operation: str | None) -> bool:
    return (service, operation) == IDENTITY_CHECK


def evaluate(service: str, operation: str | None) -> PolicyDecision:
    """Decide whether ``service operation`` may reach AWS.

    An empty *operation* is treated as absent and is denied.
    """
    if is_identity_check(service, operation):
        return PolicyDecision.allow()
    if operation and any(pattern.match(operation) for pattern in READ_ONLY_PATTERNS):
        return PolicyDecision.allow()
    return PolicyDecision.deny(DENIAL_REASON)
