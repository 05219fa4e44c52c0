"""Tests for the command builder (core/command_builder.py).

Coverage:
* CLI form: ordering, boolean flags, region placement, quoting.
* API form: catalog lookup, payload naming, unmapped fallback.
* Determinism across repeated builds.
"""

from __future__ import annotations

import shlex

import pytest

from aws_cli_mcp.core.command_builder import CommandBuilder, to_api_name
from aws_cli_mcp.core.models import (
    ApiInvocation,
    BackendKind,
    ShellInvocation,
    UnmappedInvocation,
)
from aws_cli_mcp.exceptions import ValidationFaultError


@pytest.fixture
def builder() -> CommandBuilder:
    return CommandBuilder("aws")


# ---------------------------------------------------------------------------
# CLI form
# ---------------------------------------------------------------------------

class TestShellForm:
    def test_service_and_operation(self, builder: CommandBuilder) -> None:
        inv = builder.build("s3", "ls", {}, None, target=BackendKind.CLI)
        assert inv == ShellInvocation("aws s3 ls")

    def test_operation_optional(self, builder: CommandBuilder) -> None:
        inv = builder.build("s3", None, None, None, target=BackendKind.CLI)
        assert inv == ShellInvocation("aws s3")

    def test_string_parameters_in_insertion_order(self, builder: CommandBuilder) -> None:
        inv = builder.build(
            "s3api",
            "list-objects-v2",
            {"bucket": "my-bucket", "prefix": "logs/", "max-items": "10"},
            None,
            target=BackendKind.CLI,
        )
        assert inv.command_line == (
            "aws s3api list-objects-v2 --bucket my-bucket --prefix logs/ --max-items 10"
        )

    def test_true_renders_bare_flag(self, builder: CommandBuilder) -> None:
        inv = builder.build("s3", "ls", {"recursive": True}, None, target=BackendKind.CLI)
        assert inv.command_line == "aws s3 ls --recursive"

    def test_false_is_omitted(self, builder: CommandBuilder) -> None:
        inv = builder.build(
            "s3", "ls", {"recursive": False, "human-readable": True}, None,
            target=BackendKind.CLI,
        )
        assert inv.command_line == "aws s3 ls --human-readable"
        assert "false" not in inv.command_line.lower()

    def test_region_appended_last(self, builder: CommandBuilder) -> None:
        inv = builder.build(
            "ec2", "describe-instances", {"max-items": "5"}, "us-west-2",
            target=BackendKind.CLI,
        )
        assert inv.command_line == (
            "aws ec2 describe-instances --max-items 5 --region us-west-2"
        )

    def test_empty_region_omitted(self, builder: CommandBuilder) -> None:
        inv = builder.build("ec2", "describe-instances", {}, "", target=BackendKind.CLI)
        assert "--region" not in inv.command_line

    def test_custom_tool(self) -> None:
        inv = CommandBuilder("/opt/aws/bin/aws").build(
            "s3", "ls", {}, None, target=BackendKind.CLI,
        )
        assert inv.command_line == "/opt/aws/bin/aws s3 ls"

    def test_multi_value_option_splits_into_arguments(self, builder: CommandBuilder) -> None:
        inv = builder.build(
            "ec2", "describe-instances", {"instance-ids": "i-1 i-2"}, None,
            target=BackendKind.CLI,
        )
        assert inv.command_line == "aws ec2 describe-instances --instance-ids i-1 i-2"
        assert shlex.split(inv.command_line)[-3:] == ["--instance-ids", "i-1", "i-2"]

    def test_quoted_value_stays_one_argument(self, builder: CommandBuilder) -> None:
        inv = builder.build(
            "ec2", "describe-instances", {"query": "'Reservations[0] | length(@)'"}, None,
            target=BackendKind.CLI,
        )
        argv = shlex.split(inv.command_line)
        assert argv[-2:] == ["--query", "Reservations[0] | length(@)"]

    def test_shell_metacharacters_not_interpreted(self, builder: CommandBuilder) -> None:
        inv = builder.build(
            "s3", "ls", {"bucket": "'x; rm -rf /'"}, None, target=BackendKind.CLI,
        )
        assert shlex.split(inv.command_line) == ["aws", "s3", "ls", "--bucket", "x; rm -rf /"]

    def test_split_tokens_are_quoted(self, builder: CommandBuilder) -> None:
        inv = builder.build(
            "s3", "ls", {"bucket": "a;b $(id)"}, None, target=BackendKind.CLI,
        )
        assert inv.command_line == "aws s3 ls --bucket 'a;b' '$(id)'"

    def test_unbalanced_quote_rejected(self, builder: CommandBuilder) -> None:
        with pytest.raises(ValidationFaultError, match="must be"):
            builder.build(
                "s3", "ls", {"bucket": "'unterminated"}, None, target=BackendKind.CLI,
            )

    def test_deterministic(self, builder: CommandBuilder) -> None:
        params = {"a": "1", "b": True, "c": False, "d": "4"}
        first = builder.build("ec2", "describe-vpcs", params, "eu-west-1", target=BackendKind.CLI)
        second = builder.build(
            "ec2", "describe-vpcs", dict(params), "eu-west-1", target=BackendKind.CLI,
        )
        assert first == second


# ---------------------------------------------------------------------------
# API form
# ---------------------------------------------------------------------------

class TestApiForm:
    def test_mapped_pair(self, builder: CommandBuilder) -> None:
        inv = builder.build(
            "ec2", "describe-instances", {"max-results": "5"}, "us-east-1",
            target=BackendKind.API,
        )
        assert inv == ApiInvocation(
            backend_id="ec2.describe_instances",
            request_payload={"MaxResults": "5"},
            region="us-east-1",
        )

    def test_s3_ls_lists_buckets(self, builder: CommandBuilder) -> None:
        inv = builder.build("s3", "ls", {}, None, target=BackendKind.API)
        assert isinstance(inv, ApiInvocation)
        assert inv.backend_id == "s3.list_buckets"

    def test_s3api_uses_s3_client(self, builder: CommandBuilder) -> None:
        inv = builder.build(
            "s3api", "get-bucket-location", {"bucket": "b"}, None, target=BackendKind.API,
        )
        assert isinstance(inv, ApiInvocation)
        assert inv.backend_id == "s3.get_bucket_location"
        assert inv.request_payload == {"Bucket": "b"}

    def test_false_booleans_dropped(self, builder: CommandBuilder) -> None:
        inv = builder.build(
            "ec2", "describe-regions", {"all-regions": True, "dry-run": False}, None,
            target=BackendKind.API,
        )
        assert isinstance(inv, ApiInvocation)
        assert inv.request_payload == {"AllRegions": True}

    def test_unmapped_pair_is_explicit(self, builder: CommandBuilder) -> None:
        inv = builder.build("ec2", "describe-fleets", {}, None, target=BackendKind.API)
        assert inv == UnmappedInvocation(service="ec2", operation="describe-fleets")

    def test_unmapped_never_falls_back_to_shell(self, builder: CommandBuilder) -> None:
        inv = builder.build("kinesis", "list-streams", {}, None, target=BackendKind.API)
        assert not isinstance(inv, ShellInvocation)


class TestToApiName:
    @pytest.mark.parametrize(
        ("key", "expected"),
        [
            ("bucket", "Bucket"),
            ("instance-ids", "InstanceIds"),
            ("max_results", "MaxResults"),
            ("--prefix", "Prefix"),
            ("Bucket", "Bucket"),
        ],
    )
    def test_conversion(self, key: str, expected: str) -> None:
        assert to_api_name(key) == expected
