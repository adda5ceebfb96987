"""Test stackview.core.views."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from stackview.core.models import (
    ChangeEntry,
    Output,
    Parameter,
    PlanDocument,
    ResourceInstance,
    StackSnapshot,
    TemplateDocument,
)
from stackview.core.views import (
    StyledValue,
    View,
    build_plan_view,
    build_stack_views,
    format_actions,
    format_cell,
)


def change(address: str, *actions: str) -> ChangeEntry:
    """Create a ChangeEntry."""
    resource_type, name = address.split(".", 1)
    return ChangeEntry(
        address=address,
        name=name,
        type=resource_type,
        provider_name="registry.terraform.io/hashicorp/aws",
        mode="managed",
        actions=actions,
    )


class TestView:
    """Test View."""

    def test_sort_key_not_a_column(self) -> None:
        """Test sort key that is not a column."""
        with pytest.raises(ValidationError, match="sort key Type is not a column"):
            View(title="Outputs", columns=("Name", "Value"), sort_key="Type")

    def test_rows_read_only(self) -> None:
        """Rows can't be changed once the view is built."""
        source = {"Name": "a", "Value": "1"}
        view = View(title="t", columns=("Name", "Value"), rows=(source,))
        with pytest.raises(TypeError):
            view.rows[0]["Value"] = "2"  # type: ignore
        source["Value"] = "2"
        assert view.rows[0]["Value"] == "1"

    def test_sorted_rows_stable(self) -> None:
        """Rows with equal keys keep their original order."""
        rows = (
            {"Name": "c", "Type": "B"},
            {"Name": "a", "Type": "A"},
            {"Name": "b", "Type": "B"},
            {"Name": "d", "Type": "A"},
        )
        view = View(title="t", columns=("Name", "Type"), rows=rows, sort_key="Type")
        assert [row["Name"] for row in view.sorted_rows()] == ["a", "d", "c", "b"]

    def test_sorted_rows_no_sort_key(self) -> None:
        """Rows keep their order without a sort key."""
        rows = ({"Name": "b"}, {"Name": "a"})
        assert View(title="t", columns=("Name",), rows=rows).sorted_rows() == list(rows)


@pytest.mark.parametrize(
    "value, expected",
    [
        (None, ""),
        (True, "true"),
        (False, "false"),
        ("text", "text"),
        (3, "3"),
        ({"Fn::Equals": ["a", "b"]}, '{"Fn::Equals": ["a", "b"]}'),
        (["a", "b"], '["a", "b"]'),
    ],
)
def test_format_cell(expected: str, value: object) -> None:
    """Test format_cell."""
    assert format_cell(value) == expected


@pytest.mark.parametrize(
    "actions, text, bold",
    [
        (("create",), "create", False),
        (("delete", "create"), "delete, create", True),
        (("create", "delete"), "create, delete", True),
        (("delete",), "delete", True),
        (("update",), "update", False),
    ],
)
def test_format_actions(actions: tuple[str, ...], bold: bool, text: str) -> None:
    """Test format_actions."""
    result = format_actions(actions)
    assert result == StyledValue(text, bold=bold)
    assert str(result) == text


class TestBuildStackViews:
    """Test build_stack_views."""

    def test_empty_stack(self) -> None:
        """Optional views are left out of a stack without them."""
        snapshot = StackSnapshot(
            name="empty-stack",
            region="us-east-1",
            account_id="123456789012",
            resources=(
                ResourceInstance(logical_id="First", type="Z::A", physical_id="z-a"),
                ResourceInstance(logical_id="Second", type="Y::B"),
            ),
        )
        views = build_stack_views(snapshot)
        assert [view.title for view in views] == [
            "Stack empty-stack",
            "Parameters",
            "Resources",
        ]
        assert all(view.separate for view in views)
        assert views[1].rows == ()
        assert [row["Type"] for row in views[2].sorted_rows()] == ["Y::B", "Z::A"]
        assert views[2].sorted_rows()[0]["PhysicalId"] == ""

    def test_summary(self) -> None:
        """The summary always has the same five rows."""
        snapshot = StackSnapshot(
            name="test-stack",
            region="eu-west-1",
            account_id="123456789012",
            account_alias="prod",
            template=TemplateDocument(description="Test stack", format_version="2010-09-09"),
        )
        summary = build_stack_views(snapshot)[0]
        assert summary.columns == ("Name", "Value")
        assert summary.sort_key is None
        assert list(summary.rows) == [
            {"Name": "StackName", "Value": "test-stack"},
            {"Name": "Account", "Value": "prod (123456789012)"},
            {"Name": "Region", "Value": "eu-west-1"},
            {"Name": "Description", "Value": "Test stack"},
            {"Name": "AWSTemplateFormatVersion", "Value": "2010-09-09"},
        ]

    def test_summary_missing_values(self) -> None:
        """Absent values are empty strings."""
        summary = build_stack_views(StackSnapshot(name="test-stack"))[0]
        assert [row["Value"] for row in summary.rows] == ["test-stack", "", "", "", ""]

    def test_parameters(self) -> None:
        """Parameters keep their order and only show resolved values when present."""
        snapshot = StackSnapshot(
            name="param-stack",
            parameters=(
                Parameter(name="k", actual_value="v"),
                Parameter(name="secret", actual_value="*****", resolved_value="actual-secret"),
            ),
        )
        parameters = build_stack_views(snapshot)[1]
        assert parameters.columns == ("Name", "Actual value", "Resolved value")
        assert parameters.sort_key is None
        assert parameters.sorted_rows() == [
            {"Name": "k", "Actual value": "v", "Resolved value": ""},
            {"Name": "secret", "Actual value": "*****", "Resolved value": "actual-secret"},
        ]

    def test_rules_conditions_outputs(self) -> None:
        """Optional views are included when the stack has them."""
        snapshot = StackSnapshot(
            name="full-stack",
            template=TemplateDocument(
                rules={"ProdOnly": {"Assertions": []}},
                conditions={
                    "beta": True,
                    "Alpha": False,
                    "gamma": {"Fn::Equals": [{"Fn::ImportValue": "x"}, "y"]},
                },
            ),
            outputs=(
                Output(name="Zone", value="z"),
                Output(
                    name="BucketArn",
                    description="ARN of the bucket",
                    value="arn:aws:s3:::bucket",
                    export_name="full-stack-bucket-arn",
                ),
            ),
        )
        views = build_stack_views(snapshot)
        assert [view.title for view in views] == [
            "Stack full-stack",
            "Parameters",
            "Rules",
            "Conditions",
            "Resources",
            "Outputs",
        ]
        rules, conditions, outputs = views[2], views[3], views[5]
        assert rules.sort_key is None
        assert list(rules.rows) == [{"Name": "ProdOnly", "Value": '{"Assertions": []}'}]
        assert conditions.sorted_rows() == [
            {"Name": "Alpha", "Active": "false"},
            {"Name": "beta", "Active": "true"},
            {"Name": "gamma", "Active": '{"Fn::Equals": [{"Fn::ImportValue": "x"}, "y"]}'},
        ]
        assert outputs.columns == ("Name", "Description", "Value", "Export")
        assert outputs.sorted_rows() == [
            {
                "Name": "BucketArn",
                "Description": "ARN of the bucket",
                "Value": "arn:aws:s3:::bucket",
                "Export": "full-stack-bucket-arn",
            },
            {"Name": "Zone", "Description": "", "Value": "z", "Export": ""},
        ]


class TestBuildPlanView:
    """Test build_plan_view."""

    @pytest.fixture()
    def plan(self) -> PlanDocument:
        """Plan with one change of each kind."""
        return PlanDocument(
            resource_changes=(
                change("aws_s3_bucket.a", "create"),
                change("aws_s3_bucket.b", "no-op"),
                change("aws_iam_role.r", "delete", "create"),
            )
        )

    def test_build(self, plan: PlanDocument) -> None:
        """Entries without changes are left out."""
        view = build_plan_view(plan)
        assert view.title == "Terraform plan summary"
        assert view.columns == ("Action", "Name in Terraform", "Type", "Resource Name")
        assert view.sort_key == "Type"
        assert view.sorted_rows() == [
            {
                "Action": StyledValue("delete, create", bold=True),
                "Name in Terraform": "aws_iam_role.r",
                "Type": "aws_iam_role",
                "Resource Name": "r",
            },
            {
                "Action": StyledValue("create"),
                "Name in Terraform": "aws_s3_bucket.a",
                "Type": "aws_s3_bucket",
                "Resource Name": "a",
            },
        ]

    def test_build_verbose(self, plan: PlanDocument) -> None:
        """Verbose adds the provider and mode columns."""
        view = build_plan_view(plan, verbose=True)
        assert view.columns == (
            "Action",
            "Name in Terraform",
            "Type",
            "Resource Name",
            "ProviderName",
            "Mode",
        )
        for row in view.rows:
            assert row["ProviderName"] == "registry.terraform.io/hashicorp/aws"
            assert row["Mode"] == "managed"

    def test_build_no_changes(self) -> None:
        """Test plan without changes."""
        assert build_plan_view(PlanDocument()).rows == ()
