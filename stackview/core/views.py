"""Build the tabular views of a stack snapshot or a plan."""

from __future__ import annotations

import json
from types import MappingProxyType
from typing import TYPE_CHECKING, Any, Mapping, NamedTuple, Sequence

from pydantic import BaseModel, ConfigDict, field_validator, model_validator

from ..utils import JsonEncoder

if TYPE_CHECKING:
    from .models import PlanDocument, StackSnapshot

ACTION_DELETE = "delete"


class StyledValue(NamedTuple):
    """Cell text carrying a presentation hint.

    Renderers may honor or drop the hint; it is never part of the value.

    """

    text: str
    bold: bool = False

    def __str__(self) -> str:
        """Return the plain text of the cell."""
        return self.text


class View(BaseModel):
    """Titled table of rows keyed by column name."""

    model_config = ConfigDict(frozen=True)

    title: str
    columns: tuple[str, ...]
    rows: tuple[Mapping[str, Any], ...] = ()
    sort_key: str | None = None
    separate: bool = True

    @field_validator("rows")
    @classmethod
    def _freeze_rows(cls, v: tuple[Mapping[str, Any], ...]) -> tuple[Mapping[str, Any], ...]:
        """Rows are read-only once the view is built."""
        return tuple(MappingProxyType(dict(row)) for row in v)

    @model_validator(mode="after")
    def _validate_sort_key(self) -> View:
        if self.sort_key is not None and self.sort_key not in self.columns:
            raise ValueError(f"sort key {self.sort_key} is not a column of {self.title}")
        return self

    def sorted_rows(self) -> list[Mapping[str, Any]]:
        """Rows ordered by the sort key; equal keys keep their original order."""
        if self.sort_key is None:
            return list(self.rows)
        key = self.sort_key
        return sorted(self.rows, key=lambda row: str(row.get(key, "")))


def format_cell(value: Any) -> str:
    """Convert a value to the text of a cell.

    Absent values become an empty string, never a null marker.

    """
    if value is None:
        return ""
    if isinstance(value, bool):
        return str(value).lower()
    if isinstance(value, str):
        return value
    if isinstance(value, (Mapping, Sequence)):
        return json.dumps(value, cls=JsonEncoder)
    return str(value)


def _name_value_rows(items: Mapping[str, Any], value_column: str) -> tuple[dict[str, Any], ...]:
    return tuple(
        {"Name": name, value_column: format_cell(value)} for name, value in items.items()
    )


def build_stack_views(snapshot: StackSnapshot) -> list[View]:
    """Build the views describing a stack.

    Summary, parameters and resources are always present. Rules, conditions
    and outputs are only included when the stack has any.

    """
    template = snapshot.template
    views = [
        View(
            title=f"Stack {snapshot.name}",
            columns=("Name", "Value"),
            rows=(
                {"Name": "StackName", "Value": snapshot.name},
                {"Name": "Account", "Value": snapshot.account},
                {"Name": "Region", "Value": snapshot.region},
                {"Name": "Description", "Value": format_cell(template.description)},
                {
                    "Name": "AWSTemplateFormatVersion",
                    "Value": format_cell(template.format_version),
                },
            ),
        ),
        View(
            title="Parameters",
            columns=("Name", "Actual value", "Resolved value"),
            rows=tuple(
                {
                    "Name": param.name,
                    "Actual value": param.actual_value,
                    "Resolved value": format_cell(param.resolved_value),
                }
                for param in snapshot.parameters
            ),
        ),
    ]
    if template.rules:
        views.append(
            View(
                title="Rules",
                columns=("Name", "Value"),
                rows=_name_value_rows(template.rules, "Value"),
            )
        )
    if template.conditions:
        views.append(
            View(
                title="Conditions",
                columns=("Name", "Active"),
                rows=_name_value_rows(template.conditions, "Active"),
                sort_key="Name",
            )
        )
    views.append(
        View(
            title="Resources",
            columns=("Name", "Type", "PhysicalId"),
            rows=tuple(
                {
                    "Name": resource.logical_id,
                    "Type": resource.type,
                    "PhysicalId": format_cell(resource.physical_id),
                }
                for resource in snapshot.resources
            ),
            sort_key="Type",
        )
    )
    if snapshot.outputs:
        views.append(
            View(
                title="Outputs",
                columns=("Name", "Description", "Value", "Export"),
                rows=tuple(
                    {
                        "Name": output.name,
                        "Description": format_cell(output.description),
                        "Value": output.value,
                        "Export": format_cell(output.export_name),
                    }
                    for output in snapshot.outputs
                ),
                sort_key="Name",
            )
        )
    return views


def format_actions(actions: Sequence[str]) -> StyledValue:
    """Join plan actions, marking the cell bold when anything is deleted."""
    return StyledValue(", ".join(actions), bold=ACTION_DELETE in actions)


def build_plan_view(plan: PlanDocument, verbose: bool = False) -> View:
    """Build the change summary of a plan.

    Entries that only contain ``no-op`` are left out.

    """
    columns = ["Action", "Name in Terraform", "Type", "Resource Name"]
    if verbose:
        columns.extend(["ProviderName", "Mode"])
    rows: list[dict[str, Any]] = []
    for change in plan.resource_changes:
        if not change.interesting:
            continue
        row: dict[str, Any] = {
            "Action": format_actions(change.actions),
            "Name in Terraform": change.name_in_plan,
            "Type": change.type,
            "Resource Name": change.display_name,
        }
        if verbose:
            row["ProviderName"] = change.provider_name
            row["Mode"] = change.mode
        rows.append(row)
    return View(
        title="Terraform plan summary",
        columns=tuple(columns),
        rows=tuple(rows),
        sort_key="Type",
    )
