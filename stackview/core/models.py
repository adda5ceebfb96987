"""Stack and plan data models.

Every model is frozen: instances are built once per invocation from the
responses of the control plane or the planner and are not changed
afterwards.

"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator


class StackviewModel(BaseModel):
    """Base class for immutable Stackview data models."""

    model_config = ConfigDict(
        extra="ignore",
        frozen=True,
        populate_by_name=True,
    )


class Parameter(StackviewModel):
    """Stack parameter as reported by the control plane."""

    name: str
    actual_value: str = ""
    resolved_value: str | None = None
    """Value the control plane resolved an indirection (e.g. SSM) to."""

    @property
    def effective_value(self) -> str:
        """Value used when evaluating template conditions."""
        if self.resolved_value is not None:
            return self.resolved_value
        return self.actual_value


class Output(StackviewModel):
    """Stack output."""

    name: str
    description: str | None = None
    value: str = ""
    export_name: str | None = None


class ResourceInstance(StackviewModel):
    """Resource the control plane attributes to a stack."""

    logical_id: str
    type: str
    physical_id: str | None = None


class TemplateDocument(StackviewModel):
    """The parts of a parsed template that are reported on."""

    description: str | None = None
    format_version: str | None = None
    rules: dict[str, Any] = {}
    conditions: dict[str, Any] = {}
    """Condition name to ``bool`` or, when it can't be resolved, the raw expression."""


class StackSnapshot(StackviewModel):
    """Best-effort join of everything known about a deployed stack.

    The resource list and the template are fetched with separate calls and
    are not guaranteed to describe the same point in time.

    """

    name: str
    region: str = ""
    account_id: str = ""
    account_alias: str = ""
    parameters: tuple[Parameter, ...] = ()
    outputs: tuple[Output, ...] = ()
    template: TemplateDocument = TemplateDocument()
    resources: tuple[ResourceInstance, ...] = ()

    @property
    def account(self) -> str:
        """Account for display as ``alias (id)``."""
        if self.account_alias and self.account_id:
            return f"{self.account_alias} ({self.account_id})"
        return self.account_alias or self.account_id

    def parameter_overrides(self) -> dict[str, str]:
        """Map of parameter name to the value used to parse the template."""
        return {param.name: param.effective_value for param in self.parameters}


class ChangeEntry(StackviewModel):
    """A single entry of ``resource_changes`` in a plan."""

    type: str
    name_in_plan: str = Field(alias="address")
    display_name: str = Field(default="", alias="name")
    provider_name: str = ""
    mode: str = ""
    actions: tuple[str, ...] = ()

    @model_validator(mode="before")
    @classmethod
    def _lift_actions(cls, data: Any) -> Any:
        """Pull ``change.actions`` up to the top level."""
        if isinstance(data, dict) and "actions" not in data:
            change = data.get("change")
            if isinstance(change, dict):
                return {**data, "actions": change.get("actions") or []}
        return data

    @property
    def interesting(self) -> bool:
        """Whether the entry does anything other than ``no-op``."""
        return any(action != "no-op" for action in self.actions)


class PlanDocument(StackviewModel):
    """Decoded output of ``show --json`` for a plan artifact."""

    resource_changes: tuple[ChangeEntry, ...] = ()

    @model_validator(mode="before")
    @classmethod
    def _convert_null_changes(cls, data: Any) -> Any:
        """A plan without changes may carry ``"resource_changes": null``."""
        if isinstance(data, dict) and data.get("resource_changes") is None:
            return {**data, "resource_changes": []}
        return data
