"""Settings file models."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated, Any, Literal
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..renderer import resolve_table_style

OutputFormatTypeDef = Literal["csv", "html", "json", "markdown", "table"]


class ConfigProperty(BaseModel):
    """Base class for Stackview configuration properties."""

    model_config = ConfigDict(
        extra="forbid",
        populate_by_name=True,
        validate_default=True,
        validate_assignment=True,
    )


class ChangesetSettingsModel(ConfigProperty):
    """Model for the ``changeset`` settings."""

    model_config = ConfigDict(title="Changeset settings")

    name_format: Annotated[str, Field(alias="name-format", min_length=1)] = "stackview-$TIMESTAMP"
    """Template for plan artifact names. ``$TIMESTAMP`` is replaced with the current time."""


class TableSettingsModel(ConfigProperty):
    """Model for the ``table`` settings."""

    model_config = ConfigDict(title="Table settings")

    max_column_width: Annotated[int, Field(alias="max-column-width", gt=0)] = 50
    style: str = "Default"

    @field_validator("style")
    @classmethod
    def _validate_style(cls, v: str) -> str:
        """Ensure the style is part of the renderer catalog."""
        resolve_table_style(v)
        return v


class TerraformSettingsModel(ConfigProperty):
    """Model for the ``terraform`` settings."""

    model_config = ConfigDict(title="Terraform settings")

    binary: str = "terraform"
    directory: Path = Path(".")


class StackviewConfigDefinitionModel(ConfigProperty):
    """Model for a Stackview settings file."""

    model_config = ConfigDict(title="Stackview settings")

    changeset: ChangesetSettingsModel = Field(default_factory=ChangesetSettingsModel)
    output: OutputFormatTypeDef = "table"
    profile: str | None = None
    region: str | None = None
    table: TableSettingsModel = Field(default_factory=TableSettingsModel)
    terraform: TerraformSettingsModel = Field(default_factory=TerraformSettingsModel)
    timezone: str = "Local"
    verbose: bool = False

    @field_validator("output", mode="before")
    @classmethod
    def _lower_output(cls, v: Any) -> Any:
        """Output formats are case insensitive."""
        return v.lower() if isinstance(v, str) else v

    @field_validator("timezone")
    @classmethod
    def _validate_timezone(cls, v: str) -> str:
        """Ensure the timezone is known, unless it is ``Local``."""
        if v.lower() != "local":
            try:
                ZoneInfo(v)
            except (ValueError, ZoneInfoNotFoundError) as err:
                raise ValueError(f"unknown timezone {v}") from err
        return v

    @field_validator("changeset", "table", "terraform", mode="before")
    @classmethod
    def _convert_null_section(cls, v: Any) -> Any:
        """An empty section in YAML is loaded as ``None``."""
        return {} if v is None else v
