"""Stackview settings file."""

from __future__ import annotations

import logging
from datetime import datetime
from pathlib import Path
from typing import TYPE_CHECKING, Any, cast
from zoneinfo import ZoneInfo

import yaml
from pydantic import BaseModel, ValidationError

from ..exceptions import ConfigNotFound, UnknownConfigKey
from .models import StackviewConfigDefinitionModel

if TYPE_CHECKING:
    from .._logging import StackviewLogger

LOGGER = cast("StackviewLogger", logging.getLogger(__name__))


class StackviewConfig:
    """Python representation of a Stackview settings file."""

    ACCEPTED_NAMES = [
        "stackview.yml",
        "stackview.yaml",
        ".stackview.yml",
        ".stackview.yaml",
    ]
    """Accepted file names, in order of preference."""

    data: StackviewConfigDefinitionModel
    path: Path | None

    def __init__(
        self, data: StackviewConfigDefinitionModel, *, path: Path | None = None
    ) -> None:
        """Instantiate class.

        Args:
            data: The data model of the settings file.
            path: Path to the settings file, if one was used.

        """
        self.data = data
        self.path = path

    def get(self, key: str) -> Any:
        """Get the value of a setting using its dotted name (e.g. ``table.style``).

        Raises:
            UnknownConfigKey: The setting does not exist.

        """
        value: Any = self.data
        for part in key.split("."):
            if not isinstance(value, BaseModel):
                raise UnknownConfigKey(key)
            value = getattr(value, self._field_name(value, part, key))
        return value

    def set(self, key: str, value: Any) -> None:
        """Override the value of a setting using its dotted name.

        Raises:
            UnknownConfigKey: The setting does not exist.

        """
        parent, _, name = key.rpartition(".")
        model = self.get(parent) if parent else self.data
        if not isinstance(model, BaseModel):
            raise UnknownConfigKey(key)
        setattr(model, self._field_name(model, name, key), value)

    def dump(self) -> str:
        """Dump the effective settings as YAML."""
        return yaml.safe_dump(
            self.data.model_dump(by_alias=True, mode="json"), default_flow_style=False
        )

    def now(self) -> datetime:
        """Current time in the configured timezone."""
        if self.data.timezone.lower() == "local":
            return datetime.now().astimezone()
        return datetime.now(ZoneInfo(self.data.timezone))

    @staticmethod
    def _field_name(model: BaseModel, name: str, key: str) -> str:
        for field_name, field in type(model).model_fields.items():
            if name in (field_name, field.alias):
                return field_name
        raise UnknownConfigKey(key)

    @classmethod
    def find_config_file(cls, path: Path | None = None) -> Path | None:
        """Find a settings file in the provided path, then the home directory.

        Args:
            path: The path to search first. Defaults to the current working directory.

        """
        for directory in (path or Path.cwd(), Path.home()):
            for name in cls.ACCEPTED_NAMES:
                candidate = directory / name
                if candidate.is_file():
                    return candidate
        return None

    @classmethod
    def parse_file(
        cls, *, path: Path | None = None, file_path: Path | None = None
    ) -> StackviewConfig:
        """Parse a YAML settings file.

        When no file is provided or found, the defaults are used.

        Args:
            path: The path to search for a settings file.
            file_path: Exact path to a file to parse.

        Raises:
            ConfigNotFound: Provided settings file was not found.
            UnknownConfigKey: The file contains a setting that does not exist.

        """
        if file_path:
            if not file_path.is_file():
                raise ConfigNotFound(path=file_path)
            return cls.parse_obj(
                yaml.safe_load(file_path.read_text(encoding="utf-8")) or {},
                path=file_path,
            )
        found = cls.find_config_file(path)
        if found:
            return cls.parse_file(file_path=found)
        LOGGER.debug("no settings file found; using defaults")
        return cls.parse_obj({})

    @classmethod
    def parse_obj(cls, obj: Any, *, path: Path | None = None) -> StackviewConfig:
        """Parse a python object.

        Args:
            obj: A python object to parse as a settings file.
            path: The path to the file that was parsed into the object.

        Raises:
            UnknownConfigKey: The object contains a setting that does not exist.

        """
        try:
            data = StackviewConfigDefinitionModel.model_validate(obj)
        except ValidationError as err:
            for error in err.errors():
                if error["type"] == "extra_forbidden":
                    raise UnknownConfigKey(
                        ".".join(str(i) for i in error["loc"])
                    ) from err
            raise
        if path:
            LOGGER.debug("loaded settings from %s", path)
        return cls(data, path=path)
