"""Test ``stackview demo``."""

from __future__ import annotations

from typing import TYPE_CHECKING

import yaml

from stackview._cli.commands._demo._tables import DEMO_VIEW
from stackview._cli.main import cli
from stackview.renderer import TABLE_STYLES

if TYPE_CHECKING:
    from pathlib import Path

    from click.testing import CliRunner


def test_settings(cd_tmp_path: Path, cli_runner: CliRunner) -> None:
    """Test demo settings."""
    (cd_tmp_path / "stackview.yml").write_text("table:\n  style: Rounded\n")
    result = cli_runner.invoke(cli, ["demo", "settings", "--profile", "sandbox"])
    assert result.exit_code == 0, result.output
    intro, dumped = result.stdout.split("settings file:\n", 1)
    assert "stackview.yml" in intro
    settings = yaml.safe_load(dumped)
    assert settings["profile"] == "sandbox"
    assert settings["table"] == {"max-column-width": 50, "style": "Rounded"}


def test_settings_invalid(cd_tmp_path: Path, cli_runner: CliRunner) -> None:
    """Test demo settings with an invalid settings file."""
    (cd_tmp_path / "stackview.yml").write_text("output: yaml\n")
    result = cli_runner.invoke(cli, ["demo", "settings"])
    assert result.exit_code == 1
    assert result.stdout == ""


def test_tables(cd_tmp_path: Path, cli_runner: CliRunner) -> None:
    """Every table style is shown."""
    result = cli_runner.invoke(cli, ["demo", "tables"])
    assert result.exit_code == 0, result.output
    for style in TABLE_STYLES:
        assert f"Showing style: {style}\n" in result.stdout
    assert DEMO_VIEW.title in result.stdout
    assert "stackview-demo-bucket" in result.stdout
