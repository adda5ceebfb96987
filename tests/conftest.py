"""Pytest configuration, fixtures, and plugins."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import TYPE_CHECKING

import pytest

from .factories import cli_runner_factory

if TYPE_CHECKING:
    from collections.abc import Generator, Iterator

    from _pytest.config import Config
    from _pytest.fixtures import SubRequest
    from click.testing import CliRunner
    from pytest_mock import MockerFixture

LOGGER = logging.getLogger(__name__)


def pytest_configure(config: Config) -> None:
    """Configure pytest."""
    config.addinivalue_line(  # cspell:ignore addinivalue
        "markers",
        "cli_runner(charset:='utf-8', env=None, echo_stdin=False): "
        "Pass kwargs to `click.testing.CliRunner` initialization.",
    )


@pytest.fixture(scope="session", autouse=True)
def aws_credentials() -> Iterator[None]:
    """Ensure the AWS SDK finds some (bogus) credentials in the environment.

    This keeps it from trying to use other providers.

    """
    overrides = {
        "AWS_ACCESS_KEY_ID": "testing",
        "AWS_SECRET_ACCESS_KEY": "testing",
        "AWS_DEFAULT_REGION": "us-east-1",
    }
    saved_env: dict[str, str | None] = {}
    for key, value in overrides.items():
        LOGGER.info("Overriding env var: %s=%s", key, value)
        saved_env[key] = os.environ.get(key, None)
        os.environ[key] = value

    yield

    for key, value in saved_env.items():
        LOGGER.info("Restoring saved env var: %s=%s", key, value)
        if value is None:
            os.environ.pop(key, None)  # handle key missing
        else:
            os.environ[key] = value

    saved_env.clear()


@pytest.fixture(scope="session", autouse=True)
def sanitize_environment() -> None:
    """Remove variables from the environment that could interfere with tests."""
    env_vars = [
        "AWS_PROFILE",
        "DEBUG",
        "STACKVIEW_CONFIG",
        "STACKVIEW_LOG_FIELD_STYLES",
        "STACKVIEW_LOG_FORMAT",
        "STACKVIEW_LOG_LEVEL_STYLES",
        "STACKVIEW_NO_COLOR",
        "STACKVIEW_OUTPUT",
        "VERBOSE",
    ]
    for var in env_vars:
        os.environ.pop(var, None)


@pytest.fixture()
def cli_runner(request: SubRequest) -> CliRunner:
    """Initialize instance of `click.testing.CliRunner`."""
    return cli_runner_factory(request)


@pytest.fixture()
def cd_tmp_path(tmp_path: Path, mocker: MockerFixture) -> Iterator[Path]:
    """Change directory to a temporary path.

    The home directory is also pointed at the temporary path so that settings
    files of the user running the tests are never found.

    Returns:
        Path: Temporary path object.

    """
    mocker.patch.object(Path, "home", return_value=tmp_path)
    prev_dir = Path.cwd()
    os.chdir(tmp_path)
    try:
        yield tmp_path
    finally:
        os.chdir(prev_dir)


@pytest.fixture()
def cli_runner_isolated(cli_runner: CliRunner) -> Generator[CliRunner, None, None]:
    """Initialize instance of `click.testing.CliRunner` with `isolate_filesystem()` called."""
    with cli_runner.isolated_filesystem():
        yield cli_runner
