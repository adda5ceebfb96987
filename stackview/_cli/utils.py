"""CLI utils."""

from __future__ import annotations

import logging
import signal
from contextlib import contextmanager
from functools import cached_property
from pathlib import Path
from typing import TYPE_CHECKING, Any, Iterator, TextIO

from ..config import StackviewConfig
from ..providers.aws import StackClient, get_session
from ..providers.terraform import PlanRunner
from ..renderer import ViewRenderer

if TYPE_CHECKING:
    from types import FrameType

    import boto3

LOGGER = logging.getLogger(__name__)

SIGNAL_NAMES = {
    signal.SIGINT: "SIGINT",
    signal.SIGTERM: "SIGTERM",
}


class CliContext:
    """CLI context object."""

    def __init__(
        self,
        *,
        config: Path | None = None,
        debug: int = 0,
        no_color: bool = False,
        output: str | None = None,
        profile: str | None = None,
        region: str | None = None,
        verbose: bool = False,
        **_: Any,
    ) -> None:
        """Instantiate class.

        Args:
            config: Explicit path to a settings file.
            debug: Debug level.
            no_color: Whether color is disabled.
            output: Output format overriding the settings file.
            profile: AWS profile overriding the settings file.
            region: AWS region overriding the settings file.
            verbose: Whether to display verbose logs and extra columns.

        """
        self.config_path = config
        self.debug = debug
        self.no_color = no_color
        self.output = output
        self.profile = profile
        self.region = region
        self.root_dir = Path.cwd()
        self.verbose = verbose

    @cached_property
    def config(self) -> StackviewConfig:
        """Effective settings: the settings file with CLI overrides applied."""
        config = StackviewConfig.parse_file(path=self.root_dir, file_path=self.config_path)
        for key in ("output", "profile", "region"):
            value = getattr(self, key)
            if value:
                LOGGER.debug("%s overridden from the command line: %s", key, value)
                config.set(key, value)
        if self.verbose:
            config.set("verbose", True)
        return config

    @cached_property
    def session(self) -> boto3.Session:
        """boto3 session for the configured profile and region."""
        return get_session(
            region=self.config.get("region"), profile=self.config.get("profile")
        )

    def get_stack_client(self) -> StackClient:
        """Create a CloudFormation stack client."""
        return StackClient(self.session, region=self.config.get("region"))

    def get_plan_runner(self, directory: Path | None = None) -> PlanRunner:
        """Create a plan runner.

        Args:
            directory: Directory containing the Terraform configuration.
                Defaults to the ``terraform.directory`` setting.

        """
        return PlanRunner(
            directory or self.config.get("terraform.directory"),
            binary=self.config.get("terraform.binary"),
            no_color=self.no_color,
        )

    def get_renderer(
        self, *, output: str | None = None, stream: TextIO | None = None
    ) -> ViewRenderer:
        """Create a renderer using the table settings.

        Args:
            output: Output format to use instead of the ``output`` setting.
            stream: Stream to write to. Defaults to standard output.

        """
        return ViewRenderer(
            colorize=False if self.no_color else None,
            max_column_width=self.config.get("table.max-column-width"),
            output=output or self.config.get("output"),
            stream=stream,
            style=self.config.get("table.style"),
        )


@contextmanager
def exit_on_sigterm() -> Iterator[None]:
    """Turn SIGTERM into :class:`SystemExit` for the duration of the block.

    Context managers and ``finally`` clauses inside the block run before the
    process exits.

    """

    def _handler(signum: int, _frame: FrameType | None) -> None:
        LOGGER.info("signal %s received, quitting", SIGNAL_NAMES.get(signum, signum))
        raise SystemExit(128 + signum)

    previous = signal.signal(signal.SIGTERM, _handler)
    try:
        yield
    finally:
        signal.signal(signal.SIGTERM, previous)
