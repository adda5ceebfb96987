"""Drive the Terraform binary to produce a plan document."""

from __future__ import annotations

import json
import logging
import os
import subprocess
import tempfile
from contextlib import contextmanager
from datetime import datetime
from pathlib import Path
from string import Template
from typing import TYPE_CHECKING, Iterator, cast

from pydantic import ValidationError

from .._logging import PrefixAdaptor
from ..core.models import PlanDocument
from ..exceptions import (
    PlanDecodeError,
    PlanDirectoryNotFound,
    PlannerFailed,
    PlannerNotFound,
    PlannerStartError,
)

if TYPE_CHECKING:
    from .._logging import StackviewLogger

LOGGER = cast("StackviewLogger", logging.getLogger(__name__))

TIMESTAMP_FORMAT = "%Y-%m-%dT%H-%M-%S"


def format_artifact_name(name_format: str, now: datetime | None = None) -> str:
    """Expand the placeholders of a plan artifact name.

    ``$TIMESTAMP`` is the only placeholder; unknown placeholders are left as is.
    The result never contains a path separator and is never ``.`` or ``..``.

    """
    now = now or datetime.now().astimezone()
    name = Template(name_format).safe_substitute(TIMESTAMP=now.strftime(TIMESTAMP_FORMAT))
    for sep in (os.sep, os.altsep):
        if sep:
            name = name.replace(sep, "_")
    if not name.strip("."):
        return "plan"
    return name


@contextmanager
def plan_artifact(name_format: str, now: datetime | None = None) -> Iterator[Path]:
    """Yield the path of a plan artifact inside a private temporary directory.

    The directory and everything in it are removed on exit, whether or not an
    exception was raised.

    """
    with tempfile.TemporaryDirectory(prefix="stackview-") as tmp_dir:
        path = Path(tmp_dir) / format_artifact_name(name_format, now)
        LOGGER.debug("plan artifact: %s", path)
        yield path
    LOGGER.debug("removed temporary directory %s", tmp_dir)


class PlanRunner:
    """Run ``plan`` and ``show --json`` with a Terraform binary."""

    def __init__(
        self, workdir: Path, *, binary: str = "terraform", no_color: bool = False
    ) -> None:
        """Instantiate class.

        Args:
            workdir: Directory containing the Terraform configuration.
            binary: Name or path of the Terraform binary.
            no_color: Disable colorized output of the binary.

        """
        self.binary = binary
        self.no_color = no_color
        self.workdir = workdir
        self.logger = PrefixAdaptor(workdir.resolve().name or str(workdir), LOGGER)

    def gen_command(self, command: str, args_list: list[str] | None = None) -> list[str]:
        """Generate Terraform command."""
        cmd = [self.binary, command, *(args_list or [])]
        if self.no_color:
            cmd.append("-no-color")
        return cmd

    def run(self, cmd: list[str]) -> str:
        """Run a command in the working directory, returning its stdout.

        Standard input is closed so the binary can never wait on a prompt.

        Raises:
            PlanDirectoryNotFound: The working directory is not a directory.
            PlannerFailed: The command exited with a non-zero status.
            PlannerNotFound: The binary could not be found.
            PlannerStartError: The binary could not be executed.

        """
        if not self.workdir.is_dir():
            raise PlanDirectoryNotFound(self.workdir)
        self.logger.debug("running command: %s", " ".join(cmd))
        try:
            proc = subprocess.run(
                cmd,
                check=False,
                cwd=self.workdir,
                stderr=subprocess.PIPE,
                stdin=subprocess.DEVNULL,
                stdout=subprocess.PIPE,
                text=True,
            )
        except FileNotFoundError as err:
            raise PlannerNotFound(self.binary) from err
        except OSError as err:
            raise PlannerStartError(
                str(err.filename or self.binary), err.strerror or str(err)
            ) from err
        if proc.returncode != 0:
            raise PlannerFailed(cmd, proc.returncode, proc.stderr)
        return proc.stdout

    def plan(self, out_path: Path) -> None:
        """Write a plan of the working directory to ``out_path``.

        Variables without a value fail the plan instead of prompting.

        Raises:
            PlanDirectoryNotFound: The working directory is not a directory.
            PlannerFailed: The binary exited with a non-zero status.
            PlannerNotFound: The binary could not be found.
            PlannerStartError: The binary could not be executed.

        """
        self.logger.verbose("planning...")
        stdout = self.run(self.gen_command("plan", ["-input=false", f"--out={out_path}"]))
        for line in stdout.splitlines():
            self.logger.debug(line)

    def show(self, plan_path: Path) -> PlanDocument:
        """Decode the JSON representation of a plan artifact.

        Raises:
            PlanDecodeError: The output is not a plan document.
            PlannerFailed: The binary exited with a non-zero status.
            PlannerNotFound: The binary could not be executed.

        """
        stdout = self.run([self.binary, "show", "--json", str(plan_path)])
        try:
            data = json.loads(stdout)
        except json.JSONDecodeError as err:
            raise PlanDecodeError(str(err)) from err
        if not isinstance(data, dict):
            raise PlanDecodeError(f"expected an object, got {type(data).__name__}")
        try:
            plan = PlanDocument.model_validate(data)
        except ValidationError as err:
            raise PlanDecodeError(str(err)) from err
        self.logger.debug("plan has %s resource change(s)", len(plan.resource_changes))
        return plan

    def summarize(self, name_format: str, now: datetime | None = None) -> PlanDocument:
        """Plan to a temporary artifact and decode it.

        The artifact is removed before returning or raising.

        """
        with plan_artifact(name_format, now) as path:
            self.plan(path)
            return self.show(path)
