"""``stackview terraform`` command."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING, Any, cast

import click
from pydantic import ValidationError

from ...core.views import build_plan_view
from ...exceptions import StackviewError
from .. import options
from ..utils import exit_on_sigterm

if TYPE_CHECKING:
    from ..._logging import StackviewLogger

LOGGER = cast("StackviewLogger", logging.getLogger(__name__.replace("._", ".")))


@click.command("terraform", short_help="summarize a terraform plan")
@options.directory
@options.config
@options.debug
@options.no_color
@options.output
@options.profile
@options.region
@options.verbose
@click.pass_context
def terraform(ctx: click.Context, directory: Path | None, **_: Any) -> None:
    """Summarize the changes Terraform would make.

    \b
    Process
    -------
    1. Runs "terraform plan" writing the plan to a temporary directory.
        - the file name is built from the "changeset.name-format" setting
        - "$TIMESTAMP" is replaced with the current time
    2. Runs "terraform show --json" against the plan.
    3. Lists every resource with an action other than "no-op".
        - actions that include "delete" are shown in bold
        - "--verbose" adds the provider and mode of each resource

    The temporary directory is removed when done, even on failure.

    """  # noqa: D301
    debug = ctx.obj.debug
    try:
        config = ctx.obj.config
        renderer = ctx.obj.get_renderer()
        runner = ctx.obj.get_plan_runner(directory)
        with exit_on_sigterm():
            plan = runner.summarize(config.get("changeset.name-format"), config.now())
        renderer.append(build_plan_view(plan, verbose=config.get("verbose")))
        renderer.flush()
    except ValidationError as err:
        LOGGER.error(err, exc_info=debug)
        ctx.exit(1)
    except StackviewError as err:
        LOGGER.error(err.message, exc_info=debug)
        ctx.exit(1)
