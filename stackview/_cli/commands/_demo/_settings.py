"""Show the effective settings."""

from __future__ import annotations

import logging
from typing import Any

import click
from pydantic import ValidationError

from ....exceptions import StackviewError
from ... import options

LOGGER = logging.getLogger(__name__.replace("._", "."))

INTRO = """Settings can be provided in a settings file and overridden with flags.
Stackview looks for stackview.yml (or stackview.yaml, .stackview.yml,
.stackview.yaml) in the current directory, then in your home directory.
Use --config to provide the path to a different file.

Your current settings look like this in a settings file:
"""


@click.command("settings", short_help="show settings")
@options.config
@options.debug
@options.no_color
@options.output
@options.profile
@options.region
@options.verbose
@click.pass_context
def settings(ctx: click.Context, **_: Any) -> None:
    """Show the effective settings as they would appear in a settings file."""
    try:
        config = ctx.obj.config
    except ValidationError as err:
        LOGGER.error(err, exc_info=ctx.obj.debug)
        ctx.exit(1)
    except StackviewError as err:
        LOGGER.error(err.message, exc_info=ctx.obj.debug)
        ctx.exit(1)
    if config.path:
        LOGGER.info("settings loaded from %s", config.path)
    click.echo(INTRO)
    click.echo(config.dump(), nl=False)
