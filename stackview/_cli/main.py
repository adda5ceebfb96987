"""Stackview CLI entrypoint."""

from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import Any

import click

from .. import __version__
from . import commands, options
from .logs import setup_logging
from .utils import CliContext

LOGGER = logging.getLogger("stackview.cli")

CLICK_CONTEXT_SETTINGS = dict(help_option_names=["-h", "--help"], max_content_width=999)


class _CliGroup(click.Group):
    """Extends the use of click.Group.

    This should only be used for the main application group.

    """

    def invoke(self, ctx: click.Context) -> Any:
        """Replace invoke command to pass along args."""
        ctx.meta["global.options"] = self.__parse_global_options(ctx)
        return super().invoke(ctx)

    @staticmethod
    def __parse_global_options(ctx: click.Context) -> dict[str, Any]:
        """Parse global options.

        These options are passed to subcommands but, should be parsed by the
        main application group. The value of these options are used for global
        configuration such as logging or context object setup. Values provided
        before the subcommand are used as defaults.

        """
        parser = argparse.ArgumentParser(add_help=False, allow_abbrev=False)
        parser.add_argument("--config", type=Path)
        parser.add_argument("--debug", action="count")
        parser.add_argument("--no-color", action="store_true")
        parser.add_argument("--output", type=str.lower)
        parser.add_argument("--profile")
        parser.add_argument("--region")
        parser.add_argument("--verbose", action="store_true")
        parser.set_defaults(**ctx.params)
        args, _ = parser.parse_known_args(list(ctx.args))
        return vars(args)


@click.group(context_settings=CLICK_CONTEXT_SETTINGS, cls=_CliGroup)
@click.version_option(__version__, message="%(version)s")
@options.config
@options.debug
@options.no_color
@options.output
@options.profile
@options.region
@options.verbose
@click.pass_context
def cli(ctx: click.Context, **_: Any) -> None:
    """Stackview CLI.

    Summarize deployed CloudFormation stacks and Terraform plans as tables.

    """
    opts = ctx.meta["global.options"]
    setup_logging(
        debug=opts["debug"] or 0, no_color=opts["no_color"], verbose=opts["verbose"]
    )
    ctx.obj = CliContext(**opts)


# register all the other commands from the importable modules defined
# in commands.
for cmd in commands.__all__:
    cli.add_command(getattr(commands, cmd))
