"""``stackview demo`` command group."""

from typing import Any

import click

from ... import options
from ._settings import settings
from ._tables import tables

__all__ = ["settings", "tables"]

COMMANDS = [settings, tables]


@click.group("demo", short_help="demo (settings|tables)")
@options.debug
@options.no_color
@options.verbose
def demo(**_: Any) -> None:
    """Show what Stackview output and settings look like."""


for cmd in COMMANDS:  # register commands
    demo.add_command(cmd)
