"""``stackview describe`` command group."""

from typing import Any

import click

from ... import options
from ._stack import stack

__all__ = ["stack"]

COMMANDS = [stack]


@click.group("describe", short_help="describe resources (stack)")
@options.debug
@options.no_color
@options.verbose
def describe(**_: Any) -> None:
    """Describe deployed infrastructure."""


for cmd in COMMANDS:  # register commands
    describe.add_command(cmd)
