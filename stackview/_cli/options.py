"""Click options."""

from pathlib import Path

import click

from ..renderer import OUTPUT_FORMATS

config = click.option(
    "--config",
    envvar="STACKVIEW_CONFIG",
    metavar="<path>",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Path to a settings file. "
    "Defaults to the first stackview.yml found in the current directory or "
    "the home directory.",
)

debug = click.option(
    "--debug",
    count=True,
    envvar="DEBUG",
    help="Supply once to display Stackview debug logs. "
    "Supply twice to display all debug logs.",
)

directory = click.option(
    "--directory",
    metavar="<dir>",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    help="Directory containing the Terraform configuration. "
    'Defaults to the "terraform.directory" setting.',
)

no_color = click.option(
    "--no-color",
    default=False,
    envvar="STACKVIEW_NO_COLOR",
    is_flag=True,
    help="Disable color in Stackview's logs and tables.",
)

output = click.option(
    "--output",
    envvar="STACKVIEW_OUTPUT",
    type=click.Choice(OUTPUT_FORMATS, case_sensitive=False),
    help='Output format. Defaults to the "output" setting.',
)

profile = click.option(
    "--profile",
    metavar="<profile>",
    help="AWS profile used to read stacks.",
)

region = click.option(
    "--region",
    metavar="<region>",
    help="AWS region of the stack.",
)

stack_name = click.option(
    "--stack-name",
    metavar="<name>",
    required=True,
    help="Name or ID of the stack to describe.",
)

verbose = click.option(
    "--verbose",
    default=False,
    envvar="VERBOSE",
    is_flag=True,
    help="Display Stackview verbose logs and additional plan columns.",
)
