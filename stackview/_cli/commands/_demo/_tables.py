"""Show what the different table styles look like."""

from __future__ import annotations

import logging
from typing import Any

import click
from pydantic import ValidationError

from ....core.views import View
from ....exceptions import StackviewError
from ....renderer import TABLE_STYLES, ViewRenderer
from ... import options

LOGGER = logging.getLogger(__name__.replace("._", "."))

DEMO_VIEW = View(
    title="Export values demo",
    columns=("Export", "Description", "Stack", "Value", "Imported"),
    rows=(
        {
            "Export": "awesome-stack-dev-s3-arn",
            "Description": "ARN of the S3 bucket",
            "Stack": "awesome-stack-dev",
            "Value": "arn:aws:s3:::stackview-awesome-stack-dev",
            "Imported": "true",
        },
        {
            "Export": "awesome-stack-test-s3-arn",
            "Description": "ARN of the S3 bucket",
            "Stack": "awesome-stack-test",
            "Value": "arn:aws:s3:::stackview-awesome-stack-test",
            "Imported": "true",
        },
        {
            "Export": "awesome-stack-prod-s3-arn",
            "Description": "ARN of the S3 bucket",
            "Stack": "awesome-stack-prod",
            "Value": "arn:aws:s3:::stackview-awesome-stack-prod",
            "Imported": "true",
        },
        {
            "Export": "demo-s3-bucket",
            "Description": "The S3 bucket used for demos but has an exceptionally "
            "long description so it can show a multi-line example",
            "Stack": "demo-resources",
            "Value": "stackview-demo-bucket",
            "Imported": "false",
        },
    ),
)

INTRO = """Tables are used for most output. You can set your preferred style in your
settings file. For example, in stackview.yml:

table:
  style: Default
  max-column-width: 50
"""


@click.command("tables", short_help="show table styles")
@options.config
@options.debug
@options.no_color
@options.verbose
@click.pass_context
def tables(ctx: click.Context, **_: Any) -> None:
    """Show the demo export table in every available table style."""
    try:
        max_column_width = ctx.obj.config.get("table.max-column-width")
    except ValidationError as err:
        LOGGER.error(err, exc_info=ctx.obj.debug)
        ctx.exit(1)
    except StackviewError as err:
        LOGGER.error(err.message, exc_info=ctx.obj.debug)
        ctx.exit(1)
    click.echo(INTRO)
    for style in TABLE_STYLES:
        click.echo(f"Showing style: {style}")
        renderer = ViewRenderer(
            colorize=False if ctx.obj.no_color else None,
            max_column_width=max_column_width,
            style=style,
        )
        renderer.append(DEMO_VIEW)
        renderer.flush()
        click.echo()
