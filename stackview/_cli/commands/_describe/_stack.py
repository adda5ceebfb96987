"""``stackview describe stack`` command."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, cast

import botocore.exceptions
import click
from pydantic import ValidationError

from ....core.views import build_stack_views
from ....exceptions import StackviewError
from ... import options

if TYPE_CHECKING:
    from ...._logging import StackviewLogger

LOGGER = cast("StackviewLogger", logging.getLogger(__name__.replace("._", ".")))


@click.command("stack", short_help="describe a stack")
@options.stack_name
@options.config
@options.debug
@options.no_color
@options.output
@options.profile
@options.region
@options.verbose
@click.pass_context
def stack(ctx: click.Context, stack_name: str, **_: Any) -> None:
    """Show the parameters, conditions, resources and outputs of a stack.

    Output is always rendered as tables, regardless of the "output" setting.

    """
    debug = ctx.obj.debug
    try:
        if ctx.obj.config.get("output") != "table":
            LOGGER.verbose(
                'ignoring output format "%s"; stacks are always described as tables',
                ctx.obj.config.get("output"),
            )
        renderer = ctx.obj.get_renderer(output="table")
        snapshot = ctx.obj.get_stack_client().snapshot(stack_name)
        renderer.extend(build_stack_views(snapshot))
        renderer.flush()
    except ValidationError as err:
        LOGGER.error(err, exc_info=debug)
        ctx.exit(1)
    except botocore.exceptions.NoRegionError as err:
        LOGGER.error(
            '%s; use --region or the "region" setting', err, exc_info=debug
        )
        ctx.exit(1)
    except (botocore.exceptions.BotoCoreError, botocore.exceptions.ClientError) as err:
        LOGGER.error(err, exc_info=debug)
        ctx.exit(1)
    except StackviewError as err:
        LOGGER.error(err.message, exc_info=debug)
        ctx.exit(1)
