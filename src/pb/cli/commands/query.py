"""Query command - open the interactive query screen for a stream."""

import logging
import sys

import click

from ... import config
from ...client import DEFAULT_TIMEOUT
from ...context import pass_context
from ...tui import QueryApp
from ...tui.timerange import DEFAULT_DURATION_MINUTES

logger = logging.getLogger(__name__)


@click.command()
@click.argument("stream")
@click.option(
    "-d",
    "--duration",
    type=click.IntRange(min=0),
    default=DEFAULT_DURATION_MINUTES,
    show_default=True,
    help="Initial time range in minutes, ending now",
)
@click.option("--profile", "profile_name", help="Profile to use instead of the default")
@click.option(
    "--timeout",
    type=click.FloatRange(min=0, min_open=True),
    default=DEFAULT_TIMEOUT,
    show_default=True,
    help="Request timeout in seconds",
)
@pass_context
def query(ctx, stream, duration, profile_name, timeout):
    """Query STREAM interactively.

    Examples:
        pb query backend
        pb query backend -d 60 --profile local
    """
    try:
        config.ensure(ctx.config_path)
        profile = config.resolve_profile(profile_name)
    except config.ProfileError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    logger.info("opening query screen for %s on %s", stream, profile.url)
    app = QueryApp(profile, stream, duration=duration, timeout=timeout)
    app.run()
