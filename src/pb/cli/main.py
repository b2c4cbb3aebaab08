"""pb CLI main entry point with global options."""

from pathlib import Path

import click

from .. import config
from ..context import PBContext
from ..log import configure_logging


@click.group()
@click.option(
    "--config",
    "config_file",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Config file (overrides $PB_CONFIG)",
)
@click.option(
    "--log-file",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Write logs to this file",
)
@click.option("-v", "--verbose", is_flag=True, help="Debug-level logging")
@click.pass_context
def cli(ctx, config_file, log_file, verbose):
    """pb - command line client for Parseable."""
    ctx.ensure_object(PBContext)
    ctx.obj.config_path = config_file

    configure_logging(log_file, verbose)
    # Drop any config cached by a previous invocation in the same process
    config.reset()


# Register commands at module level so tests can import cli with commands attached
from .commands.profile import profile
from .commands.query import query
from .commands.version import version

cli.add_command(profile)
cli.add_command(query)
cli.add_command(version)


def main():
    """Entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
