"""Version command."""

import platform

import click

from ... import __version__


@click.command()
def version():
    """Print the client version."""
    click.echo(f"pb version {__version__}")
    click.echo(f"python {platform.python_version()}")
