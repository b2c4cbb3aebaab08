"""Profile CLI commands - manage server endpoints and credentials."""

import json
import sys

import click

from ... import config
from ...context import pass_context
from ...models import Error


def _fail(message) -> None:
    click.echo(f"Error: {message}", err=True)
    sys.exit(1)


def _load(ctx):
    try:
        return config.ensure(ctx.config_path)
    except config.ProfileError as e:
        _fail(e)


@click.group(invoke_without_command=True)
@click.pass_context
def profile(ctx):
    """Manage profiles.

    If no subcommand is provided, defaults to 'list'.
    """
    if ctx.invoked_subcommand is None:
        ctx.invoke(list_cmd)


@profile.command(name="add")
@click.argument("name")
@click.argument("url")
@click.argument("username", required=False)
@click.argument("password", required=False)
@pass_context
def add_cmd(ctx, name, url, username, password):
    """Add a profile (missing credentials are prompted for).

    Examples:
        pb profile add local http://0.0.0.0:8000 admin admin
    """
    _load(ctx)
    if username is None:
        username = click.prompt("username")
    if password is None:
        password = click.prompt("password", hide_input=True)

    result = config.add_profile(name, url, username, password)
    if isinstance(result, Error):
        _fail(result)
    click.echo(f"Added profile {name}")


@profile.command(name="remove")
@click.argument("name")
@pass_context
def remove_cmd(ctx, name):
    """Delete a profile."""
    _load(ctx)
    result = config.remove_profile(name)
    if isinstance(result, Error):
        _fail(result)
    click.echo(f"Deleted profile {name}")


profile.add_command(remove_cmd, name="rm")


@profile.command(name="default")
@click.argument("name")
@pass_context
def default_cmd(ctx, name):
    """Set the profile used when --profile is not given."""
    _load(ctx)
    result = config.set_default(name)
    if isinstance(result, Error):
        _fail(result)
    click.echo(f"{name} is now set as default profile")


@profile.command(name="list")
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["text", "json"]),
    default="text",
    help="Output format",
)
@pass_context
def list_cmd(ctx, output_format):
    """List all added profiles (the default is marked with *)."""
    cfg = _load(ctx)

    if output_format == "json":
        # Machine-readable output, passwords left out
        output = {
            name: {
                "url": p.url,
                "username": p.username,
                "default": name == cfg.default_profile,
            }
            for name, p in sorted(cfg.profiles.items())
        }
        click.echo(json.dumps(output, indent=2))
        return

    if not cfg.profiles:
        click.echo("No profiles found")
        return

    for name, p in sorted(cfg.profiles.items()):
        marker = "*" if name == cfg.default_profile else " "
        click.echo(f"{marker} {name}")
        click.echo(f"    url:  {p.url}")
        click.echo(f"    user: {p.username}")
