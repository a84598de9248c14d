"""SYNAPPS `uuid` and `host` commands."""

from __future__ import annotations

import click

from synapps.bootstrap import build_host
from synapps.utils.uuid import random_uuid


@click.command(name="uuid")
@click.option(
    "--count",
    "-n",
    type=click.IntRange(min=1),
    default=1,
    show_default=True,
    help="Number of UUIDs to generate.",
)
def uuid_command(count: int) -> None:
    """Print random (version 4) UUIDs, one per line."""
    for _ in range(count):
        click.echo(str(random_uuid()))


@click.command(name="host")
def host_command() -> None:
    """Print the detected host descriptor."""
    host = build_host()
    click.echo(f"Platform : {host.platform_name}")
    click.echo(f"Family   : {host.family}")
