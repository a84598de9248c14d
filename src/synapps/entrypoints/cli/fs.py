"""SYNAPPS fs CLI: file operations through the portable `File` handle.

Commands
- `ls`    : List the entries of a directory (optionally filtered by a regex).
- `mkdir` : Create a directory (`-p` for intermediate directories).
- `touch` : Update access/modification times (`--create` to create a missing file).
- `cp`    : Copy a file or directory tree.
- `mv`    : Rename or move an entry.
- `rm`    : Delete an entry (`-r` for directory trees, `-f` to ignore missing ones).
- `ln`    : Create a symbolic link.
- `stat`  : Show metadata of an entry.
- `cat`   : Write the content of a file to stdout.

Examples
    $ synapps fs ls build --pattern '.*\\.html'
    $ synapps fs mkdir -p build/site/assets
    $ synapps fs rm -r build
"""

from __future__ import annotations

import click
import click_extra as clickx

from synapps.adapters.filesystem import File
from synapps.bootstrap import build_file
from synapps.domain.errors import NotFoundError

from .helpers import report_errors, success, warn


def _octal_mode(
    ctx: click.Context,  # pylint: disable=unused-argument
    param: click.Parameter,  # pylint: disable=unused-argument
    value: str,
) -> int:
    try:
        return int(value, 8)
    except ValueError as e:
        raise click.BadParameter(f"Expected an octal mode, got {value!r}") from e


def _existing(path: str) -> File:
    file = build_file(path)
    if not file.exists():
        raise NotFoundError(file.get_path())
    return file


@click.group(cls=clickx.ExtraGroup)
def fs() -> None:
    """Portable file operations."""


@fs.command(name="ls")
@click.argument("path", default=".")
@click.option("--pattern", help="Regular expression matching whole entry names.")
@report_errors
def list_entries(path: str, pattern: str | None) -> None:
    """List the entries of a directory."""
    for entry in build_file(path).list_file_paths(pattern):
        click.echo(entry)


@fs.command()
@click.argument("path")
@click.option("--parents", "-p", is_flag=True, help="Create missing parent directories.")
@click.option(
    "--mode",
    default="777",
    callback=_octal_mode,
    show_default=True,
    help="Permission bits (octal), masked by the umask.",
)
@report_errors
def mkdir(path: str, parents: bool, mode: int) -> None:
    """Create a directory."""
    directory = build_file(path)
    if not directory.create_directory(mode, recursive=parents):
        warn(f"Directory '{directory.get_path()}' already exists.")
    else:
        success(f"Created directory '{directory.get_path()}'.")


@fs.command()
@click.argument("path")
@click.option("--create", is_flag=True, help="Create the file if it does not exist.")
@report_errors
def touch(path: str, create: bool) -> None:
    """Set access and modification times of an entry to now."""
    file = build_file(path)
    if create and not file.exists():
        file.create()
    else:
        file.touch()


@fs.command(name="cp")
@click.argument("source")
@click.argument("destination")
@report_errors
def copy(source: str, destination: str) -> None:
    """Copy a file or a directory tree."""
    _existing(source).copy(destination)


@fs.command(name="mv")
@click.argument("source")
@click.argument("destination")
@report_errors
def move(source: str, destination: str) -> None:
    """Rename or move an entry."""
    _existing(source).rename(destination)


@fs.command(name="rm")
@click.argument("path")
@click.option("--recursive", "-r", is_flag=True, help="Delete directory trees.")
@click.option("--force", "-f", is_flag=True, help="Ignore a missing entry.")
@report_errors
def remove(path: str, recursive: bool, force: bool) -> None:
    """Delete an entry. Symbolic links are removed, never their target."""
    file = build_file(path)
    if not file.delete(recursive) and not force:
        raise NotFoundError(file.get_path())


@fs.command(name="ln")
@click.argument("target")
@click.argument("link")
@report_errors
def link(target: str, link: str) -> None:  # pylint: disable=redefined-outer-name
    """Create a symbolic LINK pointing to TARGET."""
    build_file(link).create_symbolic_link(target)


@fs.command()
@click.argument("path")
@report_errors
def stat(path: str) -> None:
    """Show metadata of an entry."""
    file = _existing(path)
    if file.is_symbolic_link():
        kind = "link"
    elif file.is_directory():
        kind = "directory"
    elif file.is_file():
        kind = "file"
    else:
        kind = "other"
    click.echo(f"Path     : {file.get_path()}")
    click.echo(f"Type     : {kind}")
    if file.is_file():
        click.echo(f"Size     : {file.get_size()}")
    click.echo(f"Modified : {file.get_last_modified_date().isoformat()}")
    click.echo(f"Writable : {'yes' if file.is_writable() else 'no'}")
    click.echo(f"Real path: {file.get_real_path()}")


@fs.command()
@click.argument("path")
@report_errors
def cat(path: str) -> None:
    """Write the content of a file to stdout."""
    _existing(path).read(click.get_binary_stream("stdout"))
