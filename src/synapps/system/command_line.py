"""Loose command-line argument parsing.

`parse_args` turns an ``argv`` list into a dict without any declaration of
the accepted options, which suits small scripts that only need to peek at a
few flags.
"""

from __future__ import annotations

from collections.abc import Sequence

from synapps.domain.errors import CommandLineError

ArgValue = str | bool | list[str]

_LIST_SEPARATOR = ","  # pragma: no mutate


def parse_args(argv: Sequence[str]) -> dict[str | int, ArgValue]:
    """Parse command-line arguments.

    The first element (program name) is skipped. Supported forms:

    - ``--name=value`` sets ``name`` to ``value``;
    - ``--name`` sets ``name`` to True unless it already has a value;
    - ``-n=value`` sets the single-letter option ``n`` to ``value``;
    - ``-abc`` sets ``a``, ``b`` and ``c`` to True (unless already set);
    - any other argument is stored under the next integer index from 0.

    A string value containing a comma is split into a list.

    Example:
        >>> parse_args(["prog", "--s=a,b", "-ab", "plain"])
        {'s': ['a', 'b'], 'a': True, 'b': True, 0: 'plain'}

    Raises:
        CommandLineError: If an option has an empty name (``--=x``, ``-=x``).
    """
    out: dict[str | int, ArgValue] = {}
    plain_index = 0
    for arg in argv[1:]:
        if arg.startswith("--"):
            name, sep, value = arg[2:].partition("=")
            if not name:
                raise CommandLineError(f"Invalid option '{arg}'")
            out[name] = _split(value) if sep else out.get(name, True)
        elif arg.startswith("-") and len(arg) > 1:
            if arg[1] == "=":
                raise CommandLineError(f"Invalid option '{arg}'")
            if arg[2:3] == "=":
                out[arg[1]] = _split(arg[3:])
            else:
                for letter in arg[1:]:
                    out[letter] = out.get(letter, True)
        else:
            out[plain_index] = _split(arg)
            plain_index += 1
    return out


def _split(value: str) -> ArgValue:
    if _LIST_SEPARATOR in value:
        return value.split(_LIST_SEPARATOR)
    return value
