"""Turn `SynappsError` into a one-line report and exit status 1."""

from __future__ import annotations

import functools
import logging
from collections.abc import Callable
from typing import ParamSpec, TypeVar

import click

from synapps.domain.errors import SynappsError

from .messages import error

logger = logging.getLogger(__name__)

P = ParamSpec("P")
R = TypeVar("R")


def report_errors(func: Callable[P, R]) -> Callable[P, R]:
    """Decorate a command so that library errors end it cleanly.

    The error is printed on stderr as ``<kind>: <message>`` and the command
    exits with status 1. Any other exception propagates unchanged.
    """

    @functools.wraps(func)
    def wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
        try:
            return func(*args, **kwargs)
        except SynappsError as err:
            logger.debug("Command %s failed", func.__name__, exc_info=err)
            error(f"{err.kind.value}: {err.message}")
            raise click.exceptions.Exit(1) from err

    return wrapper
