"""
Command-line flag binding

Two hooks for the 27-character text form. Typer options and arguments use
parse_ksuid_flag through ``parser=parse_ksuid_flag``; plain click commands
use the KsuidParamType parameter type. Both report bad input as a usage
error rather than a crash.
"""

from typing import Any

import click
import typer

from ksuid_kit.kernel.errors import KsuidError
from ksuid_kit.kernel.ksuid import Ksuid


def _rejection(value: Any, error: KsuidError) -> str:
    return f"{value!r} is not a valid KSUID: {error}"


def parse_ksuid_flag(value: Any) -> Ksuid:
    """
    Typer parser for KSUID options and arguments

    Raises typer's own BadParameter, which typer turns into a usage error
    whether or not it shares click with the caller.

    Args:
        value: Raw flag text (or an already parsed Ksuid default)

    Returns:
        The parsed KSUID

    Raises:
        typer.BadParameter: If the value is not a valid KSUID
    """
    if isinstance(value, Ksuid):
        return value
    try:
        return Ksuid.parse(str(value))
    except KsuidError as e:
        raise typer.BadParameter(_rejection(value, e)) from e


class KsuidParamType(click.ParamType):
    """Parses a KSUID flag value for click commands"""

    name = "ksuid"

    def convert(
        self,
        value: Any,
        param: click.Parameter | None,
        ctx: click.Context | None,
    ) -> Ksuid:
        if isinstance(value, Ksuid):
            return value
        try:
            return Ksuid.parse(str(value))
        except KsuidError as e:
            self.fail(_rejection(value, e), param, ctx)


KSUID = KsuidParamType()
