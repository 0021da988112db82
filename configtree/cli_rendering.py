"""CLI output and error rendering helpers.

This module centralizes user-facing CLI presentation for command diagnostics,
typed values, and key listings.
"""

from __future__ import annotations

from typing import Any, NoReturn

import typer

from .errors import ConfigTreeError
from .tree import ConfigTree


def exit_with_command_error(command_name: str, exc: Exception) -> NoReturn:
    """Print concise diagnostics for command failures and exit with code 1."""

    if isinstance(exc, ConfigTreeError):
        typer.secho(
            f"{command_name} failed ({type(exc).__name__}): {exc.detail}",
            fg=typer.colors.RED,
            err=True,
        )
        if exc.hint:
            typer.secho(f"Hint: {exc.hint}", fg=typer.colors.YELLOW, err=True)
    else:
        typer.secho(f"{command_name} failed: {exc}", fg=typer.colors.RED, err=True)
    raise typer.Exit(code=1) from exc


def format_value(value: Any) -> str:
    """Render a typed value the way it would be written back to a config file."""

    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (list, tuple)):
        return " ".join(format_value(item) for item in value)
    return str(value)


def echo_key_listing(tree: ConfigTree) -> None:
    """Print local value keys, then local subtree keys suffixed with `.`."""

    for key in tree.value_keys():
        typer.echo(key)
    for key in tree.sub_keys():
        typer.echo(f"{key}.")
