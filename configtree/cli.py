"""Command-line interface for configtree.

Responsibilities:
- Expose user-facing commands that read INI files into one `ConfigTree`.
- Print reports, typed values, key listings, and JSON snapshots.

Key public functions:
- `app`: Typer application instance.
- `main`: invoke the Typer application.
"""

from __future__ import annotations

import json
from pathlib import Path
import sys
from typing import Annotated, Any

import typer

from .cli_rendering import echo_key_listing, exit_with_command_error, format_value
from .config import ReaderSettings, SettingsLoader
from .ini import read_ini_file, read_ini_tree
from .telemetry.logger import ParseLogger
from .tree import ConfigTree

app = typer.Typer(
    name="configtree",
    no_args_is_help=True,
    help="configtree CLI.",
)

_VALUE_TYPES: dict[str, Any] = {
    "str": str,
    "int": int,
    "float": float,
    "bool": bool,
    "list": list[str],
}

FilesArgument = Annotated[
    list[Path],
    typer.Argument(help="INI files, read in order into one tree; `-` reads standard input."),
]
OverwriteOption = Annotated[
    bool | None,
    typer.Option(
        "--overwrite/--no-overwrite",
        help="Let later files replace earlier values (default from `CONFIGTREE_OVERWRITE`).",
    ),
]
LogLevelOption = Annotated[
    str | None,
    typer.Option("--log-level", help="Reader event level (default from `CONFIGTREE_LOG_LEVEL`)."),
]


def _resolve_settings(overwrite: bool | None, log_level: str | None) -> ReaderSettings:
    """Resolve reader settings with CLI flags taking precedence over environment."""

    settings = SettingsLoader.from_env()
    if overwrite is not None:
        settings.overwrite = overwrite
    if log_level is not None:
        settings.log_level = log_level.strip().upper()
    settings.validate()
    return settings


def _load_tree(files: list[Path], settings: ReaderSettings) -> ConfigTree:
    """Read every file into one tree, logging reader events to stderr.

    A `-` entry reads standard input, named by the `source_label` setting.
    """

    tree = ConfigTree()
    logger = ParseLogger(sink=sys.stderr, level=settings.log_level)
    try:
        for path in files:
            if str(path) == "-":
                read_ini_tree(
                    sys.stdin, tree, settings.source_label, settings.overwrite, logger=logger
                )
            else:
                read_ini_file(path, tree, overwrite=settings.overwrite, logger=logger)
    finally:
        logger.close()
    return tree


def _apply_assignments(tree: ConfigTree, assignments: list[str]) -> None:
    """Apply `key=value` overrides given on the command line."""

    for assignment in assignments:
        key, separator, value = assignment.partition("=")
        if not separator or not key.strip():
            raise ValueError(f"`--set` expects `key=value`, got `{assignment}`.")
        tree[key.strip()] = value


@app.command("show")
def show_command(
    files: FilesArgument,
    assignments: Annotated[
        list[str] | None,
        typer.Option("--set", help="Override one value as `key=value`; repeatable."),
    ] = None,
    overwrite: OverwriteOption = None,
    log_level: LogLevelOption = None,
) -> None:
    """Read INI files and print the merged tree in INI form."""

    try:
        settings = _resolve_settings(overwrite, log_level)
        tree = _load_tree(files, settings)
        _apply_assignments(tree, assignments or [])
        tree.report(sys.stdout)
    except Exception as exc:
        exit_with_command_error("show", exc)


@app.command("get")
def get_command(
    key: Annotated[str, typer.Argument(help="Dotted key path to read.")],
    files: FilesArgument,
    value_type: Annotated[
        str,
        typer.Option("--type", help="Conversion type: str, int, float, bool, or list."),
    ] = "str",
    default: Annotated[
        str | None,
        typer.Option("--default", help="Printed when the key does not exist."),
    ] = None,
    overwrite: OverwriteOption = None,
    log_level: LogLevelOption = None,
) -> None:
    """Print one value converted to the requested type."""

    try:
        if value_type not in _VALUE_TYPES:
            supported = ", ".join(_VALUE_TYPES)
            raise ValueError(f"Unsupported `--type` value `{value_type}`; supported: {supported}.")
        settings = _resolve_settings(overwrite, log_level)
        tree = _load_tree(files, settings)
        if default is not None and not tree.has_key(key):
            typer.echo(default)
            return
        typer.echo(format_value(tree.get(key, value_type=_VALUE_TYPES[value_type])))
    except Exception as exc:
        exit_with_command_error("get", exc)


@app.command("keys")
def keys_command(
    files: FilesArgument,
    section: Annotated[
        str | None,
        typer.Option("--section", help="Dotted subtree path to list instead of the root."),
    ] = None,
    overwrite: OverwriteOption = None,
    log_level: LogLevelOption = None,
) -> None:
    """List value keys and subtree keys of one tree node."""

    try:
        settings = _resolve_settings(overwrite, log_level)
        tree = _load_tree(files, settings)
        node = tree.sub(section, fail_if_missing=True) if section else tree
        echo_key_listing(node)
    except Exception as exc:
        exit_with_command_error("keys", exc)


@app.command("dump")
def dump_command(
    files: FilesArgument,
    overwrite: OverwriteOption = None,
    log_level: LogLevelOption = None,
) -> None:
    """Print the merged tree as nested JSON objects."""

    try:
        settings = _resolve_settings(overwrite, log_level)
        tree = _load_tree(files, settings)
        typer.echo(json.dumps(tree.to_dict(), indent=2, ensure_ascii=False))
    except Exception as exc:
        exit_with_command_error("dump", exc)


def main() -> None:
    """Run the Typer CLI application."""

    app()
