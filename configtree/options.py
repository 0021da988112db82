"""Command-line option readers that fill a `ConfigTree`.

Two independent entry points are provided:

- `read_options`: plain `-key value` pairs.
- `read_named_options`: keyword-ordered positional arguments with
  `--key=value` overrides, in the manner of Python keyword arguments.

Both take the full argument vector; index 0 is the program name and only
appears in generated usage text.
"""

from __future__ import annotations

from collections.abc import Sequence

from .errors import (
    AlreadySpecifiedError,
    HelpRequested,
    MissingParameterError,
    MissingValueError,
    SuperfluousParameterError,
    UnknownParameterError,
)
from .tree import ConfigTree


_HELP_FLAGS = frozenset({"-h", "--help"})


def read_options(argv: Sequence[str], tree: ConfigTree) -> ConfigTree:
    """Store every `-key value` pair from `argv` in `tree`.

    Arguments that do not start with `-` (or are a lone `-`) are skipped.

    Raises:
        MissingValueError: If an option is the last argument.
    """

    index = 1
    while index < len(argv):
        option = argv[index]
        if option.startswith("-") and len(option) > 1:
            if index + 1 >= len(argv):
                raise MissingValueError(option)
            tree[option[1:]] = argv[index + 1]
            index += 2
            continue
        index += 1
    return tree


def read_named_options(
    argv: Sequence[str],
    tree: ConfigTree,
    keywords: Sequence[str],
    required: int | None = None,
    allow_more: bool = True,
    overwrite: bool = True,
    help_texts: Sequence[str] | None = None,
) -> ConfigTree:
    """Read positional and `--key=value` arguments into `tree`.

    Positional arguments fill the declared `keywords` in order, skipping
    keywords already given by name. Named arguments may appear anywhere.

    Args:
        argv: Full argument vector, program name first.
        tree: Destination tree.
        keywords: Expected keyword names in positional order.
        required: Number of leading keywords that must be supplied; all of
            them when omitted.
        allow_more: Accept `--key=value` pairs for undeclared keys.
        overwrite: Allow replacing non-empty values already in `tree`.
        help_texts: Optional help line per keyword, used in usage text.

    Returns:
        The destination tree.

    Raises:
        HelpRequested: If `-h` or `--help` appears in `argv`.
        MissingValueError: If a `--key` argument has no `=value` part.
        UnknownParameterError: If a named key is undeclared and `allow_more` is off.
        SuperfluousParameterError: If a positional argument has no keyword left.
        AlreadySpecifiedError: If a key already holds a value and `overwrite` is off.
        MissingParameterError: If required keywords remain unfilled.
    """

    keyword_list = list(keywords)
    required_count = len(keyword_list) if required is None else required
    progname = argv[0] if argv else ""
    usage = generate_help_string(progname, keyword_list, required_count, help_texts)

    arguments = list(argv[1:])
    if any(argument in _HELP_FLAGS for argument in arguments):
        raise HelpRequested(usage)

    done = [False] * len(keyword_list)
    current = 0
    for argument in arguments:
        if argument.startswith("--"):
            position = argument.find("=", 2)
            if position == -1:
                raise MissingValueError(argument, usage=usage)
            key = argument[2:position]
            value = argument[position + 1 :]
            slot = keyword_list.index(key) if key in keyword_list else None
            if slot is None and not allow_more:
                raise UnknownParameterError(key, usage=usage)
            _store(tree, key, value, overwrite, usage)
            if slot is not None:
                done[slot] = True
            continue

        while current < len(done) and done[current]:
            current += 1
        if current >= len(done):
            raise SuperfluousParameterError(argument, usage=usage)
        _store(tree, keyword_list[current], argument, overwrite, usage)
        done[current] = True

    missing = [
        keyword
        for index, keyword in enumerate(keyword_list)
        if index < required_count and not done[index]
    ]
    if missing:
        raise MissingParameterError(missing, usage=usage)
    return tree


def generate_help_string(
    progname: str,
    keywords: Sequence[str],
    required: int | None = None,
    help_texts: Sequence[str] | None = None,
) -> str:
    """Render usage text: required keywords as `<name>`, optional ones as `[name]`."""

    required_count = len(keywords) if required is None else required
    usage = f"Usage: {progname}"
    for index, keyword in enumerate(keywords):
        usage += f" <{keyword}>" if index < required_count else f" [{keyword}]"
    usage += "\nOptions:\n-h / --help: this help\n"
    for keyword, text in zip(keywords, help_texts or ()):
        if text:
            usage += f"-{keyword}:\t{text}\n"
    return usage


def _store(tree: ConfigTree, key: str, value: str, overwrite: bool, usage: str) -> None:
    """Write one option value, refusing to replace a non-empty one unless allowed."""

    if not overwrite and tree.get(key, ""):
        raise AlreadySpecifiedError(key, usage=usage)
    tree[key] = value
