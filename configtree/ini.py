"""Line-oriented reader for INI-style configuration text.

The accepted format looks like this::

    # this file configures fruit colors in fruitsalad
    honeydewmelon = yellow
    fruit.tropicalfruit.orange = orange

    [fruit]
    strawberry = red

    [fruit.pipfruit]
    apple = green/red/yellow   # inline comments are dropped
    pear = "a quoted value
    may span lines"

A `[prefix]` line applies `prefix.` to every following key until the next
section line; `[]` returns to the root. Unquoted values are right-trimmed,
quoted values keep their inner whitespace. Quote characters cannot be
escaped inside a quoted value.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
import io
from pathlib import Path

from .errors import DuplicateKeyError, FileOpenError
from .parsing import ltrim, rtrim, trim
from .telemetry.logger import ParseLogger, default_logger
from .tree import ConfigTree


_QUOTES = ("'", '"')


def _numbered_lines(stream: Iterable[str]) -> Iterator[tuple[int, str]]:
    """Yield 1-based line numbers with line terminators removed."""

    for line_number, raw_line in enumerate(stream, start=1):
        if raw_line.endswith("\n"):
            raw_line = raw_line[:-1]
        if raw_line.endswith("\r"):
            raw_line = raw_line[:-1]
        yield line_number, raw_line


def read_ini_tree(
    stream: Iterable[str],
    tree: ConfigTree,
    source_name: str = "stream",
    overwrite: bool = True,
    *,
    logger: ParseLogger | None = None,
) -> ConfigTree:
    """Parse INI-style text from `stream` into `tree`.

    Args:
        stream: Readable text stream, or any iterable of lines.
        tree: Destination tree; entries are merged into it.
        source_name: Name of the source used in error messages.
        overwrite: When false, keys already present in `tree` keep their value.
        logger: Event logger, the shared default logger when omitted.

    Returns:
        The destination tree.

    Raises:
        DuplicateKeyError: If one fully-qualified key appears twice in `stream`.
    """

    log = logger if logger is not None else default_logger()
    log.log_source_start(source_name)

    prefix = ""
    keys_in_source: set[str] = set()
    lines = _numbered_lines(stream)
    for line_number, raw_line in lines:
        line = ltrim(raw_line)
        if not line or line.startswith("#"):
            continue

        if line.startswith("["):
            line = rtrim(line)
            if line.endswith("]"):
                prefix = trim(line[1:-1])
                if prefix:
                    prefix += "."
            else:
                # TODO: reject unclosed section headers instead of skipping them.
                log.log_malformed_section(source_name, line_number)
            continue

        line = line.split("#", 1)[0]
        key_text, separator, value = line.partition("=")
        if not separator:
            continue

        key = prefix + trim(key_text)
        value = ltrim(value)
        if value.startswith(_QUOTES):
            quote = value[0]
            value = value[1:]
            while not rtrim(value).endswith(quote):
                next_line = next(lines, None)
                if next_line is None:
                    log.log_unterminated_quote(source_name, key)
                    value += quote
                else:
                    value += "\n" + next_line[1]
            value = rtrim(value)[:-1]
        else:
            value = rtrim(value)

        if key in keys_in_source:
            raise DuplicateKeyError(key, source_name)
        if overwrite or not tree.has_key(key):
            tree[key] = value
        else:
            log.log_skipped_existing(source_name, key)
        keys_in_source.add(key)

    log.log_source_complete(source_name, len(keys_in_source))
    return tree


def read_ini_text(
    text: str,
    tree: ConfigTree | None = None,
    source_name: str = "string",
    overwrite: bool = True,
    *,
    logger: ParseLogger | None = None,
) -> ConfigTree:
    """Parse INI-style `text` into `tree`, or into a new tree when omitted."""

    destination = tree if tree is not None else ConfigTree()
    return read_ini_tree(
        io.StringIO(text), destination, source_name, overwrite, logger=logger
    )


def read_ini_file(
    path: str | Path,
    tree: ConfigTree,
    overwrite: bool = True,
    *,
    logger: ParseLogger | None = None,
) -> ConfigTree:
    """Parse the UTF-8 INI file at `path` into `tree`.

    Raises:
        FileOpenError: If the file cannot be opened.
        DuplicateKeyError: If one fully-qualified key appears twice in the file.
    """

    try:
        handle = Path(path).open(encoding="utf-8")
    except OSError as exc:
        raise FileOpenError(str(path)) from exc

    with handle:
        return read_ini_tree(handle, tree, f"file '{path}'", overwrite, logger=logger)
