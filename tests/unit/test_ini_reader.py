"""Unit tests for the INI-style configuration reader."""

from __future__ import annotations

import io
from pathlib import Path

import pytest

from configtree.errors import DuplicateKeyError, FileOpenError
from configtree.ini import read_ini_file, read_ini_text, read_ini_tree
from configtree.telemetry.logger import ParseLogger
from configtree.tree import ConfigTree


def test_read_ini_tree_parses_sample_with_typed_access(sample_ini_text: str) -> None:
    """The reference sample should yield typed values and a section subtree."""

    tree = ConfigTree()

    result = read_ini_tree(io.StringIO(sample_ini_text), tree)

    assert result is tree
    assert tree.get("x1", value_type=int) == 1
    assert tree.get("x2") == "hallo"
    assert tree.get("x3", value_type=bool) is False
    assert tree.get("array", value_type=list[int]) == [1, 2, 3, 4, 5, 6, 7, 8]
    assert tree.sub("Foo").get("peng", value_type=str) == "ligapokal"
    assert tree.value_keys() == ["x1", "x2", "x3", "array"]
    assert tree.sub_keys() == ["Foo"]


def test_read_ini_text_applies_nested_section_prefixes(fruit_salad_ini_text: str) -> None:
    """Section lines should prefix following keys until the next section line."""

    tree = read_ini_text(fruit_salad_ini_text)

    assert tree["honeydewmelon"] == "yellow"
    assert tree["fruit.tropicalfruit.orange"] == "orange"
    assert tree["fruit.strawberry"] == "red"
    assert tree["fruit.pipfruit.apple"] == "green/red/yellow"
    assert tree["fruit.stonefruit.plum"] == "purple"
    assert tree.sub("fruit").sub_keys() == ["tropicalfruit", "pipfruit", "stonefruit"]
    assert tree.sub("fruit").value_keys() == ["strawberry", "pomegranate"]


def test_read_ini_text_root_section_clears_prefix() -> None:
    """An empty `[]` section should return following keys to the root."""

    tree = read_ini_text("[ a.b ]\nx = 1\n[ ]\ny = 2\n")

    assert tree["a.b.x"] == "1"
    assert tree["y"] == "2"


def test_read_ini_text_strips_comments_and_trims_values() -> None:
    """Comments and surrounding whitespace should not reach stored values."""

    tree = read_ini_text(
        "   # indented comment\n"
        "  key   =   value with  spaces   # trailing comment\n"
        "empty =\n"
        "no separator line\n"
        "eq = a=b\n"
    )

    assert tree["key"] == "value with  spaces"
    assert tree["empty"] == ""
    assert tree["eq"] == "a=b"
    assert tree.value_keys() == ["key", "empty", "eq"]


def test_read_ini_text_reads_quoted_and_multiline_values() -> None:
    """Quoted values should keep inner whitespace and may continue across lines."""

    tree = read_ini_text(
        "single = '  padded  '\n"
        'double = "first line\n'
        "   second line\n"
        'last line"   \n'
        "after = plain\n"
        'blank = ""\n'
    )

    assert tree["single"] == "  padded  "
    assert tree["double"] == "first line\n   second line\nlast line"
    assert tree["after"] == "plain"
    assert tree["blank"] == ""


def test_read_ini_text_quote_ends_at_first_matching_line_end() -> None:
    """The other quote character should not close a quoted value."""

    tree = read_ini_text("mixed = \"it's\nfine\"\n")

    assert tree["mixed"] == "it's\nfine"


def test_read_ini_text_closes_unterminated_quote_at_end_of_input(
    reader_log: tuple[ParseLogger, io.StringIO],
) -> None:
    """An unterminated quote should swallow the rest of the input and warn."""

    logger, buffer = reader_log

    tree = read_ini_text('key = "open\nnext = line\n', logger=logger)

    assert tree["key"] == "open\nnext = line"
    assert tree.value_keys() == ["key"]
    assert "event=unterminated_quote key=key" in buffer.getvalue()


def test_read_ini_text_ignores_unclosed_section_header(
    reader_log: tuple[ParseLogger, io.StringIO],
) -> None:
    """A section line without `]` should be skipped and keep the active prefix."""

    logger, buffer = reader_log

    tree = read_ini_text("[good]\n[broken\nkey = 1\n", logger=logger)

    assert tree["good.key"] == "1"
    assert "event=malformed_section line=2" in buffer.getvalue()


def test_read_ini_tree_rejects_duplicate_keys_in_one_source() -> None:
    """The same fully-qualified key twice in one pass should fail with its source name."""

    text = "a.b = 1\n[a]\nb = 2\n"

    with pytest.raises(DuplicateKeyError, match=r"Key 'a\.b' appears twice in settings") as exc_info:
        read_ini_tree(io.StringIO(text), ConfigTree(), "settings")

    assert exc_info.value.key == "a.b"
    assert exc_info.value.source_name == "settings"


def test_read_ini_tree_merges_sources_and_respects_overwrite(
    reader_log: tuple[ParseLogger, io.StringIO],
) -> None:
    """Later sources should replace values only when overwriting is enabled."""

    logger, buffer = reader_log
    tree = read_ini_text("a = 1\nb = 2\n")

    read_ini_text("a = 10\nc = 30\n", tree, overwrite=False, logger=logger)
    assert tree["a"] == "1"
    assert tree["c"] == "30"
    assert "event=skipped_existing key=a" in buffer.getvalue()

    read_ini_text("a = 100\n", tree)
    assert tree["a"] == "100"
    assert tree.value_keys() == ["a", "b", "c"]


def test_read_ini_tree_checks_duplicates_even_for_skipped_keys() -> None:
    """Keys kept because of `overwrite=False` still count for duplicate detection."""

    tree = read_ini_text("a = 1\n")

    with pytest.raises(DuplicateKeyError):
        read_ini_text("a = 2\na = 3\n", tree, overwrite=False)


def test_read_ini_tree_accepts_line_iterables_with_crlf() -> None:
    """Any iterable of lines should work, including Windows line endings."""

    tree = ConfigTree()

    read_ini_tree(["[s]\r\n", "k = v\r\n", 'q = "x\r\n', 'y"\r\n'], tree)

    assert tree["s.k"] == "v"
    assert tree["s.q"] == "x\ny"


def test_read_ini_tree_logs_start_and_complete(
    reader_log: tuple[ParseLogger, io.StringIO], sample_ini_text: str
) -> None:
    """Each pass should log its start and the number of keys it saw."""

    logger, buffer = reader_log

    read_ini_tree(io.StringIO(sample_ini_text), ConfigTree(), "sample", logger=logger)

    lines = buffer.getvalue().splitlines()
    assert lines[0] == "[configtree] level=INFO source=sample event=start"
    assert lines[-1] == "[configtree] level=INFO source=sample event=complete keys=5"


def test_read_ini_file_reads_utf8_files(tmp_path: Path) -> None:
    """Files should be read as UTF-8 and merged into the given tree."""

    path = tmp_path / "app.ini"
    path.write_text("[greeting]\ntext = Grüß Gott\n", encoding="utf-8")
    tree = ConfigTree()

    read_ini_file(path, tree)

    assert tree["greeting.text"] == "Grüß Gott"


def test_read_ini_file_names_file_in_duplicate_errors(tmp_path: Path) -> None:
    """Duplicate key errors from files should name the file."""

    path = tmp_path / "dup.ini"
    path.write_text("k = 1\nk = 2\n", encoding="utf-8")

    with pytest.raises(DuplicateKeyError, match="appears twice in file '.*dup.ini'"):
        read_ini_file(path, ConfigTree())


def test_read_ini_file_raises_file_open_error_for_missing_path(tmp_path: Path) -> None:
    """Unopenable files should raise `FileOpenError`, which is also an `OSError`."""

    missing = tmp_path / "missing.ini"

    with pytest.raises(FileOpenError, match="Could not open configuration file") as exc_info:
        read_ini_file(missing, ConfigTree())

    assert exc_info.value.path == str(missing)
    assert isinstance(exc_info.value, OSError)
