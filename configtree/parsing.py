"""Shared text helpers for value conversion and readers."""

from __future__ import annotations

import re


WHITESPACE = " \t\n\r"
_WHITESPACE_RUN = re.compile(r"[ \t\n\r]+")

_TRUE_BOOLEAN_TOKENS = frozenset({"yes", "true"})
_FALSE_BOOLEAN_TOKENS = frozenset({"no", "false"})


def ltrim(text: str) -> str:
    """Strip leading spaces, tabs, and line breaks."""

    return text.lstrip(WHITESPACE)


def rtrim(text: str) -> str:
    """Strip trailing spaces, tabs, and line breaks."""

    return text.rstrip(WHITESPACE)


def trim(text: str) -> str:
    """Strip surrounding spaces, tabs, and line breaks."""

    return text.strip(WHITESPACE)


def split_tokens(text: str) -> list[str]:
    """Split text on runs of whitespace, dropping empty tokens.

    Args:
        text: Source text.

    Returns:
        Tokens in source order.
    """

    return [token for token in _WHITESPACE_RUN.split(text) if token]


def boolean_word(text: str) -> bool | None:
    """Map `yes`/`true`/`no`/`false` (any case) to a boolean, else `None`."""

    token = text.lower()
    if token in _TRUE_BOOLEAN_TOKENS:
        return True
    if token in _FALSE_BOOLEAN_TOKENS:
        return False
    return None

