"""Hierarchical string store addressed by dotted key paths.

Responsibilities:
- Own a tree of nodes, each holding local string values and child subtrees.
- Resolve dotted paths (`fruit.pipfruit.apple`) through the tree, creating
  intermediate nodes only on write-oriented access.
- Convert stored text to typed values through `configtree.values`.
- Serialize a tree back to INI-style text with `report`.

Key types:
- `ConfigTree`: one tree node; the root is a node with an empty prefix.
"""

from __future__ import annotations

import sys
from typing import Any, TextIO

from .errors import ConflictError, NotFoundError, ParseError
from .values import parse_value


_MISSING: Any = object()


class ConfigTree:
    """Hierarchical structure of string parameters.

    Values and subtrees keep first-insertion order; nothing is ever removed.
    A local key may name either a value or a subtree, never both.
    """

    def __init__(self) -> None:
        """Create an empty root tree."""

        self._prefix = ""
        self._values: dict[str, str] = {}
        self._subs: dict[str, ConfigTree] = {}

    @property
    def prefix(self) -> str:
        """Full dotted path of this node with a trailing `.`, empty for the root."""

        return self._prefix

    def has_key(self, path: str) -> bool:
        """Return whether `path` resolves to an existing value.

        Raises:
            ConflictError: If a segment on the path is both a value and a subtree.
        """

        head, dot, tail = path.partition(".")
        if dot:
            if head not in self._subs:
                return False
            if head in self._values:
                raise ConflictError(head)
            return self._subs[head].has_key(tail)

        if path not in self._values:
            return False
        if path in self._subs:
            raise ConflictError(path)
        return True

    def has_sub(self, path: str) -> bool:
        """Return whether `path` resolves to an existing subtree.

        Raises:
            ConflictError: If a segment on the path is both a value and a subtree.
        """

        head, dot, tail = path.partition(".")
        if dot:
            if head not in self._subs:
                return False
            if head in self._values:
                raise ConflictError(head)
            return self._subs[head].has_sub(tail)

        if path not in self._subs:
            return False
        if path in self._values:
            raise ConflictError(path)
        return True

    def __contains__(self, path: object) -> bool:
        return isinstance(path, str) and self.has_key(path)

    def __getitem__(self, path: str) -> str:
        """Return the stored string for `path` without creating anything.

        Raises:
            NotFoundError: If no value exists at `path`.
        """

        head, dot, tail = path.partition(".")
        if dot:
            if not self.has_sub(head):
                raise NotFoundError(path, self._prefix)
            return self._subs[head][tail]

        if not self.has_key(path):
            raise NotFoundError(path, self._prefix)
        return self._values[path]

    def __setitem__(self, path: str, value: str) -> None:
        """Store `value` at `path`, creating intermediate subtrees as needed.

        Raises:
            TypeError: If `value` is not a string.
            ConflictError: If a segment on the path already names the other kind of entry.
        """

        if not isinstance(value, str):
            raise TypeError(f"ConfigTree values must be strings, got {type(value).__name__}.")

        head, dot, tail = path.partition(".")
        if dot:
            self.ensure_sub(head)[tail] = value
            return

        if path in self._subs:
            raise ConflictError(path)
        self._values[path] = value

    def setdefault(self, path: str, default: str = "") -> str:
        """Return the value at `path`, storing `default` there first when absent."""

        head, dot, tail = path.partition(".")
        if dot:
            return self.ensure_sub(head).setdefault(tail, default)

        if path not in self._values:
            self[path] = default
        return self._values[path]

    def get(self, path: str, default: Any = _MISSING, value_type: Any = None) -> Any:
        """Return the value at `path`, optionally converted to a type.

        Args:
            path: Dotted key path.
            default: Value returned when `path` does not exist. Without a
                default a missing key raises `NotFoundError`.
            value_type: Requested type, see `configtree.values.parse_value`.
                When omitted it is the type of `default`; with no typed
                default the stored string is returned unchanged.

        Raises:
            NotFoundError: If `path` is missing and no default was given.
            ParseError: If the stored text does not convert to `value_type`.
        """

        if not self.has_key(path):
            if default is _MISSING:
                raise NotFoundError(path, self._prefix)
            return default

        text = self[path]
        if value_type is None:
            if default is _MISSING or default is None or isinstance(default, str):
                return text
            value_type = type(default)

        try:
            return parse_value(text, value_type)
        except ParseError as exc:
            raise exc.with_key(f"{self._prefix}{path}") from exc

    def sub(self, path: str, fail_if_missing: bool = False) -> ConfigTree:
        """Return the subtree at `path` without creating anything.

        A missing subtree resolves to a shared read-only empty tree unless
        `fail_if_missing` is set.

        Raises:
            ConflictError: If a segment on the path names a value.
            NotFoundError: If the subtree is missing and `fail_if_missing` is set.
        """

        head, dot, tail = path.partition(".")
        if dot:
            return self.sub(head, fail_if_missing).sub(tail, fail_if_missing)

        if path in self._values:
            raise ConflictError(path)
        child = self._subs.get(path)
        if child is None:
            if fail_if_missing:
                raise NotFoundError(path, self._prefix, kind="subtree")
            return EMPTY_TREE
        return child

    def ensure_sub(self, path: str) -> ConfigTree:
        """Return the subtree at `path`, creating every missing node on the way.

        Raises:
            ConflictError: If a segment on the path names a value.
        """

        head, dot, tail = path.partition(".")
        if dot:
            return self.ensure_sub(head).ensure_sub(tail)

        if path in self._values:
            raise ConflictError(path)
        child = self._subs.get(path)
        if child is None:
            child = ConfigTree()
            child._prefix = f"{self._prefix}{path}."
            self._subs[path] = child
        return child

    def value_keys(self) -> list[str]:
        """Return local value keys in first-insertion order."""

        return list(self._values)

    def sub_keys(self) -> list[str]:
        """Return local subtree keys in first-insertion order."""

        return list(self._subs)

    def report(self, sink: TextIO | None = None, prefix: str = "") -> None:
        """Write this node and its subtrees as INI-style text.

        Values come first as `key = "value"` lines, followed by one
        `[ full.path ]` section per subtree. Quote characters inside values
        are written as-is.

        Args:
            sink: Writable text stream, `sys.stdout` by default.
            prefix: Extra text prepended to every section path.
        """

        stream = sink if sink is not None else sys.stdout
        for key, value in self._values.items():
            stream.write(f'{key} = "{value}"\n')
        for key, child in self._subs.items():
            stream.write(f"[ {prefix}{self._prefix}{key} ]\n")
            child.report(stream, prefix)

    def to_dict(self) -> dict[str, Any]:
        """Return a nested plain-dict snapshot, values before subtrees."""

        snapshot: dict[str, Any] = dict(self._values)
        for key, child in self._subs.items():
            snapshot[key] = child.to_dict()
        return snapshot

    def __len__(self) -> int:
        return len(self._values) + len(self._subs)

    def __repr__(self) -> str:
        return (
            f"ConfigTree(prefix={self._prefix!r}, values={self.value_keys()!r}, "
            f"subs={self.sub_keys()!r})"
        )


class _EmptyConfigTree(ConfigTree):
    """Shared empty tree handed out for missing read-only subtrees."""

    def __setitem__(self, path: str, value: str) -> None:
        raise TypeError("The shared empty ConfigTree is read-only.")

    def setdefault(self, path: str, default: str = "") -> str:
        raise TypeError("The shared empty ConfigTree is read-only.")

    def ensure_sub(self, path: str) -> ConfigTree:
        raise TypeError("The shared empty ConfigTree is read-only.")


EMPTY_TREE: ConfigTree = _EmptyConfigTree()
