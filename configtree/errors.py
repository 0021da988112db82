"""Domain exceptions for tree access, value parsing, and text readers."""

from __future__ import annotations

from collections.abc import Sequence


class ConfigTreeError(Exception):
    """Base class for every failure raised by `configtree`."""

    def __init__(self, detail: str, *, hint: str | None = None) -> None:
        """Initialize an error with a user-facing detail and optional hint."""

        super().__init__(detail)
        self.detail = detail
        self.hint = hint

    def __str__(self) -> str:
        return self.detail


class ConflictError(ConfigTreeError):
    """Raised when one local key is used both as a value and as a subtree."""

    def __init__(self, key: str) -> None:
        super().__init__(f"key {key} occurs as value and as subtree")
        self.key = key


class NotFoundError(ConfigTreeError, KeyError):
    """Raised when a read-only lookup misses a key or a subtree."""

    def __init__(self, key: str, prefix: str, *, kind: str = "key") -> None:
        label = "Key" if kind == "key" else "SubTree"
        super().__init__(f"{label} '{key}' not found in ConfigTree (prefix {prefix})")
        self.key = key
        self.prefix = prefix
        self.kind = kind


class ParseError(ConfigTreeError, ValueError):
    """Raised when stored text cannot be converted to the requested type.

    Attributes:
        type_name: Readable name of the requested type.
        text: Source text that failed to convert.
        extracted: Items converted before failing, for fixed-size ranges.
        reason: Short description of the failure.
        key: Full dotted key, filled in by `ConfigTree.get`.
    """

    def __init__(
        self,
        type_name: str,
        text: str,
        *,
        extracted: int | None = None,
        reason: str | None = None,
        key: str | None = None,
    ) -> None:
        self.type_name = type_name
        self.text = text
        self.extracted = extracted
        self.reason = reason
        self.key = key
        super().__init__(self._render())

    def _render(self) -> str:
        if self.key is None:
            message = f"Cannot parse value \"{self.text}\" as {self.type_name}"
        else:
            message = (
                f"Cannot parse value \"{self.text}\" for key \"{self.key}\" "
                f"as {self.type_name}"
            )
        if self.reason:
            message += f" ({self.reason})"
        return message

    def with_key(self, key: str) -> ParseError:
        """Return a copy of this error annotated with the full dotted key."""

        return ParseError(
            self.type_name,
            self.text,
            extracted=self.extracted,
            reason=self.reason,
            key=key,
        )


class DuplicateKeyError(ConfigTreeError):
    """Raised when one reader pass sees the same fully-qualified key twice."""

    def __init__(self, key: str, source_name: str) -> None:
        super().__init__(
            f"Key '{key}' appears twice in {source_name} !",
            hint="Remove or rename one of the duplicate assignments.",
        )
        self.key = key
        self.source_name = source_name


class FileOpenError(ConfigTreeError, OSError):
    """Raised when a configuration file cannot be opened for reading."""

    def __init__(self, path: str) -> None:
        super().__init__(
            f"Could not open configuration file {path}",
            hint="Verify the path exists and is readable.",
        )
        self.path = path


class OptionError(ConfigTreeError):
    """Base class for command-line option reader failures."""

    def __init__(self, detail: str, *, usage: str = "") -> None:
        super().__init__(detail, hint=usage or None)
        self.usage = usage


class MissingValueError(OptionError):
    """Raised when an option flag is not followed by its value."""

    def __init__(self, option: str, *, usage: str = "") -> None:
        super().__init__(f"value missing for parameter {option}", usage=usage)
        self.option = option


class UnknownParameterError(OptionError):
    """Raised when a named option is not a declared keyword."""

    def __init__(self, name: str, *, usage: str = "") -> None:
        super().__init__(f"unknown parameter {name}", usage=usage)
        self.name = name


class SuperfluousParameterError(OptionError):
    """Raised when a positional argument has no keyword left to fill."""

    def __init__(self, value: str, *, usage: str = "") -> None:
        super().__init__(f"superfluous unnamed parameter {value}", usage=usage)
        self.value = value


class AlreadySpecifiedError(OptionError):
    """Raised when a keyword already holds a value and overwriting is off."""

    def __init__(self, name: str, *, usage: str = "") -> None:
        super().__init__(f"parameter {name} already specified", usage=usage)
        self.name = name


class MissingParameterError(OptionError):
    """Raised when required keywords were not supplied."""

    def __init__(self, names: Sequence[str], *, usage: str = "") -> None:
        self.names = tuple(names)
        super().__init__(f"missing parameter(s) ... {' '.join(self.names)}", usage=usage)


class HelpRequested(Exception):
    """Signal that `-h`/`--help` was passed; carries the generated usage text."""

    def __init__(self, usage: str) -> None:
        super().__init__(usage)
        self.usage = usage
