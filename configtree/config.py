"""Reader settings model and loaders.

Responsibilities:
- Define reader settings as a typed dataclass.
- Provide loader entry points for environment- and tree-based settings.

Key types:
- `ReaderSettings`: normalized options shared by the readers and the CLI.
- `SettingsLoader`: static construction helpers for `ReaderSettings`.
"""

from __future__ import annotations

from dataclasses import dataclass
import os
from typing import Mapping

from .errors import ParseError
from .parsing import trim
from .tree import ConfigTree
from .values import parse_value


_SUPPORTED_LOG_LEVELS = frozenset({"TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR"})
_SETTINGS_SECTION = "configtree"


@dataclass(slots=True)
class ReaderSettings:
    """Options applied when reading configuration sources.

    Attributes:
        overwrite: Whether later sources replace values from earlier ones.
        log_level: Minimum `loguru` level for reader events.
        source_label: Name used in diagnostics for unnamed streams.
    """

    overwrite: bool = True
    log_level: str = "WARNING"
    source_label: str = "stream"

    def validate(self) -> None:
        """Validate settings values before use."""

        if self.log_level not in _SUPPORTED_LOG_LEVELS:
            supported = ", ".join(sorted(_SUPPORTED_LOG_LEVELS))
            raise ValueError(
                f"Unsupported `log_level` value `{self.log_level}`; supported: {supported}."
            )
        if not self.source_label.strip():
            raise ValueError("`source_label` must be a non-empty string.")


class SettingsLoader:
    """Factory methods for creating `ReaderSettings` from external sources."""

    @staticmethod
    def from_env(env: Mapping[str, str] | None = None) -> ReaderSettings:
        """Create validated settings from `CONFIGTREE_*` environment variables."""

        env_map: Mapping[str, str] = os.environ if env is None else env

        overwrite = SettingsLoader._optional_env_boolean(env_map, "CONFIGTREE_OVERWRITE")
        log_level = SettingsLoader._optional_env_string(env_map, "CONFIGTREE_LOG_LEVEL")
        source_label = SettingsLoader._optional_env_string(env_map, "CONFIGTREE_SOURCE_LABEL")

        settings = ReaderSettings(
            overwrite=True if overwrite is None else overwrite,
            log_level=log_level.upper() if log_level is not None else "WARNING",
            source_label=source_label or "stream",
        )
        settings.validate()
        return settings

    @staticmethod
    def from_tree(tree: ConfigTree, base: ReaderSettings | None = None) -> ReaderSettings:
        """Create validated settings from the `[configtree]` section of a tree.

        Keys missing from the section keep the values of `base`.
        """

        defaults = base if base is not None else ReaderSettings()
        section = tree.sub(_SETTINGS_SECTION)
        settings = ReaderSettings(
            overwrite=section.get("overwrite", defaults.overwrite),
            log_level=section.get("log_level", defaults.log_level, value_type=str).upper(),
            source_label=section.get("source_label", defaults.source_label, value_type=str),
        )
        settings.validate()
        return settings

    @staticmethod
    def _optional_env_string(env: Mapping[str, str], key: str) -> str | None:
        """Read a trimmed environment value; unset and blank both mean `None`."""

        value = trim(env.get(key, ""))
        return value or None

    @staticmethod
    def _optional_env_boolean(env: Mapping[str, str], key: str) -> bool | None:
        """Read an optional boolean with the same grammar as tree values.

        `yes`/`true`/`no`/`false` in any case, or an integer where non-zero is true.
        """

        value = SettingsLoader._optional_env_string(env, key)
        if value is None:
            return None
        try:
            return parse_value(value, bool)
        except ParseError as exc:
            raise ValueError(f"Environment variable `{key}`: {exc}") from exc
