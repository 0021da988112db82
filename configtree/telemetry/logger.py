"""Structured reader logging utilities.

Responsibilities:
- Emit concise, deterministic event lines for configuration reads.
- Route events through `loguru` only while a sink is attached; `configtree`
  disables its own records otherwise.
"""

from __future__ import annotations

from typing import TextIO

from loguru import logger as _loguru_logger


_PACKAGE_NAME = "configtree"


def _sanitize_context_value(value: object) -> str:
    """Convert context values into stable, shell-safe tokens."""

    raw = str(value).strip()
    if not raw:
        return "none"
    return "".join(
        character if character.isalnum() or character in {"-", "_", ".", ":", "/"} else "_"
        for character in raw
    )


def _format_context(context: dict[str, object]) -> str:
    """Serialize context key/value pairs in deterministic key order."""

    if not context:
        return ""
    tokens = [
        f"{key}={_sanitize_context_value(context[key])}"
        for key in sorted(context.keys())
    ]
    return " " + " ".join(tokens)


class ParseLogger:
    """Emit deterministic events for INI and option reader activity."""

    def __init__(self, sink: TextIO | None = None, level: str = "INFO") -> None:
        """Bind a logger and, when `sink` is given, make it the only `loguru` output.

        Attaching a sink removes every configured `loguru` handler, including
        the one of a previously attached `ParseLogger`, which then goes quiet.
        A logger without a sink never emits.
        """

        global _ACTIVE_LOGGER

        token = id(self)
        self._logger = _loguru_logger.bind(configtree_logger=token)
        self._handler_id: int | None = None
        if sink is not None:
            if _ACTIVE_LOGGER is not None:
                _ACTIVE_LOGGER._handler_id = None
            _loguru_logger.remove()
            self._handler_id = _loguru_logger.add(
                sink,
                format="{message}",
                level=level,
                colorize=False,
                filter=lambda record: record["extra"].get("configtree_logger") == token,
            )
            _loguru_logger.enable(_PACKAGE_NAME)
            _ACTIVE_LOGGER = self

    def close(self) -> None:
        """Detach the private handler and silence package records again."""

        global _ACTIVE_LOGGER

        if self._handler_id is None:
            return
        _loguru_logger.remove(self._handler_id)
        self._handler_id = None
        if _ACTIVE_LOGGER is self:
            _loguru_logger.disable(_PACKAGE_NAME)
            _ACTIVE_LOGGER = None

    def _emit(self, level: str, event: str, source: str, **context: object) -> None:
        """Emit one structured reader log line."""

        if self._handler_id is None:
            return
        line = (
            f"[configtree] level={level} source={_sanitize_context_value(source)} "
            f"event={event}{_format_context(context)}"
        )
        self._logger.log(level, line)

    def log_source_start(self, source: str) -> None:
        """Emit a read-start event."""

        self._emit("INFO", "start", source)

    def log_source_complete(self, source: str, keys: int) -> None:
        """Emit a read-complete event with the number of keys seen."""

        self._emit("INFO", "complete", source, keys=keys)

    def log_skipped_existing(self, source: str, key: str) -> None:
        """Emit a debug event for a key kept because overwriting is off."""

        self._emit("DEBUG", "skipped_existing", source, key=key)

    def log_malformed_section(self, source: str, line_number: int) -> None:
        """Emit a warning for a section header without a closing bracket."""

        self._emit("WARNING", "malformed_section", source, line=line_number)

    def log_unterminated_quote(self, source: str, key: str) -> None:
        """Emit a warning for a quoted value closed by end of input."""

        self._emit("WARNING", "unterminated_quote", source, key=key)


_ACTIVE_LOGGER: ParseLogger | None = None
_DEFAULT_LOGGER: ParseLogger | None = None


def default_logger() -> ParseLogger:
    """Return the shared sink-less logger used when readers get none."""

    global _DEFAULT_LOGGER
    if _DEFAULT_LOGGER is None:
        _DEFAULT_LOGGER = ParseLogger()
    return _DEFAULT_LOGGER
