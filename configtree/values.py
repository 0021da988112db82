"""Type-indexed conversion of stored text into typed values.

Responsibilities:
- Convert trimmed text to scalars with C-locale numeric syntax.
- Convert whitespace-delimited text to fixed-size ranges, bit sets, and
  dynamically sized sequences.
- Keep an explicit registry so callers can add converters for their own types.

Key public names:
- `parse_value`: dispatch one conversion for a requested type.
- `register_parser`: decorator adding a converter for a type.
- `FixedArray` / `BitSet`: descriptors for exact-arity conversions.
- `type_name`: readable type names for diagnostics.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass
import re
from typing import Any, TypeVar, get_args, get_origin

from .errors import ParseError
from .parsing import boolean_word, split_tokens, trim


T = TypeVar("T")

ValueParser = Callable[[str], Any]

_INTEGER_PATTERN = re.compile(r"[+-]?[0-9]+")
_FLOAT_PATTERN = re.compile(r"[+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")

_PARSERS: dict[Any, ValueParser] = {}


@dataclass(frozen=True, slots=True)
class FixedArray:
    """Exact-arity homogeneous range, converted to a tuple.

    Attributes:
        element_type: Type of every slot.
        size: Number of whitespace-delimited items the text must hold.
    """

    element_type: Any
    size: int

    def __post_init__(self) -> None:
        if self.size < 0:
            raise ValueError("`size` must be a non-negative integer.")


@dataclass(frozen=True, slots=True)
class BitSet:
    """Exact-arity set of boolean flags, converted to a tuple of `bool`."""

    size: int

    def __post_init__(self) -> None:
        if self.size < 0:
            raise ValueError("`size` must be a non-negative integer.")


def register_parser(value_type: Any) -> Callable[[ValueParser], ValueParser]:
    """Register a converter for `value_type`, replacing any earlier one.

    The converter receives the raw stored text. Raising `ValueError` or
    `TypeError` is reported as `ParseError` for the registered type.
    """

    def decorator(parser: ValueParser) -> ValueParser:
        _PARSERS[value_type] = parser
        return parser

    return decorator


def type_name(value_type: Any) -> str:
    """Return a readable name for a requested conversion type."""

    if isinstance(value_type, FixedArray):
        return f"FixedArray[{type_name(value_type.element_type)}, {value_type.size}]"
    if isinstance(value_type, BitSet):
        return f"BitSet[{value_type.size}]"
    if get_origin(value_type) is not None:
        return repr(value_type)
    return getattr(value_type, "__name__", repr(value_type))


def parse_value(text: str, value_type: Any) -> Any:
    """Convert `text` into an instance of `value_type`.

    Args:
        text: Stored text to convert.
        value_type: Target type, a `FixedArray`/`BitSet` descriptor, or a
            `list[...]`/`tuple[...]` alias.

    Returns:
        Converted value.

    Raises:
        ParseError: If the text does not convert to the requested type.
    """

    if isinstance(value_type, FixedArray):
        return _parse_range(
            text,
            [value_type.element_type] * value_type.size,
            type_name(value_type.element_type),
        )
    if isinstance(value_type, BitSet):
        return _parse_bitset(text, value_type.size)

    origin = get_origin(value_type)
    if origin is tuple:
        args = get_args(value_type)
        if len(args) == 2 and args[1] is Ellipsis:
            return tuple(_parse_sequence(text, args[0], value_type))
        return _parse_range(text, list(args), type_name(value_type))
    if origin in (list, Sequence):
        args = get_args(value_type)
        return _parse_sequence(text, args[0] if args else str, value_type)
    if value_type is list:
        return _parse_sequence(text, str, value_type)
    if value_type is tuple:
        return tuple(_parse_sequence(text, str, value_type))

    parser = _PARSERS.get(value_type)
    if parser is not None:
        return _run_registered(parser, text, value_type)
    return _parse_scalar(text, value_type)


@register_parser(str)
def _parse_string(text: str) -> str:
    return trim(text)


@register_parser(bool)
def _parse_bool(text: str) -> bool:
    token = trim(text)
    word = boolean_word(token)
    if word is not None:
        return word
    try:
        return _parse_int(token) != 0
    except ParseError as exc:
        raise ParseError("bool", text, reason=exc.reason) from exc


@register_parser(int)
def _parse_int(text: str) -> int:
    token = trim(text)
    if not _INTEGER_PATTERN.fullmatch(token):
        raise ParseError("int", text, reason="not a whole decimal integer")
    return int(token)


@register_parser(float)
def _parse_float(text: str) -> float:
    token = trim(text)
    if not _FLOAT_PATTERN.fullmatch(token):
        raise ParseError("float", text, reason="not a decimal floating point number")
    return float(token)


def _run_registered(parser: ValueParser, text: str, value_type: Any) -> Any:
    """Run a registered converter and normalize its failures."""

    try:
        return parser(text)
    except ParseError:
        raise
    except (ValueError, TypeError) as exc:
        raise ParseError(type_name(value_type), text, reason=str(exc)) from exc


def _parse_scalar(text: str, value_type: Any) -> Any:
    """Construct `value_type` from exactly one whitespace-free token."""

    tokens = split_tokens(text)
    if len(tokens) != 1:
        raise ParseError(
            type_name(value_type),
            text,
            reason=f"expected exactly one item, found {len(tokens)}",
        )
    try:
        return value_type(tokens[0])
    except (ValueError, TypeError, ArithmeticError) as exc:
        raise ParseError(type_name(value_type), text, reason=str(exc) or None) from exc


def _parse_range(text: str, slot_types: list[Any], element_label: str) -> tuple[Any, ...]:
    """Fill exactly `len(slot_types)` slots from whitespace-delimited tokens."""

    tokens = split_tokens(text)
    items: list[Any] = []
    for index, slot_type in enumerate(slot_types):
        failure = ParseError(
            f"a range of items of type {element_label}",
            text,
            extracted=index,
            reason=f"{index} items were extracted successfully",
        )
        if index >= len(tokens):
            raise failure
        try:
            items.append(parse_value(tokens[index], slot_type))
        except ParseError as exc:
            raise failure from exc

    if len(tokens) > len(slot_types):
        raise ParseError(
            f"a range of {len(slot_types)} items of type {element_label}",
            text,
            extracted=len(slot_types),
            reason="more items than the range can hold",
        )
    return tuple(items)


def _parse_bitset(text: str, size: int) -> tuple[bool, ...]:
    """Convert exactly `size` boolean tokens into a tuple of flags."""

    tokens = split_tokens(text)
    if len(tokens) != size:
        raise ParseError(
            f"a bitset<{size}>",
            text,
            extracted=0,
            reason=f"because of unmatching size {len(tokens)}, expected {size}",
        )
    return tuple(_parse_bool(token) for token in tokens)


def _parse_sequence(text: str, element_type: Any, value_type: Any) -> list[Any]:
    """Convert every whitespace-delimited token with no arity constraint."""

    items: list[Any] = []
    for index, token in enumerate(split_tokens(text)):
        try:
            items.append(parse_value(token, element_type))
        except ParseError as exc:
            raise ParseError(
                type_name(value_type),
                text,
                extracted=index,
                reason=f"item {index} `{token}` is not a {type_name(element_type)}",
            ) from exc
    return items
