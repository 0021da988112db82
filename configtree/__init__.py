"""Top-level package for configtree.

This package provides a hierarchical key-value configuration store addressed
by dotted key paths, typed value access, and readers for INI-style text and
command-line options. The main entry point is `ConfigTree`.
"""

from loguru import logger as _loguru_logger

from .errors import (
    AlreadySpecifiedError,
    ConfigTreeError,
    ConflictError,
    DuplicateKeyError,
    FileOpenError,
    HelpRequested,
    MissingParameterError,
    MissingValueError,
    NotFoundError,
    OptionError,
    ParseError,
    SuperfluousParameterError,
    UnknownParameterError,
)
from .ini import read_ini_file, read_ini_text, read_ini_tree
from .options import generate_help_string, read_named_options, read_options
from .tree import ConfigTree
from .values import BitSet, FixedArray, parse_value, register_parser

# Library records stay silent until a sink is attached through `ParseLogger`.
_loguru_logger.disable("configtree")

__all__ = [
    "AlreadySpecifiedError",
    "BitSet",
    "ConfigTree",
    "ConfigTreeError",
    "ConflictError",
    "DuplicateKeyError",
    "FileOpenError",
    "FixedArray",
    "HelpRequested",
    "MissingParameterError",
    "MissingValueError",
    "NotFoundError",
    "OptionError",
    "ParseError",
    "SuperfluousParameterError",
    "UnknownParameterError",
    "__version__",
    "generate_help_string",
    "parse_value",
    "read_ini_file",
    "read_ini_text",
    "read_ini_tree",
    "read_named_options",
    "read_options",
    "register_parser",
]

__version__ = "0.1.0"
