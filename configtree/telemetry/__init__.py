"""Observability helpers.

This package emits deterministic reader events for auditing configuration loads.
"""

from .logger import ParseLogger, default_logger

__all__ = ["ParseLogger", "default_logger"]
