"""Structured logging module for burner.

Provides configurable logging with JSON format support and file rotation.
Includes file context support so records carry their [NNN/TTT] position.
"""

from burner.logging.config import configure_logging
from burner.logging.context import (
    FileContextFilter,
    FilePosition,
    clear_file_context,
    file_context,
    format_file_tag,
    get_file_context,
    set_file_context,
)
from burner.logging.handlers import JSONFormatter

__all__ = [
    "FileContextFilter",
    "FilePosition",
    "JSONFormatter",
    "clear_file_context",
    "configure_logging",
    "file_context",
    "format_file_tag",
    "get_file_context",
    "set_file_context",
]
