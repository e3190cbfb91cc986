"""
Shared module - Cross-cutting concerns / Shared Layer

This module provides utilities, constants and enums used across every layer
of the client:
- Environment and log level enums, pagination defaults
- structlog configuration
- RFC3339 timestamp parsing and formatting

It must not depend on Infrastructure or on the application layer.
"""

from .consts import DEFAULT_PAGE_SIZE, EnumEnvironment, EnumLogLevel
from .logging import configure_logging, get_logger, update_logging_from_settings
from .timestamps import UNIX_EPOCH, format_timestamp, parse_timestamp

__all__ = [
    "DEFAULT_PAGE_SIZE",
    "EnumEnvironment",
    "EnumLogLevel",
    "UNIX_EPOCH",
    "configure_logging",
    "format_timestamp",
    "get_logger",
    "parse_timestamp",
    "update_logging_from_settings",
]
