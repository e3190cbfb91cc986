"""
Services Package - Application Layer

Parsers turning interface and trigger documents into domain entities and
serializers turning them back into documents.
"""

from .interface_parser import (
    interface_to_document,
    parse_interface,
    parse_interface_from_file,
    parse_interface_from_string,
)
from .trigger_parser import parse_trigger, parse_trigger_from, trigger_to_document

__all__ = [
    "interface_to_document",
    "parse_interface",
    "parse_interface_from_file",
    "parse_interface_from_string",
    "parse_trigger",
    "parse_trigger_from",
    "trigger_to_document",
]
