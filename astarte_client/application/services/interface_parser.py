"""
Interface Parser - Application Layer

Parses Astarte interface documents. A document is first checked for its
mandatory fields, in a fixed order with the first missing one reported, and
only then fully decoded and completed with defaults.
"""

import json
import os
from typing import Any, Dict, Union

from pydantic import ValidationError

from astarte_client.application.dtos.interface_dto import (
    InterfaceDTO,
    RequiredInterfaceDTO,
)
from astarte_client.domain.entities.errors import InterfaceValidationError
from astarte_client.domain.entities.interface import Interface
from astarte_client.domain.services.schema_defaults import ensure_interface_defaults
from astarte_client.shared import get_logger

logger = get_logger(__name__)


def _first_error(error: ValidationError) -> Dict[str, str]:
    detail = error.errors()[0]
    return {
        "field": ".".join(str(part) for part in detail.get("loc", ())),
        "reason": detail.get("msg", str(error)),
    }


def _decode(content: Union[bytes, str]) -> Any:
    try:
        return json.loads(content)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise InterfaceValidationError(f"malformed JSON document: {e}") from e


def parse_interface(content: Union[bytes, str]) -> Interface:
    """
    Parse an interface from its JSON document.

    Args:
        content: The JSON document, as bytes or text

    Returns:
        Interface: The parsed interface with every default set

    Raises:
        InterfaceValidationError: If a mandatory field is missing or a field
            holds an invalid value. ``field`` names the offending field.
    """
    document = _decode(content)
    if not isinstance(document, dict):
        raise InterfaceValidationError("document must be a JSON object")

    try:
        required = RequiredInterfaceDTO.model_validate(document)
    except ValidationError as e:
        error = _first_error(e)
        raise InterfaceValidationError(error["reason"], field=error["field"]) from e

    violation = required.first_violation()
    if violation is not None:
        field_name, reason = violation
        logger.debug("interface.parse.rejected", field=field_name, reason=reason)
        raise InterfaceValidationError(reason, field=field_name)

    try:
        dto = InterfaceDTO.model_validate(document)
    except ValidationError as e:
        error = _first_error(e)
        logger.debug("interface.parse.rejected", **error)
        raise InterfaceValidationError(error["reason"], field=error["field"]) from e

    return ensure_interface_defaults(dto.to_entity())


def parse_interface_from_string(content: str) -> Interface:
    """Parse an interface from a JSON string."""
    return parse_interface(content.encode("utf-8"))


def parse_interface_from_file(path: Union[str, "os.PathLike[str]"]) -> Interface:
    """
    Parse an interface from a JSON file.

    Raises:
        OSError: If the file cannot be read
        InterfaceValidationError: If the document is not a valid interface
    """
    with open(path, "rb") as interface_file:
        return parse_interface(interface_file.read())


def interface_to_document(interface: Interface) -> Dict[str, Any]:
    """Serialize an interface back to its JSON-ready wire document."""
    return InterfaceDTO.from_entity(interface).to_document()
