"""
Trigger Parser - Application Layer

Parses Astarte trigger documents: ordered required-field pass first, then
full decoding, then defaults.
"""

import json
import os
from pathlib import Path
from typing import Any, Dict, Union

from pydantic import ValidationError

from astarte_client.application.dtos.trigger_dto import (
    RequiredTriggerDTO,
    TriggerDTO,
)
from astarte_client.domain.entities.errors import TriggerValidationError
from astarte_client.domain.entities.trigger import Trigger
from astarte_client.domain.services.schema_defaults import ensure_trigger_defaults
from astarte_client.shared import get_logger

logger = get_logger(__name__)


def _wrap_validation_error(error: ValidationError) -> TriggerValidationError:
    detail = error.errors()[0]
    field_name = ".".join(str(part) for part in detail.get("loc", ()))
    return TriggerValidationError(
        f"Invalid trigger: {field_name}: {detail.get('msg', str(error))}",
        field=field_name or None,
    )


def parse_trigger(content: Union[bytes, str]) -> Trigger:
    """
    Parse a trigger from its JSON document.

    Exactly one simple trigger is accepted. Device triggers need one of
    device_id or group_name and no data trigger field; data triggers need an
    interface, a major version unless the interface is ``*``, a match path, an
    operator and a known value unless the operator is ``*``.

    Raises:
        TriggerValidationError: With the message of the first violated rule.
    """
    try:
        document = json.loads(content)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise TriggerValidationError(f"Invalid trigger: malformed JSON: {e}") from e
    if not isinstance(document, dict):
        raise TriggerValidationError("Invalid trigger: document must be a JSON object")

    try:
        required = RequiredTriggerDTO.model_validate(document)
    except ValidationError as e:
        raise _wrap_validation_error(e) from e

    violation = required.first_violation()
    if violation:
        logger.debug("trigger.parse.rejected", reason=violation)
        raise TriggerValidationError(violation)

    try:
        dto = TriggerDTO.model_validate(document)
    except ValidationError as e:
        raise _wrap_validation_error(e) from e

    return ensure_trigger_defaults(dto.to_entity())


def parse_trigger_from(source: Union[bytes, str, "os.PathLike[str]"]) -> Trigger:
    """
    Parse a trigger from raw content or from a file.

    Bytes are the JSON document itself; strings and path-like objects are
    paths of a file holding it.

    Raises:
        OSError: If the file cannot be read
        TriggerValidationError: If the document is not a valid trigger
    """
    if isinstance(source, (bytes, bytearray)):
        return parse_trigger(bytes(source))
    if isinstance(source, (str, os.PathLike)):
        return parse_trigger(Path(source).read_bytes())
    raise TypeError("Provided value cannot be used as an Astarte Trigger")


def trigger_to_document(trigger: Trigger) -> Dict[str, Any]:
    """Serialize a trigger back to its JSON-ready wire document."""
    return TriggerDTO.from_entity(trigger).to_document()
