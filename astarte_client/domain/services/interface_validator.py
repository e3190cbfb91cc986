"""
Domain Service - Interface Path Matching and Message Validation

Resolves concrete paths against the endpoint templates of an interface and
checks that values offered on those paths match the declared mapping types.
"""

from __future__ import annotations

import base64
import posixpath
from datetime import datetime, timezone
from typing import Any, Dict, List, Mapping as MappingABC

from astarte_client.domain.entities.errors import (
    InvalidQueryPathError,
    PathNotFoundError,
)
from astarte_client.domain.entities.interface import Interface, Mapping
from astarte_client.domain.entities.values import MappingValue, validate_type
from astarte_client.shared.consts import PARAMETRIC_MARKER


def _is_parametric_token(token: str) -> bool:
    return token.startswith(PARAMETRIC_MARKER)


def _simple_mapping_from_path(interface: Interface, path: str) -> Mapping:
    for mapping in interface.mappings:
        if mapping.endpoint == path:
            return mapping
    raise PathNotFoundError(path, interface.name)


def _parametric_mapping_from_path(interface: Interface, path: str) -> Mapping:
    path_tokens = path.split("/")
    for mapping in interface.mappings:
        mapping_tokens = mapping.endpoint.split("/")
        if len(mapping_tokens) != len(path_tokens):
            continue
        if all(
            path_token == token or _is_parametric_token(token)
            for path_token, token in zip(path_tokens, mapping_tokens)
        ):
            return mapping
    raise PathNotFoundError(path, interface.name)


def interface_mapping_from_path(interface: Interface, path: str) -> Mapping:
    """
    Resolve the mapping a concrete path belongs to.

    Non-parametric interfaces require an exact endpoint match. Parametric
    interfaces are matched segment by segment; the first mapping with the same
    number of segments where every segment is equal or parametric wins.

    Raises:
        PathNotFoundError: If no mapping matches.
    """
    if not interface.is_parametric():
        return _simple_mapping_from_path(interface, path)
    return _parametric_mapping_from_path(interface, path)


def validate_interface_path(interface: Interface, path: str) -> None:
    """Raise PathNotFoundError unless path resolves to a mapping of interface."""
    interface_mapping_from_path(interface, path)


def validate_individual_message(
    interface: Interface, path: str, value: Any
) -> MappingValue:
    """
    Validate a single value sent on path.

    Returns:
        The value tagged with the resolved mapping type.

    Raises:
        PathNotFoundError: If path does not exist on the interface.
        ValueTypeMismatchError: If value does not fit the mapping type.
    """
    mapping = interface_mapping_from_path(interface, path)
    return validate_type(mapping.type, value)


def validate_aggregate_message(
    interface: Interface, interface_path: str, values: MappingABC[str, Any]
) -> Dict[str, MappingValue]:
    """
    Validate an object aggregated message sent below interface_path.

    Keys of values are the last segment of each endpoint and must not contain
    slashes. Pairs are checked in order; the first failure is raised.
    """
    validated: Dict[str, MappingValue] = {}
    for key, value in values.items():
        if "/" in key:
            raise InvalidQueryPathError(
                "values must contain keys without slash", details={"key": key}
            )
        validated[key] = validate_individual_message(
            interface, posixpath.join(interface_path, key), value
        )
    return validated


def _validate_individual_query(interface: Interface, query_path: str) -> None:
    query_tokens = query_path.split("/")
    for mapping in interface.mappings:
        endpoint_tokens = mapping.endpoint.split("/")
        # Individual interfaces might have endpoints of different depths
        if len(query_tokens) > len(endpoint_tokens):
            continue
        if all(
            _is_parametric_token(endpoint_tokens[index]) or endpoint_tokens[index] == t
            for index, t in enumerate(query_tokens)
        ):
            return
    raise InvalidQueryPathError(
        f"{query_path} does not match valid query paths for interface"
    )


def _validate_aggregate_query(interface: Interface, query_path: str) -> None:
    query_tokens = query_path.split("/")
    for mapping in interface.mappings:
        endpoint_tokens = mapping.endpoint.split("/")
        if len(query_tokens) > len(endpoint_tokens) - 1:
            raise InvalidQueryPathError(
                f"{query_path} does not match valid query paths for interface"
            )
        for index, token in enumerate(query_tokens):
            if _is_parametric_token(endpoint_tokens[index]):
                continue
            if endpoint_tokens[index] != token:
                raise InvalidQueryPathError(
                    f"{query_path} does not match valid query paths for "
                    f"endpoint {mapping.endpoint}"
                )


def validate_query(interface: Interface, query_path: str) -> None:
    """
    Validate a path used to query values on interface.

    Individual interfaces accept any prefix of an existing mapping. Object
    aggregated interfaces require the query to match every endpoint down to
    the level above the leaves.

    Raises:
        InvalidQueryPathError: If the query cannot match the interface.
    """
    if query_path == "/":
        return

    query_path = query_path[:-1] if query_path.endswith("/") else query_path

    if interface.is_object_aggregated:
        _validate_aggregate_query(interface, query_path)
    else:
        _validate_individual_query(interface, query_path)


def normalize_payload(payload: Any, encode_bytes: bool) -> Any:
    """
    Prepare a payload for the AppEngine API.

    Datetimes are moved to UTC; bytes are base64 encoded when encode_bytes is
    set, for formats without a binary type such as JSON. Mappings and
    sequences are normalized recursively.
    """
    if isinstance(payload, (bytes, bytearray)):
        return base64.b64encode(payload).decode("ascii") if encode_bytes else payload
    if isinstance(payload, datetime):
        if payload.tzinfo is None:
            return payload.replace(tzinfo=timezone.utc)
        return payload.astimezone(timezone.utc)
    if isinstance(payload, MappingABC):
        return {
            key: normalize_payload(value, encode_bytes)
            for key, value in payload.items()
        }
    if isinstance(payload, (list, tuple)):
        normalized: List[Any] = [
            normalize_payload(item, encode_bytes) for item in payload
        ]
        return normalized
    return payload
