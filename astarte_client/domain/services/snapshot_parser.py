"""
Domain Service - Telemetry Snapshot Parsers

Flattens the nested JSON trees served by the AppEngine interface endpoints
into ``{"/full/path": value}`` mappings.

Two families live here and are kept apart on purpose:

* the permissive flatteners (``parse_individual_snapshot``,
  ``parse_object_snapshot``, ``parse_properties`` and the envelope helpers)
  used for live snapshots. Subtrees that never reach a leaf are dropped, as
  are leaves that fail to decode, and a partial result is returned. Callers
  passing a ``dropped`` list get the paths of the skipped leaves.
* the strict parsers (``parse_datastream_interface``,
  ``parse_aggregate_datastream_interface``, ``parse_property_interface``)
  which raise ``SnapshotParseError`` when a subtree has no object child and no
  leaf.
"""

from __future__ import annotations

import json
from typing import Any, Callable, Dict, List, Mapping, Optional, Union

from astarte_client.domain.entities.datastream import (
    DatastreamObjectValue,
    DatastreamValue,
    PropertyValue,
)
from astarte_client.domain.entities.errors import SnapshotParseError
from astarte_client.domain.entities.interface import InterfaceAggregation

MALFORMED_PAYLOAD_MESSAGE = "Could not parse Datastream - payload is likely malformed"


def decode_document(payload: Union[bytes, str, Mapping[str, Any]]) -> Any:
    """
    Decode a raw response body.

    Already decoded mappings are returned as they are. Object key order is
    preserved by the decoder.

    Raises:
        SnapshotParseError: If the body is not valid JSON.
    """
    if not isinstance(payload, (bytes, bytearray, str)):
        return payload
    try:
        return json.loads(payload)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise SnapshotParseError(
            f"Could not decode payload: {e}", details={"error": str(e)}
        ) from e


def decode_payload(payload: Union[bytes, str, Mapping[str, Any]]) -> Any:
    """Decode a raw response body, returning the content of its ``data`` key."""
    document = decode_document(payload)
    if isinstance(document, Mapping):
        return document.get("data")
    return None


def _decode_datastream_value(node: Mapping[str, Any]) -> DatastreamValue:
    try:
        return DatastreamValue.from_json(node)
    except ValueError as e:
        raise SnapshotParseError(str(e), details={"node": dict(node)}) from e


def _decode_object_value(node: Any) -> DatastreamObjectValue:
    if not isinstance(node, Mapping):
        raise SnapshotParseError(
            "object datastream sample is not an object",
            details={"node": node},
        )
    try:
        return DatastreamObjectValue.from_json(node)
    except ValueError as e:
        raise SnapshotParseError(str(e), details={"node": dict(node)}) from e


# Permissive flatteners


def _add_leaf(
    acc: Dict[str, Any],
    prefix: str,
    decoder: Callable[[Any], Any],
    node: Any,
    dropped: Optional[List[str]],
) -> None:
    try:
        acc[prefix] = decoder(node)
    except SnapshotParseError:
        if dropped is not None:
            dropped.append(prefix)


def parse_individual_snapshot(
    node: Any,
    prefix: str,
    acc: Dict[str, DatastreamValue],
    dropped: Optional[List[str]] = None,
) -> Dict[str, DatastreamValue]:
    """
    Flatten an individually aggregated datastream snapshot into acc.

    A leaf is an object holding both ``value`` and ``timestamp`` where
    ``value`` is not itself an object, so that a path segment named ``value``
    is still walked. Non-object nodes that are not leaves produce no entry.
    """
    if not isinstance(node, Mapping):
        return acc

    if (
        "value" in node
        and "timestamp" in node
        and not isinstance(node["value"], Mapping)
    ):
        _add_leaf(acc, prefix, _decode_datastream_value, node, dropped)
        return acc

    for key, child in node.items():
        parse_individual_snapshot(child, f"{prefix}/{key}", acc, dropped)
    return acc


def parse_object_snapshot(
    node: Any,
    prefix: str,
    acc: Dict[str, DatastreamObjectValue],
    dropped: Optional[List[str]] = None,
) -> Dict[str, DatastreamObjectValue]:
    """
    Flatten an object aggregated datastream snapshot into acc.

    Arrays are leaves: a snapshot carries exactly one sample per array, the
    first element is decoded. An object holding a non-object ``timestamp`` is
    a leaf as well. Values keep the order they had in the source document.
    """
    if isinstance(node, list):
        if node:
            _add_leaf(acc, prefix, _decode_object_value, node[0], dropped)
        return acc

    if not isinstance(node, Mapping):
        return acc

    if "timestamp" in node and not isinstance(node["timestamp"], Mapping):
        _add_leaf(acc, prefix, _decode_object_value, node, dropped)
        return acc

    for key, child in node.items():
        parse_object_snapshot(child, f"{prefix}/{key}", acc, dropped)
    return acc


def parse_properties(
    node: Any, prefix: str, acc: Dict[str, PropertyValue]
) -> Dict[str, PropertyValue]:
    """Flatten a properties tree into acc; any non-object node is a value."""
    if not isinstance(node, Mapping):
        acc[prefix] = node
        return acc

    for key, child in node.items():
        parse_properties(child, f"{prefix}/{key}", acc)
    return acc


def parse_datastream_snapshot(
    payload: Union[bytes, str, Mapping[str, Any]],
    aggregation: Optional[InterfaceAggregation],
    dropped: Optional[List[str]] = None,
) -> Dict[str, Any]:
    """
    Flatten the ``{"data": ...}`` envelope of a datastream snapshot.

    Returns DatastreamValue entries for individual interfaces and
    DatastreamObjectValue entries for object aggregated ones. Paths of
    leaves that could not be decoded are appended to ``dropped``.
    """
    data = decode_payload(payload)
    if aggregation == InterfaceAggregation.OBJECT:
        return parse_object_snapshot(data, "", {}, dropped)
    return parse_individual_snapshot(data, "", {}, dropped)


def parse_properties_snapshot(
    payload: Union[bytes, str, Mapping[str, Any]],
) -> Dict[str, PropertyValue]:
    """Flatten the ``{"data": ...}`` envelope of a properties snapshot."""
    data = decode_payload(payload)
    if data is None:
        return {}
    return parse_properties(data, "", {})


# Strict parsers


def _require_mapping(data: Any) -> Mapping[str, Any]:
    if not isinstance(data, Mapping):
        raise SnapshotParseError(MALFORMED_PAYLOAD_MESSAGE, details={"data": data})
    return data


def _parse_datastream_map(
    node: Mapping[str, Any], path: str
) -> Dict[str, DatastreamValue]:
    value = node.get("value")
    if "value" in node and not isinstance(value, Mapping):
        return {path: _decode_datastream_value(node)}

    parsed: Dict[str, DatastreamValue] = {}
    found_anything = False
    for key, child in node.items():
        if isinstance(child, Mapping):
            found_anything = True
            parsed.update(_parse_datastream_map(child, f"{path}/{key}"))
    if not found_anything:
        raise SnapshotParseError(MALFORMED_PAYLOAD_MESSAGE, details={"path": path})
    return parsed


def _parse_aggregate_datastream_map(
    node: Mapping[str, Any], path: str
) -> Dict[str, DatastreamObjectValue]:
    timestamp = node.get("timestamp")
    if "timestamp" in node and not isinstance(timestamp, Mapping):
        return {path: _decode_object_value(node)}

    parsed: Dict[str, DatastreamObjectValue] = {}
    found_anything = False
    for key, child in node.items():
        if isinstance(child, Mapping):
            found_anything = True
            parsed.update(_parse_aggregate_datastream_map(child, f"{path}/{key}"))
    if not found_anything:
        raise SnapshotParseError(MALFORMED_PAYLOAD_MESSAGE, details={"path": path})
    return parsed


def _parse_property_map(node: Mapping[str, Any], path: str) -> Dict[str, Any]:
    parsed: Dict[str, Any] = {}
    for key, child in node.items():
        if isinstance(child, Mapping):
            parsed.update(_parse_property_map(child, f"{path}/{key}"))
        else:
            parsed[f"{path}/{key}"] = child
    return parsed


def parse_datastream_interface(data: Any) -> Dict[str, DatastreamValue]:
    """
    Parse the ``data`` content of an individual datastream interface.

    A node holding a non-object ``value`` is a sample; otherwise only object
    children are walked.

    Raises:
        SnapshotParseError: If a subtree has neither a sample nor an object
            child, or a sample has no valid timestamp.
    """
    return _parse_datastream_map(_require_mapping(data), "")


def parse_aggregate_datastream_interface(
    data: Any,
) -> Dict[str, DatastreamObjectValue]:
    """
    Parse the ``data`` content of an object aggregated datastream interface.

    A node holding a non-object ``timestamp`` is a sample whose other keys,
    in document order, are its values.

    Raises:
        SnapshotParseError: If a subtree has neither a sample nor an object
            child, or a sample timestamp is not RFC3339.
    """
    return _parse_aggregate_datastream_map(_require_mapping(data), "")


def parse_property_interface(data: Any) -> Dict[str, PropertyValue]:
    """Parse the ``data`` content of a properties interface."""
    return _parse_property_map(_require_mapping(data), "")


def parse_datastream_rows(
    data: Any, aggregation: Optional[InterfaceAggregation]
) -> Union[List[Any], Dict[str, Any]]:
    """
    Decode the ``data`` content of a datastream time series page.

    Lists are decoded row by row. Anything else is a snapshot tree and is
    flattened with the permissive parsers.
    """
    object_aggregated = aggregation == InterfaceAggregation.OBJECT
    if isinstance(data, list):
        if object_aggregated:
            return [_decode_object_value(row) for row in data]
        return [_decode_datastream_value(_require_mapping(row)) for row in data]
    if object_aggregated:
        return parse_object_snapshot(data, "", {})
    return parse_individual_snapshot(data, "", {})
