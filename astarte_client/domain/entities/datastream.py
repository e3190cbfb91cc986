"""Domain entities for telemetry values returned by AppEngine."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Dict, Mapping, Optional

from astarte_client.shared.timestamps import parse_timestamp

# Property values carry no envelope: any decoded JSON value.
PropertyValue = Any


def _wire(raw: Any) -> str:
    return raw if isinstance(raw, str) else ""


class ResultSetOrder(str, Enum):
    """Order in which a datastream paginator walks the samples."""

    ASCENDING = "ascending"
    DESCENDING = "descending"


@dataclass(frozen=True, slots=True)
class DatastreamValue:
    """
    One sample on an individually aggregated datastream path.

    ``timestamp`` is truncated to microseconds; ``timestamp_wire`` is the
    timestamp as received, nanosecond fraction included.
    """

    value: Any
    timestamp: datetime
    reception_timestamp: Optional[datetime] = None
    timestamp_wire: str = field(default="", compare=False, repr=False)

    @classmethod
    def from_json(cls, node: Mapping[str, Any]) -> "DatastreamValue":
        """
        Decode a ``{"value", "timestamp", "reception_timestamp"}`` object.

        Raises:
            ValueError: If the timestamp is missing or not RFC3339.
        """
        if "timestamp" not in node:
            raise ValueError("datastream value has no timestamp")
        reception = node.get("reception_timestamp")
        return cls(
            value=node.get("value"),
            timestamp=parse_timestamp(node["timestamp"]),
            reception_timestamp=parse_timestamp(reception) if reception else None,
            timestamp_wire=_wire(node["timestamp"]),
        )


@dataclass(frozen=True, slots=True)
class DatastreamObjectValue:
    """One sample on an object aggregated datastream, fields in source order."""

    values: Dict[str, Any] = field(default_factory=dict)
    timestamp: Optional[datetime] = None
    timestamp_wire: str = field(default="", compare=False, repr=False)

    @classmethod
    def from_json(cls, node: Mapping[str, Any]) -> "DatastreamObjectValue":
        """
        Decode an object sample, keeping every key but ``timestamp``.

        Raises:
            ValueError: If the timestamp is present but not RFC3339.
        """
        raw_timestamp = node.get("timestamp")
        values = {key: value for key, value in node.items() if key != "timestamp"}
        return cls(
            values=values,
            timestamp=parse_timestamp(raw_timestamp) if raw_timestamp else None,
            timestamp_wire=_wire(raw_timestamp),
        )


@dataclass(frozen=True, slots=True)
class Links:
    """Pagination links of an AppEngine list response."""

    self_url: Optional[str] = None
    next_url: Optional[str] = None

    @classmethod
    def from_json(cls, node: Optional[Mapping[str, Any]]) -> "Links":
        node = node or {}
        return cls(
            self_url=node.get("self") or None, next_url=node.get("next") or None
        )
