"""
Domain Entities - Interface

This module defines Astarte interfaces: versioned schemas describing one
capability tree a device exposes, made of mappings binding endpoint templates
to value types and delivery attributes.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Tuple

from astarte_client.domain.entities.wire_enum import WireEnum
from astarte_client.shared.consts import PARAMETRIC_MARKER


class InterfaceType(WireEnum):
    """Kind of data exchanged by an interface."""

    PROPERTIES = "properties"
    DATASTREAM = "datastream"


class InterfaceOwnership(WireEnum):
    """Who is allowed to write on an interface."""

    DEVICE = "device"
    SERVER = "server"


class InterfaceAggregation(WireEnum):
    """Whether endpoints are sampled independently or as one object."""

    INDIVIDUAL = "individual"
    OBJECT = "object"


class MappingReliability(WireEnum):
    """QoS-like reliability of a mapping on the wire."""

    UNRELIABLE = "unreliable"
    GUARANTEED = "guaranteed"
    UNIQUE = "unique"


class MappingRetention(WireEnum):
    """What happens to a sample that cannot be sent right away."""

    DISCARD = "discard"
    VOLATILE = "volatile"
    STORED = "stored"


class MappingDatabaseRetentionPolicy(WireEnum):
    """Whether stored samples expire."""

    NO_TTL = "no_ttl"
    USE_TTL = "use_ttl"


class MappingType(WireEnum):
    """Value type declared by a mapping."""

    DOUBLE = "double"
    INTEGER = "integer"
    BOOLEAN = "boolean"
    LONG_INTEGER = "longinteger"
    STRING = "string"
    BINARY_BLOB = "binaryblob"
    DATETIME = "datetime"
    DOUBLE_ARRAY = "doublearray"
    INTEGER_ARRAY = "integerarray"
    BOOLEAN_ARRAY = "booleanarray"
    LONG_INTEGER_ARRAY = "longintegerarray"
    STRING_ARRAY = "stringarray"
    BINARY_BLOB_ARRAY = "binaryblobarray"
    DATETIME_ARRAY = "datetimearray"

    @property
    def is_array(self) -> bool:
        return self.value.endswith("array")

    @property
    def element_type(self) -> "MappingType":
        """Scalar type of an array type; scalar types return themselves."""
        if not self.is_array:
            return self
        return MappingType(self.value[: -len("array")])

    def as_array(self) -> "MappingType":
        if self.is_array:
            return self
        return MappingType(f"{self.value}array")


@dataclass(frozen=True, slots=True)
class Mapping:
    """A single endpoint of an interface."""

    endpoint: str
    type: MappingType
    reliability: Optional[MappingReliability] = None
    retention: Optional[MappingRetention] = None
    database_retention_policy: Optional[MappingDatabaseRetentionPolicy] = None
    database_retention_ttl: Optional[int] = None
    expiry: int = 0
    explicit_timestamp: bool = False
    allow_unset: bool = False
    description: Optional[str] = None
    doc: Optional[str] = None

    @property
    def is_parametric(self) -> bool:
        return PARAMETRIC_MARKER in self.endpoint


@dataclass(frozen=True, slots=True)
class Interface:
    """A versioned Astarte interface."""

    name: str
    major_version: int
    minor_version: int
    type: InterfaceType
    ownership: InterfaceOwnership
    aggregation: Optional[InterfaceAggregation] = None
    explicit_timestamp: bool = False
    has_metadata: bool = False
    description: Optional[str] = None
    doc: Optional[str] = None
    mappings: Tuple[Mapping, ...] = field(default_factory=tuple)

    def is_parametric(self) -> bool:
        """Return whether at least one mapping endpoint is parametric."""
        return any(mapping.is_parametric for mapping in self.mappings)

    @property
    def is_object_aggregated(self) -> bool:
        return self.aggregation == InterfaceAggregation.OBJECT
