"""
Application DTOs - Interface

This module contains the wire documents of Astarte interfaces. The required
DTOs check that mandatory fields are present, and already decode the
interface type and ownership; the full DTOs decode every field into the
domain enumerations and convert to and from the entities.
"""

from typing import List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, StrictInt, StrictStr

from astarte_client.domain.entities.interface import (
    Interface,
    InterfaceAggregation,
    InterfaceOwnership,
    InterfaceType,
    Mapping,
    MappingDatabaseRetentionPolicy,
    MappingReliability,
    MappingRetention,
    MappingType,
)


def _missing(value: object) -> bool:
    return value is None or value == ""


class RequiredMappingDTO(BaseModel):
    """Mandatory fields of a mapping."""

    model_config = ConfigDict(extra="ignore")

    endpoint: Optional[StrictStr] = None
    type: Optional[StrictStr] = None


class RequiredInterfaceDTO(BaseModel):
    """
    Mandatory fields of an interface, checked before full decoding.

    ``type`` and ``ownership`` are decoded into their enumerations here, so an
    invalid value fails validation before any missing field is reported.
    """

    model_config = ConfigDict(extra="ignore")

    interface_name: Optional[StrictStr] = None
    version_major: Optional[StrictInt] = None
    version_minor: Optional[StrictInt] = None
    type: Optional[InterfaceType] = None
    ownership: Optional[InterfaceOwnership] = None
    mappings: Optional[List[RequiredMappingDTO]] = None

    def first_violation(self) -> Optional[Tuple[str, str]]:
        """
        Return the first missing mandatory field as ``(field, reason)``.

        Fields are checked in document order: name, versions, type,
        ownership, mappings, then endpoint and type of every mapping.
        """
        for field_name in (
            "interface_name",
            "version_major",
            "version_minor",
            "type",
            "ownership",
        ):
            if _missing(getattr(self, field_name)):
                return field_name, f"{field_name} must be set"

        if not self.mappings:
            return "mappings", "no mappings are present"

        for mapping in self.mappings:
            if _missing(mapping.endpoint):
                return "endpoint", "missing endpoint in mapping"
            if _missing(mapping.type):
                return "type", "missing type in mapping"
        return None


class MappingDTO(BaseModel):
    """Full wire document of a mapping."""

    model_config = ConfigDict(extra="ignore")

    endpoint: str = Field(..., min_length=1)
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

    def to_entity(self) -> Mapping:
        return Mapping(
            endpoint=self.endpoint,
            type=self.type,
            reliability=self.reliability,
            retention=self.retention,
            database_retention_policy=self.database_retention_policy,
            database_retention_ttl=self.database_retention_ttl,
            expiry=self.expiry,
            explicit_timestamp=self.explicit_timestamp,
            allow_unset=self.allow_unset,
            description=self.description,
            doc=self.doc,
        )

    @classmethod
    def from_entity(cls, mapping: Mapping) -> "MappingDTO":
        return cls(
            endpoint=mapping.endpoint,
            type=mapping.type,
            reliability=mapping.reliability,
            retention=mapping.retention,
            database_retention_policy=mapping.database_retention_policy,
            database_retention_ttl=mapping.database_retention_ttl,
            expiry=mapping.expiry,
            explicit_timestamp=mapping.explicit_timestamp,
            allow_unset=mapping.allow_unset,
            description=mapping.description,
            doc=mapping.doc,
        )


class InterfaceDTO(BaseModel):
    """Full wire document of an interface."""

    model_config = ConfigDict(extra="ignore")

    interface_name: str = Field(..., min_length=1)
    version_major: int = Field(..., ge=0)
    version_minor: int = Field(..., ge=0)
    type: InterfaceType
    ownership: InterfaceOwnership
    aggregation: Optional[InterfaceAggregation] = None
    explicit_timestamp: bool = False
    has_metadata: bool = False
    description: Optional[str] = None
    doc: Optional[str] = None
    mappings: List[MappingDTO] = Field(..., min_length=1)

    def to_entity(self) -> Interface:
        return Interface(
            name=self.interface_name,
            major_version=self.version_major,
            minor_version=self.version_minor,
            type=self.type,
            ownership=self.ownership,
            aggregation=self.aggregation,
            explicit_timestamp=self.explicit_timestamp,
            has_metadata=self.has_metadata,
            description=self.description,
            doc=self.doc,
            mappings=tuple(mapping.to_entity() for mapping in self.mappings),
        )

    @classmethod
    def from_entity(cls, interface: Interface) -> "InterfaceDTO":
        return cls(
            interface_name=interface.name,
            version_major=interface.major_version,
            version_minor=interface.minor_version,
            type=interface.type,
            ownership=interface.ownership,
            aggregation=interface.aggregation,
            explicit_timestamp=interface.explicit_timestamp,
            has_metadata=interface.has_metadata,
            description=interface.description,
            doc=interface.doc,
            mappings=[MappingDTO.from_entity(m) for m in interface.mappings],
        )

    def to_document(self) -> dict:
        """Return the JSON-ready wire document, omitting unset optional fields."""
        return self.model_dump(mode="json", exclude_none=True)
