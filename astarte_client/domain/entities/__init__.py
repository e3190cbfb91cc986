"""
Domain Entities Package

Interfaces, triggers, telemetry values, devices and the domain errors.
"""

from .datastream import (
    DatastreamObjectValue,
    DatastreamValue,
    Links,
    PropertyValue,
    ResultSetOrder,
)
from .device import (
    DeviceDetails,
    DeviceIdentifierType,
    DeviceInterfaceIntrospection,
    DeviceResultFormat,
)
from .errors import (
    AppEngineError,
    DomainError,
    InterfaceValidationError,
    InvalidDeviceIDError,
    InvalidQueryPathError,
    PaginationExhaustedError,
    PaginatorConfigurationError,
    PathNotFoundError,
    SchemaValidationError,
    SnapshotParseError,
    TriggerValidationError,
    ValueTypeMismatchError,
)
from .interface import (
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
from .trigger import (
    HTTPMethod,
    SimpleTrigger,
    SimpleTriggerType,
    Trigger,
    TriggerAction,
    TriggerMatchOperator,
    TriggerOn,
)
from .values import MappingValue, compatible_types, validate_type

__all__ = [
    "AppEngineError",
    "DatastreamObjectValue",
    "DatastreamValue",
    "DeviceDetails",
    "DeviceIdentifierType",
    "DeviceInterfaceIntrospection",
    "DeviceResultFormat",
    "DomainError",
    "HTTPMethod",
    "Interface",
    "InterfaceAggregation",
    "InterfaceOwnership",
    "InterfaceType",
    "InterfaceValidationError",
    "InvalidDeviceIDError",
    "InvalidQueryPathError",
    "Links",
    "Mapping",
    "MappingDatabaseRetentionPolicy",
    "MappingReliability",
    "MappingRetention",
    "MappingType",
    "MappingValue",
    "PaginationExhaustedError",
    "PaginatorConfigurationError",
    "PathNotFoundError",
    "PropertyValue",
    "ResultSetOrder",
    "SchemaValidationError",
    "SimpleTrigger",
    "SimpleTriggerType",
    "SnapshotParseError",
    "Trigger",
    "TriggerAction",
    "TriggerMatchOperator",
    "TriggerOn",
    "TriggerValidationError",
    "ValueTypeMismatchError",
    "compatible_types",
    "validate_type",
]
