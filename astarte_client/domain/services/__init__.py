"""
Domain Services Package

Path matching, payload validation, snapshot parsing, pagination state and
device identifier helpers. Everything here is pure and synchronous.
"""

from .device_id import (
    device_id_to_uuid,
    generate_namespaced_device_id,
    generate_random_device_id,
    is_valid_device_id,
    uuid_to_device_id,
)
from .interface_validator import (
    interface_mapping_from_path,
    normalize_payload,
    validate_aggregate_message,
    validate_individual_message,
    validate_interface_path,
    validate_query,
)
from .paginators import DatastreamPaginator, DeviceListPaginator, PaginatorState
from .schema_defaults import ensure_interface_defaults, ensure_trigger_defaults
from .snapshot_parser import (
    parse_aggregate_datastream_interface,
    parse_datastream_interface,
    parse_datastream_snapshot,
    parse_individual_snapshot,
    parse_object_snapshot,
    parse_properties,
    parse_properties_snapshot,
    parse_property_interface,
)

__all__ = [
    "DatastreamPaginator",
    "DeviceListPaginator",
    "PaginatorState",
    "device_id_to_uuid",
    "ensure_interface_defaults",
    "ensure_trigger_defaults",
    "generate_namespaced_device_id",
    "generate_random_device_id",
    "interface_mapping_from_path",
    "is_valid_device_id",
    "normalize_payload",
    "parse_aggregate_datastream_interface",
    "parse_datastream_interface",
    "parse_datastream_snapshot",
    "parse_individual_snapshot",
    "parse_object_snapshot",
    "parse_properties",
    "parse_properties_snapshot",
    "parse_property_interface",
    "uuid_to_device_id",
    "validate_aggregate_message",
    "validate_individual_message",
    "validate_interface_path",
    "validate_query",
]
