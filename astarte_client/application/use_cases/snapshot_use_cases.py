"""
Snapshot Use Cases - Application Layer

This module defines use cases reading the current values of device
interfaces: datastream snapshots, properties and whole-interface reads.
"""

from typing import Any, Dict, List, Union

from dependency_injector.wiring import Provide, inject

from astarte_client.domain.entities.datastream import (
    DatastreamObjectValue,
    DatastreamValue,
    PropertyValue,
)
from astarte_client.domain.entities.device import DeviceIdentifierType
from astarte_client.domain.entities.interface import (
    Interface,
    InterfaceAggregation,
    InterfaceType,
)
from astarte_client.domain.gateways.appengine_gateway import IAppEngineGateway
from astarte_client.domain.services.interface_validator import validate_query
from astarte_client.domain.services.snapshot_parser import (
    parse_aggregate_datastream_interface,
    parse_datastream_interface,
    parse_datastream_rows,
    parse_datastream_snapshot,
    parse_properties,
    parse_property_interface,
)
from astarte_client.shared import get_logger

logger = get_logger(__name__)


class GetDatastreamSnapshotUseCase:
    """Use case for reading the last sample of every path of a datastream."""

    @inject
    def __init__(
        self,
        appengine_gateway: IAppEngineGateway = Provide["appengine_gateway"],
    ):
        """
        Initialize the use case with its dependencies.

        Args:
            appengine_gateway: Gateway for communicating with AppEngine
        """
        self.appengine_gateway = appengine_gateway

    async def execute(
        self,
        device_identifier: str,
        interface_name: str,
        aggregation: InterfaceAggregation = InterfaceAggregation.INDIVIDUAL,
        identifier_type: DeviceIdentifierType = DeviceIdentifierType.AUTODISCOVER,
    ) -> Dict[str, Union[DatastreamValue, DatastreamObjectValue]]:
        """
        Read the datastream snapshot of an interface.

        Subtrees that never reach a sample, and samples that cannot be
        decoded, are left out of the result.

        Returns:
            Samples keyed by full path

        Raises:
            AppEngineError: If AppEngine does not answer 200
            SnapshotParseError: If the response body is not JSON
        """
        path = self.appengine_gateway.interface_path(
            device_identifier, interface_name, identifier_type=identifier_type
        )
        # Object snapshots must be limited to the newest sample
        params = {"limit": "1"} if aggregation == InterfaceAggregation.OBJECT else {}

        logger.info(
            "snapshot.datastream.fetch_started",
            interface=interface_name,
            aggregation=aggregation.value,
        )
        document = await self.appengine_gateway.get_data(path, params)
        dropped: List[str] = []
        snapshot = parse_datastream_snapshot(document, aggregation, dropped)
        for leaf_path in dropped:
            logger.debug(
                "snapshot.leaf_dropped", interface=interface_name, path=leaf_path
            )

        logger.info(
            "snapshot.datastream.parsed",
            interface=interface_name,
            path_count=len(snapshot),
            dropped_count=len(dropped),
        )
        return snapshot


class GetPropertiesUseCase:
    """Use case for reading the properties set on a device interface."""

    @inject
    def __init__(
        self,
        appengine_gateway: IAppEngineGateway = Provide["appengine_gateway"],
    ):
        self.appengine_gateway = appengine_gateway

    async def execute(
        self,
        device_identifier: str,
        interface_name: str,
        interface_path: str = "",
        identifier_type: DeviceIdentifierType = DeviceIdentifierType.AUTODISCOVER,
    ) -> Dict[str, PropertyValue]:
        """
        Read every property of an interface, or those below interface_path.

        Returns:
            Property values keyed by full path
        """
        path = self.appengine_gateway.interface_path(
            device_identifier, interface_name, interface_path, identifier_type
        )
        document = await self.appengine_gateway.get_data(path)
        data = document.get("data")
        if data is None:
            return {}

        properties = parse_properties(data, interface_path.rstrip("/"), {})
        logger.info(
            "snapshot.properties.parsed",
            interface=interface_name,
            path_count=len(properties),
        )
        return properties


class GetInterfaceValuesUseCase:
    """
    Use case for reading a whole interface with the strict parsers.

    Unlike the snapshot use cases a malformed payload is an error.
    """

    @inject
    def __init__(
        self,
        appengine_gateway: IAppEngineGateway = Provide["appengine_gateway"],
    ):
        self.appengine_gateway = appengine_gateway

    async def execute(
        self,
        device_identifier: str,
        interface: Interface,
        identifier_type: DeviceIdentifierType = DeviceIdentifierType.AUTODISCOVER,
    ) -> Dict[str, Any]:
        """
        Read the values of every path of interface.

        Raises:
            AppEngineError: If AppEngine does not answer 200
            SnapshotParseError: If the payload is malformed
        """
        path = self.appengine_gateway.interface_path(
            device_identifier, interface.name, identifier_type=identifier_type
        )
        params = {"limit": "1"} if interface.is_object_aggregated else {}
        document = await self.appengine_gateway.get_data(path, params)
        data = document.get("data")

        if interface.type == InterfaceType.PROPERTIES:
            return parse_property_interface(data or {})
        if interface.is_object_aggregated:
            if not data:
                return {}
            return parse_aggregate_datastream_interface(data)
        return parse_datastream_interface(data)


class GetLastDatastreamsUseCase:
    """Use case for reading the newest samples sent on a datastream path."""

    @inject
    def __init__(
        self,
        appengine_gateway: IAppEngineGateway = Provide["appengine_gateway"],
    ):
        self.appengine_gateway = appengine_gateway

    async def execute(
        self,
        device_identifier: str,
        interface: Interface,
        interface_path: str,
        limit: int = 0,
        identifier_type: DeviceIdentifierType = DeviceIdentifierType.AUTODISCOVER,
    ) -> List[Union[DatastreamValue, DatastreamObjectValue]]:
        """
        Read the newest samples on interface_path, newest first.

        A limit of 0 or less returns every sample; prefer a paginator then.

        Raises:
            InvalidQueryPathError: If interface_path cannot be queried
            AppEngineError: If AppEngine does not answer 200
        """
        validate_query(interface, interface_path)

        path = self.appengine_gateway.interface_path(
            device_identifier, interface.name, interface_path, identifier_type
        )
        params = {"limit": str(limit)} if limit > 0 else {}
        document = await self.appengine_gateway.get_data(path, params)

        rows = parse_datastream_rows(document.get("data") or [], interface.aggregation)
        if not isinstance(rows, list):
            logger.warning(
                "datastream.last.unexpected_snapshot",
                interface=interface.name,
                path=interface_path,
            )
            return list(rows.values())
        return rows
