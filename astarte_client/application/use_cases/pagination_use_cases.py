"""
Pagination Use Cases - Application Layer

This module defines use cases fetching the next page of a paginator and
advancing its cursor with the result.
"""

from typing import Any, Dict, List, Union

from dependency_injector.wiring import Provide, inject

from astarte_client.domain.entities.device import DeviceDetails, DeviceIdentifierType
from astarte_client.domain.gateways.appengine_gateway import IAppEngineGateway
from astarte_client.domain.services.paginators import (
    DatastreamPaginator,
    DeviceListPaginator,
)
from astarte_client.shared import get_logger

logger = get_logger(__name__)


class GetNextDeviceListPageUseCase:
    """Use case for walking the device list of the realm one page at a time."""

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
        self, paginator: DeviceListPaginator
    ) -> List[Union[str, DeviceDetails]]:
        """
        Fetch the next device list page and advance paginator.

        Returns:
            Device IDs, or DeviceDetails when the paginator asks for details

        Raises:
            PaginationExhaustedError: If paginator has no more pages
            AppEngineError: If AppEngine does not answer 200
        """
        query = paginator.next_page_query()
        document = await self.appengine_gateway.get_data(
            self.appengine_gateway.devices_path(), query
        )
        page = paginator.parse_page(document)

        logger.info(
            "paginator.devices.advanced",
            page_length=len(page),
            has_next_page=paginator.has_next_page(),
        )
        return page


class GetNextDatastreamPageUseCase:
    """Use case for walking the samples of a datastream path."""

    @inject
    def __init__(
        self,
        appengine_gateway: IAppEngineGateway = Provide["appengine_gateway"],
    ):
        self.appengine_gateway = appengine_gateway

    async def execute(
        self,
        paginator: DatastreamPaginator,
        device_identifier: str,
        interface_name: str,
        interface_path: str = "",
        identifier_type: DeviceIdentifierType = DeviceIdentifierType.AUTODISCOVER,
    ) -> Union[List[Any], Dict[str, Any]]:
        """
        Fetch the next datastream page and advance paginator.

        A non-200 answer past the first page is the empty last page of a
        result set whose size is a multiple of the page size: an empty list
        is returned and the paginator is exhausted.

        Raises:
            PaginationExhaustedError: If paginator has no more pages
            AppEngineError: If AppEngine does not answer 200 to the first page
        """
        query = paginator.next_page_query()
        path = self.appengine_gateway.interface_path(
            device_identifier, interface_name, interface_path, identifier_type
        )
        response = await self.appengine_gateway.fetch(path, query)

        if not response.ok:
            if paginator.accept_failed_page(response.status_code):
                logger.info(
                    "paginator.datastream.trailing_page_failed",
                    interface=interface_name,
                    path=interface_path,
                    status_code=response.status_code,
                )
                return []
            error = response.to_error()
            logger.error(
                "paginator.datastream.first_page_failed",
                interface=interface_name,
                path=interface_path,
                status_code=response.status_code,
                errors=error.errors,
            )
            raise error

        page = paginator.parse_page(response.body)
        logger.info(
            "paginator.datastream.advanced",
            interface=interface_name,
            path=interface_path,
            page_length=len(page),
            has_next_page=paginator.has_next_page(),
        )
        return page
