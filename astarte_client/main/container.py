"""
Dependency container injection module - Main Layer

This module implements the dependency injection container wiring the
client settings into the AppEngine gateway and the use cases.
"""

from typing import Optional

from dependency_injector import containers, providers

from astarte_client.application.use_cases import (
    GetDatastreamSnapshotUseCase,
    GetInterfaceValuesUseCase,
    GetLastDatastreamsUseCase,
    GetNextDatastreamPageUseCase,
    GetNextDeviceListPageUseCase,
    GetPropertiesUseCase,
)
from astarte_client.domain.services.paginators import (
    DatastreamPaginator,
    DeviceListPaginator,
)
from astarte_client.infrastructure.gateways import AppEngineGateway
from astarte_client.shared import get_logger

from .config import AppSettings

logger = get_logger(__name__)


class AppContainer(containers.DeclarativeContainer):
    """Composition Root using dependency-injector."""

    wiring_config = containers.WiringConfiguration(packages=["..application"])

    # Settings
    config = providers.Configuration()

    # Gateways
    appengine_gateway = providers.Singleton(
        AppEngineGateway,
        base_url=config.appengine.appengine_url,
        realm=config.appengine.realm,
        token=config.appengine.token,
        timeout=config.appengine.timeout,
    )

    # Paginators are stateful: one per iteration
    datastream_paginator = providers.Factory(
        DatastreamPaginator,
        page_size=config.appengine.page_size,
    )

    device_list_paginator = providers.Factory(
        DeviceListPaginator,
        page_size=config.appengine.page_size,
    )

    # Application (use cases)
    get_datastream_snapshot_use_case = providers.Factory(
        GetDatastreamSnapshotUseCase,
        appengine_gateway=appengine_gateway,
    )

    get_properties_use_case = providers.Factory(
        GetPropertiesUseCase,
        appengine_gateway=appengine_gateway,
    )

    get_interface_values_use_case = providers.Factory(
        GetInterfaceValuesUseCase,
        appengine_gateway=appengine_gateway,
    )

    get_last_datastreams_use_case = providers.Factory(
        GetLastDatastreamsUseCase,
        appengine_gateway=appengine_gateway,
    )

    get_next_datastream_page_use_case = providers.Factory(
        GetNextDatastreamPageUseCase,
        appengine_gateway=appengine_gateway,
    )

    get_next_device_list_page_use_case = providers.Factory(
        GetNextDeviceListPageUseCase,
        appengine_gateway=appengine_gateway,
    )


# -------------------------
# Global Container Instance
# -------------------------
_app_container: Optional[AppContainer] = None


def init_container(settings: AppSettings) -> AppContainer:
    """Initialize global container with client settings."""

    global _app_container

    container = AppContainer()
    container.config.from_pydantic(settings)
    _app_container = container
    logger.info(
        "container.initialized",
        appengine_url=settings.appengine.appengine_url,
        realm=settings.appengine.realm,
    )
    return container


def get_container() -> AppContainer:
    """Get the initialized global container."""

    if _app_container is None:
        raise RuntimeError("Container has not been initialized yet")

    return _app_container
