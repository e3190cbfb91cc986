"""
Use Cases Package - Application Layer

This package contains the use cases reading device data through the AppEngine
gateway.
"""

from .pagination_use_cases import (
    GetNextDatastreamPageUseCase,
    GetNextDeviceListPageUseCase,
)
from .snapshot_use_cases import (
    GetDatastreamSnapshotUseCase,
    GetInterfaceValuesUseCase,
    GetLastDatastreamsUseCase,
    GetPropertiesUseCase,
)

__all__ = [
    "GetDatastreamSnapshotUseCase",
    "GetInterfaceValuesUseCase",
    "GetLastDatastreamsUseCase",
    "GetNextDatastreamPageUseCase",
    "GetNextDeviceListPageUseCase",
    "GetPropertiesUseCase",
]
