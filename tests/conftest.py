from __future__ import annotations

import copy
import json
from typing import Any, Dict, List, Mapping, Optional, Tuple

import pytest

from astarte_client.application.services import parse_interface
from astarte_client.domain.entities.device import DeviceIdentifierType
from astarte_client.domain.entities.interface import Interface
from astarte_client.domain.gateways.appengine_gateway import (
    IAppEngineGateway,
    RawResponse,
)

SENSORS_INTERFACE: Dict[str, Any] = {
    "interface_name": "org.astarte-platform.genericsensors.AvailableSensors",
    "version_major": 0,
    "version_minor": 1,
    "type": "properties",
    "ownership": "device",
    "aggregation": "individual",
    "description": "Describes available generic sensors.",
    "mappings": [
        {
            "endpoint": "/%{sensor_id}/name",
            "type": "string",
            "description": "Sensor name.",
            "retention": "discard",
            "reliability": "unreliable",
            "database_retention_policy": "use_ttl",
            "database_retention_ttl": 200,
        },
        {
            "endpoint": "/%{sensor_id}/unit",
            "type": "string",
            "description": "Sample data measurement unit.",
        },
    ],
}

TYPES_INTERFACE: Dict[str, Any] = {
    "interface_name": "org.astarte-platform.tests.TypeValidation",
    "version_major": 0,
    "version_minor": 1,
    "type": "datastream",
    "ownership": "device",
    "mappings": [
        {"endpoint": "/integerValue", "type": "integer"},
        {"endpoint": "/longintegerValue", "type": "longinteger"},
        {"endpoint": "/doubleValue", "type": "double"},
        {"endpoint": "/stringValue", "type": "string"},
        {"endpoint": "/booleanValue", "type": "boolean"},
        {"endpoint": "/datetimeValue", "type": "datetime"},
        {"endpoint": "/binaryblobValue", "type": "binaryblob"},
        {"endpoint": "/integerArray", "type": "integerarray"},
        {"endpoint": "/longintegerArray", "type": "longintegerarray"},
        {"endpoint": "/doubleArray", "type": "doublearray"},
        {"endpoint": "/stringArray", "type": "stringarray"},
    ],
}

OBJECT_INTERFACE: Dict[str, Any] = {
    "interface_name": "org.astarte-platform.genericsensors.Values",
    "version_major": 1,
    "version_minor": 0,
    "type": "datastream",
    "ownership": "device",
    "aggregation": "object",
    "mappings": [
        {"endpoint": "/%{sensor_id}/value", "type": "double"},
        {"endpoint": "/%{sensor_id}/label", "type": "string"},
    ],
}

DATA_TRIGGER: Dict[str, Any] = {
    "name": "example_trigger",
    "action": {"http_url": "https://example.com/my_hook", "http_method": "post"},
    "simple_triggers": [
        {
            "type": "data_trigger",
            "on": "incoming_data",
            "interface_name": "org.astarte-platform.genericsensors.Values",
            "interface_major": 0,
            "match_path": "/streamTest/value",
            "value_match_operator": ">",
            "known_value": 0.4,
        }
    ],
}

DEVICE_TRIGGER: Dict[str, Any] = {
    "name": "test",
    "action": {"http_url": "https://example.com/my_hook", "http_method": "post"},
    "simple_triggers": [
        {"type": "device_trigger", "on": "device_connected", "device_id": "45336"}
    ],
}


def _document(source: Dict[str, Any]) -> Dict[str, Any]:
    return copy.deepcopy(source)


@pytest.fixture()
def sensors_interface_document() -> Dict[str, Any]:
    return _document(SENSORS_INTERFACE)


@pytest.fixture()
def types_interface_document() -> Dict[str, Any]:
    return _document(TYPES_INTERFACE)


@pytest.fixture()
def object_interface_document() -> Dict[str, Any]:
    return _document(OBJECT_INTERFACE)


@pytest.fixture()
def data_trigger_document() -> Dict[str, Any]:
    return _document(DATA_TRIGGER)


@pytest.fixture()
def device_trigger_document() -> Dict[str, Any]:
    return _document(DEVICE_TRIGGER)


@pytest.fixture()
def sensors_interface() -> Interface:
    return parse_interface(json.dumps(SENSORS_INTERFACE))


@pytest.fixture()
def types_interface() -> Interface:
    return parse_interface(json.dumps(TYPES_INTERFACE))


@pytest.fixture()
def object_interface() -> Interface:
    return parse_interface(json.dumps(OBJECT_INTERFACE))


def json_body(document: Any) -> bytes:
    return json.dumps(document).encode("utf-8")


class StubAppEngineGateway(IAppEngineGateway):
    """In-memory gateway answering queued responses in order."""

    def __init__(self, responses: Optional[List[RawResponse]] = None) -> None:
        self.responses: List[RawResponse] = list(responses or [])
        self.calls: List[Tuple[str, Dict[str, Any]]] = []

    def queue(self, status_code: int, document: Any = None) -> None:
        body = b"" if document is None else json_body(document)
        self.responses.append(RawResponse(status_code=status_code, body=body))

    def devices_path(self) -> str:
        return "devices"

    def interface_path(
        self,
        device_identifier: str,
        interface_name: str,
        interface_path: str = "",
        identifier_type: DeviceIdentifierType = DeviceIdentifierType.AUTODISCOVER,
    ) -> str:
        device = f"devices/{device_identifier}"
        return f"{device}/interfaces/{interface_name}{interface_path}"

    async def fetch(
        self, path: str, params: Optional[Mapping[str, Any]] = None
    ) -> RawResponse:
        self.calls.append((path, dict(params or {})))
        return self.responses.pop(0)

    async def get_data(
        self, path: str, params: Optional[Mapping[str, Any]] = None
    ) -> Mapping[str, Any]:
        response = await self.fetch(path, params)
        if not response.ok:
            raise response.to_error()
        return json.loads(response.body)


@pytest.fixture()
def stub_gateway() -> StubAppEngineGateway:
    return StubAppEngineGateway()
