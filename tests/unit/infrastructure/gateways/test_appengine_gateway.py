from __future__ import annotations

import json
from typing import Any, Dict, List

import httpx
import pytest

from astarte_client.domain.entities.device import DeviceIdentifierType
from astarte_client.infrastructure.gateways import (
    AppEngineError,
    AppEngineGateway,
    resolve_device_identifier_type,
)

DEVICE = "f0VMRgIBAQAAAAAAAAAAAA"


class _StubResponse:
    def __init__(self, status_code: int, json_data: Any = None, content: bytes = b""):
        self.status_code = status_code
        if json_data is not None:
            content = json.dumps(json_data).encode()
        self.content = content


class _StubAsyncClient:
    def __init__(self, response: _StubResponse, calls: List[Dict[str, Any]]):
        self._response = response
        self._calls = calls

    async def __aenter__(self) -> "_StubAsyncClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        return None

    async def get(self, url, params=None, headers=None):
        self._calls.append({"url": url, "params": params, "headers": headers})
        return self._response


class _FailingAsyncClient(_StubAsyncClient):
    async def get(self, url, params=None, headers=None):
        raise httpx.ConnectError("connection refused")


def _patch_client(monkeypatch, response: _StubResponse) -> List[Dict[str, Any]]:
    calls: List[Dict[str, Any]] = []
    monkeypatch.setattr(
        "httpx.AsyncClient",
        lambda timeout: _StubAsyncClient(response, calls),
    )
    return calls


def test_resolve_device_identifier_type() -> None:
    auto = DeviceIdentifierType.AUTODISCOVER
    assert (
        resolve_device_identifier_type(DEVICE, auto) is DeviceIdentifierType.DEVICE_ID
    )
    assert (
        resolve_device_identifier_type("my-device", auto)
        is DeviceIdentifierType.DEVICE_ALIAS
    )
    assert (
        resolve_device_identifier_type(DEVICE, DeviceIdentifierType.DEVICE_ALIAS)
        is DeviceIdentifierType.DEVICE_ALIAS
    )


def test_interface_paths() -> None:
    gateway = AppEngineGateway("http://appengine/", "test")

    assert gateway.interface_path(DEVICE, "com.example.Values", "/a") == (
        f"devices/{DEVICE}/interfaces/com.example.Values/a"
    )
    assert gateway.interface_path("kitchen sensor", "com.example.Values") == (
        "devices-by-alias/kitchen%20sensor/interfaces/com.example.Values"
    )
    assert gateway.devices_path() == "devices"


@pytest.mark.asyncio
async def test_get_data_sends_token_and_params(monkeypatch) -> None:
    calls = _patch_client(monkeypatch, _StubResponse(200, {"data": ["a"]}))
    gateway = AppEngineGateway("http://appengine/", "test", token="t0k3n")

    document = await gateway.get_data("devices", {"limit": "10"})

    assert document == {"data": ["a"]}
    assert calls[0]["url"] == "http://appengine/v1/test/devices"
    assert calls[0]["params"] == {"limit": "10"}
    assert calls[0]["headers"]["Authorization"] == "Bearer t0k3n"


@pytest.mark.asyncio
async def test_anonymous_requests_have_no_authorization(monkeypatch) -> None:
    calls = _patch_client(monkeypatch, _StubResponse(200, {"data": []}))
    gateway = AppEngineGateway("http://appengine", "test")

    await gateway.get_data("devices")

    assert "Authorization" not in calls[0]["headers"]


@pytest.mark.asyncio
async def test_fetch_returns_error_statuses(monkeypatch) -> None:
    _patch_client(monkeypatch, _StubResponse(405, {"errors": {"detail": "nope"}}))
    gateway = AppEngineGateway("http://appengine", "test")

    response = await gateway.fetch("devices")

    assert response.status_code == 405
    assert not response.ok


@pytest.mark.asyncio
async def test_get_data_raises_platform_errors(monkeypatch) -> None:
    _patch_client(monkeypatch, _StubResponse(403, {"errors": {"detail": "Forbidden"}}))
    gateway = AppEngineGateway("http://appengine", "test")

    with pytest.raises(AppEngineError) as exc_info:
        await gateway.get_data("devices")

    assert exc_info.value.status_code == 403
    assert exc_info.value.errors == {"detail": "Forbidden"}
    assert "Forbidden" in str(exc_info.value)


@pytest.mark.asyncio
async def test_get_data_handles_html_error_pages(monkeypatch) -> None:
    _patch_client(monkeypatch, _StubResponse(502, content=b"<html>Bad Gateway</html>"))
    gateway = AppEngineGateway("http://appengine", "test")

    with pytest.raises(AppEngineError) as exc_info:
        await gateway.get_data("devices")

    assert str(exc_info.value) == (
        "Received unexpected status code: 502 instead of 200"
    )


@pytest.mark.asyncio
async def test_get_data_rejects_invalid_json(monkeypatch) -> None:
    _patch_client(monkeypatch, _StubResponse(200, content=b"{not json"))
    gateway = AppEngineGateway("http://appengine", "test")

    with pytest.raises(AppEngineError):
        await gateway.get_data("devices")


@pytest.mark.asyncio
async def test_request_errors_are_wrapped(monkeypatch) -> None:
    monkeypatch.setattr(
        "httpx.AsyncClient",
        lambda timeout: _FailingAsyncClient(_StubResponse(200), []),
    )
    gateway = AppEngineGateway("http://appengine", "test")

    with pytest.raises(AppEngineError) as exc_info:
        await gateway.fetch("devices")

    assert exc_info.value.status_code is None
