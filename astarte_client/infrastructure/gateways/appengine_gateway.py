"""
Infrastructure Gateway - AppEngine Implementation

This module implements the AppEngine gateway reading device data from the
Astarte AppEngine API over HTTP.
"""

import json
from typing import Any, Dict, Mapping, Optional
from urllib.parse import quote

import httpx
import structlog

from astarte_client.domain.entities.device import DeviceIdentifierType
from astarte_client.domain.entities.errors import AppEngineError
from astarte_client.domain.gateways.appengine_gateway import (
    IAppEngineGateway,
    RawResponse,
)
from astarte_client.domain.services.device_id import is_valid_device_id

logger = structlog.get_logger(__name__)


def resolve_device_identifier_type(
    device_identifier: str, identifier_type: DeviceIdentifierType
) -> DeviceIdentifierType:
    """Resolve AUTODISCOVER to DEVICE_ID or DEVICE_ALIAS."""
    if identifier_type != DeviceIdentifierType.AUTODISCOVER:
        return identifier_type
    if is_valid_device_id(device_identifier):
        return DeviceIdentifierType.DEVICE_ID
    return DeviceIdentifierType.DEVICE_ALIAS


class AppEngineGateway(IAppEngineGateway):
    """Implementation of the AppEngine gateway using an HTTP client."""

    def __init__(
        self, base_url: str, realm: str, token: str = "", timeout: float = 30.0
    ):
        """
        Initialize AppEngine gateway.

        Args:
            base_url: Base URL of AppEngine (e.g., "https://api.example.com/appengine")
            realm: Realm every request is scoped to
            token: Bearer token sent with every request
            timeout: Request timeout in seconds
        """
        self.base_url = base_url.rstrip("/")
        self.realm = realm
        self.token = token
        self.timeout = timeout

    def devices_path(self) -> str:
        return "devices"

    def interface_path(
        self,
        device_identifier: str,
        interface_name: str,
        interface_path: str = "",
        identifier_type: DeviceIdentifierType = DeviceIdentifierType.AUTODISCOVER,
    ) -> str:
        resolved = resolve_device_identifier_type(device_identifier, identifier_type)
        encoded_identifier = quote(device_identifier, safe="")
        if resolved == DeviceIdentifierType.DEVICE_ID:
            device_segment = f"devices/{encoded_identifier}"
        else:
            device_segment = f"devices-by-alias/{encoded_identifier}"
        return f"{device_segment}/interfaces/{interface_name}{interface_path}"

    def _url(self, path: str) -> str:
        return f"{self.base_url}/v1/{self.realm}/{path.lstrip('/')}"

    def _headers(self) -> Dict[str, str]:
        headers = {"Accept": "application/json"}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        return headers

    async def fetch(
        self, path: str, params: Optional[Mapping[str, Any]] = None
    ) -> RawResponse:
        """Perform a GET request, returning the status code and raw body."""
        url = self._url(path)
        query = dict(params or {})

        logger.info("appengine.fetch.request", url=url, params=query)

        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.get(
                    url, params=query, headers=self._headers()
                )
        except httpx.RequestError as e:
            logger.error("appengine.fetch.request_error", error=str(e), url=url)
            raise AppEngineError(f"AppEngine request failed: {str(e)}") from e

        logger.info(
            "appengine.fetch.response", url=url, status_code=response.status_code
        )
        return RawResponse(status_code=response.status_code, body=response.content)

    async def get_data(
        self, path: str, params: Optional[Mapping[str, Any]] = None
    ) -> Mapping[str, Any]:
        """Perform a GET request and decode the JSON envelope of a 200 response."""
        response = await self.fetch(path, params)

        if not response.ok:
            error = response.to_error()
            logger.error(
                "appengine.fetch.http_error",
                path=path,
                status_code=response.status_code,
                errors=error.errors,
            )
            raise error

        try:
            document = json.loads(response.body)
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            logger.error("appengine.fetch.invalid_json", path=path, error=str(e))
            raise AppEngineError(
                f"AppEngine returned an invalid JSON body: {str(e)}",
                status_code=response.status_code,
            ) from e

        if not isinstance(document, dict):
            raise AppEngineError(
                "AppEngine returned an unexpected body",
                status_code=response.status_code,
            )
        return document
