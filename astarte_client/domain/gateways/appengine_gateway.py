"""
AppEngine Gateway Interface - Domain Layer

This module defines the interface for reading device data from the Astarte
AppEngine API.
"""

from __future__ import annotations

import json
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional

from astarte_client.domain.entities.device import DeviceIdentifierType
from astarte_client.domain.entities.errors import AppEngineError


@dataclass(frozen=True)
class RawResponse:
    """Status code and undecoded body of an AppEngine response."""

    status_code: int
    body: bytes = b""

    @property
    def ok(self) -> bool:
        return self.status_code == 200

    def to_error(self) -> AppEngineError:
        """Build the error described by the ``{"errors": {...}}`` body."""
        try:
            document = json.loads(self.body) if self.body else {}
        except (json.JSONDecodeError, UnicodeDecodeError):
            # Proxies in front of AppEngine may answer with HTML
            document = {}
        errors: Dict[str, Any] = {}
        if isinstance(document, dict) and isinstance(document.get("errors"), dict):
            errors = document["errors"]
        if errors:
            message = f"AppEngine error {self.status_code}: {json.dumps(errors)}"
        else:
            message = (
                f"Received unexpected status code: {self.status_code} instead of 200"
            )
        return AppEngineError(message, status_code=self.status_code, errors=errors)


class IAppEngineGateway(ABC):
    """Interface for the AppEngine Gateway."""

    @abstractmethod
    def devices_path(self) -> str:
        """Return the realm-relative path of the device list."""
        pass

    @abstractmethod
    def interface_path(
        self,
        device_identifier: str,
        interface_name: str,
        interface_path: str = "",
        identifier_type: DeviceIdentifierType = DeviceIdentifierType.AUTODISCOVER,
    ) -> str:
        """
        Return the path of an interface (or one of its paths) on a device.

        Args:
            device_identifier: Device ID or alias
            interface_name: Name of the interface
            interface_path: Optional path inside the interface, starting with "/"
            identifier_type: How device_identifier must be interpreted
        """
        pass

    @abstractmethod
    async def fetch(
        self, path: str, params: Optional[Mapping[str, Any]] = None
    ) -> RawResponse:
        """
        Perform a GET request and return the raw response.

        Non-200 statuses are returned, not raised.

        Raises:
            AppEngineError: If the request could not be performed
        """
        pass

    @abstractmethod
    async def get_data(
        self, path: str, params: Optional[Mapping[str, Any]] = None
    ) -> Mapping[str, Any]:
        """
        Perform a GET request and return the decoded JSON envelope.

        Returns:
            The decoded ``{"data": ..., "links": ...}`` document

        Raises:
            AppEngineError: If the request fails or does not answer 200
        """
        pass
