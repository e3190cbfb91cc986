"""Domain entities for devices listed by AppEngine."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional

from astarte_client.shared.timestamps import parse_timestamp


class DeviceResultFormat(str, Enum):
    """Shape of the entries returned by a device list paginator."""

    DEVICE_ID = "device_id"
    DEVICE_DETAILS = "device_details"


class DeviceIdentifierType(str, Enum):
    """How a device identifier should be interpreted in request paths."""

    AUTODISCOVER = "autodiscover"
    DEVICE_ID = "device_id"
    DEVICE_ALIAS = "device_alias"


def _optional_timestamp(value: Any) -> Optional[datetime]:
    return parse_timestamp(value) if value else None


@dataclass(slots=True)
class DeviceInterfaceIntrospection:
    """One interface entry of a device introspection."""

    name: str
    major: int
    minor: int
    exchanged_msgs: int = 0
    exchanged_bytes: int = 0

    @classmethod
    def from_json(
        cls, node: Mapping[str, Any], name: Optional[str] = None
    ) -> "DeviceInterfaceIntrospection":
        return cls(
            name=name or node.get("name", ""),
            major=int(node.get("major", 0)),
            minor=int(node.get("minor", 0)),
            exchanged_msgs=int(node.get("exchanged_msgs", 0)),
            exchanged_bytes=int(node.get("exchanged_bytes", 0)),
        )


@dataclass(slots=True)
class DeviceDetails:
    """Device details as returned by the AppEngine device endpoints."""

    device_id: str
    connected: bool = False
    credentials_inhibited: bool = False
    total_received_msgs: int = 0
    total_received_bytes: int = 0
    last_seen_ip: Optional[str] = None
    last_credentials_request_ip: Optional[str] = None
    last_connection: Optional[datetime] = None
    last_disconnection: Optional[datetime] = None
    first_registration: Optional[datetime] = None
    first_credentials_request: Optional[datetime] = None
    introspection: Dict[str, DeviceInterfaceIntrospection] = field(
        default_factory=dict
    )
    aliases: Dict[str, str] = field(default_factory=dict)
    attributes: Dict[str, str] = field(default_factory=dict)
    previous_interfaces: List[DeviceInterfaceIntrospection] = field(
        default_factory=list
    )

    @classmethod
    def from_json(cls, node: Mapping[str, Any]) -> "DeviceDetails":
        introspection = {
            name: DeviceInterfaceIntrospection.from_json(entry, name=name)
            for name, entry in (node.get("introspection") or {}).items()
        }
        previous = [
            DeviceInterfaceIntrospection.from_json(entry)
            for entry in node.get("previous_interfaces") or []
        ]
        return cls(
            device_id=node.get("id", ""),
            connected=bool(node.get("connected", False)),
            credentials_inhibited=bool(node.get("credentials_inhibited", False)),
            total_received_msgs=int(node.get("total_received_msgs", 0)),
            total_received_bytes=int(node.get("total_received_bytes", 0)),
            last_seen_ip=node.get("last_seen_ip"),
            last_credentials_request_ip=node.get("last_credentials_request_ip"),
            last_connection=_optional_timestamp(node.get("last_connection")),
            last_disconnection=_optional_timestamp(node.get("last_disconnection")),
            first_registration=_optional_timestamp(node.get("first_registration")),
            first_credentials_request=_optional_timestamp(
                node.get("first_credentials_request")
            ),
            introspection=introspection,
            aliases=dict(node.get("aliases") or {}),
            attributes=dict(node.get("attributes") or {}),
            previous_interfaces=previous,
        )
