"""
Domain Entities - Trigger

This module defines Astarte triggers: event subscriptions firing an HTTP
callback when a device or data condition matches.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Tuple

from astarte_client.domain.entities.wire_enum import WireEnum


class TriggerMatchOperator(WireEnum):
    """Operator comparing incoming values against the trigger's known value."""

    ALL = "*"
    EQUAL = "=="
    DIFFER = "!="
    BIGGER = ">"
    BIGGER_EQUAL = ">="
    SMALLER = "<"
    SMALLER_EQUAL = "<="
    CONTAINS = "contains"
    NOT_CONTAINS = "not_contains"


class TriggerOn(WireEnum):
    """Condition a simple trigger fires on."""

    DEVICE_CONNECTED = "device_connected"
    DEVICE_DISCONNECTED = "device_disconnected"
    DEVICE_ERROR = "device_error"

    INCOMING_DATA = "incoming_data"
    VALUE_STORED = "value_stored"
    VALUE_CHANGE = "value_change"
    VALUE_CHANGE_APPLIED = "value_change_applied"
    PATH_CREATED = "path_created"
    PATH_REMOVED = "path_removed"

    @property
    def is_device_condition(self) -> bool:
        return self in DEVICE_TRIGGER_CONDITIONS


DEVICE_TRIGGER_CONDITIONS = frozenset(
    {TriggerOn.DEVICE_CONNECTED, TriggerOn.DEVICE_DISCONNECTED, TriggerOn.DEVICE_ERROR}
)
DATA_TRIGGER_CONDITIONS = frozenset(set(TriggerOn) - DEVICE_TRIGGER_CONDITIONS)


class SimpleTriggerType(WireEnum):
    """Class of a simple trigger."""

    DATA = "data_trigger"
    DEVICE = "device_trigger"


class HTTPMethod(WireEnum):
    """HTTP method used by a trigger action."""

    POST = "post"
    GET = "get"
    PUT = "put"
    PATCH = "patch"
    DELETE = "delete"


@dataclass(frozen=True, slots=True)
class TriggerAction:
    """HTTP callback invoked when a trigger fires."""

    http_url: str
    http_method: Optional[HTTPMethod] = None
    http_static_headers: Dict[str, str] = field(default_factory=dict)
    ignore_ssl_errors: bool = False


@dataclass(frozen=True, slots=True)
class SimpleTrigger:
    """The condition part of a trigger."""

    type: Optional[SimpleTriggerType] = None
    on: Optional[TriggerOn] = None
    device_id: Optional[str] = None
    group_name: Optional[str] = None
    interface_name: Optional[str] = None
    interface_major: Optional[int] = None
    match_path: Optional[str] = None
    value_match_operator: Optional[TriggerMatchOperator] = None
    known_value: Any = None


@dataclass(frozen=True, slots=True)
class Trigger:
    """An Astarte trigger."""

    name: str
    action: TriggerAction
    simple_triggers: Tuple[SimpleTrigger, ...] = field(default_factory=tuple)
