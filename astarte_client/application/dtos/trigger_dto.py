"""
Application DTOs - Trigger

This module contains the wire documents of Astarte triggers: the required
DTOs used for the ordered required-field pass, and the full DTOs converting
to and from the domain entities.
"""

from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, StrictInt, StrictStr

from astarte_client.domain.entities.trigger import (
    DATA_TRIGGER_CONDITIONS,
    DEVICE_TRIGGER_CONDITIONS,
    HTTPMethod,
    SimpleTrigger,
    SimpleTriggerType,
    Trigger,
    TriggerAction,
    TriggerMatchOperator,
    TriggerOn,
)

DATA_TRIGGER_ONLY_FIELDS = (
    "interface_name",
    "interface_major",
    "match_path",
    "value_match_operator",
    "known_value",
)

_DEVICE_CONDITION_VALUES = {on.value for on in DEVICE_TRIGGER_CONDITIONS}
_DATA_CONDITION_VALUES = {on.value for on in DATA_TRIGGER_CONDITIONS}


class RequiredTriggerActionDTO(BaseModel):
    """Mandatory fields of a trigger action."""

    model_config = ConfigDict(extra="ignore")

    http_url: Optional[StrictStr] = None
    http_method: Optional[StrictStr] = None


class RequiredSimpleTriggerDTO(BaseModel):
    """Fields of a simple trigger whose presence is checked."""

    model_config = ConfigDict(extra="ignore")

    type: Optional[StrictStr] = None
    on: Optional[StrictStr] = None
    device_id: Optional[StrictStr] = None
    group_name: Optional[StrictStr] = None
    interface_name: Optional[StrictStr] = None
    interface_major: Optional[Union[StrictInt, StrictStr]] = None
    match_path: Optional[StrictStr] = None
    value_match_operator: Optional[StrictStr] = None
    known_value: Optional[Any] = None

    def first_violation(self) -> Optional[str]:
        """Return the message of the first violated rule, or None."""
        if self.type is None or self.on is None:
            return "Invalid trigger condition: Type and On must be set"
        if not SimpleTriggerType.is_valid(self.type):
            return f"Invalid trigger condition: invalid Type value '{self.type}'"

        if self.type != SimpleTriggerType.DATA.value:
            return self._device_trigger_violation()
        return self._data_trigger_violation()

    def _device_trigger_violation(self) -> Optional[str]:
        if self.on not in _DEVICE_CONDITION_VALUES:
            return f"Invalid trigger condition: invalid On value '{self.on}'"
        if self.device_id is None and self.group_name is None:
            return "Invalid trigger condition: DeviceID or GroupName must be set"
        if self.device_id is not None and self.group_name is not None:
            return "Invalid trigger condition: DeviceID or GroupName cannot both be set"
        if any(getattr(self, name) is not None for name in DATA_TRIGGER_ONLY_FIELDS):
            return (
                "Invalid trigger: cannot set properties for data trigger "
                "on a device trigger"
            )
        return None

    def _data_trigger_violation(self) -> Optional[str]:
        if self.on not in _DATA_CONDITION_VALUES:
            return f"Invalid trigger condition: invalid On value '{self.on}'"
        if self.device_id is not None or self.group_name is not None:
            return "Invalid trigger condition: DeviceID or GroupName cannot be set"
        if self.interface_name is None:
            return "Invalid data trigger: interface not set, use * to catch all"
        if self.interface_major is None and self.interface_name != "*":
            return "Invalid data trigger: InterfaceMajor must be set"
        if self.match_path is None:
            return "Invalid data trigger: MatchPath not set"
        if self.value_match_operator is None:
            return "Invalid data trigger: ValueMatchOperator not set"
        if not TriggerMatchOperator.is_valid(self.value_match_operator):
            return (
                "Invalid data trigger: invalid ValueMatchOperator value "
                f"'{self.value_match_operator}'"
            )
        if (
            self.known_value is None
            and self.value_match_operator != TriggerMatchOperator.ALL.value
        ):
            return "Invalid data trigger: KnownValue not set"
        return None


class RequiredTriggerDTO(BaseModel):
    """Mandatory fields of a trigger, checked before full decoding."""

    model_config = ConfigDict(extra="ignore")

    name: Optional[StrictStr] = None
    action: Optional[RequiredTriggerActionDTO] = None
    simple_triggers: Optional[List[RequiredSimpleTriggerDTO]] = None

    def first_violation(self) -> Optional[str]:
        """
        Return the message of the first violated rule, or None.

        Rules are checked in order: name, action, action url and method,
        method validity, number of simple triggers, then the simple trigger.
        """
        if not self.name:
            return "Invalid trigger: name must be set"
        if self.action is None:
            return "Invalid trigger: action must be set"
        if self.action.http_url is None or self.action.http_method is None:
            return "Invalid trigger: action must have at least an url and a method set"
        if not HTTPMethod.is_valid(self.action.http_method):
            return "Invalid trigger: invalid method for action"

        if not self.simple_triggers:
            return "Invalid trigger: no triggers are present"
        if len(self.simple_triggers) > 1:
            return (
                "Invalid trigger: usage of more than one trigger is currently "
                "unsupported"
            )

        for simple_trigger in self.simple_triggers:
            violation = simple_trigger.first_violation()
            if violation:
                return violation
        return None


class TriggerActionDTO(BaseModel):
    """Full wire document of a trigger action."""

    model_config = ConfigDict(extra="ignore")

    http_url: str
    http_method: Optional[HTTPMethod] = None
    http_static_headers: Dict[str, str] = Field(default_factory=dict)
    ignore_ssl_errors: bool = False


class SimpleTriggerDTO(BaseModel):
    """Full wire document of a simple trigger."""

    model_config = ConfigDict(extra="ignore")

    type: Optional[SimpleTriggerType] = None
    on: Optional[TriggerOn] = None
    device_id: Optional[str] = None
    group_name: Optional[str] = None
    interface_name: Optional[str] = None
    interface_major: Optional[int] = None
    match_path: Optional[str] = None
    value_match_operator: Optional[TriggerMatchOperator] = None
    known_value: Optional[Any] = None

    def to_entity(self) -> SimpleTrigger:
        return SimpleTrigger(**self.model_dump())

    @classmethod
    def from_entity(cls, simple_trigger: SimpleTrigger) -> "SimpleTriggerDTO":
        return cls(
            type=simple_trigger.type,
            on=simple_trigger.on,
            device_id=simple_trigger.device_id,
            group_name=simple_trigger.group_name,
            interface_name=simple_trigger.interface_name,
            interface_major=simple_trigger.interface_major,
            match_path=simple_trigger.match_path,
            value_match_operator=simple_trigger.value_match_operator,
            known_value=simple_trigger.known_value,
        )

    def to_document(self) -> Dict[str, Any]:
        document = self.model_dump(mode="json", exclude_none=True)
        # Device triggers never carry the data trigger fields on the wire
        if self.type == SimpleTriggerType.DEVICE:
            for name in DATA_TRIGGER_ONLY_FIELDS:
                document.pop(name, None)
        return document


class TriggerDTO(BaseModel):
    """Full wire document of a trigger."""

    model_config = ConfigDict(extra="ignore")

    name: str = Field(..., min_length=1)
    action: TriggerActionDTO
    simple_triggers: List[SimpleTriggerDTO] = Field(..., min_length=1)

    def to_entity(self) -> Trigger:
        return Trigger(
            name=self.name,
            action=TriggerAction(
                http_url=self.action.http_url,
                http_method=self.action.http_method,
                http_static_headers=dict(self.action.http_static_headers),
                ignore_ssl_errors=self.action.ignore_ssl_errors,
            ),
            simple_triggers=tuple(st.to_entity() for st in self.simple_triggers),
        )

    @classmethod
    def from_entity(cls, trigger: Trigger) -> "TriggerDTO":
        return cls(
            name=trigger.name,
            action=TriggerActionDTO(
                http_url=trigger.action.http_url,
                http_method=trigger.action.http_method,
                http_static_headers=dict(trigger.action.http_static_headers),
                ignore_ssl_errors=trigger.action.ignore_ssl_errors,
            ),
            simple_triggers=[
                SimpleTriggerDTO.from_entity(st) for st in trigger.simple_triggers
            ],
        )

    def to_document(self) -> Dict[str, Any]:
        """Return the JSON-ready wire document, omitting unset optional fields."""
        return {
            "name": self.name,
            "action": self.action.model_dump(mode="json", exclude_none=True),
            "simple_triggers": [st.to_document() for st in self.simple_triggers],
        }
