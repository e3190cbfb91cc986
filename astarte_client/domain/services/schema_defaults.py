"""Domain service helpers filling in the defaults of interfaces and triggers.

Both helpers are idempotent and accept entities built without validation, for
instance straight from a lenient JSON decoder: any enum field holding a
missing or unrecognized value is replaced with its weakest default, and any
valid wire string is decoded into its enum member.
"""

from dataclasses import replace

from astarte_client.domain.entities.interface import (
    Interface,
    InterfaceAggregation,
    Mapping,
    MappingDatabaseRetentionPolicy,
    MappingReliability,
    MappingRetention,
)
from astarte_client.domain.entities.trigger import (
    HTTPMethod,
    SimpleTrigger,
    SimpleTriggerType,
    Trigger,
    TriggerMatchOperator,
    TriggerOn,
)


def _ensure_mapping_defaults(mapping: Mapping) -> Mapping:
    return replace(
        mapping,
        reliability=MappingReliability.coerce(
            mapping.reliability, MappingReliability.UNRELIABLE
        ),
        retention=MappingRetention.coerce(mapping.retention, MappingRetention.DISCARD),
        database_retention_policy=MappingDatabaseRetentionPolicy.coerce(
            mapping.database_retention_policy, MappingDatabaseRetentionPolicy.NO_TTL
        ),
    )


def ensure_interface_defaults(interface: Interface) -> Interface:
    """Return a copy of interface with aggregation and mapping defaults set."""
    return replace(
        interface,
        aggregation=InterfaceAggregation.coerce(
            interface.aggregation, InterfaceAggregation.INDIVIDUAL
        ),
        mappings=tuple(_ensure_mapping_defaults(m) for m in interface.mappings),
    )


def _ensure_simple_trigger_defaults(simple_trigger: SimpleTrigger) -> SimpleTrigger:
    return replace(
        simple_trigger,
        type=SimpleTriggerType.coerce(simple_trigger.type, SimpleTriggerType.DATA),
        on=TriggerOn.coerce(simple_trigger.on, TriggerOn.DEVICE_CONNECTED),
        value_match_operator=TriggerMatchOperator.coerce(
            simple_trigger.value_match_operator, TriggerMatchOperator.ALL
        ),
    )


def ensure_trigger_defaults(trigger: Trigger) -> Trigger:
    """Return a copy of trigger with method, type, on and operator defaults set.

    An unrecognized HTTP method falls back to ``get`` here, whereas
    ``parse_trigger`` rejects the same document outright.
    """
    action = replace(
        trigger.action,
        http_method=HTTPMethod.coerce(trigger.action.http_method, HTTPMethod.GET),
    )
    return replace(
        trigger,
        action=action,
        simple_triggers=tuple(
            _ensure_simple_trigger_defaults(st) for st in trigger.simple_triggers
        ),
    )
