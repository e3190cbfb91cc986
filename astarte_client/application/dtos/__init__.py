"""
DTOs Package - Application Layer

This package contains the wire documents of interfaces and triggers used to
validate and decode schema documents and to serialize entities back.
"""

from .interface_dto import (
    InterfaceDTO,
    MappingDTO,
    RequiredInterfaceDTO,
    RequiredMappingDTO,
)
from .trigger_dto import (
    RequiredSimpleTriggerDTO,
    RequiredTriggerActionDTO,
    RequiredTriggerDTO,
    SimpleTriggerDTO,
    TriggerActionDTO,
    TriggerDTO,
)

__all__ = [
    "InterfaceDTO",
    "MappingDTO",
    "RequiredInterfaceDTO",
    "RequiredMappingDTO",
    "RequiredSimpleTriggerDTO",
    "RequiredTriggerActionDTO",
    "RequiredTriggerDTO",
    "SimpleTriggerDTO",
    "TriggerActionDTO",
    "TriggerDTO",
]
