"""
Domain Entities - Mapping Values

Values offered for a mapping are classified into a closed set of value kinds,
one per mapping type. Classification happens once, at the boundary where an
untyped Python value meets an interface, and yields every mapping type the
value can be sent as without losing precision.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, FrozenSet, Sequence

from astarte_client.domain.entities.errors import ValueTypeMismatchError
from astarte_client.domain.entities.interface import MappingType

INT32_MIN = -(2**31)
INT32_MAX = 2**31 - 1
INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1

_INT32_TYPES = frozenset(
    {MappingType.INTEGER, MappingType.LONG_INTEGER, MappingType.DOUBLE}
)
_INT64_TYPES = frozenset({MappingType.LONG_INTEGER, MappingType.DOUBLE})
_SCALAR_ARRAY_TYPES = frozenset(t for t in MappingType if t.is_array)


@dataclass(frozen=True, slots=True)
class MappingValue:
    """A value paired with the mapping type it was validated against."""

    type: MappingType
    value: Any


def _scalar_kinds(value: Any) -> FrozenSet[MappingType]:
    # bool is a subclass of int and must be matched first
    if isinstance(value, bool):
        return frozenset({MappingType.BOOLEAN})
    if isinstance(value, int):
        if INT32_MIN <= value <= INT32_MAX:
            return _INT32_TYPES
        if INT64_MIN <= value <= INT64_MAX:
            return _INT64_TYPES
        return frozenset()
    if isinstance(value, float):
        return frozenset({MappingType.DOUBLE})
    if isinstance(value, str):
        return frozenset({MappingType.STRING})
    if isinstance(value, (bytes, bytearray)):
        return frozenset({MappingType.BINARY_BLOB})
    if isinstance(value, datetime):
        return frozenset({MappingType.DATETIME})
    return frozenset()


def _sequence_kinds(values: Sequence[Any]) -> FrozenSet[MappingType]:
    if not values:
        return _SCALAR_ARRAY_TYPES

    compatible: FrozenSet[MappingType] | None = None
    for item in values:
        kinds = _scalar_kinds(item)
        compatible = kinds if compatible is None else compatible & kinds
        if not compatible:
            return frozenset()
    return frozenset(kind.as_array() for kind in compatible or ())


def compatible_types(value: Any) -> FrozenSet[MappingType]:
    """Return every mapping type value can be sent as."""
    if isinstance(value, (list, tuple)):
        return _sequence_kinds(value)
    return _scalar_kinds(value)


def describe_value_type(value: Any) -> str:
    if isinstance(value, (list, tuple)):
        inner = sorted({type(item).__name__ for item in value})
        return f"{type(value).__name__}[{', '.join(inner)}]"
    return type(value).__name__


def validate_type(mapping_type: MappingType, value: Any) -> MappingValue:
    """
    Check that value can be sent on a mapping of mapping_type.

    Integers are widened to longinteger and double when they fit, the opposite
    direction is rejected.

    Raises:
        ValueTypeMismatchError: If the value is not compatible.
    """
    if mapping_type not in compatible_types(value):
        raise ValueTypeMismatchError(mapping_type.value, describe_value_type(value))
    return MappingValue(type=mapping_type, value=value)
