from __future__ import annotations

from datetime import datetime, timezone

import pytest

from astarte_client.domain.entities.errors import ValueTypeMismatchError
from astarte_client.domain.entities.interface import MappingType
from astarte_client.domain.entities.values import (
    INT32_MAX,
    INT64_MAX,
    compatible_types,
    validate_type,
)


@pytest.mark.parametrize(
    "mapping_type, value",
    [
        (MappingType.INTEGER, 42),
        (MappingType.LONG_INTEGER, 42),
        (MappingType.DOUBLE, 42),
        (MappingType.LONG_INTEGER, INT32_MAX + 1),
        (MappingType.DOUBLE, 4.2),
        (MappingType.STRING, "value"),
        (MappingType.BOOLEAN, True),
        (MappingType.BINARY_BLOB, b"\x00\x01"),
        (MappingType.DATETIME, datetime(2020, 1, 1, tzinfo=timezone.utc)),
        (MappingType.INTEGER_ARRAY, [1, 2, 3]),
        (MappingType.DOUBLE_ARRAY, [1, 2.5]),
        (MappingType.STRING_ARRAY, ("a", "b")),
        (MappingType.BOOLEAN_ARRAY, []),
    ],
)
def test_validate_type_accepts_compatible_values(mapping_type, value) -> None:
    mapping_value = validate_type(mapping_type, value)
    assert mapping_value.type is mapping_type
    assert mapping_value.value == value


@pytest.mark.parametrize(
    "mapping_type, value",
    [
        (MappingType.INTEGER, INT32_MAX + 1),
        (MappingType.INTEGER, 4.2),
        (MappingType.LONG_INTEGER, 4.2),
        (MappingType.INTEGER, True),
        (MappingType.STRING, 1),
        (MappingType.BOOLEAN, "true"),
        (MappingType.DATETIME, "2020-01-01T00:00:00Z"),
        (MappingType.INTEGER_ARRAY, [1, "2"]),
        (MappingType.STRING, ["a"]),
        (MappingType.INTEGER_ARRAY, 1),
    ],
)
def test_validate_type_rejects_incompatible_values(mapping_type, value) -> None:
    with pytest.raises(ValueTypeMismatchError) as exc_info:
        validate_type(mapping_type, value)
    assert exc_info.value.expected_type == mapping_type.value


def test_compatible_types_of_out_of_range_integer_is_empty() -> None:
    assert compatible_types(INT64_MAX + 1) == frozenset()


def test_mismatch_message_names_both_types() -> None:
    with pytest.raises(ValueTypeMismatchError) as exc_info:
        validate_type(MappingType.STRING, 12)
    assert str(exc_info.value) == (
        "Value of type int does not match type restrictions for string"
    )
