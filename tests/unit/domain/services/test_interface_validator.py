from __future__ import annotations

import base64
from dataclasses import replace
from datetime import datetime, timedelta, timezone

import pytest

from astarte_client.domain.entities.errors import (
    InvalidQueryPathError,
    PathNotFoundError,
    ValueTypeMismatchError,
)
from astarte_client.domain.entities.interface import InterfaceAggregation, MappingType
from astarte_client.domain.services.interface_validator import (
    interface_mapping_from_path,
    normalize_payload,
    validate_aggregate_message,
    validate_individual_message,
    validate_interface_path,
    validate_query,
)


def test_parametric_path_resolves_mapping(sensors_interface) -> None:
    validate_interface_path(sensors_interface, "/testSensor/name")
    mapping_value = validate_individual_message(
        sensors_interface, "/testSensor/name", "test"
    )
    assert mapping_value.type is MappingType.STRING


@pytest.mark.parametrize(
    "path", ["/testSensor/name/extra", "/testSensor/names", "/testSensor/extra/path"]
)
def test_parametric_wrong_paths_are_rejected(sensors_interface, path) -> None:
    with pytest.raises(PathNotFoundError):
        interface_mapping_from_path(sensors_interface, path)


def test_path_not_found_message(sensors_interface) -> None:
    with pytest.raises(PathNotFoundError) as exc_info:
        validate_individual_message(sensors_interface, "/testSensor/names", "check")
    assert str(exc_info.value) == (
        "Path /testSensor/names does not exist on Interface "
        "org.astarte-platform.genericsensors.AvailableSensors"
    )


def test_simple_interface_needs_exact_match(types_interface) -> None:
    assert interface_mapping_from_path(types_interface, "/doubleValue").type is (
        MappingType.DOUBLE
    )
    with pytest.raises(PathNotFoundError):
        interface_mapping_from_path(types_interface, "/doubleValue/")


def test_individual_message_widens_integers(types_interface) -> None:
    validate_individual_message(types_interface, "/longintegerValue", 12)
    validate_individual_message(types_interface, "/doubleValue", 12)
    with pytest.raises(ValueTypeMismatchError):
        validate_individual_message(types_interface, "/integerValue", 12.5)
    with pytest.raises(ValueTypeMismatchError):
        validate_individual_message(types_interface, "/integerValue", 2**40)


def test_aggregate_message_validates_every_pair(object_interface) -> None:
    validated = validate_aggregate_message(
        object_interface, "/sensor1", {"value": 21.5, "label": "kitchen"}
    )
    assert list(validated) == ["value", "label"]
    assert validated["value"].type is MappingType.DOUBLE


def test_aggregate_message_rejects_keys_with_slash(object_interface) -> None:
    with pytest.raises(InvalidQueryPathError):
        validate_aggregate_message(object_interface, "", {"/sensor1/value": 1.0})


def test_aggregate_message_reports_first_failure(object_interface) -> None:
    with pytest.raises(PathNotFoundError):
        validate_aggregate_message(
            object_interface, "/sensor1", {"values": 1.0, "label": 3}
        )
    with pytest.raises(ValueTypeMismatchError):
        validate_aggregate_message(
            object_interface, "/sensor1", {"value": 1.0, "label": 3}
        )


@pytest.mark.parametrize("query", ["/", "/testSensor", "/testSensor/", "/x/name"])
def test_individual_query_accepts_prefixes(sensors_interface, query) -> None:
    validate_query(sensors_interface, query)


@pytest.mark.parametrize("query", ["/testSensor/label", "/a/name/extra"])
def test_individual_query_rejects_unknown_paths(sensors_interface, query) -> None:
    with pytest.raises(InvalidQueryPathError):
        validate_query(sensors_interface, query)


def test_aggregate_query_stops_above_leaves(object_interface) -> None:
    validate_query(object_interface, "/sensor1")
    validate_query(object_interface, "/sensor1/")
    with pytest.raises(InvalidQueryPathError):
        validate_query(object_interface, "/sensor1/value")


def test_aggregate_query_checks_literal_segments(object_interface) -> None:
    interface = replace(
        object_interface,
        mappings=tuple(
            replace(mapping, endpoint=mapping.endpoint.replace("%{sensor_id}", "room"))
            for mapping in object_interface.mappings
        ),
    )
    assert interface.aggregation is InterfaceAggregation.OBJECT
    validate_query(interface, "/room")
    with pytest.raises(InvalidQueryPathError):
        validate_query(interface, "/hall")


def test_normalize_payload_encodes_bytes_and_moves_to_utc() -> None:
    local = datetime(2021, 5, 1, 12, 0, tzinfo=timezone(timedelta(hours=2)))
    payload = {
        "blob": b"\x01\x02",
        "when": local,
        "list": [b"\x03", datetime(2021, 1, 1)],
    }

    normalized = normalize_payload(payload, encode_bytes=True)

    assert normalized["blob"] == base64.b64encode(b"\x01\x02").decode("ascii")
    assert normalized["when"].tzinfo == timezone.utc
    assert normalized["when"].hour == 10
    assert normalized["list"][0] == "Aw=="
    assert normalized["list"][1].tzinfo == timezone.utc


def test_normalize_payload_keeps_bytes_when_not_encoding() -> None:
    assert normalize_payload(b"\x01", encode_bytes=False) == b"\x01"
    assert normalize_payload(12, encode_bytes=True) == 12
