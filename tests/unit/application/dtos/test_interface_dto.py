from __future__ import annotations

from astarte_client.application.dtos import InterfaceDTO, RequiredInterfaceDTO
from astarte_client.domain.entities.interface import (
    InterfaceOwnership,
    InterfaceType,
    MappingType,
)


def test_required_dto_accepts_complete_document(sensors_interface_document) -> None:
    required = RequiredInterfaceDTO.model_validate(sensors_interface_document)
    assert required.first_violation() is None


def test_required_dto_reports_fields_in_order(sensors_interface_document) -> None:
    document = sensors_interface_document
    del document["ownership"]
    del document["version_minor"]

    required = RequiredInterfaceDTO.model_validate(document)

    assert required.first_violation() == (
        "version_minor",
        "version_minor must be set",
    )


def test_required_dto_treats_empty_name_as_missing(sensors_interface_document) -> None:
    sensors_interface_document["interface_name"] = ""
    required = RequiredInterfaceDTO.model_validate(sensors_interface_document)
    assert required.first_violation()[0] == "interface_name"


def test_required_dto_checks_mappings(sensors_interface_document) -> None:
    sensors_interface_document["mappings"] = []
    assert RequiredInterfaceDTO.model_validate(
        sensors_interface_document
    ).first_violation() == ("mappings", "no mappings are present")

    sensors_interface_document["mappings"] = [{"endpoint": "/a"}]
    assert RequiredInterfaceDTO.model_validate(
        sensors_interface_document
    ).first_violation() == ("type", "missing type in mapping")


def test_interface_dto_round_trip(types_interface_document) -> None:
    dto = InterfaceDTO.model_validate(types_interface_document)
    interface = dto.to_entity()

    assert interface.type is InterfaceType.DATASTREAM
    assert interface.mappings[0].type is MappingType.INTEGER

    document = InterfaceDTO.from_entity(interface).to_document()
    assert document["interface_name"] == types_interface_document["interface_name"]
    assert "aggregation" not in document
    assert [m["endpoint"] for m in document["mappings"]] == [
        m["endpoint"] for m in types_interface_document["mappings"]
    ]


def test_required_dto_decodes_type_and_ownership(sensors_interface_document) -> None:
    required = RequiredInterfaceDTO.model_validate(sensors_interface_document)
    assert required.type is InterfaceType.PROPERTIES
    assert required.ownership is InterfaceOwnership.DEVICE
