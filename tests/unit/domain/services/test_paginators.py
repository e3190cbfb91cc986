from __future__ import annotations

import json
from datetime import datetime, timezone

import pytest

from astarte_client.domain.entities.datastream import Links, ResultSetOrder
from astarte_client.domain.entities.device import DeviceDetails, DeviceResultFormat
from astarte_client.domain.entities.errors import (
    PaginationExhaustedError,
    PaginatorConfigurationError,
)
from astarte_client.domain.entities.interface import InterfaceAggregation
from astarte_client.domain.services.paginators import (
    DESCENDING_LIMIT_REQUIRED,
    DESCENDING_SINCE_FORBIDDEN,
    DatastreamPaginator,
    DeviceListPaginator,
    PaginatorState,
)


def _rows(*timestamps: str):
    return [{"value": index, "timestamp": ts} for index, ts in enumerate(timestamps)]


def _page(*timestamps: str) -> bytes:
    return json.dumps({"data": _rows(*timestamps)}).encode("utf-8")


class TestDeviceListPaginator:
    def test_first_page_query(self) -> None:
        paginator = DeviceListPaginator(page_size=50)
        assert paginator.state is PaginatorState.FRESH
        assert paginator.next_page_query() == {"details": "false", "limit": "50"}

    def test_details_flag(self) -> None:
        paginator = DeviceListPaginator(result_format=DeviceResultFormat.DEVICE_DETAILS)
        assert paginator.next_page_query() == {"details": "true"}

    def test_negative_page_size_is_rejected(self) -> None:
        with pytest.raises(PaginatorConfigurationError):
            DeviceListPaginator(page_size=-1)

    def test_next_link_becomes_cursor(self) -> None:
        paginator = DeviceListPaginator(page_size=2)
        paginator.advance(
            Links(next_url="/v1/test/devices?details=false&from_token=abc&limit=2")
        )

        assert paginator.state is PaginatorState.MID_ITERATION
        assert paginator.next_page_query() == {
            "details": "false",
            "from_token": "abc",
            "limit": "2",
        }

    def test_missing_next_link_exhausts(self) -> None:
        paginator = DeviceListPaginator()
        paginator.advance({"self": "/v1/test/devices"})

        assert not paginator.has_next_page()
        with pytest.raises(PaginationExhaustedError):
            paginator.next_page_query()

    def test_rewind_drops_token(self) -> None:
        paginator = DeviceListPaginator(page_size=2)
        paginator.advance({"next": "/v1/test/devices?from_token=abc&limit=2"})
        paginator.advance(None)
        assert not paginator.has_next_page()

        paginator.rewind()

        assert paginator.has_next_page()
        assert "from_token" not in paginator.next_page_query()

    def test_parse_page_with_ids(self) -> None:
        paginator = DeviceListPaginator(page_size=2)
        page = paginator.parse_page(
            b'{"data": ["a", "b"], "links": {"next": "/devices?from_token=b"}}'
        )
        assert page == ["a", "b"]
        assert paginator.next_page_query()["from_token"] == "b"

    def test_parse_page_with_details(self) -> None:
        paginator = DeviceListPaginator(
            result_format=DeviceResultFormat.DEVICE_DETAILS
        )
        page = paginator.parse_page(
            {"data": [{"id": "f0VMRgIBAQAAAAAAAAAAAA", "connected": True}]}
        )
        assert isinstance(page[0], DeviceDetails)
        assert page[0].connected is True
        assert not paginator.has_next_page()


class TestDatastreamPaginator:
    def test_descending_requires_page_size(self) -> None:
        with pytest.raises(PaginatorConfigurationError) as exc_info:
            DatastreamPaginator(result_set_order=ResultSetOrder.DESCENDING)
        assert str(exc_info.value) == DESCENDING_LIMIT_REQUIRED

    def test_descending_forbids_since(self) -> None:
        with pytest.raises(PaginatorConfigurationError) as exc_info:
            DatastreamPaginator(
                result_set_order=ResultSetOrder.DESCENDING,
                page_size=10,
                since=datetime(2020, 1, 1, tzinfo=timezone.utc),
            )
        assert str(exc_info.value) == DESCENDING_SINCE_FORBIDDEN

    def test_ascending_walk_moves_since(self) -> None:
        paginator = DatastreamPaginator(page_size=2)
        assert paginator.next_page_query() == {
            "limit": "2",
            "since": "1970-01-01T00:00:00Z",
        }

        rows = paginator.parse_page(
            _page("2020-01-01T00:00:00Z", "2020-01-01T00:01:00.5Z")
        )
        assert len(rows) == 2
        assert paginator.state is PaginatorState.MID_ITERATION
        assert paginator.next_page_query() == {
            "limit": "2",
            "since_after": "2020-01-01T00:01:00.5Z",
        }

        paginator.parse_page(_page("2020-01-01T00:02:00Z"))
        assert not paginator.has_next_page()

    def test_descending_walk_moves_to(self) -> None:
        to = datetime(2021, 1, 1, tzinfo=timezone.utc)
        paginator = DatastreamPaginator(
            result_set_order=ResultSetOrder.DESCENDING, page_size=2, to=to
        )
        assert paginator.next_page_query() == {
            "limit": "2",
            "to": "2021-01-01T00:00:00Z",
        }

        paginator.advance(_rows("2020-12-31T00:00:00Z", "2020-12-30T00:00:00Z"))

        assert paginator.next_page_query() == {
            "limit": "2",
            "to": "2020-12-30T00:00:00Z",
        }

    @pytest.mark.parametrize(
        "timestamp",
        [
            "2020-03-12T19:46:53.1234567Z",
            "2020-03-12T19:46:53.12345678Z",
            "2020-03-12T19:46:53.123456789Z",
        ],
    )
    def test_since_after_keeps_nanoseconds(self, timestamp: str) -> None:
        paginator = DatastreamPaginator(page_size=1)
        paginator.advance([{"value": 1, "timestamp": timestamp}])

        assert paginator.next_page_query()["since_after"] == timestamp

    def test_parsed_rows_keep_nanoseconds(self) -> None:
        paginator = DatastreamPaginator(page_size=1)
        rows = paginator.parse_page(_page("2020-03-12T19:46:53.123456789Z"))

        assert rows[0].timestamp.microsecond == 123456
        assert paginator.next_page_query() == {
            "limit": "1",
            "since_after": "2020-03-12T19:46:53.123456789Z",
        }

    def test_descending_to_keeps_nanoseconds(self) -> None:
        paginator = DatastreamPaginator(
            result_set_order=ResultSetOrder.DESCENDING, page_size=1
        )
        paginator.parse_page(_page("2020-03-12T19:46:53.000000001Z"))

        assert paginator.next_page_query()["to"] == "2020-03-12T19:46:53.000000001Z"

        paginator.rewind()
        assert "to" not in paginator.next_page_query()

    def test_empty_page_exhausts(self) -> None:
        paginator = DatastreamPaginator()
        paginator.advance([])
        assert paginator.state is PaginatorState.EXHAUSTED
        with pytest.raises(PaginationExhaustedError):
            paginator.next_page_query()

    def test_failed_first_page_is_not_accepted(self) -> None:
        paginator = DatastreamPaginator(page_size=2)
        assert paginator.accept_failed_page(405) is False
        assert paginator.has_next_page()

    def test_failed_later_page_exhausts(self) -> None:
        paginator = DatastreamPaginator(page_size=2)
        paginator.advance(_rows("2020-01-01T00:00:00Z", "2020-01-02T00:00:00Z"))

        assert paginator.accept_failed_page(405) is True
        assert not paginator.has_next_page()

    def test_rewind_restores_window(self) -> None:
        since = datetime(2020, 1, 1, tzinfo=timezone.utc)
        paginator = DatastreamPaginator(page_size=1, since=since)
        paginator.advance(_rows("2020-06-01T00:00:00Z"))
        assert paginator.since != since

        paginator.rewind()

        assert paginator.is_first_page
        assert paginator.since == since
        assert paginator.get_result_set_order() is ResultSetOrder.ASCENDING
        assert paginator.next_page_query()["since"] == "2020-01-01T00:00:00Z"

    def test_object_pages(self) -> None:
        paginator = DatastreamPaginator(
            aggregation=InterfaceAggregation.OBJECT, page_size=1
        )
        rows = paginator.parse_page(
            {"data": [{"timestamp": "2020-01-01T00:00:00Z", "temp": 21}]}
        )
        assert rows[0].values == {"temp": 21}
        assert paginator.since == datetime(2020, 1, 1, tzinfo=timezone.utc)

    def test_snapshot_page_exhausts(self) -> None:
        paginator = DatastreamPaginator(page_size=1)
        rows = paginator.parse_page(
            {"data": {"a": {"value": 1, "timestamp": "2020-01-01T00:00:00Z"}}}
        )
        assert list(rows) == ["/a"]
        assert not paginator.has_next_page()
