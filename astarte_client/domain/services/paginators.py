"""
Domain Service - Paginator State Machines

Cursor state for walking the paginated AppEngine list endpoints. Paginators
only build query parameters and digest the pages handed back to them; the
HTTP round trip belongs to the gateway.

Each paginator instance is single-owner: it holds mutable cursor state and
must not be shared between concurrent callers.
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple, Union
from urllib.parse import parse_qsl, urlsplit

from astarte_client.domain.entities.datastream import Links, ResultSetOrder
from astarte_client.domain.entities.device import DeviceDetails, DeviceResultFormat
from astarte_client.domain.entities.errors import (
    PaginationExhaustedError,
    PaginatorConfigurationError,
)
from astarte_client.domain.entities.interface import InterfaceAggregation
from astarte_client.domain.services.snapshot_parser import (
    decode_document,
    decode_payload,
    parse_datastream_rows,
)
from astarte_client.shared.timestamps import (
    UNIX_EPOCH,
    format_timestamp,
    parse_timestamp,
)

DESCENDING_LIMIT_REQUIRED = (
    "A limit parameter must be specified when using DescendingOrder"
)
DESCENDING_SINCE_FORBIDDEN = (
    "A since parameter must not be supported when using DescendingOrder"
)


class PaginatorState(str, Enum):
    """Lifecycle of a paginator."""

    FRESH = "fresh"
    MID_ITERATION = "mid_iteration"
    EXHAUSTED = "exhausted"


def _sorted_query(query: Mapping[str, str]) -> Dict[str, str]:
    return {key: query[key] for key in sorted(query)}


class DeviceListPaginator:
    """
    Walks the device list of a realm.

    The cursor is the query string of the ``next`` link returned with each
    page, so the platform decides how pages are continued.
    """

    def __init__(
        self,
        page_size: int = 0,
        result_format: DeviceResultFormat = DeviceResultFormat.DEVICE_ID,
    ):
        if page_size < 0:
            raise PaginatorConfigurationError(
                "page_size must not be negative", details={"page_size": page_size}
            )
        self._page_size = page_size
        self._result_format = result_format
        self._cursor: Dict[str, str] = {}
        self.state = PaginatorState.FRESH

    @property
    def result_format(self) -> DeviceResultFormat:
        return self._result_format

    def has_next_page(self) -> bool:
        return self.state != PaginatorState.EXHAUSTED

    def get_page_size(self) -> int:
        return self._page_size

    def rewind(self) -> None:
        """Go back to the first page, dropping the continuation token."""
        self._cursor.pop("from_token", None)
        self.state = PaginatorState.FRESH

    def next_page_query(self) -> Dict[str, str]:
        """
        Build the query parameters of the next page request.

        Raises:
            PaginationExhaustedError: If no more pages are available.
        """
        if not self.has_next_page():
            raise PaginationExhaustedError()

        query = dict(self._cursor)
        if self._page_size > 0 and "limit" not in query:
            query["limit"] = str(self._page_size)
        details = self._result_format == DeviceResultFormat.DEVICE_DETAILS
        query["details"] = "true" if details else "false"
        return _sorted_query(query)

    def advance(self, links: Optional[Union[Links, Mapping[str, Any]]]) -> None:
        """Update the cursor from the ``links`` block of the last page."""
        if not isinstance(links, Links):
            links = Links.from_json(links)

        if not links.next_url:
            self.state = PaginatorState.EXHAUSTED
            return

        self._cursor = dict(parse_qsl(urlsplit(links.next_url).query))
        self.state = PaginatorState.MID_ITERATION

    def parse_page(
        self, payload: Union[bytes, str, Mapping[str, Any]]
    ) -> List[Union[str, DeviceDetails]]:
        """
        Decode a device list page and advance the cursor from its links.

        Returns device IDs or DeviceDetails depending on the result format.
        """
        document = decode_document(payload)
        if not isinstance(document, Mapping):
            document = {}

        rows = document.get("data") or []
        if self._result_format == DeviceResultFormat.DEVICE_DETAILS:
            page: List[Union[str, DeviceDetails]] = [
                DeviceDetails.from_json(row) for row in rows
            ]
        else:
            page = [str(row) for row in rows]

        self.advance(document.get("links"))
        return page


class DatastreamPaginator:
    """
    Walks the samples of a datastream path inside a time window.

    Ascending paginators start from ``since`` (the Unix epoch when unset) and
    move the lower bound forward: the first page uses the inclusive ``since``
    bound, every later page the exclusive ``since_after`` bound set to the
    last sample seen. Descending paginators need a page size, refuse a
    ``since`` bound and move ``to`` backwards.
    """

    def __init__(
        self,
        aggregation: InterfaceAggregation = InterfaceAggregation.INDIVIDUAL,
        result_set_order: ResultSetOrder = ResultSetOrder.ASCENDING,
        page_size: Optional[int] = None,
        since: Optional[datetime] = None,
        to: Optional[datetime] = None,
    ):
        if page_size is not None and page_size < 0:
            raise PaginatorConfigurationError(
                "page_size must not be negative", details={"page_size": page_size}
            )

        if result_set_order == ResultSetOrder.DESCENDING:
            if not page_size:
                raise PaginatorConfigurationError(DESCENDING_LIMIT_REQUIRED)
            if since is not None:
                raise PaginatorConfigurationError(DESCENDING_SINCE_FORBIDDEN)
        elif since is None:
            since = UNIX_EPOCH

        self._aggregation = aggregation
        self._result_set_order = result_set_order
        self._page_size = page_size or 0
        self._initial_since = since
        self._initial_to = to
        self.since = since
        self.to = to
        # Wire form of the bound last moved from a row, sub-microsecond digits kept
        self._since_wire: Optional[str] = None
        self._to_wire: Optional[str] = None
        self.state = PaginatorState.FRESH

    @property
    def aggregation(self) -> InterfaceAggregation:
        return self._aggregation

    @property
    def is_first_page(self) -> bool:
        return self.state == PaginatorState.FRESH

    def has_next_page(self) -> bool:
        return self.state != PaginatorState.EXHAUSTED

    def get_page_size(self) -> int:
        return self._page_size

    def get_result_set_order(self) -> ResultSetOrder:
        return self._result_set_order

    def rewind(self) -> None:
        """Go back to the first page of the window given at construction."""
        self.since = self._initial_since
        self.to = self._initial_to
        self._since_wire = None
        self._to_wire = None
        self.state = PaginatorState.FRESH

    def next_page_query(self) -> Dict[str, str]:
        """
        Build the query parameters of the next page request.

        Raises:
            PaginationExhaustedError: If no more pages are available.
        """
        if not self.has_next_page():
            raise PaginationExhaustedError()

        query: Dict[str, str] = {}
        if self._result_set_order == ResultSetOrder.ASCENDING:
            since = self._since_wire or format_timestamp(self.since or UNIX_EPOCH)
            if self.is_first_page:
                query["since"] = since
            else:
                query["since_after"] = since
        if self.to is not None:
            query["to"] = self._to_wire or format_timestamp(self.to)
        if self._page_size:
            query["limit"] = str(self._page_size)
        return _sorted_query(query)

    def advance(self, rows: Sequence[Any]) -> None:
        """
        Update the window from the rows of the last page.

        A page shorter than the page size, or an empty one, ends the
        iteration. Otherwise the bound the order moves (``since`` when
        ascending, ``to`` when descending) is set to the timestamp of the
        last row.
        """
        if not rows or len(rows) < self._page_size:
            self.state = PaginatorState.EXHAUSTED
            return

        last = _row_timestamp(rows[-1])
        if last is None:
            self.state = PaginatorState.EXHAUSTED
            return

        timestamp, wire = last
        if self._result_set_order == ResultSetOrder.ASCENDING:
            self.since, self._since_wire = timestamp, wire
        else:
            self.to, self._to_wire = timestamp, wire
        self.state = PaginatorState.MID_ITERATION

    def accept_failed_page(self, status_code: int) -> bool:
        """
        Decide whether a non-200 page response ends the iteration quietly.

        When the number of samples is a multiple of the page size the platform
        answers the request following the last full page with an error. Past
        the first page such a response is an empty terminal page: the
        paginator is exhausted and True is returned. On the first page the
        failure is genuine and False is returned.
        """
        if self.is_first_page:
            return False
        self.state = PaginatorState.EXHAUSTED
        return True

    def parse_page(
        self, payload: Union[bytes, str, Mapping[str, Any]]
    ) -> Union[List[Any], Dict[str, Any]]:
        """
        Decode a datastream page for the configured aggregation and advance.

        Time series pages are lists of DatastreamValue or DatastreamObjectValue.
        A page that is not a list is a snapshot tree, returned flattened, and
        ends the iteration.
        """
        data = decode_payload(payload)
        rows = parse_datastream_rows(data, self._aggregation)
        if isinstance(rows, list):
            self.advance(rows)
        else:
            self.state = PaginatorState.EXHAUSTED
        return rows


def _row_timestamp(row: Any) -> Optional[Tuple[datetime, str]]:
    """The parsed timestamp of a row and its wire form."""
    if isinstance(row, Mapping):
        raw = row.get("timestamp")
        if not raw:
            return None
        timestamp = parse_timestamp(raw)
        wire = raw if isinstance(raw, str) else format_timestamp(timestamp)
        return timestamp, wire

    timestamp = getattr(row, "timestamp", None)
    if timestamp is None:
        return None
    return timestamp, getattr(row, "timestamp_wire", "") or format_timestamp(timestamp)
