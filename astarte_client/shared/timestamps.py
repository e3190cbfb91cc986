"""RFC3339 timestamp helpers shared by the parsers and the paginators."""

from __future__ import annotations

import re
from datetime import datetime, timezone
from typing import Union

_RFC3339_PATTERN = re.compile(
    r"^(?P<base>\d{4}-\d{2}-\d{2}[Tt ]\d{2}:\d{2}:\d{2})"
    r"(?:\.(?P<fraction>\d+))?"
    r"(?P<offset>[Zz]|[+-]\d{2}:\d{2})?$"
)

UNIX_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def parse_timestamp(value: Union[str, datetime]) -> datetime:
    """
    Parse an RFC3339 (optionally nanosecond precision) timestamp.

    Sub-microsecond digits are truncated. Timestamps without an offset are
    interpreted as UTC.

    Raises:
        ValueError: If the value is not a valid RFC3339 timestamp.
    """
    if isinstance(value, datetime):
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value

    if not isinstance(value, str):
        raise ValueError(f"{value!r} is not a valid RFC3339 timestamp")

    match = _RFC3339_PATTERN.match(value.strip())
    if match is None:
        raise ValueError(f"{value!r} is not a valid RFC3339 timestamp")

    fraction = (match.group("fraction") or "")[:6].ljust(6, "0")
    offset = match.group("offset") or "Z"
    if offset in ("Z", "z"):
        offset = "+00:00"

    base = match.group("base").replace("t", "T").replace(" ", "T")
    return datetime.fromisoformat(f"{base}.{fraction}{offset}")


def format_timestamp(value: datetime) -> str:
    """Format a datetime as an RFC3339Nano UTC string, without trailing zeros."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    value = value.astimezone(timezone.utc)

    formatted = value.strftime("%Y-%m-%dT%H:%M:%S")
    if value.microsecond:
        formatted += "." + f"{value.microsecond:06d}".rstrip("0")
    return formatted + "Z"
