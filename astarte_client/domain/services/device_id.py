"""
Domain Service - Device Identifiers

Astarte device IDs are 128 bit values encoded as URL-safe base64 without
padding, 22 characters long.
"""

import base64
import binascii
import re
import uuid
from hashlib import sha1
from typing import Union

from astarte_client.domain.entities.errors import InvalidDeviceIDError

_DEVICE_ID_PATTERN = re.compile(r"^[A-Za-z0-9_-]{22}$")


def _encode(raw: bytes) -> str:
    return base64.urlsafe_b64encode(raw).decode("ascii").rstrip("=")


def _decode(device_id: str) -> bytes:
    if not isinstance(device_id, str) or not _DEVICE_ID_PATTERN.match(device_id):
        raise InvalidDeviceIDError(str(device_id))
    try:
        raw = base64.urlsafe_b64decode(device_id + "==")
    except (binascii.Error, ValueError) as e:
        raise InvalidDeviceIDError(device_id) from e
    if len(raw) != 16:
        raise InvalidDeviceIDError(device_id)
    return raw


def is_valid_device_id(device_id: str) -> bool:
    """Return whether device_id decodes to exactly 16 bytes."""
    try:
        _decode(device_id)
    except InvalidDeviceIDError:
        return False
    return True


def generate_random_device_id() -> str:
    """Return a device ID built from a random UUID. Not meant for production."""
    return _encode(uuid.uuid4().bytes)


def generate_namespaced_device_id(
    namespace: Union[str, uuid.UUID], payload: Union[bytes, str]
) -> str:
    """
    Return the device ID derived from a namespace and an arbitrary payload.

    The same namespace and payload always give the same ID (UUIDv5).

    Raises:
        ValueError: If namespace is not a valid UUID string.
    """
    if not isinstance(namespace, uuid.UUID):
        namespace = uuid.UUID(namespace)
    if isinstance(payload, str):
        payload = payload.encode("utf-8")
    digest = sha1(namespace.bytes + payload).digest()[:16]
    device_uuid = uuid.UUID(bytes=digest, version=5)
    return _encode(device_uuid.bytes)


def device_id_to_uuid(device_id: str) -> str:
    """
    Convert a device ID to the canonical UUID string representation.

    Raises:
        InvalidDeviceIDError: If device_id is not a valid device ID.
    """
    return str(uuid.UUID(bytes=_decode(device_id)))


def uuid_to_device_id(device_uuid: Union[str, uuid.UUID]) -> str:
    """
    Convert a UUID to a device ID.

    Raises:
        ValueError: If device_uuid is not a valid UUID string.
    """
    if not isinstance(device_uuid, uuid.UUID):
        device_uuid = uuid.UUID(device_uuid)
    return _encode(device_uuid.bytes)
