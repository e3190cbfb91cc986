"""
Domain Errors

This module defines the error hierarchy raised by the interface, trigger,
snapshot and pagination services.
"""

from typing import Any, Dict, Optional


class DomainError(Exception):
    """Base class for domain errors."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)


class SchemaValidationError(DomainError):
    """Raised when a schema document fails validation."""

    def __init__(
        self,
        message: str,
        field: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        self.field = field
        super().__init__(message, details)


class InterfaceValidationError(SchemaValidationError):
    """Raised when an interface document is missing or has invalid fields."""

    def __init__(
        self,
        reason: str,
        field: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(f"Invalid interface: {reason}", field, details)


class TriggerValidationError(SchemaValidationError):
    """Raised when a trigger document is missing or has invalid fields."""


class PathNotFoundError(DomainError):
    """Raised when a path cannot be resolved against an interface's mappings."""

    def __init__(self, path: str, interface_name: str):
        self.path = path
        self.interface_name = interface_name
        super().__init__(
            f"Path {path} does not exist on Interface {interface_name}",
            details={"path": path, "interface_name": interface_name},
        )


class InvalidQueryPathError(DomainError):
    """Raised when a query path does not match the interface structure."""


class ValueTypeMismatchError(DomainError):
    """Raised when a value is not compatible with a mapping's declared type."""

    def __init__(self, expected_type: str, offered_type: str):
        self.expected_type = expected_type
        self.offered_type = offered_type
        super().__init__(
            f"Value of type {offered_type} does not match type restrictions "
            f"for {expected_type}",
            details={"expected": expected_type, "offered": offered_type},
        )


class SnapshotParseError(DomainError):
    """Raised when a telemetry payload cannot be decoded or is malformed."""


class PaginatorConfigurationError(DomainError):
    """Raised when a paginator is constructed with incompatible parameters."""


class PaginationExhaustedError(DomainError):
    """Raised when a page is requested from an exhausted paginator."""

    def __init__(self) -> None:
        super().__init__("No more pages available")


class InvalidDeviceIDError(DomainError):
    """Raised when a string is not a valid Astarte device ID."""

    def __init__(self, device_id: str):
        self.device_id = device_id
        super().__init__(f"{device_id} is not a valid Astarte device ID")


class AppEngineError(DomainError):
    """Raised when an AppEngine request fails or answers with an error status."""

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        errors: Optional[Dict[str, Any]] = None,
    ):
        self.status_code = status_code
        self.errors = errors or {}
        super().__init__(
            message, details={"status_code": status_code, "errors": self.errors}
        )
