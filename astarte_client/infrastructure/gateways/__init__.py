"""
Gateways Package - Infrastructure Layer

This package contains the HTTP implementation of the AppEngine gateway.
"""

from .appengine_gateway import (
    AppEngineError,
    AppEngineGateway,
    resolve_device_identifier_type,
)

__all__ = ["AppEngineError", "AppEngineGateway", "resolve_device_identifier_type"]
