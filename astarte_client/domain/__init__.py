"""
Domain Layer Package

This package contains the Astarte data model and the algorithms working on
it: path matching, payload validation, snapshot parsing and pagination. It
has no dependencies on external frameworks or transports.
"""

# Re-export submodules
from astarte_client.domain import entities, gateways, services

__all__ = ["entities", "gateways", "services"]
