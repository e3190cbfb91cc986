"""
Application Layer Package

This package contains the wire DTOs, the schema parsers built on them and the
use cases orchestrating the AppEngine gateway and the domain services.
"""

# Re-export submodules
from astarte_client.application import dtos, services, use_cases

__all__ = ["dtos", "services", "use_cases"]
