"""
Infrastructure Layer Package

This package contains the implementations of the domain gateways on top of
external systems.
"""

from astarte_client.infrastructure import gateways

__all__ = ["gateways"]
