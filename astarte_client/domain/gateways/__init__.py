"""
Gateways Package - Domain Layer

This package contains the interface of the AppEngine gateway. The HTTP
implementation is provided by the infrastructure layer.
"""

from .appengine_gateway import IAppEngineGateway, RawResponse

__all__ = ["IAppEngineGateway", "RawResponse"]
