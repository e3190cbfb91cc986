"""
Astarte Client Root Module

Client toolkit for the Astarte IoT platform APIs.

Layer Structure:
- Domain: Interfaces, triggers, telemetry values and the algorithms on them
- Application: Wire DTOs, schema parsers and use cases
- Infrastructure: HTTP implementation of the AppEngine gateway
- Shared: Cross-cutting concerns and shared utilities
- Main: Configuration and dependency injection container
"""

__version__ = "0.1.0"
