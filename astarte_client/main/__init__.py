"""
Main module - Main/Composition Root Layer

This module assembles the client: it loads the settings and builds the
dependency container wiring the AppEngine gateway into the use cases.
"""

from .config import AppEngineSettings, AppSettings, LoggingSettings, get_settings
from .container import AppContainer, get_container, init_container

__all__ = [
    "AppEngineSettings",
    "AppSettings",
    "LoggingSettings",
    "get_settings",
    "AppContainer",
    "init_container",
    "get_container",
]
