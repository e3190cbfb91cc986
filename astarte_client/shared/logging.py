"""
Logging Configuration - Shared Layer

structlog is layered over the standard logging module: library code logs
dotted events (``appengine.fetch.request``, ``paginator.devices.advanced``)
through ``get_logger`` and the root handlers render them. Stdlib records
emitted by httpx go through the same renderer.

The client never configures logging on import. Applications call
``configure_logging`` once, or ``update_logging_from_settings`` after
loading ``AppSettings``.
"""

import logging
import os
import sys
from typing import Any, List, Optional

import structlog
from structlog.types import Processor

from astarte_client.shared.consts import EnumEnvironment

LOG_LEVEL_ENV = "LOG_LEVEL"
LOG_FILE_PATH_ENV = "LOG_FILE_PATH"


def _common_processors() -> List[Processor]:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]


def _renderer(json_output: bool) -> Processor:
    if json_output:
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer()


def _build_handlers(file_path: Optional[str]) -> List[logging.Handler]:
    handlers: List[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if file_path:
        handlers.append(logging.FileHandler(file_path))
    return handlers


def configure_logging(
    level: Optional[str] = None,
    file_path: Optional[str] = None,
    environment: str = EnumEnvironment.DEVELOPMENT.value,
    json_output: Optional[bool] = None,
) -> None:
    """
    Route structlog and stdlib logging to stdout, plus an optional file.

    Args:
        level: Log level name, falling back to ``LOG_LEVEL`` then INFO.
        file_path: Extra log file, falling back to ``LOG_FILE_PATH``.
        environment: Deployment environment name.
        json_output: Force JSON (True) or console (False) rendering. When
            None, production renders JSON and every other environment
            renders for the console.
    """
    level_name = (level or os.environ.get(LOG_LEVEL_ENV) or "INFO").upper()
    log_file = file_path or os.environ.get(LOG_FILE_PATH_ENV)
    if json_output is None:
        json_output = environment.lower() == EnumEnvironment.PRODUCTION.value

    formatter = structlog.stdlib.ProcessorFormatter(
        processor=_renderer(json_output),
        foreign_pre_chain=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            *_common_processors(),
        ],
    )
    handlers = _build_handlers(log_file)
    for handler in handlers:
        handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)
        handler.close()
    root_logger.handlers = handlers
    root_logger.setLevel(getattr(logging, level_name, logging.INFO))

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            *_common_processors(),
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    get_logger(__name__).debug(
        "logging.configured",
        level=level_name,
        file_path=log_file,
        json_output=json_output,
    )


def _wire_value(value: Any) -> Any:
    return getattr(value, "value", value)


def update_logging_from_settings(settings: Any) -> None:
    """Apply the ``logging`` section and ``environment`` of ``AppSettings``."""
    configure_logging(
        level=_wire_value(settings.logging.level),
        file_path=settings.logging.file_path,
        environment=_wire_value(settings.environment),
        json_output=settings.logging.json_output,
    )


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Get a structlog logger configured for the client."""
    return structlog.get_logger(name)
