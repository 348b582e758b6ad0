"""Structured logging module for mediarig.

Provides configurable logging with JSON format support, file rotation and
container context on every record.
"""

from mediarig.logging.config import configure_logging
from mediarig.logging.context import (
    ContainerContextFilter,
    bind_container_id,
    clear_container_context,
    container_context,
    get_container_context,
    set_container_context,
)
from mediarig.logging.handlers import JSONFormatter

__all__ = [
    "ContainerContextFilter",
    "JSONFormatter",
    "bind_container_id",
    "clear_container_context",
    "configure_logging",
    "container_context",
    "get_container_context",
    "set_container_context",
]
