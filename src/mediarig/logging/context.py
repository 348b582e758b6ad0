"""Container context for structured logging.

Uses contextvars so that every record emitted while a container is being
driven carries the image and container id, whichever module logs it.
"""

from __future__ import annotations

import contextvars
import logging
from collections.abc import Generator
from contextlib import contextmanager

_image: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "image", default=None
)
_container_id: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "container_id", default=None
)

# Docker's short id length
SHORT_ID_LENGTH = 12


def set_container_context(image: str, container_id: str | None = None) -> None:
    """Set the current container context."""
    _image.set(image)
    _container_id.set(container_id)


def clear_container_context() -> None:
    """Clear the current container context."""
    _image.set(None)
    _container_id.set(None)


def get_container_context() -> tuple[str | None, str | None]:
    """Get current container context.

    Returns:
        Tuple of (image, container_id), either may be None.
    """
    return _image.get(), _container_id.get()


@contextmanager
def container_context(
    image: str, container_id: str | None = None
) -> Generator[None, None, None]:
    """Scope log records to one container.

    Restores the previous context on exit, so contexts nest.

    Example:
        with container_context("ghcr.io/veloxpack/ffprobe:latest", cid):
            logger.info("Container started")
    """
    old_image = _image.get()
    old_container_id = _container_id.get()
    try:
        set_container_context(image, container_id)
        yield
    finally:
        _image.set(old_image)
        _container_id.set(old_container_id)


def bind_container_id(container_id: str) -> None:
    """Attach a container id to the context once the daemon has assigned it."""
    _container_id.set(container_id)


def _short_image(image: str) -> str:
    """ghcr.io/veloxpack/ffmpeg:8.0-lite -> ffmpeg:8.0-lite"""
    return image.rsplit("/", 1)[-1]


class ContainerContextFilter(logging.Filter):
    """Logging filter that injects container context into log records.

    Adds image and container_id attributes for JSON output and a compact
    container_tag such as ``[ffprobe:latest@1a2b3c4d5e6f] `` for text output.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        """Enrich the record; never drops it."""
        image, container_id = get_container_context()

        record.image = image
        record.container_id = container_id

        if image:
            tag = _short_image(image)
            if container_id:
                tag = f"{tag}@{container_id[:SHORT_ID_LENGTH]}"
            record.container_tag = f"[{tag}] "
        else:
            record.container_tag = ""

        return True
