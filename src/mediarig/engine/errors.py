"""Exceptions raised by the Docker Engine client."""

from __future__ import annotations


class EngineError(Exception):
    """Base class for Docker Engine failures."""


class EngineConnectionError(EngineError):
    """Raised when the daemon cannot be reached or does not answer in time."""


class EngineAPIError(EngineError):
    """Raised when the daemon answers with an unexpected status code."""

    def __init__(self, status_code: int, message: str, path: str = "") -> None:
        self.status_code = status_code
        self.message = message
        self.path = path
        where = f" ({path})" if path else ""
        super().__init__(f"Docker API error {status_code}{where}: {message}")


class ImageNotFoundError(EngineError):
    """Raised when an image is absent locally and may not be pulled."""


class ImagePullError(EngineError):
    """Raised when the daemon reports an error while pulling an image."""


class ContainerNotFoundError(EngineError):
    """Raised when a container id is unknown to the daemon."""


class ContainerTimeoutError(EngineError):
    """Raised when a container does not exit within the allowed time."""
