"""Docker Engine API access."""

from mediarig.engine.archive import build_archive
from mediarig.engine.client import (
    DockerEngineClient,
    resolve_base_url,
    split_image_reference,
)
from mediarig.engine.errors import (
    ContainerNotFoundError,
    ContainerTimeoutError,
    EngineAPIError,
    EngineConnectionError,
    EngineError,
    ImageNotFoundError,
    ImagePullError,
)

__all__ = [
    "ContainerNotFoundError",
    "ContainerTimeoutError",
    "DockerEngineClient",
    "EngineAPIError",
    "EngineConnectionError",
    "EngineError",
    "ImageNotFoundError",
    "ImagePullError",
    "build_archive",
    "resolve_base_url",
    "split_image_reference",
]
