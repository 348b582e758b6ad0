"""Container lifecycle for the integration suite."""

from mediarig.runner.models import (
    BindMount,
    ContainerExitError,
    ContainerFile,
    ContainerRequest,
    ContainerResult,
)
from mediarig.runner.runner import ContainerRunner

__all__ = [
    "BindMount",
    "ContainerExitError",
    "ContainerFile",
    "ContainerRequest",
    "ContainerResult",
    "ContainerRunner",
]
