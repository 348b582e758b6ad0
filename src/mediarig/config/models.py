"""Configuration data models.

This module defines dataclasses for mediarig configuration options.
"""

from dataclasses import dataclass, field
from pathlib import Path

DEFAULT_DOCKER_HOST = "unix:///var/run/docker.sock"

VALID_PULL_POLICIES = frozenset({"always", "missing", "never"})


@dataclass
class EngineConfig:
    """Connection settings for the Docker Engine API."""

    # unix:///path/to/docker.sock, tcp://host:port or http(s)://host:port
    host: str = DEFAULT_DOCKER_HOST

    # Optional API version prefix, e.g. "1.43" -> /v1.43/containers/...
    api_version: str | None = None

    # Timeout for regular API calls in seconds
    timeout_seconds: float = 30.0

    def __post_init__(self) -> None:
        """Validate configuration."""
        if not self.host.startswith(("unix://", "tcp://", "http://", "https://")):
            raise ValueError(
                "host must start with unix://, tcp://, http:// or https://, "
                f"got {self.host}"
            )
        if self.timeout_seconds <= 0:
            raise ValueError(
                f"timeout_seconds must be positive, got {self.timeout_seconds}"
            )


@dataclass
class RunnerConfig:
    """Container lifecycle behaviour."""

    # When to pull images: always, missing, never
    pull_policy: str = "missing"

    # Leave containers behind after a run (for debugging)
    keep_containers: bool = False

    # How long to wait for a container to exit, in seconds
    exit_timeout_seconds: float = 600.0

    def __post_init__(self) -> None:
        """Validate configuration."""
        if self.pull_policy not in VALID_PULL_POLICIES:
            raise ValueError(
                f"pull_policy must be one of {sorted(VALID_PULL_POLICIES)}, "
                f"got {self.pull_policy}"
            )
        if self.exit_timeout_seconds <= 0:
            raise ValueError(
                "exit_timeout_seconds must be positive, "
                f"got {self.exit_timeout_seconds}"
            )


@dataclass
class ImagesConfig:
    """Image references for each tool under test."""

    ffmpeg: str = "ghcr.io/veloxpack/ffmpeg:8.0-lite"
    concat: str = "ghcr.io/veloxpack/ffmpeg:8.0-concat"
    split: str = "ghcr.io/veloxpack/ffmpeg:8.0-split"
    thumbnail: str = "ghcr.io/veloxpack/ffmpeg:8.0-thumbnail"
    ffprobe: str = "ghcr.io/veloxpack/ffprobe:latest"
    shaka_packager: str = "ghcr.io/veloxpack/shaka-packager:latest"

    def __post_init__(self) -> None:
        """Validate configuration."""
        for name, value in self.as_dict().items():
            if not value or not value.strip():
                raise ValueError(f"image reference for {name} must not be empty")

    def as_dict(self) -> dict[str, str]:
        """Return image references keyed by tool name."""
        return {
            "ffmpeg": self.ffmpeg,
            "concat": self.concat,
            "split": self.split,
            "thumbnail": self.thumbnail,
            "ffprobe": self.ffprobe,
            "shaka_packager": self.shaka_packager,
        }


@dataclass
class WorkspaceConfig:
    """Where per-test output directories and sample media live."""

    # Parent of per-test output directories (None = system temp dir)
    root: Path | None = None

    # Pre-existing sample clip (None = generate one with the ffmpeg image)
    sample_media: Path | None = None


@dataclass
class LoggingConfig:
    """Configuration for structured logging."""

    # Log level: debug, info, warning, error
    level: str = "info"

    # Log file path (None = stderr only)
    file: Path | None = None

    # Log format: text or json
    format: str = "text"

    # Also log to stderr when file is set
    include_stderr: bool = False

    # Rotation threshold in bytes (default 10MB)
    max_bytes: int = 10_485_760

    # Number of rotated files to keep
    backup_count: int = 5

    def __post_init__(self) -> None:
        """Validate configuration."""
        valid_levels = {"debug", "info", "warning", "error"}
        if self.level.lower() not in valid_levels:
            raise ValueError(f"level must be one of {valid_levels}, got {self.level}")
        valid_formats = {"text", "json"}
        if self.format.lower() not in valid_formats:
            raise ValueError(
                f"format must be one of {valid_formats}, got {self.format}"
            )


@dataclass
class HarnessConfig:
    """Main configuration container."""

    engine: EngineConfig = field(default_factory=EngineConfig)
    runner: RunnerConfig = field(default_factory=RunnerConfig)
    images: ImagesConfig = field(default_factory=ImagesConfig)
    workspace: WorkspaceConfig = field(default_factory=WorkspaceConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
