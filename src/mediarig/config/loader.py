"""Configuration loader with precedence handling.

Configuration is loaded with the following precedence (highest to lowest):
1. Arguments passed directly to get_config()
2. Environment variables (MEDIARIG_*, DOCKER_HOST)
3. Config file (~/.mediarig/config.toml)
4. Default values

Environment variables:
- MEDIARIG_CONFIG_PATH: Path to config file (overrides default location)
- MEDIARIG_DOCKER_HOST: Docker Engine address (falls back to DOCKER_HOST)
- MEDIARIG_DOCKER_API_VERSION: API version prefix, e.g. "1.43"
- MEDIARIG_ENGINE_TIMEOUT: Timeout for engine API calls in seconds
- MEDIARIG_PULL_POLICY: always, missing or never
- MEDIARIG_KEEP_CONTAINERS: Leave containers behind after each run
- MEDIARIG_EXIT_TIMEOUT: Seconds to wait for a container to exit
- MEDIARIG_IMAGE_<TOOL>: Image override (FFMPEG, CONCAT, SPLIT, THUMBNAIL,
  FFPROBE, SHAKA_PACKAGER)
- MEDIARIG_WORKSPACE_ROOT: Parent directory for per-test output directories
- MEDIARIG_SAMPLE_MEDIA: Existing sample clip to use instead of generating one
- MEDIARIG_LOG_LEVEL / MEDIARIG_LOG_FORMAT / MEDIARIG_LOG_FILE
"""

from __future__ import annotations

import logging
import threading
import tomllib
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from mediarig.config.env import EnvReader
from mediarig.config.models import (
    DEFAULT_DOCKER_HOST,
    EngineConfig,
    HarnessConfig,
    ImagesConfig,
    LoggingConfig,
    RunnerConfig,
    WorkspaceConfig,
)

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_DIR = Path.home() / ".mediarig"
DEFAULT_CONFIG_FILE = DEFAULT_CONFIG_DIR / "config.toml"

_config_cache: dict[Path, HarnessConfig] = {}
_config_cache_lock = threading.Lock()


def get_default_config_path(env: Mapping[str, str] | None = None) -> Path:
    """Get the default config file path.

    Can be overridden by MEDIARIG_CONFIG_PATH environment variable.
    """
    env_path = EnvReader(env).get_str("MEDIARIG_CONFIG_PATH")
    if env_path:
        return Path(env_path).expanduser()
    return DEFAULT_CONFIG_FILE


def load_config_file(path: Path) -> dict[str, Any]:
    """Load configuration from a TOML file.

    Args:
        path: Path to config file.

    Returns:
        Parsed configuration dict. Empty dict if the file doesn't exist or
        cannot be parsed.
    """
    if not path.exists():
        logger.debug("Config file not found: %s", path)
        return {}

    try:
        with path.open("rb") as f:
            config = tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as e:
        logger.warning("Failed to load config file %s: %s", path, e)
        return {}

    logger.debug("Loaded config from %s", path)
    return config


def _optional_path(value: Any) -> Path | None:
    return Path(value).expanduser() if value else None


def build_config(
    file_config: Mapping[str, Any], env: Mapping[str, str] | None = None
) -> HarnessConfig:
    """Merge file values and environment overrides into a HarnessConfig.

    Args:
        file_config: Parsed TOML content (may be empty).
        env: Environment mapping; os.environ when None.

    Returns:
        Fully resolved configuration.

    Raises:
        ValueError: If a resolved value fails model validation.
    """
    reader = EnvReader(env)

    engine_file = file_config.get("engine", {})
    engine = EngineConfig(
        host=(
            reader.get_str("MEDIARIG_DOCKER_HOST")
            or reader.get_str("DOCKER_HOST")
            or engine_file.get("host", DEFAULT_DOCKER_HOST)
        ),
        api_version=reader.get_str(
            "MEDIARIG_DOCKER_API_VERSION", engine_file.get("api_version")
        ),
        timeout_seconds=reader.get_float(
            "MEDIARIG_ENGINE_TIMEOUT", float(engine_file.get("timeout_seconds", 30.0))
        ),
    )

    runner_file = file_config.get("runner", {})
    runner = RunnerConfig(
        pull_policy=reader.get_str(
            "MEDIARIG_PULL_POLICY", runner_file.get("pull_policy", "missing")
        ),
        keep_containers=reader.get_bool(
            "MEDIARIG_KEEP_CONTAINERS", runner_file.get("keep_containers", False)
        ),
        exit_timeout_seconds=reader.get_float(
            "MEDIARIG_EXIT_TIMEOUT",
            float(runner_file.get("exit_timeout_seconds", 600.0)),
        ),
    )

    images_file = file_config.get("images", {})
    defaults = ImagesConfig().as_dict()
    images = ImagesConfig(
        **{
            name: reader.get_str(
                f"MEDIARIG_IMAGE_{name.upper()}", images_file.get(name, default)
            )
            for name, default in defaults.items()
        }
    )

    workspace_file = file_config.get("workspace", {})
    workspace = WorkspaceConfig(
        root=reader.get_path(
            "MEDIARIG_WORKSPACE_ROOT",
            must_exist=False,
            default=_optional_path(workspace_file.get("root")),
        ),
        sample_media=reader.get_path(
            "MEDIARIG_SAMPLE_MEDIA",
            default=_optional_path(workspace_file.get("sample_media")),
        ),
    )

    logging_file = file_config.get("logging", {})
    logging_config = LoggingConfig(
        level=reader.get_str("MEDIARIG_LOG_LEVEL", logging_file.get("level", "info")),
        file=reader.get_path(
            "MEDIARIG_LOG_FILE",
            must_exist=False,
            default=_optional_path(logging_file.get("file")),
        ),
        format=reader.get_str(
            "MEDIARIG_LOG_FORMAT", logging_file.get("format", "text")
        ),
        include_stderr=logging_file.get("include_stderr", False),
        max_bytes=logging_file.get("max_bytes", 10_485_760),
        backup_count=logging_file.get("backup_count", 5),
    )

    return HarnessConfig(
        engine=engine,
        runner=runner,
        images=images,
        workspace=workspace,
        logging=logging_config,
    )


def get_config(
    config_path: Path | None = None,
    env: Mapping[str, str] | None = None,
) -> HarnessConfig:
    """Get mediarig configuration with full precedence handling.

    Results read from the process environment are cached per config path.
    Passing an explicit ``env`` bypasses the cache.

    Args:
        config_path: Path to config file (overrides MEDIARIG_CONFIG_PATH).
        env: Environment mapping to read instead of os.environ.

    Returns:
        HarnessConfig with merged configuration.
    """
    path = config_path or get_default_config_path(env)

    if env is not None:
        return build_config(load_config_file(path), env)

    with _config_cache_lock:
        cached = _config_cache.get(path)
        if cached is None:
            cached = build_config(load_config_file(path))
            _config_cache[path] = cached
        return cached


def clear_config_cache() -> None:
    """Clear the cached configuration so the next call reloads it."""
    with _config_cache_lock:
        _config_cache.clear()
