"""Configuration management for mediarig.

Configuration is loaded with precedence handling:
1. Explicit arguments (highest priority)
2. Environment variables (MEDIARIG_*)
3. Config file (~/.mediarig/config.toml)
4. Default values (lowest priority)
"""

from mediarig.config.env import EnvReader
from mediarig.config.loader import (
    build_config,
    clear_config_cache,
    get_config,
    get_default_config_path,
    load_config_file,
)
from mediarig.config.logging_factory import (
    build_logging_config,
    configure_logging_from_cli,
)
from mediarig.config.models import (
    EngineConfig,
    HarnessConfig,
    ImagesConfig,
    LoggingConfig,
    RunnerConfig,
    WorkspaceConfig,
)

__all__ = [
    # Models
    "EngineConfig",
    "HarnessConfig",
    "ImagesConfig",
    "LoggingConfig",
    "RunnerConfig",
    "WorkspaceConfig",
    # Loader
    "EnvReader",
    "build_config",
    "clear_config_cache",
    "get_config",
    "get_default_config_path",
    "load_config_file",
    # Logging
    "build_logging_config",
    "configure_logging_from_cli",
]
