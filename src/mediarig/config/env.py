"""Typed access to MEDIARIG_* (and DOCKER_HOST) environment variables.

EnvReader takes an optional mapping so tests can pass a plain dict instead
of patching os.environ.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from pathlib import Path

logger = logging.getLogger(__name__)

_TRUE_VALUES = frozenset({"true", "1", "yes", "on"})


class EnvReader:
    """Read environment variables as str, float, bool or Path.

    Unparsable values are logged and replaced by the caller's default, so
    a typo in one variable never hides the rest of the configuration.

    Example:
        reader = EnvReader(env={"MEDIARIG_EXIT_TIMEOUT": "90"})
        reader.get_float("MEDIARIG_EXIT_TIMEOUT", 600.0)  # 90.0
    """

    def __init__(self, env: Mapping[str, str] | None = None) -> None:
        """Initialize the reader.

        Args:
            env: Mapping to read from. os.environ when None.
        """
        self._env: Mapping[str, str] = env if env is not None else os.environ

    def get_str(self, var: str, default: str | None = None) -> str | None:
        """Get a variable as a string.

        Args:
            var: Variable name, e.g. MEDIARIG_DOCKER_HOST.
            default: Returned when the variable is unset.

        Returns:
            The raw value (an empty string counts as set), or ``default``.
        """
        value = self._env.get(var)
        if value is None:
            return default
        return value

    def get_float(self, var: str, default: float | None = None) -> float | None:
        """Get a variable as a float, e.g. a timeout in seconds.

        Args:
            var: Variable name, e.g. MEDIARIG_ENGINE_TIMEOUT.
            default: Returned when the variable is unset or not a number.

        Returns:
            The parsed value, or ``default``. A value that cannot be parsed
            is logged at warning level.
        """
        value = self._env.get(var)
        if value is None:
            return default
        try:
            return float(value)
        except ValueError:
            logger.warning("Invalid float value for %s: %s", var, value)
            return default

    def get_bool(self, var: str, default: bool | None = None) -> bool | None:
        """Get a variable as a flag.

        "true", "1", "yes" and "on" (any case) are true; every other value
        is false.

        Args:
            var: Variable name, e.g. MEDIARIG_KEEP_CONTAINERS.
            default: Returned when the variable is unset.

        Returns:
            The flag, or ``default``.
        """
        value = self._env.get(var)
        if value is None:
            return default
        return value.lower() in _TRUE_VALUES

    def get_path(
        self, var: str, must_exist: bool = True, default: Path | None = None
    ) -> Path | None:
        """Get a variable as a filesystem path with ``~`` expanded.

        Args:
            var: Variable name, e.g. MEDIARIG_SAMPLE_MEDIA.
            must_exist: Reject (with a warning) paths that do not exist.
                Output locations such as MEDIARIG_WORKSPACE_ROOT pass False.
            default: Returned when the variable is unset or rejected.

        Returns:
            The path, or ``default``.
        """
        value = self._env.get(var)
        if value is None:
            return default

        path = Path(value).expanduser()
        if must_exist and not path.exists():
            logger.warning(
                "Environment variable %s points to non-existent path: %s",
                var,
                value,
            )
            return default
        return path
