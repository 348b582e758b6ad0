"""Apply command-line logging overrides to the configured logging section.

The CLI loads HarnessConfig once and hands its ``logging`` section here, so
a bad config value is reported before any logging is set up.
"""

from __future__ import annotations

from dataclasses import replace
from pathlib import Path

from mediarig.config.models import LoggingConfig


def build_logging_config(
    base: LoggingConfig,
    *,
    level: str | None = None,
    file: Path | None = None,
    format: str | None = None,
    include_stderr: bool | None = None,
) -> LoggingConfig:
    """Return a copy of ``base`` with the given overrides applied.

    Args:
        base: Logging section of the loaded configuration.
        level: Log level from --log-level (debug, info, warning, error).
        file: Log file from --log-file.
        format: "json" when --log-json is passed, otherwise None.
        include_stderr: Also write to stderr when logging to a file.

    Returns:
        A new LoggingConfig. Rotation settings always come from ``base``.

    Raises:
        ValueError: If an override fails LoggingConfig validation.
    """
    overrides = {
        "level": level,
        "file": file,
        "format": format,
        "include_stderr": include_stderr,
    }
    return replace(
        base, **{name: value for name, value in overrides.items() if value is not None}
    )


def configure_logging_from_cli(
    base: LoggingConfig,
    *,
    level: str | None = None,
    file: Path | None = None,
    format: str | None = None,
    include_stderr: bool | None = None,
) -> LoggingConfig:
    """Configure process logging from ``base`` plus CLI overrides.

    Args:
        base: Logging section of the loaded configuration.
        level: Override log level.
        file: Override log file path.
        format: Override log format.
        include_stderr: Override stderr inclusion.

    Returns:
        The LoggingConfig that was applied.
    """
    from mediarig.logging import configure_logging

    final_config = build_logging_config(
        base,
        level=level,
        file=file,
        format=format,
        include_stderr=include_stderr,
    )
    configure_logging(final_config)
    return final_config
