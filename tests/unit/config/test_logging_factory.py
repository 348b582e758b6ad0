"""Tests for logging_factory module."""

from __future__ import annotations

from pathlib import Path
from unittest.mock import patch

import pytest

from mediarig.config.logging_factory import (
    build_logging_config,
    configure_logging_from_cli,
)
from mediarig.config.models import LoggingConfig


class TestBuildLoggingConfig:
    """Tests for build_logging_config function."""

    @pytest.fixture
    def base_config(self) -> LoggingConfig:
        return LoggingConfig(
            level="info",
            file=Path("/var/log/mediarig.log"),
            format="text",
            include_stderr=True,
            max_bytes=1_000_000,
            backup_count=2,
        )

    def test_returns_base_values_when_no_overrides(
        self, base_config: LoggingConfig
    ) -> None:
        result = build_logging_config(base_config)
        assert result == base_config
        assert result is not base_config

    def test_applies_overrides(self, base_config: LoggingConfig) -> None:
        result = build_logging_config(
            base_config,
            level="debug",
            file=Path("/tmp/run.log"),
            format="json",
            include_stderr=False,
        )
        assert result.level == "debug"
        assert result.file == Path("/tmp/run.log")
        assert result.format == "json"
        assert result.include_stderr is False
        assert result.max_bytes == 1_000_000
        assert result.backup_count == 2

    def test_invalid_override_raises(self, base_config: LoggingConfig) -> None:
        with pytest.raises(ValueError, match="level"):
            build_logging_config(base_config, level="loud")


class TestConfigureLoggingFromCli:
    """Tests for configure_logging_from_cli function."""

    def test_applies_overrides_to_base(self) -> None:
        base = LoggingConfig(level="info", format="text", backup_count=2)
        with patch("mediarig.logging.configure_logging") as configure:
            applied = configure_logging_from_cli(base, level="warning", format="json")

        configure.assert_called_once_with(applied)
        assert applied.level == "warning"
        assert applied.format == "json"
        assert applied.backup_count == 2

    def test_does_not_reload_config(self) -> None:
        """Only the section passed in is used."""
        with (
            patch("mediarig.config.loader.get_config") as get_config,
            patch("mediarig.logging.configure_logging"),
        ):
            configure_logging_from_cli(LoggingConfig())

        get_config.assert_not_called()
