"""Tests for config loader module."""

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from mediarig.config.loader import (
    DEFAULT_CONFIG_FILE,
    build_config,
    clear_config_cache,
    get_config,
    get_default_config_path,
    load_config_file,
)
from mediarig.config.models import DEFAULT_DOCKER_HOST


class TestGetDefaultConfigPath:
    """Tests for get_default_config_path function."""

    def test_returns_default_when_env_not_set(self) -> None:
        assert get_default_config_path(env={}) == DEFAULT_CONFIG_FILE

    def test_returns_env_path_when_set(self) -> None:
        env = {"MEDIARIG_CONFIG_PATH": "/custom/config.toml"}
        assert get_default_config_path(env=env) == Path("/custom/config.toml")


class TestLoadConfigFile:
    """Tests for load_config_file function."""

    def test_missing_file_returns_empty(self, tmp_path: Path) -> None:
        assert load_config_file(tmp_path / "absent.toml") == {}

    def test_parses_toml(self, tmp_path: Path) -> None:
        path = tmp_path / "config.toml"
        path.write_text('[runner]\npull_policy = "never"\n')
        assert load_config_file(path) == {"runner": {"pull_policy": "never"}}

    def test_invalid_toml_warns_and_returns_empty(
        self, tmp_path: Path, caplog: pytest.LogCaptureFixture
    ) -> None:
        path = tmp_path / "config.toml"
        path.write_text("[runner\npull_policy = never\n")
        with caplog.at_level(logging.WARNING):
            assert load_config_file(path) == {}
        assert "Failed to load config file" in caplog.text


class TestBuildConfig:
    """Tests for precedence handling in build_config."""

    def test_defaults(self) -> None:
        config = build_config({}, env={})
        assert config.engine.host == DEFAULT_DOCKER_HOST
        assert config.runner.pull_policy == "missing"
        assert config.images.ffprobe == "ghcr.io/veloxpack/ffprobe:latest"
        assert config.workspace.root is None
        assert config.logging.level == "info"

    def test_docker_host_fallback(self) -> None:
        config = build_config({}, env={"DOCKER_HOST": "tcp://build-host:2375"})
        assert config.engine.host == "tcp://build-host:2375"

    def test_mediarig_docker_host_wins(self) -> None:
        env = {
            "DOCKER_HOST": "tcp://build-host:2375",
            "MEDIARIG_DOCKER_HOST": "unix:///run/user/1000/docker.sock",
        }
        config = build_config({}, env=env)
        assert config.engine.host == "unix:///run/user/1000/docker.sock"

    def test_file_values_used(self) -> None:
        file_config = {
            "engine": {"host": "tcp://ci:2375", "timeout_seconds": 5},
            "runner": {"pull_policy": "always", "keep_containers": True},
            "images": {"ffprobe": "registry.local/ffprobe:7.1"},
            "logging": {"format": "json", "include_stderr": True},
        }
        config = build_config(file_config, env={})
        assert config.engine.host == "tcp://ci:2375"
        assert config.engine.timeout_seconds == 5.0
        assert config.runner.pull_policy == "always"
        assert config.runner.keep_containers is True
        assert config.images.ffprobe == "registry.local/ffprobe:7.1"
        assert config.images.ffmpeg == "ghcr.io/veloxpack/ffmpeg:8.0-lite"
        assert config.logging.format == "json"
        assert config.logging.include_stderr is True

    def test_env_overrides_file(self) -> None:
        file_config = {"images": {"shaka_packager": "registry.local/shaka:2"}}
        env = {
            "MEDIARIG_IMAGE_SHAKA_PACKAGER": "registry.local/shaka:3",
            "MEDIARIG_EXIT_TIMEOUT": "30",
            "MEDIARIG_KEEP_CONTAINERS": "yes",
        }
        config = build_config(file_config, env=env)
        assert config.images.shaka_packager == "registry.local/shaka:3"
        assert config.runner.exit_timeout_seconds == 30.0
        assert config.runner.keep_containers is True

    def test_workspace_root_need_not_exist(self, tmp_path: Path) -> None:
        root = tmp_path / "runs"
        config = build_config({}, env={"MEDIARIG_WORKSPACE_ROOT": str(root)})
        assert config.workspace.root == root

    def test_missing_sample_media_ignored(self, tmp_path: Path) -> None:
        env = {"MEDIARIG_SAMPLE_MEDIA": str(tmp_path / "missing.mp4")}
        assert build_config({}, env=env).workspace.sample_media is None

    def test_invalid_value_raises(self) -> None:
        with pytest.raises(ValueError, match="pull_policy"):
            build_config({}, env={"MEDIARIG_PULL_POLICY": "sometimes"})


class TestGetConfig:
    """Tests for get_config caching."""

    def test_reads_explicit_path(self, tmp_path: Path) -> None:
        path = tmp_path / "config.toml"
        path.write_text('[images]\nffmpeg = "local/ffmpeg:dev"\n')
        config = get_config(config_path=path, env={})
        assert config.images.ffmpeg == "local/ffmpeg:dev"

    def test_cached_per_path(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        path = tmp_path / "config.toml"
        path.write_text("")
        monkeypatch.delenv("MEDIARIG_PULL_POLICY", raising=False)
        first = get_config(config_path=path)
        assert get_config(config_path=path) is first

        clear_config_cache()
        assert get_config(config_path=path) is not first

    def test_explicit_env_bypasses_cache(self, tmp_path: Path) -> None:
        path = tmp_path / "config.toml"
        path.write_text("")
        cached = get_config(config_path=path)
        fresh = get_config(config_path=path, env={"MEDIARIG_PULL_POLICY": "never"})
        assert fresh is not cached
        assert fresh.runner.pull_policy == "never"
