"""Shared fixtures for CLI tests."""

from unittest.mock import MagicMock, patch

import pytest
from click.testing import CliRunner

from mediarig.config import HarnessConfig
from mediarig.engine import DockerEngineClient
from mediarig.runner import ContainerRunner


@pytest.fixture
def cli_runner():
    """Create a Click test runner."""
    return CliRunner()


@pytest.fixture(autouse=True)
def no_logging_setup():
    """Keep CLI invocations from reconfiguring the root logger."""
    with patch("mediarig.cli._configure_logging"):
        yield


@pytest.fixture
def config():
    return HarnessConfig()


@pytest.fixture
def engine_client():
    client = MagicMock(spec=DockerEngineClient)
    client.host = "unix:///var/run/docker.sock"
    return client


@pytest.fixture
def container_runner():
    return MagicMock(spec=ContainerRunner)
