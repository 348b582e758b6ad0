"""Integration fixtures: a live Docker Engine and the sample clip.

This module provides pytest fixtures for:
- Engine availability (tests are skipped when the daemon is unreachable)
- The sample clip, taken from MEDIARIG_SAMPLE_MEDIA or generated once per
  session with the ffmpeg image
- Fresh per-test output directories
- A factory fixture that runs one tool container and logs its output
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from pathlib import Path
from typing import TYPE_CHECKING

import pytest

from mediarig.commands import OUTPUT_DIR, SAMPLE_INPUT
from mediarig.config import HarnessConfig, ImagesConfig, get_config
from mediarig.engine import EngineError
from mediarig.media import generate_sample
from mediarig.runner import (
    BindMount,
    ContainerFile,
    ContainerRequest,
    ContainerResult,
    ContainerRunner,
)
from mediarig.workspace import cleanup_dir, create_output_dir

if TYPE_CHECKING:
    from _pytest.config import Config

logger = logging.getLogger(__name__)

RunTool = Callable[..., ContainerResult]


def pytest_configure(config: Config) -> None:
    """Register custom markers for engine requirements."""
    config.addinivalue_line(
        "markers",
        "requires_docker: mark test as requiring a reachable Docker Engine",
    )


# =============================================================================
# Engine Fixtures
# =============================================================================


@pytest.fixture(scope="session")
def harness_config() -> HarnessConfig:
    """Configuration from the environment and config file."""
    return get_config()


@pytest.fixture(scope="session")
def images(harness_config: HarnessConfig) -> ImagesConfig:
    return harness_config.images


@pytest.fixture(scope="session")
def runner(harness_config: HarnessConfig):
    """A ContainerRunner bound to the configured engine.

    Skips the requesting test when the daemon cannot be reached.
    """
    container_runner = ContainerRunner.from_config(harness_config)
    try:
        reachable = container_runner.client.ping()
    except EngineError as e:
        container_runner.close()
        pytest.skip(f"Docker Engine not reachable at {harness_config.engine.host}: {e}")
    if not reachable:
        container_runner.close()
        pytest.skip(f"Docker Engine at {harness_config.engine.host} did not answer")

    yield container_runner
    container_runner.close()


# =============================================================================
# Media Fixtures
# =============================================================================


@pytest.fixture(scope="session")
def sample_media(
    harness_config: HarnessConfig,
    runner: ContainerRunner,
    tmp_path_factory: pytest.TempPathFactory,
) -> Path:
    """Path of the sample clip on the host."""
    configured = harness_config.workspace.sample_media
    if configured is not None:
        return configured.resolve()
    media_dir = tmp_path_factory.mktemp("media")
    media_dir.chmod(0o777)
    return generate_sample(runner, harness_config.images.ffmpeg, media_dir)


@pytest.fixture
def sample_file(sample_media: Path) -> ContainerFile:
    """The sample clip staged at /input/sample.mp4."""
    return ContainerFile(sample_media, SAMPLE_INPUT)


@pytest.fixture
def output_path(harness_config: HarnessConfig):
    """A fresh output directory, removed after the test."""
    path = create_output_dir(harness_config.workspace.root)
    yield path
    cleanup_dir(path)


# =============================================================================
# Factory Fixtures
# =============================================================================


@pytest.fixture
def run_tool(
    runner: ContainerRunner, sample_file: ContainerFile, output_path: Path
) -> RunTool:
    """Factory fixture running one tool container.

    By default the sample clip is staged at /input/sample.mp4 and the test's
    output directory is bound to /output.

    Example:
        def test_probe(run_tool, images):
            result = run_tool(images.ffprobe, probe_args())
    """

    def _run(
        image: str,
        cmd: Sequence[str],
        *,
        files: Sequence[ContainerFile] | None = None,
        target: str = OUTPUT_DIR,
        source: Path | None = None,
    ) -> ContainerResult:
        request = ContainerRequest(
            image=image,
            cmd=list(cmd),
            files=[sample_file] if files is None else list(files),
            mounts=[BindMount(source or output_path, target)],
        )
        result = runner.run(request)
        if result.raw_logs:
            logger.info("Container logs:\n%s", result.text)
        return result

    return _run
