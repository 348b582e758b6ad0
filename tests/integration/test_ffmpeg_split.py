"""Integration tests for the ffmpeg-split image."""

from pathlib import Path

import pytest

from mediarig.assertions import verify_file_exists, verify_file_size, verify_outputs
from mediarig.commands import scene_split_args, segment_args, trim_args

pytestmark = [pytest.mark.integration, pytest.mark.requires_docker]


def _assert_non_empty(files: list[Path]) -> None:
    for path in files:
        assert path.stat().st_size > 0, f"{path.name} should not be empty"


class TestTimeSplit:
    def test_first_ten_seconds_stream_copy(
        self, run_tool, images, output_path: Path
    ) -> None:
        result = run_tool(images.split, trim_args("/output/first-10s.mp4"))

        result.check_returncode()
        verify_file_size(output_path / "first-10s.mp4", 100 * 1024)

    def test_segments_by_duration(self, run_tool, images, output_path: Path) -> None:
        """Five-second segments of the first ten seconds."""
        result = run_tool(images.split, segment_args("/output/part-%03d.mp4"))

        result.check_returncode()
        _assert_non_empty(verify_outputs(output_path, "part-*.mp4"))


class TestSceneSplit:
    """Scene-change selection with the select filter."""

    def test_default_threshold(self, run_tool, images, output_path: Path) -> None:
        result = run_tool(images.split, scene_split_args("/output/scene_%03d.mp4"))

        result.check_returncode()
        _assert_non_empty(verify_outputs(output_path, "scene_*.mp4"))

    def test_exports_metadata(self, run_tool, images, output_path: Path) -> None:
        result = run_tool(
            images.split,
            scene_split_args(
                "/output/scene_%03d.mp4", metadata_file="/output/scenes.txt"
            ),
        )

        result.check_returncode()
        verify_file_exists(output_path / "scenes.txt")
        _assert_non_empty(verify_outputs(output_path, "scene_*.mp4"))

    def test_custom_threshold(self, run_tool, images, output_path: Path) -> None:
        """Lower threshold, re-encoded with libx264."""
        result = run_tool(
            images.split,
            scene_split_args("/output/scene_%03d.mp4", threshold=0.3, encode=True),
        )

        result.check_returncode()
        _assert_non_empty(verify_outputs(output_path, "scene_*.mp4"))
