"""Unit tests for staging archives."""

import io
import tarfile
from pathlib import Path

import pytest

from mediarig.engine import build_archive
from mediarig.runner import ContainerFile


def _open(data: bytes) -> tarfile.TarFile:
    return tarfile.open(fileobj=io.BytesIO(data), mode="r")


class TestBuildArchive:
    """Tests for build_archive()."""

    def test_entry_at_container_path(self, temp_dir: Path) -> None:
        """Files land at their container path relative to /."""
        source = temp_dir / "clip.mp4"
        source.write_bytes(b"\x00\x00\x00\x18ftypisom")

        data = build_archive([ContainerFile(source, "/input/sample.mp4")])

        with _open(data) as tar:
            member = tar.getmember("input/sample.mp4")
            assert member.isfile()
            assert member.size == source.stat().st_size
            assert tar.extractfile(member).read() == source.read_bytes()

    def test_parent_directories_added_once(self, temp_dir: Path) -> None:
        """Each parent directory gets one entry, before its files."""
        a = temp_dir / "a.mp4"
        b = temp_dir / "b.mp4"
        a.write_bytes(b"a")
        b.write_bytes(b"b")

        data = build_archive(
            [
                ContainerFile(a, "/input/renditions/720p.mp4"),
                ContainerFile(b, "/input/renditions/480p.mp4"),
            ]
        )

        with _open(data) as tar:
            names = tar.getnames()
            assert names == [
                "input",
                "input/renditions",
                "input/renditions/720p.mp4",
                "input/renditions/480p.mp4",
            ]
            assert tar.getmember("input").isdir()
            assert tar.getmember("input/renditions").mode == 0o755

    def test_file_mode(self, temp_dir: Path) -> None:
        """The requested mode is applied to the entry."""
        source = temp_dir / "run.sh"
        source.write_text("#!/bin/sh\n")

        data = build_archive([ContainerFile(source, "/usr/local/bin/run.sh", 0o755)])

        with _open(data) as tar:
            assert tar.getmember("usr/local/bin/run.sh").mode == 0o755

    def test_missing_host_file(self, temp_dir: Path) -> None:
        """A missing source file is reported before anything is uploaded."""
        with pytest.raises(FileNotFoundError, match="missing.mp4"):
            build_archive([ContainerFile(temp_dir / "missing.mp4", "/input/x.mp4")])

    def test_empty(self) -> None:
        """No files gives a valid empty archive."""
        with _open(build_archive([])) as tar:
            assert tar.getnames() == []
