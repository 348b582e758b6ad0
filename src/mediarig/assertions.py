"""Assertions on files produced by containerised tools.

All helpers raise AssertionError so that pytest reports them as ordinary
test failures.
"""

from __future__ import annotations

from pathlib import Path

from mediarig.workspace import glob_outputs


def verify_file_exists(path: Path) -> None:
    """Assert that ``path`` exists and is a regular file."""
    if not Path(path).is_file():
        raise AssertionError(f"File should exist: {path}")


def verify_file_size(path: Path, min_size: int, *, strict: bool = False) -> int:
    """Assert that a file is at least ``min_size`` bytes.

    Args:
        path: File to check.
        min_size: Size threshold in bytes.
        strict: Require size > min_size instead of >=.

    Returns:
        The actual file size.
    """
    verify_file_exists(path)
    size = Path(path).stat().st_size
    if strict and size <= min_size:
        raise AssertionError(
            f"File should be larger than {min_size} bytes: {path} ({size} bytes)"
        )
    if size < min_size:
        raise AssertionError(
            f"File should be at least {min_size} bytes: {path} ({size} bytes)"
        )
    return size


def verify_contains(text: str, *needles: str) -> None:
    """Assert that every needle occurs in ``text``."""
    missing = [needle for needle in needles if needle not in text]
    if missing:
        raise AssertionError(f"Expected content not found: {', '.join(missing)}")


def count_occurrences(text: str, needle: str) -> int:
    """Count non-overlapping occurrences of ``needle``."""
    return text.count(needle)


def verify_outputs(directory: Path, pattern: str) -> list[Path]:
    """Assert that at least one file matches ``pattern`` and return them."""
    matches = glob_outputs(directory, pattern)
    if not matches:
        raise AssertionError(
            f"Should have generated at least one {pattern} in {directory}"
        )
    return matches


def read_text(path: Path) -> str:
    """Read a produced text file (manifest, playlist, metadata)."""
    verify_file_exists(path)
    return Path(path).read_text(encoding="utf-8", errors="replace")
