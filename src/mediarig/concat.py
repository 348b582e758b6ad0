"""Input lists for ffmpeg's concat demuxer.

A list is a text file of directives, one per line:

    file 'part-000.mp4'
    duration 15.0
    inpoint 5.0
    outpoint 15.0

Paths are single-quoted; a literal quote is written as ``'\\''``.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class ConcatEntry:
    """One ``file`` directive and its optional timing directives."""

    file: str
    duration: float | None = None
    inpoint: float | None = None
    outpoint: float | None = None

    def __post_init__(self) -> None:
        if not self.file:
            raise ValueError("file must not be empty")
        for name in ("duration", "inpoint", "outpoint"):
            value = getattr(self, name)
            if value is not None and value < 0:
                raise ValueError(f"{name} must not be negative, got {value}")

    def render(self) -> str:
        lines = [f"file {quote_path(self.file)}"]
        if self.duration is not None:
            lines.append(f"duration {self.duration:.1f}")
        if self.inpoint is not None:
            lines.append(f"inpoint {self.inpoint:.1f}")
        if self.outpoint is not None:
            lines.append(f"outpoint {self.outpoint:.1f}")
        return "\n".join(lines) + "\n"


def quote_path(path: str) -> str:
    """Quote a path for a concat list."""
    return "'" + path.replace("'", "'\\''") + "'"


def render_concat_list(entries: Iterable[ConcatEntry]) -> str:
    """Render entries as concat demuxer directives."""
    return "".join(entry.render() for entry in entries)


def write_concat_list(path: Path, entries: Iterable[ConcatEntry]) -> Path:
    """Write a concat list file and return its path."""
    path = Path(path)
    path.write_text(render_concat_list(entries), encoding="utf-8")
    return path


def entries_for(files: Iterable[Path], **timing: float) -> list[ConcatEntry]:
    """Build entries referencing files by basename.

    The list is read inside the container from the same directory as the
    files, so only basenames are written.
    """
    return [ConcatEntry(file=Path(f).name, **timing) for f in files]
