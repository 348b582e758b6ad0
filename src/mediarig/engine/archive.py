"""Tar archives for staging host files into a container."""

from __future__ import annotations

import io
import tarfile
import time
from collections.abc import Iterable
from pathlib import Path, PurePosixPath
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from mediarig.runner.models import ContainerFile


def _parent_dirs(path: PurePosixPath) -> list[PurePosixPath]:
    """a/b/c.mp4 -> [a, a/b]"""
    parents = [p for p in path.parents if str(p) not in ("", ".")]
    return list(reversed(parents))


def build_archive(files: Iterable[ContainerFile]) -> bytes:
    """Pack host files into an uncompressed tar rooted at ``/``.

    Entry names are the container paths without the leading slash, so the
    archive can be uploaded with ``path=/``. Parent directories get explicit
    entries so extraction does not depend on the daemon creating them.

    Args:
        files: Files to stage.

    Returns:
        The tar archive bytes.

    Raises:
        FileNotFoundError: If a host file does not exist.
    """
    buffer = io.BytesIO()
    seen_dirs: set[PurePosixPath] = set()
    now = time.time()

    with tarfile.open(fileobj=buffer, mode="w") as tar:
        for item in files:
            host_path = Path(item.host_path)
            if not host_path.is_file():
                raise FileNotFoundError(f"Staged file not found: {host_path}")

            relative = PurePosixPath(item.container_path.lstrip("/"))

            for directory in _parent_dirs(relative):
                if directory in seen_dirs:
                    continue
                seen_dirs.add(directory)
                dir_info = tarfile.TarInfo(str(directory))
                dir_info.type = tarfile.DIRTYPE
                dir_info.mode = 0o755
                dir_info.mtime = now
                tar.addfile(dir_info)

            info = tarfile.TarInfo(str(relative))
            info.size = host_path.stat().st_size
            info.mode = item.mode
            info.mtime = now
            with host_path.open("rb") as fh:
                tar.addfile(info, fh)

    return buffer.getvalue()
