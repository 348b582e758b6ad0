"""Per-test output directories.

Each scenario gets a fresh directory that is bind-mounted into the container
and removed afterwards. Directories must be absolute because the daemon
resolves bind sources on the host.
"""

from __future__ import annotations

import logging
import shutil
import tempfile
import uuid
from collections.abc import Generator
from contextlib import contextmanager
from pathlib import Path

logger = logging.getLogger(__name__)


def create_output_dir(root: Path | None = None, prefix: str = "") -> Path:
    """Create a uniquely named output directory.

    Args:
        root: Parent directory; the system temp directory when None.
        prefix: Optional name prefix, e.g. "shaka-test-".

    Returns:
        Absolute path of the new directory.
    """
    parent = Path(root) if root is not None else Path(tempfile.gettempdir())
    path = (parent / f"{prefix}{uuid.uuid4().hex}").resolve()
    path.mkdir(parents=True, exist_ok=False)
    # Containers may run as a different uid than the test process
    path.chmod(0o777)
    logger.debug("Created output directory %s", path)
    return path


def cleanup_dir(path: Path) -> None:
    """Remove a directory tree. Failures are logged, never raised."""
    try:
        shutil.rmtree(path)
    except FileNotFoundError:
        return
    except OSError as e:
        logger.warning("Failed to remove output directory %s: %s", path, e)


@contextmanager
def output_dir(root: Path | None = None, prefix: str = "") -> Generator[Path, None, None]:
    """Create an output directory and remove it on exit."""
    path = create_output_dir(root, prefix)
    try:
        yield path
    finally:
        cleanup_dir(path)


def glob_outputs(directory: Path, pattern: str) -> list[Path]:
    """Return files in ``directory`` matching ``pattern``, sorted by name."""
    return sorted(Path(directory).glob(pattern))
