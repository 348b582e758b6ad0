"""Container request and result types."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from mediarig.logstream import FramingMode, demux, unframe


class ContainerExitError(Exception):
    """Raised by ContainerResult.check_returncode() on a non-zero exit."""

    def __init__(self, image: str, exit_code: int, output: str) -> None:
        self.image = image
        self.exit_code = exit_code
        self.output = output
        super().__init__(f"{image} exited with status {exit_code}")


@dataclass(frozen=True)
class ContainerFile:
    """A host file copied into the container before it starts.

    Attributes:
        host_path: File on the host.
        container_path: Absolute destination path inside the container.
        mode: Permission bits of the staged file.
    """

    host_path: Path
    container_path: str
    mode: int = 0o644

    def __post_init__(self) -> None:
        if not self.container_path.startswith("/"):
            raise ValueError(
                f"container_path must be absolute, got {self.container_path}"
            )


@dataclass(frozen=True)
class BindMount:
    """A host directory bound into the container."""

    source: Path
    target: str
    read_only: bool = False

    def __post_init__(self) -> None:
        if not Path(self.source).is_absolute():
            raise ValueError(f"bind source must be absolute, got {self.source}")
        if not self.target.startswith("/"):
            raise ValueError(f"bind target must be absolute, got {self.target}")

    def to_api(self) -> dict[str, Any]:
        return {
            "Type": "bind",
            "Source": str(self.source),
            "Target": self.target,
            "ReadOnly": self.read_only,
        }


@dataclass(frozen=True)
class ContainerRequest:
    """Everything needed to run one throwaway container.

    Attributes:
        image: Image reference.
        cmd: Arguments passed to the image entrypoint.
        files: Files staged into the container before start.
        mounts: Bind mounts.
        env: Extra environment variables.
        working_dir: Working directory inside the container.
        exit_timeout: Seconds to wait for exit (None = runner default).
    """

    image: str
    cmd: Sequence[str] = ()
    files: Sequence[ContainerFile] = ()
    mounts: Sequence[BindMount] = ()
    env: Mapping[str, str] = field(default_factory=dict)
    working_dir: str | None = None
    exit_timeout: float | None = None

    def to_create_body(self) -> dict[str, Any]:
        """Build the body for POST /containers/create.

        Tty stays off so the daemon frames stdout and stderr separately.
        """
        body: dict[str, Any] = {
            "Image": self.image,
            "Cmd": [str(arg) for arg in self.cmd],
            "Tty": False,
            "AttachStdout": True,
            "AttachStderr": True,
            "HostConfig": {"Mounts": [mount.to_api() for mount in self.mounts]},
        }
        if self.env:
            body["Env"] = [f"{key}={value}" for key, value in self.env.items()]
        if self.working_dir:
            body["WorkingDir"] = self.working_dir
        return body


@dataclass(frozen=True)
class ContainerResult:
    """Outcome of a finished container.

    Attributes:
        container_id: Daemon-assigned id.
        image: Image reference the container ran.
        exit_code: Process exit status.
        raw_logs: Log stream exactly as the daemon returned it.
    """

    container_id: str
    image: str
    exit_code: int
    raw_logs: bytes

    @property
    def output(self) -> bytes:
        """Combined stdout and stderr with framing removed."""
        return unframe(self.raw_logs, FramingMode.LENGTH)

    @property
    def stdout(self) -> bytes:
        return demux(self.raw_logs).stdout

    @property
    def stderr(self) -> bytes:
        return demux(self.raw_logs).stderr

    @property
    def text(self) -> str:
        """Combined output decoded as UTF-8 with replacement."""
        return self.output.decode("utf-8", errors="replace")

    @property
    def succeeded(self) -> bool:
        return self.exit_code == 0

    def check_returncode(self) -> None:
        """Raise ContainerExitError if the container exited non-zero."""
        if self.exit_code != 0:
            raise ContainerExitError(self.image, self.exit_code, self.text)
