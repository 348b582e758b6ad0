"""Run throwaway containers to completion.

ContainerRunner drives one container through its whole life: make sure the
image is present, create, stage input files, start, wait for exit, read the
log stream once and remove the container. The result is a plain value
object; nothing stays attached to the daemon afterwards.
"""

from __future__ import annotations

import logging
import time

from mediarig.config.models import VALID_PULL_POLICIES, HarnessConfig
from mediarig.engine import (
    DockerEngineClient,
    EngineError,
    ImageNotFoundError,
    build_archive,
)
from mediarig.logging import bind_container_id, container_context
from mediarig.runner.models import ContainerRequest, ContainerResult

logger = logging.getLogger(__name__)


class ContainerRunner:
    """Runs ContainerRequests against a Docker Engine.

    Example:
        with ContainerRunner.from_config(get_config()) as runner:
            result = runner.run(ContainerRequest(image=..., cmd=[...]))
            result.check_returncode()
    """

    def __init__(
        self,
        client: DockerEngineClient,
        *,
        pull_policy: str = "missing",
        keep_containers: bool = False,
        exit_timeout: float = 600.0,
    ) -> None:
        """Initialize the runner.

        Args:
            client: Engine client used for every call.
            pull_policy: always, missing or never.
            keep_containers: Skip removal after each run.
            exit_timeout: Default seconds to wait for a container to exit.
        """
        if pull_policy not in VALID_PULL_POLICIES:
            raise ValueError(f"Unknown pull policy: {pull_policy}")
        self._client = client
        self._pull_policy = pull_policy
        self._keep_containers = keep_containers
        self._exit_timeout = exit_timeout
        self._ready_images: set[str] = set()

    @classmethod
    def from_config(cls, config: HarnessConfig) -> ContainerRunner:
        """Build a runner and its engine client from configuration."""
        return cls(
            DockerEngineClient(config.engine),
            pull_policy=config.runner.pull_policy,
            keep_containers=config.runner.keep_containers,
            exit_timeout=config.runner.exit_timeout_seconds,
        )

    def __enter__(self) -> ContainerRunner:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    @property
    def client(self) -> DockerEngineClient:
        return self._client

    def close(self) -> None:
        """Close the underlying engine client."""
        self._client.close()

    def ensure_image(self, image: str) -> None:
        """Make an image available according to the pull policy.

        Each image is checked at most once per runner.

        Raises:
            ImageNotFoundError: If the policy is "never" and the image is
                not present locally.
            ImagePullError: If pulling fails.
        """
        if image in self._ready_images:
            return

        if self._pull_policy == "always":
            self._client.pull_image(image)
        elif not self._client.image_exists(image):
            if self._pull_policy == "never":
                raise ImageNotFoundError(
                    f"Image {image} is not present and pull policy is 'never'"
                )
            self._client.pull_image(image)

        self._ready_images.add(image)

    def run(self, request: ContainerRequest) -> ContainerResult:
        """Run a container until it exits and collect its output.

        The container is removed afterwards (unless keep_containers is set),
        including when staging, start or wait fails.

        Args:
            request: What to run.

        Returns:
            ContainerResult with exit code and raw log stream. A non-zero
            exit code is not an error here; call check_returncode().

        Raises:
            EngineError: If the daemon rejects any step.
            FileNotFoundError: If a staged host file is missing.
        """
        self.ensure_image(request.image)
        timeout = request.exit_timeout or self._exit_timeout

        with container_context(request.image):
            container_id = self._client.create_container(request.to_create_body())
            bind_container_id(container_id)
            logger.debug(
                "Created container: %s",
                " ".join(str(arg) for arg in request.cmd),
                extra={"arg_count": len(request.cmd)},
            )

            start_time = time.monotonic()
            try:
                if request.files:
                    self._client.put_archive(
                        container_id, "/", build_archive(request.files)
                    )
                self._client.start_container(container_id)
                exit_code = self._client.wait_container(container_id, timeout)
                raw_logs = self._client.container_logs(container_id)
            finally:
                self.terminate(container_id)

            elapsed = time.monotonic() - start_time
            log = logger.info if exit_code == 0 else logger.warning
            log(
                "Container exited with status %d",
                exit_code,
                extra={
                    "exit_code": exit_code,
                    "elapsed_seconds": round(elapsed, 3),
                    "log_bytes": len(raw_logs),
                },
            )

        return ContainerResult(
            container_id=container_id,
            image=request.image,
            exit_code=exit_code,
            raw_logs=raw_logs,
        )

    def terminate(self, container_id: str) -> None:
        """Remove a container. Failures are logged, not raised."""
        if self._keep_containers:
            logger.info("Keeping container %s", container_id)
            return
        try:
            self._client.remove_container(container_id, force=True)
        except EngineError as e:
            logger.warning("Failed to remove container %s: %s", container_id, e)
