"""Docker Engine API client.

This module talks to the Docker daemon over its HTTP API with httpx, either
through the unix socket or over TCP. Only the calls needed to run a
throwaway container are covered: image lookup and pull, container create,
file upload, start, wait, logs and removal.

Log output is returned exactly as the daemon sends it, i.e. still framed
for containers created without a TTY. See mediarig.logstream.
"""

from __future__ import annotations

import json
import logging
from typing import Any
from urllib.parse import quote

import httpx

from mediarig.config.models import EngineConfig
from mediarig.engine.errors import (
    ContainerNotFoundError,
    ContainerTimeoutError,
    EngineAPIError,
    EngineConnectionError,
    ImageNotFoundError,
    ImagePullError,
)

logger = logging.getLogger(__name__)

# Placeholder authority for unix socket requests; the daemon ignores it.
_UNIX_BASE_URL = "http://docker"


def split_image_reference(reference: str) -> tuple[str, str | None]:
    """Split an image reference into repository and tag.

    Digests are left attached to the repository since the pull endpoint
    accepts them in ``fromImage`` directly.

    Examples:
        ghcr.io/veloxpack/ffmpeg:8.0-lite -> ("ghcr.io/veloxpack/ffmpeg", "8.0-lite")
        localhost:5000/ffprobe -> ("localhost:5000/ffprobe", None)
        alpine@sha256:abc -> ("alpine@sha256:abc", None)
    """
    if "@" in reference:
        return reference, None
    name, sep, tag = reference.rpartition(":")
    if not sep or "/" in tag:
        return reference, None
    return name, tag


def resolve_base_url(host: str) -> tuple[str, str | None]:
    """Map a DOCKER_HOST style address to (base_url, unix_socket_path)."""
    if host.startswith("unix://"):
        return _UNIX_BASE_URL, host[len("unix://") :]
    if host.startswith("tcp://"):
        return "http://" + host[len("tcp://") :], None
    return host.rstrip("/"), None


class DockerEngineClient:
    """HTTP client for the Docker Engine API.

    The underlying httpx client is created lazily and reused. Use as a
    context manager or call close() when done.
    """

    def __init__(
        self,
        config: EngineConfig,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            config: Engine connection configuration.
            transport: Optional transport override (tests pass
                httpx.MockTransport here).
        """
        self._config = config
        self._timeout = config.timeout_seconds
        self._base_url, self._socket_path = resolve_base_url(config.host)
        self._prefix = f"/v{config.api_version}" if config.api_version else ""
        self._transport = transport
        self._client: httpx.Client | None = None

    def __enter__(self) -> DockerEngineClient:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    @property
    def host(self) -> str:
        """The configured daemon address."""
        return self._config.host

    def _get_client(self) -> httpx.Client:
        """Get or create HTTP client."""
        if self._client is None:
            transport = self._transport
            if transport is None and self._socket_path is not None:
                transport = httpx.HTTPTransport(uds=self._socket_path)
            self._client = httpx.Client(
                base_url=self._base_url,
                timeout=self._timeout,
                transport=transport,
            )
        return self._client

    def close(self) -> None:
        """Close the HTTP client."""
        if self._client is not None:
            self._client.close()
            self._client = None

    def _request(
        self,
        method: str,
        path: str,
        *,
        timeout: httpx.Timeout | float | None = None,
        **kwargs: Any,
    ) -> httpx.Response:
        """Send a request, translating transport failures.

        Raises:
            EngineConnectionError: On connect failures and timeouts.
        """
        client = self._get_client()
        url = self._prefix + path
        if timeout is not None:
            kwargs["timeout"] = timeout
        try:
            return client.request(method, url, **kwargs)
        except httpx.ConnectError as e:
            raise EngineConnectionError(
                f"Cannot connect to Docker at {self.host}: {e}"
            ) from e
        except httpx.TimeoutException as e:
            raise EngineConnectionError(f"Docker API timeout on {path}: {e}") from e
        except httpx.HTTPError as e:
            raise EngineConnectionError(f"Docker API request failed: {e}") from e

    @staticmethod
    def _error_message(response: httpx.Response) -> str:
        try:
            body = response.json()
        except ValueError:
            return response.text.strip() or response.reason_phrase
        if isinstance(body, dict) and body.get("message"):
            return str(body["message"])
        return response.reason_phrase

    def _check(
        self, response: httpx.Response, path: str, *ok: int
    ) -> httpx.Response:
        if response.status_code in ok:
            return response
        raise EngineAPIError(response.status_code, self._error_message(response), path)

    # -- daemon -----------------------------------------------------------

    def ping(self) -> bool:
        """Check that the daemon answers.

        Returns:
            True if /_ping answered OK.

        Raises:
            EngineConnectionError: If the daemon cannot be reached.
        """
        response = self._request("GET", "/_ping")
        return response.status_code == 200 and response.text.strip() == "OK"

    def version(self) -> dict[str, Any]:
        """Get daemon version information from /version."""
        response = self._check(self._request("GET", "/version"), "/version", 200)
        return response.json()

    # -- images -----------------------------------------------------------

    def image_exists(self, reference: str) -> bool:
        """Check whether an image is present locally."""
        path = f"/images/{quote(reference, safe='')}/json"
        response = self._request("GET", path)
        if response.status_code == 404:
            return False
        self._check(response, path, 200)
        return True

    def pull_image(self, reference: str) -> None:
        """Pull an image, blocking until the daemon reports completion.

        Raises:
            ImagePullError: If the progress stream reports an error.
            EngineAPIError: If the daemon rejects the request.
        """
        repository, tag = split_image_reference(reference)
        params = {"fromImage": repository}
        if tag:
            params["tag"] = tag

        logger.info("Pulling image %s", reference)
        path = "/images/create"
        response = self._request(
            "POST",
            path,
            params=params,
            timeout=httpx.Timeout(self._timeout, read=None),
        )
        if response.status_code == 404:
            raise ImagePullError(
                f"Image {reference} not found: {self._error_message(response)}"
            )
        self._check(response, path, 200)

        for line in response.text.splitlines():
            line = line.strip()
            if not line:
                continue
            try:
                event = json.loads(line)
            except ValueError:
                logger.debug("Ignoring malformed pull progress line: %s", line)
                continue
            if event.get("error"):
                raise ImagePullError(f"Failed to pull {reference}: {event['error']}")

        logger.debug("Pulled image %s", reference)

    # -- containers -------------------------------------------------------

    def create_container(self, body: dict[str, Any], name: str | None = None) -> str:
        """Create a container.

        Args:
            body: Container configuration (Image, Cmd, HostConfig, ...).
            name: Optional container name.

        Returns:
            The new container id.

        Raises:
            ImageNotFoundError: If the image is not present locally.
        """
        path = "/containers/create"
        params = {"name": name} if name else None
        response = self._request("POST", path, params=params, json=body)
        if response.status_code == 404:
            raise ImageNotFoundError(
                f"Image {body.get('Image')} not found: "
                f"{self._error_message(response)}"
            )
        self._check(response, path, 201)
        data = response.json()
        for warning in data.get("Warnings") or []:
            logger.warning("Docker: %s", warning)
        return data["Id"]

    def _container_call(
        self, method: str, container_id: str, action: str, *ok: int, **kwargs: Any
    ) -> httpx.Response:
        path = f"/containers/{container_id}{action}"
        response = self._request(method, path, **kwargs)
        if response.status_code == 404:
            raise ContainerNotFoundError(
                f"No such container {container_id}: {self._error_message(response)}"
            )
        return self._check(response, path, *ok)

    def put_archive(self, container_id: str, path: str, data: bytes) -> None:
        """Extract a tar archive into a container filesystem."""
        self._container_call(
            "PUT",
            container_id,
            "/archive",
            200,
            params={"path": path},
            content=data,
            headers={"Content-Type": "application/x-tar"},
        )

    def start_container(self, container_id: str) -> None:
        """Start a created container. Already-started containers are ignored."""
        self._container_call("POST", container_id, "/start", 204, 304)

    def wait_container(self, container_id: str, timeout: float | None = None) -> int:
        """Block until the container exits.

        Args:
            container_id: Container to wait for.
            timeout: Seconds to wait; None waits indefinitely.

        Returns:
            The container's exit code.

        Raises:
            ContainerTimeoutError: If the container is still running after
                ``timeout`` seconds.
        """
        try:
            response = self._container_call(
                "POST",
                container_id,
                "/wait",
                200,
                timeout=httpx.Timeout(self._timeout, read=timeout),
            )
        except EngineConnectionError as e:
            if isinstance(e.__cause__, httpx.ReadTimeout):
                raise ContainerTimeoutError(
                    f"Container {container_id} did not exit within {timeout}s"
                ) from e
            raise

        data = response.json()
        if data.get("Error") and data["Error"].get("Message"):
            logger.warning("Wait reported: %s", data["Error"]["Message"])
        return int(data["StatusCode"])

    def container_logs(self, container_id: str) -> bytes:
        """Fetch the complete stdout and stderr of a container.

        Returns:
            Raw log bytes. For non-TTY containers these are framed.
        """
        response = self._container_call(
            "GET",
            container_id,
            "/logs",
            200,
            params={"stdout": "1", "stderr": "1"},
        )
        return response.content

    def inspect_container(self, container_id: str) -> dict[str, Any]:
        """Return the container's inspect document."""
        return self._container_call("GET", container_id, "/json", 200).json()

    def remove_container(self, container_id: str, force: bool = True) -> None:
        """Remove a container and its anonymous volumes.

        A container that is already gone is not an error.
        """
        path = f"/containers/{container_id}"
        response = self._request(
            "DELETE",
            path,
            params={"force": "1" if force else "0", "v": "1"},
        )
        if response.status_code == 404:
            logger.debug("Container %s already removed", container_id)
            return
        self._check(response, path, 204)
