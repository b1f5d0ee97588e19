"""Docker runtime adapter for contop."""

import logging
from datetime import datetime, timezone
from typing import Any, Protocol

import docker
from docker.errors import DockerException
from requests.exceptions import RequestException

from contop.errors import CollectionError, RuntimeConnectionError
from contop.models import EntitySummary, RawStats

logger = logging.getLogger(__name__)

TRANSPORT_ERRORS = (DockerException, RequestException)


class RuntimeClient(Protocol):
    """The two runtime calls the collector depends on."""

    def list_entities(self, include_stopped: bool) -> list[EntitySummary]: ...

    def get_stats_snapshot(self, container_id: str) -> RawStats: ...


def format_created(created: Any) -> str:
    """Format a unix ``Created`` timestamp for display."""
    if created is None or created == "":
        return ""
    if isinstance(created, (int, float)):
        moment = datetime.fromtimestamp(created, tz=timezone.utc)
        return moment.strftime("%Y-%m-%d %H:%M:%S")
    return str(created)


def parse_entity(row: dict[str, Any]) -> EntitySummary:
    """Build an EntitySummary from one ``/containers/json`` row."""
    names = row.get("Names")
    return EntitySummary(
        id=row.get("Id") or None,
        names=tuple(names) if names is not None else None,
        status=row.get("State") or "",
        created=format_created(row.get("Created")),
    )


def parse_stats(payload: dict[str, Any]) -> RawStats:
    """Build RawStats from one ``/containers/{id}/stats`` document."""
    cpu_stats = payload.get("cpu_stats") or {}
    precpu_stats = payload.get("precpu_stats") or {}
    memory_stats = payload.get("memory_stats") or {}

    return RawStats(
        cpu_usage_total=(cpu_stats.get("cpu_usage") or {}).get("total_usage", 0),
        precpu_usage_total=(precpu_stats.get("cpu_usage") or {}).get("total_usage", 0),
        system_cpu_usage=cpu_stats.get("system_cpu_usage"),
        precpu_system_cpu_usage=precpu_stats.get("system_cpu_usage"),
        memory_usage=memory_stats.get("usage"),
        memory_limit=memory_stats.get("limit"),
    )


class DockerRuntime:
    """
    Thin wrapper over the low-level docker API client.

    Every call is a single request/response; stats are fetched with
    ``stream=False`` so the daemon returns exactly one document.
    """

    def __init__(self, client: docker.DockerClient) -> None:
        """
        Initialize the DockerRuntime.

        Args:
            client: A connected high-level docker client.
        """
        self._client = client

    def list_entities(self, include_stopped: bool) -> list[EntitySummary]:
        """Enumerate containers, optionally including stopped ones."""
        try:
            rows = self._client.api.containers(all=include_stopped)
        except TRANSPORT_ERRORS as exc:
            raise CollectionError(f"Failed to list containers: {exc}") from exc
        return [parse_entity(row) for row in rows]

    def get_stats_snapshot(self, container_id: str) -> RawStats:
        """Fetch one stats snapshot for a container."""
        try:
            payload = self._client.api.stats(container_id, stream=False)
        except TRANSPORT_ERRORS as exc:
            raise CollectionError(
                f"Failed to get container stats: {exc}", container_id=container_id
            ) from exc
        return parse_stats(payload)

    def close(self) -> None:
        """Close the underlying HTTP session."""
        self._client.close()


def connect(timeout: float = 5.0) -> DockerRuntime:
    """
    Connect to the docker daemon configured by the environment.

    Raises:
        RuntimeConnectionError: The daemon is unreachable.
    """
    try:
        client = docker.from_env(timeout=timeout)
        client.ping()
    except TRANSPORT_ERRORS as exc:
        raise RuntimeConnectionError(f"Cannot connect to the Docker daemon: {exc}") from exc
    logger.debug("Connected to docker daemon at %s", client.api.base_url)
    return DockerRuntime(client)
