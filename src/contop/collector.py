"""Container stats collection engine for contop."""

import asyncio
import logging

from contop.config import FetchErrorPolicy
from contop.errors import CollectionError
from contop.metrics import derive_cpu_percent
from contop.models import ContainerStats, EntitySummary, RawStats
from contop.runtime import RuntimeClient

logger = logging.getLogger(__name__)


def display_name(names: tuple[str, ...] | None) -> str:
    """First alias with its leading path separator stripped."""
    if not names:
        return ""
    return names[0].removeprefix("/")


def build_stats(entity: EntitySummary, raw: RawStats) -> ContainerStats:
    """Combine an enumeration row and its raw counters into ContainerStats."""
    cpu_usage = derive_cpu_percent(
        raw.precpu_usage_total,
        raw.cpu_usage_total,
        raw.precpu_system_cpu_usage or 0,
        raw.system_cpu_usage or 0,
    )
    return ContainerStats(
        id=entity.id or "",
        name=display_name(entity.names),
        cpu_usage_percent=cpu_usage,
        memory_usage_bytes=raw.memory_usage or 0,
        memory_limit_bytes=raw.memory_limit or 1,
        status=entity.status,
        created=entity.created,
    )


class SnapshotCollector:
    """
    Collects one stats snapshot per container and derives ContainerStats.

    The blocking runtime calls run on worker threads; per-container fetches
    run concurrently, each bounded by ``fetch_timeout``. The result keeps
    the runtime's enumeration order.
    """

    def __init__(
        self,
        fetch_timeout: float = 5.0,
        policy: FetchErrorPolicy = FetchErrorPolicy.ABORT,
    ) -> None:
        """
        Initialize the SnapshotCollector.

        Args:
            fetch_timeout: Upper bound (seconds) on one container's stats fetch.
            policy: Whether one failed fetch aborts the collection or is skipped.
        """
        self._fetch_timeout = fetch_timeout
        self._policy = policy
        self._previous: dict[str, ContainerStats] = {}

    @property
    def fetch_timeout(self) -> float:
        """Get the per-container fetch timeout."""
        return self._fetch_timeout

    @fetch_timeout.setter
    def fetch_timeout(self, value: float) -> None:
        """Set the per-container fetch timeout."""
        self._fetch_timeout = max(0.1, value)  # Minimum 0.1 seconds

    @property
    def policy(self) -> FetchErrorPolicy:
        """Get the fetch error policy."""
        return self._policy

    async def collect(self, runtime: RuntimeClient) -> list[ContainerStats]:
        """
        Collect stats for every container, stopped ones included.

        Raises:
            CollectionError: Listing failed, or (under ABORT) any fetch failed.
        """
        try:
            entities = await asyncio.to_thread(runtime.list_entities, True)
        except CollectionError:
            raise
        except Exception as exc:
            raise CollectionError(f"Failed to list containers: {exc}") from exc

        entities = [entity for entity in entities if entity.id]
        results = await asyncio.gather(
            *(self._collect_one(runtime, entity) for entity in entities)
        )

        containers = [stats for stats in results if stats is not None]
        self._previous = {stats.id: stats for stats in containers}
        logger.debug("Collected stats for %d containers", len(containers))
        return containers

    async def _collect_one(
        self, runtime: RuntimeClient, entity: EntitySummary
    ) -> ContainerStats | None:
        """Fetch and derive stats for one container, honouring the policy."""
        try:
            raw = await self._fetch(runtime, entity.id)
        except CollectionError as exc:
            if self._policy is FetchErrorPolicy.ABORT:
                raise
            logger.warning("Skipping container %s: %s", entity.id, exc)
            return self._previous.get(entity.id)
        return build_stats(entity, raw)

    async def _fetch(self, runtime: RuntimeClient, container_id: str) -> RawStats:
        """One bounded stats fetch."""
        try:
            return await asyncio.wait_for(
                asyncio.to_thread(runtime.get_stats_snapshot, container_id),
                timeout=self._fetch_timeout,
            )
        except CollectionError:
            raise
        except asyncio.TimeoutError as exc:
            raise CollectionError(
                f"Timed out after {self._fetch_timeout:.1f}s fetching stats",
                container_id=container_id,
            ) from exc
        except Exception as exc:
            raise CollectionError(
                f"Failed to get container stats: {exc}", container_id=container_id
            ) from exc
