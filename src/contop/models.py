"""Data models for contop."""

from dataclasses import dataclass

from contop.metrics import memory_percent


@dataclass(slots=True, frozen=True)
class ContainerStats:
    """Immutable snapshot of one container's derived resource usage."""

    id: str
    name: str
    cpu_usage_percent: float
    memory_usage_bytes: int
    memory_limit_bytes: int  # 1 when the runtime reports no limit
    status: str  # 'running', 'exited', 'paused', etc.
    created: str

    @property
    def memory_percent(self) -> float:
        """Memory usage as a percentage of the limit."""
        return memory_percent(self.memory_usage_bytes, self.memory_limit_bytes)


@dataclass(slots=True, frozen=True)
class EntitySummary:
    """One row of the runtime's container enumeration."""

    id: str | None
    names: tuple[str, ...] | None
    status: str
    created: str


@dataclass(slots=True, frozen=True)
class RawStats:
    """Raw counters from a single stats snapshot."""

    cpu_usage_total: int
    precpu_usage_total: int
    system_cpu_usage: int | None = None
    precpu_system_cpu_usage: int | None = None
    memory_usage: int | None = None
    memory_limit: int | None = None
