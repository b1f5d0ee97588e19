"""Dashboard configuration."""

from dataclasses import dataclass
from enum import Enum


class FetchErrorPolicy(Enum):
    """What to do when a single container's stats fetch fails."""

    ABORT = "abort"
    SKIP = "skip"


@dataclass(slots=True, frozen=True)
class DashboardConfig:
    """Tunables for the polling loop and the collector."""

    tick_interval: float = 2.0  # Seconds between collections
    fetch_timeout: float = 5.0  # Upper bound on one stats fetch
    fetch_error_policy: FetchErrorPolicy = FetchErrorPolicy.ABORT
