"""Exception hierarchy for contop."""


class ContopError(Exception):
    """Base class for all contop errors."""


class RuntimeConnectionError(ContopError):
    """The container runtime could not be reached at startup."""


class CollectionError(ContopError):
    """Listing containers or fetching one container's stats failed."""

    def __init__(self, message: str, container_id: str | None = None) -> None:
        super().__init__(message)
        self.container_id = container_id


class TerminalError(ContopError):
    """The terminal could not be driven (mode switch or drawing failed)."""
