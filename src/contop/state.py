"""Application state for the contop dashboard."""

from collections.abc import Iterable

from contop.models import ContainerStats


class ApplicationState:
    """
    The dashboard's single mutable state.

    ``refresh``, ``move_selection_up``, ``move_selection_down`` and
    ``request_quit`` are the only mutators. They are synchronous and must be
    called from the loop that owns the state.
    """

    def __init__(self) -> None:
        """Initialize an empty ApplicationState."""
        self._entities: tuple[ContainerStats, ...] = ()
        self._selected_index: int = 0
        self._should_quit: bool = False

    @property
    def entities(self) -> tuple[ContainerStats, ...]:
        """Containers from the most recent refresh, in enumeration order."""
        return self._entities

    @property
    def selected_index(self) -> int:
        """Index of the highlighted container."""
        return self._selected_index

    @property
    def should_quit(self) -> bool:
        """Whether the user asked to quit."""
        return self._should_quit

    @property
    def selected(self) -> ContainerStats | None:
        """The highlighted container, or None when the index is out of range."""
        if 0 <= self._selected_index < len(self._entities):
            return self._entities[self._selected_index]
        return None

    def refresh(self, new_entities: Iterable[ContainerStats]) -> None:
        """Replace the container list and clamp the selection to it."""
        self._entities = tuple(new_entities)
        self._selected_index = max(0, min(self._selected_index, len(self._entities) - 1))

    def move_selection_up(self) -> None:
        """Move the selection up one row; no-op on the first row."""
        if self._selected_index > 0:
            self._selected_index -= 1

    def move_selection_down(self) -> None:
        """Move the selection down one row; no-op on the last row."""
        if self._selected_index < len(self._entities) - 1:
            self._selected_index += 1

    def request_quit(self) -> None:
        """Ask the loop to exit. Cannot be undone."""
        self._should_quit = True
