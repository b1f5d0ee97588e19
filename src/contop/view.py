"""Pure view rendering: ApplicationState -> RenderTree."""

from dataclasses import dataclass

from contop.metrics import format_byte_size
from contop.models import ContainerStats
from contop.state import ApplicationState

HELP_BAR_HEIGHT = 3
PANE_SPLIT = (50, 50)  # List pane / detail pane widths, in percent

LIST_TITLE = " Containers (↑/↓ to navigate) "
DETAIL_TITLE = " Container Details "

STATUS_COLORS = {
    "running": "green",
    "exited": "red",
}
DEFAULT_STATUS_COLOR = "yellow"


@dataclass(slots=True, frozen=True)
class ListRow:
    """One container row in the list pane."""

    text: str
    color: str
    highlighted: bool


@dataclass(slots=True, frozen=True)
class ListPane:
    """Title and rows of the list pane."""

    title: str
    rows: tuple[ListRow, ...]


@dataclass(slots=True, frozen=True)
class DetailPane:
    """Title and labelled lines of the detail pane."""

    title: str
    lines: tuple[str, ...]


@dataclass(slots=True, frozen=True)
class HelpItem:
    """One key and what it does."""

    key: str
    description: str


@dataclass(slots=True, frozen=True)
class HelpBar:
    """The static key legend."""

    items: tuple[HelpItem, ...]
    height: int = HELP_BAR_HEIGHT


@dataclass(slots=True, frozen=True)
class RenderTree:
    """
    Everything one frame shows.

    The screen is split vertically into a main area and the help bar; the
    main area is split horizontally by ``pane_split`` into the list pane and
    the detail pane. ``detail_pane`` is None when nothing is selected.
    """

    list_pane: ListPane
    detail_pane: DetailPane | None
    help_bar: HelpBar
    pane_split: tuple[int, int] = PANE_SPLIT


HELP_BAR = HelpBar(
    items=(
        HelpItem("q", "Quit"),
        HelpItem("↑/↓", "Navigate"),
        HelpItem("Enter", "Select Container"),
    )
)


def status_color(status: str) -> str:
    """Colour used for a container row with the given status."""
    return STATUS_COLORS.get(status, DEFAULT_STATUS_COLOR)


def format_row(container: ContainerStats) -> str:
    """List pane text for one container."""
    return (
        f"{container.name} [{container.status}] - "
        f"CPU: {container.cpu_usage_percent:.1f}% | "
        f"MEM: {container.memory_percent:.1f}%"
    )


def render_list(state: ApplicationState) -> ListPane:
    """List pane rows for every container, marking the selected one."""
    rows = tuple(
        ListRow(
            text=format_row(container),
            color=status_color(container.status),
            highlighted=index == state.selected_index,
        )
        for index, container in enumerate(state.entities)
    )
    return ListPane(title=LIST_TITLE, rows=rows)


def render_details(state: ApplicationState) -> DetailPane | None:
    """Detail lines for the selected container, if the index resolves."""
    container = state.selected
    if container is None:
        return None
    lines = (
        f"Container: {container.name}",
        f"Status: {container.status}",
        f"CPU Usage: {container.cpu_usage_percent:.1f}%",
        f"Memory Usage: {container.memory_percent:.1f}% "
        f"({format_byte_size(container.memory_usage_bytes)})",
        f"Created: {container.created}",
    )
    return DetailPane(title=DETAIL_TITLE, lines=lines)


def render_view(state: ApplicationState) -> RenderTree:
    """Map the current state to a frame. Never mutates or performs I/O."""
    return RenderTree(
        list_pane=render_list(state),
        detail_pane=render_details(state),
        help_bar=HELP_BAR,
    )
