"""contop - Main Textual application."""

import logging
import sys
from enum import Enum

from rich.style import Style
from rich.text import Text
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Container, Horizontal
from textual.coordinate import Coordinate
from textual.logging import TextualHandler
from textual.widgets import DataTable, Static

from contop.collector import SnapshotCollector
from contop.config import DashboardConfig
from contop.errors import CollectionError, ContopError, TerminalError
from contop.runtime import RuntimeClient, connect
from contop.state import ApplicationState
from contop.view import (
    HELP_BAR_HEIGHT,
    PANE_SPLIT,
    DetailPane,
    HelpBar,
    ListPane,
    ListRow,
    RenderTree,
    render_view,
)

logger = logging.getLogger(__name__)


class LoopState(Enum):
    """Lifecycle of the event/tick loop."""

    RUNNING = "running"
    QUITTING = "quitting"


def row_text(row: ListRow) -> Text:
    """Rich text for one list row; the highlighted row is reversed."""
    return Text(
        row.text,
        style=Style(color=row.color, reverse=row.highlighted),
        no_wrap=True,
        overflow="ellipsis",
    )


def help_text(bar: HelpBar) -> Text:
    """Rich text for the help legend."""
    parts: list[tuple[str, str] | str] = []
    for index, item in enumerate(bar.items):
        separator = "  " if index < len(bar.items) - 1 else ""
        parts.append((item.key, "bold yellow"))
        parts.append(f": {item.description}{separator}")
    return Text.assemble(*parts)


class ContainerTable(DataTable, can_focus=False):
    """Row table for the list pane; keys stay with the app bindings."""


class ContainerList(Container):
    """List pane: one row per container, scrolled to keep the selection visible."""

    DEFAULT_CSS = """
    ContainerList ContainerTable {
        height: 1fr;
    }

    ContainerList ContainerTable > .datatable--cursor {
        background: transparent;
        text-style: reverse;
    }
    """

    def compose(self) -> ComposeResult:
        """Compose the container table."""
        yield ContainerTable(id="container-table", show_header=False, cursor_type="row")

    def show(self, pane: ListPane) -> None:
        """
        Show the list rows and move the table cursor to the highlighted one.

        Rows are updated in place while the row count is unchanged and
        rebuilt otherwise.
        """
        self.border_title = pane.title
        table = self.query_one(ContainerTable)
        if not table.columns:
            table.add_column("Container", key="container")

        cells = [row_text(row) for row in pane.rows]
        if table.row_count != len(cells):
            table.clear()
            for cell in cells:
                table.add_row(cell)
        else:
            for index, cell in enumerate(cells):
                table.update_cell_at(Coordinate(index, 0), cell, update_width=True)

        selected = next(
            (index for index, row in enumerate(pane.rows) if row.highlighted), None
        )
        if selected is not None:
            table.move_cursor(row=selected)


class ContainerDetails(Static):
    """Detail pane for the selected container."""

    def show(self, pane: DetailPane | None) -> None:
        """Show the detail lines, or clear the pane when nothing is selected."""
        if pane is None:
            self.border_title = None
            self.update("")
            return
        self.border_title = pane.title
        self.update("\n".join(pane.lines))


class HelpLegend(Static):
    """Fixed-height key legend."""

    def show(self, bar: HelpBar) -> None:
        """Show the key legend."""
        self.update(help_text(bar))


class DashboardApp(App):
    """Main contop application."""

    TITLE = "contop"
    SUB_TITLE = "Container Resource Monitor"

    CSS = f"""
    Screen {{
        layout: vertical;
    }}

    #main {{
        height: 1fr;
    }}

    #container-list {{
        width: {PANE_SPLIT[0]}%;
        height: 1fr;
        border: round $primary;
    }}

    #container-details {{
        width: {PANE_SPLIT[1]}%;
        height: 1fr;
        border: round $primary;
    }}

    #help-bar {{
        height: {HELP_BAR_HEIGHT};
        border: round $primary;
    }}
    """

    BINDINGS = [
        Binding("q", "quit", "Quit", show=False),
        Binding("up", "cursor_up", "Navigate", show=False),
        Binding("down", "cursor_down", "Navigate", show=False),
    ]

    def __init__(self, runtime: RuntimeClient, config: DashboardConfig | None = None) -> None:
        """
        Initialize the DashboardApp.

        Args:
            runtime: Client used to enumerate containers and fetch their stats.
            config: Loop and collector settings. Defaults to DashboardConfig().
        """
        super().__init__()
        self._config = config or DashboardConfig()
        self._runtime = runtime
        self._collector = SnapshotCollector(
            fetch_timeout=self._config.fetch_timeout,
            policy=self._config.fetch_error_policy,
        )
        self._state = ApplicationState()
        self._loop_state = LoopState.RUNNING
        self._render_tree: RenderTree | None = None

    @property
    def state(self) -> ApplicationState:
        """The dashboard state this app owns."""
        return self._state

    @property
    def loop_state(self) -> LoopState:
        """Whether the loop is running or quitting."""
        return self._loop_state

    @property
    def render_tree(self) -> RenderTree | None:
        """The frame painted most recently."""
        return self._render_tree

    def compose(self) -> ComposeResult:
        """Compose the application layout."""
        yield Horizontal(
            ContainerList(id="container-list"),
            ContainerDetails(id="container-details"),
            id="main",
        )
        yield HelpLegend(id="help-bar")

    def on_mount(self) -> None:
        """Paint the empty state and start the tick timer."""
        self._paint()
        self.set_interval(self._config.tick_interval, self._tick)

    async def _tick(self) -> None:
        """Collect a fresh snapshot round and refresh the state."""
        if self._loop_state is LoopState.QUITTING:
            return
        try:
            containers = await self._collector.collect(self._runtime)
        except CollectionError as exc:
            if self._loop_state is LoopState.QUITTING:
                return
            logger.error("Stats collection failed: %s", exc)
            self._loop_state = LoopState.QUITTING
            self.exit(return_code=1, message=f"contop: {exc}")
            return

        if self._loop_state is LoopState.QUITTING:
            return
        self._state.refresh(containers)
        self._after_step()

    def _after_step(self) -> None:
        """Repaint, then leave the loop if a quit was requested."""
        self._paint()
        if self._state.should_quit and self._loop_state is LoopState.RUNNING:
            self._loop_state = LoopState.QUITTING
            self.exit()

    def _paint(self) -> None:
        """Render the current state into the widgets."""
        tree = render_view(self._state)
        self._render_tree = tree
        self.query_one(ContainerList).show(tree.list_pane)
        self.query_one(ContainerDetails).show(tree.detail_pane)
        self.query_one(HelpLegend).show(tree.help_bar)

    def action_cursor_up(self) -> None:
        """Handle navigate-up action."""
        self._state.move_selection_up()
        self._after_step()

    def action_cursor_down(self) -> None:
        """Handle navigate-down action."""
        self._state.move_selection_down()
        self._after_step()

    def action_quit(self) -> None:
        """Handle quit action."""
        self._state.request_quit()
        self._after_step()


def run_dashboard(config: DashboardConfig) -> int:
    """
    Connect to the runtime and run the dashboard until it exits.

    Returns the process exit code.

    Raises:
        RuntimeConnectionError: The runtime is unreachable; the terminal is untouched.
        TerminalError: Textual could not drive the terminal.
    """
    runtime = connect(timeout=config.fetch_timeout)
    app = DashboardApp(runtime, config)
    try:
        app.run()
    except Exception as exc:
        raise TerminalError(f"Terminal failure: {exc}") from exc
    finally:
        runtime.close()
    return app.return_code or 0


def main() -> None:
    """Entry point for contop application."""
    logging.basicConfig(level=logging.INFO, handlers=[TextualHandler()])
    try:
        exit_code = run_dashboard(DashboardConfig())
    except ContopError as exc:
        logger.error("%s", exc)
        exit_code = 1
    sys.exit(exit_code)


if __name__ == "__main__":
    main()
