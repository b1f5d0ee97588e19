"""Tests for the pure view renderer."""

from contop.models import ContainerStats
from contop.state import ApplicationState
from contop.view import (
    DETAIL_TITLE,
    HELP_BAR_HEIGHT,
    LIST_TITLE,
    ListRow,
    render_view,
    status_color,
)


def container(name, status="running", cpu=12.34, usage=512 * 1024**2, limit=1024**3):
    return ContainerStats(
        id=f"id-{name}",
        name=name,
        cpu_usage_percent=cpu,
        memory_usage_bytes=usage,
        memory_limit_bytes=limit,
        status=status,
        created="2024-05-01 12:00:00",
    )


def populated_state():
    state = ApplicationState()
    state.refresh(
        [
            container("A", "running"),
            container("B", "exited", cpu=0.0, usage=0),
            container("C", "paused", cpu=99.96),
        ]
    )
    return state


def test_status_colors():
    assert status_color("running") == "green"
    assert status_color("exited") == "red"
    assert status_color("paused") == "yellow"
    assert status_color("") == "yellow"


def test_list_rows():
    tree = render_view(populated_state())

    assert tree.list_pane.title == LIST_TITLE
    assert tree.list_pane.rows == (
        ListRow("A [running] - CPU: 12.3% | MEM: 50.0%", "green", True),
        ListRow("B [exited] - CPU: 0.0% | MEM: 0.0%", "red", False),
        ListRow("C [paused] - CPU: 100.0% | MEM: 50.0%", "yellow", False),
    )


def test_highlight_follows_selection():
    state = populated_state()
    state.move_selection_down()
    state.move_selection_down()

    rows = render_view(state).list_pane.rows
    assert [row.highlighted for row in rows] == [False, False, True]
    assert rows[2].color == "yellow"


def test_detail_pane_for_selected():
    state = populated_state()
    tree = render_view(state)

    assert tree.detail_pane is not None
    assert tree.detail_pane.title == DETAIL_TITLE
    assert tree.detail_pane.lines == (
        "Container: A",
        "Status: running",
        "CPU Usage: 12.3%",
        "Memory Usage: 50.0% (512.00 MB)",
        "Created: 2024-05-01 12:00:00",
    )


def test_empty_state_has_no_detail_pane():
    tree = render_view(ApplicationState())
    assert tree.list_pane.rows == ()
    assert tree.detail_pane is None


def test_unknown_memory_limit_renders_raw_ratio():
    state = ApplicationState()
    state.refresh([container("solo", usage=2, limit=1)])
    tree = render_view(state)
    assert tree.list_pane.rows[0].text.endswith("MEM: 200.0%")


def test_help_bar():
    help_bar = render_view(ApplicationState()).help_bar
    assert help_bar.height == HELP_BAR_HEIGHT
    assert [(item.key, item.description) for item in help_bar.items] == [
        ("q", "Quit"),
        ("↑/↓", "Navigate"),
        ("Enter", "Select Container"),
    ]


def test_layout_split():
    assert render_view(ApplicationState()).pane_split == (50, 50)


def test_render_is_idempotent():
    state = populated_state()
    assert render_view(state) == render_view(state)


def test_render_does_not_mutate_state():
    state = populated_state()
    state.move_selection_down()
    before = (state.entities, state.selected_index, state.should_quit)
    render_view(state)
    assert (state.entities, state.selected_index, state.should_quit) == before


def test_out_of_range_selection_renders_without_details():
    """A stale index (before a refresh clamps it) must not break rendering."""
    state = populated_state()
    state._selected_index = 7

    tree = render_view(state)
    assert tree.detail_pane is None
    assert not any(row.highlighted for row in tree.list_pane.rows)
