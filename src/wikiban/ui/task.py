"""Task row widgets for the board UI."""

from __future__ import annotations

from rich.text import Text
from textual.app import ComposeResult
from textual.containers import Horizontal
from textual.events import Click
from textual.message import Message
from textual.widgets import Static

from wikiban.model.board import Board, TaskNode
from wikiban.model.drag import DragError, DragSession
from wikiban.ui.drag import DraggableRow, DragGhost

ICON_CHECKED = "☑"
ICON_UNCHECKED = "☐"


def task_text(node: TaskNode) -> Text:
    """Display text for a task, struck through when done."""
    return Text(node.text, style="strike dim" if node.checked else "")


class TaskCheckbox(Static):
    """Clickable checkbox for a task.

    Clicking only asks for a toggle; the box changes once the page has
    been saved and the row is redrawn.
    """

    class Toggled(Message):
        """Emitted when the checkbox is clicked."""

        def __init__(self, node: TaskNode) -> None:
            super().__init__()
            self.node = node

    def __init__(self, node: TaskNode, **kwargs) -> None:
        super().__init__(ICON_CHECKED if node.checked else ICON_UNCHECKED, **kwargs)
        self.node = node

    def on_click(self, event: Click) -> None:
        event.stop()
        self.post_message(self.Toggled(self.node))


class TaskRow(DraggableRow, Horizontal):
    """A task on the board: checkbox and text, indented by level."""

    DEFAULT_CSS = """
    TaskRow {
        height: auto;
        width: 100%;
    }
    TaskRow:focus {
        background: $boost;
    }
    TaskRow .task-checkbox {
        width: 2;
    }
    TaskRow .task-text {
        width: 1fr;
    }
    TaskRow.dragging {
        opacity: 0.5;
    }
    TaskRow.drop-before {
        border-top: hkey $accent;
    }
    TaskRow.drop-after {
        border-bottom: hkey $accent;
    }
    TaskRow.drop-child {
        background: $accent 30%;
    }
    DragGhost {
        layer: overlay;
        position: absolute;
        background: $panel;
        border: round $primary;
    }
    """

    can_focus = True

    def __init__(self, node: TaskNode, board: Board, **kwargs) -> None:
        Horizontal.__init__(self, **kwargs)
        self._init_drag()
        self.node = node
        self.board = board
        self.drag: DragSession | None = None
        self.styles.padding = (0, 0, 0, 2 * node.indent_level)

    def compose(self) -> ComposeResult:
        yield TaskCheckbox(self.node, classes="task-checkbox")
        yield Static(task_text(self.node), classes="task-text")

    # -- DraggableRow --

    def begin_drag(self) -> bool:
        drag = DragSession(self.board, self.node)
        try:
            drag.start()
        except DragError as e:
            self.notify(str(e), severity="warning")
            return False
        self.drag = drag
        return True

    def abandon_drag(self) -> None:
        if self.drag is not None:
            self.drag.cancel()
            self.drag.end()
            self.drag = None

    def make_ghost(self) -> DragGhost:
        return DragGhost(task_text(self.node))

    def row_clicked(self) -> None:
        self.focus()
