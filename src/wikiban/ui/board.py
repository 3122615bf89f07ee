"""Board screen showing the columns and tasks of one wiki page."""

from __future__ import annotations

from typing import Awaitable

from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal
from textual.screen import Screen
from textual.widgets import Footer, Static

from wikiban.client import WikiError
from wikiban.model.board import Column, TaskNode, find_task_column
from wikiban.model.drag import DragSession
from wikiban.model.writer import TaskLineNotFound
from wikiban.sync import KanbanSession
from wikiban.ui.column import ColumnWidget
from wikiban.ui.dialogs import ConfirmScreen, PromptScreen
from wikiban.ui.status import SaveStatus
from wikiban.ui.task import TaskCheckbox, TaskRow


class BoardScreen(Screen):
    """Main board screen showing all columns."""

    DEFAULT_CSS = """
    BoardScreen {
        layers: base overlay;
    }
    #board-header {
        height: 1;
        background: $panel;
    }
    #board-title {
        width: 1fr;
        padding: 0 1;
        text-style: bold;
    }
    #columns {
        height: 1fr;
    }
    BoardScreen.busy TaskCheckbox {
        opacity: 0.4;
    }
    """

    BINDINGS = [
        Binding("escape", "cancel_drag", "Cancel drag", show=False),
        ("space", "toggle", "Toggle"),
        ("a", "add_task", "Add task"),
        ("r", "rename_task", "Rename"),
        ("d", "delete_task", "Delete"),
        ("down", "app.focus_next", "Next"),
        ("up", "app.focus_previous", "Previous"),
        ("right", "indent", "Indent"),
        ("left", "outdent", "Outdent"),
        ("n", "add_column", "New column"),
        ("e", "rename_column", "Rename column"),
        ("x", "delete_column", "Delete column"),
        ("ctrl+r", "reload", "Reload"),
    ]

    def __init__(self, session: KanbanSession):
        super().__init__()
        self.session = session
        self.dragging_row: TaskRow | None = None
        self._unwatch = None
        self._focus_node: TaskNode | None = None

    @property
    def board(self):
        return self.session.board

    def compose(self) -> ComposeResult:
        with Horizontal(id="board-header"):
            yield Static(self.session.doc_path, id="board-title")
            yield SaveStatus(self.session, id="save-status")
        with Horizontal(id="columns"):
            for column in self.board.columns:
                yield ColumnWidget(column, self.board)
        yield Footer()

    def on_mount(self) -> None:
        self._unwatch = self.session.watch(self._on_session_changed)
        self.call_after_refresh(self._restore_focus)

    def on_unmount(self) -> None:
        if self._unwatch is not None:
            self._unwatch()

    def _on_session_changed(self, session, key, old, new) -> None:
        if key == "busy":
            self.set_class(new, "busy")

    def _restore_focus(self) -> None:
        rows = list(self.query(TaskRow))
        for row in rows:
            if row.node is self._focus_node:
                row.focus()
                return
        if rows:
            rows[0].focus()

    async def refresh_board(self) -> None:
        """Redraw every column from the board."""
        focused = self.focused
        if self._focus_node is None and isinstance(focused, TaskRow):
            self._focus_node = focused.node
        await self.recompose()
        self._restore_focus()
        self._focus_node = None

    # -- Running session operations --

    async def _persist(self, operation: Awaitable) -> None:
        """Await a session operation, report failures, then redraw."""
        try:
            await operation
        except (WikiError, TaskLineNotFound) as e:
            self.notify(str(e), title="Save failed", severity="error")
        except ValueError as e:
            self.notify(str(e), severity="warning")
        await self.refresh_board()

    def run_operation(self, operation: Awaitable) -> None:
        self.run_worker(self._persist(operation), group="session")

    async def _confirm(self, message: str) -> bool:
        return bool(await self.app.push_screen_wait(ConfirmScreen(message)))

    async def _prompt(self, message: str, value: str = "") -> str | None:
        return await self.app.push_screen_wait(PromptScreen(message, value))

    def _focused_task(self) -> TaskNode | None:
        focused = self.focused
        return focused.node if isinstance(focused, TaskRow) else None

    def _current_column(self) -> Column | None:
        node = self._focused_task()
        if node is not None:
            return find_task_column(self.board, node)
        return self.board.columns[0] if self.board.columns else None

    # -- Mouse events go to the row being dragged --

    def on_mouse_move(self, event) -> None:
        if self.dragging_row is not None:
            self.dragging_row.drag_to(event.screen_x, event.screen_y)

    def on_mouse_up(self, event) -> None:
        if self.dragging_row is not None:
            self.dragging_row.drop_at(event.screen_x, event.screen_y)

    def action_cancel_drag(self) -> None:
        if self.dragging_row is not None:
            self.dragging_row.abandon()

    def finish_drag(self, drag: DragSession) -> None:
        """Drop a finished drag and save the board if anything moved."""
        self._focus_node = drag.node
        self.run_operation(self.session.finish_drag(drag))

    # -- Tasks --

    def on_task_checkbox_toggled(self, event: TaskCheckbox.Toggled) -> None:
        event.stop()
        if self.session.busy:
            return
        self._focus_node = event.node
        self.run_operation(self.session.toggle(event.node))

    def action_toggle(self) -> None:
        node = self._focused_task()
        if node is not None and not self.session.busy:
            self._focus_node = node
            self.run_operation(self.session.toggle(node))

    def action_add_task(self) -> None:
        column = self._current_column()
        if column is not None:
            self.run_worker(self._add_task(column), group="session")

    async def _add_task(self, column: Column) -> None:
        text = await self._prompt(f"New task in {column.title}")
        if text:
            await self._persist(self._add_and_focus(column, text))

    async def _add_and_focus(self, column: Column, text: str) -> None:
        self._focus_node = await self.session.add_task(column, text)

    def action_rename_task(self) -> None:
        node = self._focused_task()
        if node is not None:
            self.run_worker(self._rename_task(node), group="session")

    async def _rename_task(self, node: TaskNode) -> None:
        text = await self._prompt("Rename task", node.original_markdown or node.text)
        if text:
            await self._persist(self.session.rename_task(node, text))

    def action_delete_task(self) -> None:
        node = self._focused_task()
        if node is not None:
            message = f"Delete '{node.text}' and its subtasks?"
            self.run_operation(self.session.delete_task(node, lambda: self._confirm(message)))

    def action_indent(self) -> None:
        node = self._focused_task()
        if node is not None:
            self._focus_node = node
            self.run_operation(self.session.move_task(node, indent_level=node.indent_level + 1))

    def action_outdent(self) -> None:
        node = self._focused_task()
        if node is not None and node.indent_level > 0:
            self._focus_node = node
            self.run_operation(self.session.move_task(node, indent_level=node.indent_level - 1))

    # -- Columns --

    def action_add_column(self) -> None:
        self.run_worker(self._add_column(), group="session")

    async def _add_column(self) -> None:
        title = await self._prompt("New column")
        if title:
            await self._persist(self.session.add_column(title))

    def action_rename_column(self) -> None:
        column = self._current_column()
        if column is not None:
            self.run_worker(self._rename_column(column), group="session")

    async def _rename_column(self, column: Column) -> None:
        title = await self._prompt("Rename column", column.title)
        if title:
            await self._persist(self.session.rename_column(column, title))

    def action_delete_column(self) -> None:
        column = self._current_column()
        if column is not None:
            message = f"Delete column '{column.title}' and its tasks?"
            self.run_operation(self.session.delete_column(column, lambda: self._confirm(message)))

    def action_reload(self) -> None:
        self.run_operation(self.session.load())
