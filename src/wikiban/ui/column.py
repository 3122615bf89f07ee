"""Column widgets for the board UI."""

from __future__ import annotations

from textual.app import ComposeResult
from textual.containers import Vertical
from textual.widgets import Rule, Static

from wikiban.model.board import Board, Column
from wikiban.model.column import is_duplicate
from wikiban.model.drag import DropZone
from wikiban.ui.drag import DropArea
from wikiban.ui.task import TaskRow

_ZONE_CLASSES = {
    DropZone.BEFORE: "drop-before",
    DropZone.AFTER: "drop-after",
    DropZone.CHILD: "drop-child",
}


class ColumnWidget(DropArea, Vertical):
    """A single column on the board."""

    DEFAULT_CSS = """
    ColumnWidget {
        width: 1fr;
        height: 100%;
        min-width: 25;
        padding: 0 1;
        border-right: tall $surface-lighten-1;
    }
    ColumnWidget > .column-title {
        width: 100%;
        text-align: center;
        text-style: bold;
    }
    ColumnWidget > .column-title.-duplicate {
        color: $warning;
    }
    ColumnWidget > .column-board {
        width: 100%;
        text-align: center;
        color: $text-muted;
    }
    ColumnWidget > Rule.-horizontal {
        margin: 0;
    }
    ColumnWidget.drop-append {
        background: $accent 10%;
    }
    """

    def __init__(self, column: Column, board: Board, **kwargs):
        super().__init__(**kwargs)
        self.column = column
        self.board = board

    def compose(self) -> ComposeResult:
        if len({c.group.lower() for c in self.board.columns}) > 1:
            yield Static(self.column.group, classes="column-board")
        duplicate = is_duplicate(self.board, self.column)
        yield Static(self.column.title, classes="column-title -duplicate" if duplicate else "column-title")
        yield Rule()
        for node in self.column.tasks:
            yield TaskRow(node, self.board)

    # -- DropArea: column accepting task drops --

    def hover_drag(self, moving, x: int, y: int) -> bool:
        if not isinstance(moving, TaskRow) or moving.drag is None:
            return False
        drag = moving.drag
        row = self._row_at(moving, y)
        if row is None:
            target = drag.hover(self.column)
        else:
            region = row.region
            target = drag.hover(self.column, row.node, y, region.y, region.height)
        self._show_target(row, target.zone if target else None)
        return True

    def leave_drag(self, moving) -> None:
        self._show_target(None, None)

    def accept_drop(self, moving, x: int, y: int) -> bool:
        if not self.hover_drag(moving, x, y):
            return False
        drag = moving.drag
        self._show_target(None, None)
        if drag.target is None:
            return False
        moving.drag = None
        self.screen.finish_drag(drag)
        return True

    def _row_at(self, moving: TaskRow, y: int) -> TaskRow | None:
        """Row under the pointer, or the closest one; None below the last row."""
        dragged = moving.drag.dragged
        rows = [
            r for r in self.query(TaskRow) if not any(r.node is node for node in dragged) and r is not moving
        ]
        if not rows:
            return None
        last = rows[-1].region
        if y >= last.y + last.height:
            return None
        for row in rows:
            if row.region.y <= y < row.region.y + row.region.height:
                return row
        return min(rows, key=lambda r: abs(r.region.y + r.region.height / 2 - y))

    def _show_target(self, row: TaskRow | None, zone: DropZone | None) -> None:
        for other in self.query(TaskRow):
            other.remove_class(*_ZONE_CLASSES.values())
        self.set_class(zone is DropZone.APPEND, "drop-append")
        if row is not None and zone in _ZONE_CLASSES:
            row.add_class(_ZONE_CLASSES[zone])
