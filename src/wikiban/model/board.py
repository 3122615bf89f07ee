"""Board, column and task nodes."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Iterator

if TYPE_CHECKING:
    from wikiban.model.drag import DragSession


@dataclass(eq=False)
class TaskNode:
    """A task as shown on the board.

    ``text`` is the rendered, plain display text. ``original_markdown``
    caches the markdown the task was loaded or typed with, so markup
    survives a save. ``blank_before`` is the number of blank lines
    written above the task when it is not first in its column, which
    keeps loose lists loose. Nodes compare by identity.
    """

    text: str
    indent_level: int = 0
    checked: bool = False
    task_id: str | None = None
    original_markdown: str | None = None
    list_marker: str = "-"
    is_new: bool = False
    was_moved: bool = False
    moved_at: float | None = None
    blank_before: int = 0

    def clear_flags(self) -> None:
        self.is_new = False
        self.was_moved = False
        self.moved_at = None


@dataclass(eq=False)
class Column:
    """A level-2 section holding tasks.

    ``source_header`` is the stored header this column was loaded from or
    last saved as (None until first saved). Renames only change ``title``.
    ``group`` is the title of the page board the column belongs to, ""
    for columns above any level-1 heading.
    """

    title: str
    tasks: list[TaskNode] = field(default_factory=list)
    source_header: str | None = None
    group: str = ""


def column_key(group: str, header: str) -> tuple[str, str]:
    """Identify a stored column section: its board and header, case-folded."""
    return group.lower(), header.lower()


@dataclass(eq=False)
class Board:
    """Every column of one page, in order.

    ``removed_headers`` holds the column_key() of each stored section
    whose column was deleted or left its board since the last save.
    ``default_group`` is the page board a column created on an empty
    board joins: the one opened above the first column section.
    """

    columns: list[Column] = field(default_factory=list)
    meta: dict = field(default_factory=dict)
    removed_headers: set[tuple[str, str]] = field(default_factory=set)
    drag: DragSession | None = None
    default_group: str = ""

    def iter_tasks(self) -> Iterator[TaskNode]:
        """All tasks in document order."""
        for column in self.columns:
            yield from column.tasks


def find_task(board: Board, task_id: str) -> TaskNode | None:
    """Find a task by ID."""
    for node in board.iter_tasks():
        if node.task_id == task_id:
            return node
    return None


def find_task_column(board: Board, node: TaskNode) -> Column | None:
    """Find the column containing a task."""
    for column in board.columns:
        if any(task is node for task in column.tasks):
            return column
    return None


def find_column(board: Board, title: str, group: str | None = None) -> Column | None:
    """Find the first column with this title (case-insensitive).

    With ``group`` only the columns of that board are searched.
    """
    key = title.lower()
    for column in board.columns:
        if group is not None and column.group.lower() != group.lower():
            continue
        if column.title.lower() == key:
            return column
    return None


def find_descendants(column: Column, node: TaskNode) -> list[TaskNode]:
    """Tasks nested under node: the contiguous following tasks indented deeper."""
    index = column.tasks.index(node)
    descendants = []
    for task in column.tasks[index + 1 :]:
        if task.indent_level <= node.indent_level:
            break
        descendants.append(task)
    return descendants
