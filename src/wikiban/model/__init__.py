"""Board model: nodes, loading, mutations and writing back to markdown."""

from wikiban.model.board import (
    Board,
    Column,
    TaskNode,
    column_key,
    find_column,
    find_descendants,
    find_task,
    find_task_column,
)
from wikiban.model.column import create_column, delete_column, move_column, rename_column, storage_headers
from wikiban.model.drag import DragError, DragSession, DragState, DropZone, drop_zone
from wikiban.model.loader import load_board, render_board
from wikiban.model.matcher import match_task, reconcile
from wikiban.model.task import (
    add_task,
    delete_task,
    drop_on_task,
    move_subtree,
    rename_task,
    reorder_task,
    reparent_task,
)
from wikiban.model.writer import SavedState, TaskLineNotFound, mark_saved, saved_state, serialize, toggle_in_markdown
from wikiban.parser import render_text

__all__ = [
    "Board",
    "Column",
    "DragError",
    "DragSession",
    "DragState",
    "DropZone",
    "SavedState",
    "TaskLineNotFound",
    "TaskNode",
    "add_task",
    "column_key",
    "create_column",
    "delete_column",
    "delete_task",
    "drop_on_task",
    "drop_zone",
    "find_column",
    "find_descendants",
    "find_task",
    "find_task_column",
    "load_board",
    "mark_saved",
    "match_task",
    "move_column",
    "move_subtree",
    "reconcile",
    "rename_column",
    "rename_task",
    "render_board",
    "render_text",
    "reorder_task",
    "reparent_task",
    "saved_state",
    "serialize",
    "storage_headers",
    "toggle_in_markdown",
]
