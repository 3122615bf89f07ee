"""Drag-and-drop state for moving tasks around a board."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum

from wikiban.model.board import Board, Column, TaskNode, find_descendants, find_task_column
from wikiban.model.task import drop_on_task, reorder_task

logger = logging.getLogger(__name__)


class DragError(Exception):
    """Raised when a drag cannot start."""


class DropZone(Enum):
    BEFORE = "before"
    CHILD = "child"
    AFTER = "after"
    APPEND = "append"


class DragState(Enum):
    IDLE = "idle"
    DRAGGING = "dragging"
    DROPPED = "dropped"
    CANCELLED = "cancelled"


@dataclass
class DropTarget:
    column: Column
    node: TaskNode | None
    zone: DropZone


def drop_zone(y: float, top: float, height: float) -> DropZone:
    """Which part of a task row the pointer is over.

    The middle third nests under the task; above and below it the
    task's centre line decides between before and after.
    """
    third = height / 3
    if top + third <= y <= top + 2 * third:
        return DropZone.CHILD
    return DropZone.BEFORE if y < top + height / 2 else DropZone.AFTER


class DragSession:
    """One drag of a task, from pick-up to drop or cancel.

    Idle -> Dragging -> Dropped | Cancelled -> Idle (on end). A board
    holds at most one unresolved session at a time.
    """

    def __init__(self, board: Board, node: TaskNode):
        self.board = board
        self.node = node
        self.state = DragState.IDLE
        self.target: DropTarget | None = None
        self.moved = False

    @property
    def dragged(self) -> list[TaskNode]:
        """The dragged task and its descendants."""
        column = find_task_column(self.board, self.node)
        if column is None:
            return [self.node]
        return [self.node, *find_descendants(column, self.node)]

    def start(self) -> None:
        if self.board.drag is not None and self.board.drag is not self:
            raise DragError("another drag is still in progress")
        if self.state is not DragState.IDLE:
            raise DragError(f"cannot start a drag that is {self.state.value}")
        self.board.drag = self
        self.state = DragState.DRAGGING

    def hover(
        self,
        column: Column,
        node: TaskNode | None = None,
        y: float = 0,
        top: float = 0,
        height: float = 0,
    ) -> DropTarget | None:
        """Update the drop target for the pointer position.

        Without a node the pointer is over the column's empty area and
        the task would be appended. Over the dragged task or one of its
        descendants there is no target.
        """
        if self.state is not DragState.DRAGGING:
            return None
        if node is None:
            self.target = DropTarget(column, None, DropZone.APPEND)
        elif any(node is task for task in self.dragged):
            self.target = None
        else:
            self.target = DropTarget(column, node, drop_zone(y, top, height))
        return self.target

    def drop(self) -> bool:
        """Apply the current target. Returns True if the board changed."""
        if self.state is not DragState.DRAGGING:
            return False
        if self.target is None:
            self.cancel()
            return False
        target = self.target
        if target.zone is DropZone.CHILD:
            self.moved = drop_on_task(self.board, self.node, target.node)
        elif target.zone is DropZone.BEFORE:
            self.moved = reorder_task(self.board, self.node, target.column, before=target.node)
        elif target.zone is DropZone.AFTER:
            self.moved = reorder_task(self.board, self.node, target.column, after=target.node)
        else:
            self.moved = reorder_task(self.board, self.node, target.column)
        self.state = DragState.DROPPED
        logger.debug("dropped %s %s, moved=%s", self.node.task_id, target.zone.value, self.moved)
        return self.moved

    def cancel(self) -> None:
        if self.state is DragState.DRAGGING:
            self.state = DragState.CANCELLED
            self.target = None

    def end(self) -> None:
        """Release the board for the next drag."""
        if self.state is DragState.DRAGGING:
            self.cancel()
        if self.board.drag is self:
            self.board.drag = None
        self.state = DragState.IDLE
        self.target = None
