"""Task mutation operations: add, rename, delete, move and reparent."""

from __future__ import annotations

import time

from wikiban.ids import generate_task_id
from wikiban.model.board import Board, Column, TaskNode, find_descendants, find_task_column
from wikiban.parser import render_text


def _column_of(board: Board, node: TaskNode) -> Column:
    column = find_task_column(board, node)
    if column is None:
        raise ValueError(f"task {node.task_id or node.text!r} is not on the board")
    return column


def add_task(board: Board, column: Column, markdown: str) -> TaskNode:
    """Create a task at the top of a column."""
    markdown = markdown.strip()
    if not markdown:
        raise ValueError("task text is empty")
    node = TaskNode(
        text=render_text(markdown),
        task_id=generate_task_id(),
        original_markdown=markdown,
        is_new=True,
        blank_before=column.tasks[0].blank_before if column.tasks else 0,
    )
    column.tasks.insert(0, node)
    return node


def rename_task(node: TaskNode, markdown: str) -> None:
    """Replace a task's text with new markdown."""
    markdown = markdown.strip()
    if not markdown:
        raise ValueError("task text is empty")
    node.original_markdown = markdown
    node.text = render_text(markdown)


def delete_task(board: Board, node: TaskNode) -> list[TaskNode]:
    """Remove a task and everything nested under it. Returns the removed tasks."""
    column = _column_of(board, node)
    index = column.tasks.index(node)
    removed = [node, *find_descendants(column, node)]
    del column.tasks[index : index + len(removed)]
    return removed


def move_subtree(
    board: Board,
    node: TaskNode,
    column: Column,
    before: TaskNode | None = None,
    after: TaskNode | None = None,
    indent_level: int | None = None,
) -> bool:
    """Move a task and its descendants as one block.

    The block lands before ``before``, after ``after``, or at the end of
    ``column`` when neither is given. The task takes ``indent_level``
    (unchanged when None) and each descendant shifts by the same amount,
    never below level 1.

    Returns False, changing nothing, when the block would end up where
    it already is. Otherwise every moved task is flagged as moved, given
    an ID if it has none, and True is returned.
    """
    if before is not None and after is not None:
        raise ValueError("give either before or after, not both")

    source = _column_of(board, node)
    block = [node, *find_descendants(source, node)]
    anchor = before if before is not None else after
    if anchor is not None and any(anchor is task for task in block):
        raise ValueError("cannot move a task relative to itself or its descendants")
    if anchor is not None and not any(anchor is task for task in column.tasks):
        raise ValueError("anchor task is not in the target column")

    old_level = node.indent_level
    new_level = old_level if indent_level is None else max(0, indent_level)

    start = source.tasks.index(node)
    following = source.tasks[start + len(block)] if start + len(block) < len(source.tasks) else None

    del source.tasks[start : start + len(block)]
    if before is not None:
        position = column.tasks.index(before)
    elif after is not None:
        position = column.tasks.index(after) + 1
    else:
        position = len(column.tasks)
    column.tasks[position:position] = block

    end = position + len(block)
    new_following = column.tasks[end] if end < len(column.tasks) else None
    if column is source and new_following is following and new_level == old_level:
        return False

    delta = new_level - old_level
    node.indent_level = new_level
    for task in block[1:]:
        task.indent_level = max(1, task.indent_level + delta)

    if column is not source:
        others = [t for t in column.tasks if not any(t is moved for moved in block)]
        if others:
            for task in block:
                task.blank_before = others[0].blank_before

    moved_at = time.time()
    for task in block:
        task.was_moved = True
        task.moved_at = moved_at
        if not task.task_id:
            task.task_id = generate_task_id()
    return True


def reorder_task(
    board: Board,
    node: TaskNode,
    column: Column,
    before: TaskNode | None = None,
    after: TaskNode | None = None,
) -> bool:
    """Move a task (with descendants) keeping its indent level."""
    return move_subtree(board, node, column, before=before, after=after)


def reparent_task(
    board: Board,
    node: TaskNode,
    indent_level: int,
    column: Column | None = None,
    before: TaskNode | None = None,
    after: TaskNode | None = None,
) -> bool:
    """Change a task's indent level, shifting its descendants with it.

    Without a column the task keeps its place.
    """
    if column is None:
        column = _column_of(board, node)
        if before is None and after is None:
            block = [node, *find_descendants(column, node)]
            index = column.tasks.index(node) + len(block)
            before = column.tasks[index] if index < len(column.tasks) else None
    return move_subtree(board, node, column, before=before, after=after, indent_level=indent_level)


def drop_on_task(board: Board, node: TaskNode, target: TaskNode) -> bool:
    """Nest a task under target, placing it immediately after target."""
    column = _column_of(board, target)
    return move_subtree(board, node, column, after=target, indent_level=target.indent_level + 1)
