"""Editing session: keeps a board in step with its wiki page.

Every change runs: mutate board → fetch page → merge → save page.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Awaitable, Callable

from wikiban.client import WikiClient, WikiError
from wikiban.model.board import Board, Column, TaskNode
from wikiban.model.column import create_column, delete_column, move_column, rename_column
from wikiban.model.drag import DragSession
from wikiban.model.loader import load_board
from wikiban.model.task import add_task, delete_task, drop_on_task, rename_task, reparent_task
from wikiban.model.writer import TaskLineNotFound, mark_saved, saved_state, serialize, toggle_in_markdown

logger = logging.getLogger(__name__)

Callback = Callable[["KanbanSession", str, Any, Any], None]
Confirm = Callable[[], Awaitable[bool]]


class KanbanSession:
    """A board loaded from one wiki page, saved back after every change.

    Saves run one at a time; a save requested while another is running
    waits for it. A failed save leaves the board as the user changed it
    and sets ``status`` to "error". ``busy`` is set while a checkbox
    toggle is in flight, during which further toggles are refused.
    """

    def __init__(self, client: WikiClient, doc_path: str):
        self.client = client
        self.doc_path = doc_path
        self.board: Board | None = None
        self.source = ""
        self.status = "idle"
        self.busy = False
        self.last_error: Exception | None = None
        self._watchers: list[Callback] = []
        self._save_lock = asyncio.Lock()

    def watch(self, callback: Callback) -> Callable[[], None]:
        """Watch status and busy changes. Returns an unwatch callable."""
        self._watchers.append(callback)
        return lambda: callback in self._watchers and self._watchers.remove(callback)

    def _set(self, key: str, value: Any) -> None:
        old = getattr(self, key)
        if old == value:
            return
        setattr(self, key, value)
        for cb in list(self._watchers):
            cb(self, key, old, value)

    def _fail(self, exc: Exception) -> None:
        self.last_error = exc
        logger.warning("%s: %s", self.doc_path, exc)
        self._set("status", "error")

    def _require_board(self) -> Board:
        if self.board is None:
            raise RuntimeError("board is not loaded")
        return self.board

    async def load(self) -> Board:
        """Fetch the page and build the board from it."""
        self._set("status", "loading")
        try:
            markdown = await self.client.fetch_source(self.doc_path)
        except WikiError as e:
            self._fail(e)
            raise
        self.source = markdown
        self.board = load_board(markdown)
        self._set("status", "idle")
        return self.board

    async def save(self) -> None:
        """Fetch the page, merge the board into it and save it.

        Changes made while the save is in flight are left pending for
        the next save, which they queue behind this one.
        """
        board = self._require_board()
        async with self._save_lock:
            self._set("status", "saving")
            try:
                markdown = await self.client.fetch_source(self.doc_path)
                state = saved_state(board)
                await self.client.save_source(self.doc_path, serialize(markdown, board))
            except WikiError as e:
                self._fail(e)
                raise
            mark_saved(board, state)
            self._set("status", "saved")

    async def toggle(self, node: TaskNode) -> bool:
        """Flip a task's checkbox on the page, then on the board.

        Only the task's own line is edited. Returns False without doing
        anything while another toggle is in flight.
        """
        self._require_board()
        if self.busy:
            return False
        checked = not node.checked
        self._set("busy", True)
        try:
            async with self._save_lock:
                self._set("status", "saving")
                try:
                    markdown = await self.client.fetch_source(self.doc_path)
                    updated = toggle_in_markdown(markdown, node, checked)
                    await self.client.save_source(self.doc_path, updated)
                except (WikiError, TaskLineNotFound) as e:
                    self._fail(e)
                    raise
                node.checked = checked
                node.clear_flags()
                self._set("status", "saved")
        finally:
            self._set("busy", False)
        return True

    async def add_task(self, column: Column, markdown: str) -> TaskNode:
        node = add_task(self._require_board(), column, markdown)
        await self.save()
        return node

    async def rename_task(self, node: TaskNode, markdown: str) -> None:
        rename_task(node, markdown)
        await self.save()

    async def delete_task(self, node: TaskNode, confirm: Confirm | None = None) -> bool:
        """Delete a task and its descendants once confirm() agrees."""
        if confirm is not None and not await confirm():
            return False
        delete_task(self._require_board(), node)
        await self.save()
        return True

    async def move_task(
        self,
        node: TaskNode,
        column: Column | None = None,
        before: TaskNode | None = None,
        after: TaskNode | None = None,
        indent_level: int | None = None,
    ) -> bool:
        """Move a task and save, unless the move changes nothing.

        Without a column the task stays in place and only its level changes.
        """
        level = node.indent_level if indent_level is None else indent_level
        moved = reparent_task(self._require_board(), node, level, column=column, before=before, after=after)
        if moved:
            await self.save()
        return moved

    async def nest_task(self, node: TaskNode, target: TaskNode) -> bool:
        """Nest a task under target and save."""
        moved = drop_on_task(self._require_board(), node, target)
        if moved:
            await self.save()
        return moved

    async def finish_drag(self, drag: DragSession) -> bool:
        """Drop a drag at its target, end it, and save if anything moved."""
        try:
            moved = drag.drop()
        finally:
            drag.end()
        if moved:
            await self.save()
        return moved

    async def add_column(self, title: str, group: str | None = None) -> Column:
        """Append a column, to the page board ``group`` when given, and save."""
        column = create_column(self._require_board(), title, group=group)
        await self.save()
        return column

    async def rename_column(self, column: Column, title: str) -> None:
        rename_column(self._require_board(), column, title)
        await self.save()

    async def move_column(self, column: Column, new_index: int) -> None:
        move_column(self._require_board(), column, new_index)
        await self.save()

    async def delete_column(self, column: Column, confirm: Confirm | None = None) -> bool:
        """Delete a column and its tasks once confirm() agrees."""
        if confirm is not None and not await confirm():
            return False
        delete_column(self._require_board(), column)
        await self.save()
        return True
