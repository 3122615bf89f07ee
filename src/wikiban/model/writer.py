"""Merge a board back into wiki page markdown."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass

from wikiban.model.board import Board, Column, TaskNode, column_key
from wikiban.model.column import storage_headers
from wikiban.model.matcher import match_task
from wikiban.parser import (
    ID_COMMENT_RE,
    Section,
    TaskRecord,
    column_line_indexes,
    extract_tasks,
    id_comment,
    join_lines,
    match_text,
    normalize_content,
    parse_task_line,
    split_document,
    split_lines,
    strip_id_comment,
)

logger = logging.getLogger(__name__)

_MARK_RE = re.compile(r"^(\s*[-*+]\s+\[)[ xX](\])")


class TaskLineNotFound(LookupError):
    """Raised when no line of the page holds a given task."""


class _Formats:
    """Source formatting of the fetched page's tasks, each usable once."""

    def __init__(self, records: list[TaskRecord]):
        self.records = records
        self.by_id = {r.id: r for r in records if r.has_id}
        self.used: set[str] = set()

    def lookup(self, node: TaskNode) -> TaskRecord | None:
        record = self.by_id.get(node.task_id) if node.task_id else None
        if record is None or record.id in self.used:
            record = self._by_content(node)
        if record is not None:
            self.used.add(record.id)
        return record

    def _by_content(self, node: TaskNode) -> TaskRecord | None:
        if not node.was_moved:
            return match_task(self.records, node.text, node.indent_level, self.used)
        text = normalize_content(node.text)
        exact = [r for r in self.records if r.id not in self.used and r.normalized == text]
        exact.sort(key=lambda r: abs(r.indent_level - node.indent_level))
        return exact[0] if exact else None


def format_task(node: TaskNode, formats: _Formats | None = None) -> str:
    """Render a task node as a markdown task line."""
    marker, content = node.list_marker, node.original_markdown
    if not content and formats is not None:
        record = formats.lookup(node)
        if record is not None:
            marker, content = record.list_marker, record.content
    content = strip_id_comment(content or "") or node.text

    mark = "x" if node.checked else " "
    line = f"{'  ' * node.indent_level}{marker} [{mark}] {content}"
    if node.task_id:
        line += f" {id_comment(node.task_id)}"
    return line


def _blank_layout(body: list[str]) -> tuple[int, int]:
    """Count blank lines at the start and end of a section body."""
    leading = 0
    for line in body:
        if line.strip():
            break
        leading += 1
    if leading == len(body):
        return 0, leading
    trailing = 0
    for line in reversed(body):
        if line.strip():
            break
        trailing += 1
    return leading, trailing


def _column_lines(
    column: Column,
    header: str,
    slot: Section | None,
    known_headers: dict[tuple[str, str], str],
    formats: _Formats,
) -> list[str]:
    if slot is not None and slot.title.lower() == header.lower():
        lines = [slot.header]
    else:
        lines = [f"## {known_headers.get(column_key(column.group, header), header)}"]
    leading, trailing = _blank_layout(slot.body) if slot is not None else (0, 1)
    lines.extend([""] * leading)
    for i, node in enumerate(column.tasks):
        if i:
            lines.extend([""] * node.blank_before)
        lines.append(format_task(node, formats))
    lines.extend([""] * trailing)
    return lines


def _trailing_blanks(lines: list[str]) -> int:
    count = 0
    for line in reversed(lines):
        if line.strip():
            break
        count += 1
    return count


def serialize(markdown: str, board: Board) -> str:
    """Merge the board into freshly fetched page markdown.

    Text before the first level-2 heading and every section that is not
    one of the board's columns is kept as it is. Each page board's
    columns are written into the places of the column sections they
    came from, in board order; columns without such a place follow the
    last one. A page board with no such place gets its columns right
    below its level-1 heading (or the preamble), and one missing from
    the page entirely is appended with a new heading.
    """
    document = split_document(markdown)
    formats = _Formats(extract_tasks(markdown, columns_only=True))
    known_headers = {column_key(s.group, s.title): s.title for s in document.sections if s.is_column}

    claimed = {column_key(c.group, c.source_header) for c in board.columns if c.source_header is not None}
    claimed |= board.removed_headers
    slots = {i for i, s in enumerate(document.sections) if s.is_column and column_key(s.group, s.title) in claimed}
    last_slot = {document.sections[i].group.lower(): i for i in sorted(slots)}

    pending: dict[str, list[tuple[Column, str]]] = {}
    for column, header in zip(board.columns, storage_headers(board.columns)):
        pending.setdefault(column.group.lower(), []).append((column, header))

    lines = list(document.preamble)

    def place_pending(group: str):
        for column, header in pending.pop(group, []):
            if lines and lines[-1].strip():
                lines.append("")
            lines.extend(_column_lines(column, header, None, known_headers, formats))

    preamble_group = document.preamble_group.lower()
    if preamble_group not in last_slot:
        place_pending(preamble_group)

    for index, section in enumerate(document.sections):
        group = section.group.lower()
        if index not in slots:
            lines.extend(section.lines)
            if section.level == 1 and group not in last_slot:
                place_pending(group)
            continue
        queue = pending.get(group)
        if queue:
            column, header = queue.pop(0)
            lines.extend(_column_lines(column, header, section, known_headers, formats))
        if last_slot[group] == index:
            place_pending(group)

    for group in list(pending):
        if pending[group] and group:
            if lines and lines[-1].strip():
                lines.append("")
            lines.append(f"# {pending[group][0][0].group}")
        place_pending(group)

    original_lines, _, _ = split_lines(markdown)
    while lines and not lines[-1].strip():
        lines.pop()
    lines.extend([""] * _trailing_blanks(original_lines))

    terminated = document.terminated or not markdown
    return join_lines(lines, document.newline, terminated)


@dataclass
class SavedState:
    """What one save wrote: stored headers, removals and flagged tasks."""

    headers: list[tuple[Column, str, str]]
    removed: set[tuple[str, str]]
    flagged: list[tuple[TaskNode, float | None]]


def saved_state(board: Board) -> SavedState:
    """Capture the board as serialize() is about to write it."""
    return SavedState(
        headers=[(c, c.group, h) for c, h in zip(board.columns, storage_headers(board.columns))],
        removed=set(board.removed_headers),
        flagged=[(n, n.moved_at) for n in board.iter_tasks() if n.is_new or n.was_moved],
    )


def mark_saved(board: Board, state: SavedState | None = None) -> None:
    """Record that the board was saved: headers are stored, flags cleared.

    Only what ``state`` captured is marked. A column renamed, moved or
    deleted, or a task moved again, after the capture keeps its pending
    change for the next save.
    """
    if state is None:
        state = saved_state(board)
    for column, group, header in state.headers:
        if column.group == group and any(column is c for c in board.columns):
            column.source_header = header
    board.removed_headers -= state.removed
    for node, moved_at in state.flagged:
        if node.moved_at == moved_at:
            node.clear_flags()


def _set_mark(line: str, checked: bool, task_id: str | None) -> str:
    ending = "\r" if line.endswith("\r") else ""
    line = line[: len(line) - len(ending)]
    line = _MARK_RE.sub(lambda m: f"{m.group(1)}{'x' if checked else ' '}{m.group(2)}", line, count=1)
    if task_id and not ID_COMMENT_RE.search(line):
        line = f"{line.rstrip()} {id_comment(task_id)}"
    return line + ending


def _find_task_line(lines: list[str], node: TaskNode, wanted: set[int]) -> int | None:
    tasks = [(i, parse_task_line(lines[i])) for i in sorted(wanted) if i < len(lines)]
    tasks = [(i, t) for i, t in tasks if t is not None]
    text = normalize_content(node.text)

    if not node.is_new and node.task_id:
        by_id = [(i, t) for i, t in tasks if t.task_id == node.task_id]
        for i, task in by_id:
            if task.indent_level == node.indent_level:
                return i
        if by_id:
            return by_id[0][0]
        logger.warning("task %s has no id comment in the page, matching by content", node.task_id)

    same_level = [(i, match_text(t.content)) for i, t in tasks if t.indent_level == node.indent_level]
    for i, content in same_level:
        if content == text:
            return i
    if node.is_new or node.was_moved:
        return None
    for i, content in same_level:
        if text and content and (text in content or content in text):
            return i
    return None


def toggle_in_markdown(markdown: str, node: TaskNode, checked: bool) -> str:
    """Set the checkbox of one task's line, leaving every other line alone.

    Only lines of column sections are considered. The line is found by
    task-id comment, or by content when the page has no comment for it
    yet; the comment is added in that case.
    """
    lines = markdown.split("\n")
    index = _find_task_line(lines, node, column_line_indexes(split_document(markdown)))
    if index is None:
        raise TaskLineNotFound(f"no line in the page holds task {node.text!r}")
    lines[index] = _set_mark(lines[index], checked, node.task_id)
    return "\n".join(lines)
