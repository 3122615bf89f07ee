"""Match rendered board tasks back to the task records of their source."""

from __future__ import annotations

import logging
from typing import Iterable

from wikiban.ids import generate_task_id
from wikiban.model.board import Board
from wikiban.parser import TaskRecord, normalize_content

logger = logging.getLogger(__name__)


def _contains(a: str, b: str) -> bool:
    return bool(a) and bool(b) and (a in b or b in a)


def match_task(
    candidates: Iterable[TaskRecord],
    displayed_text: str,
    indent_level: int,
    assigned: set[str],
) -> TaskRecord | None:
    """Find the record a displayed task came from.

    Tries, in order, and skipping records whose ID is in ``assigned``:

    1. same normalized content at the same indent level
    2. one content containing the other at the same indent level
    3. either of the above at any level, closest level first

    Within a tier the first record in document order wins.
    """
    text = normalize_content(displayed_text)
    if not text:
        return None
    available = [r for r in candidates if r.id not in assigned]

    for record in available:
        if record.normalized == text and record.indent_level == indent_level:
            return record

    for record in available:
        if record.indent_level == indent_level and _contains(record.normalized, text):
            return record

    loose = [r for r in available if r.normalized == text or _contains(r.normalized, text)]
    if loose:
        loose.sort(key=lambda r: abs(r.indent_level - indent_level))
        return loose[0]
    return None


def reconcile(board: Board, records: list[TaskRecord]) -> int:
    """Give every task on the board an ID, taken from records where possible.

    Tasks that already have an ID keep it. Matched tasks also take the
    record's markdown and list marker. Returns the number of IDs minted
    because no record matched.
    """
    assigned = {node.task_id for node in board.iter_tasks() if node.task_id}
    minted = 0
    for node in board.iter_tasks():
        if node.task_id:
            continue
        record = match_task(records, node.text, node.indent_level, assigned)
        if record is None:
            node.task_id = generate_task_id()
            minted += 1
            logger.warning("no source line matches task %r, assigned new id %s", node.text, node.task_id)
        else:
            node.task_id = record.id
            node.original_markdown = record.content
            node.list_marker = record.list_marker
        assigned.add(node.task_id)
    return minted
