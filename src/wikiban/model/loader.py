"""Build a board from wiki page markdown."""

from __future__ import annotations

from wikiban.ids import display_titles
from wikiban.model.board import Board, Column, TaskNode
from wikiban.model.matcher import reconcile
from wikiban.parser import Section, extract_tasks, parse_task_line, render_text, split_document


def _titles_by_board(sections: list[Section]) -> list[str]:
    """Display titles, with (N) suffixes undone within each board."""
    titles = [""] * len(sections)
    groups: dict[str, list[int]] = {}
    for i, section in enumerate(sections):
        groups.setdefault(section.group.lower(), []).append(i)
    for indexes in groups.values():
        for i, title in zip(indexes, display_titles([sections[i].title for i in indexes])):
            titles[i] = title
    return titles


def _column_tasks(section: Section) -> list[TaskNode]:
    tasks: list[TaskNode] = []
    blanks = 0
    for line in section.body:
        task = parse_task_line(line)
        if task is None:
            blanks += 1
            continue
        tasks.append(
            TaskNode(
                text=render_text(task.content),
                indent_level=task.indent_level,
                checked=task.checked,
                list_marker=task.list_marker,
                blank_before=blanks if tasks else 0,
            )
        )
        blanks = 0
    # The first task's leading blanks belong to the section layout;
    # it takes the list's spacing instead.
    if len(tasks) > 1:
        tasks[0].blank_before = tasks[1].blank_before
    return tasks


def render_board(markdown: str) -> Board:
    """Render the column sections of a page into an unidentified board.

    Each task node gets its display text, level and checked state,
    but no ID: identity comes from reconciling with the source.
    """
    document = split_document(markdown)
    sections = [s for s in document.sections if s.is_column]

    board = Board(meta=document.meta, default_group=document.preamble_group)
    for section, title in zip(sections, _titles_by_board(sections)):
        column = Column(title=title, source_header=section.title, group=section.group)
        column.tasks = _column_tasks(section)
        board.columns.append(column)
    return board


def load_board(markdown: str) -> Board:
    """Render a page into a board and attach task identities from its source."""
    board = render_board(markdown)
    reconcile(board, extract_tasks(markdown, columns_only=True))
    return board
