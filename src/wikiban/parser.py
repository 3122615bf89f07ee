"""Parse wiki markdown: task lines, task IDs and level-2 sections.

Columns are level-2 sections. A level-1 heading starts a new board:
the columns below it, up to the next level-1 heading, belong to it.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field

import yaml
from markdown_it import MarkdownIt

from wikiban.ids import generate_task_id

TASK_RE = re.compile(r"^(\s*)([-*+])\s+\[([ xX])\]\s+(.+)$")
ID_COMMENT_RE = re.compile(r"<!--\s*task-id:\s*([\w-]+)\s*-->")
HEADING_RE = re.compile(r"^##(?!#)\s+(.+?)\s*$")
BOARD_HEADING_RE = re.compile(r"^#(?!#)\s+(.+?)\s*$")

_md = MarkdownIt("gfm-like")

_NEWLINE_RE = re.compile(r"\r?\n")

# Applied in order; each pattern keeps only the inner text.
_FORMATTING = [
    re.compile(r"\*\*(.+?)\*\*"),
    re.compile(r"__(.+?)__"),
    re.compile(r"\*([^*]+)\*"),
    re.compile(r"_([^_]+)_"),
    re.compile(r"==(.+?)=="),
    re.compile(r"\[([^\]]*)\]\([^)]*\)"),
    re.compile(r"`([^`]+)`"),
    re.compile(r"~~(.+?)~~"),
]
_WHITESPACE_RE = re.compile(r"\s+")


@dataclass
class TaskLine:
    """A task list item as written on one line."""

    indent: str
    list_marker: str
    checked: bool
    content: str
    task_id: str | None

    @property
    def indent_level(self) -> int:
        return len(self.indent) // 2


@dataclass
class TaskRecord:
    """A task found in the source markdown, with its identity."""

    id: str
    indent_level: int
    checked: bool
    content: str
    list_marker: str = "-"
    line_index: int = 0
    indent: str = ""
    has_id: bool = True
    normalized: str = field(init=False)

    def __post_init__(self):
        self.normalized = match_text(self.content)


@dataclass
class Section:
    """A heading and the lines up to the next one.

    ``group`` is the title of the board (level-1 heading) the section
    sits under, "" above the first one. ``start`` is the index of the
    heading line in the page.
    """

    header: str
    title: str
    body: list[str]
    is_column: bool
    level: int = 2
    group: str = ""
    start: int = 0

    @property
    def lines(self) -> list[str]:
        return [self.header, *self.body]


@dataclass
class Document:
    """A markdown page split into preamble and sections.

    The preamble runs up to the first level-2 heading; ``preamble_group``
    is the board a level-1 heading inside it opens.
    """

    preamble: list[str]
    sections: list[Section]
    meta: dict
    newline: str = "\n"
    terminated: bool = True
    preamble_group: str = ""


def render_text(markdown: str) -> str:
    """Render inline task markdown to the plain text a reader sees.

    Inline HTML, task-id comments included, is not part of the text.
    """
    parts: list[str] = []
    for token in _md.parseInline(markdown):
        for child in token.children or []:
            if child.type in ("text", "code_inline", "image"):
                parts.append(child.content)
            elif child.type in ("softbreak", "hardbreak"):
                parts.append(" ")
    return " ".join("".join(parts).split())


def match_text(markdown: str) -> str:
    """The form task markdown is compared in: rendered, then normalized.

    Display text is already rendered, so comparing source content in
    this form resolves entities and escapes the same way on both sides.
    """
    return normalize_content(render_text(markdown))


def normalize_content(text: str) -> str:
    """Reduce task markdown to plain text for matching.

    Strips bold, italic, highlight, links, inline code and
    strikethrough markup, then collapses whitespace.
    """
    for pattern in _FORMATTING:
        text = pattern.sub(r"\1", text)
    return _WHITESPACE_RE.sub(" ", text).strip()


def strip_id_comment(content: str) -> str:
    """Remove any task-id comment from task content."""
    return ID_COMMENT_RE.sub("", content).strip()


def id_comment(task_id: str) -> str:
    return f"<!-- task-id: {task_id} -->"


def parse_task_line(line: str) -> TaskLine | None:
    """Parse one line as a task list item, or None if it is not one."""
    match = TASK_RE.match(line.rstrip("\r"))
    if not match:
        return None
    indent, marker, mark, rest = match.groups()
    id_match = ID_COMMENT_RE.search(rest)
    content = strip_id_comment(rest)
    if not content:
        return None
    return TaskLine(
        indent=indent,
        list_marker=marker,
        checked=mark in "xX",
        content=content,
        task_id=id_match.group(1) if id_match else None,
    )


def split_lines(text: str) -> tuple[list[str], str, bool]:
    """Split text into lines. Returns (lines, newline, terminated)."""
    newline = "\r\n" if "\r\n" in text else "\n"
    if not text:
        return [], newline, False
    lines = _NEWLINE_RE.split(text)
    terminated = lines[-1] == ""
    if terminated:
        lines.pop()
    return lines, newline, terminated


def join_lines(lines: list[str], newline: str = "\n", terminated: bool = True) -> str:
    text = newline.join(lines)
    return text + newline if terminated and lines else text


def extract_tasks(markdown: str, columns_only: bool = False) -> list[TaskRecord]:
    """Extract every task list item from markdown, in document order.

    Tasks keep the ID of their task-id comment. Tasks without one, or
    whose ID already appeared earlier in the document, get a fresh ID.
    Lines that are not well-formed tasks are skipped. With
    ``columns_only`` only the lines of column sections are read.
    """
    lines, _, _ = split_lines(markdown)
    wanted = column_line_indexes(split_document(markdown)) if columns_only else None
    records: list[TaskRecord] = []
    seen: set[str] = set()
    for index, line in enumerate(lines):
        if wanted is not None and index not in wanted:
            continue
        task = parse_task_line(line)
        if task is None:
            continue
        has_id = task.task_id is not None and task.task_id not in seen
        task_id = task.task_id if has_id else generate_task_id()
        seen.add(task_id)
        records.append(
            TaskRecord(
                id=task_id,
                indent_level=task.indent_level,
                checked=task.checked,
                content=task.content,
                list_marker=task.list_marker,
                line_index=index,
                indent=task.indent,
                has_id=has_id,
            )
        )
    return records


def split_document(markdown: str) -> Document:
    """Split markdown into preamble (front-matter included) and level-2 sections.

    Headings inside the front-matter or fenced code blocks are ignored.
    A level-2 section whose non-blank body lines are all tasks is a
    column. Once sections have begun, a level-1 heading is a section of
    its own, never a column.
    """
    lines, newline, terminated = split_lines(markdown)
    start, meta = _front_matter(lines)

    preamble = lines[:start]
    sections: list[Section] = []
    group = preamble_group = ""
    in_code_fence = False

    for index in range(start, len(lines)):
        line = lines[index]
        if line.startswith("```"):
            in_code_fence = not in_code_fence
        match = board = None
        if not in_code_fence:
            match = HEADING_RE.match(line)
            board = None if match else BOARD_HEADING_RE.match(line)
        if board:
            group = board.group(1)
        if match or (board and sections):
            heading = match or board
            level = 2 if match else 1
            sections.append(Section(line, heading.group(1), [], level == 2, level=level, group=group, start=index))
        elif sections:
            sections[-1].body.append(line)
        else:
            preamble.append(line)
            preamble_group = group

    for section in sections:
        section.is_column = section.level == 2 and all(
            not line.strip() or parse_task_line(line) for line in section.body
        )

    return Document(
        preamble, sections, meta, newline=newline, terminated=terminated, preamble_group=preamble_group
    )


def column_line_indexes(document: Document) -> set[int]:
    """Indexes of the body lines of every column section."""
    indexes: set[int] = set()
    for section in document.sections:
        if section.is_column:
            indexes.update(range(section.start + 1, section.start + 1 + len(section.body)))
    return indexes


def _front_matter(lines: list[str]) -> tuple[int, dict]:
    """Find YAML front-matter. Returns (index of first line after it, meta)."""
    if not lines or lines[0] != "---":
        return 0, {}
    for end in range(1, len(lines)):
        if lines[end] == "---":
            break
    else:
        return 0, {}

    try:
        meta = yaml.safe_load("\n".join(lines[1:end])) or {}
    except yaml.YAMLError:
        meta = {}
    if not isinstance(meta, dict):
        meta = {}
    return end + 1, meta
