"""Column mutation operations for wiki boards.

Duplicate titles are counted per page board: two "Todo" columns under
different level-1 headings are both stored as ``## Todo``.
"""

from __future__ import annotations

from wikiban.ids import disambiguate
from wikiban.model.board import Board, Column, column_key


def _clean_title(title: str) -> str:
    title = " ".join(title.split())
    if not title:
        raise ValueError("column title is empty")
    return title


def _neighbour_group(board: Board, index: int) -> str:
    """Board of the column just before index, or just after it at the front."""
    if index > 0:
        return board.columns[index - 1].group
    if board.columns:
        return board.columns[0].group
    return board.default_group


def create_column(board: Board, title: str, index: int | None = None, group: str | None = None) -> Column:
    """Create a new, empty column. Appended unless index is given.

    The column joins ``group``, or the board of the column it lands
    next to. Given a group and no index, it goes after that group's last
    column. Duplicate titles are allowed; they are stored with a
    numeric suffix.
    """
    if index is None:
        index = len(board.columns)
        if group is not None:
            members = [i for i, c in enumerate(board.columns) if c.group.lower() == group.lower()]
            if members:
                index = members[-1] + 1
                group = board.columns[members[-1]].group
    if group is None:
        group = _neighbour_group(board, index)
    column = Column(title=_clean_title(title), group=group)
    board.columns.insert(index, column)
    return column


def rename_column(board: Board, column: Column, title: str) -> None:
    """Rename a column. Its stored header is replaced on the next save."""
    column.title = _clean_title(title)


def move_column(board: Board, column: Column, new_index: int) -> None:
    """Move column to new_index in the board's column order.

    A column moved among the columns of another page board joins it;
    its old section is dropped on the next save and it is written anew.
    """
    board.columns.remove(column)
    new_index = max(0, min(new_index, len(board.columns)))
    group = _neighbour_group(board, new_index) if board.columns else column.group
    board.columns.insert(new_index, column)
    if group.lower() != column.group.lower():
        if column.source_header is not None:
            board.removed_headers.add(column_key(column.group, column.source_header))
            column.source_header = None
        column.group = group


def delete_column(board: Board, column: Column) -> None:
    """Remove a column and its tasks. Its section is dropped on the next save."""
    board.columns.remove(column)
    if column.source_header is not None:
        board.removed_headers.add(column_key(column.group, column.source_header))


def is_duplicate(board: Board, column: Column) -> bool:
    """True when an earlier column of the same page board has the same title."""
    key = column_key(column.group, column.title)
    for other in board.columns:
        if other is column:
            return False
        if column_key(other.group, other.title) == key:
            return True
    return False


def storage_headers(columns: list[Column]) -> list[str]:
    """Headers the columns are saved under, duplicates suffixed with (N).

    Duplicates are counted within each page board.
    """
    headers = [""] * len(columns)
    groups: dict[str, list[int]] = {}
    for i, column in enumerate(columns):
        groups.setdefault(column.group.lower(), []).append(i)
    for indexes in groups.values():
        for i, header in zip(indexes, disambiguate([columns[i].title for i in indexes])):
            headers[i] = header
    return headers
