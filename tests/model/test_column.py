"""Tests for column operations."""

import pytest

from wikiban.model import Board, Column, create_column, delete_column, move_column, rename_column, storage_headers
from wikiban.model.column import is_duplicate


def make_board():
    return Board(
        columns=[
            Column("Todo", source_header="Todo"),
            Column("Doing", source_header="Doing"),
            Column("Done", source_header="Done"),
        ]
    )


def titles(board):
    return [c.title for c in board.columns]


def test_create_column_appends():
    board = make_board()
    column = create_column(board, "  Later ")
    assert board.columns[-1] is column
    assert column.title == "Later"
    assert column.source_header is None


def test_create_column_at_index():
    board = make_board()
    create_column(board, "First", index=0)
    assert titles(board) == ["First", "Todo", "Doing", "Done"]


def test_create_column_empty_title():
    with pytest.raises(ValueError):
        create_column(make_board(), " ")


def test_rename_column_keeps_source_header():
    board = make_board()
    column = board.columns[0]
    rename_column(board, column, "Backlog")
    assert column.title == "Backlog"
    assert column.source_header == "Todo"


def test_move_column_clamps():
    board = make_board()
    move_column(board, board.columns[0], 10)
    assert titles(board) == ["Doing", "Done", "Todo"]
    move_column(board, board.columns[2], -3)
    assert titles(board) == ["Todo", "Doing", "Done"]


def test_delete_column_records_header():
    board = make_board()
    delete_column(board, board.columns[1])
    assert titles(board) == ["Todo", "Done"]
    assert board.removed_headers == {("", "doing")}


def test_delete_unsaved_column():
    board = make_board()
    column = create_column(board, "Fresh")
    delete_column(board, column)
    assert board.removed_headers == set()


def test_duplicates():
    board = make_board()
    dup = create_column(board, "todo")
    assert is_duplicate(board, dup)
    assert not is_duplicate(board, board.columns[0])
    assert storage_headers(board.columns) == ["Todo", "Doing", "Done", "todo (2)"]


def make_two_boards():
    return Board(
        columns=[
            Column("Todo", source_header="Todo", group="Home"),
            Column("Todo", source_header="Todo", group="Work"),
            Column("Done", source_header="Done", group="Work"),
        ]
    )


def test_duplicates_counted_per_board():
    board = make_two_boards()
    assert not any(is_duplicate(board, c) for c in board.columns)
    assert storage_headers(board.columns) == ["Todo", "Todo", "Done"]
    dup = create_column(board, "TODO", group="work")
    assert is_duplicate(board, dup)
    assert storage_headers(board.columns) == ["Todo", "Todo", "Done", "TODO (2)"]


def test_create_column_in_a_board_goes_after_its_last_column():
    board = make_two_boards()
    column = create_column(board, "Later", group="home")
    assert board.columns.index(column) == 1
    assert column.group == "Home"


def test_create_column_joins_its_neighbours_board():
    board = make_two_boards()
    assert create_column(board, "Later").group == "Work"
    assert create_column(board, "First", index=0).group == "Home"
    assert create_column(Board(default_group="Page"), "Only").group == "Page"


def test_move_column_within_its_board():
    board = make_two_boards()
    todo = board.columns[1]
    move_column(board, todo, 2)
    assert [(c.group, c.title) for c in board.columns] == [("Home", "Todo"), ("Work", "Done"), ("Work", "Todo")]
    assert todo.source_header == "Todo"
    assert board.removed_headers == set()


def test_move_column_to_another_board():
    board = make_two_boards()
    done = board.columns[2]
    move_column(board, done, 0)
    assert done.group == "Home"
    assert done.source_header is None
    assert board.removed_headers == {("work", "done")}
