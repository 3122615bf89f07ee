"""Tests for the drag-and-drop state machine."""

import pytest

from wikiban.model import Board, Column, DragError, DragSession, DragState, DropZone, TaskNode, drop_zone


def make_board():
    a = TaskNode("A", 0, task_id="a")
    a1 = TaskNode("A1", 1, task_id="a1")
    b = TaskNode("B", 0, task_id="b")
    c = TaskNode("C", 0, task_id="c")
    todo = Column("Todo", [a, a1, b])
    done = Column("Done", [c])
    return Board(columns=[todo, done]), todo, done, (a, a1, b, c)


@pytest.mark.parametrize(
    "y, zone",
    [
        (0, DropZone.BEFORE),
        (0.9, DropZone.BEFORE),
        (1, DropZone.CHILD),
        (1.5, DropZone.CHILD),
        (2, DropZone.CHILD),
        (2.5, DropZone.AFTER),
    ],
)
def test_drop_zone(y, zone):
    assert drop_zone(y, 0, 3) is zone


def test_start_claims_board():
    board, _, _, (a, *_) = make_board()
    drag = DragSession(board, a)
    drag.start()
    assert drag.state is DragState.DRAGGING
    assert board.drag is drag


def test_only_one_drag_at_a_time():
    board, _, _, (a, _, b, _) = make_board()
    DragSession(board, a).start()
    with pytest.raises(DragError):
        DragSession(board, b).start()


def test_cannot_restart_without_end():
    board, _, _, (a, *_) = make_board()
    drag = DragSession(board, a)
    drag.start()
    drag.cancel()
    with pytest.raises(DragError):
        drag.start()
    drag.end()
    drag.start()
    assert drag.state is DragState.DRAGGING


def test_dragged_includes_descendants():
    board, _, _, (a, a1, _, _) = make_board()
    assert DragSession(board, a).dragged == [a, a1]


def test_hover_over_self_or_descendant_has_no_target():
    board, todo, _, (a, a1, _, _) = make_board()
    drag = DragSession(board, a)
    drag.start()
    assert drag.hover(todo, a, y=0, top=0, height=3) is None
    assert drag.hover(todo, a1, y=0, top=0, height=3) is None


def test_hover_before_idle_is_ignored():
    board, todo, _, (a, _, b, _) = make_board()
    drag = DragSession(board, a)
    assert drag.hover(todo, b) is None


def test_drop_before():
    board, todo, done, (a, a1, b, c) = make_board()
    drag = DragSession(board, a)
    drag.start()
    drag.hover(done, c, y=0, top=0, height=3)
    assert drag.drop()
    assert drag.state is DragState.DROPPED
    assert done.tasks == [a, a1, c]
    drag.end()
    assert board.drag is None
    assert drag.state is DragState.IDLE


def test_drop_after():
    board, todo, done, (a, a1, b, c) = make_board()
    drag = DragSession(board, b)
    drag.start()
    drag.hover(done, c, y=2.9, top=0, height=3)
    assert drag.drop()
    assert done.tasks == [c, b]
    assert b.indent_level == 0


def test_drop_child():
    board, todo, done, (a, a1, b, c) = make_board()
    drag = DragSession(board, c)
    drag.start()
    drag.hover(todo, b, y=11.5, top=10, height=3)
    assert drag.drop()
    assert todo.tasks == [a, a1, b, c]
    assert c.indent_level == 1


def test_drop_append():
    board, todo, done, (a, a1, b, c) = make_board()
    drag = DragSession(board, a)
    drag.start()
    drag.hover(done)
    assert drag.target.zone is DropZone.APPEND
    assert drag.drop()
    assert done.tasks == [c, a, a1]


def test_drop_without_target_cancels():
    board, todo, _, (a, *_) = make_board()
    drag = DragSession(board, a)
    drag.start()
    assert drag.drop() is False
    assert drag.state is DragState.CANCELLED
    assert not a.was_moved


def test_drop_in_place_changes_nothing():
    board, todo, _, (a, a1, b, _) = make_board()
    drag = DragSession(board, a)
    drag.start()
    drag.hover(todo, b, y=0, top=0, height=3)
    assert drag.drop() is False
    assert todo.tasks == [a, a1, b]


def test_end_while_dragging_cancels():
    board, _, _, (a, *_) = make_board()
    drag = DragSession(board, a)
    drag.start()
    drag.end()
    assert board.drag is None
    assert drag.state is DragState.IDLE
    DragSession(board, a).start()
