"""Tests for 'wikiban board' commands."""

import json
from argparse import Namespace

import pytest

from tests.conftest import BOARD_PAGE
from wikiban.cli.board import board_get, board_stamp, board_summary
from wikiban.parser import extract_tasks

DOC = "projects/board"


def test_board_summary(wiki_cli, capsys):
    args = Namespace(doc=DOC, json=False)
    assert board_summary(args) == 0

    out = capsys.readouterr().out
    assert DOC in out
    assert "Todo" in out
    assert "3 tasks, 0 done" in out
    assert "1 task, 1 done" in out


def test_board_summary_json(wiki_cli, capsys):
    args = Namespace(doc=DOC, json=True)
    assert board_summary(args) == 0

    data = json.loads(capsys.readouterr().out)
    assert data["meta"] == {"layout": "kanban"}
    assert data["columns"] == [
        {"name": "Todo", "tasks": 3, "done": 0},
        {"name": "Done", "tasks": 1, "done": 1},
    ]


def test_board_get(wiki_cli, capsys):
    args = Namespace(doc=DOC, json=False)
    assert board_get(args) == 0
    assert capsys.readouterr().out == BOARD_PAGE


def test_board_get_missing_page(wiki_cli, capsys):
    args = Namespace(doc="nowhere", json=False)
    with pytest.raises(SystemExit) as exc_info:
        board_get(args)
    assert exc_info.value.code == 1
    assert "error:" in capsys.readouterr().err


def test_board_get_missing_page_json(wiki_cli, capsys):
    args = Namespace(doc="nowhere", json=True)
    with pytest.raises(SystemExit):
        board_get(args)
    assert "404" in json.loads(capsys.readouterr().err)["error"]


def test_board_stamp_nothing_to_do(wiki_cli, capsys):
    args = Namespace(doc=DOC, json=True)
    assert board_stamp(args) == 0
    assert json.loads(capsys.readouterr().out)["stamped"] == 0
    assert wiki_cli.saved == []


def test_board_stamp_writes_ids(wiki_cli, capsys):
    wiki_cli.pages[DOC] = "## Todo\n- [ ] One\n- [ ] Two\n"
    args = Namespace(doc=DOC, json=False)
    assert board_stamp(args) == 0
    assert "Stamped 2 task(s)" in capsys.readouterr().out
    assert all(r.has_id for r in extract_tasks(wiki_cli.pages[DOC]))
