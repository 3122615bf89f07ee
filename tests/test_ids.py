"""Tests for task ID generation and header disambiguation."""

import re

from wikiban.ids import disambiguate, display_titles, generate_task_id


def test_generate_task_id_format():
    assert re.fullmatch(r"task_\d{13}_[0-9a-z]{9}", generate_task_id())


def test_generate_task_id_unique():
    ids = {generate_task_id() for _ in range(100)}
    assert len(ids) == 100


def test_disambiguate_unique_titles_unchanged():
    assert disambiguate(["Todo", "Doing", "Done"]) == ["Todo", "Doing", "Done"]


def test_disambiguate_duplicates():
    assert disambiguate(["Todo", "Todo", "Done", "Todo"]) == ["Todo", "Todo (2)", "Done", "Todo (3)"]


def test_disambiguate_case_insensitive():
    assert disambiguate(["Todo", "todo"]) == ["Todo", "todo (2)"]


def test_display_titles_strips_added_suffix():
    assert display_titles(["Todo", "Todo (2)", "Todo (3)"]) == ["Todo", "Todo", "Todo"]


def test_display_titles_keeps_real_suffix():
    assert display_titles(["Phase (2)"]) == ["Phase (2)"]
    assert display_titles(["Todo", "Todo (3)"]) == ["Todo", "Todo (3)"]


def test_display_titles_reverses_disambiguate():
    titles = ["A", "B", "a", "A", "C"]
    assert display_titles(disambiguate(titles)) == titles
