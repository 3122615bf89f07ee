"""Tests for the confirm and prompt dialogs."""

import pytest
from textual.app import App
from textual.widgets import Input

from wikiban.ui.dialogs import ConfirmScreen, PromptScreen


class DialogApp(App):
    """Minimal app that records a dialog's result."""

    def __init__(self, screen):
        super().__init__()
        self.dialog = screen
        self.results = []

    def on_mount(self) -> None:
        self.push_screen(self.dialog, self.results.append)


@pytest.mark.asyncio
async def test_confirm_yes_key():
    app = DialogApp(ConfirmScreen("Sure?"))
    async with app.run_test() as pilot:
        await pilot.press("y")
        await pilot.pause()
    assert app.results == [True]


@pytest.mark.asyncio
async def test_confirm_escape_is_no():
    app = DialogApp(ConfirmScreen("Sure?"))
    async with app.run_test() as pilot:
        await pilot.press("escape")
        await pilot.pause()
    assert app.results == [False]


@pytest.mark.asyncio
async def test_confirm_yes_button():
    app = DialogApp(ConfirmScreen("Sure?"))
    async with app.run_test() as pilot:
        await pilot.click("#yes")
        await pilot.pause()
    assert app.results == [True]


@pytest.mark.asyncio
async def test_prompt_submits_stripped_text():
    app = DialogApp(PromptScreen("Name?", "  old  "))
    async with app.run_test() as pilot:
        await pilot.pause()
        assert app.screen.query_one(Input).value == "  old  "
        await pilot.press("enter")
        await pilot.pause()
    assert app.results == ["old"]


@pytest.mark.asyncio
async def test_prompt_blank_is_none():
    app = DialogApp(PromptScreen("Name?"))
    async with app.run_test() as pilot:
        await pilot.pause()
        await pilot.press("enter")
        await pilot.pause()
    assert app.results == [None]


@pytest.mark.asyncio
async def test_prompt_escape_is_none():
    app = DialogApp(PromptScreen("Name?", "x"))
    async with app.run_test() as pilot:
        await pilot.pause()
        await pilot.press("escape")
        await pilot.pause()
    assert app.results == [None]
