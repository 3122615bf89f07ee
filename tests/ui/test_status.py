"""Tests for the save status indicator."""

from wikiban.ui.status import ICON_ERROR, ICON_IDLE, ICON_SAVED, ICON_SAVING, status_label


def test_idle_label():
    assert status_label("idle") == ICON_IDLE


def test_saving_label():
    assert status_label("saving") == f"{ICON_SAVING} saving…"


def test_saved_label():
    assert status_label("saved") == f"{ICON_SAVED} saved"


def test_error_label():
    assert status_label("error") == f"{ICON_ERROR} error"


def test_unknown_status_label():
    assert status_label("weird") == f"{ICON_IDLE} weird"
