"""Shared fixtures for CLI tests."""

import pytest

import wikiban.cli._common


@pytest.fixture
def wiki_cli(wiki, monkeypatch):
    """Route every CLI handler's client to the fake wiki."""
    monkeypatch.setattr(wikiban.cli._common, "build_client", lambda args: wiki.client())
    return wiki
