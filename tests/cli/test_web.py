"""Tests for 'wikiban web' and how the served app gets its session."""

import os
from argparse import Namespace

import pytest

import wikiban.cli._common
import wikiban.cli.web
from wikiban.cli._common import build_client
from wikiban.cli.web import serve_command, web


@pytest.fixture(autouse=True)
def isolated_home(tmp_path, monkeypatch):
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.delenv("XDG_CONFIG_HOME", raising=False)
    monkeypatch.chdir(tmp_path)
    return home


class FakeServer:
    instances = []

    def __init__(self, command, host, port, title):
        self.command = command
        self.served = False
        FakeServer.instances.append(self)

    def serve(self):
        self.served = True


def test_serve_command_leaves_out_the_session(monkeypatch):
    monkeypatch.setattr(wikiban.cli.web.shutil, "which", lambda name: "/usr/bin/wikiban")
    command = serve_command(Namespace(url="http://wiki.test", session="secret", doc="projects/board"))
    assert command == "/usr/bin/wikiban --url http://wiki.test projects/board"


def test_web_hands_session_over_in_environment(monkeypatch, capsys):
    monkeypatch.setenv("WIKIBAN_SESSION", "old")
    monkeypatch.setattr(wikiban.cli.web.shutil, "which", lambda name: "/usr/bin/wikiban")
    monkeypatch.setattr(wikiban.cli.web, "Server", FakeServer)
    args = Namespace(url=None, session="secret", doc="projects/board", host="localhost", port=8000)

    assert web(args) == 0

    server = FakeServer.instances[-1]
    assert server.served
    assert "secret" not in server.command
    assert os.environ["WIKIBAN_SESSION"] == "secret"
    assert "serving projects/board at http://localhost:8000" in capsys.readouterr().out


def test_web_needs_wikiban_on_path(monkeypatch, capsys):
    monkeypatch.setattr(wikiban.cli.web.shutil, "which", lambda name: None)
    args = Namespace(url=None, session=None, doc="projects/board", host="localhost", port=8000)
    assert web(args) == 1
    assert "not found on PATH" in capsys.readouterr().err


def test_session_token_sources(monkeypatch):
    made = {}
    monkeypatch.setattr(wikiban.cli._common, "WikiClient", lambda url, **kwargs: made.update(url=url, **kwargs))

    build_client(Namespace(url=None, session=None))
    assert made["session_token"] is None
    assert made["url"] == "http://localhost:8080"

    monkeypatch.setenv("WIKIBAN_SESSION", "from-env")
    build_client(Namespace(url=None, session=None))
    assert made["session_token"] == "from-env"

    build_client(Namespace(url="http://wiki.test", session="from-flag"))
    assert made["session_token"] == "from-flag"
    assert made["url"] == "http://wiki.test"
