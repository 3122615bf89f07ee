"""Tests for settings stored in git config."""

import pytest
from git import Repo

from wikiban.config import read_config, setting_names, write_config_key


@pytest.fixture(autouse=True)
def isolated_home(tmp_path, monkeypatch):
    """Point the global git config at an empty temporary home."""
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.delenv("XDG_CONFIG_HOME", raising=False)
    return home


@pytest.fixture
def temp_repo(tmp_path):
    repo_path = tmp_path / "repo"
    repo_path.mkdir()
    Repo.init(repo_path)
    return repo_path


def test_setting_names():
    assert setting_names() == ["url", "session", "cookie_name"]


def test_defaults(temp_repo):
    assert read_config(temp_repo) == {
        "url": "http://localhost:8080",
        "session": "",
        "cookie_name": "session_token",
    }


def test_repository_value(temp_repo):
    write_config_key("cookie_name", "sid", temp_repo)
    reader = Repo(temp_repo).config_reader("repository")
    assert reader.get_value("wikiban", "cookie-name") == "sid"
    assert read_config(temp_repo)["cookie_name"] == "sid"


def test_repository_config_found_from_subdirectory(temp_repo):
    write_config_key("url", "http://wiki.test", temp_repo)
    sub = temp_repo / "docs"
    sub.mkdir()
    assert read_config(sub)["url"] == "http://wiki.test"


def test_global_value_outside_repo(tmp_path, isolated_home):
    write_config_key("session", "abc123")
    assert (isolated_home / ".gitconfig").exists()
    outside = tmp_path / "outside"
    outside.mkdir()
    assert read_config(outside)["session"] == "abc123"
