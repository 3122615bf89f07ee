"""Settings stored in git config under the [wikiban] section."""

from __future__ import annotations

from pathlib import Path
from typing import Any

from git import GitConfigParser, InvalidGitRepositoryError, NoSuchPathError, Repo
from git.config import get_config_path

SECTION = "wikiban"

# Session token handed to a served app, taking precedence over git config.
SESSION_ENV = "WIKIBAN_SESSION"

WIKIBAN_DEFAULTS = {
    "url": "http://localhost:8080",
    "session": "",
    "cookie-name": "session_token",
}


def _python_key(git_key: str) -> str:
    """Convert git-style key (hyphenated) to Python-style (underscored)."""
    return git_key.replace("-", "_")


def _git_key(python_key: str) -> str:
    """Convert Python-style key (underscored) to git-style (hyphenated)."""
    return python_key.replace("_", "-")


def setting_names() -> list[str]:
    """Python-style names of the known settings."""
    return [_python_key(k) for k in WIKIBAN_DEFAULTS]


def _config_reader(path: str | Path):
    """Repository config when path is inside a repo, else system and global files."""
    try:
        repo = Repo(path, search_parent_directories=True)
    except (InvalidGitRepositoryError, NoSuchPathError):
        files = [get_config_path("system"), get_config_path("global")]
        return GitConfigParser(files, read_only=True)
    return repo.config_reader()


def read_config(path: str | Path = ".") -> dict[str, Any]:
    """Read the wikiban settings, with defaults for missing keys.

    Keys are returned Python-style (cookie-name → cookie_name).
    """
    reader = _config_reader(path)
    settings = {_python_key(k): v for k, v in WIKIBAN_DEFAULTS.items()}
    if reader.has_section(SECTION):
        for git_k, raw in reader.items(SECTION):
            settings[_python_key(git_k)] = raw
    return settings


def write_config_key(key: str, value: Any, path: str | Path | None = None) -> None:
    """Write one key. Goes to the repository config when path is a repo, else global."""
    git_k = _git_key(key)
    if path is not None:
        writer = Repo(path, search_parent_directories=True).config_writer("repository")
    else:
        writer = GitConfigParser(get_config_path("global"), read_only=False)
    writer.set_value(SECTION, git_k, str(value))
    writer.release()
