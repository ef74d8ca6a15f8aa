"""Shared test fixtures for gitscribe tests."""

import os
import subprocess
from collections.abc import Callable
from pathlib import Path

import pytest
from rich.console import Console


def run_git(path: Path, *args: str) -> str:
    """Run a git command in ``path`` and return its stdout."""
    result = subprocess.run(
        ["git", *args],
        cwd=str(path),
        capture_output=True,
        check=True,
        text=True,
    )
    return result.stdout


def init_git_repo(path: Path) -> None:
    """Initialize a git repository with a local identity and no signing."""
    path.mkdir(parents=True, exist_ok=True)
    run_git(path, "init", "--initial-branch=main")
    run_git(path, "config", "user.email", "test@example.com")
    run_git(path, "config", "user.name", "Test User")
    run_git(path, "config", "commit.gpgsign", "false")


@pytest.fixture(autouse=True)
def isolated_environment(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep user config, global git config and GITSCRIBE_* variables out of tests."""
    for key in list(os.environ):
        if key.startswith("GITSCRIBE_"):
            monkeypatch.delenv(key)

    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.setenv("XDG_CONFIG_HOME", str(home / ".config"))
    monkeypatch.setenv("GIT_CONFIG_NOSYSTEM", "1")
    monkeypatch.delenv("GIT_DIR", raising=False)
    monkeypatch.delenv("GIT_WORK_TREE", raising=False)


@pytest.fixture
def git() -> Callable[..., str]:
    """Return a helper running git in a directory: ``git(path, "log")``."""
    return run_git


@pytest.fixture
def empty_git_repo(tmp_path: Path) -> Path:
    """Create a git repository without any commits."""
    root = tmp_path / "repo"
    init_git_repo(root)
    return root


@pytest.fixture
def git_repo(empty_git_repo: Path) -> Path:
    """Create a git repository with one committed README.md."""
    (empty_git_repo / "README.md").write_text("# Test\n")
    run_git(empty_git_repo, "add", "README.md")
    run_git(empty_git_repo, "commit", "-m", "Initial commit")
    return empty_git_repo


@pytest.fixture
def console() -> Console:
    return Console(
        width=70,
        force_terminal=True,
        highlight=False,
        color_system=None,
        legacy_windows=False,
    )
