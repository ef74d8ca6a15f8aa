"""Integration tests for configuration discovery inside real repositories."""

from pathlib import Path

import pytest

from gitscribe.config import (
    ConfigSourceName,
    discover_sources,
    get_git_dir,
    load_config,
)
from gitscribe.repository import Repository


class TestGetGitDir:
    def test_from_working_tree_root(self, git_repo: Path) -> None:
        assert get_git_dir(git_repo) == (git_repo / ".git").resolve()

    def test_from_subdirectory(self, git_repo: Path) -> None:
        nested = git_repo / "a" / "b"
        nested.mkdir(parents=True)

        assert get_git_dir(nested) == (git_repo / ".git").resolve()

    def test_outside_repository(self, tmp_path: Path) -> None:
        plain = tmp_path / "plain"
        plain.mkdir()

        assert get_git_dir(plain) is None


class TestRepositoryConfig:
    def test_repository_file_applies(self, git_repo: Path) -> None:
        (git_repo / ".git" / "gitscribe.toml").write_text(
            'file_mode = "0600"\n[logging]\nlevel = "debug"\n'
        )

        config = load_config(git_repo)

        assert config.file_mode == 0o600
        assert config.logging.level == "debug"

    def test_env_overrides_repository_file(
        self, git_repo: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        (git_repo / ".git" / "gitscribe.toml").write_text('file_mode = "0600"\n')
        monkeypatch.setenv("GITSCRIBE_FILE_MODE", "0640")

        assert load_config(git_repo).file_mode == 0o640

    def test_repository_file_overrides_user_file(self, git_repo: Path) -> None:
        user_dir = Path.home() / ".config" / "gitscribe"
        user_dir.mkdir(parents=True)
        (user_dir / "config.toml").write_text(
            'file_mode = "0600"\nauthor = "User <user@example.com>"\n'
        )
        (git_repo / ".git" / "gitscribe.toml").write_text('file_mode = "0640"\n')

        config = load_config(git_repo)
        names = [source.name for source in discover_sources(git_repo)]

        assert config.file_mode == 0o640
        assert config.author == "User <user@example.com>"
        assert names[:2] == [ConfigSourceName.USER, ConfigSourceName.REPOSITORY]

    def test_config_reaches_repository(self, git_repo: Path) -> None:
        (git_repo / ".git" / "gitscribe.toml").write_text('directory_mode = "0700"\n')

        repo = Repository.open(git_repo, config=load_config(git_repo))

        assert repo.directory_mode == 0o700
