from pathlib import Path

import pytest

from gitscribe.repository import FakeGitBinary, Repository


def pytest_collection_modifyitems(items: list[pytest.Item]) -> None:
    for item in items:
        if Path(item.path).is_relative_to(Path(__file__).parent):
            item.add_marker(pytest.mark.unit)


@pytest.fixture
def fake_git() -> FakeGitBinary:
    """Create a FakeGitBinary with no scripted responses."""
    return FakeGitBinary()


@pytest.fixture
def fake_repo(tmp_path: Path, fake_git: FakeGitBinary) -> Repository:
    """Create a Repository rooted in tmp_path that talks to the fake runner."""
    root = tmp_path / "repo"
    root.mkdir()
    return Repository(root, fake_git)
