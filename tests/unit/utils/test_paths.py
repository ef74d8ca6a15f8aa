"""Unit tests for path resolution."""

from pathlib import Path, PurePosixPath

import pytest

from gitscribe.exceptions import RepositoryPathError
from gitscribe.utils import (
    normalize_root,
    resolve_full_path,
    resolve_local_path,
    user_config_dir,
)

ROOT = "/srv/repo"


class TestNormalizeRoot:
    def test_strips_trailing_separators(self) -> None:
        assert normalize_root("/srv/repo//") == "/srv/repo"

    def test_accepts_path_objects(self) -> None:
        assert normalize_root(Path("/srv/repo")) == "/srv/repo"

    def test_keeps_filesystem_root(self) -> None:
        assert normalize_root("/") == "/"


class TestResolveLocalPath:
    def test_strips_root_prefix(self) -> None:
        assert resolve_local_path(ROOT, "/srv/repo/a/b.txt") == "a/b.txt"

    def test_strips_leading_separators_of_relative_path(self) -> None:
        assert resolve_local_path(ROOT, "/a/b.txt") == "a/b.txt"

    def test_relative_path_unchanged(self) -> None:
        assert resolve_local_path(ROOT, "a/b.txt") == "a/b.txt"

    def test_root_itself_is_empty(self) -> None:
        assert resolve_local_path(ROOT, ROOT) == ""

    def test_root_with_trailing_separator_in_root_argument(self) -> None:
        assert resolve_local_path("/srv/repo/", "/srv/repo/a.txt") == "a.txt"

    def test_prefix_only_matches_on_component_boundary(self) -> None:
        assert resolve_local_path(ROOT, "/srv/repo2/x.txt") == "srv/repo2/x.txt"

    def test_accepts_path_like(self) -> None:
        assert resolve_local_path(ROOT, PurePosixPath("/srv/repo/a.txt")) == "a.txt"

    def test_sequence_maps_element_wise(self) -> None:
        result = resolve_local_path(ROOT, ["/srv/repo/a.txt", "/b.txt", "c.txt"])
        assert result == ["a.txt", "b.txt", "c.txt"]

    def test_tuple_returns_list(self) -> None:
        assert resolve_local_path(ROOT, ("a.txt",)) == ["a.txt"]

    def test_empty_sequence(self) -> None:
        assert resolve_local_path(ROOT, []) == []

    @pytest.mark.parametrize("value", [42, None, 3.5])
    def test_rejects_non_path_values(self, value: object) -> None:
        with pytest.raises(RepositoryPathError) as exc_info:
            resolve_local_path(ROOT, value)  # pyright: ignore[reportArgumentType,reportCallIssue]

        assert exc_info.value.path == value
        assert isinstance(exc_info.value, ValueError)

    def test_rejects_non_path_value_in_sequence(self) -> None:
        with pytest.raises(RepositoryPathError):
            resolve_local_path(ROOT, ["a.txt", 7])  # pyright: ignore[reportArgumentType]


class TestResolveFullPath:
    def test_joins_relative_path(self) -> None:
        assert resolve_full_path(ROOT, "a/b.txt") == "/srv/repo/a/b.txt"

    def test_path_under_root_unchanged(self) -> None:
        assert resolve_full_path(ROOT, "/srv/repo/a/b.txt") == "/srv/repo/a/b.txt"

    def test_absolute_path_outside_root_is_rerooted(self) -> None:
        assert resolve_full_path(ROOT, "/a/b.txt") == "/srv/repo/a/b.txt"

    def test_sibling_with_common_prefix_is_rerooted(self) -> None:
        assert resolve_full_path(ROOT, "/srv/repo2/x") == "/srv/repo/srv/repo2/x"

    def test_empty_path_is_root(self) -> None:
        assert resolve_full_path(ROOT, "") == ROOT

    def test_sequence_maps_element_wise(self) -> None:
        result = resolve_full_path(ROOT, ["a.txt", "/srv/repo/b.txt"])
        assert result == ["/srv/repo/a.txt", "/srv/repo/b.txt"]

    def test_round_trip_through_local_form(self) -> None:
        for path in ["a/b.txt", "/srv/repo/a/b.txt", "/a/b.txt"]:
            local = resolve_local_path(ROOT, path)
            assert resolve_full_path(ROOT, local) == resolve_full_path(ROOT, path)


class TestUserConfigDir:
    def test_uses_xdg_config_home(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "xdg"))

        assert user_config_dir() == tmp_path / "xdg" / "gitscribe"
