from hypothesis import given, strategies as st

from gitscribe.utils import resolve_full_path, resolve_local_path

# Upper-case root never collides with the lower-case relative paths below
ROOT = "/SRV/REPO"

segment = st.text(alphabet="abcdefghijklmnopqrstuvwxyz0123456789._-", min_size=1)
relative_path = st.lists(segment, min_size=1, max_size=5).map("/".join)


@given(path=relative_path)
def test_full_then_local_returns_relative_path(path: str) -> None:
    assert resolve_local_path(ROOT, resolve_full_path(ROOT, path)) == path


@given(path=relative_path)
def test_full_path_is_under_root(path: str) -> None:
    assert resolve_full_path(ROOT, path) == f"{ROOT}/{path}"


@given(path=relative_path)
def test_full_path_is_idempotent(path: str) -> None:
    full = resolve_full_path(ROOT, path)
    assert resolve_full_path(ROOT, full) == full


@given(path=relative_path, leading=st.integers(min_value=0, max_value=3))
def test_local_path_strips_leading_separators(path: str, leading: int) -> None:
    assert resolve_local_path(ROOT, "/" * leading + path) == path


@given(path=relative_path, trailing=st.integers(min_value=0, max_value=3))
def test_trailing_separators_on_root_are_ignored(path: str, trailing: int) -> None:
    root = ROOT + "/" * trailing
    assert resolve_full_path(root, path) == f"{ROOT}/{path}"


@given(paths=st.lists(relative_path, max_size=8))
def test_sequences_keep_length_and_order(paths: list[str]) -> None:
    full = resolve_full_path(ROOT, paths)

    assert full == [f"{ROOT}/{p}" for p in paths]
    assert resolve_local_path(ROOT, full) == paths
