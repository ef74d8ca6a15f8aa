"""Path resolution between absolute and repository-relative forms.

Both transforms are pure string operations over a repository root: no
filesystem access, no existence checks.
"""

import os
from collections.abc import Sequence
from pathlib import Path
from typing import Final, overload

from gitscribe.exceptions import RepositoryPathError

type StrPath = str | os.PathLike[str]

# Separators stripped from the front of relative paths
_SEPARATORS: Final = "".join(sorted({os.sep, "/"}))


def normalize_root(root: StrPath) -> str:
    """Return ``root`` as a string without trailing separators.

    The filesystem root itself is returned unchanged.
    """
    text = _as_text(root)
    stripped = text.rstrip(_SEPARATORS)
    return stripped or text


def _as_text(path: object) -> str:
    if isinstance(path, str):
        return path
    if isinstance(path, os.PathLike):
        return os.fspath(path)  # pyright: ignore[reportUnknownArgumentType,reportUnknownVariableType]
    msg = f'"{path!r}" is not a valid path'
    raise RepositoryPathError(msg, path=path)


def _strip_root(root: str, path: str) -> str | None:
    """Return the remainder of ``path`` after ``root``, or None if outside it.

    Matches only on a path-component boundary.
    """
    if path == root:
        return ""
    if root in {os.sep, "/"} and path.startswith(root):
        return path[len(root) :]
    if path.startswith(root) and path[len(root)] in _SEPARATORS:
        return path[len(root) :]
    return None


def _local(root: str, path: object) -> str:
    text = _as_text(path)
    remainder = _strip_root(root, text)
    if remainder is None:
        remainder = text
    return remainder.lstrip(_SEPARATORS)


def _full(root: str, path: object) -> str:
    text = _as_text(path)
    if _strip_root(root, text) is not None:
        return text
    relative = text.lstrip(_SEPARATORS)
    if not relative:
        return root
    return f"{root.rstrip(_SEPARATORS)}/{relative}"


@overload
def resolve_local_path(root: StrPath, path: StrPath) -> str: ...


@overload
def resolve_local_path(root: StrPath, path: Sequence[StrPath]) -> list[str]: ...


def resolve_local_path(
    root: StrPath, path: StrPath | Sequence[StrPath]
) -> str | list[str]:
    """Resolve a path (or each path of a sequence) relative to ``root``.

    Strips the root prefix when present, then any leading separators.

    Args:
        root: The repository root.
        path: A path, or a sequence of paths mapped element-wise.

    Returns:
        The repository-relative path, or a list of them in input order.

    Raises:
        RepositoryPathError: If a value is neither a string nor path-like.

    Example:
        >>> resolve_local_path("/srv/repo", "/srv/repo/a/b.txt")
        'a/b.txt'
        >>> resolve_local_path("/srv/repo", ["/a.txt", "b.txt"])
        ['a.txt', 'b.txt']
    """
    normalized = normalize_root(root)
    if isinstance(path, str | os.PathLike):
        return _local(normalized, path)
    if isinstance(path, Sequence):
        return [_local(normalized, p) for p in path]
    return _local(normalized, path)


@overload
def resolve_full_path(root: StrPath, path: StrPath) -> str: ...


@overload
def resolve_full_path(root: StrPath, path: Sequence[StrPath]) -> list[str]: ...


def resolve_full_path(
    root: StrPath, path: StrPath | Sequence[StrPath]
) -> str | list[str]:
    """Resolve a path (or each path of a sequence) to an absolute path under ``root``.

    Paths already under the root are returned unchanged; anything else has
    its leading separators stripped and is joined onto the root.

    Args:
        root: The repository root.
        path: A path, or a sequence of paths mapped element-wise.

    Returns:
        The absolute path, or a list of them in input order.

    Raises:
        RepositoryPathError: If a value is neither a string nor path-like.

    Example:
        >>> resolve_full_path("/srv/repo", "a/b.txt")
        '/srv/repo/a/b.txt'
        >>> resolve_full_path("/srv/repo", "/srv/repo/a/b.txt")
        '/srv/repo/a/b.txt'
    """
    normalized = normalize_root(root)
    if isinstance(path, str | os.PathLike):
        return _full(normalized, path)
    if isinstance(path, Sequence):
        return [_full(normalized, p) for p in path]
    return _full(normalized, path)


def user_config_dir() -> Path:
    """Get the platform-specific gitscribe user configuration directory."""
    import platformdirs  # noqa: PLC0415

    return platformdirs.user_config_path("gitscribe")
