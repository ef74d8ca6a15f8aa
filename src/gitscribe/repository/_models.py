"""Repository models.

This module defines the data structures returned by, and passed to, the
Repository facade.
"""

from dataclasses import dataclass
from enum import IntFlag, StrEnum

_UNTRACKED = "?"
_IGNORED = "!"
_UNMODIFIED = ""


@dataclass(frozen=True, slots=True)
class StatusEntry:
    """One decoded line of ``git status --porcelain`` output.

    State codes are git's one-character codes (``M``, ``A``, ``D``, ``R``,
    ``C``, ``U``, ``?``, ``!``); a blank column is stored as ``""``.

    Attributes:
        file: Repository-relative path (the new path for renames).
        index: Staged state code.
        worktree: Unstaged state code.
        renamed_from: Prior path when the line encodes a rename or copy.
    """

    file: str
    index: str = _UNMODIFIED
    worktree: str = _UNMODIFIED
    renamed_from: str | None = None

    @property
    def is_untracked(self) -> bool:
        """Whether git does not track the file."""
        return self.index == _UNTRACKED

    @property
    def is_ignored(self) -> bool:
        """Whether the file is ignored (only reported with ``--ignored``)."""
        return self.index == _IGNORED

    @property
    def is_staged(self) -> bool:
        """Whether the index holds a change for the file."""
        return self.index not in {_UNMODIFIED, _UNTRACKED, _IGNORED}

    @property
    def is_modified(self) -> bool:
        """Whether the working tree differs from the index."""
        return self.worktree not in {_UNMODIFIED, _UNTRACKED, _IGNORED}


class TransactionState(StrEnum):
    """Lifecycle of a Transaction."""

    ACTIVE = "active"
    COMMITTED = "committed"
    ROLLED_BACK = "rolled_back"


class ResetMode(IntFlag):
    """What :meth:`Repository.reset` discards.

    Members combine as a bit mask.
    """

    # git reset --hard
    STAGED = 1
    # git clean --force -x -d
    WORKING = 2
    ALL = STAGED | WORKING
