"""Repository facade.

This package provides the Repository class that drives a git working
directory through the git command line, together with its result models and
a scripted runner for tests.

Classes:
    Repository: Writes, deletes, renames and batches of changes as commits.
    Transaction: Handle passed to the callable of ``Repository.transactional``.
    FakeGitBinary: CommandRunner returning scripted results.

Models:
    StatusEntry: One decoded status line.
    TransactionState: Lifecycle of a Transaction.
    ResetMode: What ``Repository.reset`` discards.

Example:
    >>> from pathlib import Path
    >>> from gitscribe.repository import Repository
    >>> with Repository.open("/srv/content") as repo:
    ...     def batch(tx):
    ...         tx.commit_message = "Publish drafts"
    ...         Path(tx.resolve_full_path("drafts/a.md")).write_text("a")
    ...     repo.transactional(batch).commit_hash
"""

from gitscribe.repository._fake import FakeGitBinary, RecordedCall
from gitscribe.repository._models import ResetMode, StatusEntry, TransactionState
from gitscribe.repository._parsing import (
    parse_status,
    parse_status_line,
    split_records,
    unquote_path,
)
from gitscribe.repository._repository import FileData, Repository
from gitscribe.repository._transaction import Transaction

__all__ = [
    "FakeGitBinary",
    "FileData",
    "RecordedCall",
    "Repository",
    "ResetMode",
    "StatusEntry",
    "Transaction",
    "TransactionState",
    "parse_status",
    "parse_status_line",
    "split_records",
    "unquote_path",
]
