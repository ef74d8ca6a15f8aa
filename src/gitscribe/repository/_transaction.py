"""Transaction handle passed to a batch of repository mutations."""

from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, overload

from gitscribe.repository._models import TransactionState
from gitscribe.utils._paths import StrPath

if TYPE_CHECKING:
    from gitscribe.repository._repository import Repository


@dataclass(eq=False)
class Transaction[T]:
    """One in-flight batch started by :meth:`Repository.transactional`.

    The batch callable receives the transaction, changes files directly on
    disk, and may set ``commit_message``. The repository fills in ``result``
    and ``commit_hash`` once the batch has been committed.

    Attributes:
        repository: The repository the batch runs against.
        commit_message: Message for the batch commit; empty selects a default.
        result: Value returned by the batch callable.
        commit_hash: Hash of the batch commit, set only after it succeeds.
        state: Current lifecycle state.
    """

    repository: "Repository" = field(repr=False)
    commit_message: str = ""
    result: T | None = None
    commit_hash: str | None = None
    state: TransactionState = TransactionState.ACTIVE

    @property
    def root(self) -> str:
        """Root directory of the repository."""
        return self.repository.root

    @overload
    def resolve_full_path(self, path: StrPath) -> str: ...

    @overload
    def resolve_full_path(self, path: Sequence[StrPath]) -> list[str]: ...

    def resolve_full_path(self, path: StrPath | Sequence[StrPath]) -> str | list[str]:
        """Resolve ``path`` to an absolute path under the repository root."""
        return self.repository.resolve_full_path(path)

    @overload
    def resolve_local_path(self, path: StrPath) -> str: ...

    @overload
    def resolve_local_path(self, path: Sequence[StrPath]) -> list[str]: ...

    def resolve_local_path(self, path: StrPath | Sequence[StrPath]) -> str | list[str]:
        """Resolve ``path`` relative to the repository root."""
        return self.repository.resolve_local_path(path)
