"""Repository facade over a git working directory.

This module provides the Repository class, which turns file writes,
deletions, renames and batches of arbitrary changes into git commits, and
exposes status, log and tree queries as plain Python values.
"""

import errno
import os
import posixpath
from collections.abc import Callable, Sequence
from pathlib import Path
from types import TracebackType
from typing import TYPE_CHECKING, ClassVar, Self, overload

from dulwich.errors import NotGitRepository
from dulwich.repo import Repo

from gitscribe.config._models import (
    DEFAULT_DIRECTORY_MODE,
    DEFAULT_FILE_MODE,
    GitScribeConfig,
    parse_mode,
)
from gitscribe.exceptions import (
    CommandFailedError,
    RepositoryEnvironmentError,
    RepositoryError,
    RepositoryNotFoundError,
    RepositoryPathError,
    RepositoryStateError,
)
from gitscribe.repository._models import ResetMode, StatusEntry, TransactionState
from gitscribe.repository._parsing import parse_status, split_records
from gitscribe.repository._transaction import Transaction
from gitscribe.utils._exec import Argument, CommandResult, CommandRunner, GitBinary
from gitscribe.utils._logging import create_logger
from gitscribe.utils._paths import (
    StrPath,
    normalize_root,
    resolve_full_path,
    resolve_local_path,
)

if TYPE_CHECKING:
    from structlog.typing import FilteringBoundLogger

# Printed by `git name-rev` when no ref reaches the commit
_UNNAMEABLE_REVISION = "undefined"

type FileData = str | bytes | Sequence[str]


class Repository:
    """A git working directory driven through the git command line.

    Every mutation is staged and committed immediately; ``transactional``
    groups arbitrary changes into one commit and rolls the working directory
    back when the batch fails.

    Construct instances with :meth:`open`, which locates the repository root
    from any path inside the working tree.

    Attributes:
        message_prefix: Label used at the start of generated commit messages.

    Example:
        >>> with Repository.open("/srv/content") as repo:
        ...     repo.write_file("pages/index.md", "# Hello\\n")
        ...     repo.rename_file("pages/index.md", "pages/home.md")
    """

    message_prefix: ClassVar[str] = "gitscribe.Repository"

    def __init__(
        self,
        root: StrPath,
        binary: CommandRunner | None = None,
        *,
        file_mode: int = DEFAULT_FILE_MODE,
        directory_mode: int = DEFAULT_DIRECTORY_MODE,
        author: str | None = None,
        logger: "FilteringBoundLogger | None" = None,
    ) -> None:
        """Wrap an existing repository root without any discovery.

        Args:
            root: Directory holding the git metadata.
            binary: Command runner; a GitBinary is created when None.
            file_mode: Mode for files the repository creates.
            directory_mode: Mode for directories the repository creates.
            author: Commit author as "Name <email>".
            logger: Structured logger; a stderr logger is created when None.
        """
        self._root: str = normalize_root(root)
        self._logger: FilteringBoundLogger = (
            logger if logger is not None else create_logger(repository=self._root)
        )
        self._binary: CommandRunner = (
            binary if binary is not None else GitBinary(logger=self._logger)
        )
        self._file_mode: int = parse_mode(file_mode)
        self._directory_mode: int = parse_mode(directory_mode)
        self._author: str | None = author

    # =========================================================================
    # Construction and discovery
    # =========================================================================

    @classmethod
    def open(
        cls,
        path: StrPath,
        *,
        binary: CommandRunner | None = None,
        create: bool | int = False,
        config: GitScribeConfig | None = None,
        logger: "FilteringBoundLogger | None" = None,
    ) -> Self:
        """Open the repository containing ``path``.

        A path naming a file opens the repository around its directory.

        Args:
            path: A directory (or file) inside the working tree.
            binary: Command runner; built from ``config.git_binary`` when None.
            create: Create the directory and run ``git init`` first. An int
                is used as the mode for the created directory.
            config: Defaults for modes, author, executable and logging. Built-in
                defaults are used when None.
            logger: Structured logger; built from ``config.logging`` when None.

        Returns:
            The opened Repository.

        Raises:
            RepositoryPathError: If ``path`` is not a usable directory.
            RepositoryNotFoundError: If no repository contains ``path``.
            RepositoryEnvironmentError: If the directory cannot be created.
            CommandFailedError: If ``git init`` fails.
        """
        if not isinstance(path, str | os.PathLike):
            msg = f'"{path!r}" is not a valid path'
            raise RepositoryPathError(msg, path=path)

        config = config if config is not None else GitScribeConfig()
        candidate = Path(os.fspath(path))
        if candidate.is_file():
            candidate = candidate.parent

        if not create and not candidate.is_dir():
            msg = f'"{candidate}" is not a valid path'
            raise RepositoryPathError(msg, path=path)

        if logger is None:
            logger = create_logger(config.logging)
        if binary is None:
            binary = GitBinary(executable=config.git_binary, logger=logger)

        if create:
            if not candidate.exists():
                mode = config.directory_mode if create is True else parse_mode(create)
                try:
                    _make_directories(candidate, mode)
                except OSError as e:
                    msg = f'"{candidate}" cannot be created'
                    raise RepositoryEnvironmentError(
                        msg, path=candidate, operation="mkdir", cause=e
                    ) from e
            elif not candidate.is_dir():
                msg = f'"{candidate}" is not a valid path'
                raise RepositoryPathError(msg, path=path)
            cls.init_repository(binary, candidate)

        root = cls.find_repository_root(candidate)
        if root is None:
            msg = f'"{candidate}" is not a valid Git repository'
            raise RepositoryNotFoundError(msg, path=path)

        return cls(
            root,
            binary,
            file_mode=config.file_mode,
            directory_mode=config.directory_mode,
            author=config.author,
            logger=logger.bind(repository=str(root)),
        )

    @staticmethod
    def init_repository(binary: CommandRunner, path: StrPath) -> None:
        """Run ``git init`` in ``path``.

        Raises:
            CommandFailedError: If git reports an error.
        """
        result = binary.run("init", path)
        if not result.succeeded:
            msg = f'Cannot initialize a Git repository in "{os.fspath(path)}"'
            raise CommandFailedError(msg, result=result, path=Path(path))

    @staticmethod
    def find_repository_root(path: StrPath) -> Path | None:
        """Walk upward from ``path`` to the directory holding git metadata.

        Args:
            path: Starting directory.

        Returns:
            The working tree root, or None when no repository is found
            before the filesystem root.
        """
        try:
            repo = Repo.discover(os.fspath(path))
        except NotGitRepository:
            return None
        try:
            return Path(repo.path)
        finally:
            repo.close()

    # =========================================================================
    # Context Manager Protocol
    # =========================================================================

    def __enter__(self) -> Self:
        """Enter context manager."""
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        """Exit context manager."""
        self.close()

    def close(self) -> None:
        """Release resources. Git processes do not outlive their call."""

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._root!r})"

    # =========================================================================
    # Properties
    # =========================================================================

    @property
    def root(self) -> str:
        """Absolute path of the working tree root, without trailing separator."""
        return self._root

    @property
    def binary(self) -> CommandRunner:
        """The command runner in use."""
        return self._binary

    @property
    def file_mode(self) -> int:
        """Mode applied to files created by :meth:`write_file`."""
        return self._file_mode

    @file_mode.setter
    def file_mode(self, value: int | str) -> None:
        self._file_mode = parse_mode(value)

    @property
    def directory_mode(self) -> int:
        """Mode applied to directories created by :meth:`write_file`."""
        return self._directory_mode

    @directory_mode.setter
    def directory_mode(self, value: int | str) -> None:
        self._directory_mode = parse_mode(value)

    @property
    def author(self) -> str | None:
        """Commit author as "Name <email>", or None for git's configured identity."""
        return self._author

    @author.setter
    def author(self, value: str | None) -> None:
        self._author = value or None

    # =========================================================================
    # Path resolution
    # =========================================================================

    @overload
    def resolve_local_path(self, path: StrPath) -> str: ...

    @overload
    def resolve_local_path(self, path: Sequence[StrPath]) -> list[str]: ...

    def resolve_local_path(self, path: StrPath | Sequence[StrPath]) -> str | list[str]:
        """Resolve ``path`` (or each path of a sequence) relative to the root."""
        return resolve_local_path(self._root, path)

    @overload
    def resolve_full_path(self, path: StrPath) -> str: ...

    @overload
    def resolve_full_path(self, path: Sequence[StrPath]) -> list[str]: ...

    def resolve_full_path(self, path: StrPath | Sequence[StrPath]) -> str | list[str]:
        """Resolve ``path`` (or each path of a sequence) to an absolute path."""
        return resolve_full_path(self._root, path)

    def _local_paths(self, files: StrPath | Sequence[StrPath]) -> list[str]:
        if isinstance(files, str | os.PathLike):
            return [resolve_local_path(self._root, files)]
        return resolve_local_path(self._root, files)

    # =========================================================================
    # Invocation
    # =========================================================================

    def _run(
        self,
        operation: str,
        arguments: Sequence[Argument] = (),
        *,
        cwd: StrPath | None = None,
    ) -> CommandResult:
        return self._binary.run(
            operation, cwd if cwd is not None else self._root, arguments
        )

    def _raise_if_error(self, result: CommandResult, message: str) -> None:
        if result.succeeded:
            return
        self._logger.debug(
            "command_failed",
            argv=list(result.command),
            exit_code=result.exit_code,
            stderr=result.stderr.strip(),
        )
        raise CommandFailedError(message, result=result, path=Path(self._root))

    # =========================================================================
    # Staging primitives
    # =========================================================================

    def add(
        self, files: StrPath | Sequence[StrPath] | None = None, *, force: bool = False
    ) -> None:
        """Stage changes.

        Args:
            files: Paths to stage; None stages every change in the working tree.
            force: Also stage ignored files.

        Raises:
            CommandFailedError: If git reports an error.
        """
        arguments: list[Argument] = [("--force", force)]
        if files is None:
            arguments.append("--all")
            described = "*"
        else:
            local = self._local_paths(files)
            arguments.extend(["--", *local])
            described = ", ".join(local)

        result = self._run("add", arguments)
        self._raise_if_error(result, f'Cannot add "{described}" to "{self._root}"')

    def remove(
        self,
        files: StrPath | Sequence[StrPath],
        *,
        recursive: bool = False,
        force: bool = False,
    ) -> None:
        """Stage the removal of files, deleting them from the working tree.

        Args:
            files: Paths to remove; must not be empty.
            recursive: Allow removing directories.
            force: Override git's up-to-date check.

        Raises:
            RepositoryPathError: If ``files`` is empty.
            CommandFailedError: If git reports an error.
        """
        local = self._local_paths(files)
        if not local:
            msg = "At least one path is required for removal"
            raise RepositoryPathError(msg, path=files)

        arguments: list[Argument] = [
            ("-r", recursive),
            ("--force", force),
            "--",
            *local,
        ]
        result = self._run("rm", arguments)
        self._raise_if_error(
            result, f'Cannot remove "{", ".join(local)}" from "{self._root}"'
        )

    def move(self, from_path: StrPath, to_path: StrPath, *, force: bool = False) -> None:
        """Stage a rename or move.

        Args:
            from_path: Current path.
            to_path: New path.
            force: Overwrite an existing destination.

        Raises:
            CommandFailedError: If git reports an error.
        """
        source = resolve_local_path(self._root, from_path)
        target = resolve_local_path(self._root, to_path)
        result = self._run("mv", [("--force", force), source, target])
        self._raise_if_error(
            result, f'Cannot move "{source}" to "{target}" in "{self._root}"'
        )

    # =========================================================================
    # Commit and reset
    # =========================================================================

    def commit(
        self, message: str, files: StrPath | Sequence[StrPath] | None = None
    ) -> None:
        """Record staged changes.

        Args:
            message: Commit message.
            files: Restrict the commit to these paths; None commits the index.

        Raises:
            CommandFailedError: If git reports an error, including when there
                is nothing to commit.
        """
        arguments: list[Argument] = [
            ("--message", message),
            ("--author", self._author),
        ]
        local: list[str] = []
        if files is not None:
            local = self._local_paths(files)
            arguments.extend(["--", *local])

        result = self._run("commit", arguments)
        self._raise_if_error(result, f'Cannot commit to "{self._root}"')
        self._logger.info("committed", message=message, files=local)

    def reset(self, what: ResetMode = ResetMode.ALL) -> None:
        """Discard uncommitted changes.

        Args:
            what: ``STAGED`` resets index and tracked files to HEAD,
                ``WORKING`` deletes untracked and ignored files and
                directories, ``ALL`` does both.

        Raises:
            CommandFailedError: If git reports an error.
        """
        if what & ResetMode.STAGED:
            result = self._run("reset", ["--hard"])
            self._raise_if_error(result, f'Cannot reset "{self._root}"')

        if what & ResetMode.WORKING:
            result = self._run("clean", ["--force", "-x", "-d"])
            self._raise_if_error(result, f'Cannot clean "{self._root}"')

    # =========================================================================
    # Single-operation mutations
    # =========================================================================

    def write_file(
        self, path: StrPath, data: FileData, message: str | None = None
    ) -> str:
        """Write a file, then stage and commit it.

        Missing parent directories are created with ``directory_mode``; a
        missing file is created with ``file_mode``. Existing content is
        replaced entirely.

        Args:
            path: Absolute or repository-relative path.
            data: Text, bytes, or a sequence of text chunks joined as is.
            message: Commit message; a default naming the file when None.

        Returns:
            The hash of the new commit.

        Raises:
            RepositoryEnvironmentError: If the file cannot be created or written.
            CommandFailedError: If staging or committing fails.
        """
        full = Path(self.resolve_full_path(path))
        local = self.resolve_local_path(path)

        directory = full.parent
        if not directory.is_dir():
            try:
                _make_directories(directory, self._directory_mode)
            except OSError as e:
                msg = f'Cannot create "{directory}"'
                raise RepositoryEnvironmentError(
                    msg, path=directory, operation="mkdir", cause=e
                ) from e

        if not full.exists():
            try:
                full.touch()
            except OSError as e:
                msg = f'Cannot create "{full}"'
                raise RepositoryEnvironmentError(
                    msg, path=full, operation="touch", cause=e
                ) from e
            try:
                full.chmod(self._file_mode)
            except OSError as e:
                msg = f'Cannot chmod "{full}" to {oct(self._file_mode)}'
                raise RepositoryEnvironmentError(
                    msg, path=full, operation="chmod", cause=e
                ) from e

        try:
            full.write_bytes(_encode(data))
        except OSError as e:
            msg = f'Cannot write to "{full}"'
            raise RepositoryEnvironmentError(
                msg, path=full, operation="write", cause=e
            ) from e

        self.add([local])
        if message is None:
            message = (
                f'{self.message_prefix} created or changed file "{os.fspath(path)}"'
            )
        self.commit(message, [local])
        self._logger.info("file_written", path=local)
        return self.get_current_commit()

    def remove_file(
        self,
        path: StrPath,
        message: str | None = None,
        *,
        recursive: bool = False,
        force: bool = False,
    ) -> str:
        """Remove a file (or directory with ``recursive``) and commit.

        Args:
            path: Absolute or repository-relative path.
            message: Commit message; a default naming the file when None.
            recursive: Allow removing directories.
            force: Override git's up-to-date check.

        Returns:
            The hash of the new commit.

        Raises:
            CommandFailedError: If removal or commit fails.
        """
        self.remove([path], recursive=recursive, force=force)
        if message is None:
            message = f'{self.message_prefix} deleted file "{os.fspath(path)}"'
        self.commit(message, [path])
        self._logger.info("file_removed", path=self.resolve_local_path(path))
        return self.get_current_commit()

    def rename_file(
        self,
        from_path: StrPath,
        to_path: StrPath,
        message: str | None = None,
        *,
        force: bool = False,
    ) -> str:
        """Rename or move a file and commit.

        Args:
            from_path: Current path.
            to_path: New path.
            message: Commit message; a default naming both paths when None.
            force: Overwrite an existing destination.

        Returns:
            The hash of the new commit.

        Raises:
            CommandFailedError: If the move or commit fails.
        """
        self.move(from_path, to_path, force=force)
        if message is None:
            message = (
                f'{self.message_prefix} renamed/moved file '
                f'"{os.fspath(from_path)}" to "{os.fspath(to_path)}"'
            )
        self.commit(message, [from_path, to_path])
        self._logger.info(
            "file_renamed",
            source=self.resolve_local_path(from_path),
            target=self.resolve_local_path(to_path),
        )
        return self.get_current_commit()

    # =========================================================================
    # Queries
    # =========================================================================

    def get_current_commit(self) -> str:
        """Return the hash HEAD points at.

        Raises:
            CommandFailedError: If HEAD cannot be resolved (e.g. no commits yet).
        """
        result = self._run("rev-parse", ["--verify", "HEAD"])
        self._raise_if_error(result, f'Cannot rev-parse "{self._root}"')
        return result.stdout.strip()

    def get_log(self, limit: int | None = None, skip: int | None = None) -> list[str]:
        """Return commit descriptions, newest first.

        Each entry is the ``--format=fuller --summary`` text of one commit.

        Args:
            limit: Maximum number of commits.
            skip: Number of commits to skip first.

        Raises:
            RepositoryPathError: If ``limit`` or ``skip`` is negative.
            CommandFailedError: If git reports an error.
        """
        for name, value in (("limit", limit), ("skip", skip)):
            if value is not None and value < 0:
                msg = f"{name} must not be negative, got {value}"
                raise RepositoryPathError(msg, path=value)

        arguments: list[Argument] = ["--format=fuller", "--summary", "-z"]
        if limit is not None:
            arguments.append(f"-{int(limit)}")
        arguments.append(("--skip", skip))

        result = self._run("log", arguments)
        self._raise_if_error(result, f'Cannot retrieve log from "{self._root}"')
        return split_records(result.stdout)

    def show_commit(self, ref: str) -> str:
        """Return the ``--format=fuller`` description and patch of a commit.

        Raises:
            CommandFailedError: If the ref cannot be resolved.
        """
        result = self._run("show", ["--format=fuller", ref])
        self._raise_if_error(
            result, f'Cannot retrieve commit "{ref}" from "{self._root}"'
        )
        return result.stdout

    def show_file(self, path: StrPath, ref: str = "HEAD") -> str:
        """Return the content of a file as recorded at ``ref``.

        Content is decoded as UTF-8; use :meth:`show_file_bytes` for binary
        files.

        Raises:
            CommandFailedError: If the file does not exist at ``ref``.
        """
        local = resolve_local_path(self._root, path)
        result = self._run("show", [f"{ref}:{local}"])
        self._raise_if_error(
            result, f'Cannot show "{local}" at "{ref}" from "{self._root}"'
        )
        return result.stdout

    def show_file_bytes(self, path: StrPath, ref: str = "HEAD") -> bytes:
        """Return the exact bytes of a file as recorded at ``ref``.

        Raises:
            CommandFailedError: If the file does not exist at ``ref``.
        """
        local = resolve_local_path(self._root, path)
        result = self._run("show", [f"{ref}:{local}"])
        self._raise_if_error(
            result, f'Cannot show "{local}" at "{ref}" from "{self._root}"'
        )
        return result.stdout_bytes

    def list_directory(self, directory: StrPath = ".", ref: str = "HEAD") -> list[str]:
        """List the entries of a directory as recorded at ``ref``.

        Args:
            directory: Directory to list, relative to the root or absolute.
            ref: Revision to read.

        Returns:
            Entry names relative to ``directory``, in git's tree order.

        Raises:
            CommandFailedError: If git reports an error.
        """
        # <ref>:<path> names the tree object; the working tree is never read
        local = posixpath.normpath(resolve_local_path(self._root, directory))
        tree = f"{ref}:" if local == "." else f"{ref}:{local}"
        result = self._run("ls-tree", ["--name-only", "-z", tree])
        self._raise_if_error(
            result,
            f'Cannot list directory "{os.fspath(directory)}" at "{ref}" '
            f'from "{self._root}"',
        )
        return split_records(result.stdout)

    def get_status(self) -> list[StatusEntry]:
        """Return the working tree status, one entry per changed path.

        Raises:
            CommandFailedError: If git reports an error.
            StatusParseError: If git prints a line that cannot be decoded.
        """
        result = self._run("status", ["--porcelain"])
        self._raise_if_error(result, f'Cannot retrieve status from "{self._root}"')
        return parse_status(result.stdout)

    def is_dirty(self) -> bool:
        """Whether the working tree or index holds uncommitted changes."""
        return bool(self.get_status())

    def get_current_branch(self) -> str:
        """Return a symbolic name for HEAD, such as ``main`` or ``main~2``.

        Raises:
            CommandFailedError: If HEAD cannot be resolved.
            RepositoryStateError: If no ref reaches HEAD.
        """
        result = self._run("name-rev", ["--name-only", "HEAD"])
        self._raise_if_error(
            result, f'Cannot retrieve current branch from "{self._root}"'
        )
        name = result.stdout.strip()
        if name == _UNNAMEABLE_REVISION:
            msg = f'HEAD of "{self._root}" cannot be named'
            raise RepositoryStateError(msg, path=Path(self._root))
        return name

    # =========================================================================
    # Transactions
    # =========================================================================

    def transactional[T](self, work: Callable[[Transaction[T]], T]) -> Transaction[T]:
        """Run ``work`` and commit everything it changed as one commit.

        ``work`` receives the Transaction and changes files directly; it may
        set ``commit_message``. When ``work`` or the commit raises, every
        uncommitted change (including untracked and ignored files) is
        discarded and the exception is re-raised.

        Args:
            work: The batch to run.

        Returns:
            The committed Transaction, holding ``result`` and ``commit_hash``.

        Raises:
            Exception: Whatever ``work`` or the commit raised.
        """
        transaction: Transaction[T] = Transaction(repository=self)
        try:
            transaction.result = work(transaction)
            self.add(None)
            message = (
                transaction.commit_message
                or f'{self.message_prefix} did a transactional commit in "{self._root}"'
            )
            self.commit(message)
            transaction.commit_hash = self.get_current_commit()
        except Exception as e:
            transaction.state = TransactionState.ROLLED_BACK
            self._logger.warning("transaction_rolled_back", error=str(e))
            try:
                self.reset(ResetMode.ALL)
            except RepositoryError as reset_error:
                self._logger.error("rollback_failed", error=str(reset_error))  # noqa: TRY400
                e.add_note(f"Rollback failed: {reset_error}")
            raise

        transaction.state = TransactionState.COMMITTED
        self._logger.info("transaction_committed", commit=transaction.commit_hash)
        return transaction


def _encode(data: FileData) -> bytes:
    if isinstance(data, bytes):
        return data
    if isinstance(data, str):
        return data.encode("utf-8")
    return "".join(data).encode("utf-8")


def _make_directories(directory: Path, mode: int) -> None:
    # Path.mkdir(parents=True) ignores mode for intermediate levels
    missing: list[Path] = []
    current = directory
    while not current.exists():
        missing.append(current)
        current = current.parent
    if not current.is_dir():
        raise NotADirectoryError(errno.ENOTDIR, os.strerror(errno.ENOTDIR), str(current))
    for level in reversed(missing):
        level.mkdir(mode=mode)
