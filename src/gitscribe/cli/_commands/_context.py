# pyright: reportUnusedCallResult=false
"""Per-invocation state shared between the meta app and its commands.

The meta app resolves global options and configuration once, stores a
CLIContext, and every command reads it back instead of re-parsing options.
"""

import contextvars
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING

from gitscribe.config import GitScribeConfig
from gitscribe.repository import Repository

if TYPE_CHECKING:
    from structlog.typing import FilteringBoundLogger


@dataclass(frozen=True, slots=True)
class CLIContext:
    """Options and configuration resolved for one gitscribe invocation.

    Attributes:
        config: Merged configuration (defaults when loading failed).
        verbose: Whether --verbose was given.
        repo_path: Path given with --repo, or None for the working directory.
        logger: Structured logger handed to the repository.
    """

    config: GitScribeConfig = field(repr=False)
    verbose: bool = False
    repo_path: Path | None = None
    logger: "FilteringBoundLogger | None" = field(default=None, repr=False)

    @classmethod
    def get_current(cls) -> "CLIContext":
        """Return the context of the running invocation.

        Outside an invocation (direct command calls in tests) a context with
        default configuration is returned.
        """
        ctx = _current_cli_context.get()
        if ctx is not None:
            return ctx
        return cls(config=GitScribeConfig())

    @classmethod
    def set_current(cls, ctx: "CLIContext") -> None:
        """Install ``ctx`` for the running invocation."""
        _current_cli_context.set(ctx)

    @classmethod
    def reset(cls) -> None:
        """Forget the installed context."""
        _current_cli_context.set(None)

    def open_repository(self) -> Repository:
        """Open the repository selected by --repo (or the working directory).

        Raises:
            RepositoryPathError: If the path does not exist.
            RepositoryNotFoundError: If the path is not inside a repository.
        """
        path = self.repo_path if self.repo_path is not None else Path.cwd()
        return Repository.open(path, config=self.config, logger=self.logger)


_current_cli_context: contextvars.ContextVar[CLIContext | None] = (
    contextvars.ContextVar("cli_context", default=None)
)
