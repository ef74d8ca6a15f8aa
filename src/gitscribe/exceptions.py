"""gitscribe exceptions."""

from pathlib import Path
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from gitscribe.utils._exec import CommandResult


class GitScribeError(Exception):
    """Base exception for gitscribe errors."""


# =============================================================================
# Configuration Exceptions
# =============================================================================


class ConfigError(GitScribeError):
    """A configuration source could not be turned into a GitScribeConfig."""


class ConfigLoadError(ConfigError):
    """A configuration file is unreadable or not valid TOML."""

    def __init__(
        self,
        message: str,
        *,
        path: Path | None = None,
        line: int | None = None,
        column: int | None = None,
    ) -> None:
        """Record where in the file parsing stopped, when known."""
        super().__init__(message)
        self.path: Path | None = path
        self.line: int | None = line
        self.column: int | None = column


class ConfigValidationError(ConfigError):
    """A merged configuration value was rejected by the model."""

    def __init__(
        self,
        message: str,
        *,
        key: str,
        value: Any,  # pyright: ignore[reportAny,reportExplicitAny]
        expected: str,
        source: str | None = None,
    ) -> None:
        """Record the offending key, its value and the source it came from."""
        super().__init__(message)
        self.key: str = key
        self.value: Any = value  # pyright: ignore[reportExplicitAny]
        self.expected: str = expected
        self.source: str | None = source


# =============================================================================
# Repository Exceptions
# =============================================================================


class RepositoryError(GitScribeError):
    """Base exception for Repository errors."""


class RepositoryPathError(RepositoryError, ValueError):
    """Raised when a caller supplies an unusable path argument.

    Attributes:
        path: The offending value, as given by the caller.
    """

    def __init__(self, message: str, *, path: object = None) -> None:
        """Initialize with error message and path context.

        Args:
            message: Human-readable error message.
            path: The offending value, as given by the caller.
        """
        super().__init__(message)
        self.path: object = path


class RepositoryNotFoundError(RepositoryPathError):
    """Raised when no git metadata directory is found above a path."""


class RepositoryEnvironmentError(RepositoryError, OSError):
    """Raised when a filesystem operation performed by the repository fails.

    Attributes:
        path: Path to the file or directory that caused the error.
        operation: The operation that failed ("mkdir", "touch", "chmod", "write").
        cause: The underlying exception that caused this error.
    """

    def __init__(
        self,
        message: str,
        *,
        path: Path,
        operation: str,
        cause: Exception | None = None,
    ) -> None:
        """Initialize with error message and I/O context.

        Args:
            message: Human-readable error message.
            path: Path to the file or directory that caused the error.
            operation: The operation that failed.
            cause: The underlying exception that caused this error.
        """
        super().__init__(message)
        self.path: Path = path
        self.operation: str = operation
        self.cause: Exception | None = cause


class CommandFailedError(RepositoryError):
    """Raised when a git invocation exits with a non-zero status.

    Attributes:
        description: The attempted action, e.g. 'Cannot commit to "/srv/repo"'.
        result: The captured result of the failed invocation.
        path: The repository the command was issued against.
    """

    def __init__(
        self,
        message: str,
        *,
        result: "CommandResult",
        path: Path | None = None,
    ) -> None:
        """Initialize with error message and invocation context.

        Args:
            message: Description of the attempted action.
            result: The captured result of the failed invocation.
            path: The repository the command was issued against.
        """
        super().__init__(message)
        self.result: "CommandResult" = result
        self.path: Path | None = path
        self.description: str = message

    @property
    def exit_code(self) -> int:
        """Exit status reported by git."""
        return self.result.exit_code

    @property
    def stdout(self) -> str:
        """Captured standard output."""
        return self.result.stdout

    @property
    def stderr(self) -> str:
        """Captured standard error."""
        return self.result.stderr

    def __str__(self) -> str:
        detail = self.result.stderr.strip() or self.result.stdout.strip()
        base = super().__str__()
        if detail:
            return f"{base} (exit {self.result.exit_code}): {detail}"
        return f"{base} (exit {self.result.exit_code})"


class StatusParseError(RepositoryError, ValueError):
    """Raised when a status line does not match the short status format.

    Attributes:
        line: The line that could not be decoded.
    """

    def __init__(self, message: str, *, line: str) -> None:
        """Initialize with error message and the offending line.

        Args:
            message: Human-readable error message.
            line: The line that could not be decoded.
        """
        super().__init__(message)
        self.line: str = line


class RepositoryStateError(RepositoryError):
    """Raised when the repository is in a state an operation cannot handle.

    Attributes:
        path: The repository root.
    """

    def __init__(self, message: str, *, path: Path | None = None) -> None:
        """Initialize with error message and path context.

        Args:
            message: Human-readable error message.
            path: The repository root.
        """
        super().__init__(message)
        self.path: Path | None = path
