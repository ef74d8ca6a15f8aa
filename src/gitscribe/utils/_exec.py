"""Execution utilities for the git command line.

This module provides the thin, synchronous layer that spawns ``git``,
captures its output and exit status, and hands back an immutable
CommandResult. It knows nothing about repository semantics.
"""

import os
import subprocess
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Final, Protocol, runtime_checkable

if TYPE_CHECKING:
    from structlog.typing import FilteringBoundLogger

# Exit status reported when the git executable cannot be started
COMMAND_NOT_FOUND_EXIT_CODE: Final = 127

# A positional value, or a (flag, value) pair
type Argument = str | tuple[str, object]


@dataclass(frozen=True, slots=True)
class CommandResult:
    """Result of one git invocation.

    Attributes:
        command: The full argv that was executed.
        exit_code: Process exit status.
        stdout: Standard output, decoded as UTF-8.
        stderr: Standard error, decoded as UTF-8.
        stdout_bytes: Standard output exactly as the process wrote it.
    """

    command: tuple[str, ...]
    exit_code: int
    stdout: str = ""
    stderr: str = ""
    stdout_bytes: bytes = field(default=b"", repr=False)

    @property
    def succeeded(self) -> bool:
        """Whether the process exited with status zero."""
        return self.exit_code == 0


@runtime_checkable
class CommandRunner(Protocol):
    """Protocol for objects that run named git operations.

    GitBinary is the real implementation; FakeGitBinary satisfies the same
    protocol for tests.
    """

    def run(
        self,
        operation: str,
        cwd: str | os.PathLike[str],
        arguments: Iterable[Argument] = (),
    ) -> CommandResult:
        """Run ``git <operation> <arguments>`` in ``cwd``.

        Args:
            operation: The git subcommand, e.g. "commit" or "status".
            cwd: Working directory for the invocation.
            arguments: Ordered positional values and (flag, value) pairs.

        Returns:
            The captured CommandResult.
        """
        ...


def build_arguments(arguments: Iterable[Argument]) -> list[str]:
    """Flatten positional values and (flag, value) pairs into an argv list.

    Rules for pairs:
        - value None or False: the flag is dropped
        - value True: the bare flag is emitted
        - long flags (``--name``): rendered as ``--name=value``
        - short flags (``-n``): rendered as two items, ``-n value``

    Args:
        arguments: Ordered arguments.

    Returns:
        List of argv strings, in input order.

    Example:
        >>> build_arguments([("--message", "hi"), ("--author", None), "--", "a.txt"])
        ['--message=hi', '--', 'a.txt']
    """
    argv: list[str] = []
    for argument in arguments:
        if isinstance(argument, tuple):
            flag, value = argument
            if value is None or value is False:
                continue
            if value is True:
                argv.append(flag)
            elif flag.startswith("--"):
                argv.append(f"{flag}={value}")
            else:
                argv.extend([flag, str(value)])
        else:
            argv.append(argument)
    return argv


@dataclass(slots=True)
class GitBinary:
    """Runs git subcommands through :func:`subprocess.run`.

    Attributes:
        executable: Name or path of the git executable.
        env: Extra environment variables for every invocation.
        logger: Optional structured logger receiving one debug event per call.
    """

    executable: str = "git"
    env: Mapping[str, str] = field(default_factory=dict)
    logger: "FilteringBoundLogger | None" = field(default=None, repr=False)

    def run(
        self,
        operation: str,
        cwd: str | os.PathLike[str],
        arguments: Iterable[Argument] = (),
    ) -> CommandResult:
        """Run ``git <operation> <arguments>`` in ``cwd``.

        Blocks until the process exits. A missing executable is reported as
        a result with exit status 127 instead of raising.

        Args:
            operation: The git subcommand, e.g. "commit" or "status".
            cwd: Working directory for the invocation.
            arguments: Ordered positional values and (flag, value) pairs.

        Returns:
            The captured CommandResult.
        """
        command = (self.executable, operation, *build_arguments(arguments))
        env = {**os.environ, **self.env} if self.env else None

        try:
            completed = subprocess.run(  # noqa: S603
                command,
                cwd=str(cwd),
                env=env,
                capture_output=True,
                check=False,
            )
        except FileNotFoundError as e:
            result = CommandResult(
                command=command,
                exit_code=COMMAND_NOT_FOUND_EXIT_CODE,
                stderr=str(e),
            )
        else:
            result = CommandResult(
                command=command,
                exit_code=completed.returncode,
                stdout=completed.stdout.decode("utf-8", errors="replace"),
                stderr=completed.stderr.decode("utf-8", errors="replace"),
                stdout_bytes=completed.stdout,
            )

        if self.logger is not None:
            self.logger.debug(
                "git_command",
                operation=operation,
                cwd=str(cwd),
                argv=list(command),
                exit_code=result.exit_code,
            )
        return result
