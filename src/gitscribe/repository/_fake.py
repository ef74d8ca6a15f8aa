"""Fake command runner for testing.

This module provides a FakeGitBinary class that implements the
CommandRunner protocol without spawning processes, so code built on
Repository can be unit tested against scripted git output.
"""

import os
from collections import deque
from collections.abc import Iterable
from dataclasses import dataclass, field

from gitscribe.utils._exec import Argument, CommandResult, build_arguments


@dataclass(frozen=True, slots=True)
class RecordedCall:
    """One invocation received by FakeGitBinary.

    Attributes:
        operation: The git subcommand.
        cwd: Working directory as a string.
        argv: Arguments after the subcommand, as they would reach git.
    """

    operation: str
    cwd: str
    argv: tuple[str, ...]


@dataclass(slots=True)
class FakeGitBinary:
    """Scripted CommandRunner.

    Responses are queued per operation and consumed in order; an operation
    with an empty queue succeeds with empty output. Every call is recorded.

    Example:
        >>> fake = FakeGitBinary()
        >>> fake.respond("rev-parse", stdout="abc123\\n")
        >>> fake.run("rev-parse", "/repo", [("--verify", True), "HEAD"]).stdout
        'abc123\\n'
        >>> fake.calls[0].argv
        ('--verify', 'HEAD')
    """

    calls: list[RecordedCall] = field(default_factory=list)
    _responses: dict[str, deque[tuple[int, bytes, str]]] = field(default_factory=dict)

    def respond(
        self,
        operation: str,
        *,
        stdout: str | bytes = "",
        stderr: str = "",
        exit_code: int = 0,
    ) -> None:
        """Queue the result of the next ``operation`` call.

        Args:
            operation: The git subcommand to answer.
            stdout: Standard output to return; bytes are kept verbatim in
                ``stdout_bytes`` and decoded the way GitBinary decodes them.
            stderr: Standard error to return.
            exit_code: Exit status to return.
        """
        raw = stdout if isinstance(stdout, bytes) else stdout.encode("utf-8")
        self._responses.setdefault(operation, deque()).append((exit_code, raw, stderr))

    def fail(self, operation: str, *, stderr: str = "", exit_code: int = 1) -> None:
        """Queue a failing result for the next ``operation`` call."""
        self.respond(operation, stderr=stderr, exit_code=exit_code)

    def run(
        self,
        operation: str,
        cwd: str | os.PathLike[str],
        arguments: Iterable[Argument] = (),
    ) -> CommandResult:
        """Record the call and return the next scripted result."""
        argv = tuple(build_arguments(arguments))
        self.calls.append(RecordedCall(operation=operation, cwd=os.fspath(cwd), argv=argv))

        queue = self._responses.get(operation)
        exit_code, raw, stderr = queue.popleft() if queue else (0, b"", "")
        return CommandResult(
            command=("git", operation, *argv),
            exit_code=exit_code,
            stdout=raw.decode("utf-8", errors="replace"),
            stderr=stderr,
            stdout_bytes=raw,
        )

    def operations(self) -> list[str]:
        """Return the subcommands received so far, in call order."""
        return [call.operation for call in self.calls]

    def reset_calls(self) -> None:
        """Forget recorded calls, keeping queued responses."""
        self.calls.clear()
