# pyright: reportExplicitAny=false
"""Output and failure handling shared by every gitscribe command.

Commands print through the consoles returned here and wrap repository calls
in :func:`handle_errors`, so a library exception becomes one red line on
stderr and a distinct exit status.
"""

from collections.abc import Iterator
from contextlib import contextmanager
from enum import IntEnum
from typing import Any, Never

import orjson
from rich.console import Console
from rich.markup import escape

from gitscribe.exceptions import (
    CommandFailedError,
    ConfigError,
    ConfigValidationError,
    GitScribeError,
    RepositoryEnvironmentError,
    RepositoryPathError,
)

# JSON-serializable payload handed to orjson
FormattableData = dict[str, Any]

__all__ = [
    "ExitCode",
    "FormattableData",
    "exit_code_for",
    "exit_with_error",
    "format_json",
    "get_console",
    "get_error_console",
    "handle_errors",
]


class ExitCode(IntEnum):
    """Process exit status, one value per failure family."""

    SUCCESS = 0
    LOAD_ERROR = 1
    VALIDATION_ERROR = 2
    NOT_FOUND = 3
    IO_ERROR = 4
    INTERNAL_ERROR = 5
    COMMAND_FAILED = 6


def format_json(data: FormattableData, *, indent: bool = True) -> str:
    """Serialize ``data`` with orjson, two-space indented unless ``indent`` is off."""
    options = orjson.OPT_INDENT_2 if indent else 0
    return orjson.dumps(data, option=options).decode("utf-8")


def get_console() -> Console:
    """Get a Rich console for command output on stdout.

    Lines are never wrapped so paths and hashes survive piping.
    """
    return Console(soft_wrap=True, highlight=False)


def get_error_console() -> Console:
    """Get a Rich console for diagnostics on stderr."""
    return Console(stderr=True, soft_wrap=True, highlight=False)


def exit_with_error(
    message: str,
    code: ExitCode = ExitCode.INTERNAL_ERROR,
    *,
    console: Console | None = None,
) -> Never:
    """Report ``message`` as an error and terminate with ``code``.

    Rich markup in ``message`` is escaped, so paths and refs print verbatim.

    Raises:
        SystemExit: Always.
    """
    if console is None:
        console = get_error_console()

    console.print(f"[red]Error:[/red] {escape(message)}")
    raise SystemExit(code)


def exit_code_for(error: BaseException) -> ExitCode:
    """Map an exception raised by the library to a CLI exit code."""
    match error:
        case ConfigValidationError():
            return ExitCode.VALIDATION_ERROR
        case ConfigError():
            return ExitCode.LOAD_ERROR
        case RepositoryPathError() | FileNotFoundError():
            return ExitCode.NOT_FOUND
        case RepositoryEnvironmentError() | OSError():
            return ExitCode.IO_ERROR
        case CommandFailedError():
            return ExitCode.COMMAND_FAILED
        case _:
            return ExitCode.INTERNAL_ERROR


@contextmanager
def handle_errors() -> Iterator[None]:
    """Turn library and I/O errors raised in the block into a clean exit.

    Raises:
        SystemExit: With the code from :func:`exit_code_for`.
    """
    try:
        yield
    except (GitScribeError, OSError) as e:
        exit_with_error(str(e), exit_code_for(e))
