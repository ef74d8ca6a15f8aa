"""gitscribe CLI commands."""
# pyright: reportUnusedCallResult=false

from typing import TYPE_CHECKING

from ._context import CLIContext
from ._read import (
    cat_command,
    head_command,
    log_command,
    ls_command,
    show_command,
    status_command,
)
from ._shared import (
    ExitCode,
    FormattableData,
    exit_code_for,
    exit_with_error,
    format_json,
    get_console,
    get_error_console,
    handle_errors,
)
from ._write import mv_command, rm_command, write_command

if TYPE_CHECKING:
    from cyclopts import App

__all__ = [
    "CLIContext",
    "ExitCode",
    "FormattableData",
    "exit_code_for",
    "exit_with_error",
    "format_json",
    "get_console",
    "get_error_console",
    "handle_errors",
    "register_commands",
]


def register_commands(app: "App") -> None:
    app.command(status_command, name="status")
    app.command(log_command, name="log")
    app.command(show_command, name="show")
    app.command(cat_command, name="cat")
    app.command(ls_command, name="ls")
    app.command(head_command, name="head")
    app.command(write_command, name="write")
    app.command(rm_command, name="rm")
    app.command(mv_command, name="mv")
