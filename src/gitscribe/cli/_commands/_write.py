# pyright: reportUnusedCallResult=false
# ruff: noqa: D415, FBT002
"""Repository commands that commit a change."""

import sys
from pathlib import Path
from typing import Annotated

from cyclopts import Parameter
from rich.markup import escape

from ._context import CLIContext
from ._shared import get_console, handle_errors

__all__ = ["mv_command", "rm_command", "write_command"]


def _report(commit: str) -> None:
    console = get_console()
    if CLIContext.get_current().verbose:
        console.print(f"[green]Committed[/green] [yellow]{commit}[/yellow]")
    else:
        console.print(commit, markup=False)


def write_command(
    path: Annotated[str, Parameter(help="File to write, relative to the root")],
    *,
    message: Annotated[
        str | None, Parameter(name=["--message", "-m"], help="Commit message")
    ] = None,
    from_file: Annotated[
        Path | None,
        Parameter(name="--from-file", help="Read content from this file"),
    ] = None,
) -> None:
    """Write a file from stdin (or --from-file) and commit it"""
    with handle_errors():
        data = from_file.read_bytes() if from_file is not None else sys.stdin.read()
        with CLIContext.get_current().open_repository() as repo:
            commit = repo.write_file(path, data, message)

    _report(commit)


def rm_command(
    path: Annotated[str, Parameter(help="Path to remove")],
    *,
    message: Annotated[
        str | None, Parameter(name=["--message", "-m"], help="Commit message")
    ] = None,
    recursive: Annotated[
        bool, Parameter(name=["--recursive", "-r"], help="Remove directories")
    ] = False,
    force: Annotated[
        bool, Parameter(name=["--force", "-f"], help="Remove modified files")
    ] = False,
) -> None:
    """Remove a file and commit the removal"""
    with handle_errors(), CLIContext.get_current().open_repository() as repo:
        commit = repo.remove_file(path, message, recursive=recursive, force=force)

    _report(commit)


def mv_command(
    source: Annotated[str, Parameter(help="Current path")],
    target: Annotated[str, Parameter(help="New path")],
    *,
    message: Annotated[
        str | None, Parameter(name=["--message", "-m"], help="Commit message")
    ] = None,
    force: Annotated[
        bool, Parameter(name=["--force", "-f"], help="Overwrite the target")
    ] = False,
) -> None:
    """Rename or move a file and commit the move"""
    with handle_errors(), CLIContext.get_current().open_repository() as repo:
        commit = repo.rename_file(source, target, message, force=force)

    if CLIContext.get_current().verbose:
        get_console().print(
            f"[dim]{escape(source)} -> {escape(target)}[/dim]", soft_wrap=True
        )
    _report(commit)
