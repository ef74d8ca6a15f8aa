# pyright: reportUnusedCallResult=false
# ruff: noqa: D415, FBT002
"""Read-only repository commands."""

import sys
from typing import Annotated

from cyclopts import Parameter
from rich.markup import escape

from gitscribe.repository import StatusEntry

from ._context import CLIContext
from ._shared import format_json, get_console, handle_errors

__all__ = [
    "cat_command",
    "head_command",
    "log_command",
    "ls_command",
    "show_command",
    "status_command",
]

_STATUS_STYLES = {
    "?": "cyan",
    "!": "dim",
    "A": "green",
    "D": "red",
    "R": "magenta",
    "C": "magenta",
    "U": "bold red",
}


def _status_row(entry: StatusEntry) -> str:
    code = f"{entry.index or ' '}{entry.worktree or ' '}"
    style = _STATUS_STYLES.get(entry.index or entry.worktree, "yellow")
    name = escape(entry.file)
    if entry.renamed_from is not None:
        name = f"{escape(entry.renamed_from)} -> {name}"
    return f"[{style}]{escape(code)}[/{style}] {name}"


def status_command(
    *,
    json: Annotated[bool, Parameter(name="--json", help="Emit JSON")] = False,
) -> None:
    """Show uncommitted changes in the working tree"""
    console = get_console()

    with handle_errors(), CLIContext.get_current().open_repository() as repo:
        entries = repo.get_status()

    if json:
        data = {
            "dirty": bool(entries),
            "entries": [
                {
                    "file": entry.file,
                    "index": entry.index,
                    "worktree": entry.worktree,
                    "renamed_from": entry.renamed_from,
                }
                for entry in entries
            ],
        }
        console.print(format_json(data), markup=False)
        return

    if not entries:
        console.print("[dim]Working tree clean[/dim]")
        return

    for entry in entries:
        console.print(_status_row(entry))
    console.print(f"\n[dim]{len(entries)} path(s) with uncommitted changes[/dim]")


def log_command(
    *,
    number: Annotated[
        int | None,
        Parameter(name=["--number", "-n"], help="Number of commits to show"),
    ] = None,
    skip: Annotated[
        int | None,
        Parameter(name="--skip", help="Number of commits to skip"),
    ] = None,
) -> None:
    """Show commit history, newest first"""
    with handle_errors(), CLIContext.get_current().open_repository() as repo:
        entries = repo.get_log(limit=number, skip=skip)

    sys.stdout.write("\n\n".join(entries))
    if entries:
        sys.stdout.write("\n")


def show_command(
    ref: Annotated[str, Parameter(help="Commit to show")] = "HEAD",
) -> None:
    """Show a commit with its patch"""
    with handle_errors(), CLIContext.get_current().open_repository() as repo:
        text = repo.show_commit(ref)

    sys.stdout.write(text)


def cat_command(
    path: Annotated[str, Parameter(help="File to print")],
    *,
    ref: Annotated[str, Parameter(name="--ref", help="Revision to read")] = "HEAD",
) -> None:
    """Print a file as recorded at a revision"""
    with handle_errors(), CLIContext.get_current().open_repository() as repo:
        content = repo.show_file_bytes(path, ref)

    sys.stdout.flush()
    sys.stdout.buffer.write(content)
    sys.stdout.buffer.flush()


def ls_command(
    directory: Annotated[str, Parameter(help="Directory to list")] = ".",
    *,
    ref: Annotated[str, Parameter(name="--ref", help="Revision to read")] = "HEAD",
) -> None:
    """List a directory as recorded at a revision"""
    console = get_console()

    with handle_errors(), CLIContext.get_current().open_repository() as repo:
        entries = repo.list_directory(directory, ref)

    for entry in entries:
        console.print(entry, markup=False)


def head_command() -> None:
    """Show the current branch and commit"""
    console = get_console()

    with handle_errors(), CLIContext.get_current().open_repository() as repo:
        branch = repo.get_current_branch()
        commit = repo.get_current_commit()

    console.print(f"[bold]{escape(branch)}[/bold] [yellow]{commit}[/yellow]")
