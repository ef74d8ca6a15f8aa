"""Decoders for git's machine-readable output."""

import re
from typing import Final

from gitscribe.exceptions import StatusParseError
from gitscribe.repository._models import StatusEntry

_STATUS_LINE: Final = re.compile(
    r"^(?P<index>.)(?P<worktree>.) (?P<file>.+?)(?: -> (?P<new>.+))?$"
)

_ESCAPES: Final = {
    "a": 0x07,
    "b": 0x08,
    "t": 0x09,
    "n": 0x0A,
    "v": 0x0B,
    "f": 0x0C,
    "r": 0x0D,
    '"': 0x22,
    "\\": 0x5C,
}


def unquote_path(path: str) -> str:
    """Undo git's C-style quoting of a path.

    git quotes paths holding control characters, double quotes, backslashes
    or (with ``core.quotePath``) non-ASCII bytes, which it writes as octal
    escapes of their UTF-8 encoding. Unquoted paths are returned as is.

    Args:
        path: A path as printed by git.

    Returns:
        The literal path.

    Example:
        >>> unquote_path('"caf\\\\303\\\\251.txt"')
        'café.txt'
    """
    if len(path) < 2 or not (path.startswith('"') and path.endswith('"')):  # noqa: PLR2004
        return path

    body = path[1:-1]
    out = bytearray()
    i = 0
    while i < len(body):
        char = body[i]
        if char != "\\" or i + 1 == len(body):
            out.extend(char.encode("utf-8"))
            i += 1
            continue
        nxt = body[i + 1]
        octal = body[i + 1 : i + 4]
        if len(octal) == 3 and all(c in "01234567" for c in octal):  # noqa: PLR2004
            out.append(int(octal, 8) & 0xFF)
            i += 4
        elif nxt in _ESCAPES:
            out.append(_ESCAPES[nxt])
            i += 2
        else:
            out.extend(nxt.encode("utf-8"))
            i += 2
    return out.decode("utf-8", errors="replace")


def _status_code(char: str) -> str:
    return "" if char == " " else char


def parse_status_line(line: str) -> StatusEntry:
    """Decode one line of ``git status --porcelain`` output.

    Args:
        line: A single line, without its trailing newline.

    Returns:
        The decoded StatusEntry.

    Raises:
        StatusParseError: If the line does not match the short format.
    """
    match = _STATUS_LINE.match(line)
    if match is None:
        msg = f"Cannot parse status line: {line!r}"
        raise StatusParseError(msg, line=line)

    index = _status_code(match["index"])
    worktree = _status_code(match["worktree"])
    file = unquote_path(match["file"])
    new = match["new"]
    if new is None:
        return StatusEntry(file=file, index=index, worktree=worktree)
    return StatusEntry(
        file=unquote_path(new),
        index=index,
        worktree=worktree,
        renamed_from=file,
    )


def parse_status(output: str) -> list[StatusEntry]:
    """Decode the full output of ``git status --porcelain``.

    Args:
        output: Raw standard output.

    Returns:
        One StatusEntry per non-empty line, in git's order.

    Raises:
        StatusParseError: If any line cannot be decoded.
    """
    return [
        parse_status_line(line) for line in output.rstrip().splitlines() if line
    ]


def split_records(output: str) -> list[str]:
    """Split NUL-terminated output into trimmed, non-empty records.

    Args:
        output: Raw standard output of a ``-z`` command.

    Returns:
        The records in output order.
    """
    return [record for record in (r.strip() for r in output.split("\0")) if record]
