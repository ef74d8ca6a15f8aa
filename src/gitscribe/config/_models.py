"""Configuration models.

This module defines the pydantic models for gitscribe configuration: the
repository defaults (creation modes, commit author, git executable) and the
logging section.
"""

import re
from enum import StrEnum
from typing import ClassVar, Final

from pydantic import BaseModel, ConfigDict, Field, field_validator

DEFAULT_FILE_MODE: Final = 0o644
DEFAULT_DIRECTORY_MODE: Final = 0o755

_MAX_MODE: Final = 0o7777
_AUTHOR_PATTERN: Final = re.compile(r"^[^<>]+ <[^<>]*>$")


class LogLevel(StrEnum):
    """Log level threshold values.

    Values are ordered from most verbose (debug) to least verbose (error).
    """

    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


class LogFormat(StrEnum):
    """Log output format values."""

    JSON = "json"
    TEXT = "text"


class LoggingConfig(BaseModel):
    """Logging configuration section.

    Attributes:
        level: Log level threshold.
        format: Log output format.
        file: Path to log file (empty logs to stderr).
    """

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True, extra="ignore")

    level: LogLevel = LogLevel.WARNING
    format: LogFormat = LogFormat.JSON
    file: str = ""


def parse_mode(value: object) -> int:
    """Parse a permission mode given as an int or an octal string.

    Args:
        value: An int (``0o644``) or a string (``"0644"``, ``"0o644"``, ``"644"``).

    Returns:
        The mode as an int.

    Raises:
        ValueError: If the value is not a mode in the range 0..0o7777.
    """
    if isinstance(value, bool):
        msg = "mode must be an integer or octal string"
        raise ValueError(msg)  # noqa: TRY004
    if isinstance(value, str):
        text = value.strip().lower().removeprefix("0o")
        try:
            mode = int(text, 8)
        except ValueError:
            msg = f"invalid octal mode: {value!r}"
            raise ValueError(msg) from None
    elif isinstance(value, int):
        mode = value
    else:
        msg = "mode must be an integer or octal string"
        raise ValueError(msg)  # noqa: TRY004

    if not 0 <= mode <= _MAX_MODE:
        msg = f"mode out of range: {oct(mode)}"
        raise ValueError(msg)
    return mode


class GitScribeConfig(BaseModel):
    """Top-level gitscribe configuration.

    Attributes:
        file_mode: Mode applied to files the repository creates itself.
        directory_mode: Mode applied to directories the repository creates itself.
        author: Commit author as "Name <email>", or None for git's own identity.
        git_binary: Name or path of the git executable.
        logging: Logging section.
    """

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True, extra="ignore")

    file_mode: int = Field(
        default=DEFAULT_FILE_MODE,
        description="Mode applied to files created by the repository.",
    )
    directory_mode: int = Field(
        default=DEFAULT_DIRECTORY_MODE,
        description="Mode applied to directories created by the repository.",
    )
    author: str | None = Field(
        default=None,
        description='Commit author, formatted as "Name <email>".',
    )
    git_binary: str = Field(default="git", min_length=1)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @field_validator("file_mode", "directory_mode", mode="before")
    @classmethod
    def _validate_mode(cls, value: object) -> int:
        return parse_mode(value)

    @field_validator("author")
    @classmethod
    def _validate_author(cls, value: str | None) -> str | None:
        if value is None:
            return None
        value = value.strip()
        if not value:
            return None
        if not _AUTHOR_PATTERN.match(value):
            msg = 'author must look like "Name <email>"'
            raise ValueError(msg)
        return value
