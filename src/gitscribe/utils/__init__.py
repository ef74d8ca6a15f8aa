"""Utilities for gitscribe.

This package provides the git command runner, path resolution helpers and
structured logger factories used by the repository facade.
"""

from gitscribe.utils._exec import (
    COMMAND_NOT_FOUND_EXIT_CODE,
    Argument,
    CommandResult,
    CommandRunner,
    GitBinary,
    build_arguments,
)
from gitscribe.utils._logging import create_cli_logger, create_logger
from gitscribe.utils._paths import (
    StrPath,
    normalize_root,
    resolve_full_path,
    resolve_local_path,
    user_config_dir,
)

__all__ = [
    "COMMAND_NOT_FOUND_EXIT_CODE",
    "Argument",
    "CommandResult",
    "CommandRunner",
    "GitBinary",
    "StrPath",
    "build_arguments",
    "create_cli_logger",
    "create_logger",
    "normalize_root",
    "resolve_full_path",
    "resolve_local_path",
    "user_config_dir",
]
