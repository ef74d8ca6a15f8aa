# pyright: reportAny=false, reportUnknownVariableType=false, reportUnknownArgumentType=false
"""Raw configuration values: TOML files, environment variables, merging.

Everything here works on plain dictionaries. Validation happens later, when
the merged dictionary is handed to :class:`GitScribeConfig`.
"""

import os
import re
import tomllib
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Final

from gitscribe.exceptions import ConfigLoadError

ENV_PREFIX: Final = "GITSCRIBE_"

# Read directly by the logging factory, never part of GitScribeConfig
_RESERVED_ENV_KEYS: Final = frozenset({"DEBUG"})

_LOCATION: Final = re.compile(r"\(at line (?P<line>\d+), column (?P<column>\d+)\)")

type RawConfig = dict[str, Any]  # pyright: ignore[reportExplicitAny]


def read_toml_file(path: Path) -> RawConfig:
    """Parse a TOML configuration file.

    Raises:
        FileNotFoundError: If the file does not exist.
        ConfigLoadError: If the content is not valid TOML or UTF-8.
    """
    content = path.read_bytes()
    try:
        return tomllib.loads(content.decode("utf-8"))
    except UnicodeDecodeError as e:
        msg = f'"{path}" is not UTF-8 encoded'
        raise ConfigLoadError(msg, path=path) from e
    except tomllib.TOMLDecodeError as e:
        line, column = _error_location(e)
        msg = f'Cannot parse "{path}": {e}'
        raise ConfigLoadError(msg, path=path, line=line, column=column) from e


def _error_location(error: tomllib.TOMLDecodeError) -> tuple[int | None, int | None]:
    # lineno/colno attributes appeared in Python 3.14
    line: int | None = getattr(error, "lineno", None)
    column: int | None = getattr(error, "colno", None)
    if line is None:
        match = _LOCATION.search(str(error))
        if match is not None:
            line, column = int(match["line"]), int(match["column"])
    return line, column


def copy_value(value: Any) -> Any:  # pyright: ignore[reportExplicitAny]
    """Copy nested dicts and lists so merged results never alias their inputs."""
    match value:
        case dict():
            return {key: copy_value(item) for key, item in value.items()}
        case list():
            return [copy_value(item) for item in value]
        case _:
            return value


def deep_merge(base: RawConfig, override: RawConfig) -> RawConfig:
    """Return ``base`` with ``override`` layered on top.

    Tables merge key by key; any other value in ``override`` (lists
    included) replaces the one in ``base``. Neither input is modified.

    Example:
        >>> deep_merge({"logging": {"level": "info"}}, {"logging": {"file": "x"}})
        {'logging': {'level': 'info', 'file': 'x'}}
    """
    merged: RawConfig = copy_value(base)
    for key, value in override.items():
        current = merged.get(key)
        if isinstance(current, dict) and isinstance(value, dict):
            merged[key] = deep_merge(current, value)
        else:
            merged[key] = copy_value(value)
    return merged


def set_nested_key(d: RawConfig, key_path: str, value: Any) -> None:  # pyright: ignore[reportExplicitAny]
    """Store ``value`` under a dotted key, replacing non-table intermediates.

    Example:
        >>> d = {}
        >>> set_nested_key(d, "logging.level", "debug")
        >>> d
        {'logging': {'level': 'debug'}}
    """
    *tables, leaf = key_path.split(".")
    current = d
    for table in tables:
        child = current.get(table)
        if not isinstance(child, dict):
            child = current[table] = {}
        current = child
    current[leaf] = value


def parse_env_vars(
    prefix: str = ENV_PREFIX, environ: Mapping[str, str] | None = None
) -> RawConfig:
    """Collect ``GITSCRIBE_*`` variables as a nested raw config.

    ``GITSCRIBE_LOGGING__LEVEL=debug`` becomes ``{"logging": {"level":
    "debug"}}``. Values stay strings so that modes such as ``"0644"`` are
    read as octal by the model.

    Args:
        prefix: Variable name prefix.
        environ: Variables to read; ``os.environ`` when None.
    """
    environ = os.environ if environ is None else environ
    result: RawConfig = {}

    for name, value in environ.items():
        if not name.startswith(prefix):
            continue
        key = name.removeprefix(prefix)
        if not key or key in _RESERVED_ENV_KEYS:
            continue
        parts = [part for part in key.lower().split("__") if part]
        if parts:
            set_nested_key(result, ".".join(parts), value)

    return result
