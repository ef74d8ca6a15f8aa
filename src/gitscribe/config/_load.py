# pyright: reportExplicitAny=false, reportAny=false
"""Configuration discovery and loading.

Sources are merged from lowest to highest precedence:

1. built-in defaults
2. user file (``<user config dir>/config.toml``)
3. repository file (``<git dir>/gitscribe.toml``, never tracked)
4. explicit file passed by the caller
5. ``GITSCRIBE_*`` environment variables
6. overrides passed by the caller
"""

import sys
from dataclasses import dataclass
from enum import StrEnum
from pathlib import Path
from typing import Any

from dulwich.errors import NotGitRepository
from dulwich.repo import Repo
from pydantic import ValidationError

from gitscribe.config._loader import deep_merge, parse_env_vars, read_toml_file
from gitscribe.config._models import GitScribeConfig
from gitscribe.exceptions import ConfigError, ConfigValidationError
from gitscribe.utils._paths import user_config_dir

REPOSITORY_CONFIG_NAME = "gitscribe.toml"


class ConfigSourceName(StrEnum):
    """Configuration source names in precedence order (highest first)."""

    OVERRIDES = "overrides"
    ENV = "env"
    FILE = "file"
    REPOSITORY = "repository"
    USER = "user"
    DEFAULT = "default"


@dataclass(frozen=True, slots=True)
class ConfigSource:
    """A configuration source.

    Attributes:
        name: The source type identifier.
        path: Path to the config file, or None for non-file sources.
        values: Configuration values from this source.
    """

    name: ConfigSourceName
    path: Path | None
    values: dict[str, Any]


def get_git_dir(path: Path) -> Path | None:
    """Get the git metadata directory for the repository containing ``path``.

    Linked worktrees return their worktree-specific directory.

    Args:
        path: Directory to start searching from.

    Returns:
        Path to the git directory, or None if not in a git repository.
    """
    try:
        repo = Repo.discover(str(path.resolve()))
    except NotGitRepository:
        return None
    try:
        controldir = repo.controldir()
    finally:
        repo.close()
    return Path(controldir)


def _read_optional(name: ConfigSourceName, path: Path) -> ConfigSource | None:
    try:
        if not path.is_file():
            return None
    except OSError:
        return None
    return ConfigSource(name=name, path=path, values=read_toml_file(path))


def discover_sources(
    root: Path | None = None,
    *,
    config_path: Path | None = None,
    include_env: bool = True,
    overrides: dict[str, Any] | None = None,
) -> list[ConfigSource]:
    """Collect the configuration sources that exist, lowest precedence first.

    Args:
        root: Repository root used to locate the repository file.
        config_path: Explicit config file; must exist.
        include_env: Include GITSCRIBE_* environment variables.
        overrides: Values that take precedence over everything else.

    Returns:
        List of ConfigSource objects, lowest precedence first.

    Raises:
        FileNotFoundError: If ``config_path`` does not exist.
        ConfigLoadError: If a file cannot be parsed.
    """
    sources: list[ConfigSource] = []

    user = _read_optional(ConfigSourceName.USER, user_config_dir() / "config.toml")
    if user is not None:
        sources.append(user)

    if root is not None:
        git_dir = get_git_dir(root)
        if git_dir is not None:
            repository = _read_optional(
                ConfigSourceName.REPOSITORY, git_dir / REPOSITORY_CONFIG_NAME
            )
            if repository is not None:
                sources.append(repository)

    if config_path is not None:
        sources.append(
            ConfigSource(
                name=ConfigSourceName.FILE,
                path=config_path,
                values=read_toml_file(config_path),
            )
        )

    if include_env:
        env_values = parse_env_vars()
        if env_values:
            sources.append(
                ConfigSource(name=ConfigSourceName.ENV, path=None, values=env_values)
            )

    if overrides:
        sources.append(
            ConfigSource(name=ConfigSourceName.OVERRIDES, path=None, values=overrides)
        )

    return sources


def load_config(
    root: Path | None = None,
    *,
    config_path: Path | None = None,
    include_env: bool = True,
    overrides: dict[str, Any] | None = None,
) -> GitScribeConfig:
    """Load and validate configuration from every available source.

    Args:
        root: Repository root used to locate the repository file.
        config_path: Explicit config file; must exist.
        include_env: Include GITSCRIBE_* environment variables.
        overrides: Values that take precedence over everything else.

    Returns:
        The merged, validated GitScribeConfig.

    Raises:
        FileNotFoundError: If ``config_path`` does not exist.
        ConfigLoadError: If a file cannot be parsed.
        ConfigValidationError: If the merged values are invalid.

    Example:
        >>> config = load_config(overrides={"author": "Jo <jo@example.com>"})
        >>> config.author
        'Jo <jo@example.com>'
    """
    sources = discover_sources(
        root, config_path=config_path, include_env=include_env, overrides=overrides
    )

    merged: dict[str, Any] = {}
    for source in sources:
        merged = deep_merge(merged, source.values)

    try:
        return GitScribeConfig.model_validate(merged)
    except ValidationError as e:
        error = e.errors()[0]
        key = ".".join(str(part) for part in error.get("loc", ()))
        msg = f"Invalid configuration value for '{key}'"
        raise ConfigValidationError(
            msg,
            key=key,
            value=error.get("input"),
            expected=str(error.get("msg", "Validation error")),
            source=_source_for_key(sources, key),
        ) from e


def _source_for_key(sources: list[ConfigSource], key: str) -> str | None:
    """Name the highest-precedence source that sets ``key``."""
    for source in reversed(sources):
        current: Any = source.values
        for part in key.split("."):
            if not isinstance(current, dict) or part not in current:
                break
            current = current[part]
        else:
            return source.name.value
    return None


def safe_load_config(
    root: Path | None = None,
    *,
    config_path: Path | None = None,
    overrides: dict[str, Any] | None = None,
) -> tuple[GitScribeConfig, str | None]:
    """Load configuration, falling back to defaults on error.

    Errors are reported on stderr rather than raised, so the CLI keeps
    working with a broken config file.

    Args:
        root: Repository root used to locate the repository file.
        config_path: Explicit config file.
        overrides: Values that take precedence over everything else.

    Returns:
        Tuple of (config, error_message). On success, error_message is None.
    """
    try:
        return load_config(root, config_path=config_path, overrides=overrides), None
    except (ConfigError, FileNotFoundError) as e:
        error_msg = str(e)
    except OSError as e:
        error_msg = f"Failed to load config: {e}"

    print(f"Warning: {error_msg}", file=sys.stderr)  # noqa: T201
    return GitScribeConfig(), error_msg


__all__ = [
    "REPOSITORY_CONFIG_NAME",
    "ConfigSource",
    "ConfigSourceName",
    "discover_sources",
    "get_git_dir",
    "load_config",
    "safe_load_config",
]
