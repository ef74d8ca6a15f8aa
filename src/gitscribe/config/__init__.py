"""Configuration for gitscribe.

Configuration is read from TOML files and ``GITSCRIBE_*`` environment
variables, merged, and validated into a frozen :class:`GitScribeConfig`.
"""

from gitscribe.config._load import (
    REPOSITORY_CONFIG_NAME,
    ConfigSource,
    ConfigSourceName,
    discover_sources,
    get_git_dir,
    load_config,
    safe_load_config,
)
from gitscribe.config._loader import (
    deep_merge,
    parse_env_vars,
    read_toml_file,
    set_nested_key,
)
from gitscribe.config._models import (
    DEFAULT_DIRECTORY_MODE,
    DEFAULT_FILE_MODE,
    GitScribeConfig,
    LogFormat,
    LoggingConfig,
    LogLevel,
    parse_mode,
)

__all__ = [
    "DEFAULT_DIRECTORY_MODE",
    "DEFAULT_FILE_MODE",
    "REPOSITORY_CONFIG_NAME",
    "ConfigSource",
    "ConfigSourceName",
    "GitScribeConfig",
    "LogFormat",
    "LogLevel",
    "LoggingConfig",
    "deep_merge",
    "discover_sources",
    "get_git_dir",
    "load_config",
    "parse_env_vars",
    "parse_mode",
    "read_toml_file",
    "safe_load_config",
    "set_nested_key",
]
