"""Configuration for the gitsource command line.

Values come from, lowest to highest precedence: built-in defaults, an
optional TOML file, ``GITSOURCE_`` environment variables, and options
given on the command line.

Example:
    >>> from gitsource.config import Config
    >>> config = Config.load(environ={"GITSOURCE_FETCH__DEFAULT_BRANCH": "main"})
    >>> config.fetch.default_branch
    'main'
"""

from gitsource.config._loader import (
    copy_value,
    deep_merge,
    parse_env_vars,
    read_toml_file,
    set_nested_key,
)
from gitsource.config._models import (
    ENV_PREFIX,
    Config,
    FetchConfig,
    LogFormat,
    LoggingConfig,
    LogLevel,
)

__all__ = [
    "ENV_PREFIX",
    "Config",
    "FetchConfig",
    "LogFormat",
    "LogLevel",
    "LoggingConfig",
    "copy_value",
    "deep_merge",
    "parse_env_vars",
    "read_toml_file",
    "set_nested_key",
]
