"""
dotenvconfig - .env Configuration Profiles
==========================================

Loads KEY=VALUE configuration files selected by profile, with live environment
variables always taking precedence over file values.

Modules:
- config: Parser, profile selection, loaders, stores, context helpers and errors
- utils: Logging setup
"""

__version__ = "1.0.0"

from .config.config_loader import Config, ConfigLoader, LoaderOptions, load_config
from .config.environment_manager import EnvironmentManager, load_env
from .config.parser import parse
from .config.profile import select_config_file
from .config.context import to_context, from_context, push_config, reset_config, current_config
from .config.stores import DirectoryFileStore, MemoryFileStore, OsEnvironment, MemoryEnvironment
from .config.exceptions import (
    ConfigError,
    StoreUnavailableError,
    ConfigReadError,
    ConfigFileNotFoundError,
    ParseError,
    MissingKeyError,
    ConversionError,
    ContextError,
    EnvironmentWriteError,
    FatalConfigError,
)
from .utils.logger import setup_logging

__all__ = [
    "Config",
    "ConfigLoader",
    "LoaderOptions",
    "load_config",
    "EnvironmentManager",
    "load_env",
    "parse",
    "select_config_file",
    "to_context",
    "from_context",
    "push_config",
    "reset_config",
    "current_config",
    "DirectoryFileStore",
    "MemoryFileStore",
    "OsEnvironment",
    "MemoryEnvironment",
    "ConfigError",
    "StoreUnavailableError",
    "ConfigReadError",
    "ConfigFileNotFoundError",
    "ParseError",
    "MissingKeyError",
    "ConversionError",
    "ContextError",
    "EnvironmentWriteError",
    "FatalConfigError",
    "setup_logging",
]
