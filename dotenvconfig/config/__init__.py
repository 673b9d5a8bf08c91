"""Configuration package.

Provides the .env parser, profile selection, the map-returning ConfigLoader
and the environment-populating EnvironmentManager.
"""
from .config_loader import Config, ConfigLoader, LoaderOptions, load_config  # noqa: F401
from .environment_manager import EnvironmentManager, load_env  # noqa: F401
from .parser import parse  # noqa: F401
from .profile import select_config_file, select_profile  # noqa: F401
from .context import to_context, from_context, push_config, reset_config, current_config  # noqa: F401
