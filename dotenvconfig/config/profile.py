"""
Profile Selection
=================

Decides which ``<profile>.env`` file a loader reads. The profile comes from,
in order:

1. the environment variable named by ``selector_key``, whenever it is set
   (an empty value counts as set),
2. the explicit ``fallback`` profile, when non-empty,
3. ``default``.
"""

import logging
from typing import Optional

from .stores import EnvironmentStore

DEFAULT_PROFILE = "default"
FILE_EXTENSION = ".env"

logger = logging.getLogger(__name__)


def build_filename(profile: str) -> str:
    return profile + FILE_EXTENSION


def select_profile(
    selector_key: Optional[str],
    fallback: Optional[str],
    env: EnvironmentStore,
    log: Optional[logging.Logger] = None,
) -> str:
    """
    Resolve the active profile name.

    Args:
        selector_key: Name of the environment variable holding the profile
        fallback: Profile used when ``selector_key`` is not set
        env: Environment store consulted for ``selector_key``
        log: Logger for selection messages

    Returns:
        The profile name, without extension
    """
    log = log or logger

    if selector_key and selector_key in env:
        log.info(f"found a profile variable of {selector_key} which will be used to set the current profile")
        return env.get(selector_key) or ""

    if fallback:
        log.info(f"setting current profile to {fallback}")
        return fallback

    log.info(f"no profile set, defaulting to '{DEFAULT_PROFILE}'")
    return DEFAULT_PROFILE


def select_config_file(
    selector_key: Optional[str],
    fallback: Optional[str],
    env: EnvironmentStore,
    log: Optional[logging.Logger] = None,
) -> str:
    """Resolve the active profile and return its file name."""
    return build_filename(select_profile(selector_key, fallback, env, log))


__all__ = ["DEFAULT_PROFILE", "FILE_EXTENSION", "build_filename", "select_profile", "select_config_file"]
