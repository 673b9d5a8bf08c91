"""Map-returning configuration loader.

Selects a ``<profile>.env`` file (see :mod:`dotenvconfig.config.profile`),
reads it from a file store, parses it and returns an immutable :class:`Config`.
Lookups on the returned object always prefer a non-empty live environment
variable over the file-sourced value.

Missing keys raise :class:`MissingKeyError`; the ``must_*`` accessors (or
``LoaderOptions(must=True)``) turn any lookup failure into
:class:`FatalConfigError` for required startup configuration.
"""
from __future__ import annotations

import logging
import os
import re
from dataclasses import dataclass, field, fields, replace
from types import MappingProxyType
from typing import Any, Dict, Iterator, Mapping, Optional, Tuple

from .exceptions import (
    ConfigError,
    ConfigFileNotFoundError,
    ConfigReadError,
    ConversionError,
    FatalConfigError,
    MissingKeyError,
    ParseError,
    StoreUnavailableError,
)
from .parser import parse
from .profile import FILE_EXTENSION, select_config_file
from .stores import DirectoryFileStore, EnvironmentStore, FileStore, OsEnvironment
from ..utils.logger import LOG_FORMATS, null_logger, setup_logging

DEFAULT_SELECTOR_KEY = "ENVIRONMENT"
DEFAULT_CONTEXT_KEY = "config"

_INT_PATTERN = re.compile(r"[+-]?[0-9]+")


@dataclass(frozen=True)
class LoaderOptions:
    """Options recognised by the loaders."""
    selector_key: str = DEFAULT_SELECTOR_KEY  # env var naming the profile
    fallback: str = ""                        # profile used when selector_key is unset
    logging_enabled: bool = False
    log_format: str = "text"                  # 'text' or 'json'
    context_key: str = DEFAULT_CONTEXT_KEY
    must: bool = False                        # plain accessors abort like must_get

    def __post_init__(self):
        if self.log_format not in LOG_FORMATS:
            raise ValueError(f"Invalid log format: {self.log_format}. Must be one of {LOG_FORMATS}")

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "LoaderOptions":
        """Build options from a plain mapping, rejecting unknown keys."""
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ValueError(f"Unknown loader options: {', '.join(unknown)}")
        return cls(**dict(data))


@dataclass(frozen=True)
class Config:
    """Parsed configuration layered under the live environment."""
    values: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}))
    env: EnvironmentStore = field(default_factory=OsEnvironment, compare=False, repr=False)
    file_name: str = ""
    must: bool = False
    context_key: str = field(default=DEFAULT_CONTEXT_KEY, compare=False)
    logger: logging.Logger = field(default_factory=null_logger, compare=False, repr=False)

    def __post_init__(self):
        if not isinstance(self.values, MappingProxyType):
            object.__setattr__(self, "values", MappingProxyType(dict(self.values)))

    # ------------------------------------------------------------------
    @property
    def profile(self) -> str:
        if self.file_name.endswith(FILE_EXTENSION):
            return self.file_name[:-len(FILE_EXTENSION)]
        return self.file_name

    def _lookup(self, key: str) -> str:
        val = self.env.get(key)
        if val:
            return val
        try:
            return self.values[key]
        except KeyError:
            raise MissingKeyError(key) from None

    @staticmethod
    def _to_int(key: str, value: str) -> int:
        # ASCII digits with an optional sign, nothing else
        if not _INT_PATTERN.fullmatch(value):
            raise ConversionError(key, value)
        return int(value, 10)

    def _abort(self, error: ConfigError) -> FatalConfigError:
        self.logger.error(str(error))
        return FatalConfigError(error)

    # ------------------------------------------------------------------
    def get(self, key: str) -> str:
        """Return the environment value for ``key`` if non-empty, else the file value."""
        if self.must:
            return self.must_get(key)
        return self._lookup(key)

    def get_as_int(self, key: str) -> int:
        """Return ``get(key)`` converted to a base-10 integer."""
        if self.must:
            return self.must_get_as_int(key)
        return self._to_int(key, self._lookup(key))

    def must_get(self, key: str) -> str:
        try:
            return self._lookup(key)
        except ConfigError as e:
            raise self._abort(e) from e

    def must_get_as_int(self, key: str) -> int:
        try:
            return self._to_int(key, self._lookup(key))
        except ConfigError as e:
            raise self._abort(e) from e

    # ------------------------------------------------------------------
    def __contains__(self, key: object) -> bool:
        return key in self.values or bool(isinstance(key, str) and self.env.get(key))

    def __iter__(self) -> Iterator[str]:
        return iter(self.values)

    def keys(self):
        return self.values.keys()

    def as_dict(self) -> Dict[str, str]:
        """File keys with environment overrides applied."""
        return {key: self._lookup(key) for key in self.values}


class ConfigLoader:
    """Loads a :class:`Config` from the selected ``.env`` file."""

    def __init__(
        self,
        file_store: Optional[FileStore],
        options: Optional[LoaderOptions] = None,
        env: Optional[EnvironmentStore] = None,
        logger: Optional[logging.Logger] = None,
    ):
        self.file_store = file_store
        self.options = options or LoaderOptions()
        self.env = env if env is not None else OsEnvironment()
        if logger is None:
            logger = (
                setup_logging(enabled=True, log_format=self.options.log_format)
                if self.options.logging_enabled
                else null_logger()
            )
        self.logger = logger

    def with_environment(self, environment: str) -> "ConfigLoader":
        """Return a loader that falls back to ``environment`` instead."""
        return ConfigLoader(
            self.file_store,
            replace(self.options, fallback=environment),
            env=self.env,
            logger=self.logger,
        )

    def _fail(self, error: ConfigError) -> ConfigError:
        self.logger.error(str(error))
        return error

    # ------------------------------------------------------------------
    def read(self) -> Tuple[str, Dict[str, str]]:
        """
        Select, read and parse the configuration file.

        Returns:
            Tuple of (file name, parsed values)
        """
        if self.file_store is None:
            raise self._fail(StoreUnavailableError())

        file_name = select_config_file(
            self.options.selector_key, self.options.fallback, self.env, self.logger
        )

        try:
            data = self.file_store.read_file(file_name)
        except FileNotFoundError as e:
            raise self._fail(ConfigFileNotFoundError(file_name, str(e))) from e
        except OSError as e:
            raise self._fail(ConfigReadError(file_name, str(e))) from e

        try:
            values = parse(data)
        except ParseError as e:
            raise self._fail(e.with_file(file_name)) from e

        self.logger.info(f"loading config from: {file_name}")
        return file_name, values

    def load(self) -> Config:
        file_name, values = self.read()
        return Config(
            values=MappingProxyType(values),
            env=self.env,
            file_name=file_name,
            must=self.options.must,
            context_key=self.options.context_key,
            logger=self.logger,
        )


def load_config(
    directory: str | os.PathLike[str] = ".",
    environment: str = "",
    env: Optional[EnvironmentStore] = None,
    **options: Any,
) -> Config:
    """Load a :class:`Config` from ``directory`` in one call."""
    opts = LoaderOptions.from_mapping({"fallback": environment, **options})
    return ConfigLoader(DirectoryFileStore(directory), opts, env=env).load()


__all__ = ["LoaderOptions", "Config", "ConfigLoader", "load_config"]
