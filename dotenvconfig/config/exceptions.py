"""
Configuration Errors
====================

Every failure raised while selecting, reading, parsing or querying a
configuration derives from :class:`ConfigError`, except :class:`FatalConfigError`
which is raised by the ``must_*`` accessors and deliberately escapes
``except Exception`` handlers.
"""

from typing import Optional


class ConfigError(Exception):
    """Base class for configuration errors."""


class StoreUnavailableError(ConfigError):
    """Raised when no file store was supplied to a loader."""

    def __init__(self, message: str = "error loading config, file store was None"):
        super().__init__(message)


class ConfigReadError(ConfigError):
    """Raised when the selected configuration file cannot be read."""

    def __init__(self, file_name: str, reason: str):
        self.file_name = file_name
        super().__init__(f"error loading config from {file_name}: {reason}")


class ConfigFileNotFoundError(ConfigReadError):
    """Raised when the selected configuration file does not exist."""


class ParseError(ConfigError, ValueError):
    """Raised for a malformed line; no partial result is ever returned."""

    def __init__(self, line: str, file_name: Optional[str] = None, reason: str = "error parsing line"):
        self.line = line
        self.file_name = file_name
        self.reason = reason
        super().__init__(self._describe())

    def _describe(self) -> str:
        message = f"{self.reason}: {self.line}"
        if self.file_name:
            message = f"error loading config from {self.file_name}: {message}"
        return message

    def with_file(self, file_name: str) -> "ParseError":
        """Return a copy of this error annotated with ``file_name``."""
        return ParseError(self.line, file_name=file_name, reason=self.reason)


class MissingKeyError(ConfigError, KeyError):
    """Raised when a key is found neither in the environment nor in the file."""

    def __init__(self, key: str):
        self.key = key
        super().__init__(key)

    def __str__(self) -> str:
        # KeyError would repr() the key
        return f"missing value in config: {self.key}"


class ConversionError(ConfigError, ValueError):
    """Raised when a present value cannot be coerced to the requested type."""

    def __init__(self, key: str, value: str):
        self.key = key
        self.value = value
        super().__init__(f"error converting config value to int with key: {key}")


class ContextError(ConfigError):
    """Raised for a missing context or a missing/wrong-typed context value."""


class EnvironmentWriteError(ConfigError):
    """Raised when a key cannot be written into the process environment."""

    def __init__(self, key: str, value: str, reason: str = ""):
        self.key = key
        self.value = value
        message = f"error setting environment variable {key}={value}"
        if reason:
            message += f": {reason}"
        super().__init__(message)


class FatalConfigError(SystemExit):
    """Abort raised by ``must_*`` accessors for required configuration."""

    def __init__(self, cause: ConfigError):
        self.cause = cause
        super().__init__(f"fatal configuration error: {cause}")
