"""
Configuration Stores
====================

Collaborators the loaders read from and write to:

- File stores: ``read_file(name) -> bytes``, raising ``FileNotFoundError``
  (or another ``OSError``) when a file is unavailable.
- Environment stores: ``get(name)``, ``set(name, value)`` and membership tests.

Both come in a real flavour (a directory on disk, ``os.environ``) and an
in-memory flavour for tests and embedding applications.
"""

import os
from pathlib import Path
from typing import Dict, Iterator, Mapping, Optional, Protocol, Union

from .exceptions import EnvironmentWriteError


class FileStore(Protocol):
    """Read-only store of configuration files keyed by name."""

    def read_file(self, name: str) -> bytes:
        ...


class EnvironmentStore(Protocol):
    """Process-environment-like key/value store."""

    def get(self, name: str) -> Optional[str]:
        ...

    def set(self, name: str, value: str) -> None:
        ...

    def __contains__(self, name: object) -> bool:
        ...


class DirectoryFileStore:
    """Serves files from a single directory."""

    def __init__(self, root: Union[str, os.PathLike]):
        self.root = Path(root)

    def read_file(self, name: str) -> bytes:
        # Only plain names inside root are served
        if not name or Path(name).name != name or name in (".", ".."):
            raise FileNotFoundError(f"{name!r} is not a file name inside {self.root}")
        return (self.root / name).read_bytes()

    def __repr__(self) -> str:
        return f"DirectoryFileStore({str(self.root)!r})"


class MemoryFileStore:
    """Serves files from a ``name -> content`` mapping."""

    def __init__(self, files: Optional[Mapping[str, Union[bytes, str]]] = None):
        self.files: Dict[str, bytes] = {}
        for name, content in (files or {}).items():
            self.files[name] = content.encode("utf-8") if isinstance(content, str) else content

    def read_file(self, name: str) -> bytes:
        try:
            return self.files[name]
        except KeyError:
            raise FileNotFoundError(f"no such file: {name}") from None


class OsEnvironment:
    """The live process environment."""

    def get(self, name: str) -> Optional[str]:
        return os.environ.get(name)

    def set(self, name: str, value: str) -> None:
        try:
            os.environ[name] = value
        except (ValueError, OSError) as e:
            raise EnvironmentWriteError(name, value, str(e)) from e

    def __contains__(self, name: object) -> bool:
        return name in os.environ

    def __iter__(self) -> Iterator[str]:
        return iter(os.environ)


class MemoryEnvironment:
    """A private environment backed by a ``dict``."""

    def __init__(self, initial: Optional[Mapping[str, str]] = None):
        self.vars: Dict[str, str] = dict(initial or {})

    def get(self, name: str) -> Optional[str]:
        return self.vars.get(name)

    def set(self, name: str, value: str) -> None:
        if not name or "=" in name or "\x00" in name or "\x00" in value:
            raise EnvironmentWriteError(name, value, "illegal environment variable name or value")
        self.vars[name] = value

    def __contains__(self, name: object) -> bool:
        return name in self.vars

    def __iter__(self) -> Iterator[str]:
        return iter(self.vars)


__all__ = [
    "FileStore",
    "EnvironmentStore",
    "DirectoryFileStore",
    "MemoryFileStore",
    "OsEnvironment",
    "MemoryEnvironment",
]
