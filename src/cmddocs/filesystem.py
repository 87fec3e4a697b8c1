"""Filesystem abstraction used by the tree walkers.

Every file the generators write goes through a ``FileSystem``. Two
implementations are provided:

- ``OsFileSystem``: the real file system (the default)
- ``MemoryFileSystem``: an in-memory map of path -> text, for tests and
  dry runs

Walkers take an explicit ``fs`` argument. When it is omitted they fall back
to the module-level default returned by ``get_fs()``, which callers may swap
with ``set_fs()`` and must restore themselves.
"""

import io
import logging
import posixpath
from pathlib import Path
from typing import Protocol, TextIO

logger = logging.getLogger(__name__)

__all__ = [
    "FileSystem",
    "FileSystemError",
    "MemoryFileSystem",
    "OsFileSystem",
    "get_fs",
    "set_fs",
]


class FileSystemError(Exception):
    """Raised when a directory or file cannot be created."""

    pass


class FileSystem(Protocol):
    """Operations the generators need from a file system."""

    def mkdir_all(self, path: str) -> None: ...

    def create(self, path: str) -> TextIO: ...

    def exists(self, path: str) -> bool: ...

    def read_text(self, path: str) -> str: ...


class OsFileSystem:
    """File system backed by the local disk."""

    def mkdir_all(self, path: str) -> None:
        try:
            Path(path).mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise FileSystemError(f"Failed to create directory {path}: {e}") from e

    def create(self, path: str) -> TextIO:
        """Create (or truncate) a file for writing."""
        try:
            return open(path, "w", encoding="utf-8")
        except OSError as e:
            raise FileSystemError(f"Failed to create file {path}: {e}") from e

    def exists(self, path: str) -> bool:
        return Path(path).exists()

    def read_text(self, path: str) -> str:
        return Path(path).read_text(encoding="utf-8")


class _MemoryFile(io.StringIO):
    """Text buffer that stores its content in the owning map on close."""

    def __init__(self, files: dict[str, str], path: str):
        super().__init__()
        self._files = files
        self._path = path
        files[path] = ""

    def flush(self) -> None:
        super().flush()
        if not self.closed:
            self._files[self._path] = self.getvalue()

    def close(self) -> None:
        if not self.closed:
            self._files[self._path] = self.getvalue()
        super().close()


class MemoryFileSystem:
    """File system kept entirely in memory.

    Paths are normalized POSIX-style strings. Directories must exist before
    files are created in them, matching the behavior of the real disk.
    """

    def __init__(self) -> None:
        self.files: dict[str, str] = {}
        self.dirs: set[str] = {"/", "."}

    @staticmethod
    def _normalize(path: str) -> str:
        return posixpath.normpath(str(path).replace("\\", "/"))

    def mkdir_all(self, path: str) -> None:
        path = self._normalize(path)
        if path in self.files:
            raise FileSystemError(f"Failed to create directory {path}: a file exists there")
        while path not in self.dirs:
            self.dirs.add(path)
            path = posixpath.dirname(path) or "."

    def create(self, path: str) -> TextIO:
        path = self._normalize(path)
        parent = posixpath.dirname(path) or "."
        if parent not in self.dirs:
            raise FileSystemError(f"Failed to create file {path}: no such directory {parent}")
        if path in self.dirs:
            raise FileSystemError(f"Failed to create file {path}: is a directory")
        return _MemoryFile(self.files, path)

    def exists(self, path: str) -> bool:
        path = self._normalize(path)
        return path in self.files or path in self.dirs

    def read_text(self, path: str) -> str:
        path = self._normalize(path)
        if path not in self.files:
            raise FileNotFoundError(path)
        return self.files[path]


# Global default filesystem
_fs: FileSystem = OsFileSystem()


def get_fs() -> FileSystem:
    """Return the filesystem walkers use when none is passed explicitly."""
    return _fs


def set_fs(fs: FileSystem) -> None:
    """Replace the default filesystem.

    Callers that swap it (typically tests) are responsible for restoring
    the previous value.
    """
    global _fs
    logger.debug(f"Default filesystem set to {type(fs).__name__}")
    _fs = fs
