"""Base filesystem interface and dataclasses.

Defines the handle surface that every filesystem vended by a
``FileSystemProvider`` exposes (LocalFS, MemoryFS, or any test double).
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Protocol, runtime_checkable


@dataclass
class FileMetadata:
    """Metadata for a single file or directory.

    Attributes:
        size: File size in bytes (0 for directories).
        created_at: ISO 8601 timestamp when file was created (UTC).
        modified_at: ISO 8601 timestamp when file was last modified (UTC).
        is_dir: True if this is a directory, False for files.
    """

    size: int
    created_at: str
    modified_at: str
    is_dir: bool = False

    # os.stat_result-compatible properties so callers written against
    # os.stat() keep working when handed a FileMetadata.

    @property
    def st_size(self) -> int:
        return self.size

    @property
    def st_mode(self) -> int:
        return 0o040755 if self.is_dir else 0o100644

    def _parse_ts(self, iso_str: str) -> float:
        try:
            return datetime.fromisoformat(iso_str).timestamp()
        except ValueError:
            return 0.0

    @property
    def st_mtime(self) -> float:
        return self._parse_ts(self.modified_at)

    @property
    def st_ctime(self) -> float:
        return self._parse_ts(self.created_at)


@runtime_checkable
class FileSystem(Protocol):
    """Capability surface of a filesystem handle.

    Call sites depend on this Protocol only, never on a concrete class, so
    a provider can hand out the real filesystem in production and an
    in-memory fake under test.
    """

    def open(self, path: str | os.PathLike[str], mode: str = "r", **kwargs: Any) -> Any:
        """Open a file."""
        ...

    def read(self, path: str | os.PathLike[str]) -> bytes:
        """Read an entire file as bytes."""
        ...

    def write(self, path: str | os.PathLike[str], content: bytes, mode: str = "w") -> None:
        """Write bytes to a file, creating parent directories."""
        ...

    def read_text(self, path: str | os.PathLike[str], encoding: str = "utf-8") -> str:
        """Read an entire file as text."""
        ...

    def write_text(
        self, path: str | os.PathLike[str], content: str, encoding: str = "utf-8"
    ) -> None:
        """Write text to a file, creating parent directories."""
        ...

    def exists(self, path: str | os.PathLike[str]) -> bool:
        """Check if path exists."""
        ...

    def isfile(self, path: str | os.PathLike[str]) -> bool:
        """Check if path is a file."""
        ...

    def isdir(self, path: str | os.PathLike[str]) -> bool:
        """Check if path is a directory."""
        ...

    def listdir(self, path: str | os.PathLike[str] = ".") -> list[str]:
        """List immediate children of a directory (names only, sorted)."""
        ...

    def stat(self, path: str | os.PathLike[str]) -> FileMetadata:
        """Get file metadata."""
        ...

    def remove(self, path: str | os.PathLike[str]) -> None:
        """Remove a file."""
        ...

    def mkdir(
        self, path: str | os.PathLike[str], parents: bool = False, exist_ok: bool = False
    ) -> None:
        """Create a directory."""
        ...

    def makedirs(self, path: str | os.PathLike[str], exist_ok: bool = True) -> None:
        """Create directory tree."""
        ...

    def rmdir(self, path: str | os.PathLike[str]) -> None:
        """Remove an empty directory."""
        ...

    def rename(self, src: str | os.PathLike[str], dst: str | os.PathLike[str]) -> None:
        """Rename/move a file or directory."""
        ...
