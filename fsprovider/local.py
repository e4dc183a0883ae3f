"""Real filesystem handle.

``LocalFS`` is the default instance a ``FileSystemProvider`` vends in
production. It is a thin layer over ``pathlib`` that satisfies the
``FileSystem`` protocol.
"""

from __future__ import annotations

import io
import os
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from .base import FileMetadata


class LocalFS:
    """FileSystem backed by the host operating system.

    Relative paths resolve against ``root`` when one is given, otherwise
    against the process working directory at call time. Absolute paths are
    used unchanged: unlike a sandbox, this handle does not restrict access.
    """

    def __init__(self, root: str | os.PathLike[str] | None = None):
        """Initialize the local filesystem.

        Args:
            root: Optional base directory for relative paths.

        Raises:
            NotADirectoryError: If root exists and is not a directory.
        """
        self.root = Path(root).resolve() if root is not None else None
        if self.root is not None and self.root.exists() and not self.root.is_dir():
            raise NotADirectoryError(f"Root must be a directory: {root}")

    def __repr__(self) -> str:
        return f"LocalFS(root={str(self.root) if self.root else None!r})"

    def _path(self, path: str | os.PathLike[str]) -> Path:
        p = Path(path)
        if self.root is not None and not p.is_absolute():
            return self.root / p
        return p

    def open(self, path: str | os.PathLike[str], mode: str = "r", **kwargs: Any) -> Any:
        """Open a file.

        Args:
            path: File path to open.
            mode: File mode ('r', 'w', 'rb', 'wb', etc.).
            **kwargs: Additional arguments passed to open().

        Returns:
            File object.
        """
        return io.open(self._path(path), mode, **kwargs)

    def read(self, path: str | os.PathLike[str]) -> bytes:
        """Read entire file as bytes."""
        return self._path(path).read_bytes()

    def write(self, path: str | os.PathLike[str], content: bytes, mode: str = "w") -> None:
        """Write bytes to file, creating parent directories if needed.

        Args:
            path: File path to write.
            content: Bytes to write.
            mode: Write mode ('w' for write, 'a' for append).
        """
        resolved = self._path(path)
        resolved.parent.mkdir(parents=True, exist_ok=True)
        if mode == "a":
            with resolved.open("ab") as f:
                f.write(content)
        else:
            resolved.write_bytes(content)

    def read_text(self, path: str | os.PathLike[str], encoding: str = "utf-8") -> str:
        return self._path(path).read_text(encoding=encoding)

    def write_text(
        self, path: str | os.PathLike[str], content: str, encoding: str = "utf-8"
    ) -> None:
        resolved = self._path(path)
        resolved.parent.mkdir(parents=True, exist_ok=True)
        resolved.write_text(content, encoding=encoding)

    def exists(self, path: str | os.PathLike[str]) -> bool:
        return self._path(path).exists()

    def isfile(self, path: str | os.PathLike[str]) -> bool:
        return self._path(path).is_file()

    def isdir(self, path: str | os.PathLike[str]) -> bool:
        return self._path(path).is_dir()

    def listdir(self, path: str | os.PathLike[str] = ".") -> list[str]:
        """List directory contents."""
        resolved = self._path(path)
        if not resolved.is_dir():
            if resolved.exists():
                raise NotADirectoryError(f"Not a directory: {path}")
            raise FileNotFoundError(f"No such directory: {path}")
        return sorted(p.name for p in resolved.iterdir())

    def stat(self, path: str | os.PathLike[str]) -> FileMetadata:
        """Get file metadata."""
        resolved = self._path(path)
        if not resolved.exists():
            raise FileNotFoundError(f"No such file: {path}")

        stat_result = resolved.stat()
        is_dir = resolved.is_dir()
        return FileMetadata(
            size=0 if is_dir else stat_result.st_size,
            created_at=datetime.fromtimestamp(
                stat_result.st_ctime, tz=timezone.utc
            ).isoformat(),
            modified_at=datetime.fromtimestamp(
                stat_result.st_mtime, tz=timezone.utc
            ).isoformat(),
            is_dir=is_dir,
        )

    def remove(self, path: str | os.PathLike[str]) -> None:
        """Remove a file."""
        resolved = self._path(path)
        if resolved.is_dir():
            raise IsADirectoryError(f"Is a directory: {path}")
        resolved.unlink()

    def mkdir(
        self, path: str | os.PathLike[str], parents: bool = False, exist_ok: bool = False
    ) -> None:
        self._path(path).mkdir(parents=parents, exist_ok=exist_ok)

    def makedirs(self, path: str | os.PathLike[str], exist_ok: bool = True) -> None:
        """Create directory tree (alias for mkdir with parents=True)."""
        self.mkdir(path, parents=True, exist_ok=exist_ok)

    def rmdir(self, path: str | os.PathLike[str]) -> None:
        self._path(path).rmdir()

    def rename(self, src: str | os.PathLike[str], dst: str | os.PathLike[str]) -> None:
        self._path(src).rename(self._path(dst))
