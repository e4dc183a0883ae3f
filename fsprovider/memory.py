"""In-memory filesystem implementation."""

from __future__ import annotations

import errno as _errno
import os
import posixpath
import threading
from datetime import datetime, timezone
from io import BytesIO, StringIO
from typing import Any, Mapping

from .base import FileMetadata


class MemoryFS:
    """Simple in-memory filesystem.

    Stores files as ``bytes`` in a plain dict and tracks directories in a
    set. Implements the ``FileSystem`` protocol, so it can be installed as
    a provider's override factory (``provider.set_filesystem_factory(MemoryFS)``)
    and hand each test its own isolated, mutable filesystem.

    Relative paths resolve against ``/``. A lock guards mutation, so one
    instance may be shared across threads.
    """

    def __init__(self, files: Mapping[str, bytes | str] | None = None) -> None:
        self.files: dict[str, bytes] = {}
        self.dirs: set[str] = {"/"}
        self._created: dict[str, str] = {}
        self._modified: dict[str, str] = {}
        self._lock = threading.RLock()
        for path, content in (files or {}).items():
            if isinstance(content, str):
                content = content.encode("utf-8")
            self.write(path, content)

    def __repr__(self) -> str:
        return f"MemoryFS(files={len(self.files)}, dirs={len(self.dirs)})"

    def open(self, path: str | os.PathLike[str], mode: str = "r", **kwargs: Any) -> Any:
        path = self._resolve(path)
        encoding = kwargs.get("encoding") or "utf-8"
        if "+" in mode:
            raise ValueError(f"Unsupported mode: {mode}")
        if "r" in mode:
            content = self.read(path)
            if "b" in mode:
                return BytesIO(content)
            return StringIO(content.decode(encoding))
        if not ("w" in mode or "a" in mode or "x" in mode):
            raise ValueError(f"Unsupported mode: {mode}")

        with self._lock:
            if path in self.dirs:
                raise IsADirectoryError(_errno.EISDIR, "Is a directory", path)
            if "x" in mode and path in self.files:
                raise FileExistsError(_errno.EEXIST, "File exists", path)
            self._require_parent(path)
            existing = self.files.get(path, b"") if "a" in mode else b""

        is_binary = "b" in mode
        buf: Any = BytesIO() if is_binary else StringIO()
        if existing:
            buf.write(existing if is_binary else existing.decode(encoding))
        original_close = buf.close

        def close_and_save() -> None:
            if not buf.closed:
                value = buf.getvalue()
                self._store(path, value if is_binary else value.encode(encoding))
            original_close()

        buf.close = close_and_save  # type: ignore[method-assign]
        return buf

    def read(self, path: str | os.PathLike[str]) -> bytes:
        path = self._resolve(path)
        with self._lock:
            if path in self.dirs:
                raise IsADirectoryError(_errno.EISDIR, "Is a directory", path)
            if path not in self.files:
                raise FileNotFoundError(_errno.ENOENT, "No such file", path)
            return self.files[path]

    def write(self, path: str | os.PathLike[str], content: bytes, mode: str = "w") -> None:
        path = self._resolve(path)
        with self._lock:
            if path in self.dirs:
                raise IsADirectoryError(_errno.EISDIR, "Is a directory", path)
            # Parent directories exist implicitly
            parent = posixpath.dirname(path)
            while parent and parent not in self.dirs:
                self.dirs.add(parent)
                parent = posixpath.dirname(parent)
            if mode == "a":
                content = self.files.get(path, b"") + content
            self._store(path, content)

    def read_text(self, path: str | os.PathLike[str], encoding: str = "utf-8") -> str:
        return self.read(path).decode(encoding)

    def write_text(
        self, path: str | os.PathLike[str], content: str, encoding: str = "utf-8"
    ) -> None:
        self.write(path, content.encode(encoding))

    def stat(self, path: str | os.PathLike[str]) -> FileMetadata:
        path = self._resolve(path)
        with self._lock:
            if path in self.files:
                return FileMetadata(
                    size=len(self.files[path]),
                    created_at=self._created[path],
                    modified_at=self._modified[path],
                )
            if path in self.dirs:
                return FileMetadata(size=0, created_at="", modified_at="", is_dir=True)
        raise FileNotFoundError(_errno.ENOENT, "No such file or directory", path)

    def listdir(self, path: str | os.PathLike[str] = ".") -> list[str]:
        """List immediate children of a directory."""
        path = self._resolve(path)
        with self._lock:
            if path in self.files:
                raise NotADirectoryError(_errno.ENOTDIR, "Not a directory", path)
            if path not in self.dirs:
                raise FileNotFoundError(_errno.ENOENT, "No such directory", path)
            prefix = path.rstrip("/") + "/"
            entries: set[str] = set()
            for name in [*self.files, *self.dirs]:
                if name.startswith(prefix) and name != path:
                    entries.add(name[len(prefix):].split("/")[0])
            return sorted(entries)

    def exists(self, path: str | os.PathLike[str]) -> bool:
        path = self._resolve(path)
        with self._lock:
            return path in self.files or path in self.dirs

    def isfile(self, path: str | os.PathLike[str]) -> bool:
        path = self._resolve(path)
        with self._lock:
            return path in self.files

    def isdir(self, path: str | os.PathLike[str]) -> bool:
        path = self._resolve(path)
        with self._lock:
            return path in self.dirs

    def mkdir(
        self, path: str | os.PathLike[str], parents: bool = False, exist_ok: bool = False
    ) -> None:
        path = self._resolve(path)
        if parents:
            self.makedirs(path, exist_ok=exist_ok)
            return
        with self._lock:
            if path in self.dirs or path in self.files:
                if exist_ok and path in self.dirs:
                    return
                raise FileExistsError(_errno.EEXIST, "File exists", path)
            self._require_parent(path)
            self.dirs.add(path)

    def makedirs(self, path: str | os.PathLike[str], exist_ok: bool = True) -> None:
        path = self._resolve(path)
        with self._lock:
            if path in self.files or (path in self.dirs and not exist_ok):
                raise FileExistsError(_errno.EEXIST, "File exists", path)
            current = ""
            for part in path.strip("/").split("/"):
                if not part:
                    continue
                current += "/" + part
                if current in self.files:
                    raise NotADirectoryError(_errno.ENOTDIR, "Not a directory", current)
                self.dirs.add(current)

    def rmdir(self, path: str | os.PathLike[str]) -> None:
        path = self._resolve(path)
        with self._lock:
            if path not in self.dirs:
                raise FileNotFoundError(_errno.ENOENT, "No such directory", path)
            prefix = path.rstrip("/") + "/"
            if any(name.startswith(prefix) for name in [*self.files, *self.dirs]):
                raise OSError(_errno.ENOTEMPTY, "Directory not empty", path)
            self.dirs.discard(path)

    def remove(self, path: str | os.PathLike[str]) -> None:
        path = self._resolve(path)
        with self._lock:
            if path in self.dirs:
                raise IsADirectoryError(_errno.EISDIR, "Is a directory", path)
            if path not in self.files:
                raise FileNotFoundError(_errno.ENOENT, "No such file", path)
            del self.files[path]
            self._created.pop(path, None)
            self._modified.pop(path, None)

    def rename(self, src: str | os.PathLike[str], dst: str | os.PathLike[str]) -> None:
        src = self._resolve(src)
        dst = self._resolve(dst)
        with self._lock:
            self._require_parent(dst)
            if dst in self.dirs and dst != src:
                raise IsADirectoryError(_errno.EISDIR, "Is a directory", dst)
            if src in self.files:
                self.files[dst] = self.files.pop(src)
                self._created[dst] = self._created.pop(src)
                self._modified[dst] = self._modified.pop(src)
            elif src in self.dirs:
                src_prefix = src.rstrip("/") + "/"
                if dst == src:
                    return
                if dst.startswith(src_prefix):
                    # Moving a directory into its own subtree
                    raise OSError(_errno.EINVAL, "Invalid argument", dst)
                if dst in self.files:
                    raise NotADirectoryError(_errno.ENOTDIR, "Not a directory", dst)
                self.dirs.discard(src)
                self.dirs.add(dst)
                for d in list(self.dirs):
                    if d.startswith(src_prefix):
                        self.dirs.discard(d)
                        self.dirs.add(dst + d[len(src):])
                for f in list(self.files):
                    if f.startswith(src_prefix):
                        moved = dst + f[len(src):]
                        self.files[moved] = self.files.pop(f)
                        self._created[moved] = self._created.pop(f)
                        self._modified[moved] = self._modified.pop(f)
            else:
                raise FileNotFoundError(_errno.ENOENT, "No such file or directory", src)

    def _store(self, path: str, content: bytes) -> None:
        now = datetime.now(timezone.utc).isoformat()
        with self._lock:
            self.files[path] = content
            self._created.setdefault(path, now)
            self._modified[path] = now

    def _require_parent(self, path: str) -> None:
        parent = posixpath.dirname(path)
        if parent != path and parent not in self.dirs:
            raise FileNotFoundError(_errno.ENOENT, "No such directory", parent)

    def _resolve(self, path: str | os.PathLike[str]) -> str:
        """Resolve a path against ``/`` and normalize . and .. components."""
        path = os.fspath(path).replace("\\", "/")
        if not path.startswith("/"):
            path = "/" + path
        return posixpath.normpath(path)
