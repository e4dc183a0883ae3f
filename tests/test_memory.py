"""Tests for MemoryFS."""

import errno
import threading

import pytest

from fsprovider import FileSystem, MemoryFS


# ---------------------------------------------------------------------------
# Core read/write
# ---------------------------------------------------------------------------


class TestMemoryCoreReadWrite:
    """Test basic read/write operations on MemoryFS."""

    def test_satisfies_protocol(self):
        """Test that MemoryFS is recognized as a FileSystem."""
        assert isinstance(MemoryFS(), FileSystem)

    def test_write_and_read(self):
        """Test that written bytes read back unchanged."""
        fs = MemoryFS()
        fs.write("hello.txt", b"hello world")
        assert fs.read("hello.txt") == b"hello world"

    def test_relative_and_absolute_paths_agree(self):
        """Test that relative paths resolve against the root."""
        fs = MemoryFS()
        fs.write("a/b.txt", b"x")
        assert fs.read("/a/b.txt") == b"x"
        assert fs.read("./a/../a/b.txt") == b"x"

    def test_write_creates_parents(self):
        """Test that write() creates missing parent directories."""
        fs = MemoryFS()
        fs.write("a/b/c.txt", b"deep")
        assert fs.isdir("a") is True
        assert fs.isdir("a/b") is True

    def test_write_append(self):
        """Test append mode extends existing content."""
        fs = MemoryFS()
        fs.write("log.txt", b"line1\n")
        fs.write("log.txt", b"line2\n", mode="a")
        assert fs.read("log.txt") == b"line1\nline2\n"

    def test_text_helpers(self):
        """Test that text helpers encode as UTF-8."""
        fs = MemoryFS()
        fs.write_text("note.txt", "héllo")
        assert fs.read("note.txt") == "héllo".encode("utf-8")
        assert fs.read_text("note.txt") == "héllo"

    def test_read_nonexistent_raises(self):
        """Test that reading a missing file raises FileNotFoundError."""
        fs = MemoryFS()
        with pytest.raises(FileNotFoundError):
            fs.read("missing.txt")

    def test_seed_files(self):
        """Test that seed content accepts str and bytes values."""
        fs = MemoryFS({"test.txt": "Hello World", "/bin/data": b"\x00\x01"})
        assert fs.read_text("test.txt") == "Hello World"
        assert fs.read("bin/data") == b"\x00\x01"
        assert fs.isdir("/bin") is True

    def test_write_to_directory_raises(self):
        """Test that a directory cannot be overwritten by a file."""
        fs = MemoryFS()
        fs.mkdir("d")
        with pytest.raises(IsADirectoryError):
            fs.write("d", b"x")


# ---------------------------------------------------------------------------
# open()
# ---------------------------------------------------------------------------


class TestMemoryOpen:
    """Test file objects returned by MemoryFS.open()."""

    def test_open_write_then_read_text(self):
        """Test a text write followed by a text read."""
        fs = MemoryFS()
        with fs.open("f.txt", "w") as f:
            f.write("written")
        with fs.open("f.txt") as f:
            assert f.read() == "written"

    def test_open_binary(self):
        """Test binary mode round trip."""
        fs = MemoryFS()
        with fs.open("f.bin", "wb") as f:
            f.write(b"\xff")
        with fs.open("f.bin", "rb") as f:
            assert f.read() == b"\xff"

    def test_open_append(self):
        """Test that append mode keeps existing content."""
        fs = MemoryFS()
        fs.write_text("f.txt", "a")
        with fs.open("f.txt", "a") as f:
            f.write("b")
        assert fs.read_text("f.txt") == "ab"

    def test_open_exclusive_existing_raises(self):
        """Test that mode 'x' refuses an existing file."""
        fs = MemoryFS()
        fs.write_text("f.txt", "a")
        with pytest.raises(FileExistsError):
            fs.open("f.txt", "x")

    def test_open_missing_parent_raises(self):
        """Test that open() for writing needs the parent directory."""
        fs = MemoryFS()
        with pytest.raises(FileNotFoundError):
            fs.open("no/such/dir.txt", "w")

    def test_open_missing_file_raises(self):
        """Test that reading a missing file raises FileNotFoundError."""
        fs = MemoryFS()
        with pytest.raises(FileNotFoundError):
            fs.open("missing.txt")

    def test_unsupported_mode(self):
        """Test that update modes are rejected."""
        fs = MemoryFS()
        fs.write_text("f.txt", "a")
        with pytest.raises(ValueError):
            fs.open("f.txt", "r+")

    def test_nothing_saved_until_close(self):
        """Test that buffered writes land only when the file closes."""
        fs = MemoryFS()
        f = fs.open("f.txt", "w")
        f.write("pending")
        assert fs.exists("f.txt") is False
        f.close()
        assert fs.read_text("f.txt") == "pending"


# ---------------------------------------------------------------------------
# Directories and metadata
# ---------------------------------------------------------------------------


class TestMemoryDirectories:
    """Test directory operations, rename and stat."""

    def test_listdir(self):
        """Test that listdir returns sorted immediate children."""
        fs = MemoryFS()
        fs.write("a.txt", b"")
        fs.write("sub/b.txt", b"")
        fs.mkdir("empty")
        assert fs.listdir("/") == ["a.txt", "empty", "sub"]
        assert fs.listdir("sub") == ["b.txt"]

    def test_listdir_missing_raises(self):
        """Test listdir on a missing path."""
        with pytest.raises(FileNotFoundError):
            MemoryFS().listdir("nope")

    def test_listdir_file_raises(self):
        """Test listdir on a file."""
        fs = MemoryFS()
        fs.write("f.txt", b"")
        with pytest.raises(NotADirectoryError):
            fs.listdir("f.txt")

    def test_mkdir_requires_parent(self):
        """Test that mkdir without parents needs an existing parent."""
        fs = MemoryFS()
        with pytest.raises(FileNotFoundError):
            fs.mkdir("a/b")

    def test_mkdir_parents(self):
        """Test mkdir with parents=True."""
        fs = MemoryFS()
        fs.mkdir("a/b/c", parents=True)
        assert fs.isdir("a/b/c") is True

    def test_mkdir_exists(self):
        """Test mkdir on an existing directory, with and without exist_ok."""
        fs = MemoryFS()
        fs.mkdir("a")
        with pytest.raises(FileExistsError):
            fs.mkdir("a")
        fs.mkdir("a", exist_ok=True)

    def test_makedirs_through_file_raises(self):
        """Test that makedirs cannot descend through a file."""
        fs = MemoryFS()
        fs.write("f", b"")
        with pytest.raises(NotADirectoryError):
            fs.makedirs("f/sub")

    def test_rmdir_non_empty(self):
        """Test that rmdir refuses a non-empty directory."""
        fs = MemoryFS()
        fs.write("d/f.txt", b"")
        with pytest.raises(OSError) as exc_info:
            fs.rmdir("d")
        assert exc_info.value.errno == errno.ENOTEMPTY

    def test_rmdir_empty(self):
        """Test removing an empty directory."""
        fs = MemoryFS()
        fs.mkdir("d")
        fs.rmdir("d")
        assert fs.exists("d") is False

    def test_remove(self):
        """Test removing a file."""
        fs = MemoryFS()
        fs.write("temp.txt", b"gone soon")
        fs.remove("temp.txt")
        assert fs.exists("temp.txt") is False

    def test_remove_directory_raises(self):
        """Test that remove() refuses a directory."""
        fs = MemoryFS()
        fs.mkdir("d")
        with pytest.raises(IsADirectoryError):
            fs.remove("d")

    def test_rename_file(self):
        """Test renaming a file."""
        fs = MemoryFS()
        fs.write("old.txt", b"data")
        fs.rename("old.txt", "new.txt")
        assert fs.exists("old.txt") is False
        assert fs.read("new.txt") == b"data"

    def test_rename_directory(self):
        """Test that renaming a directory moves its whole subtree."""
        fs = MemoryFS()
        fs.write("src/pkg/mod.py", b"x = 1")
        fs.rename("src", "lib")
        assert fs.read("lib/pkg/mod.py") == b"x = 1"
        assert fs.isdir("lib/pkg") is True
        assert fs.exists("src") is False

    def test_rename_missing_raises(self):
        """Test renaming a missing path."""
        with pytest.raises(FileNotFoundError):
            MemoryFS().rename("a", "b")

    def test_rename_file_onto_directory_raises(self):
        """Test that a file cannot replace a directory."""
        fs = MemoryFS()
        fs.write("f.txt", b"data")
        fs.write("d/inner.txt", b"kept")
        with pytest.raises(IsADirectoryError):
            fs.rename("f.txt", "d")
        assert fs.read("f.txt") == b"data"
        assert fs.isdir("d") is True
        assert fs.isfile("d") is False
        assert fs.read("d/inner.txt") == b"kept"

    def test_rename_directory_onto_directory_raises(self):
        """Test that an existing directory is never merged into."""
        fs = MemoryFS()
        fs.write("a/one.txt", b"1")
        fs.write("b/two.txt", b"2")
        with pytest.raises(IsADirectoryError):
            fs.rename("a", "b")
        assert fs.listdir("a") == ["one.txt"]
        assert fs.listdir("b") == ["two.txt"]

    def test_rename_directory_into_own_subtree_raises(self):
        """Test that a directory cannot move beneath itself."""
        fs = MemoryFS()
        fs.write("a/b/f.txt", b"x")
        with pytest.raises(OSError) as exc_info:
            fs.rename("a", "a/b/c")
        assert exc_info.value.errno == errno.EINVAL
        assert fs.read("a/b/f.txt") == b"x"
        assert fs.exists("a/b/c") is False
        assert sorted(fs.dirs) == ["/", "/a", "/a/b"]

    def test_rename_directory_onto_file_raises(self):
        """Test that a directory cannot replace a file."""
        fs = MemoryFS()
        fs.mkdir("d")
        fs.write("f.txt", b"data")
        with pytest.raises(NotADirectoryError):
            fs.rename("d", "f.txt")
        assert fs.isdir("d") is True
        assert fs.read("f.txt") == b"data"

    def test_rename_directory_to_itself(self):
        """Test that renaming a directory onto itself changes nothing."""
        fs = MemoryFS()
        fs.write("d/f.txt", b"x")
        fs.rename("d", "d")
        assert fs.read("d/f.txt") == b"x"

    def test_stat_file(self):
        """Test file metadata."""
        fs = MemoryFS()
        fs.write("f.txt", b"12345")
        meta = fs.stat("f.txt")
        assert meta.size == 5
        assert meta.st_size == 5
        assert meta.is_dir is False
        assert meta.created_at

    def test_stat_preserves_created_at(self):
        """Test that rewriting a file keeps its creation time."""
        fs = MemoryFS()
        fs.write("f.txt", b"1")
        created = fs.stat("f.txt").created_at
        fs.write("f.txt", b"22")
        assert fs.stat("f.txt").created_at == created

    def test_stat_directory(self):
        """Test directory metadata."""
        fs = MemoryFS()
        fs.mkdir("d")
        assert fs.stat("d").is_dir is True

    def test_stat_missing(self):
        """Test stat on a missing path."""
        with pytest.raises(FileNotFoundError):
            MemoryFS().stat("missing")


class TestMemoryThreadSafety:
    """Test MemoryFS under concurrent use."""

    def test_concurrent_writes(self):
        """Test that concurrent writers do not lose files."""
        fs = MemoryFS()
        errors = []

        def worker(idx):
            try:
                for j in range(50):
                    fs.write(f"dir{idx}/f{j}.txt", f"{idx}-{j}".encode())
            except Exception as e:
                errors.append(e)

        threads = [threading.Thread(target=worker, args=(i,)) for i in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert not errors, f"Errors in threads: {errors}"
        assert len(fs.files) == 8 * 50
