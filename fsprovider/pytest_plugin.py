"""pytest fixture plugin.

Enable it from a conftest::

    # conftest.py
    pytest_plugins = ["fsprovider.pytest_plugin"]

This makes the ``fs_provider`` and ``memory_fs`` fixtures available::

    def test_something(fs_provider, memory_fs):
        fs_provider.current.write_text("/a.txt", "hello")
        assert memory_fs.read_text("/a.txt") == "hello"
"""

from typing import Iterator

import pytest

from .config import ProviderOptions
from .memory import MemoryFS
from .provider import FileSystemProvider


@pytest.fixture
def fs_provider() -> Iterator[FileSystemProvider]:
    """A provider in test mode, vending a fresh :class:`MemoryFS` per context.

    The production guard is disabled so the fixture works regardless of
    environment variables. Reset to default on teardown.
    """
    provider = FileSystemProvider(ProviderOptions(throw_on_test_mode_in_production=False))
    with provider.use_filesystem_factory(MemoryFS):
        yield provider


@pytest.fixture
def memory_fs(fs_provider: FileSystemProvider) -> MemoryFS:
    """The :class:`MemoryFS` that ``fs_provider`` vends to the test's context."""
    fs = fs_provider.current
    assert isinstance(fs, MemoryFS)
    return fs
