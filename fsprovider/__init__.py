"""fsprovider: swappable filesystem access with per-context test isolation."""

from .base import FileMetadata, FileSystem
from .config import ProviderOptions, connect_provider
from .context import ContextCache
from .environment import is_debugger_attached, is_non_production_environment
from .errors import (
    FactoryReturnedNoneError,
    FileSystemProviderError,
    InvalidArgumentError,
    ProductionTestModeError,
    ProviderErrorType,
)
from .local import LocalFS
from .memory import MemoryFS
from .provider import FileSystemFactory, FileSystemProvider
from .registry import (
    add_filesystem_provider,
    configure_provider,
    current_filesystem,
    get_provider,
    reset_provider,
)

__all__ = [
    "add_filesystem_provider",
    "configure_provider",
    "connect_provider",
    "ContextCache",
    "current_filesystem",
    "FactoryReturnedNoneError",
    "FileMetadata",
    "FileSystem",
    "FileSystemFactory",
    "FileSystemProvider",
    "FileSystemProviderError",
    "get_provider",
    "InvalidArgumentError",
    "is_debugger_attached",
    "is_non_production_environment",
    "LocalFS",
    "MemoryFS",
    "ProductionTestModeError",
    "ProviderErrorType",
    "ProviderOptions",
    "reset_provider",
]
