"""FileSystemProvider: the single indirection point for filesystem access.

Production code reads ``provider.current`` and gets the shared default
filesystem. Tests call ``set_filesystem_factory()`` once; from then on each
execution context (asyncio task, thread, ``contextvars.Context.run``) gets
its own instance from the factory on first access and keeps it until the
factory changes or ``reset_to_default()`` is called.
"""

from __future__ import annotations

import logging
import threading
from contextlib import contextmanager
from typing import Callable, Iterator

from .base import FileSystem
from .config import ProviderOptions
from .context import ContextCache
from .environment import is_non_production_environment
from .errors import FactoryReturnedNoneError, InvalidArgumentError, ProductionTestModeError
from .local import LocalFS

logger = logging.getLogger(__name__)

FileSystemFactory = Callable[[], FileSystem]


class FileSystemProvider:
    """Vends filesystem handles, with a per-context override for tests.

    Args:
        options: Provider options. Defaults to ``ProviderOptions()``.
        default_factory: Builds the production filesystem. Called at most
            once, on the first ``current`` access made in default mode.

    Example:
        >>> provider = FileSystemProvider(ProviderOptions(throw_on_test_mode_in_production=False))
        >>> provider.set_filesystem_factory(MemoryFS)
        >>> provider.current.write_text("a.txt", "hi")
        >>> provider.current.read_text("a.txt")
        'hi'
        >>> provider.reset_to_default()
    """

    def __init__(
        self,
        options: ProviderOptions | None = None,
        default_factory: FileSystemFactory = LocalFS,
    ):
        self.options = options or ProviderOptions()
        self._default_factory = default_factory
        self._default: FileSystem | None = None
        self._default_lock = threading.Lock()

        # Guards _factory and the cache generation
        self._lock = threading.Lock()
        self._factory: FileSystemFactory | None = None
        self._cache: ContextCache[FileSystem] = ContextCache("fsprovider_current")

    def __repr__(self) -> str:
        mode = "test" if self.is_in_test_mode else "default"
        return f"FileSystemProvider(mode={mode!r})"

    @property
    def current(self) -> FileSystem:
        """The filesystem for the calling execution context.

        Raises:
            FactoryReturnedNoneError: If the installed factory returned None.
        """
        cached = self._cache.get()
        if cached is not None:
            return cached

        with self._lock:
            factory = self._factory
            generation = self._cache.generation

        if factory is not None:
            instance = factory()
            if instance is None:
                raise FactoryReturnedNoneError(
                    f"Filesystem factory {factory!r} returned None"
                )
            self._cache.set(instance, generation)
            return instance

        return self._get_default()

    @property
    def is_in_test_mode(self) -> bool:
        """True while an override factory is installed."""
        with self._lock:
            return self._factory is not None

    def set_filesystem_factory(self, factory: FileSystemFactory) -> None:
        """Install a factory that creates one filesystem per execution context.

        Every context's cached instance is invalidated; each context calls
        ``factory`` again on its next ``current`` access.

        Args:
            factory: Zero-argument callable returning a filesystem.

        Raises:
            InvalidArgumentError: If factory is None or not callable.
            ProductionTestModeError: If the environment looks like production
                and ``throw_on_test_mode_in_production`` is set.
        """
        if factory is None or not callable(factory):
            raise InvalidArgumentError(
                f"factory must be a callable returning a filesystem, got {factory!r}"
            )

        if self.options.throw_on_test_mode_in_production:
            if not is_non_production_environment(
                variables=self.options.environment_variables,
                names=self.options.non_production_names,
            ):
                raise ProductionTestModeError(
                    "Test mode is not allowed in production. Set one of "
                    f"{', '.join(self.options.environment_variables)} to a "
                    "non-production value, or construct the provider with "
                    "throw_on_test_mode_in_production=False."
                )

        with self._lock:
            self._factory = factory
            generation = self._cache.invalidate()
        logger.debug("Filesystem factory set to %r (generation %d)", factory, generation)

    def reset_to_default(self) -> None:
        """Drop the override factory and invalidate every context's instance.

        Safe to call when no factory is installed.
        """
        with self._lock:
            was_set = self._factory is not None
            self._factory = None
            generation = self._cache.invalidate()
        if was_set:
            logger.debug("Filesystem reset to default (generation %d)", generation)

    @contextmanager
    def use_filesystem_factory(self, factory: FileSystemFactory) -> Iterator[FileSystemProvider]:
        """Install ``factory`` for the duration of a ``with`` block.

        Example:
            >>> with provider.use_filesystem_factory(MemoryFS):
            ...     provider.current.write_text("scratch.txt", "data")
        """
        self.set_filesystem_factory(factory)
        try:
            yield self
        finally:
            self.reset_to_default()

    def _get_default(self) -> FileSystem:
        instance = self._default
        if instance is not None:
            return instance
        with self._default_lock:
            if self._default is None:
                instance = self._default_factory()
                if instance is None:
                    raise FactoryReturnedNoneError(
                        f"Default filesystem factory {self._default_factory!r} returned None"
                    )
                self._default = instance
                logger.debug("Created default filesystem %r", self._default)
            return self._default
