"""Process-wide provider and dependency-injection registration.

Applications without a container use ``get_provider()``; the first call
creates the shared provider. Applications with a container bind a single
long-lived provider into their service map with ``add_filesystem_provider()``.
Both hand out the same ``FileSystemProvider`` type, so call sites do not
care which wiring is in use.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import asdict
from typing import Any, Callable, MutableMapping

from .base import FileSystem
from .config import ProviderOptions, connect_provider
from .local import LocalFS
from .provider import FileSystemFactory, FileSystemProvider

logger = logging.getLogger(__name__)

OptionsConfigurator = Callable[[dict[str, Any]], None]

_lock = threading.Lock()
_provider: FileSystemProvider | None = None


def build_options(
    options: ProviderOptions | None = None,
    configure: OptionsConfigurator | None = None,
) -> ProviderOptions:
    """Resolve provider options from a base object and a configure callback.

    ``configure`` receives a mutable dict of option values, edits it in
    place, and the result is validated through ``connect_provider()``.

    Example:
        >>> opts = build_options(
        ...     configure=lambda o: o.update(throw_on_test_mode_in_production=False)
        ... )
        >>> opts.throw_on_test_mode_in_production
        False
    """
    base = options or ProviderOptions()
    if configure is None:
        return base
    values = asdict(base)
    configure(values)
    return connect_provider(**values)


def get_provider() -> FileSystemProvider:
    """Return the process-wide provider, creating it on first use."""
    global _provider
    provider = _provider
    if provider is not None:
        return provider
    with _lock:
        if _provider is None:
            _provider = FileSystemProvider()
            logger.debug("Created process-wide filesystem provider")
        return _provider


def configure_provider(
    options: ProviderOptions | None = None,
    *,
    configure: OptionsConfigurator | None = None,
    default_factory: FileSystemFactory | None = None,
) -> FileSystemProvider:
    """Replace the process-wide provider with a newly configured one.

    Handles already obtained from the previous provider keep working; they
    are simply no longer vended.

    Returns:
        The new process-wide provider.
    """
    global _provider
    provider = FileSystemProvider(
        build_options(options, configure), default_factory=default_factory or LocalFS
    )
    with _lock:
        _provider = provider
    logger.debug("Configured process-wide filesystem provider with %r", provider.options)
    return provider


def reset_provider() -> None:
    """Forget the process-wide provider. Intended for test teardown."""
    global _provider
    with _lock:
        _provider = None


def current_filesystem() -> FileSystem:
    """Shortcut for ``get_provider().current``."""
    return get_provider().current


def add_filesystem_provider(
    services: MutableMapping[Any, Any],
    options: ProviderOptions | None = None,
    *,
    configure: OptionsConfigurator | None = None,
    factory: Callable[[MutableMapping[Any, Any]], FileSystemProvider] | None = None,
) -> MutableMapping[Any, Any]:
    """Bind one long-lived provider into a service map.

    The provider is registered under the ``FileSystemProvider`` key. Any
    mapping-like container works (a dict, or a container exposing
    ``__setitem__``/``__contains__``). Registration is first-wins: if a
    provider is already bound, the map is returned unchanged.

    Args:
        services: The service map to register into.
        options: Provider options.
        configure: Callback editing option values before validation.
        factory: Builds the provider from the service map, in place of
            ``options``/``configure``.

    Returns:
        ``services``, for chaining.

    Raises:
        ValueError: If ``factory`` is combined with options or configure.
        TypeError: If ``factory`` returns something other than a provider.
    """
    if factory is not None and (options is not None or configure is not None):
        raise ValueError("Pass either factory or options/configure, not both")

    if FileSystemProvider in services:
        logger.debug("FileSystemProvider already registered; keeping existing instance")
        return services

    if factory is not None:
        provider = factory(services)
        if not isinstance(provider, FileSystemProvider):
            raise TypeError(
                f"Provider factory must return a FileSystemProvider, got {type(provider).__name__}"
            )
    else:
        provider = FileSystemProvider(build_options(options, configure))

    services[FileSystemProvider] = provider
    return services
