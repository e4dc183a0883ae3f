"""Context-scoped caching of filesystem handles.

Each logical execution context (an asyncio task, a thread, or any explicit
``contextvars.Context.run``) gets its own slot. Slots are tagged with the
cache generation that produced them; advancing the generation invalidates
every slot in every context at once without touching any of them.
"""

from __future__ import annotations

import contextvars
import itertools
from typing import Any, Generic, NamedTuple, TypeVar

T = TypeVar("T")


class _Slot(NamedTuple):
    generation: int
    value: Any


class ContextCache(Generic[T]):
    """Per-context cache slot with generation-based invalidation.

    ``invalidate()`` is not synchronized here; the owner calls it under the
    same lock that guards whatever the cached values are derived from.
    """

    _ids = itertools.count()

    def __init__(self, name: str = "fsprovider_cache") -> None:
        # One ContextVar per cache; generations never allocate new variables.
        self._var: contextvars.ContextVar[_Slot | None] = contextvars.ContextVar(
            f"{name}_{next(self._ids)}", default=None
        )
        self._generation = 0

    @property
    def generation(self) -> int:
        return self._generation

    def get(self) -> T | None:
        """Return this context's value if it belongs to the current generation."""
        slot = self._var.get()
        if slot is None or slot.generation != self._generation:
            return None
        return slot.value

    def set(self, value: T, generation: int) -> None:
        """Store ``value`` in the calling context, tagged with ``generation``."""
        self._var.set(_Slot(generation, value))

    def invalidate(self) -> int:
        """Advance the generation, orphaning every context's slot."""
        self._generation += 1
        return self._generation
