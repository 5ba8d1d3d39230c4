from __future__ import annotations

from typing import Any

from compmap.core.types import A, C, K
from compmap.lifecycle import AsyncFallible, AsyncInfallible, SyncFallible, SyncInfallible


class ComponentMap(
    SyncInfallible[K, A, C],
    SyncFallible[K, A, C],
    AsyncInfallible[K, A, C],
    AsyncFallible[K, A, C],
):
    """
    Keyed registry of components built by `factory(args)`.

    Build one with `init`, `try_init`, `init_async` or `try_init_async`;
    every later operation reuses the same factory.
    """


class KeyAwareComponentMap(ComponentMap[K, A, C]):
    """Same as ComponentMap, but the factory is called as `factory(key, args)`."""

    def _call(self, key: K, args: A) -> Any:
        return self._factory(key, args)
