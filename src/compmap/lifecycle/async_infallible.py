from __future__ import annotations

from collections.abc import Callable, Iterable
from typing import Any

from typing_extensions import Self

from compmap.core.base import ComponentMapBase, gather_all, replace_component
from compmap.core.types import A, C, K, Keyed, WithArgs
from compmap.utils import get_logger

logger = get_logger(__name__)


class AsyncInfallible(ComponentMapBase[K, A, C]):
    """
    Concurrent lifecycle operations for an async factory that does not fail.

    Each call starts every factory invocation it needs at once, waits for all
    of them, and only then writes to the map, in input order. If the factory
    raises, the exception propagates and nothing is written.
    """

    @classmethod
    async def init_async(
        cls, entries: Iterable[tuple[K, A]], factory: Callable[..., Any], **options: Any
    ) -> Self:
        registry = cls({}, factory, **options)
        entries = list(entries)
        components = await gather_all(
            (registry._call(key, args) for key, args in entries)
        )
        for (key, args), component in zip(entries, components):
            registry._map[key] = WithArgs(component, args)
        logger.debug(f"[{registry.name}] initialized {len(registry)} component(s)")
        return registry

    async def reinit_all_async(self) -> list[Keyed[K, C]]:
        items = list(self._map.items())
        components = await gather_all(
            (self._call(key, pair.args) for key, pair in items)
        )
        results = [
            Keyed(key, replace_component(pair, component))
            for (key, pair), component in zip(items, components)
        ]
        logger.debug(f"[{self.name}] reinitialized {len(results)} component(s)")
        return results

    async def reinit_async(self, keys: Iterable[K]) -> list[Keyed[K, C | None]]:
        """
        Rebuild the components stored under `keys`.

        Every present key is rebuilt from the args stored when the call
        started; duplicates are rebuilt once per occurrence. Absent keys are
        reported with a None value.
        """
        keys = list(keys)
        pairs = [self._map.get(key) for key in keys]
        components = iter(
            await gather_all(
                (
                    self._call(key, pair.args)
                    for key, pair in zip(keys, pairs)
                    if pair is not None
                )
            )
        )

        results: list[Keyed[K, C | None]] = []
        for key, pair in zip(keys, pairs):
            if pair is None:
                results.append(Keyed(key, None))
                continue
            component = next(components)
            # Looked up again: the entry may have been removed while awaiting.
            current = self._map.get(key)
            if current is None:
                results.append(Keyed(key, None))
            else:
                results.append(Keyed(key, replace_component(current, component)))
        logger.debug(f"[{self.name}] reinit processed {len(results)} key(s)")
        return results

    async def update_async(
        self, updates: Iterable[tuple[K, A]]
    ) -> list[Keyed[K, WithArgs[A, C] | None]]:
        updates = list(updates)
        components = await gather_all(
            (self._call(key, args) for key, args in updates)
        )

        results: list[Keyed[K, WithArgs[A, C] | None]] = []
        for (key, args), component in zip(updates, components):
            previous = self._map.get(key)
            self._map[key] = WithArgs(component, args)
            results.append(Keyed(key, previous))
        logger.debug(f"[{self.name}] updated {len(results)} component(s)")
        return results
