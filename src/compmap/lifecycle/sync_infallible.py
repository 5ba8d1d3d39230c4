from __future__ import annotations

from collections.abc import Callable, Iterable
from typing import Any

from typing_extensions import Self

from compmap.core.base import ComponentMapBase, replace_component
from compmap.core.types import A, C, K, Keyed, WithArgs
from compmap.utils import get_logger

logger = get_logger(__name__)


class SyncInfallible(ComponentMapBase[K, A, C]):
    """Sequential lifecycle operations for a factory that does not fail."""

    @classmethod
    def init(
        cls, entries: Iterable[tuple[K, A]], factory: Callable[..., Any], **options: Any
    ) -> Self:
        """
        Build one component per (key, args) entry, in order.

        Duplicate keys keep the last entry. Any exception raised by the
        factory propagates and no map is returned.
        """
        registry = cls({}, factory, **options)
        for key, args in entries:
            registry._map[key] = WithArgs(registry._call(key, args), args)
        logger.debug(f"[{registry.name}] initialized {len(registry)} component(s)")
        return registry

    def reinit_all(self) -> list[Keyed[K, C]]:
        """Rebuild every component from its stored args; report the previous ones."""
        results = []
        for key, pair in self._map.items():
            component = self._call(key, pair.args)
            results.append(Keyed(key, replace_component(pair, component)))
        logger.debug(f"[{self.name}] reinitialized {len(results)} component(s)")
        return results

    def reinit(self, keys: Iterable[K]) -> list[Keyed[K, C | None]]:
        """
        Rebuild the components stored under `keys`, in order.

        Keys that are not present are reported with a None value and never
        reach the factory.
        """
        results: list[Keyed[K, C | None]] = []
        for key in keys:
            pair = self._map.get(key)
            if pair is None:
                results.append(Keyed(key, None))
                continue
            component = self._call(key, pair.args)
            results.append(Keyed(key, replace_component(pair, component)))
        logger.debug(f"[{self.name}] reinit processed {len(results)} key(s)")
        return results

    def update(
        self, updates: Iterable[tuple[K, A]]
    ) -> list[Keyed[K, WithArgs[A, C] | None]]:
        """Build from fresh args and insert, reporting what each key held before."""
        results: list[Keyed[K, WithArgs[A, C] | None]] = []
        for key, args in updates:
            pair = WithArgs(self._call(key, args), args)
            previous = self._map.get(key)
            self._map[key] = pair
            results.append(Keyed(key, previous))
        logger.debug(f"[{self.name}] updated {len(results)} component(s)")
        return results
