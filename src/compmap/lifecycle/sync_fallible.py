from __future__ import annotations

from collections.abc import Callable, Iterable
from typing import Any

from typing_extensions import Self

from compmap.core.base import ComponentMapBase, replace_component
from compmap.core.types import A, C, K, Keyed, Outcome, WithArgs
from compmap.utils import get_logger

logger = get_logger(__name__)


class SyncFallible(ComponentMapBase[K, A, C]):
    """
    Sequential lifecycle operations for a factory that may raise.

    Construction is all-or-nothing. Every other operation isolates failures
    per key: a failing key is reported as `Outcome.failure` and its stored
    entry is left exactly as it was.
    """

    @classmethod
    def try_init(
        cls,
        entries: Iterable[tuple[K, A]],
        factory: Callable[..., Any],
        *,
        on_discard: Callable[[K, C], Any] | None = None,
        **options: Any,
    ) -> Self:
        """
        Build one component per entry, stopping at the first failure.

        The failure is re-raised; components built before it are handed to
        `on_discard` (if given) and dropped. A component overwritten by a
        later entry with the same key is handed to `on_discard` as well.
        Errors raised by `on_discard` are logged and never mask the failure.
        """
        registry = cls({}, factory, **options)
        for key, args in entries:
            outcome = registry._attempt(key, args)
            if not outcome.ok:
                registry._report_failures("initialize", [(key, outcome)])
                registry._discard(
                    ((k, pair.component) for k, pair in registry._map.items()),
                    on_discard,
                )
                raise outcome.error
            evicted = registry._map.get(key)
            if evicted is not None:
                registry._hand_off(key, evicted.component, on_discard)
            registry._map[key] = WithArgs(outcome.value, args)
        logger.debug(f"[{registry.name}] initialized {len(registry)} component(s)")
        return registry

    def try_reinit_all(self) -> list[Keyed[K, Outcome[C]]]:
        results: list[Keyed[K, Outcome[C]]] = []
        for key, pair in self._map.items():
            outcome = self._attempt(key, pair.args)
            if outcome.ok:
                outcome = Outcome.success(replace_component(pair, outcome.value))
            results.append(Keyed(key, outcome))
        self._report_failures("reinitialize", ((r.key, r.value) for r in results))
        logger.debug(f"[{self.name}] reinitialized {len(results)} component(s)")
        return results

    def try_reinit(self, keys: Iterable[K]) -> list[Keyed[K, Outcome[C] | None]]:
        """
        Rebuild the components stored under `keys`, in order.

        A None value means the key is absent; otherwise the outcome holds
        either the evicted component or the factory's error.
        """
        results: list[Keyed[K, Outcome[C] | None]] = []
        for key in keys:
            pair = self._map.get(key)
            if pair is None:
                results.append(Keyed(key, None))
                continue
            outcome = self._attempt(key, pair.args)
            if outcome.ok:
                outcome = Outcome.success(replace_component(pair, outcome.value))
            results.append(Keyed(key, outcome))
        self._report_failures(
            "reinitialize", ((r.key, r.value) for r in results if r.value is not None)
        )
        logger.debug(f"[{self.name}] reinit processed {len(results)} key(s)")
        return results

    def try_update(
        self, updates: Iterable[tuple[K, A]]
    ) -> list[Keyed[K, Outcome[WithArgs[A, C] | None]]]:
        """
        Build from fresh args and insert only on success.

        A successful outcome holds the entry previously stored under the key
        (None for a new key); on failure the map is not touched.
        """
        results: list[Keyed[K, Outcome[WithArgs[A, C] | None]]] = []
        for key, args in updates:
            outcome = self._attempt(key, args)
            if outcome.ok:
                previous = self._map.get(key)
                self._map[key] = WithArgs(outcome.value, args)
                outcome = Outcome.success(previous)
            results.append(Keyed(key, outcome))
        self._report_failures("update", ((r.key, r.value) for r in results))
        logger.debug(f"[{self.name}] updated {len(results)} component(s)")
        return results
