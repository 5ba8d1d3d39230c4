from __future__ import annotations

from collections.abc import Callable, Iterable
from typing import Any

from typing_extensions import Self

from compmap.core.base import ComponentMapBase, gather_all, replace_component
from compmap.core.types import A, C, K, Keyed, Outcome, WithArgs
from compmap.utils import get_logger

logger = get_logger(__name__)


class AsyncFallible(ComponentMapBase[K, A, C]):
    """
    Concurrent lifecycle operations for an async factory that may raise.

    All invocations of a call run to completion even when some of them fail;
    failures are captured per key and reconciled against the map in input
    order once every invocation has finished.
    """

    @classmethod
    async def try_init_async(
        cls,
        entries: Iterable[tuple[K, A]],
        factory: Callable[..., Any],
        *,
        on_discard: Callable[[K, C], Any] | None = None,
        **options: Any,
    ) -> Self:
        """
        Build every entry concurrently; all-or-nothing.

        If any invocation fails, the first failure in input order is raised
        after every invocation has finished. Components that were built
        anyway are passed to `on_discard` (if given) and dropped, as is any
        component overwritten by a later entry with the same key. Errors
        raised by `on_discard` are logged and never mask the failure.
        """
        registry = cls({}, factory, **options)
        entries = list(entries)
        outcomes = await gather_all(
            (registry._attempt_async(key, args) for key, args in entries)
        )

        failure = next((outcome for outcome in outcomes if not outcome.ok), None)
        if failure is not None:
            registry._report_failures(
                "initialize",
                ((key, outcome) for (key, _), outcome in zip(entries, outcomes)),
            )
            registry._discard(
                (
                    (key, outcome.value)
                    for (key, _), outcome in zip(entries, outcomes)
                    if outcome.ok
                ),
                on_discard,
            )
            raise failure.error

        for (key, args), outcome in zip(entries, outcomes):
            evicted = registry._map.get(key)
            if evicted is not None:
                registry._hand_off(key, evicted.component, on_discard)
            registry._map[key] = WithArgs(outcome.value, args)
        logger.debug(f"[{registry.name}] initialized {len(registry)} component(s)")
        return registry

    async def try_reinit_all_async(self) -> list[Keyed[K, Outcome[C]]]:
        items = list(self._map.items())
        outcomes = await gather_all(
            (self._attempt_async(key, pair.args) for key, pair in items)
        )

        results: list[Keyed[K, Outcome[C]]] = []
        for (key, pair), outcome in zip(items, outcomes):
            if outcome.ok:
                outcome = Outcome.success(replace_component(pair, outcome.value))
            results.append(Keyed(key, outcome))
        self._report_failures("reinitialize", ((r.key, r.value) for r in results))
        logger.debug(f"[{self.name}] reinitialized {len(results)} component(s)")
        return results

    async def try_reinit_async(
        self, keys: Iterable[K]
    ) -> list[Keyed[K, Outcome[C] | None]]:
        keys = list(keys)
        pairs = [self._map.get(key) for key in keys]
        outcomes = iter(
            await gather_all(
                (
                    self._attempt_async(key, pair.args)
                    for key, pair in zip(keys, pairs)
                    if pair is not None
                )
            )
        )

        results: list[Keyed[K, Outcome[C] | None]] = []
        for key, pair in zip(keys, pairs):
            if pair is None:
                results.append(Keyed(key, None))
                continue
            outcome = next(outcomes)
            if outcome.ok:
                current = self._map.get(key)
                if current is None:
                    results.append(Keyed(key, None))
                    continue
                outcome = Outcome.success(replace_component(current, outcome.value))
            results.append(Keyed(key, outcome))
        self._report_failures(
            "reinitialize", ((r.key, r.value) for r in results if r.value is not None)
        )
        logger.debug(f"[{self.name}] reinit processed {len(results)} key(s)")
        return results

    async def try_update_async(
        self, updates: Iterable[tuple[K, A]]
    ) -> list[Keyed[K, Outcome[WithArgs[A, C] | None]]]:
        updates = list(updates)
        outcomes = await gather_all(
            (self._attempt_async(key, args) for key, args in updates)
        )

        results: list[Keyed[K, Outcome[WithArgs[A, C] | None]]] = []
        for (key, args), outcome in zip(updates, outcomes):
            if outcome.ok:
                previous = self._map.get(key)
                self._map[key] = WithArgs(outcome.value, args)
                outcome = Outcome.success(previous)
            results.append(Keyed(key, outcome))
        self._report_failures("update", ((r.key, r.value) for r in results))
        logger.debug(f"[{self.name}] updated {len(results)} component(s)")
        return results
