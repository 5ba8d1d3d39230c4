from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable, Iterable, Mapping
from types import MappingProxyType
from typing import Any, Generic

from compmap.core.types import A, C, K, Outcome, WithArgs
from compmap.utils import get_logger

logger = get_logger(__name__)

ErrorTypes = type[BaseException] | tuple[type[BaseException], ...]


def _check_errors(errors: ErrorTypes) -> ErrorTypes:
    classes = errors if isinstance(errors, tuple) else (errors,)
    for cls in classes:
        if not (isinstance(cls, type) and issubclass(cls, BaseException)):
            raise TypeError(
                f"errors must be an exception class or a tuple of them, got {cls!r}"
            )
    return errors


class ComponentMapBase(Generic[K, A, C]):
    """
    Storage and read access shared by every lifecycle variant.

    Owns the key -> WithArgs mapping and the factory used to (re)build
    components. The factory is fixed for the lifetime of the map.
    """

    def __init__(
        self,
        components: Mapping[K, WithArgs[A, C]],
        factory: Callable[..., Any],
        *,
        errors: ErrorTypes = Exception,
        name: str | None = None,
    ) -> None:
        if not callable(factory):
            raise TypeError(f"factory must be callable, got {factory!r}")
        self._map: dict[K, WithArgs[A, C]] = dict(components)
        self._factory = factory
        self._errors = _check_errors(errors)
        self._name = name or type(self).__name__

    @property
    def components(self) -> Mapping[K, WithArgs[A, C]]:
        """Read-only live view of the stored components."""
        return MappingProxyType(self._map)

    @property
    def components_mut(self) -> dict[K, WithArgs[A, C]]:
        return self._map

    @property
    def factory(self) -> Callable[..., Any]:
        return self._factory

    @property
    def errors(self) -> ErrorTypes:
        return self._errors

    @property
    def name(self) -> str:
        return self._name

    def __len__(self) -> int:
        return len(self._map)

    def __contains__(self, key: object) -> bool:
        return key in self._map

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self._name!r} components={len(self._map)}>"

    # Factory invocation. Subclasses change what the factory gets to see.

    def _call(self, key: K, args: A) -> Any:
        return self._factory(args)

    def _attempt(self, key: K, args: A) -> Outcome[C]:
        try:
            return Outcome.success(self._call(key, args))
        except self._errors as exc:
            return Outcome.failure(exc)

    async def _attempt_async(self, key: K, args: A) -> Outcome[C]:
        try:
            return Outcome.success(await self._call(key, args))
        except self._errors as exc:
            return Outcome.failure(exc)

    def _report_failures(
        self, action: str, results: Iterable[tuple[K, Outcome[Any]]]
    ) -> None:
        for key, outcome in results:
            if not outcome.ok:
                logger.warning(
                    f"[{self._name}] failed to {action} component {key!r}: {outcome.error!r}"
                )

    def _discard(
        self,
        built: Iterable[tuple[K, C]],
        on_discard: Callable[[K, C], Any] | None,
    ) -> None:
        built = list(built)
        logger.warning(
            f"[{self._name}] construction failed, discarding {len(built)} built component(s)"
        )
        for key, component in built:
            self._hand_off(key, component, on_discard)

    def _hand_off(
        self, key: K, component: C, on_discard: Callable[[K, C], Any] | None
    ) -> None:
        """Pass a dropped component to `on_discard`; hook errors are logged, not raised."""
        if on_discard is None:
            return
        try:
            on_discard(key, component)
        except Exception as exc:
            logger.warning(
                f"[{self._name}] on_discard failed for component {key!r}: {exc!r}"
            )


async def gather_all(aws: Iterable[Awaitable[Any]]) -> list[Any]:
    """
    Await every awaitable, then raise the first exception in input order.

    Every invocation has finished by the time this returns or raises.
    """

    async def settle(aw: Awaitable[Any]) -> Outcome[Any]:
        try:
            return Outcome.success(await aw)
        except BaseException as exc:
            return Outcome.failure(exc)

    outcomes = await asyncio.gather(*(settle(aw) for aw in aws))
    for outcome in outcomes:
        if not outcome.ok:
            raise outcome.error
    return [outcome.value for outcome in outcomes]


def replace_component(pair: WithArgs[A, C], component: C) -> C:
    """Install `component` into `pair` and return the one it evicted."""
    previous = pair.component
    pair.component = component
    return previous
