"""Lifecycle operations, one mixin per (sync/async, infallible/fallible) variant."""

from .async_fallible import AsyncFallible
from .async_infallible import AsyncInfallible
from .sync_fallible import SyncFallible
from .sync_infallible import SyncInfallible

__all__ = [
    "SyncInfallible",
    "SyncFallible",
    "AsyncInfallible",
    "AsyncFallible",
]
