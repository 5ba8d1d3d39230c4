"""Keyed component registry with sync/async, fallible/infallible lifecycles."""

import logging

from .core import Keyed, Outcome, WithArgs
from .registry import ComponentMap, KeyAwareComponentMap

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "ComponentMap",
    "KeyAwareComponentMap",
    "Keyed",
    "Outcome",
    "WithArgs",
]
