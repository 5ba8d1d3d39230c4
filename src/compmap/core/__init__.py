"""Data model and storage shared by all lifecycle variants."""

from .base import ComponentMapBase, gather_all, replace_component
from .types import Keyed, Outcome, WithArgs

__all__ = [
    "ComponentMapBase",
    "Keyed",
    "Outcome",
    "WithArgs",
    "gather_all",
    "replace_component",
]
