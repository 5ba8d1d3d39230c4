from __future__ import annotations

import pytest

from compmap import ComponentMap, KeyAwareComponentMap, Outcome, WithArgs


def labelled(key: str, args: int) -> str:
    return f"{key}={args}"


def strict_labelled(key: str, args: int) -> str:
    if args < 0:
        raise ValueError(f"{key}: negative args")
    return f"{key}={args}"


def test_key_aware_init_and_reinit() -> None:
    registry = KeyAwareComponentMap.init([("a", 1), ("b", 2)], labelled)
    assert registry.components["a"].component == "a=1"

    results = registry.reinit(["b", "missing"])
    assert [(r.key, r.value) for r in results] == [("b", "b=2"), ("missing", None)]


def test_key_aware_update_passes_new_key() -> None:
    registry = KeyAwareComponentMap.init([], labelled)
    results = registry.update([("z", 5)])
    assert results[0].value is None
    assert registry.components["z"] == WithArgs(component="z=5", args=5)


def test_key_aware_try_update_isolates_failure() -> None:
    registry = KeyAwareComponentMap.try_init([("a", 1)], strict_labelled)

    results = registry.try_update([("a", -1), ("b", 2)])

    assert not results[0].value.ok
    assert results[1].value == Outcome.success(None)
    assert registry.components["a"].component == "a=1"
    assert registry.components["b"].component == "b=2"


def test_key_aware_try_init_failure() -> None:
    with pytest.raises(ValueError, match="b: negative args"):
        KeyAwareComponentMap.try_init([("a", 1), ("b", -2)], strict_labelled)


def test_key_aware_map_is_a_component_map() -> None:
    registry = KeyAwareComponentMap.init([], labelled)
    assert isinstance(registry, ComponentMap)
