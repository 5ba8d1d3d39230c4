from __future__ import annotations

import pytest

from compmap import ComponentMap, WithArgs


def identity(args: int) -> int:
    return args


def test_components_view_is_read_only() -> None:
    registry = ComponentMap.init([("a", 1)], identity)
    with pytest.raises(TypeError):
        registry.components["b"] = WithArgs(2, 2)


def test_components_view_is_stable_without_mutation() -> None:
    registry = ComponentMap.init([("a", 1), ("b", 2)], identity)
    assert dict(registry.components) == dict(registry.components)


def test_components_mut_writes_through() -> None:
    registry = ComponentMap.init([("a", 1)], identity)
    registry.components_mut["b"] = WithArgs(component=20, args=2)

    assert "b" in registry
    assert registry.components["b"].component == 20
    assert [r.value for r in registry.reinit(["b"])] == [20]
    assert registry.components["b"].component == 2


def test_factory_accessor_returns_stored_factory() -> None:
    registry = ComponentMap.init([], identity)
    assert registry.factory is identity


def test_constructor_accepts_existing_pairs() -> None:
    registry = ComponentMap({"a": WithArgs(component=1, args=1)}, identity)
    assert len(registry) == 1
    assert registry.reinit_all()[0].value == 1


def test_constructor_rejects_non_callable_factory() -> None:
    with pytest.raises(TypeError, match="factory must be callable"):
        ComponentMap({}, 42)


def test_constructor_rejects_invalid_errors() -> None:
    with pytest.raises(TypeError, match="errors must be an exception class"):
        ComponentMap({}, identity, errors=(ValueError, "nope"))


def test_errors_tuple_is_accepted() -> None:
    registry = ComponentMap({}, identity, errors=(ValueError, KeyError))
    assert registry.errors == (ValueError, KeyError)


def test_name_and_repr() -> None:
    registry = ComponentMap.init([("a", 1)], identity, name="connections")
    assert registry.name == "connections"
    assert repr(registry) == "<ComponentMap 'connections' components=1>"
    assert ComponentMap({}, identity).name == "ComponentMap"
