"""Tests for the reflection store."""

from doctags.reflected_element import ReflectedElement
from doctags.reflection_store import ReflectionStore


def _class(name: str, inheritance: list[str] | None = None) -> ReflectedElement:
    return ReflectedElement(name=name, kind="class", inheritance=inheritance or [])


def test_from_elements_sorts_by_kind() -> None:
    """Verify that elements are indexed by kind and qualified name."""
    store = ReflectionStore.from_elements(
        [
            ReflectedElement(name="\\App\\Foo", kind="interface"),
            ReflectedElement(name="App\\bar", kind="function"),
            ReflectedElement(name="App\\BAZ", kind="constant"),
        ]
    )
    assert store.get_class("App\\Foo").kind == "interface"
    assert store.get_class("\\App\\Foo") is store.get_class("App\\Foo")
    assert store.get_function("App\\bar") is not None
    assert store.get_constant("App\\BAZ") is not None
    assert [e.name for e in store] == ["\\App\\Foo", "App\\bar", "App\\BAZ"]


def test_inherited_member_lookup() -> None:
    """Verify member lookups walk the base-class chain, nearest first."""
    base = _class("Base")
    base.methods["save"] = ReflectedElement(
        name="save", kind="method", declaring_class="Base"
    )
    base.constants["MAX"] = ReflectedElement(
        name="MAX", kind="class_constant", declaring_class="Base"
    )
    derived = _class("Derived", ["Base"])
    derived.constants["MAX"] = ReflectedElement(
        name="MAX", kind="class_constant", declaring_class="Derived"
    )
    store = ReflectionStore.from_elements([base, derived])

    assert [c.name for c in store.class_chain("Derived")] == ["Derived", "Base"]
    assert store.find_method("Derived", "SAVE").declaring_class == "Base"
    assert store.find_class_constant("Derived", "MAX").declaring_class == "Derived"
    assert store.find_class_constant("Derived", "max") is None
    assert store.find_property("Derived", "save") is None


def test_annotations_are_the_raw_map() -> None:
    """Verify that the store hands out the element's own annotation map."""
    element = ReflectedElement(name="Foo", kind="class", annotations={"since": ["1"]})
    store = ReflectionStore.from_elements([element])
    assert store.annotations(element) is element.annotations
