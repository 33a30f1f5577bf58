"""Index of reflected elements keyed by qualified name."""

from collections.abc import Iterable, Iterator
from typing import Any

from doctags.namespace_of import NAMESPACE_SEPARATOR
from doctags.reflected_element import ReflectedElement


class ReflectionStore:
    """Read-only lookups over classes, functions and constants."""

    def __init__(
        self,
        classes: dict[str, ReflectedElement] | None = None,
        functions: dict[str, ReflectedElement] | None = None,
        constants: dict[str, ReflectedElement] | None = None,
    ) -> None:
        """Initialize the store with elements keyed by qualified name."""
        self.classes = classes or {}
        self.functions = functions or {}
        self.constants = constants or {}

    @classmethod
    def from_elements(cls, elements: Iterable[ReflectedElement]) -> "ReflectionStore":
        """Build a store from top-level elements, sorting them by kind."""
        store = cls()
        for element in elements:
            key = element.name.lstrip(NAMESPACE_SEPARATOR)
            if element.is_class:
                store.classes[key] = element
            elif element.kind == "function":
                store.functions[key] = element
            elif element.kind == "constant":
                store.constants[key] = element
        return store

    def __iter__(self) -> Iterator[ReflectedElement]:
        yield from self.classes.values()
        yield from self.functions.values()
        yield from self.constants.values()

    def get_class(self, name: str) -> ReflectedElement | None:
        return self.classes.get(name.lstrip(NAMESPACE_SEPARATOR))

    def get_function(self, name: str) -> ReflectedElement | None:
        return self.functions.get(name.lstrip(NAMESPACE_SEPARATOR))

    def get_constant(self, name: str) -> ReflectedElement | None:
        return self.constants.get(name.lstrip(NAMESPACE_SEPARATOR))

    def annotations(self, element: ReflectedElement) -> dict[str, Any]:
        """Return the raw annotation map of an element."""
        return element.annotations

    def class_chain(self, name: str) -> list[ReflectedElement]:
        """Return the class followed by its known ancestors, nearest first."""
        item = self.get_class(name)
        if not item:
            return []
        chain = [item]
        for base in reversed(item.inheritance):
            base_item = self.get_class(base)
            if base_item:
                chain.append(base_item)
        return chain

    def find_property(self, class_name: str, name: str) -> ReflectedElement | None:
        for item in self.class_chain(class_name):
            if name in item.properties:
                return item.properties[name]
        return None

    def find_method(self, class_name: str, name: str) -> ReflectedElement | None:
        lower = name.lower()
        for item in self.class_chain(class_name):
            for method_name, method in item.methods.items():
                if method_name.lower() == lower:
                    return method
        return None

    def find_class_constant(
        self, class_name: str, name: str
    ) -> ReflectedElement | None:
        for item in self.class_chain(class_name):
            if name in item.constants:
                return item.constants[name]
        return None
