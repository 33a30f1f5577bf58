"""Shared fixtures: a small reflected code base in the App namespace."""

import copy

import pytest

from doctags.load_config import DEFAULT_CONFIG
from doctags.reflected_element import ReflectedElement
from doctags.reflection_store import ReflectionStore


def _member(name: str, kind: str, cls: str, **kwargs) -> ReflectedElement:
    return ReflectedElement(
        name=name, kind=kind, declaring_class=cls, namespace="App", **kwargs
    )


@pytest.fixture
def store() -> ReflectionStore:
    """App\\MyClass, its subclass, an undocumented class, a function, a constant."""
    my_class = ReflectedElement(
        name="App\\MyClass",
        kind="class",
        namespace="App",
        start_line=10,
        doc_comment="/**\n * My class.\n */",
        annotations={" short_description": "My class."},
    )
    my_class.methods["doStuff"] = _member(
        "doStuff", "method", "App\\MyClass", start_line=20, doc_comment="/** Does. */"
    )
    my_class.properties["items"] = _member("items", "property", "App\\MyClass")
    my_class.constants["LIMIT"] = _member("LIMIT", "class_constant", "App\\MyClass")

    child = ReflectedElement(
        name="App\\Child",
        kind="class",
        namespace="App",
        inheritance=["App\\MyClass"],
    )
    hidden = ReflectedElement(
        name="App\\Hidden", kind="class", namespace="App", documented=False
    )
    hidden.methods["run"] = _member("run", "method", "App\\Hidden")

    helper = ReflectedElement(
        name="App\\helper", kind="function", namespace="App", start_line=5
    )
    version = ReflectedElement(name="App\\VERSION", kind="constant", namespace="App")
    return ReflectionStore.from_elements([my_class, child, hidden, helper, version])


@pytest.fixture
def config() -> dict:
    return copy.deepcopy(DEFAULT_CONFIG)
