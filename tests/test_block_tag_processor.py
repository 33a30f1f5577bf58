"""Tests for block tag filtering, ordering and rendering."""

from unittest.mock import MagicMock

from doctags.annotation_map import LONG_DESCRIPTION, SHORT_DESCRIPTION
from doctags.block_tag_processor import BlockTagProcessor
from doctags.plugin_api import (
    AnnotationGenerator,
    AnnotationProcessor,
    PluginDescriptor,
    describe,
)
from doctags.plugin_registry import PluginRegistry
from doctags.reflected_element import ReflectedElement
from doctags.tag_kind import TagKind


class RenamingProcessor(AnnotationProcessor):
    """Renders block values and renames or drops tags from a table."""

    def __init__(self, tags: list[str], names: dict[str, str] | None = None) -> None:
        self.tags = tags
        self.names = names or {}

    def processed_tags(self):
        return dict.fromkeys(self.tags, TagKind.BLOCK)

    def tag_name(self, tag, kind, element):
        return self.names.get(tag, tag)

    def tag_value(self, tag, kind, value, element):
        return f"[{tag}:{value}]"


def _processor(*plugins, show_todo: bool = False) -> BlockTagProcessor:
    registry = PluginRegistry()
    for plugin in plugins:
        registry.register(describe(plugin))
    return BlockTagProcessor(registry, show_todo=show_todo)


def _element(annotations) -> ReflectedElement:
    return ReflectedElement(name="App\\Foo", kind="class", annotations=annotations)


def test_fixed_tag_order() -> None:
    """Verify the priority sort, keeping unlisted tags in source order."""
    element = _element(
        {
            "zeta": ["z"],
            "see": ["s"],
            "author": ["a"],
            "alpha": ["x"],
            "deprecated": ["d"],
        }
    )
    result = _processor().process(element)
    assert list(result) == ["deprecated", "author", "see", "zeta", "alpha"]


def test_values_are_escaped_without_plugin() -> None:
    """Verify that tags without a plugin get their values HTML-escaped."""
    element = _element({"copyright": ["<b>ACME</b> & co"]})
    result = _processor().process(element)
    assert result == {"copyright": ["&lt;b&gt;ACME&lt;/b&gt; &amp; co"]}


def test_descriptions_are_never_tags() -> None:
    """Verify that the reserved description keys are dropped."""
    element = _element(
        {SHORT_DESCRIPTION: "Short.", LONG_DESCRIPTION: "Long.", "since": ["1.0"]}
    )
    assert _processor().process(element) == {"since": ["1.0"]}


def test_todo_toggle() -> None:
    """Verify that todo is only shown when enabled."""
    element = _element({"todo": ["fix"], "since": ["1.0"]})
    assert "todo" not in _processor().process(element)
    assert _processor(show_todo=True).process(element)["todo"] == ["fix"]


def test_ignore_set() -> None:
    """Verify that caller-supplied tags are excluded."""
    element = _element({"author": ["a"], "since": ["1.0"]})
    assert list(_processor().process(element, ignore=["Author"])) == ["since"]


def test_plugin_renders_values() -> None:
    """Verify that a block plugin renders each value, lookup ignoring case."""
    element = _element({"See": ["A", "B"]})
    result = _processor(RenamingProcessor(["see"])).process(element)
    assert result == {"See": ["[See:A]", "[See:B]"]}


def test_rename_and_suppress() -> None:
    """Verify renaming and removal through the plugin's tag name."""
    names = {"author": "writer", "internal": ""}
    plugin = RenamingProcessor(["author", "internal"], names)
    element = _element({"author": ["me"], "internal": ["x"], "since": ["1"]})
    result = _processor(plugin).process(element)
    assert result == {"writer": ["[author:me]"], "since": ["1"]}


def test_rename_onto_existing_tag_replaces_values() -> None:
    """Verify that the last processed tag wins on a rename collision."""
    plugin = RenamingProcessor(["since"], {"since": "version"})
    element = _element({"since": ["2.0"], "version": ["1.0"]})
    result = _processor(plugin).process(element)
    assert result == {"version": ["[since:2.0]"]}


def test_wildcard_block_lookup() -> None:
    """Verify that property-read is handled by a property* plugin."""
    plugin = RenamingProcessor(["property*"])
    element = _element({"property-read": ["int $x"], "property": ["int $y"]})
    result = _processor(plugin).process(element)
    assert result == {
        "property-read": ["[property-read:int $x]"],
        "property": ["[property:int $y]"],
    }


def test_lookup_key_uses_leading_word() -> None:
    """Verify that the lookup key is the leading [\\w-]+ run of the name."""
    plugin = RenamingProcessor(["param"])
    element = _element({"param[]": ["int $x"]})
    assert _processor(plugin).process(element) == {"param[]": ["[param[]:int $x]"]}


def test_generated_annotations_are_processed() -> None:
    """Verify that annotation generator output is merged before processing."""
    generator = MagicMock(spec=AnnotationGenerator)
    generator.annotations.return_value = {"author": ["bot"], "license": ["MIT"]}
    registry = PluginRegistry()
    registry.register(PluginDescriptor(name="gen", annotation_generator=generator))
    element = _element({"author": ["me"]})

    result = BlockTagProcessor(registry).process(element)

    assert result == {"license": ["MIT"], "author": ["me", "bot"]}
    generator.annotations.assert_called_once_with(element)
