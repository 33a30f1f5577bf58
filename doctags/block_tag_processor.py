"""Logic for filtering, ordering and rendering an element's block tags."""

from collections.abc import Iterable
from typing import Any

from doctags.annotation_map import is_description_key
from doctags.escape_html import escape_html
from doctags.plugin_registry import PluginRegistry
from doctags.reflected_element import ReflectedElement
from doctags.tag_kind import TagKind

TAG_ORDER = {
    "deprecated": 0,
    "category": 1,
    "package": 2,
    "subpackage": 3,
    "copyright": 4,
    "license": 5,
    "author": 6,
    "version": 7,
    "since": 8,
    "see": 9,
    "uses": 10,
    "link": 11,
    "example": 12,
    "tutorial": 13,
    "todo": 14,
}
UNLISTED_ORDER = 99


class BlockTagProcessor:
    """Turns an element's annotations into ordered, rendered block tags."""

    def __init__(self, registry: PluginRegistry, show_todo: bool = False) -> None:
        self.registry = registry
        self.show_todo = show_todo

    def process(
        self, element: ReflectedElement, ignore: Iterable[str] = ()
    ) -> dict[str, list[str]]:
        """Return final tag name -> rendered values, in display order."""
        ignored = {name.lower() for name in ignore}
        if not self.show_todo:
            ignored.add("todo")

        items = [
            (name, values)
            for name, values in self.registry.annotations(element).items()
            if not is_description_key(name) and name.lower() not in ignored
        ]
        # sort() is stable: unlisted tags keep their relative order
        items.sort(key=lambda item: TAG_ORDER.get(item[0].lower(), UNLISTED_ORDER))

        result: dict[str, list[str]] = {}
        for name, values in items:
            self._render_tag(element, name, _as_list(values), result)
        return result

    def _render_tag(
        self,
        element: ReflectedElement,
        name: str,
        values: list[str],
        result: dict[str, list[str]],
    ) -> None:
        plugin = self.registry.block_processor(name)
        if plugin is None:
            result[name] = [escape_html(v) for v in values]
            return

        tag_name = plugin.tag_name(name, TagKind.BLOCK, element)
        if tag_name == "":
            result.pop(name, None)
            return

        rendered = [plugin.tag_value(name, TagKind.BLOCK, v, element) for v in values]
        if tag_name != name:
            result.pop(name, None)
        # A rename onto an existing name replaces its values
        result[tag_name] = rendered


def _as_list(values: Any) -> list[str]:
    if isinstance(values, (list, tuple)):
        return ["" if v is None else str(v) for v in values]
    return ["" if values is None else str(values)]
