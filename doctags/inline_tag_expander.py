"""Logic for expanding ``{@tag value}`` inline tags through the plugin registry."""

from collections.abc import Callable

from doctags.inline_tag_scanner import (
    DEFAULT_MAX_NESTING,
    InlineTagMatch,
    find_inline_tags,
    match_inline_tag,
)
from doctags.plugin_registry import PluginRegistry
from doctags.reflected_element import ReflectedElement
from doctags.tag_kind import TagKind

Protect = Callable[[str], str]


class InlineTagExpander:
    """Expands inline tags, nested ones first, with the registered processors."""

    def __init__(
        self, registry: PluginRegistry, max_nesting: int = DEFAULT_MAX_NESTING
    ) -> None:
        self.registry = registry
        self.max_nesting = max_nesting

    def expand(
        self,
        text: str,
        element: ReflectedElement | None,
        protect: Protect | None = None,
    ) -> str:
        """Expand every inline tag in a plain text.

        Raises InlineTagNestingError when tags nest deeper than the limit.
        """
        for match in reversed(find_inline_tags(text, self.max_nesting)):
            expanded = self.process_inline_tag(match, element, 1, protect)
            text = text[: match.start] + expanded + text[match.end :]
        return text

    def process_inline_tag(
        self,
        match: InlineTagMatch,
        element: ReflectedElement | None,
        level: int = 1,
        protect: Protect | None = None,
    ) -> str:
        """Render one matched tag; only the outermost result gets protected."""
        tag = match.tag
        value = match.value or ""

        plugin, kind = self.registry.inline_processor(tag)
        if plugin is not None and plugin.tag_name(tag, kind, element) == "":
            return ""

        if kind == TagKind.INLINE_WITH_CHILDREN and value:
            # Right to left so earlier offsets stay valid
            for nested in reversed(find_inline_tags(value, self.max_nesting)):
                expanded = self.process_inline_tag(nested, element, level + 1, protect)
                value = value[: nested.start] + expanded + value[nested.end :]

        if plugin is not None:
            result = plugin.tag_value(tag, kind, value, element)
        else:
            result = "{@%s%s%s}" % (tag, " " if value else "", value)

        if level == 1 and protect is not None:
            return protect(result)
        return result

    def markup_handler(
        self,
        data: str,
        start: int,
        element: ReflectedElement | None,
        protect: Protect,
    ) -> tuple[str, int] | None:
        """Inline pattern callback for the markup engine."""
        match = match_inline_tag(data, start, self.max_nesting)
        if match is None:
            return None
        return self.process_inline_tag(match, element, 1, protect), match.end
