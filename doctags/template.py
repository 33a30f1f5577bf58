"""Helper surface shared by the engine and the plugins it loads."""

from typing import Any

from doctags.annotation_map import LONG_DESCRIPTION, SHORT_DESCRIPTION
from doctags.cross_reference import CrossReferenceResolver
from doctags.element_urls import ElementUrls
from doctags.escape_html import escape_html
from doctags.markup_engine import MarkupEngine
from doctags.plugin_registry import PluginRegistry
from doctags.reflected_element import ReflectedElement
from doctags.reflection_store import ReflectionStore
from doctags.resolve_name import resolve_name


class DocTemplate:
    """URL builders, text helpers and reference resolution for rendering."""

    escape_html = staticmethod(escape_html)
    resolve_name = staticmethod(resolve_name)

    def __init__(
        self,
        config: dict[str, Any],
        store: ReflectionStore,
        markup: MarkupEngine,
        registry: PluginRegistry,
    ) -> None:
        self.config = config
        self.store = store
        self.markup = markup
        self.registry = registry
        self.urls = ElementUrls(config["templates"])
        self.resolver = CrossReferenceResolver(store, self.urls)
        self.packages = bool(config.get("packages", True))

    @staticmethod
    def split(value: str) -> tuple[str, str]:
        """Split a tag value into its first word and the rest."""
        parts = value.strip().split(None, 1)
        first = parts[0] if parts else ""
        rest = parts[1] if len(parts) > 1 else ""
        return first, rest

    @staticmethod
    def link(url: str, text: str) -> str:
        return f'<a href="{url}">{escape_html(text)}</a>'

    def type_links(self, value: str, element: ReflectedElement | None) -> str:
        """Link every ``|``-separated type of the value's first word."""
        names, _ = self.split(value)
        links = []
        for name in names.split("|"):
            target = self.resolver.resolve_target(name, element) if name else None
            if target is not None:
                links.append(target.to_html())
            else:
                links.append(escape_html(resolve_name(name)))
        return "|".join(links)

    def description(self, value: str, element: ReflectedElement | None) -> str:
        """Render the part of a tag value that follows its type."""
        return self.doc(self.split(value)[1], element)

    def doc(self, text: str, element: ReflectedElement | None) -> str:
        """Render one line of documentation text, expanding inline tags."""
        if not text:
            return ""
        return self.markup.render_line(text, element)

    def docblock(self, text: str, element: ReflectedElement | None) -> str:
        """Render a multi-paragraph documentation text."""
        if not text:
            return ""
        return self.markup.render_block(text, element)

    def short_description(self, element: ReflectedElement) -> str:
        return self.registry.annotations(element).get(SHORT_DESCRIPTION) or ""

    def long_description(self, element: ReflectedElement) -> str:
        """Short description followed by the long one, after a blank line."""
        annotations = self.registry.annotations(element)
        short = annotations.get(SHORT_DESCRIPTION) or ""
        long = annotations.get(LONG_DESCRIPTION) or ""
        if long:
            return f"{short}\n\n{long}" if short else long
        return short

    def resolve_class(self, name: str, namespace: str | None = None) -> str | None:
        return self.resolver.resolve_class(name, namespace)

    def resolve_element(
        self, reference: str, element: ReflectedElement | None
    ) -> ReflectedElement | None:
        return self.resolver.resolve_element(reference, element)

    def resolve_links(self, text: str, element: ReflectedElement | None) -> str:
        return self.resolver.resolve_links(text, element)

    def source_url(self, element: ReflectedElement) -> str | None:
        return self.registry.source_url(element)
