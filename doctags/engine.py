"""Composition root wiring configuration, plugins and renderers together."""

import logging
import re
from typing import Any

from doctags.block_tag_processor import BlockTagProcessor
from doctags.context_stack import ContextStack
from doctags.inline_tag_expander import InlineTagExpander
from doctags.inline_tag_scanner import TAG_OPEN
from doctags.load_plugins import load_plugins
from doctags.markup_engine import MarkdownMarkupEngine, MarkupEngine
from doctags.plugin_registry import PluginRegistry
from doctags.reflected_element import ReflectedElement
from doctags.reflection_store import ReflectionStore
from doctags.template import DocTemplate

logger = logging.getLogger(__name__)

MEMBER_SECTIONS = ("constants", "properties", "methods")


class AnnotationEngine:
    """Renders the annotations of reflected elements to HTML fragments."""

    def __init__(
        self,
        config: dict[str, Any],
        store: ReflectionStore,
        markup: MarkupEngine | None = None,
    ) -> None:
        """Build the engine and load the default and configured plugins."""
        self.config = config
        self.store = store
        self.markup = markup or MarkdownMarkupEngine()
        self.registry = PluginRegistry()
        self.template = DocTemplate(config, store, self.markup, self.registry)
        self.resolver = self.template.resolver
        self.expander = InlineTagExpander(
            self.registry, max_nesting=int(config.get("max_inline_nesting", 32))
        )
        self.markup.register_inline_pattern(
            "inline_tag", re.escape(TAG_OPEN), self.expander.markup_handler
        )
        load_plugins(self.registry, self.template, config)
        self.block_tags = BlockTagProcessor(
            self.registry, show_todo=bool(config.get("todo"))
        )
        self.contexts = ContextStack()

    def annotations(self, element: ReflectedElement) -> dict[str, Any]:
        return self.registry.annotations(element)

    def process_block_tags(
        self, element: ReflectedElement, ignore: tuple[str, ...] = ()
    ) -> dict[str, list[str]]:
        return self.block_tags.process(element, ignore)

    def expand_inline_tags(self, text: str, element: ReflectedElement | None) -> str:
        """Expand inline tags of a text without running the markup engine."""
        return self.expander.expand(text, element)

    def resolve_link(
        self, reference: str, context: ReflectedElement | None
    ) -> str | None:
        return self.resolver.resolve_link(reference, context)

    def source_file_name(self, element: ReflectedElement) -> str | None:
        return self.registry.source_file_name(element)

    def source_url(self, element: ReflectedElement) -> str | None:
        return self.registry.source_url(element)

    def render_element(
        self, element: ReflectedElement, context: ReflectedElement | None = None
    ) -> dict[str, Any]:
        """Render descriptions, block tags and the source link of one element."""
        context = context or element
        t = self.template
        return {
            "name": element.qualified_name,
            "kind": element.kind,
            "short_description": t.doc(t.short_description(element), context),
            "description": t.docblock(t.long_description(element), context),
            "tags": self.process_block_tags(element),
            "source_url": self.source_url(element),
        }

    def render_store(self) -> list[dict[str, Any]]:
        """Render every documented element of the store, members included."""
        rendered = []
        for element in self.store:
            if not element.documented:
                logger.debug("Skipping undocumented %s", element.name)
                continue
            with self.contexts.scope(element) as context:
                entry = self.render_element(element, context)
                members = []
                for section in MEMBER_SECTIONS:
                    for member in getattr(element, section).values():
                        with self.contexts.scope(member) as member_context:
                            members.append(self.render_element(member, member_context))
                if members:
                    entry["members"] = members
            rendered.append(entry)
        return rendered

    def render_custom_pages(self) -> None:
        self.registry.render_custom_pages()

    def custom_menu_items(self, position: int) -> list[dict[str, str]]:
        return self.registry.custom_menu_items(position)
