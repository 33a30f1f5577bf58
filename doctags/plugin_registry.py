"""Lookup tables mapping tag names and kinds to plugins."""

import logging
import re
from types import MappingProxyType
from typing import Any

from doctags.annotation_map import merge_annotations
from doctags.errors import ConfigurationError
from doctags.plugin_api import (
    AnnotationGenerator,
    AnnotationProcessor,
    PagePlugin,
    PluginDescriptor,
    SourceLinkProvider,
)
from doctags.reflected_element import ReflectedElement
from doctags.tag_kind import SINGLE_KINDS, TagKind

logger = logging.getLogger(__name__)

WILDCARD = "*"
BLOCK_KEY_RE = re.compile(r"^([\w-]+)")


class PluginRegistry:
    """Holds the active plugins, one annotation processor per (tag, kind).

    Registration happens once while plugins load; ``freeze`` then turns the
    tables read-only for the rest of the run.
    """

    def __init__(self) -> None:
        """Initialize empty plugin tables."""
        self._processors: dict[tuple[str, TagKind], AnnotationProcessor] = {}
        self._wildcards: dict[str, AnnotationProcessor] = {}
        self.source_link: SourceLinkProvider | None = None
        self.generators: list[AnnotationGenerator] = []
        self.pages: list[PagePlugin] = []
        self.plugin_names: list[str] = []
        self.frozen = False

    def register(self, descriptor: PluginDescriptor) -> bool:
        """Insert a plugin into every table matching the roles it provides."""
        if self.frozen:
            msg = f"Cannot register plugin {descriptor.name}: registry is frozen"
            raise ConfigurationError(msg)

        result = False
        if descriptor.source_link is not None:
            self.source_link = descriptor.source_link
            result = True

        processor = descriptor.annotation_processor
        if processor is not None:
            for tag, options in processor.processed_tags().items():
                if self._register_tag(tag.lower(), TagKind(options), processor):
                    result = True

        if descriptor.annotation_generator is not None:
            self.generators.append(descriptor.annotation_generator)
            result = True

        if descriptor.page is not None:
            self.pages.append(descriptor.page)
            result = True

        if result and descriptor.name not in self.plugin_names:
            self.plugin_names.append(descriptor.name)
        return result

    def _register_tag(
        self, tag: str, options: TagKind, processor: AnnotationProcessor
    ) -> bool:
        registered = False
        if tag.endswith(WILDCARD):
            # Wildcards only apply to block tags
            if options & TagKind.BLOCK:
                self._wildcards[tag.rstrip(WILDCARD)] = processor
                registered = True
            else:
                logger.debug("Ignoring non-block wildcard tag %s", tag)
            return registered

        for kind in SINGLE_KINDS:
            if options & kind:
                self._processors[(tag, kind)] = processor
                registered = True
        return registered

    def freeze(self) -> None:
        """Make the lookup tables read-only."""
        self._processors = MappingProxyType(dict(self._processors))
        self._wildcards = MappingProxyType(dict(self._wildcards))
        self.frozen = True

    def require_source_link(self) -> SourceLinkProvider:
        """Return the active source-link plugin; its absence is fatal."""
        if self.source_link is None:
            msg = "No source link plugin was registered"
            raise ConfigurationError(msg)
        return self.source_link

    def lookup(self, tag: str, kind: TagKind) -> AnnotationProcessor | None:
        """Return the processor registered for an exact (tag, kind) pair."""
        return self._processors.get((tag.lower(), kind))

    def inline_processor(
        self, tag: str
    ) -> tuple[AnnotationProcessor | None, TagKind]:
        """Find the processor of an inline tag and the kind it is handled as.

        Simple tags take precedence over tags with children; without any plugin
        the tag is treated as having children so nested tags still expand.
        """
        plugin = self.lookup(tag, TagKind.INLINE_SIMPLE)
        if plugin is not None:
            return plugin, TagKind.INLINE_SIMPLE
        plugin = self.lookup(tag, TagKind.INLINE_WITH_CHILDREN)
        return plugin, TagKind.INLINE_WITH_CHILDREN

    def block_processor(self, name: str) -> AnnotationProcessor | None:
        """Find the processor of a block tag, falling back to wildcard names."""
        key = block_lookup_key(name)
        plugin = self.lookup(key, TagKind.BLOCK)
        if plugin is not None:
            return plugin

        candidate = key
        while True:
            if candidate in self._wildcards:
                return self._wildcards[candidate]
            if "-" not in candidate:
                return None
            candidate = candidate.rsplit("-", 1)[0]

    def source_file_name(self, element: ReflectedElement) -> str | None:
        return self.require_source_link().source_file_name(element)

    def source_url(self, element: ReflectedElement) -> str | None:
        return self.require_source_link().source_url(element)

    def annotations(self, element: ReflectedElement) -> dict[str, Any]:
        """Element annotations extended with those of the generator plugins."""
        annotations = dict(element.annotations)
        for generator in self.generators:
            custom = generator.annotations(element)
            if custom:
                annotations = merge_annotations(annotations, custom)
        return annotations

    def render_custom_pages(self) -> None:
        for page in self.pages:
            page.render_pages()

    def custom_menu_items(self, position: int) -> list[dict[str, str]]:
        items: list[dict[str, str]] = []
        for page in self.pages:
            items.extend(page.menu_items(position) or [])
        return items


def block_lookup_key(name: str) -> str:
    """Lookup key of a block tag: its leading ``[\\w-]+`` run, lower-cased."""
    m = BLOCK_KEY_RE.match(name)
    return (m.group(1) if m else name).lower()
