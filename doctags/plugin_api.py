"""Plugin role interfaces and the descriptor that aggregates them.

A plugin module exposes ``plugin(template, config)`` returning a
``PluginDescriptor``, a plugin object, or an iterable of either. A plugin object
may implement several roles; ``describe`` registers it under each of them.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any

from doctags.reflected_element import ReflectedElement
from doctags.tag_kind import TagKind

MENU_TOP = 1
MENU_MAIN = 2
MENU_FOOTER = 4


class SourceLinkProvider(ABC):
    """Computes the highlighted source file name and URL of an element."""

    @abstractmethod
    def source_file_name(self, element: ReflectedElement) -> str | None:
        """File name of the highlighted source, or None to skip generating it."""

    @abstractmethod
    def source_url(self, element: ReflectedElement) -> str | None:
        """URL of the highlighted source including a ``#line`` anchor."""


class AnnotationProcessor(ABC):
    """Renders annotation tags.

    There is one processor per (tag, kind); the one registered last wins.
    """

    @abstractmethod
    def processed_tags(self) -> dict[str, TagKind]:
        """Map of tag names to the kinds (or-ed together) handled by the plugin.

        A name ending in ``*`` also matches block tags with a ``-suffix``, e.g.
        ``property*`` handles ``property-read``.
        """

    @abstractmethod
    def tag_name(
        self, tag: str, kind: TagKind, element: ReflectedElement | None
    ) -> str:
        """Display name of a tag; an empty string removes the tag."""

    @abstractmethod
    def tag_value(
        self, tag: str, kind: TagKind, value: str, element: ReflectedElement | None
    ) -> str:
        """Render a tag value to HTML."""


class AnnotationGenerator(ABC):
    """Adds custom annotations to elements."""

    @abstractmethod
    def annotations(self, element: ReflectedElement) -> dict[str, Any]:
        """Generated annotations; they are processed like the element's own."""


class PagePlugin(ABC):
    """Renders custom pages and contributes menu items."""

    @abstractmethod
    def render_pages(self) -> None:
        """Render the plugin's pages."""

    def menu_items(self, position: int) -> list[dict[str, str]]:
        """Menu items for a menu position (MENU_TOP, MENU_MAIN, MENU_FOOTER)."""
        return []


@dataclass(frozen=True)
class PluginDescriptor:
    """The roles a single plugin registration provides."""

    name: str
    source_link: SourceLinkProvider | None = None
    annotation_processor: AnnotationProcessor | None = None
    annotation_generator: AnnotationGenerator | None = None
    page: PagePlugin | None = None

    @property
    def is_empty(self) -> bool:
        return not (
            self.source_link
            or self.annotation_processor
            or self.annotation_generator
            or self.page
        )


def describe(plugin: Any, name: str | None = None) -> PluginDescriptor:
    """Build a descriptor for a plugin object from the roles it implements."""
    if isinstance(plugin, PluginDescriptor):
        return plugin
    return PluginDescriptor(
        name=name or type(plugin).__name__,
        source_link=plugin if isinstance(plugin, SourceLinkProvider) else None,
        annotation_processor=(
            plugin if isinstance(plugin, AnnotationProcessor) else None
        ),
        annotation_generator=(
            plugin if isinstance(plugin, AnnotationGenerator) else None
        ),
        page=plugin if isinstance(plugin, PagePlugin) else None,
    )
