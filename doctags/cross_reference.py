"""Logic for resolving textual references to documented elements."""

import re

from doctags.element_urls import ElementUrls
from doctags.escape_html import escape_html
from doctags.link_target import LinkTarget
from doctags.namespace_of import NAMESPACE_SEPARATOR
from doctags.reflected_element import ReflectedElement
from doctags.reflection_store import ReflectionStore
from doctags.resolve_name import resolve_class_fqn

LINK_TAG_RE = re.compile(r"\{@link\s+([^}]+)\}")
MEMBER_QUALIFIERS = ("::", "->")


class CrossReferenceResolver:
    """Turns references such as ``Foo``, ``Foo::bar()`` or ``$baz`` into links.

    Resolution never mutates the store and always terminates: a qualified
    reference resolves its class part once and its member part once.
    """

    def __init__(self, store: ReflectionStore, urls: ElementUrls) -> None:
        """Initialize the resolver with the reflection store and URL builder."""
        self.store = store
        self.urls = urls

    def resolve_class(self, name: str, namespace: str | None = None) -> str | None:
        """Resolve a class name relative to a namespace.

        Returns the qualified name of a documented class, or None. A leading
        separator forces the global namespace.
        """
        if name.startswith(NAMESPACE_SEPARATOR):
            namespace = ""
            name = name.lstrip(NAMESPACE_SEPARATOR)
        if not name:
            return None

        qualified = None
        if namespace and self.store.get_class(f"{namespace}\\{name}"):
            qualified = f"{namespace}\\{name}"
        elif self.store.get_class(name):
            qualified = name

        if qualified is None:
            return None
        cls = self.store.get_class(qualified)
        if cls is None or not cls.documented:
            return None
        return qualified

    def resolve_function(
        self, name: str, namespace: str | None = None
    ) -> str | None:
        """Resolve a function name: namespaced first, then global."""
        return self._resolve_namespaced(name, namespace, self.store.get_function)

    def resolve_constant(
        self, name: str, namespace: str | None = None
    ) -> str | None:
        """Resolve a constant name: namespaced first, then global."""
        return self._resolve_namespaced(name, namespace, self.store.get_constant)

    def resolve_target(
        self, reference: str, context: ReflectedElement | None
    ) -> LinkTarget | None:
        """Resolve a reference in the given context to a link target."""
        reference = reference.strip()
        if not reference:
            return None

        context = self._class_context(context)
        namespace = context.namespace_name if context else None
        aliases = context.aliases if context else {}

        pos = _qualifier_position(reference)
        if pos is not None:
            # Class::member or Class->member
            class_part = reference[:pos]
            class_name = self.resolve_class(class_part, namespace)
            if class_name is None:
                class_name = self.resolve_class(
                    resolve_class_fqn(class_part, aliases, namespace or "")
                )
            if class_name is None:
                return None
            cls = self.store.get_class(class_name)
            if cls is None:
                return None
            return self._member_target(cls, reference[pos + 2 :])

        class_name = self.resolve_class(
            resolve_class_fqn(reference, aliases, namespace or ""), namespace
        ) or self.resolve_class(reference, namespace)
        if class_name is not None:
            cls = self.store.get_class(class_name)
            if cls is not None:
                return LinkTarget(class_name, self.urls.class_url(cls), cls)

        function_name = self.resolve_function(reference, namespace)
        if function_name is not None:
            function = self.store.get_function(function_name)
            if function is not None:
                url = self.urls.function_url(function)
                return LinkTarget(function_name, url, function)

        constant_name = self.resolve_constant(reference, namespace)
        if constant_name is not None:
            constant = self.store.get_constant(constant_name)
            if constant is not None:
                url = self.urls.constant_url(constant)
                return LinkTarget(constant_name, url, constant)

        # Only a documented class provides a member domain
        if context is None or not context.is_class or not context.documented:
            return None
        return self._member_target(context, reference)

    def resolve_link(
        self, reference: str, context: ReflectedElement | None
    ) -> str | None:
        """Return an anchor for the reference, or None when nothing matches."""
        target = self.resolve_target(reference, context)
        return target.to_html() if target else None

    def resolve_element(
        self, reference: str, context: ReflectedElement | None
    ) -> ReflectedElement | None:
        """Return the element a reference points to, or None."""
        target = self.resolve_target(reference, context)
        return target.element if target else None

    def link_or_escape(self, reference: str, context: ReflectedElement | None) -> str:
        """Return an anchor for the reference, or its escaped literal text."""
        return self.resolve_link(reference, context) or escape_html(reference)

    def resolve_links(self, text: str, context: ReflectedElement | None) -> str:
        """Replace ``{@link Reference}`` occurrences in plain text with anchors."""
        if not text:
            return ""

        def repl(m: re.Match) -> str:
            return self.resolve_link(m.group(1), context) or m.group(0)

        return LINK_TAG_RE.sub(repl, text)

    def _class_context(
        self, context: ReflectedElement | None
    ) -> ReflectedElement | None:
        """Replace a member context with its declaring class."""
        if context is not None and context.is_member:
            cls = self.store.get_class(context.declaring_class or "")
            if cls is not None:
                return cls
        return context

    def _member_target(self, cls: ReflectedElement, link: str) -> LinkTarget | None:
        """Resolve a member of a class; the link points at the declaring class."""
        store = self.store
        lookups = (
            (store.find_property, link),
            (store.find_property, link[1:] if link.startswith("$") else ""),
            (store.find_method, link),
            (store.find_method, link[:-2] if link.endswith("()") else ""),
            (store.find_class_constant, link),
        )
        for find, member_name in lookups:
            if not member_name:
                continue
            member = find(cls.name, member_name)
            if member is not None:
                return self._member_link(member)
        return None

    def _member_link(self, member: ReflectedElement) -> LinkTarget:
        declaring = member.declaring_class or ""
        if member.kind == "property":
            title = f"{declaring}::${member.name}"
            href = self.urls.property_url(member)
        elif member.kind == "method":
            title = f"{declaring}::{member.name}()"
            href = self.urls.method_url(member)
        else:
            title = f"{declaring}::{member.name}"
            href = self.urls.constant_url(member)
        return LinkTarget(title, href, member)

    @staticmethod
    def _resolve_namespaced(name, namespace, lookup) -> str | None:
        if name.startswith(NAMESPACE_SEPARATOR):
            namespace = ""
            name = name.lstrip(NAMESPACE_SEPARATOR)
        if not name:
            return None
        if namespace and lookup(f"{namespace}\\{name}") is not None:
            return f"{namespace}\\{name}"
        if lookup(name) is not None:
            return name
        return None


def _qualifier_position(reference: str) -> int | None:
    """Position of the first ``::`` or ``->`` after the first character."""
    positions = [reference.find(q) for q in MEMBER_QUALIFIERS]
    positions = [p for p in positions if p > 0]
    return min(positions) if positions else None
