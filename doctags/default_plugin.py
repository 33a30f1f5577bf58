"""Built-in plugin: source links and rendering of the common docblock tags."""

from typing import Any

from doctags.dot_safe import dot_safe
from doctags.errors import UnsupportedTagError
from doctags.plugin_api import AnnotationProcessor, SourceLinkProvider
from doctags.reflected_element import ReflectedElement
from doctags.tag_kind import TagKind

IGNORED_TAGS = {
    "property",
    "property-read",
    "property-write",
    "method",
    "abstract",
    "access",
    "final",
    "filesource",
    "global",
    "name",
    "static",
    "staticvar",
}

TYPED_TAGS = {"param", "return", "throws", "throw", "var"}


class DefaultPlugin(SourceLinkProvider, AnnotationProcessor):
    """Links elements to their highlighted source and renders common tags."""

    def __init__(self, template: Any, config: dict[str, Any]) -> None:
        self.template = template
        self.config = config

    def source_file_name(self, element: ReflectedElement) -> str | None:
        if not self.config.get("source_code", True):
            return None

        prefix = ""
        if element.is_class or element.kind in {"function", "constant"}:
            element_name = element.name
            if element.kind == "function":
                prefix = "function-"
            elif element.kind == "constant":
                prefix = "constant-"
        else:
            element_name = element.declaring_class or element.name

        source_template = self.config["templates"]["source"]
        return source_template % (prefix + dot_safe(element_name.lstrip("\\")))

    def source_url(self, element: ReflectedElement) -> str | None:
        file_name = self.source_file_name(element)
        if file_name is None:
            return None
        line = element.start_line - element.doc_comment_lines
        return f"{file_name}#{line}"

    def processed_tags(self) -> dict[str, TagKind]:
        tags = {
            "package": TagKind.BLOCK,
            "subpackage": TagKind.BLOCK,
            "see": TagKind.BLOCK | TagKind.INLINE_SIMPLE,
            "uses": TagKind.BLOCK | TagKind.INLINE_SIMPLE,
            "link": TagKind.BLOCK | TagKind.INLINE_SIMPLE,
            "internal": TagKind.BLOCK | TagKind.INLINE_WITH_CHILDREN,
        }
        tags.update(dict.fromkeys(TYPED_TAGS, TagKind.BLOCK))
        for ignored in IGNORED_TAGS:
            if not ignored.startswith("property"):
                tags[ignored] = TagKind.BLOCK
        # Covers property-read and property-write too
        tags["property*"] = TagKind.BLOCK
        return tags

    def tag_name(
        self, tag: str, kind: TagKind, element: ReflectedElement | None
    ) -> str:
        if tag.lower() in IGNORED_TAGS:
            return ""
        return tag

    def tag_value(
        self, tag: str, kind: TagKind, value: str, element: ReflectedElement | None
    ) -> str:
        t = self.template
        name = tag.lower()

        if name == "package":
            package_name, description = t.split(value)
            if not t.packages:
                return t.escape_html(value)
            return _join(
                t.link(t.urls.package_url(package_name), package_name),
                t.doc(description, element),
            )

        if name == "subpackage":
            package_name = ""
            packages = element.annotation("package") if element else None
            if packages:
                package_name = t.split(packages[0])[0]
            subpackage_name, description = t.split(value)
            if not (t.packages and package_name):
                return t.escape_html(value)
            url = t.urls.package_url(f"{package_name}\\{subpackage_name}")
            return _join(t.link(url, subpackage_name), t.doc(description, element))

        if name in TYPED_TAGS:
            description = t.description(value, element)
            types = t.type_links(value, element)
            if description:
                return f"<code>{types}</code><br />{description}"
            return f"<code>{types}</code>"

        if name == "internal":
            if not self.config.get("internal"):
                return ""
            if kind == TagKind.INLINE_WITH_CHILDREN:
                # Nested tags are already expanded at this point
                return value
            return t.escape_html(value)

        if name in {"link", "see"}:
            if "://" in value:
                return t.link(t.escape_html(value), value)
            if "@" in value:
                return t.link("mailto:" + t.escape_html(value), value)
            return self._uses(value, kind, element)

        if name == "uses":
            return self._uses(value, kind, element)

        raise UnsupportedTagError(tag)

    def _uses(
        self, value: str, kind: TagKind, element: ReflectedElement | None
    ) -> str:
        t = self.template
        link, description = t.split(value)
        if t.resolve_element(link, element) is None:
            return t.escape_html(value)

        code = f"<code>{t.type_links(link, element)}</code>"
        if kind == TagKind.BLOCK:
            description = t.doc(description, element)
        else:
            description = t.escape_html(description)
        if not description:
            return code
        separator = " " if element is not None and element.is_class else "<br />"
        return f"{code}{separator}{description}"


def _join(link: str, description: str) -> str:
    return f"{link} {description}" if description else link


def plugin(template: Any, config: dict[str, Any]) -> DefaultPlugin:
    return DefaultPlugin(template, config)
