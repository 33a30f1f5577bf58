"""Logic for mapping reflected elements to documentation page URLs."""

from typing import Any

from doctags.page_path_for_fullname import page_path_for_fullname
from doctags.reflected_element import ReflectedElement


class ElementUrls:
    """Builds summary page URLs and member anchors from filename templates."""

    def __init__(self, templates: dict[str, Any]) -> None:
        """Initialize the builder with the configured filename templates."""
        self.templates = templates

    def package_url(self, package_name: str) -> str:
        return page_path_for_fullname(self.templates["package"], package_name)

    def namespace_url(self, namespace_name: str) -> str:
        return page_path_for_fullname(self.templates["namespace"], namespace_name)

    def class_url(self, cls: ReflectedElement | str) -> str:
        name = cls.name if isinstance(cls, ReflectedElement) else cls
        return page_path_for_fullname(self.templates["class"], name)

    def method_url(self, method: ReflectedElement) -> str:
        return f"{self.class_url(method.declaring_class or '')}#_{method.name}"

    def property_url(self, prop: ReflectedElement) -> str:
        return f"{self.class_url(prop.declaring_class or '')}#${prop.name}"

    def constant_url(self, constant: ReflectedElement) -> str:
        """Link a class constant to its anchor, a free constant to its own page."""
        if constant.declaring_class:
            return f"{self.class_url(constant.declaring_class)}#{constant.name}"
        return page_path_for_fullname(self.templates["constant"], constant.name)

    def function_url(self, function: ReflectedElement) -> str:
        return page_path_for_fullname(self.templates["function"], function.name)

    def element_url(self, element: ReflectedElement) -> str:
        """Dispatch to the URL builder matching the element kind."""
        if element.is_class:
            return self.class_url(element)
        if element.kind == "method":
            return self.method_url(element)
        if element.kind == "property":
            return self.property_url(element)
        if element.kind in {"constant", "class_constant"}:
            return self.constant_url(element)
        if element.kind == "function":
            return self.function_url(element)
        return self.namespace_url(element.name)
