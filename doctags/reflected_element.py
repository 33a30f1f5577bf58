"""Data models for representing reflected program elements."""

from dataclasses import dataclass, field
from typing import Any

from doctags.is_member_kind import is_member_kind
from doctags.is_type_kind import is_type_kind
from doctags.namespace_of import namespace_of


@dataclass
class ReflectedElement:
    """Represents a reflected element (class, method, function, etc.).

    Instances are owned by the reflection store and never mutated by the engine.
    Members carry their short name in ``name`` and the qualified name of the class
    that declares them in ``declaring_class``.
    """

    name: str
    kind: str  # class/interface/trait/method/property/class_constant/function/...
    namespace: str | None = None
    declaring_class: str | None = None
    documented: bool = True
    annotations: dict[str, Any] = field(default_factory=dict)
    aliases: dict[str, str] = field(default_factory=dict)  # alias -> qualified name
    start_line: int = 0
    doc_comment: str | None = None
    inheritance: list[str] = field(default_factory=list)  # root first
    properties: dict[str, "ReflectedElement"] = field(default_factory=dict)
    methods: dict[str, "ReflectedElement"] = field(default_factory=dict)
    constants: dict[str, "ReflectedElement"] = field(default_factory=dict)

    @property
    def namespace_name(self) -> str:
        """Namespace the element is declared in ("" for the global space)."""
        if self.namespace is not None:
            return self.namespace
        if self.declaring_class:
            return namespace_of(self.declaring_class)
        return namespace_of(self.name)

    @property
    def qualified_name(self) -> str:
        """Fully qualified name; members are written as ``Class::member``."""
        if self.declaring_class:
            return f"{self.declaring_class}::{self.name}"
        return self.name

    @property
    def doc_comment_lines(self) -> int:
        """Number of lines occupied by the attached doc comment."""
        if not self.doc_comment:
            return 0
        return self.doc_comment.count("\n") + 1

    @property
    def is_class(self) -> bool:
        return is_type_kind(self.kind)

    @property
    def is_member(self) -> bool:
        return is_member_kind(self.kind) and self.declaring_class is not None

    def has_annotation(self, tag: str) -> bool:
        """Check for a tag, ignoring case."""
        tag = tag.lower()
        return any(key.lower() == tag for key in self.annotations)

    def annotation(self, tag: str) -> Any:
        """Return the values stored under a tag (case-insensitive) or None."""
        tag = tag.lower()
        for key, values in self.annotations.items():
            if key.lower() == tag:
                return values
        return None
