"""Predicate for checking if an element is a class member."""


def is_member_kind(kind: str) -> bool:
    """Check if the kind represents a class member (method, property, constant)."""
    k = kind.lower()
    return k in {"method", "property", "class_constant"}
