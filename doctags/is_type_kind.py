"""Predicate for checking if an element is a class-like type."""


def is_type_kind(kind: str) -> bool:
    """Check if the kind represents a class-like type (class, interface, trait)."""
    k = kind.lower()
    return k in {"class", "interface", "trait"}
