"""Utility for determining the namespace of a qualified name."""

NAMESPACE_SEPARATOR = "\\"


def namespace_of(name: str) -> str:
    """Return the namespace part of a qualified name ("" for the global space)."""
    name = name.lstrip(NAMESPACE_SEPARATOR)
    if NAMESPACE_SEPARATOR in name:
        return name.rsplit(NAMESPACE_SEPARATOR, 1)[0]
    return ""
