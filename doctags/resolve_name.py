"""Utilities for normalizing type and class names found in annotations."""

from doctags.namespace_of import NAMESPACE_SEPARATOR

SCALAR_NAMES = {
    "int": "integer",
    "bool": "boolean",
    "double": "float",
    "void": "",
    "FALSE": "false",
    "TRUE": "true",
    "NULL": "null",
}


def resolve_name(name: str) -> str:
    """Resolve a type name to its display form (int -> integer, etc.)."""
    name = name.lstrip(NAMESPACE_SEPARATOR)
    return SCALAR_NAMES.get(name, name)


def resolve_class_fqn(name: str, aliases: dict[str, str], namespace: str) -> str:
    """Build a fully qualified class name using the namespace alias table.

    A leading separator already marks a fully qualified name. Otherwise the first
    segment is looked up in the alias table (case-insensitively) and, failing
    that, the name is taken relative to the given namespace.
    """
    if name.startswith(NAMESPACE_SEPARATOR):
        return name.lstrip(NAMESPACE_SEPARATOR)

    head, sep, rest = name.partition(NAMESPACE_SEPARATOR)
    lowered = {alias.lower(): target for alias, target in aliases.items()}
    target = lowered.get(head.lower())
    if target is not None:
        return target.lstrip(NAMESPACE_SEPARATOR) + sep + rest

    if namespace:
        return f"{namespace}{NAMESPACE_SEPARATOR}{name}"
    return name
