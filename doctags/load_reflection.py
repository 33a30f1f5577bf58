"""Logic for loading pre-extracted reflection data from YAML dumps."""

from collections.abc import Iterable
from pathlib import Path
from typing import Any

import yaml

from doctags.annotation_map import LONG_DESCRIPTION, SHORT_DESCRIPTION
from doctags.errors import ConfigurationError
from doctags.reflected_element import ReflectedElement
from doctags.reflection_store import ReflectionStore

MEMBER_SECTIONS = {
    "properties": "property",
    "methods": "method",
    "constants": "class_constant",
}


def load_reflection(paths: Iterable[Path]) -> ReflectionStore:
    """Load every YAML dump and index the elements they describe."""
    elements: list[ReflectedElement] = []
    for path in paths:
        doc = _load_yaml(path)
        for it in iter_main_items(doc):
            elements.append(build_element(it))
    return ReflectionStore.from_elements(elements)


def iter_main_items(doc: dict[str, Any]) -> Iterable[dict[str, Any]]:
    """Iterate over the element entries of a reflection dump."""
    items = doc.get("elements") or []
    for it in items:
        if isinstance(it, dict) and it.get("name"):
            yield it


def build_element(
    it: dict[str, Any], declaring: ReflectedElement | None = None
) -> ReflectedElement:
    """Build an element (and its members) from one YAML mapping."""
    kind = str(it.get("kind") or "").strip().lower() or "class"
    ns = it.get("namespace")
    if ns is None and declaring is not None:
        ns = declaring.namespace_name
    element = ReflectedElement(
        name=str(it["name"]),
        kind=kind,
        namespace=str(ns) if ns is not None else None,
        declaring_class=declaring.name if declaring else None,
        documented=bool(it.get("documented", True)),
        annotations=_annotations(it.get("annotations") or {}),
        aliases={str(k): str(v) for k, v in (it.get("aliases") or {}).items()},
        start_line=int(it.get("start_line") or 0),
        doc_comment=it.get("doc_comment"),
        inheritance=[str(x) for x in (it.get("inheritance") or [])],
    )
    if declaring is not None and not element.aliases:
        element.aliases = dict(declaring.aliases)
    for section, member_kind in MEMBER_SECTIONS.items():
        members = getattr(element, section)
        for raw in it.get(section) or []:
            if isinstance(raw, dict) and raw.get("name"):
                member = build_element({"kind": member_kind, **raw}, element)
                members[member.name] = member
    return element


def _annotations(raw: dict[str, Any]) -> dict[str, Any]:
    """Map YAML annotation entries onto the reserved-key annotation format."""
    result: dict[str, Any] = {}
    for key, value in raw.items():
        if key == "short_description":
            result[SHORT_DESCRIPTION] = str(value)
        elif key == "long_description":
            result[LONG_DESCRIPTION] = str(value)
        elif isinstance(value, list):
            result[str(key)] = ["" if v is None else str(v) for v in value]
        else:
            result[str(key)] = ["" if value is None else str(value)]
    return result


def _load_yaml(path: Path) -> dict[str, Any]:
    try:
        doc = yaml.safe_load(path.read_text(encoding="utf-8"))
    except (OSError, yaml.YAMLError) as e:
        msg = f"Could not read reflection data from {path}: {e}"
        raise ConfigurationError(msg) from e
    return doc or {}
