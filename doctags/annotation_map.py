"""Reserved keys and merging rules for raw annotation maps."""

from typing import Any

# Leading space keeps these from ever colliding with a tag name.
SHORT_DESCRIPTION = " short_description"
LONG_DESCRIPTION = " long_description"

DESCRIPTION_KEYS = (SHORT_DESCRIPTION, LONG_DESCRIPTION)


def is_description_key(name: str) -> bool:
    """Check whether a key holds a free-text description rather than a tag."""
    return name in DESCRIPTION_KEYS


def merge_annotations(base: dict[str, Any], extra: dict[str, Any]) -> dict[str, Any]:
    """Merge generated annotations into an element's own annotations.

    - Descriptions are appended after a blank line.
    - Values of an existing tag are appended to it.
    - New tags are added after the existing ones.
    """
    result: dict[str, Any] = {k: _copy(v) for k, v in base.items()}
    for key, value in extra.items():
        if is_description_key(key):
            if result.get(key):
                result[key] = f"{result[key]}\n\n{value}"
            else:
                result[key] = value
        elif key in result:
            result[key] = list(result[key]) + _as_list(value)
        else:
            result[key] = _as_list(value)
    return result


def _as_list(value: Any) -> list[str]:
    if isinstance(value, (list, tuple)):
        return [str(v) for v in value]
    return [str(value)]


def _copy(value: Any) -> Any:
    return list(value) if isinstance(value, list) else value
