"""LIFO stack of rendering contexts."""

from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

from doctags.reflected_element import ReflectedElement


class ContextStack:
    """Tracks the element being rendered while loops nest.

    Values that are not elements are kept as placeholders so pushes and pops
    stay balanced; ``current`` skips them.
    """

    def __init__(self) -> None:
        self._entries: list[ReflectedElement | None] = []

    def __len__(self) -> int:
        return len(self._entries)

    def push(self, value: Any) -> ReflectedElement | None:
        self._entries.append(value if isinstance(value, ReflectedElement) else None)
        return self.current()

    def pop(self) -> ReflectedElement | None:
        if self._entries:
            self._entries.pop()
        return self.current()

    def current(self) -> ReflectedElement | None:
        """Return the newest element on the stack, or None."""
        for entry in reversed(self._entries):
            if entry is not None:
                return entry
        return None

    @contextmanager
    def scope(self, value: Any) -> Iterator[ReflectedElement | None]:
        """Push a value for the duration of a ``with`` block."""
        current = self.push(value)
        try:
            yield current
        finally:
            self.pop()
