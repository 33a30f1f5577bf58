"""Scanner for ``{@tag value}`` inline tags with balanced nesting.

Grammar::

    tag   := "{@" NAME ( "}" | WS+ value "}" )
    value := ( tag | TEXT )*          TEXT contains neither "{" nor "}"

A brace inside a value must open a nested inline tag; anything else makes the
enclosing tag unmatched, and it is left in the text as-is.
"""

import re
from dataclasses import dataclass

from doctags.errors import InlineTagNestingError

TAG_OPEN = "{@"
TAG_NAME_RE = re.compile(r"\w+")
WHITESPACE_RE = re.compile(r"\s+")
DEFAULT_MAX_NESTING = 32


@dataclass(frozen=True)
class InlineTagMatch:
    """A matched inline tag and its position in the scanned text."""

    start: int
    end: int
    tag: str
    value: str | None  # None for the bare {@tag} form
    source: str

    @property
    def original(self) -> str:
        return self.source[self.start : self.end]


def find_inline_tags(
    text: str, max_nesting: int = DEFAULT_MAX_NESTING
) -> list[InlineTagMatch]:
    """Return the outermost inline tags of a text, left to right."""
    matches: list[InlineTagMatch] = []
    pos = 0
    while True:
        start = text.find(TAG_OPEN, pos)
        if start < 0:
            return matches
        match = match_inline_tag(text, start, max_nesting)
        if match is None:
            pos = start + 1
            continue
        matches.append(match)
        pos = match.end


def match_inline_tag(
    text: str, start: int, max_nesting: int = DEFAULT_MAX_NESTING, depth: int = 0
) -> InlineTagMatch | None:
    """Match one inline tag opening at ``start``, or return None."""
    if depth > max_nesting:
        raise InlineTagNestingError(max_nesting)
    if not text.startswith(TAG_OPEN, start):
        return None

    name = TAG_NAME_RE.match(text, start + len(TAG_OPEN))
    if name is None:
        return None
    pos = name.end()
    n = len(text)
    if pos < n and text[pos] == "}":
        return InlineTagMatch(start, pos + 1, name.group(0), None, text)

    space = WHITESPACE_RE.match(text, pos)
    if space is None:
        return None
    value_start = pos = space.end()

    while pos < n:
        char = text[pos]
        if char == "}":
            value = text[value_start:pos]
            return InlineTagMatch(start, pos + 1, name.group(0), value, text)
        if char == "{":
            nested = match_inline_tag(text, pos, max_nesting, depth + 1)
            if nested is None:
                return None
            pos = nested.end
            continue
        pos += 1
    return None
