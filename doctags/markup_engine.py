"""Markup engines rendering documentation text to HTML."""

import logging
import re
from abc import ABC, abstractmethod
from collections.abc import Callable

import markdown
from markdown.inlinepatterns import InlineProcessor

from doctags.errors import InlineTagNestingError
from doctags.reflected_element import ReflectedElement

logger = logging.getLogger(__name__)

# handler(text, offset of the pattern match, context, protect) -> (html, end) or None
InlineHandler = Callable[
    [str, int, ReflectedElement | None, Callable[[str], str]],
    tuple[str, int] | None,
]

DEFAULT_EXTENSIONS = ["tables", "fenced_code"]
# Above the backtick pattern so tags are consumed before any other inline markup
INLINE_PATTERN_PRIORITY = 200
PARAGRAPH_RE = re.compile(r"^<p>(.*)</p>$", re.DOTALL)
# Block syntax that line mode leaves as literal text
LINE_MODE_BLOCK_PROCESSORS = (
    "indent",
    "code",
    "hashheader",
    "setextheader",
    "hr",
    "olist",
    "ulist",
    "quote",
    "table",
)
LINE_MODE_PREPROCESSORS = ("fenced_code_block",)


class MarkupEngine(ABC):
    """Renders text with custom inline patterns.

    A pattern handler receives a ``protect`` callable; text it protects is
    emitted verbatim, without further markup processing.
    """

    def __init__(self) -> None:
        self.inline_patterns: list[tuple[str, str, InlineHandler]] = []

    def register_inline_pattern(
        self, name: str, pattern: str, handler: InlineHandler
    ) -> None:
        self.inline_patterns.append((name, pattern, handler))

    @abstractmethod
    def render_line(self, text: str, context: ReflectedElement | None = None) -> str:
        """Render a single line without a wrapping paragraph."""

    @abstractmethod
    def render_block(self, text: str, context: ReflectedElement | None = None) -> str:
        """Render a text that may hold several paragraphs."""


class PatternHandlerProcessor(InlineProcessor):
    """Bridges a registered pattern handler into Python-Markdown."""

    def __init__(
        self,
        pattern: str,
        md: markdown.Markdown,
        handler: InlineHandler,
        context: ReflectedElement | None,
    ) -> None:
        super().__init__(pattern, md)
        self.handler = handler
        self.context = context

    def handleMatch(self, m, data):  # noqa: N802
        start = m.start(0)
        try:
            result = self.handler(data, start, self.context, self.md.htmlStash.store)
        except InlineTagNestingError as e:
            logger.warning("Leaving inline tag unexpanded: %s", e)
            result = None
        if result is None:
            return None, None, None
        html, end = result
        return html, start, end


class MarkdownMarkupEngine(MarkupEngine):
    """Markup engine backed by Python-Markdown.

    A new converter is built per call so the rendering context never leaks
    between calls.
    """

    def __init__(self, extensions: list[str] | None = None) -> None:
        super().__init__()
        self.extensions = list(DEFAULT_EXTENSIONS if extensions is None else extensions)

    def _converter(
        self, context: ReflectedElement | None, line_mode: bool = False
    ) -> markdown.Markdown:
        md = markdown.Markdown(extensions=self.extensions)
        for index, (name, pattern, handler) in enumerate(self.inline_patterns):
            processor = PatternHandlerProcessor(pattern, md, handler, context)
            md.inlinePatterns.register(processor, name, INLINE_PATTERN_PRIORITY - index)
        if line_mode:
            # Only paragraphs remain, so the text goes through inline patterns alone
            for name in LINE_MODE_BLOCK_PROCESSORS:
                md.parser.blockprocessors.deregister(name, strict=False)
            for name in LINE_MODE_PREPROCESSORS:
                md.preprocessors.deregister(name, strict=False)
        return md

    def render_block(self, text: str, context: ReflectedElement | None = None) -> str:
        if not text:
            return ""
        return self._converter(context).convert(text)

    def render_line(self, text: str, context: ReflectedElement | None = None) -> str:
        if not text:
            return ""
        html = self._converter(context, line_mode=True).convert(text)
        m = PARAGRAPH_RE.match(html)
        if m and "<p>" not in m.group(1):
            return m.group(1)
        return html
