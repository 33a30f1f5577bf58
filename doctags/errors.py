"""Exception types raised by the annotation engine."""


class DocTagsError(Exception):
    """Base class for all annotation engine errors."""


class ConfigurationError(DocTagsError):
    """Raised when the engine cannot be configured (missing or broken plugins)."""


class UnsupportedTagError(DocTagsError):
    """Raised when a plugin is asked to render a tag it does not handle."""

    def __init__(self, tag: str) -> None:
        """Initialize the error with the offending tag name."""
        super().__init__(f"Unsupported tag: {tag}")
        self.tag = tag


class InlineTagNestingError(DocTagsError):
    """Raised when inline tags are nested deeper than the configured limit."""

    def __init__(self, limit: int) -> None:
        """Initialize the error with the nesting limit that was exceeded."""
        super().__init__(f"Inline tags nested deeper than {limit} levels")
        self.limit = limit
