"""Utility for escaping text for HTML output."""

import html


def escape_html(text: object) -> str:
    """Escape special HTML characters (including quotes) in a value."""
    if text is None:
        return ""
    return html.escape(str(text), quote=True)
