"""Utility for making qualified names safe for use in file names."""

import re

# Conservative: keep letters, digits, underscore. Everything else becomes a dot.
DOT_SAFE_RE = re.compile(r"[^A-Za-z0-9_]")


def dot_safe(name: str) -> str:
    """Make a stable filename-ish token.

    Namespace separators (and any other unsafe character) are replaced with dots,
    e.g. App\\Model\\User -> App.Model.User.
    """
    return DOT_SAFE_RE.sub(".", name)
