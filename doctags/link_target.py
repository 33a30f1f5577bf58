"""Data models for representing resolved cross-reference targets."""

from dataclasses import dataclass, field

from doctags.escape_html import escape_html
from doctags.reflected_element import ReflectedElement


@dataclass(frozen=True)
class LinkTarget:
    """Represents the documented element a reference resolved to."""

    title: str  # Display text, e.g. App\Model\User::save()
    href: str  # Page URL, e.g. class-App.Model.User.html#_save
    element: ReflectedElement = field(compare=False, repr=False)

    def to_html(self) -> str:
        """Render the target as an anchor with escaped display text."""
        return f'<a href="{self.href}">{escape_html(self.title)}</a>'
