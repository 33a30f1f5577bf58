"""Utility for determining the page file name based on a qualified name."""

from doctags.dot_safe import dot_safe


def page_path_for_fullname(template: str, full_name: str) -> str:
    """Generate the page file name for a qualified name from a filename pattern."""
    # App\Model\User with "class-%s.html" -> class-App.Model.User.html
    return template % dot_safe(full_name.lstrip("\\"))
