"""Tests for the inline tag scanner."""

import pytest

from doctags.errors import InlineTagNestingError
from doctags.inline_tag_scanner import find_inline_tags, match_inline_tag


def test_find_simple_tag() -> None:
    """Verify that a tag with a value is matched with its offsets."""
    text = "See {@link Foo} here."
    matches = find_inline_tags(text)
    assert len(matches) == 1
    m = matches[0]
    assert m.tag == "link"
    assert m.value == "Foo"
    assert (m.start, m.end) == (4, 15)
    assert m.original == "{@link Foo}"


def test_find_bare_tag() -> None:
    """Verify that the {@tag} form has no value."""
    (m,) = find_inline_tags("{@inheritdoc}")
    assert m.tag == "inheritdoc"
    assert m.value is None


def test_find_multiple_tags_left_to_right() -> None:
    """Verify that every outermost tag is found in order."""
    matches = find_inline_tags("a {@x} b {@y z} c")
    assert [m.original for m in matches] == ["{@x}", "{@y z}"]


def test_nested_tag_is_part_of_outer_value() -> None:
    """Verify that balanced nested tags stay inside the outer value."""
    (m,) = find_inline_tags("{@uses Foo {@link http://x} bar}")
    assert m.tag == "uses"
    assert m.value == "Foo {@link http://x} bar"


def test_unbalanced_braces_do_not_match() -> None:
    """Verify that unbalanced or stray braces leave the text unmatched."""
    assert find_inline_tags("{@link Foo") == []
    assert find_inline_tags("{@code {x}}") == []
    assert find_inline_tags("{@}") == []
    assert find_inline_tags("{@link}x") != []


def test_tag_requires_whitespace_before_value() -> None:
    """Verify that a tag name must be followed by whitespace or a brace."""
    assert match_inline_tag("{@link:Foo}", 0) is None
    assert match_inline_tag("{@link\tFoo}", 0).value == "Foo"


def test_match_at_offset() -> None:
    """Verify matching a tag that does not start the text."""
    m = match_inline_tag("xx{@a b}yy", 2)
    assert m is not None
    assert m.end == 8
    assert match_inline_tag("xx{@a b}yy", 0) is None


def test_nesting_limit() -> None:
    """Verify that nesting beyond the limit raises instead of recursing."""
    text = "{@a " * 5 + "x" + "}" * 5
    with pytest.raises(InlineTagNestingError) as exc:
        find_inline_tags(text, max_nesting=3)
    assert exc.value.limit == 3

    (m,) = find_inline_tags(text, max_nesting=4)
    assert m.end == len(text)
