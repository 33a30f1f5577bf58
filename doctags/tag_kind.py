"""Tag kinds an annotation processor can claim."""

from enum import IntFlag


class TagKind(IntFlag):
    """Kinds of annotation tags; a plugin may declare several for one tag."""

    INLINE_SIMPLE = 1  # {@link}, no children
    INLINE_WITH_CHILDREN = 2  # {@internal}, may contain further inline tags
    BLOCK = 4  # @copyright


SINGLE_KINDS = (TagKind.BLOCK, TagKind.INLINE_SIMPLE, TagKind.INLINE_WITH_CHILDREN)
