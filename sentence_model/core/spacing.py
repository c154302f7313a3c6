"""Whitespace inference between adjacent tokens.

WHY: Tokenizers record the whitespace they saw on either side of a
token, but tags sit between words and may carry their own spacing.
Detokenizing without markup needs a single rule for which of those
recorded spaces survives between two tokens.

HOW: merge_spaces() combines two optional spaces, keeping both when they
differ. infer_space() starts from the space carried over from earlier
tokens plus the left token's right space, then dispatches on the kinds
of the two tokens.

RULES:
- Tag -> Tag: keep everything, add the right tag's left space
- Tag -> Word: a CLOSING tag resets to the word's own left space;
  other tags are transparent
- Word -> Tag: an OPENING tag is transparent; other tags reset to the
  tag's own left space
- Word -> Word: merge both sides; if still unknown and either word asks
  for a virtual space, use a single " "
- SELF_CONTAINED tags take the non-OPENING / non-CLOSING paths above
"""

from __future__ import annotations

from typing import Optional

from sentence_model.core.tokens import Tag, TagType, Token, Word


def merge_spaces(left: Optional[str], right: Optional[str]) -> Optional[str]:
    """Combine two optional spaces.

    RULES:
    - One side missing: return the other
    - Both equal: return it once
    - Both present and different: concatenate left + right
    """
    if left is None:
        return right
    if right is None:
        return left
    if left == right:
        return left
    return left + right


def infer_space(
    previous_space: Optional[str],
    left: Token,
    right: Token,
) -> Optional[str]:
    """Compute the whitespace that belongs between two adjacent tokens.

    Args:
        previous_space: Space carried over from tokens before ``left``,
                        or None.
        left: The token on the left.
        right: The token on the right.

    Returns:
        The inferred space, or None when nothing is known.

    Raises:
        TypeError: if either token is neither a Word nor a Tag.
    """
    space = merge_spaces(previous_space, left.right_space)

    if isinstance(left, Tag):
        if isinstance(right, Tag):
            return merge_spaces(space, right.left_space)
        if isinstance(right, Word):
            return right.left_space if left.type is TagType.CLOSING else space
    elif isinstance(left, Word):
        if isinstance(right, Tag):
            return space if right.type is TagType.OPENING else right.left_space
        if isinstance(right, Word):
            space = merge_spaces(space, right.left_space)
            if space is None and (left.virtual_right_space or right.virtual_left_space):
                space = " "
            return space

    raise TypeError(
        "Unsupported token kinds: {} -> {}".format(
            type(left).__name__, type(right).__name__,
        )
    )


def infer_space_between(left: Token, right: Token) -> Optional[str]:
    """infer_space() with nothing carried over from earlier tokens."""
    return infer_space(None, left, right)
