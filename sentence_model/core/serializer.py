"""Text reconstruction from a merged token stream.

WHY: After translation or any other processing step, the sentence has
to become a string again, either with its inline markup restored or as
plain text for consumers that cannot handle markup.

HOW: Both functions walk the merged word/tag stream once.
to_markup_string() writes tags verbatim and escapes word text, trusting
each token's recorded right space. to_stripped_string() drops tags but
threads a pending space through every adjacent pair with infer_space(),
so markup still shapes the spacing of the words around it.

RULES:
- Word text is the placeholder when placeholders are requested or the
  word has no original text
- Markup mode: escape word text only; tag text is emitted as stored
- Stripped mode: no escaping, no space before the first word
- Stripped mode: before later words write the pending space, else " "
  if the word requires a left space, else nothing
"""

from __future__ import annotations

import html
from typing import Callable, Iterable, List, Optional

from sentence_model.core.spacing import infer_space
from sentence_model.core.tokens import Tag, Token, Word


def escape_text(text: str) -> str:
    """Escape ``&``, ``<`` and ``>`` for XML character data.

    Quotes are left alone; word text never ends up inside an attribute.
    """
    return html.escape(text, quote=False)


def _word_text(token: Token, print_placeholders: bool) -> str:
    if print_placeholders or not token.has_text():
        return token.placeholder
    return token.text


def to_markup_string(
    tokens: Iterable[Token],
    print_placeholders: bool = False,
    escape: Callable[[str], str] = escape_text,
) -> str:
    """Rebuild text with inline markup from the merged token stream.

    Args:
        tokens: Merged words and tags, in sentence order.
        print_placeholders: Use placeholders instead of original text.
        escape: Escaping function applied to word text.

    Returns:
        The reconstructed string with tags in place.
    """
    parts: List[str] = []

    for token in tokens:
        if isinstance(token, Tag):
            parts.append(token.text if token.text is not None else token.placeholder)
        else:
            parts.append(escape(_word_text(token, print_placeholders)))

        if token.has_right_space():
            parts.append(token.right_space)

    return "".join(parts)


def to_stripped_string(
    tokens: Iterable[Token],
    print_placeholders: bool = False,
) -> str:
    """Rebuild plain text from the merged token stream, dropping tags.

    WHY: Tags are removed from the output but still decide which of the
    recorded spaces survive between the words around them.

    HOW: Every adjacent pair (tags included) updates the pending space
    via infer_space(). When a word follows an already written word, the
    pending space (or the required-left-space fallback) is written and
    then cleared.

    Args:
        tokens: Merged words and tags, in sentence order.
        print_placeholders: Use placeholders instead of original text.

    Returns:
        The words of the sentence as plain text.
    """
    parts: List[str] = []

    first_word_found = False
    space: Optional[str] = None
    previous: Optional[Token] = None

    for token in tokens:
        if previous is not None:
            space = infer_space(space, previous, token)

        if isinstance(token, Word):
            if first_word_found:
                if space is None:
                    space = " " if token.left_space_required else ""
                parts.append(space)
                space = None

            parts.append(_word_text(token, print_placeholders))
            first_word_found = True

        previous = token

    return "".join(parts)
