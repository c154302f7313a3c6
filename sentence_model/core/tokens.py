"""Token model: words and inline markup tags.

WHY: A tokenized sentence is two independently produced streams, the
lexical words from the tokenizer and the inline markup tags stripped out
of the original text. Both need the same spacing and surface-form
attributes so they can be merged and detokenized uniformly.

HOW: Token is the shared base dataclass. Word adds nothing. Tag adds a
TagType, the word-index position it precedes, and an optional element
name. from_dict/to_dict map each variant to the JSON interchange format.

RULES:
- placeholder is always present; text is the optional original form
- left_space / right_space of None means "unknown", not "empty"
- The three boolean flags are fallbacks, consulted only when no explicit
  space can be inferred
- A Tag with position p precedes the word at index p; position equal to
  the word count follows all words
- A Tag's placeholder is its markup text unless given explicitly
"""

from __future__ import annotations

import enum
import re
from dataclasses import dataclass
from typing import Any, Dict, Optional


class MalformedTagError(ValueError):
    """Raised when a string cannot be parsed as a single markup tag.

    WHY: Tag.from_text infers the tag type from the markup itself. Text
    that is not one well-formed tag would silently produce a wrong type.

    RULES:
    - Message includes the offending text
    """

    def __init__(self, text: str) -> None:
        self.text = text
        super().__init__(f"Not a markup tag: {text!r}")


class TagType(str, enum.Enum):
    """Kind of an inline markup tag.

    Inherits from str so values serialize cleanly to JSON.
    """

    OPENING = "opening"
    CLOSING = "closing"
    SELF_CONTAINED = "self_contained"


# <name ...>, </name>, <name .../>
_ELEMENT_RE = re.compile(
    r"^<(?P<closing>/)?\s*(?P<name>[A-Za-z_:][\w:.\-]*)(?:\s[^<>]*?)?\s*(?P<empty>/)?>$",
    re.DOTALL,
)

# <!-- comment -->, <!DOCTYPE ...>, <![CDATA[...]]>, <?pi ...?>
_SPECIAL_RE = re.compile(r"^<(?:!--.*--|![^<>]*|!\[CDATA\[.*\]\]|\?.*\?)>$", re.DOTALL)


@dataclass
class Token:
    """Shared attributes of every token in a sentence.

    RULES:
    - placeholder: canonical surface form, always present
    - text: original surface form, or None
    - left_space / right_space: recorded whitespace, or None when unknown
    - left_space_required: a space must separate this token from the
      previous word when nothing else was inferred
    - virtual_left_space / virtual_right_space: synthesize a single space
      between two words when no explicit space was recorded
    """

    placeholder: str
    text: Optional[str] = None
    left_space: Optional[str] = None
    right_space: Optional[str] = None
    left_space_required: bool = False
    virtual_left_space: bool = False
    virtual_right_space: bool = False

    def has_text(self) -> bool:
        return self.text is not None

    def has_right_space(self) -> bool:
        return bool(self.right_space)

    def _base_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"placeholder": self.placeholder}
        if self.text is not None:
            data["text"] = self.text
        if self.left_space is not None:
            data["left_space"] = self.left_space
        if self.right_space is not None:
            data["right_space"] = self.right_space
        if self.left_space_required:
            data["left_space_required"] = True
        if self.virtual_left_space:
            data["virtual_left_space"] = True
        if self.virtual_right_space:
            data["virtual_right_space"] = True
        return data


@dataclass
class Word(Token):
    """A lexical unit produced by the tokenizer."""

    def __str__(self) -> str:
        return self.text if self.text is not None else self.placeholder

    @classmethod
    def from_dict(cls, data: dict) -> Word:
        """Parse a Word from its JSON interchange dict.

        RULES:
        - placeholder is required; when absent, text is used instead
        - All other fields are optional
        """
        text = data.get("text")
        return cls(
            placeholder=data.get("placeholder", text),
            text=text,
            left_space=data.get("left_space"),
            right_space=data.get("right_space"),
            left_space_required=data.get("left_space_required", False),
            virtual_left_space=data.get("virtual_left_space", False),
            virtual_right_space=data.get("virtual_right_space", False),
        )

    def to_dict(self) -> Dict[str, Any]:
        return self._base_dict()


@dataclass
class Tag(Token):
    """An inline markup tag interleaved between words.

    WHY: Markup is removed before tokenization and re-inserted during
    detokenization. The tag remembers which word it precedes so the two
    streams can be merged back in order.

    RULES:
    - type: OPENING, CLOSING or SELF_CONTAINED
    - position: index of the word this tag precedes (0..word count)
    - name: element name parsed from the markup, None for comments and
      other special constructs
    - text holds the literal markup, emitted verbatim when printing tags
    """

    type: TagType = TagType.SELF_CONTAINED
    position: int = 0
    name: Optional[str] = None

    def __post_init__(self) -> None:
        # Accept plain strings ("closing") as produced by to_dict()
        self.type = TagType(self.type)

    def __str__(self) -> str:
        return self.text if self.text is not None else self.placeholder

    def is_opening(self) -> bool:
        return self.type is TagType.OPENING

    def is_closing(self) -> bool:
        return self.type is TagType.CLOSING

    @classmethod
    def from_text(
        cls,
        text: str,
        position: int,
        left_space: Optional[str] = None,
        right_space: Optional[str] = None,
    ) -> Tag:
        """Build a Tag from its literal markup.

        WHY: Taggers hand over the raw markup string; the tag type drives
        the spacing rules, so it is inferred here rather than trusted to
        every caller.

        HOW: "</x>" is CLOSING, "<x/>" and comments, declarations and
        processing instructions are SELF_CONTAINED, anything else that
        parses as an element start is OPENING.

        Raises:
            MalformedTagError: if text is not exactly one markup tag.
        """
        stripped = text.strip()
        match = _ELEMENT_RE.match(stripped)
        if match is not None:
            if match.group("closing"):
                if match.group("empty"):
                    raise MalformedTagError(text)
                tag_type = TagType.CLOSING
            elif match.group("empty"):
                tag_type = TagType.SELF_CONTAINED
            else:
                tag_type = TagType.OPENING
            name = match.group("name")
        elif _SPECIAL_RE.match(stripped):
            tag_type = TagType.SELF_CONTAINED
            name = None
        else:
            raise MalformedTagError(text)

        return cls(
            placeholder=text,
            text=text,
            left_space=left_space,
            right_space=right_space,
            type=tag_type,
            position=position,
            name=name,
        )

    @classmethod
    def from_dict(cls, data: dict) -> Tag:
        """Parse a Tag from its JSON interchange dict.

        RULES:
        - text and position are required
        - type and name are inferred from text when type is absent
        - placeholder defaults to text
        """
        text = data["text"]
        position = data["position"]
        if "type" not in data:
            tag = cls.from_text(
                text,
                position,
                left_space=data.get("left_space"),
                right_space=data.get("right_space"),
            )
            tag.placeholder = data.get("placeholder", text)
        else:
            tag = cls(
                placeholder=data.get("placeholder", text),
                text=text,
                left_space=data.get("left_space"),
                right_space=data.get("right_space"),
                type=TagType(data["type"]),
                position=position,
                name=data.get("name"),
            )
        tag.left_space_required = data.get("left_space_required", False)
        tag.virtual_left_space = data.get("virtual_left_space", False)
        tag.virtual_right_space = data.get("virtual_right_space", False)
        return tag

    def to_dict(self) -> Dict[str, Any]:
        data = self._base_dict()
        data["type"] = self.type.value
        data["position"] = self.position
        if self.name is not None:
            data["name"] = self.name
        return data
