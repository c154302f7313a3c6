"""The Sentence aggregate: words, inline tags and annotations.

WHY: Tokenizers and taggers produce words and markup tags as two
separate ordered streams. Every later pipeline stage (translation,
alignment, corpus export) needs them back as one position-ordered
sequence, and finally as text again.

HOW: Sentence owns a fixed tuple of words and a replaceable tuple of
tags. Iterating a Sentence merges the two streams lazily with a fresh
pair of cursors per traversal. to_string() hands that stream to the
serializer. Annotations are a plain set of string labels.

RULES:
- Words never change after construction; tags are replaced wholesale
  through set_tags()
- Tags must be sorted by position (caller's responsibility); unsorted
  tags give a deterministic but unspecified order, never an error
- Tag positions outside 0..len(words) are clamped when merging
- Tags sharing a position keep their stored order
- None for words or tags means "empty"
- Annotations only grow
"""

from __future__ import annotations

from typing import (
    Any,
    Dict,
    FrozenSet,
    Iterable,
    Iterator,
    List,
    Optional,
    Sequence,
    Set,
    Tuple,
)

from sentence_model.core.serializer import to_markup_string, to_stripped_string
from sentence_model.core.tokens import Tag, Token, Word


class Sentence:
    """A tokenized sentence with optional inline markup.

    Attributes:
        words: The words, in order.
        tags: The tags, sorted by position.
        annotations: Labels attached by pipeline stages.
    """

    def __init__(
        self,
        words: Optional[Sequence[Word]] = None,
        tags: Optional[Sequence[Tag]] = None,
        annotations: Optional[Iterable[str]] = None,
    ) -> None:
        self._words: Tuple[Word, ...] = tuple(words) if words is not None else ()
        self._tags: Tuple[Tag, ...] = tuple(tags) if tags is not None else ()
        self._annotations: Set[str] = set(annotations) if annotations is not None else set()

    # -- words and tags ----------------------------------------------------

    @property
    def words(self) -> Tuple[Word, ...]:
        return self._words

    @property
    def tags(self) -> Tuple[Tag, ...]:
        return self._tags

    def set_tags(self, tags: Optional[Sequence[Tag]]) -> None:
        """Replace all tags of the sentence.

        Args:
            tags: The new tags, sorted by position. None clears them.
        """
        self._tags = tuple(tags) if tags is not None else ()

    def has_tags(self) -> bool:
        return len(self._tags) > 0

    def has_words(self) -> bool:
        return len(self._words) > 0

    def __len__(self) -> int:
        return len(self._words) + len(self._tags)

    # -- annotations -------------------------------------------------------

    @property
    def annotations(self) -> FrozenSet[str]:
        return frozenset(self._annotations)

    def add_annotation(self, annotation: str) -> None:
        self._annotations.add(annotation)

    def add_annotations(self, annotations: Iterable[str]) -> None:
        self._annotations.update(annotations)

    def has_annotation(self, annotation: str) -> bool:
        return annotation in self._annotations

    # -- merge iteration ---------------------------------------------------

    def __iter__(self) -> Iterator[Token]:
        """Yield words and tags merged by tag position.

        HOW: Two cursors walk the word and tag tuples. The next tag is
        emitted when no words remain or when the word cursor has reached
        the tag's position; otherwise the next word is emitted.

        RULES:
        - Yields exactly len(words) + len(tags) tokens
        - A tag at position 0 comes before every word; a tag at
          len(words) comes after every word
        - Each call starts a fresh traversal
        """
        words = self._words
        tags = self._tags
        word_count = len(words)
        tag_count = len(tags)

        word_index = 0
        tag_index = 0

        while word_index < word_count or tag_index < tag_count:
            if tag_index < tag_count and (
                word_index >= word_count
                or word_index == _clamp(tags[tag_index].position, word_count)
            ):
                yield tags[tag_index]
                tag_index += 1
            else:
                yield words[word_index]
                word_index += 1

    # -- text reconstruction -----------------------------------------------

    def to_string(self, print_tags: bool = True, print_placeholders: bool = False) -> str:
        """Rebuild the sentence text.

        Args:
            print_tags: Keep inline markup (escaped text) or strip it
                        (plain text).
            print_placeholders: Print placeholders instead of the
                                original word text.
        """
        if print_tags:
            return to_markup_string(self, print_placeholders)
        return to_stripped_string(self, print_placeholders)

    def __str__(self) -> str:
        return self.to_string()

    def __repr__(self) -> str:
        return "Sentence(words={}, tags={})".format(len(self._words), len(self._tags))

    # -- interchange -------------------------------------------------------

    @classmethod
    def from_dict(cls, data: dict) -> Sentence:
        """Parse a Sentence from its JSON interchange dict.

        RULES:
        - words, tags and annotations are all optional lists
        """
        return cls(
            words=[Word.from_dict(w) for w in data.get("words") or []],
            tags=[Tag.from_dict(t) for t in data.get("tags") or []],
            annotations=data.get("annotations"),
        )

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "words": [w.to_dict() for w in self._words],
            "tags": [t.to_dict() for t in self._tags],
        }
        if self._annotations:
            annotations: List[str] = sorted(self._annotations)
            data["annotations"] = annotations
        return data


def _clamp(position: int, word_count: int) -> int:
    if position < 0:
        return 0
    if position > word_count:
        return word_count
    return position
