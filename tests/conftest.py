"""Shared test fixtures for the sentence_model test suite.

WHY: Several test modules need the same small sentences: a bare
"Hello world", the same sentence with a bold span, and a JSON sentence
pairs document for the loader and the CLI.

HOW: Pytest fixtures build fresh Word/Tag objects per test so no test
can leak mutations into another.

RULES:
- "Hello" records a right space; "world" records nothing
- The bold span wraps "world": <b> at position 1, </b> at position 2
"""

import json
from typing import Any, Dict

import pytest

from sentence_model.core.sentence import Sentence
from sentence_model.core.tokens import Tag, Word


def make_word(text: str, **kwargs: Any) -> Word:
    """A word whose placeholder equals its text."""
    return Word(placeholder=text, text=text, **kwargs)


@pytest.fixture
def hello_world():
    """'Hello world' with a recorded space after 'Hello' and no tags."""
    return Sentence([make_word("Hello", right_space=" "), make_word("world")])


@pytest.fixture
def bold_hello_world():
    """'Hello <b>world</b>' with the space recorded after 'Hello'."""
    words = [make_word("Hello", right_space=" "), make_word("world")]
    tags = [Tag.from_text("<b>", 1), Tag.from_text("</b>", 2)]
    return Sentence(words, tags)


SAMPLE_DOCUMENT: Dict[str, Any] = {
    "source_language": "en",
    "target_language": "it",
    "pairs": [
        {
            "source": {
                "words": [
                    {"placeholder": "Hello", "text": "Hello", "right_space": " "},
                    {"placeholder": "world", "text": "world"},
                ],
                "tags": [
                    {"text": "<b>", "position": 1},
                    {"text": "</b>", "position": 2},
                ],
            },
            "target": {
                "words": [
                    {"placeholder": "Ciao", "text": "Ciao", "right_space": " "},
                    {"placeholder": "mondo", "text": "mondo"},
                ],
                "tags": [
                    {"text": "<b>", "type": "opening", "position": 1, "name": "b"},
                    {"text": "</b>", "type": "closing", "position": 2, "name": "b"},
                ],
            },
            "timestamp": "2026-01-01T12:00:00Z",
        },
        {
            "source": {
                "words": [
                    {"text": "Fish", "right_space": " "},
                    {"text": "&", "right_space": " "},
                    {"text": "chips"},
                ],
            },
            "target": {
                "words": [
                    {"text": "Pesce", "right_space": " "},
                    {"text": "e", "right_space": " "},
                    {"text": "patatine"},
                ],
                "annotations": ["reviewed"],
            },
        },
    ],
}


@pytest.fixture
def sample_document():
    """A fresh deep copy of the sample sentence pairs document."""
    return json.loads(json.dumps(SAMPLE_DOCUMENT))


@pytest.fixture
def sample_document_path(tmp_path, sample_document):
    """The sample document written to tmp_path/pairs.json."""
    path = tmp_path / "pairs.json"
    path.write_text(json.dumps(sample_document), encoding="utf-8")
    return path
