"""Loading of JSON sentence pair documents.

WHY: The tokenizer/tagger and the translation step run in other
processes. They hand sentences over as JSON; a malformed document must
fail loudly at load time rather than produce a corrupted corpus.

HOW: The document is parsed with json, validated against
pairs_schema.json with jsonschema, then each sentence dict becomes a
Sentence via Sentence.from_dict.

RULES:
- Schema violations and JSON syntax errors raise CorpusFormatError
- Markup that cannot be parsed as a tag raises CorpusFormatError
- Timestamps are ISO-8601 strings; naive values are taken as UTC
- Languages fall back to the config defaults when absent
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import jsonschema

from sentence_model.config import DEFAULT_SOURCE_LANGUAGE, DEFAULT_TARGET_LANGUAGE
from sentence_model.core.sentence import Sentence
from sentence_model.core.tokens import MalformedTagError

logger = logging.getLogger(__name__)

SCHEMA_PATH = Path(__file__).resolve().parent / "pairs_schema.json"


class CorpusFormatError(ValueError):
    """Raised when a sentence pairs document is malformed.

    RULES:
    - location is the JSON path of the offending element ("" for the root)
    """

    def __init__(self, message: str, location: str = "") -> None:
        self.location = location
        if location:
            message = "{} (at {})".format(message, location)
        super().__init__(message)


@dataclass
class SentencePair:
    """A source sentence, its translation and an optional timestamp."""

    source: Sentence
    target: Sentence
    timestamp: Optional[datetime] = None


@dataclass
class PairsDocument:
    """A loaded sentence pairs document."""

    source_language: str
    target_language: str
    pairs: List[SentencePair] = field(default_factory=list)


_schema: Optional[Dict[str, Any]] = None


def load_schema() -> Dict[str, Any]:
    global _schema
    if _schema is None:
        with open(SCHEMA_PATH, encoding="utf-8") as f:
            _schema = json.load(f)
    return _schema


def _json_path(path) -> str:
    parts = ["$"]
    for item in path:
        if isinstance(item, int):
            parts.append("[{}]".format(item))
        else:
            parts.append(".{}".format(item))
    return "".join(parts)


def _parse_timestamp(value: str, location: str) -> datetime:
    try:
        # fromisoformat() before 3.11 rejects a trailing "Z"
        if value.endswith("Z"):
            value = value[:-1] + "+00:00"
        return datetime.fromisoformat(value)
    except ValueError as e:
        raise CorpusFormatError("Invalid timestamp {!r}".format(value), location) from e


def parse_document(data: Any) -> PairsDocument:
    """Validate and convert an already decoded JSON document.

    Args:
        data: The decoded JSON value.

    Returns:
        PairsDocument with Sentence objects for every pair.

    Raises:
        CorpusFormatError: if the document does not match the schema or
                           contains unparseable tags or timestamps.
    """
    try:
        jsonschema.validate(instance=data, schema=load_schema())
    except jsonschema.ValidationError as e:
        raise CorpusFormatError(e.message, _json_path(e.absolute_path)) from e

    pairs: List[SentencePair] = []
    for index, item in enumerate(data["pairs"]):
        location = "$.pairs[{}]".format(index)
        try:
            source = Sentence.from_dict(item["source"])
            target = Sentence.from_dict(item["target"])
        except MalformedTagError as e:
            raise CorpusFormatError(str(e), location) from e

        timestamp = None
        if "timestamp" in item:
            timestamp = _parse_timestamp(item["timestamp"], location + ".timestamp")

        pairs.append(SentencePair(source=source, target=target, timestamp=timestamp))

    return PairsDocument(
        source_language=data.get("source_language", DEFAULT_SOURCE_LANGUAGE),
        target_language=data.get("target_language", DEFAULT_TARGET_LANGUAGE),
        pairs=pairs,
    )


def load_pairs(path: Union[str, Path]) -> PairsDocument:
    """Load a sentence pairs document from a JSON file.

    Raises:
        CorpusFormatError: if the file is not valid JSON or not a valid
                           document.
        OSError: if the file cannot be read.
    """
    path = Path(path)
    with open(path, encoding="utf-8") as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as e:
            raise CorpusFormatError("Invalid JSON in {}: {}".format(path, e.msg)) from e

    document = parse_document(data)
    logger.info(
        "Loaded %d sentence pairs from %s (%s -> %s)",
        len(document.pairs), path, document.source_language, document.target_language,
    )
    return document
