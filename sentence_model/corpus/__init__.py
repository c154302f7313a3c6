"""Bilingual corpus writer registry.

WHY: The CLI needs a single lookup to find the right writer by name.
A central dict makes adding a format trivial: create the writer class,
import it here, add one line.

HOW: WRITERS maps string keys to writer *classes*, each constructed as
``WRITERS[key](path, source_language, target_language)``. For TMX the
path is the output file; for parallel text it is the path stem.

RULES:
- Keys are snake_case identifiers (used in CLI flags)
- Values are BaseCorpusWriter subclasses (not instances)
- WRITER_SUFFIXES gives the file suffix the CLI appends to the stem
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from sentence_model.corpus.parallel import ParallelTextWriter
from sentence_model.corpus.tmx import TMXWriter

if TYPE_CHECKING:
    from sentence_model.corpus.base import BaseCorpusWriter

WRITERS: dict[str, type[BaseCorpusWriter]] = {
    "tmx": TMXWriter,
    "parallel": ParallelTextWriter,
}

WRITER_SUFFIXES: dict[str, str] = {
    "tmx": ".tmx",
    "parallel": "",
}
