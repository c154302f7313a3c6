"""Line-aligned parallel text corpus writer.

WHY: Most MT training tools read bilingual data as two plain text files
where line N of one file translates line N of the other.

HOW: Opens ``<stem>.<source>`` and ``<stem>.<target>`` and writes one
line per pair to each.

RULES:
- Embedded newlines are replaced by spaces so alignment holds
- Timestamps have no place in this format and are ignored
- File suffixes use the normalized BCP-47 language tags
"""

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import TextIO, Union

from sentence_model.config import normalize_language
from sentence_model.corpus.base import BaseCorpusWriter, StringPair

logger = logging.getLogger(__name__)

_LINE_BREAK_RE = re.compile(r"\r\n|[\r\n\u2028\u2029]")


def _single_line(text: str) -> str:
    return _LINE_BREAK_RE.sub(" ", text)


class ParallelTextWriter(BaseCorpusWriter):
    """Writer that produces a pair of line-aligned text files.

    Args:
        path_stem: Output path without the language suffix,
                   e.g. ``out/corpus`` → ``out/corpus.en`` + ``out/corpus.it``.
        source_language: Source language tag.
        target_language: Target language tag.
    """

    def __init__(
        self,
        path_stem: Union[str, Path],
        source_language: str,
        target_language: str,
    ) -> None:
        super().__init__()
        stem = Path(path_stem)
        self.source_language = normalize_language(source_language)
        self.target_language = normalize_language(target_language)
        if self.source_language == self.target_language:
            raise ValueError(
                "Source and target language must differ for parallel files: {}".format(
                    self.source_language
                )
            )

        self.source_path = stem.with_name("{}.{}".format(stem.name, self.source_language))
        self.target_path = stem.with_name("{}.{}".format(stem.name, self.target_language))

        self._source_stream: TextIO = open(self.source_path, "w", encoding="utf-8")
        try:
            self._target_stream: TextIO = open(self.target_path, "w", encoding="utf-8")
        except BaseException:
            self._source_stream.close()
            raise

        logger.info("Opened parallel corpus %s / %s", self.source_path, self.target_path)

    @property
    def name(self) -> str:
        return "Parallel Text"

    def _write_pair(self, pair: StringPair) -> None:
        self._source_stream.write(_single_line(pair.source))
        self._source_stream.write("\n")
        self._target_stream.write(_single_line(pair.target))
        self._target_stream.write("\n")

    def _close(self) -> None:
        try:
            self._source_stream.close()
        finally:
            self._target_stream.close()
        logger.info("Closed parallel corpus %s (%d lines)", self.source_path, self.count)
