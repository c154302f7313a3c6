"""TMX 1.4 bilingual corpus writer.

WHY: TMX is the exchange format translation memories and MT training
pipelines read. Reconstructed source/target strings become one
translation unit each.

HOW: The header (XML declaration, <tmx>, empty <header>, opening
<body>) is written when the writer is created. Each pair is built as an
ElementTree <tu> element and serialized on its own, so records stream to
disk without holding the corpus in memory. close() ends <body> and
<tmx>.

RULES:
- UTF-8, TMX version 1.4, datatype "plaintext", segtype "sentence"
- Language tags are normalized to BCP-47 (srclang, xml:lang)
- creationdate uses TMX_DATE_FORMAT in UTC; naive datetimes are UTC
- Segment text is escaped by ElementTree; callers pass plain strings
- Characters outside the XML 1.0 Char range (C0 controls other than tab,
  LF and CR, lone surrogates, U+FFFE, U+FFFF) are dropped from segments
"""

from __future__ import annotations

import logging
import re
import xml.etree.ElementTree as ET
from datetime import datetime, timezone
from pathlib import Path
from typing import Union

from sentence_model.config import (
    TMX_CREATION_TOOL,
    TMX_CREATION_TOOL_VERSION,
    TMX_DATE_FORMAT,
    TMX_VERSION,
    normalize_language,
)
from sentence_model.corpus.base import BaseCorpusWriter, StringPair

logger = logging.getLogger(__name__)

XML_NAMESPACE = "http://www.w3.org/XML/1998/namespace"
_XML_LANG = "{%s}lang" % XML_NAMESPACE

# Complement of the XML 1.0 Char production
_INVALID_XML_CHARS_RE = re.compile(
    "[^\u0009\u000A\u000D\u0020-\uD7FF\uE000-\uFFFD\U00010000-\U0010FFFF]"
)


def strip_invalid_xml_chars(text: str) -> str:
    """Remove characters that cannot appear in an XML 1.0 document.

    ElementTree escapes markup characters but writes control characters
    such as U+000C as is, which leaves the file unparseable.
    """
    return _INVALID_XML_CHARS_RE.sub("", text)


def format_tmx_date(timestamp: datetime) -> str:
    """Format a timestamp as a TMX creationdate (UTC)."""
    if timestamp.tzinfo is None:
        timestamp = timestamp.replace(tzinfo=timezone.utc)
    return timestamp.astimezone(timezone.utc).strftime(TMX_DATE_FORMAT)


class TMXWriter(BaseCorpusWriter):
    """Writer that streams sentence pairs into a TMX file.

    Args:
        path: Output file; truncated if it exists.
        source_language: Source language tag, e.g. "en" or "en_US".
        target_language: Target language tag.

    Raises:
        ValueError: if a language tag is invalid.
        OSError: if the file cannot be opened.
    """

    def __init__(
        self,
        path: Union[str, Path],
        source_language: str,
        target_language: str,
    ) -> None:
        super().__init__()
        self.path = Path(path)
        self.source_language = normalize_language(source_language)
        self.target_language = normalize_language(target_language)

        self._stream = open(self.path, "w", encoding="utf-8")
        try:
            self._write_header()
        except BaseException:
            self._stream.close()
            raise

        logger.info(
            "Opened TMX %s (%s -> %s)", self.path, self.source_language, self.target_language,
        )

    @property
    def name(self) -> str:
        return "TMX"

    def _write_header(self) -> None:
        header = ET.Element("header", {
            "creationtool": TMX_CREATION_TOOL,
            "creationtoolversion": TMX_CREATION_TOOL_VERSION,
            "datatype": "plaintext",
            "o-tmf": TMX_CREATION_TOOL,
            "segtype": "sentence",
            "adminlang": "en-us",
            "srclang": self.source_language,
        })

        self._stream.write('<?xml version="1.0" encoding="UTF-8"?>\n')
        self._stream.write('<tmx version="{}">\n'.format(TMX_VERSION))
        self._stream.write(ET.tostring(header, encoding="unicode"))
        self._stream.write("\n<body>\n")

    def _write_pair(self, pair: StringPair) -> None:
        tu = ET.Element("tu", {"srclang": self.source_language, "datatype": "plaintext"})
        if pair.timestamp is not None:
            tu.set("creationdate", format_tmx_date(pair.timestamp))

        for language, text in (
            (self.source_language, pair.source),
            (self.target_language, pair.target),
        ):
            tuv = ET.SubElement(tu, "tuv", {_XML_LANG: language})
            seg = ET.SubElement(tuv, "seg")
            cleaned = strip_invalid_xml_chars(text)
            if cleaned != text:
                logger.warning(
                    "Dropped %d invalid XML character(s) from unit %d (%s)",
                    len(text) - len(cleaned), self.count + 1, language,
                )
            seg.text = cleaned

        self._stream.write(ET.tostring(tu, encoding="unicode"))
        self._stream.write("\n")

    def _close(self) -> None:
        try:
            self._stream.write("</body>\n</tmx>\n")
            self._stream.flush()
        finally:
            self._stream.close()
        logger.info("Closed TMX %s (%d units)", self.path, self.count)
