"""Abstract base corpus writer and the string pair record.

WHY: Every bilingual corpus format consumes the same thing, aligned
source/target strings with an optional timestamp, but lays them out on
disk differently. This base class gives the CLI one interface to drive
any writer.

HOW: BaseCorpusWriter is an ABC with a ``name`` property and a
``_write_pair()`` hook. write() and write_pair() funnel into the hook and
refuse to write after close(). Writers are context managers.

RULES:
- Subclasses MUST implement ``name``, ``_write_pair()`` and ``_close()``
- close() is idempotent
- Writing after close() raises ValueError
- Writers only see strings; reconstruction happens before
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass
class StringPair:
    """One aligned source/target record.

    Attributes:
        source: Reconstructed source-language text.
        target: Reconstructed target-language text.
        timestamp: When the pair was created, or None.
    """

    source: str
    target: str
    timestamp: Optional[datetime] = None


class BaseCorpusWriter(ABC):
    """Abstract base for all bilingual corpus writers.

    To add a new corpus format:
    1. Create a new file in corpus/
    2. Subclass BaseCorpusWriter
    3. Implement name, _write_pair() and _close()
    4. Register in WRITERS dict in corpus/__init__.py
    """

    def __init__(self) -> None:
        self._closed = False
        self._count = 0

    @property
    @abstractmethod
    def name(self) -> str:
        """Human-readable format name, e.g. 'TMX'."""

    @property
    def count(self) -> int:
        """Number of pairs written so far."""
        return self._count

    def write(self, source: str, target: str, timestamp: Optional[datetime] = None) -> None:
        self.write_pair(StringPair(source, target, timestamp))

    def write_pair(self, pair: StringPair) -> None:
        if self._closed:
            raise ValueError("Cannot write to a closed {} writer".format(self.name))
        self._write_pair(pair)
        self._count += 1

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        self._close()

    @abstractmethod
    def _write_pair(self, pair: StringPair) -> None:
        """Persist one pair."""

    @abstractmethod
    def _close(self) -> None:
        """Finish the output and release file handles."""

    def __enter__(self) -> BaseCorpusWriter:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
