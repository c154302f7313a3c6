"""Sentence model — words, inline markup tags and faithful detokenization.

WHY: Machine translation pipelines strip inline markup before
tokenizing, process bare words, and must then rebuild text that keeps
the original spacing and markup. This package holds the sentence model
that merges words and tags back together and writes the results as
bilingual corpora.

HOW: Three layers: the core model (tokens, merge iteration, spacing,
reconstruction), corpus writers (TMX, parallel text) fed with
reconstructed strings, and a small CLI that loads JSON sentence pairs
and drives the writers.

RULES:
- The core never touches files; corpus writers only see strings
- Adding a corpus format = one new writer module plus a registry entry
"""

__version__ = "0.1.0"
