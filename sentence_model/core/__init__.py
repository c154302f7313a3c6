"""Core token model, merge iteration, spacing and reconstruction.

WHY: The core package is the stable heart of the library: the token
dataclasses, the Sentence aggregate that merges words with inline tags,
and the two text reconstruction modes. Corpus writers and the CLI only
consume strings produced here.

HOW: tokens.py defines Word, Tag and TagType, spacing.py the whitespace
inference rules, serializer.py the markup and stripped reconstructions,
sentence.py the Sentence aggregate tying them together.

RULES:
- Pure in-memory logic, no file or network I/O
- No validation or sorting of inputs beyond documented preconditions
"""
