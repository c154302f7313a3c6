"""Configuration constants, language tag normalization, and .env loading.

WHY: Corpus writers and the CLI need defaults (languages, TMX header
values, log level) that users override per environment without touching
code. Keeping them in one module makes them easy to find.

HOW: python-dotenv loads the .env file on import. Constants are
module-level values read from the environment with defaults.
normalize_language() turns locale-ish strings into BCP-47 tags with
langcodes.

RULES:
- All defaults can be overridden via environment variables
- Language tags are always written in BCP-47 form ("en-US", not "en_US")
- Invalid language tags raise ValueError
- Unknown LOG_LEVEL names fall back to WARNING
"""

from __future__ import annotations

import logging
import os

import langcodes
from dotenv import load_dotenv

from sentence_model import __version__

# Load .env from the project root (where the script is run from)
load_dotenv()

# ---------------------------------------------------------------------------
# Language defaults
# ---------------------------------------------------------------------------

DEFAULT_SOURCE_LANGUAGE = os.getenv("DEFAULT_SOURCE_LANGUAGE", "en")
DEFAULT_TARGET_LANGUAGE = os.getenv("DEFAULT_TARGET_LANGUAGE", "it")

# ---------------------------------------------------------------------------
# TMX header values
# ---------------------------------------------------------------------------

TMX_VERSION = "1.4"
TMX_CREATION_TOOL = os.getenv("TMX_CREATION_TOOL", "sentence-model")
TMX_CREATION_TOOL_VERSION = os.getenv("TMX_CREATION_TOOL_VERSION", __version__)
TMX_DATE_FORMAT = os.getenv("TMX_DATE_FORMAT", "%Y%m%dT%H%M%SZ")
"""strftime format of the TMX creationdate attribute, always in UTC."""

# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------

DEFAULT_LOG_LEVEL = "WARNING"


def resolve_log_level(name: str) -> str:
    """Return the upper-cased level name, or WARNING if logging does not know it."""
    level = name.strip().upper()
    if not isinstance(logging.getLevelName(level), int):
        return DEFAULT_LOG_LEVEL
    return level


LOG_LEVEL = resolve_log_level(os.getenv("LOG_LEVEL", DEFAULT_LOG_LEVEL))
LOG_FORMAT = "%(asctime)s %(name)s %(levelname)s %(message)s"


def normalize_language(tag: str) -> str:
    """Normalize a language tag to BCP-47.

    WHY: Users pass "en_US", "EN-us" or "en"; TMX expects the canonical
    BCP-47 spelling in srclang and xml:lang.

    HOW: Delegates to langcodes.standardize_tag after replacing
    underscores with hyphens.

    RULES:
    - "en_US" -> "en-US", "it" -> "it"
    - Raises ValueError for empty or unparseable tags
    """
    cleaned = tag.strip().replace("_", "-")
    if not cleaned:
        raise ValueError("Language tag must not be empty")
    try:
        return langcodes.standardize_tag(cleaned)
    except ValueError as e:
        raise ValueError("Invalid language tag: {!r}".format(tag)) from e
