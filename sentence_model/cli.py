"""Command-line interface for exporting sentence pairs as corpora.

WHY: Upstream stages (tokenizer, tagger, translation) dump their output
as JSON sentence pairs. Users need a single command that reconstructs
the text of every pair and writes it as a TMX file or parallel text
files, or just prints it for inspection.

HOW: Uses argparse to accept the input document, output format,
languages, reconstruction mode and output directory. Loads and validates
the document, reconstructs each sentence with Sentence.to_string(), and
streams the strings into the selected corpus writer. Status messages go
to stderr.

RULES:
- Positional argument: input JSON document
- --format: "tmx", "parallel" or "text" (print to stdout, tab separated)
- --tags/--no-tags selects markup or stripped reconstruction
- --placeholders prints placeholders instead of original word text
- Language flags override the languages declared in the document
- Output naming: {stem}{suffix}, numeric suffix on conflict (corpus-2.tmx)
- Errors print "Error: ..." to stderr and exit with status 1
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional, Sequence

from sentence_model.config import (
    DEFAULT_SOURCE_LANGUAGE,
    DEFAULT_TARGET_LANGUAGE,
    LOG_FORMAT,
    LOG_LEVEL,
    normalize_language,
)
from sentence_model.corpus import WRITER_SUFFIXES, WRITERS
from sentence_model.corpus.loader import PairsDocument, load_pairs

logger = logging.getLogger(__name__)

TEXT_FORMAT = "text"


def _status(msg: str) -> None:
    """Print a status message to stderr.

    Status output must not pollute stdout so the text format can be piped.
    """
    print(msg, file=sys.stderr, flush=True)


def _resolve_output_stem(
    stem: str,
    suffixes: Sequence[str],
    output_dir: Path,
) -> Path:
    """Resolve an output stem whose files do not exist yet.

    WHY: Users may export the same document several times. Overwriting a
    previous corpus would lose work.

    HOW: Try {stem}; if any {stem}{suffix} exists, try {stem}-2,
    {stem}-3, ... until every file is free.

    Args:
        stem: Input filename stem.
        suffixes: Suffixes the writer will append, e.g. [".tmx"] or
                  [".en", ".it"].
        output_dir: Directory to save into.

    Returns:
        The stem path (without suffix) to hand to the writer.
    """
    candidate = output_dir / stem
    counter = 2
    while any(Path("{}{}".format(candidate, s)).exists() for s in suffixes):
        candidate = output_dir / "{}-{}".format(stem, counter)
        counter += 1
    return candidate


def _print_pairs(document: PairsDocument, print_tags: bool, print_placeholders: bool) -> None:
    for pair in document.pairs:
        source = pair.source.to_string(print_tags, print_placeholders)
        target = pair.target.to_string(print_tags, print_placeholders)
        print("{}\t{}".format(source, target))


def _write_corpus(
    document: PairsDocument,
    format_key: str,
    stem: str,
    output_dir: Path,
    print_tags: bool,
    print_placeholders: bool,
) -> List[Path]:
    """Reconstruct every pair and stream it into the selected writer.

    Returns:
        The files written.
    """
    writer_cls = WRITERS[format_key]
    suffix = WRITER_SUFFIXES[format_key]

    if suffix:
        suffixes = [suffix]
    else:
        suffixes = [".{}".format(document.source_language), ".{}".format(document.target_language)]

    base = _resolve_output_stem(stem, suffixes, output_dir)
    target_path = Path("{}{}".format(base, suffix))

    with writer_cls(target_path, document.source_language, document.target_language) as writer:
        _status("Writing {} corpus...".format(writer.name))
        for pair in document.pairs:
            writer.write(
                pair.source.to_string(print_tags, print_placeholders),
                pair.target.to_string(print_tags, print_placeholders),
                pair.timestamp,
            )

    if suffix:
        return [target_path]
    return [Path("{}{}".format(base, s)) for s in suffixes]


def _run(args: argparse.Namespace) -> int:
    """Execute the export and return the process exit code."""
    input_path = Path(args.input_file).resolve()
    if not input_path.is_file():
        print("Error: File not found: {}".format(input_path), file=sys.stderr)
        return 1

    output_dir = Path(args.output_dir).resolve() if args.output_dir else input_path.parent
    if args.format != TEXT_FORMAT and not output_dir.is_dir():
        print("Error: Output directory does not exist: {}".format(output_dir), file=sys.stderr)
        return 1

    try:
        _status("Loading {}...".format(input_path.name))
        document = load_pairs(input_path)
        if args.source_language:
            document.source_language = args.source_language
        if args.target_language:
            document.target_language = args.target_language
        document.source_language = normalize_language(document.source_language)
        document.target_language = normalize_language(document.target_language)
        _status("  {} sentence pairs ({} -> {})".format(
            len(document.pairs), document.source_language, document.target_language,
        ))

        if args.format == TEXT_FORMAT:
            _print_pairs(document, args.tags, args.placeholders)
            return 0

        saved = _write_corpus(
            document,
            args.format,
            input_path.stem,
            output_dir,
            args.tags,
            args.placeholders,
        )
    except (ValueError, OSError) as e:
        logger.debug("Export failed", exc_info=True)
        print("Error: {}".format(e), file=sys.stderr)
        return 1

    _status("")
    _status("Done! Saved {} file(s) to {}".format(len(saved), output_dir))
    for path in saved:
        _status("  {}".format(path.name))
    return 0


def build_parser() -> argparse.ArgumentParser:
    """Build the argparse parser for the CLI.

    Separated from main() so tests can inspect the parser without
    running an export.
    """
    parser = argparse.ArgumentParser(
        prog="sentence_model",
        description="Reconstruct tokenized sentence pairs and export them as a "
                    "bilingual corpus (TMX or parallel text).",
    )

    parser.add_argument(
        "input_file",
        help="Path to the JSON sentence pairs document.",
    )

    parser.add_argument(
        "--format",
        choices=sorted(list(WRITERS.keys()) + [TEXT_FORMAT]),
        default="tmx",
        help="Output format (default: %(default)s).",
    )

    parser.add_argument(
        "--output-dir",
        default=None,
        help="Directory to save output files (default: same as input file).",
    )

    parser.add_argument(
        "--source-language",
        default=None,
        help="Source language tag, overrides the document "
             "(document default: {}).".format(DEFAULT_SOURCE_LANGUAGE),
    )

    parser.add_argument(
        "--target-language",
        default=None,
        help="Target language tag, overrides the document "
             "(document default: {}).".format(DEFAULT_TARGET_LANGUAGE),
    )

    parser.add_argument(
        "--tags",
        action=argparse.BooleanOptionalAction,
        default=True,
        help="Keep inline markup in the reconstructed text (default: %(default)s).",
    )

    parser.add_argument(
        "--placeholders",
        action="store_true",
        help="Print word placeholders instead of the original text.",
    )

    return parser


def main(argv: Optional[List[str]] = None) -> None:
    """Entry point for the CLI.

    RULES:
    - argv=None means use sys.argv (normal CLI invocation)
    - Explicit argv is for testing
    """
    logging.basicConfig(level=LOG_LEVEL, format=LOG_FORMAT)
    parser = build_parser()
    args = parser.parse_args(argv)
    code = _run(args)
    if code:
        sys.exit(code)


if __name__ == "__main__":
    main()
