"""Tests for the command-line interface.

WHY: The CLI is how upstream pipeline stages turn JSON sentence pairs
into corpora. It must pick the right writer, never overwrite a previous
export, and fail with a clear message and exit status.

HOW: main() is called with explicit argv against documents in tmp_path.
stdout/stderr are captured with capsys.
"""

import xml.etree.ElementTree as ET

import pytest

from sentence_model.cli import build_parser, main


class TestParser:
    def test_defaults(self):
        args = build_parser().parse_args(["pairs.json"])
        assert args.format == "tmx"
        assert args.tags is True
        assert args.placeholders is False
        assert args.output_dir is None

    def test_no_tags_flag(self):
        args = build_parser().parse_args(["pairs.json", "--no-tags"])
        assert args.tags is False

    def test_unknown_format_rejected(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args(["pairs.json", "--format", "docx"])


class TestTextFormat:
    def test_prints_markup_pairs(self, sample_document_path, capsys):
        main([str(sample_document_path), "--format", "text"])
        lines = capsys.readouterr().out.splitlines()
        assert lines == [
            "Hello <b>world</b>\tCiao <b>mondo</b>",
            "Fish &amp; chips\tPesce e patatine",
        ]

    def test_prints_stripped_pairs(self, sample_document_path, capsys):
        main([str(sample_document_path), "--format", "text", "--no-tags"])
        lines = capsys.readouterr().out.splitlines()
        assert lines == [
            "Hello world\tCiao mondo",
            "Fish & chips\tPesce e patatine",
        ]

    def test_status_goes_to_stderr(self, sample_document_path, capsys):
        main([str(sample_document_path), "--format", "text"])
        captured = capsys.readouterr()
        assert "Loading" in captured.err
        assert "Loading" not in captured.out


class TestCorpusFormats:
    def test_writes_tmx_next_to_input(self, sample_document_path):
        main([str(sample_document_path)])

        output = sample_document_path.with_suffix(".tmx")
        assert output.is_file()
        root = ET.parse(output).getroot()
        segs = [s.text for s in root.findall("body/tu/tuv/seg")]
        assert segs[:2] == ["Hello <b>world</b>", "Ciao <b>mondo</b>"]
        assert root.find("body/tu").get("creationdate") == "20260101T120000Z"

    def test_does_not_overwrite_previous_export(self, sample_document_path):
        main([str(sample_document_path)])
        main([str(sample_document_path)])

        assert sample_document_path.with_name("pairs.tmx").is_file()
        assert sample_document_path.with_name("pairs-2.tmx").is_file()

    def test_parallel_with_output_dir(self, sample_document_path, tmp_path):
        out_dir = tmp_path / "out"
        out_dir.mkdir()
        main([str(sample_document_path), "--format", "parallel", "--output-dir", str(out_dir), "--no-tags"])

        assert (out_dir / "pairs.en").read_text(encoding="utf-8") == "Hello world\nFish & chips\n"
        assert (out_dir / "pairs.it").read_text(encoding="utf-8") == "Ciao mondo\nPesce e patatine\n"

    def test_language_override(self, sample_document_path):
        main([str(sample_document_path), "--format", "parallel", "--target-language", "it_CH"])
        assert sample_document_path.with_name("pairs.it-CH").is_file()


class TestErrors:
    def test_missing_input(self, tmp_path, capsys):
        with pytest.raises(SystemExit) as exc_info:
            main([str(tmp_path / "missing.json")])
        assert exc_info.value.code == 1
        assert "File not found" in capsys.readouterr().err

    def test_missing_output_dir(self, sample_document_path, tmp_path, capsys):
        with pytest.raises(SystemExit) as exc_info:
            main([str(sample_document_path), "--output-dir", str(tmp_path / "nope")])
        assert exc_info.value.code == 1
        assert "Output directory does not exist" in capsys.readouterr().err

    def test_invalid_document(self, tmp_path, capsys):
        path = tmp_path / "bad.json"
        path.write_text('{"pairs": [{"source": {}}]}', encoding="utf-8")
        with pytest.raises(SystemExit) as exc_info:
            main([str(path), "--format", "text"])
        assert exc_info.value.code == 1
        assert "Error:" in capsys.readouterr().err
