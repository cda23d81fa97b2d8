"""Tests for the pagequill command line."""

import json

import pytest

from pagequill.cli import create_parser, main


@pytest.fixture
def html_file(temp_dir):
    path = temp_dir / "report.html"
    path.write_text(
        "<html><body>"
        '<paginate-source data-key="header">Acme <paginate-target data-key="pageNumber"></paginate-target></paginate-source>'
        + "".join(f"<p>Paragraph {index}</p>" for index in range(120))
        + "</body></html>",
        encoding="utf-8",
    )
    return path


class TestCreateParser:
    """Test suite for argument parsing."""

    def test_defaults(self):
        args = create_parser().parse_args(["in.html"])

        assert args.input == "in.html"
        assert args.output is None
        assert args.page_size == "A4"
        assert not args.json
        assert not args.verbose

    def test_invalid_page_size(self):
        with pytest.raises(SystemExit):
            create_parser().parse_args(["in.html", "--page-size", "B5"])


class TestMain:
    """Test suite for the CLI entry point."""

    def test_render_pdf(self, html_file, capsys):
        assert main([str(html_file)]) == 0

        output = html_file.with_suffix(".pdf")
        assert output.read_bytes().startswith(b"%PDF")
        assert "Saved" in capsys.readouterr().out

    def test_render_pdf_custom_output(self, html_file, temp_dir):
        output = temp_dir / "nested" / "custom.pdf"

        assert main([str(html_file), "-o", str(output), "--page-size", "A5"]) == 0
        assert output.exists()

    def test_json_summary(self, html_file, capsys):
        assert main([str(html_file), "--json", "--header-height", "30", "--footer-height", "30"]) == 0

        summary = json.loads(capsys.readouterr().out)
        assert summary["total_pages"] == len(summary["pages"])
        assert summary["total_pages"] > 1
        assert summary["overflow_pages"] == []
        assert [page["number"] for page in summary["pages"]] == list(range(1, summary["total_pages"] + 1))
        assert summary["pages"][1]["header"] == "Acme 2"
        assert not html_file.with_suffix(".pdf").exists()

    def test_missing_input(self, temp_dir, capsys):
        assert main([str(temp_dir / "missing.html")]) == 1
        assert "File not found" in capsys.readouterr().err

    def test_pagequill_error_reported(self, temp_dir, capsys):
        directory = temp_dir / "folder.html"
        directory.mkdir()

        assert main([str(directory)]) == 1
        assert "Cannot read HTML file" in capsys.readouterr().err
