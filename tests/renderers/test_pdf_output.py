"""Tests for the ReportLab PDF renderer."""

import logging

import pytest

from pagequill.config import PageTemplate
from pagequill.engine import ReportLabOracle, paginate
from pagequill.exceptions import RenderingError
from pagequill.model import Box
from pagequill.parser import parse_html
from pagequill.renderers import PdfRenderer


@pytest.fixture
def oracle():
    return ReportLabOracle(default_width=PageTemplate().width)


class TestPdfRenderer:
    """Test suite for PdfRenderer."""

    def test_render_writes_pdf(self, temp_dir, oracle):
        source = parse_html(
            "<body>"
            '<paginate-source data-key="header">Report <paginate-target data-key="pageNumber"></paginate-target></paginate-source>'
            + "".join(f"<p>Paragraph {index} with some text to wrap across the line.</p>" for index in range(200))
            + "<table><tr><td>left</td><td>right</td></tr></table><hr>"
            "</body>"
        )
        pages = paginate(source, oracle=oracle)

        output = PdfRenderer(oracle).render(pages, temp_dir / "out" / "report.pdf")

        assert output.exists()
        data = output.read_bytes()
        assert data.startswith(b"%PDF")
        assert len(pages) > 1

    def test_render_without_pages_raises(self, temp_dir):
        with pytest.raises(RenderingError):
            PdfRenderer().render([], temp_dir / "empty.pdf")

    def test_missing_image_draws_placeholder(self, temp_dir, oracle, caplog):
        source = Box("div", children=[Box("img", {"src": str(temp_dir / "nope.png")})])
        source.children[0].style.width = 50.0
        source.children[0].style.height = 40.0
        pages = paginate(source, oracle=oracle)

        with caplog.at_level(logging.WARNING, logger="pagequill"):
            output = PdfRenderer(oracle).render(pages, temp_dir / "image.pdf")

        assert output.read_bytes().startswith(b"%PDF")
        assert "Image not found" in caplog.text

    def test_default_oracle(self, temp_dir):
        pages = paginate(parse_html("<p>Hello</p>"))

        output = PdfRenderer().render(pages, str(temp_dir / "hello.pdf"))

        assert output.suffix == ".pdf"
        assert output.stat().st_size > 0
