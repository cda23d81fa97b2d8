"""

PdfRenderer - draws paginated pages to a PDF file with ReportLab.

Every page is drawn region by region (header, content, footer) using the
same flow rules and text wrapping the ReportLabOracle measured with, so the
drawn boxes occupy exactly the heights the paginator accounted for.

"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Optional, Union

from reportlab.lib.utils import ImageReader
from reportlab.pdfgen import canvas

from ..engine.oracle import ReportLabOracle, TextRun
from ..engine.page_factory import Page
from ..exceptions import RenderingError
from ..model.box import Box
from ..model.style import TABLE_ROW

logger = logging.getLogger(__name__)


class PdfRenderer:
    """Renders a list of pages into a PDF document."""

    def __init__(self, oracle: Optional[ReportLabOracle] = None):
        """
        Args:
            oracle: Oracle the pages were paginated with
        """
        self.oracle = oracle or ReportLabOracle()

    def render(self, pages: List[Page], output_path: Union[str, Path]) -> Path:
        """

        Main method - renders all pages to PDF.

        Args:
            pages: Paginated and decorated pages
            output_path: Target PDF file

        Returns:
            Path to generated PDF file

        """
        if not pages:
            raise RenderingError("No pages to render")

        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)

        c = canvas.Canvas(str(output_path), pagesize=(pages[0].width, pages[0].height))
        for page in pages:
            c.setPageSize((page.width, page.height))
            self._render_page(c, page)
            c.showPage()
        c.save()

        logger.info(f"Rendered {len(pages)} page(s) to {output_path}")
        return output_path

    def _render_page(self, c: canvas.Canvas, page: Page) -> None:
        top = page.height
        for region, height in (
            (page.header, page.header_height),
            (page.content, page.content_height),
            (page.footer, page.footer_height),
        ):
            self._draw_flow(c, region, 0.0, top)
            top -= height

    def _draw_flow(self, c: canvas.Canvas, box: Box, x: float, top: float) -> None:
        if box.style.display == TABLE_ROW:
            cell_x = x
            for item in self.oracle.iter_flow(box):
                if isinstance(item, Box):
                    self._draw_box(c, item, cell_x, top)
                    cell_x += self.oracle.measure_width(item)
            return

        width = self.oracle.measure_width(box)
        cursor = top
        for item in self.oracle.iter_flow(box):
            if isinstance(item, TextRun):
                cursor = self._draw_text(c, item, x, cursor, width)
            else:
                self._draw_box(c, item, x, cursor)
                cursor -= self.oracle.measure_height(item)

    def _draw_box(self, c: canvas.Canvas, box: Box, x: float, top: float) -> None:
        if box.children:
            self._draw_flow(c, box, x, top)
            return

        height = self.oracle.measure_height(box)
        width = self.oracle.measure_width(box)
        if box.tag == "hr":
            c.line(x, top - height / 2, x + width, top - height / 2)
        elif box.tag == "img":
            self._draw_image(c, box, x, top - height, width, height)

    def _draw_text(self, c: canvas.Canvas, run: TextRun, x: float, top: float, width: float) -> float:
        font = self.oracle.resolve_font(run.container)
        c.setFont(font.name, font.size)
        for line in self.oracle.wrap_text(run.text, font, width):
            c.drawString(x, top - font.size, line)
            top -= font.line_height
        return top

    def _draw_image(self, c: canvas.Canvas, box: Box, x: float, y: float, width: float, height: float) -> None:
        src = box.get("src")
        if src and Path(src).is_file():
            c.drawImage(ImageReader(src), x, y, width=width, height=height, preserveAspectRatio=True)
            return
        logger.warning(f"Image not found, drawing placeholder: {src!r}")
        c.rect(x, y, width, height, stroke=1, fill=0)
