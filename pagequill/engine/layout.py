"""
Document layout - prepares the page wrapper and hands out pages.

DocumentLayout is the collaborator the pagination engine consumes before and
after rendering:
- prepare(): create the pages wrapper, measure the page template once
- insert_page(): create a new page through the PageFactory
- finish_layout(): apply the last page height correction
"""

from __future__ import annotations

import logging
from typing import List, Optional, Sequence

from ..config import PageTemplate
from ..exceptions import LayoutError
from ..model.box import Box
from .oracle import LayoutOracle
from .page_factory import Page, PageFactory

logger = logging.getLogger(__name__)

WRAPPER_CLASSES = "pagequill pagequill-pages"


class DocumentLayout:
    """Owns the output wrapper and the page factory of one render."""

    def __init__(self, oracle: LayoutOracle, template: Optional[PageTemplate] = None):
        """
        Args:
            oracle: Oracle used to measure the template and lock page regions
            template: Page template (A4 with 2cm header/footer if omitted)
        """
        self.oracle = oracle
        self.template = template or PageTemplate()
        self.wrapper: Optional[Box] = None
        self.page_width = 0.0
        self.page_height = 0.0
        self._factory: Optional[PageFactory] = None

    def prepare(self) -> Box:
        """
        Create the pages wrapper and measure the page template.

        Returns:
            Wrapper box new pages are appended to
        """
        self.wrapper = Box("div", {"class": WRAPPER_CLASSES})
        self._determine_page_dimensions()
        self._factory = PageFactory(
            self.wrapper,
            self.page_width,
            self.page_height,
            self.template,
            self.oracle,
        )
        logger.debug(f"Print layout prepared: {self.page_width:.2f}x{self.page_height:.2f}")
        return self.wrapper

    def insert_page(self, classes: Sequence[str] = ()) -> Page:
        return self._require_factory().create_page(classes)

    def finish_layout(self) -> None:
        self._require_factory().adjust_last_page()

    @property
    def pages(self) -> List[Page]:
        return list(self._factory.pages) if self._factory else []

    def _determine_page_dimensions(self) -> None:
        # Off-page probe sized like a default page, measured once
        probe = Box("div", {"class": "page default"})
        probe.style.width = self.template.width
        probe.style.height = self.template.height
        self.wrapper.append(probe)
        self.page_width = self.oracle.measure_width(probe)
        self.page_height = self.oracle.measure_height(probe)
        probe.remove()

    def _require_factory(self) -> PageFactory:
        if self._factory is None:
            raise LayoutError("Print layout not prepared", "call prepare() before inserting pages")
        return self._factory
