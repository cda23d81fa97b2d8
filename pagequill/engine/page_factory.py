"""Page factory for creating pages with locked header, content and footer heights.

This factory handles:
- Building the page box and its three regions
- Cloning template header/footer content into every page
- Measuring and locking region heights before any content is inserted
- Shrinking the last page to avoid a spurious trailing blank page
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple

from ..config import PageTemplate
from ..model.box import Box
from .oracle import LayoutOracle

logger = logging.getLogger(__name__)

# Sub-point correction applied to the last page once layout is finished
LAST_PAGE_EPSILON = 0.4


@dataclass(eq=False)
class Page:
    """One output page with its header, content and footer regions."""
    box: Box
    header: Box
    content: Box
    footer: Box
    number: int
    classes: Tuple[str, ...] = ()
    width: float = 0.0
    height: float = 0.0
    header_height: float = 0.0
    content_height: float = 0.0
    footer_height: float = 0.0
    regions: List[Box] = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self.regions = [self.header, self.content, self.footer]


class PageFactory:
    """Creates pages of a fixed size from a pre-measured template."""

    def __init__(
        self,
        container: Box,
        page_width: float,
        page_height: float,
        template: PageTemplate,
        oracle: LayoutOracle,
    ):
        """Initialize page factory.

        Args:
            container: Box every new page is appended to
            page_width: Pre-measured page width
            page_height: Pre-measured page height
            template: Template providing region heights and header/footer content
            oracle: Oracle used to lock region heights
        """
        self.container = container
        self.page_width = page_width
        self.page_height = page_height
        self.template = template
        self.oracle = oracle
        self.pages: List[Page] = []

    def create_page(self, page_classes: Sequence[str] = ()) -> Page:
        """Create an empty page and lock its region heights.

        Args:
            page_classes: Classes added to the page box (``default`` if empty)

        Returns:
            New Page appended to the container
        """
        classes = tuple(page_classes) or tuple(self.template.classes) or ("default",)

        page_box = Box("div", {"class": " ".join(("page",) + classes)})
        page_box.style.width = self.page_width
        page_box.style.height = self.page_height

        header = self._region("header", self.template.header_height, self.template.header)
        content = self._region("content", None, None)
        footer = self._region("footer", self.template.footer_height, self.template.footer)
        page_box.extend([header, content, footer])

        self.container.append(page_box)

        page = Page(
            box=page_box,
            header=header,
            content=content,
            footer=footer,
            number=len(self.pages) + 1,
            classes=classes,
        )
        # Lock heights right away, later insertions must not grow the page
        self._lock_heights(page)
        self.pages.append(page)

        logger.debug(
            f"Page {page.number} created: {page.width:.2f}x{page.height:.2f}, "
            f"content height {page.content_height:.2f}"
        )
        return page

    def adjust_last_page(self) -> None:
        """Shrink the last page slightly so no blank trailing page is produced."""
        if not self.pages:
            return

        last_page = self.pages[-1]
        last_page.height = max(0.0, last_page.height - LAST_PAGE_EPSILON)
        last_page.box.style.height = last_page.height
        last_page.box.style.max_height = last_page.height
        logger.debug(f"Last page {last_page.number} height adjusted to {last_page.height:.2f}")

    def _region(self, name: str, height: Optional[float], template: Optional[Box]) -> Box:
        region = Box("div", {"class": name})
        region.style.height = height
        if template is not None:
            region.extend(child.clone(deep=True) for child in template.children)
        return region

    def _lock_heights(self, page: Page) -> None:
        page.width = self.oracle.measure_width(page.box)
        page.height = self.oracle.measure_height(page.box)
        page.box.style.max_height = page.height

        page.header_height = self.oracle.measure_height(page.header)
        page.header.style.height = page.header_height
        page.header.style.max_height = page.header_height

        page.footer_height = self.oracle.measure_height(page.footer)
        page.footer.style.height = page.footer_height
        page.footer.style.max_height = page.footer_height

        # The content region fills whatever the header and footer leave over
        page.content_height = max(0.0, page.height - page.header_height - page.footer_height)
        page.content.style.max_height = page.content_height
