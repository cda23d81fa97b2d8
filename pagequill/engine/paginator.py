"""

Pagination engine - distributes a source tree over fixed-size pages.

Flow:
1. DocumentLayout.prepare() → first page
2. process_content(): depth-first walk of the source tree
   - splittable containers are cloned shallowly and descended into
   - leaves and non-splittable subtrees are inserted whole and measured
   - on overflow the unit moves to a new page, ancestors are rebuilt there
3. DocumentLayout.finish_layout()
4. CrossReferenceResolver.decorate()

"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from ..config import PageTemplate
from ..model.box import Box
from ..model.style import BreakDirectives
from .ancestry import AncestryTracker
from .cross_reference import CrossReferenceResolver
from .layout import DocumentLayout
from .oracle import LayoutOracle, ReportLabOracle
from .page_factory import Page

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class LayoutCursor:
    """Traversal state: where the next unit goes and which ancestors are open."""
    page: Page
    insertion_point: Box
    ancestry: AncestryTracker = field(default_factory=AncestryTracker)
    units_on_page: int = 0
    pending_break: bool = False


@dataclass(slots=True)
class OverflowRecord:
    """An atomic unit accepted although it overflows its page on its own."""
    page_number: int
    box: Box
    height: float
    limit: float


class PaginationEngine:
    """

    Greedy paginator with one backtrack per atomic unit.

    Uses the LayoutOracle after every tentative insertion; never computes
    geometry itself.

    """

    def __init__(
        self,
        source: Box,
        layout: Optional[DocumentLayout] = None,
        oracle: Optional[LayoutOracle] = None,
        page_classes: Sequence[str] = (),
        resolve_references: bool = True,
    ):
        """

        Args:
            source: Root of the source tree (its children are paginated)
            layout: Layout collaborator (built from ``oracle`` if omitted)
            oracle: Measurement oracle (the layout's oracle if omitted)
            page_classes: Extra classes for every created page
            resolve_references: Run the cross-reference pass after pagination

        """
        if layout is None:
            layout = DocumentLayout(oracle or ReportLabOracle())
        self.source = source
        self.layout = layout
        self.oracle = oracle or layout.oracle
        self.page_classes = tuple(page_classes)
        self.resolve_references = resolve_references
        self.pages: List[Page] = []
        self.overflows: List[OverflowRecord] = []

    def render(self) -> List[Page]:
        """

        Paginate the source tree and decorate the resulting pages.

        Returns:
            Ordered list of pages

        """
        self.layout.prepare()
        self.pages = []
        self.overflows = []

        page = self._insert_page()
        cursor = LayoutCursor(page=page, insertion_point=page.content)
        self.process_content(self.source, cursor)

        self.layout.finish_layout()
        self.pages = self.layout.pages
        logger.info(
            f"Paginated content into {len(self.pages)} page(s), "
            f"{len(self.overflows)} overflowing unit(s)"
        )

        if self.resolve_references:
            CrossReferenceResolver(self.pages).decorate()
        return self.pages

    def process_content(self, node: Box, cursor: LayoutCursor) -> LayoutCursor:
        """

        Distribute the children of ``node`` starting at ``cursor``.

        Args:
            node: Source box whose children are placed
            cursor: Current page and insertion point

        Returns:
            Cursor after the last child was placed (may be on a later page)

        """
        for child in node.children:
            directives = BreakDirectives.from_box(child)

            if directives.before:
                cursor.pending_break = True

            if child.has_children() and not directives.avoid_inside:
                # Increase depth: add the node shallowly and descend
                wrapper = child.clone(deep=False)
                cursor.insertion_point.append(wrapper)
                cursor.insertion_point = wrapper
                cursor.ancestry.push(child)

                cursor = self.process_content(child, cursor)

                cursor.ancestry.pop()
                cursor.insertion_point = cursor.insertion_point.parent

                # Children moved to a later page, drop the empty wrapper
                if not wrapper.has_children():
                    wrapper.remove()
            else:
                cursor = self._place_unit(child, cursor)

            if directives.after:
                cursor.pending_break = True

        return cursor

    def new_page(self, cursor: LayoutCursor) -> LayoutCursor:
        """

        Start a new page and rebuild the open ancestors on it.

        Args:
            cursor: Cursor on the page being left

        Returns:
            Cursor positioned at the innermost rebuilt ancestor

        """
        page = self._insert_page()
        insertion_point = cursor.ancestry.render_levels(page)
        return LayoutCursor(page=page, insertion_point=insertion_point, ancestry=cursor.ancestry)

    def _place_unit(self, node: Box, cursor: LayoutCursor) -> LayoutCursor:
        # Requested boundaries only apply once the page holds something
        if cursor.pending_break:
            cursor.pending_break = False
            if cursor.units_on_page:
                cursor = self.new_page(cursor)

        clone = node.clone(deep=True)
        height = self._insert_and_measure(clone, cursor)

        if height > cursor.page.content_height and cursor.units_on_page:
            # Remove the overflowing unit and retry on a fresh page
            clone.remove()
            cursor = self.new_page(cursor)
            height = self._insert_and_measure(clone, cursor)

        if height > cursor.page.content_height:
            logger.warning(
                f"Element cannot be rendered to page {cursor.page.number}, "
                f"it overflows by itself ({height:.2f} > {cursor.page.content_height:.2f}): "
                f"{clone.inner_text()[:50]!r}"
            )
            self.overflows.append(
                OverflowRecord(
                    page_number=cursor.page.number,
                    box=clone,
                    height=height,
                    limit=cursor.page.content_height,
                )
            )

        cursor.units_on_page += 1
        return cursor

    def _insert_and_measure(self, clone: Box, cursor: LayoutCursor) -> float:
        cursor.insertion_point.append(clone)
        return self.oracle.measure_height(cursor.page.content)

    def _insert_page(self) -> Page:
        return self.layout.insert_page(self.page_classes)


def paginate(
    source: Box,
    oracle: Optional[LayoutOracle] = None,
    template: Optional[PageTemplate] = None,
    page_classes: Sequence[str] = (),
    resolve_references: bool = True,
) -> List[Page]:
    """

    Paginate a source tree in one call.

    Args:
        source: Root of the source tree
        oracle: Measurement oracle (ReportLabOracle sized to the template if omitted)
        template: Page template
        page_classes: Extra classes for every page
        resolve_references: Run the cross-reference pass

    Returns:
        Ordered list of decorated pages

    """
    template = template or PageTemplate()
    oracle = oracle or ReportLabOracle(default_width=template.width)
    engine = PaginationEngine(
        source,
        layout=DocumentLayout(oracle, template),
        page_classes=page_classes,
        resolve_references=resolve_references,
    )
    return engine.render()
