"""

Layout oracles - black-box height/width measurement of boxes.

The paginator never computes geometry itself. It asks a LayoutOracle for the
rendered height of a page's content region after every tentative insertion.

Provided oracles:
- FlowOracle: block flow rules shared by all oracles
- FixedHeightOracle: lookup table keyed by source box, for deterministic tests
- ReportLabOracle: text wrapped with ReportLab font metrics

"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterator, List, Mapping, Optional, Protocol, Union

from reportlab.lib.utils import simpleSplit
from reportlab.pdfbase import pdfmetrics

from ..config import PageSize
from ..model.box import Box
from ..model.style import INLINE, NONE, TABLE_ROW

logger = logging.getLogger(__name__)

DEFAULT_FONT_NAME = "Helvetica"
DEFAULT_FONT_SIZE = 10.0
DEFAULT_LEADING = 1.2

FONT_ALIASES = {
    "arial": "Helvetica",
    "helvetica": "Helvetica",
    "sans-serif": "Helvetica",
    "times": "Times-Roman",
    "times new roman": "Times-Roman",
    "serif": "Times-Roman",
    "courier": "Courier",
    "courier new": "Courier",
    "monospace": "Courier",
}


class LayoutOracle(Protocol):
    """Measurement interface consumed by the pagination engine."""

    def measure_height(self, box: Box) -> float:
        ...

    def measure_width(self, box: Box) -> float:
        ...


@dataclass(frozen=True, slots=True)
class FontSpec:
    name: str
    size: float
    leading: float

    @property
    def line_height(self) -> float:
        return self.size * self.leading


@dataclass(slots=True)
class TextRun:
    """Consecutive inline content of a block, laid out as one paragraph."""
    text: str
    container: Box
    boxes: List[Box] = field(default_factory=list)


FlowItem = Union[Box, TextRun]


class FlowOracle:
    """
    Block flow measurement.

    Rules:
    - ``display: none`` measures 0
    - an explicit style height wins
    - consecutive inline children form one text run
    - block children stack, table-row children sit side by side
    """

    def __init__(
        self,
        default_width: float = PageSize.A4.value[0],
        font_name: str = DEFAULT_FONT_NAME,
        font_size: float = DEFAULT_FONT_SIZE,
        leading: float = DEFAULT_LEADING,
    ):
        self.default_width = default_width
        self.default_font = FontSpec(font_name, font_size, leading)

    def measure_height(self, box: Box) -> float:
        style = box.style
        if style.display == NONE:
            return 0.0
        if style.height is not None:
            return style.height

        intrinsic = self._intrinsic_height(box)
        if intrinsic is not None:
            return intrinsic

        if box.is_text:
            return self._measure_text(box.text or "", self.resolve_font(box), self.measure_width(box))

        heights = [self._item_height(item) for item in self.iter_flow(box)]
        if style.display == TABLE_ROW:
            return max(heights, default=0.0)
        return sum(heights)

    def measure_width(self, box: Box) -> float:
        if box.style.width is not None:
            return box.style.width

        parent = box.parent
        if parent is None:
            return self.default_width

        parent_width = self.measure_width(parent)
        if parent.style.display == TABLE_ROW:
            cells = [child for child in parent.children if child.style.display != NONE]
            return parent_width / max(1, len(cells))
        return parent_width

    def iter_flow(self, box: Box) -> Iterator[FlowItem]:
        """
        Group a box's children into flow items.

        Args:
            box: Container to lay out

        Yields:
            Block-level child boxes and TextRun objects for inline runs
        """
        run: Optional[TextRun] = None
        for child in box.children:
            if child.style.display == NONE:
                continue
            if child.is_text or child.style.display == INLINE:
                if run is None:
                    run = TextRun(text="", container=box)
                run.text += child.inner_text()
                run.boxes.append(child)
                continue
            if run is not None:
                yield run
                run = None
            yield child
        if run is not None:
            yield run

    def resolve_font(self, box: Box) -> FontSpec:
        """Font of a box, inherited from the nearest ancestor that sets one."""
        name = size = leading = None
        current: Optional[Box] = box
        while current is not None and None in (name, size, leading):
            style = current.style
            name = name or style.font_name
            size = size or style.font_size
            leading = leading or style.line_height
            current = current.parent

        return FontSpec(
            name=self._font_name(name) if name else self.default_font.name,
            size=size or self.default_font.size,
            leading=leading or self.default_font.leading,
        )

    def _item_height(self, item: FlowItem) -> float:
        if isinstance(item, TextRun):
            container = item.container
            return self._measure_text(item.text, self.resolve_font(container), self.measure_width(container))
        return self.measure_height(item)

    def _intrinsic_height(self, box: Box) -> Optional[float]:
        return None

    def _font_name(self, family: str) -> str:
        return FONT_ALIASES.get(family.lower(), family)

    def _measure_text(self, text: str, font: FontSpec, width: float) -> float:
        if not text.strip():
            return 0.0
        return font.line_height


class FixedHeightOracle(FlowOracle):
    """
    Oracle backed by a fixed lookup table keyed by source box identity.

    Clones resolve through their ``origin``, so a height registered for a
    source box applies to every copy placed on a page.
    """

    def __init__(
        self,
        heights: Optional[Mapping[Box, float]] = None,
        default_height: float = 0.0,
        text_height: float = 0.0,
        default_width: float = PageSize.A4.value[0],
    ):
        super().__init__(default_width=default_width)
        self.heights = dict(heights or {})
        self.default_height = default_height
        self.text_height = text_height

    def set_height(self, box: Box, height: float) -> None:
        self.heights[box.source] = height

    def _intrinsic_height(self, box: Box) -> Optional[float]:
        height = self.heights.get(box.source)
        if height is not None:
            return height
        if not box.children and not box.is_text:
            return self.default_height
        return None

    def _measure_text(self, text: str, font: FontSpec, width: float) -> float:
        return self.text_height if text.strip() else 0.0


class ReportLabOracle(FlowOracle):
    """

    Oracle measuring text with ReportLab font metrics.

    Text runs are wrapped to the available width with simpleSplit; the height
    is the number of lines times font size times leading.

    """

    def _font_name(self, family: str) -> str:
        name = super()._font_name(family)
        if name in pdfmetrics.standardFonts or name in pdfmetrics.getRegisteredFontNames():
            return name
        logger.debug(f"Font '{family}' not available, using {self.default_font.name}")
        return self.default_font.name

    def wrap_text(self, text: str, font: FontSpec, width: float) -> List[str]:
        """Split text into the lines it occupies at the given width."""
        if not text.strip():
            return []
        return simpleSplit(" ".join(text.split()), font.name, font.size, max(width, 1.0))

    def _measure_text(self, text: str, font: FontSpec, width: float) -> float:
        return len(self.wrap_text(text, font, width)) * font.line_height
