"""
Page configuration for pagequill.

Page sizes are expressed in points (1/72 inch), the unit used by the
measuring oracles and the PDF renderer.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Tuple

from .model.box import Box

CM = 72.0 / 2.54


class PageSize(Enum):
    """Standard page sizes in points."""
    A4 = (595.28, 841.89)
    A5 = (419.53, 595.28)
    LETTER = (612.0, 792.0)
    LEGAL = (612.0, 1008.0)


@dataclass(slots=True)
class PageTemplate:
    """
    Layout template every page is created from.

    ``header`` and ``footer`` are optional template boxes whose children are
    deep-cloned into the matching region of each new page, so a fixed
    header/footer can carry placeholders resolved per page.
    """
    width: float = PageSize.A4.value[0]
    height: float = PageSize.A4.value[1]
    header_height: float = 2 * CM
    footer_height: float = 2 * CM
    classes: Tuple[str, ...] = ("default",)
    header: Optional[Box] = field(default=None, repr=False)
    footer: Optional[Box] = field(default=None, repr=False)

    @classmethod
    def from_page_size(cls, page_size: PageSize = PageSize.A4, **overrides) -> "PageTemplate":
        width, height = page_size.value
        return cls(width=width, height=height, **overrides)

    @property
    def content_height(self) -> float:
        """Content height a page built from this template is expected to lock."""
        return max(0.0, self.height - self.header_height - self.footer_height)
