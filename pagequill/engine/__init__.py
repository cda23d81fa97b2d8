"""
Pagination engine components.
"""

from .oracle import FixedHeightOracle, FlowOracle, LayoutOracle, ReportLabOracle
from .page_factory import LAST_PAGE_EPSILON, Page, PageFactory
from .layout import DocumentLayout
from .ancestry import AncestryFrame, AncestryTracker
from .cross_reference import CrossReferenceResolver, ReferenceMap
from .paginator import LayoutCursor, OverflowRecord, PaginationEngine, paginate

__all__ = [
    "LayoutOracle",
    "FlowOracle",
    "FixedHeightOracle",
    "ReportLabOracle",
    "LAST_PAGE_EPSILON",
    "Page",
    "PageFactory",
    "DocumentLayout",
    "AncestryFrame",
    "AncestryTracker",
    "CrossReferenceResolver",
    "ReferenceMap",
    "LayoutCursor",
    "OverflowRecord",
    "PaginationEngine",
    "paginate",
]
