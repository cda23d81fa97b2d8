"""
pagequill - paginate styled content trees into fixed-size pages.

The engine streams an arbitrarily deep tree of boxes into pages made of a
header, a content region and a footer:

- no box overflows the content region it was placed in
- nesting survives page breaks (table header rows repeat)
- break-before / break-after / break-inside directives are honored
- named sources resolve into header/footer placeholders, with page numbers

Quick Start:
    from pagequill import parse_html, paginate, PdfRenderer

    source = parse_html(open("report.html").read())
    pages = paginate(source)
    PdfRenderer().render(pages, "report.pdf")
"""

from .version import __version__, __version_info__

from .exceptions import (
    PagequillError,
    ParsingError,
    LayoutError,
    RenderingError,
)
from .config import PageSize, PageTemplate
from .model import Box, BreakDirectives, ComputedStyle
from .engine import (
    AncestryFrame,
    AncestryTracker,
    CrossReferenceResolver,
    DocumentLayout,
    FixedHeightOracle,
    FlowOracle,
    LayoutCursor,
    LayoutOracle,
    OverflowRecord,
    Page,
    PageFactory,
    PaginationEngine,
    ReportLabOracle,
    paginate,
)
from .parser import parse_file, parse_html
from .renderers import PdfRenderer

__all__ = [
    "__version__",
    "__version_info__",
    # Exceptions
    "PagequillError",
    "ParsingError",
    "LayoutError",
    "RenderingError",
    # Configuration
    "PageSize",
    "PageTemplate",
    # Model
    "Box",
    "BreakDirectives",
    "ComputedStyle",
    # Engine
    "AncestryFrame",
    "AncestryTracker",
    "CrossReferenceResolver",
    "DocumentLayout",
    "FixedHeightOracle",
    "FlowOracle",
    "LayoutCursor",
    "LayoutOracle",
    "OverflowRecord",
    "Page",
    "PageFactory",
    "PaginationEngine",
    "ReportLabOracle",
    "paginate",
    # Input / output
    "parse_file",
    "parse_html",
    "PdfRenderer",
]


def main():
    """CLI entry point."""
    from .cli import main as cli_main
    return cli_main()
