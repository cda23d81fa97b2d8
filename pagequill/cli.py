"""
Command-line interface for pagequill.

Usage:
    pagequill report.html --output report.pdf
    pagequill report.html --page-size LETTER --footer-height 40
    pagequill report.html --json
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

from .config import CM, PageSize, PageTemplate
from .engine import DocumentLayout, PaginationEngine, ReportLabOracle
from .exceptions import PagequillError
from .parser import parse_file
from .renderers import PdfRenderer
from .version import __version__


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="pagequill",
        description="pagequill - paginate HTML content into fixed-size pages",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  pagequill report.html -o report.pdf
  pagequill report.html --page-size A5 --header-height 30
  pagequill report.html --json
        """,
    )
    parser.add_argument("input", help="Input HTML file")
    parser.add_argument(
        "-o", "--output",
        help="Output PDF path (default: input name with .pdf extension)"
    )
    parser.add_argument(
        "--page-size",
        choices=[size.name for size in PageSize],
        default=PageSize.A4.name,
        help="Page size (default: A4)"
    )
    parser.add_argument(
        "--header-height",
        type=float,
        default=2 * CM,
        help="Header height in points (default: 2cm)"
    )
    parser.add_argument(
        "--footer-height",
        type=float,
        default=2 * CM,
        help="Footer height in points (default: 2cm)"
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print a JSON page summary instead of writing a PDF"
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable debug logging"
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"pagequill {__version__}"
    )
    return parser


def configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(name)s - %(levelname)s - %(message)s",
    )


def summarize(pages, overflows) -> dict:
    """Build a JSON-serialisable summary of paginated pages."""
    overflow_pages = sorted({record.page_number for record in overflows})
    return {
        "total_pages": len(pages),
        "overflow_pages": overflow_pages,
        "pages": [
            {
                "number": page.number,
                "classes": list(page.classes),
                "content_height": round(page.content_height, 2),
                "units": len(page.content.leaves()),
                "header": page.header.inner_text().strip(),
                "footer": page.footer.inner_text().strip(),
            }
            for page in pages
        ],
    }


def cmd_render(args) -> int:
    """Paginate the input file and write the result."""
    input_path = Path(args.input)
    if not input_path.exists():
        print(f"Error: File not found: {input_path}", file=sys.stderr)
        return 1

    template = PageTemplate.from_page_size(
        PageSize[args.page_size],
        header_height=args.header_height,
        footer_height=args.footer_height,
    )
    oracle = ReportLabOracle(default_width=template.width)

    source = parse_file(input_path)
    engine = PaginationEngine(source, layout=DocumentLayout(oracle, template))
    pages = engine.render()

    if args.json:
        print(json.dumps(summarize(pages, engine.overflows), indent=2, ensure_ascii=False))
        return 0

    output_path = Path(args.output) if args.output else input_path.with_suffix(".pdf")
    PdfRenderer(oracle).render(pages, output_path)
    print(f"Saved {len(pages)} page(s): {output_path}")
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """CLI entry point."""
    args = create_parser().parse_args(argv)
    configure_logging(args.verbose)

    try:
        return cmd_render(args)
    except PagequillError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
