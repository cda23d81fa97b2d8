"""
Renderers writing paginated pages to output formats.
"""

from .pdf_renderer import PdfRenderer

__all__ = ["PdfRenderer"]
