"""
Parsers turning markup into source trees.
"""

from .html_parser import SourceTreeBuilder, parse_file, parse_html

__all__ = [
    "SourceTreeBuilder",
    "parse_file",
    "parse_html",
]
