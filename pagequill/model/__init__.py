"""
Content model: boxes and their computed styles.
"""

from .box import Box
from .style import (
    BreakDirectives,
    ComputedStyle,
    parse_declarations,
    parse_length,
)

__all__ = [
    "Box",
    "BreakDirectives",
    "ComputedStyle",
    "parse_declarations",
    "parse_length",
]
