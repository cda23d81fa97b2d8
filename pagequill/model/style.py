"""
Computed style and break directives for boxes.

Handles the small subset of CSS the paginator reads: display roles,
fragmentation (break-*) properties, fixed sizes and font metrics used by
the text measuring oracle.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, replace
from typing import Any, Dict, Optional

logger = logging.getLogger(__name__)

TEXT_TAG = "#text"

# Display roles
BLOCK = "block"
INLINE = "inline"
NONE = "none"
TABLE = "table"
TABLE_HEADER_GROUP = "table-header-group"
TABLE_ROW_GROUP = "table-row-group"
TABLE_FOOTER_GROUP = "table-footer-group"
TABLE_ROW = "table-row"
TABLE_CELL = "table-cell"

DEFAULT_DISPLAY: Dict[str, str] = {
    TEXT_TAG: INLINE,
    "table": TABLE,
    "thead": TABLE_HEADER_GROUP,
    "tbody": TABLE_ROW_GROUP,
    "tfoot": TABLE_FOOTER_GROUP,
    "tr": TABLE_ROW,
    "td": TABLE_CELL,
    "th": TABLE_CELL,
    "span": INLINE,
    "a": INLINE,
    "b": INLINE,
    "strong": INLINE,
    "i": INLINE,
    "em": INLINE,
    "u": INLINE,
    "small": INLINE,
    "sub": INLINE,
    "sup": INLINE,
    "code": INLINE,
    "paginate-target": INLINE,
    "paginate-source": NONE,
}

FORCED_BREAK_VALUES = frozenset({"page", "always", "left", "right", "recto", "verso", "all"})
AVOID_BREAK_VALUES = frozenset({"avoid", "avoid-page"})

# Boolean attributes understood in place of break styles
BREAK_BEFORE_ATTRIBUTE = "breakbefore"
BREAK_AFTER_ATTRIBUTE = "breakafter"
NO_BREAK_ATTRIBUTE = "nobreak"

_LENGTH_PATTERN = re.compile(r"^\s*(-?\d+(?:\.\d+)?|-?\.\d+)\s*(pt|px|mm|cm|in)?\s*$", re.IGNORECASE)

# Conversion factors to points
_UNIT_TO_POINTS = {
    "pt": 1.0,
    "px": 0.75,
    "mm": 72.0 / 25.4,
    "cm": 72.0 / 2.54,
    "in": 72.0,
}


def parse_length(value: Any) -> Optional[float]:
    """
    Parse a CSS length into points.

    Args:
        value: Length such as ``"12px"``, ``"2cm"`` or a bare number (points)

    Returns:
        Length in points, or None when the value is not an absolute length
    """
    if value is None:
        return None
    if isinstance(value, (int, float)):
        return float(value)

    match = _LENGTH_PATTERN.match(str(value))
    if not match:
        return None
    number = float(match.group(1))
    unit = (match.group(2) or "pt").lower()
    return number * _UNIT_TO_POINTS[unit]


def default_display(tag: str) -> str:
    return DEFAULT_DISPLAY.get(tag.lower(), BLOCK)


@dataclass(slots=True)
class ComputedStyle:
    """Resolved style values of a single box."""

    display: str = BLOCK
    break_before: str = "auto"
    break_after: str = "auto"
    break_inside: str = "auto"
    height: Optional[float] = None
    max_height: Optional[float] = None
    width: Optional[float] = None
    font_name: Optional[str] = None
    font_size: Optional[float] = None
    line_height: Optional[float] = None

    @classmethod
    def for_tag(cls, tag: str) -> "ComputedStyle":
        return cls(display=default_display(tag))

    @classmethod
    def from_declarations(cls, tag: str, css_text: Optional[str]) -> "ComputedStyle":
        """
        Build a style from a tag default and an inline ``style`` attribute.

        Args:
            tag: Tag name used to pick the default display role
            css_text: Declarations such as ``"break-before: page; height: 20px"``

        Returns:
            ComputedStyle with recognised declarations applied
        """
        style = cls.for_tag(tag)
        for prop, value in parse_declarations(css_text).items():
            style.apply(prop, value)
        return style

    def apply(self, prop: str, value: str) -> None:
        """Apply one CSS declaration; unknown properties are ignored."""
        value = value.strip()
        lowered = value.lower()

        if prop == "display":
            self.display = lowered
        elif prop in ("break-before", "page-break-before"):
            self.break_before = lowered
        elif prop in ("break-after", "page-break-after"):
            self.break_after = lowered
        elif prop in ("break-inside", "page-break-inside"):
            self.break_inside = lowered
        elif prop == "height":
            self.height = parse_length(value)
        elif prop == "max-height":
            self.max_height = parse_length(value)
        elif prop == "width":
            self.width = parse_length(value)
        elif prop == "font-size":
            self.font_size = parse_length(value)
        elif prop == "font-family":
            family = value.split(",")[0].strip().strip("\"'")
            if family:
                self.font_name = family
        elif prop == "line-height":
            # Unitless values are multipliers of the font size
            try:
                self.line_height = float(value)
            except ValueError:
                length = parse_length(value)
                if length is not None and self.font_size:
                    self.line_height = length / self.font_size
        else:
            logger.debug(f"Ignoring unsupported style property: {prop}")

    def copy(self) -> "ComputedStyle":
        return replace(self)


def parse_declarations(css_text: Optional[str]) -> Dict[str, str]:
    """Split ``"a: b; c: d"`` into an ordered property map."""
    declarations: Dict[str, str] = {}
    if not css_text:
        return declarations

    for declaration in css_text.split(";"):
        declaration = declaration.strip()
        if not declaration or ":" not in declaration:
            continue
        prop, value = declaration.split(":", 1)
        declarations[prop.strip().lower()] = value.strip()
    return declarations


@dataclass(frozen=True, slots=True)
class BreakDirectives:
    """Boolean view of a box's fragmentation properties."""

    before: bool = False
    avoid_inside: bool = False
    after: bool = False

    @classmethod
    def from_box(cls, box: Any) -> "BreakDirectives":
        """
        Read break directives from a box's style and break attributes.

        Args:
            box: Box with ``style`` and ``attributes``

        Returns:
            BreakDirectives for the box
        """
        style = box.style
        attributes = box.attributes
        return cls(
            before=style.break_before in FORCED_BREAK_VALUES or BREAK_BEFORE_ATTRIBUTE in attributes,
            avoid_inside=style.break_inside in AVOID_BREAK_VALUES or NO_BREAK_ATTRIBUTE in attributes,
            after=style.break_after in FORCED_BREAK_VALUES or BREAK_AFTER_ATTRIBUTE in attributes,
        )
