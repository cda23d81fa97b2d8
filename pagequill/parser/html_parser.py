"""
HTML parser building the source tree for pagination.

Converts HTML markup into a Box tree. The content to paginate is taken from
the first ``<template>`` element, else from ``<body>``, else the whole
document. Inline ``style`` attributes are resolved into ComputedStyle.
"""

from __future__ import annotations

import logging
from html.parser import HTMLParser
from pathlib import Path
from typing import List, Optional, Set, Union

from ..exceptions import ParsingError
from ..model.box import Box
from ..model.style import INLINE, ComputedStyle, parse_length

logger = logging.getLogger(__name__)

VOID_TAGS = frozenset({"img", "br", "hr", "input", "meta", "link", "source", "col", "wbr"})
SKIPPED_TAGS = frozenset({"head", "style", "script", "title", "noscript"})
TABLE_SECTION_TAGS = frozenset({"thead", "tbody", "tfoot"})


class SourceTreeBuilder(HTMLParser):
    """Streaming HTML handler producing a Box tree."""

    def __init__(self):
        super().__init__(convert_charrefs=True)
        self.root = Box("#document")
        self.stack: List[Box] = [self.root]
        self.skip_depth = 0
        self.implicit_bodies: Set[Box] = set()

    def handle_starttag(self, tag: str, attrs: list) -> None:
        tag = tag.lower()
        if self.skip_depth or tag in SKIPPED_TAGS:
            if tag not in VOID_TAGS:
                self.skip_depth += 1
            return

        attributes = {name.lower(): (value if value is not None else "") for name, value in attrs}
        self._open_table_section(tag)
        box = Box(tag, attributes, style=ComputedStyle.from_declarations(tag, attributes.get("style")))

        # Presentational size attributes (pixels)
        if tag == "img":
            for name in ("width", "height"):
                length = parse_length(f"{attributes[name]}px") if attributes.get(name) else None
                if length is not None and getattr(box.style, name) is None:
                    setattr(box.style, name, length)

        self.stack[-1].append(box)
        if tag not in VOID_TAGS:
            self.stack.append(box)

    def _open_table_section(self, tag: str) -> None:
        top = self.stack[-1]
        # Rows directly under a table live in an implied tbody, as in browsers
        if tag == "tr" and top.tag == "table":
            body = Box("tbody")
            top.append(body)
            self.stack.append(body)
            self.implicit_bodies.add(body)
        elif tag in TABLE_SECTION_TAGS and top in self.implicit_bodies:
            self.stack.pop()

    def handle_startendtag(self, tag: str, attrs: list) -> None:
        self.handle_starttag(tag, attrs)
        if tag.lower() not in VOID_TAGS:
            self.handle_endtag(tag)

    def handle_endtag(self, tag: str) -> None:
        tag = tag.lower()
        if self.skip_depth:
            if tag not in VOID_TAGS:
                self.skip_depth -= 1
            return
        if tag in VOID_TAGS:
            return

        # Close up to the matching open element; stray end tags are ignored
        for depth in range(len(self.stack) - 1, 0, -1):
            if self.stack[depth].tag == tag:
                del self.stack[depth:]
                return
        logger.debug(f"Ignoring unmatched end tag </{tag}>")

    def handle_data(self, data: str) -> None:
        if self.skip_depth:
            return
        parent = self.stack[-1]
        if not data.strip():
            # Whitespace only matters between inline siblings
            previous = parent.children[-1] if parent.children else None
            if previous is None or not (previous.is_text or previous.style.display == INLINE):
                return
        parent.append(Box.text_node(data))


def parse_html(html_content: str) -> Box:
    """
    Parse HTML into a source tree.

    Args:
        html_content: HTML markup

    Returns:
        Box whose children are the content to paginate
    """
    builder = SourceTreeBuilder()
    builder.feed(html_content)
    builder.close()

    document = builder.root
    for tag in ("template", "body"):
        found = _find_first(document, tag)
        if found is not None:
            logger.debug(f"Using <{tag}> as source root")
            return found
    return document


def parse_file(html_path: Union[str, Path]) -> Box:
    """
    Parse an HTML file into a source tree.

    Args:
        html_path: Path to the HTML file

    Returns:
        Source tree root

    Raises:
        ParsingError: If the file cannot be read
    """
    html_path = Path(html_path)
    try:
        html_content = html_path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ParsingError(f"Cannot read HTML file {html_path}", str(exc)) from exc
    return parse_html(html_content)


def _find_first(root: Box, tag: str) -> Optional[Box]:
    for box in root.iter():
        if box.tag == tag:
            return box
    return None
