"""
Cross-reference resolver - decorates pages after pagination.

Main purpose:
- parse source boxes placed on each page
- carry references forward across pages
- add page numbers
- render header / footer placeholders
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Callable, Dict, List, Optional, Set

from ..model.box import Box

if TYPE_CHECKING:
    from .page_factory import Page

logger = logging.getLogger(__name__)

SOURCE_TAG = "paginate-source"
TARGET_TAG = "paginate-target"
KEY_ATTRIBUTE = "data-key"
STATUS_ATTRIBUTE = "data-status"
SOLVED = "solved"
EMPTY_KEY = "empty-key"

HEADER_KEY = "header"
FOOTER_KEY = "footer"
PAGE_NUMBER_KEY = "pageNumber"
TOTAL_PAGES_KEY = "totalPages"
RESERVED_KEYS = (PAGE_NUMBER_KEY, TOTAL_PAGES_KEY)

# Bounds on placeholder expansion per region
MAX_RESOLUTION_ROUNDS = 32
MAX_RESOLVED_TARGETS = 10000

ReferenceMap = Dict[str, Box]
Lookup = Callable[[str], Optional[Box]]


class CrossReferenceResolver:
    """
    Resolves named source boxes into target placeholders of headers and footers.
    """

    def __init__(self, pages: List["Page"]):
        self.pages = pages

    def decorate(self) -> None:
        """Decorate every page: references, page numbers, headers and footers."""
        own_maps = [self.parse_page(page) for page in self.pages]
        effective_maps = self.accumulate(own_maps)

        self.inject_page_numbers(own_maps, effective_maps)

        for index, page in enumerate(self.pages):
            self._render_page_header(index, page, own_maps, effective_maps)
            self._render_page_footer(page, own_maps[index])

        logger.info(f"Decorated {len(self.pages)} page(s)")

    def parse_page(self, page: "Page") -> ReferenceMap:
        """
        Collect the source boxes of a page's content region.

        Later sources override earlier ones with the same key; reserved and
        blank keys are ignored.

        Args:
            page: Page to search

        Returns:
            Mapping of key to source box
        """
        references: ReferenceMap = {}
        for source in page.content.find_all(SOURCE_TAG):
            key = source.get(KEY_ATTRIBUTE)
            if key and key.strip() and key not in RESERVED_KEYS:
                references[key] = source
        return references

    def accumulate(self, own_maps: List[ReferenceMap]) -> List[ReferenceMap]:
        """
        Carry references forward: a key stays visible until a later page redefines it.

        Args:
            own_maps: Per-page maps from parse_page()

        Returns:
            Effective map of every page
        """
        effective_maps: List[ReferenceMap] = []
        previous: ReferenceMap = {}
        for own in own_maps:
            current = {**previous, **own}
            effective_maps.append(current)
            previous = current
        return effective_maps

    def inject_page_numbers(self, *maps_per_page: List[ReferenceMap]) -> None:
        """
        Insert ``pageNumber`` and ``totalPages`` into every page's maps.

        Args:
            maps_per_page: One or more lists holding a map per page
        """
        total_pages = Box("span", children=[Box.text_node(str(len(self.pages)))])

        for index in range(len(self.pages)):
            page_number = Box("span", children=[Box.text_node(str(index + 1))])
            for maps in maps_per_page:
                maps[index][PAGE_NUMBER_KEY] = page_number
                maps[index][TOTAL_PAGES_KEY] = total_pages

    # ------------------------------------------------------------------

    def _render_page_header(
        self,
        index: int,
        page: "Page",
        own_maps: List[ReferenceMap],
        effective_maps: List[ReferenceMap],
    ) -> None:
        current = effective_maps[index]
        # A running header only shows what earlier pages already declared
        references = current if index == 0 else effective_maps[index - 1]

        if index == 0:
            header = self._first_source(page, HEADER_KEY)
        else:
            header = references.get(HEADER_KEY)
        if header is not None:
            self._fill(page.header, header)

        def lookup(key: str) -> Optional[Box]:
            if key in RESERVED_KEYS:
                return current.get(key)
            return references.get(key)

        self._resolve_targets(page.header, lookup, HEADER_KEY, page)

    def _render_page_footer(self, page: "Page", own: ReferenceMap) -> None:
        footer = own.get(FOOTER_KEY)
        if footer is not None:
            self._fill(page.footer, footer)

        self._resolve_targets(page.footer, own.get, FOOTER_KEY, page)

    def _resolve_targets(self, region: Box, lookup: Lookup, skip_key: str, page: "Page") -> None:
        """
        Resolve unsolved targets until none are left in the region.

        A target whose key already appears among the targets enclosing it
        would expand the same chain again; it resolves to empty content.
        The number of rounds and of resolved targets per region are bounded.
        """
        targets = self._unsolved_targets(region)
        rounds = 0
        resolved = 0
        cyclic: List[str] = []

        while targets:
            rounds += 1
            if rounds > MAX_RESOLUTION_ROUNDS or resolved + len(targets) > MAX_RESOLVED_TARGETS:
                logger.warning(
                    f"Page {page.number}: placeholder resolution stopped after {rounds - 1} round(s) "
                    f"and {resolved} target(s), clearing {len(targets)} target(s)"
                )
                for target in targets:
                    target.replace_children([])
                    target.set(STATUS_ATTRIBUTE, SOLVED)
                break

            for target in targets:
                key = target.get(KEY_ATTRIBUTE) or EMPTY_KEY

                if key in self._enclosing_keys(target, region):
                    cyclic.append(key)
                    target.replace_children([])
                # Resolving the region's own key would recurse forever
                elif key != skip_key:
                    value = lookup(key)
                    target.replace_children(
                        [child.clone(deep=True) for child in value.children] if value is not None else []
                    )

                target.set(STATUS_ATTRIBUTE, SOLVED)

            resolved += len(targets)
            targets = self._unsolved_targets(region)

        if cyclic:
            logger.warning(
                f"Page {page.number}: cyclic placeholder reference(s) cut off: {sorted(set(cyclic))}"
            )

    @staticmethod
    def _enclosing_keys(target: Box, region: Box) -> Set[str]:
        keys: Set[str] = set()
        current = target.parent
        while current is not None and current is not region:
            if current.tag == TARGET_TAG:
                keys.add(current.get(KEY_ATTRIBUTE) or EMPTY_KEY)
            current = current.parent
        return keys

    @staticmethod
    def _unsolved_targets(region: Box) -> List[Box]:
        return region.find_all(TARGET_TAG, lambda box: box.get(STATUS_ATTRIBUTE) != SOLVED)

    @staticmethod
    def _first_source(page: "Page", key: str) -> Optional[Box]:
        for source in page.content.find_all(SOURCE_TAG):
            if source.get(KEY_ATTRIBUTE) == key:
                return source
        return None

    @staticmethod
    def _fill(region: Box, source: Box) -> None:
        region.replace_children(child.clone(deep=True) for child in source.children)
