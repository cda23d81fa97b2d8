"""
Tracks box nesting levels during pagination to restore the hierarchy on page breaks.

Handles the table special case: a table body repeats its header row group at
the top of every page it continues on.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, List

from ..model.box import Box
from ..model.style import TABLE_HEADER_GROUP, TABLE_ROW_GROUP

if TYPE_CHECKING:
    from .page_factory import Page

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class AncestryFrame:
    """One open ancestor and the siblings re-emitted around its clone."""
    main: Box
    before: List[Box] = field(default_factory=list)
    after: List[Box] = field(default_factory=list)


class AncestryTracker:
    """Stack of open ancestors between the insertion point and the content region."""

    def __init__(self):
        self.frames: List[AncestryFrame] = []

    @property
    def depth(self) -> int:
        return len(self.frames)

    def push(self, node: Box) -> AncestryFrame:
        """
        Push a box onto the level stack.

        For table bodies, also captures the header row group so it is repeated
        on every page the body continues on.

        Args:
            node: Source box being descended into

        Returns:
            The new frame
        """
        before: List[Box] = []
        after: List[Box] = []

        if node.style.display == TABLE_ROW_GROUP:
            self._handle_tables(before, node, after)

        frame = AncestryFrame(main=node, before=before, after=after)
        self.frames.append(frame)
        return frame

    def pop(self) -> AncestryFrame:
        return self.frames.pop()

    def render_levels(self, page: "Page") -> Box:
        """
        Rebuild the open hierarchy on a new page.

        Args:
            page: Page whose content region receives the clones

        Returns:
            Innermost clone, where insertion continues
        """
        target = page.content

        for frame in self.frames:
            for before_box in frame.before:
                target.append(before_box.clone(deep=True))

            new_target = frame.main.clone(deep=False)
            target.append(new_target)

            for after_box in frame.after:
                target.append(after_box.clone(deep=True))

            target = new_target

        if self.frames:
            logger.debug(f"Restored {len(self.frames)} ancestor level(s) on page {page.number}")
        return target

    def _handle_tables(self, before: List[Box], node: Box, after: List[Box]) -> None:
        # Nearest preceding thead still displayed as a header group
        for sibling in node.previous_siblings():
            if sibling.tag == "thead" and sibling.style.display == TABLE_HEADER_GROUP:
                before.append(sibling)
                break
