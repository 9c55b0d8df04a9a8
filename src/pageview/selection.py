"""
Selection of linkable elements.

The selection is an inclusive index range (first, last) spanning one node and
all of its descendants, so a link whose text is nested in emphasis nodes is
selected as a single unit. Navigation only ever lands on Link nodes and
follows document order.

Failing to find a target is not an error: the operation logs and leaves the
selection as it was.
"""

from __future__ import annotations

import logging

from .document import Document, is_linkable

logger = logging.getLogger(__name__)

Selection = tuple[int, int]


class SelectionController:
    def __init__(self, document: Document):
        self._document = document
        self._selected: Selection | None = None

    @property
    def selected(self) -> Selection | None:
        return self._selected

    @property
    def first(self) -> int | None:
        return None if self._selected is None else self._selected[0]

    def clear(self) -> None:
        self._selected = None

    def contains(self, index: int) -> bool:
        """Whether node index falls inside the selected range."""
        if self._selected is None:
            return False
        first, last = self._selected
        return first <= index <= last

    def _links(self):
        return self._document.find(is_linkable)

    def select_by_index(self, index: int) -> bool:
        """
        Select the node at index together with its descendants.

        Returns True when the node exists (even if it was already selected).
        """
        last = self._document.last_descendant(index)
        if last is None:
            logger.warning("no node with index %d to select", index)
            return False
        self._selected = (index, last)
        return True

    def select_first(self) -> bool:
        """Select the first link of the document."""
        target = next(self._links(), None)
        if target is None:
            logger.info("document has no links to select")
            return False
        return self.select_by_index(target)

    def select_last(self) -> bool:
        """
        Select the last link after the current selection.

        Relative to the current selection rather than absolute, unlike
        select_first: with a link already selected this extends to the end.
        """
        end = -1 if self._selected is None else self._selected[1]
        target = None
        for index in self._links():
            if index > end:
                target = index
        if target is None:
            logger.info("no link after index %d", end)
            return False
        return self.select_by_index(target)

    def select_next(self) -> bool:
        """Select the first link after the end of the current selection."""
        end = -1 if self._selected is None else self._selected[1]
        target = next((i for i in self._links() if i > end), None)
        if target is None:
            logger.info("no link after index %d", end)
            return False
        return self.select_by_index(target)

    def select_prev(self) -> bool:
        """Select the last link before the start of the current selection."""
        if self._selected is None:
            logger.info("nothing selected, no previous link")
            return False
        start = self._selected[0]
        target = None
        for index in self._links():
            if index >= start:
                break
            target = index
        if target is None:
            logger.info("no link before index %d", start)
            return False
        return self.select_by_index(target)
