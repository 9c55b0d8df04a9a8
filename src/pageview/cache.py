"""
Render cache: one RenderedDocument per display width.

Terminal resizes produce only a handful of distinct widths per session, so by
default entries are never evicted. A positive max_entries bounds the cache
with least-recently-used eviction.

Invalidation (document or render mode change) drops every entry and notifies
listeners; the session uses this to clear the selection, whose node-to-line
mapping no longer holds.
"""

from __future__ import annotations

import logging
from collections import OrderedDict
from collections.abc import Callable

from .config import LayoutConfig
from .document import Document
from .layout import RenderedDocument
from .renderers import RenderMode, registry
from .theme import Theme

logger = logging.getLogger(__name__)


class RenderCache:
    def __init__(
        self,
        document: Document,
        theme: Theme | None = None,
        layout: LayoutConfig | None = None,
        mode: RenderMode = RenderMode.DEFAULT,
        max_entries: int = 0,
    ):
        self._document = document
        self._theme = theme or Theme()
        self._layout = layout or LayoutConfig()
        self._mode = mode
        self._max_entries = max(0, max_entries)
        self._entries: OrderedDict[int, RenderedDocument] = OrderedDict()
        self._listeners: list[Callable[[], None]] = []

    @property
    def mode(self) -> RenderMode:
        return self._mode

    @property
    def document(self) -> Document:
        return self._document

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, width: object) -> bool:
        return width in self._entries

    def get(self, width: int) -> RenderedDocument | None:
        """Cached layout for width, without rendering on a miss."""
        return self._entries.get(width)

    def get_or_render(self, width: int) -> RenderedDocument:
        """Cached layout for width, rendered and stored on a miss."""
        rendered = self._entries.get(width)
        if rendered is not None:
            self._entries.move_to_end(width)
            return rendered

        logger.debug("rendering %s layout for width %d", self._mode.value, width)
        strategy = registry.get(self._mode)
        rendered = strategy.render(self._document, width, self._theme, self._layout)
        self._entries[width] = rendered

        if self._max_entries and len(self._entries) > self._max_entries:
            evicted, _ = self._entries.popitem(last=False)
            logger.debug("evicted cached layout for width %d", evicted)

        return rendered

    def add_listener(self, callback: Callable[[], None]) -> None:
        """Call callback after every invalidation."""
        self._listeners.append(callback)

    def invalidate_all(self) -> None:
        """Drop every cached layout and notify listeners."""
        logger.debug("flushing %d cached renders", len(self._entries))
        self._entries.clear()
        for callback in self._listeners:
            callback()

    def set_mode(self, mode: RenderMode) -> None:
        """Switch render mode; always invalidates."""
        self._mode = mode
        self.invalidate_all()
