"""
Navigation session for one displayed document.

Owns the document, its render cache, the selection, the viewport and the
contents index, and keeps selection and viewport consistent:

- after a selection change the viewport scrolls just enough to show the
  selected element (selection -> viewport)
- after a scroll, a selection that left the viewport snaps to the nearest
  visible link (viewport -> selection)

Each operation runs at most one pass in the opposite direction. Both passes
are idempotent: running either again right after changes nothing.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from .actions import (
    Action,
    ActionResult,
    ActivationKind,
    GoToHeader,
    LinkActivation,
    PageAction,
    Resize,
    ScrollDown,
    ScrollUp,
    SwitchRenderer,
)
from .cache import RenderCache
from .config import Config, get_config
from .contents import ContentsCursor, ContentsIndex
from .document import (
    AnchorLink,
    Document,
    ExternalLink,
    InternalLink,
    InterwikiLink,
    Link,
    MediaLink,
    RedLink,
)
from .layout import Line, RenderedDocument
from .renderers import RenderMode
from .selection import Selection, SelectionController
from .theme import Theme
from .viewport import Viewport

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ScrollState:
    """What a scroll indicator needs."""
    y: int
    height: int
    total_lines: int


class PageSession:
    def __init__(self, document: Document, config: Config | None = None):
        self.config = config or get_config()
        self.theme = Theme.from_config(self.config.theme)
        self.viewport = Viewport()
        self.is_contents = False
        self._reset(document)

    def _reset(self, document: Document) -> None:
        nav = self.config.navigation
        self.document = document
        self.selection = SelectionController(document)
        self.cache = RenderCache(
            document,
            theme=self.theme,
            layout=self.config.layout,
            max_entries=self.config.cache.max_entries,
        )
        self.cache.add_listener(self.selection.clear)
        self.contents = ContentsIndex.from_document(
            document, include_top=nav.include_top_section, top_anchor=nav.top_anchor
        )
        self.contents_cursor = ContentsCursor(len(self.contents))

    def load(self, document: Document) -> None:
        """Replace the document; tree, cache, selection and scroll start over together."""
        logger.debug("loading document with %d nodes", len(document))
        self._reset(document)
        self.viewport.y = 0
        self.is_contents = False

    # Layout access

    @property
    def selected(self) -> Selection | None:
        return self.selection.selected

    @property
    def mode(self) -> RenderMode:
        return self.cache.mode

    def rendered(self) -> RenderedDocument:
        """Layout for the current viewport width."""
        return self.cache.get_or_render(self.viewport.width)

    def _clamped(self) -> RenderedDocument:
        """Layout for the current width, with y re-clamped after a resize."""
        rendered = self.rendered()
        if self.viewport.clamp(rendered.line_count):
            self._follow_viewport()
        return rendered

    def visible_lines(self) -> tuple[Line, ...]:
        """Lines inside the viewport, re-clamping first if the layout changed."""
        rendered = self._clamped()
        return rendered.lines[self.viewport.top:self.viewport.bottom]

    def scroll_state(self) -> ScrollState:
        rendered = self._clamped()
        return ScrollState(self.viewport.y, self.viewport.height, rendered.line_count)

    def selected_y(self) -> int | None:
        """Line of the first word of the selection, if it is laid out."""
        if self.selection.selected is None:
            return None
        return self.rendered().line_of(*self.selection.selected)

    # Synchronization

    def _reveal_selection(self) -> None:
        """Scroll the minimum needed to show the selection."""
        y = self.selected_y()
        if y is None or self.viewport.height <= 0:
            return
        total = self.rendered().line_count
        if y < self.viewport.top:
            self.viewport.scroll_to_line(y, total)
        elif y >= self.viewport.bottom:
            self.viewport.scroll_to_line(y - self.viewport.height + 1, total)

    def _follow_viewport(self) -> None:
        """
        Snap a selection that left the viewport to a visible link.

        Scrolled down past it: the first visible link. Scrolled up past it:
        the last one. Without visible links the selection stays off-screen.
        """
        y = self.selected_y()
        if y is None or self.viewport.height <= 0 or self.viewport.contains(y):
            return
        visible = self.rendered().links_within(self.viewport.top, self.viewport.bottom)
        if not visible:
            logger.debug("no link in lines %d..%d, selection stays", self.viewport.top, self.viewport.bottom)
            return
        _, index = visible[0] if y < self.viewport.top else visible[-1]
        self.selection.select_by_index(index)

    # Scrolling

    def scroll_to_line(self, y: int) -> None:
        self.viewport.scroll_to_line(y, self.rendered().line_count)
        self._follow_viewport()

    def scroll_up(self, amount: int) -> None:
        if self.is_contents:
            self.contents_cursor.up()
            return
        self.scroll_to_line(self.viewport.y - amount)

    def scroll_down(self, amount: int) -> None:
        if self.is_contents:
            self.contents_cursor.down()
            return
        self.scroll_to_line(self.viewport.y + amount)

    def scroll_to_top(self) -> None:
        self.scroll_to_line(0)

    def scroll_to_bottom(self) -> None:
        self.scroll_to_line(self.rendered().line_count)

    def scroll_to_node(self, index: int) -> bool:
        """Scroll so the first line of node index (or its subtree) is the top line."""
        last = self.document.last_descendant(index)
        if last is None:
            return False
        y = self.rendered().line_of(index, last)
        if y is None:
            logger.warning("node %d is not part of the current layout", index)
            return False
        self.scroll_to_line(y)
        return True

    def resize(self, width: int, height: int) -> None:
        """New display size; the layout for the new width is built on next access."""
        self.viewport.resize(width, height)

    # Selection

    def _selected(self, found: bool) -> bool:
        if found:
            self._reveal_selection()
        return found

    def select_first(self) -> bool:
        return self._selected(self.selection.select_first())

    def select_last(self) -> bool:
        return self._selected(self.selection.select_last())

    def select_next(self) -> bool:
        return self._selected(self.selection.select_next())

    def select_prev(self) -> bool:
        return self._selected(self.selection.select_prev())

    def select_by_index(self, index: int) -> bool:
        return self._selected(self.selection.select_by_index(index))

    def select_top(self) -> bool:
        """Select the first link inside the viewport."""
        visible = self.rendered().links_within(self.viewport.top, self.viewport.bottom)
        if not visible:
            logger.info("no link in the viewport")
            return False
        return self.select_by_index(visible[0][1])

    def select_bottom(self) -> bool:
        """Select the last link inside the viewport."""
        visible = self.rendered().links_within(self.viewport.top, self.viewport.bottom)
        if not visible:
            logger.info("no link in the viewport")
            return False
        return self.select_by_index(visible[-1][1])

    def select_by_anchor(self, anchor: str) -> bool:
        """
        Jump to the header carrying anchor.

        The top anchor has no node behind it and simply scrolls to line 0.
        """
        if anchor == self.config.navigation.top_anchor:
            logger.info("special case: jumping to top")
            self.scroll_to_top()
            return True

        index = self.contents.resolve(anchor)
        if index is None:
            logger.warning("no header with the anchor '%s' could be found", anchor)
            return False
        return self.scroll_to_node(index)

    # Contents

    def toggle_contents(self) -> None:
        self.is_contents = not self.is_contents

    def open_contents_selection(self) -> bool:
        """Jump to the section under the contents cursor and focus the page."""
        anchor = self.contents.anchor_at(self.contents_cursor.position)
        if anchor is None:
            logger.info("no header selected")
            return False
        found = self.select_by_anchor(anchor)
        self.is_contents = False
        return found

    # Rendering modes

    def switch_renderer(self, mode: RenderMode) -> None:
        """Change rendering mode; drops cached layouts and the selection."""
        logger.debug("switching renderer to %s", mode.value)
        self.cache.set_mode(mode)

    def cycle_renderer(self) -> None:
        self.switch_renderer(self.mode.next(self.config.navigation.debug_renderers))

    # Activation

    def activate(self) -> LinkActivation:
        """Classify the selected link for the shell."""
        if self.selection.first is None:
            logger.info("nothing selected to open")
            return LinkActivation(ActivationKind.NOT_A_LINK)

        data = self.document.data(self.selection.first)
        if not isinstance(data, Link):
            logger.warning("tried to open an element that is not a link")
            return LinkActivation(ActivationKind.NOT_A_LINK)

        target = data.target
        match target:
            case InternalLink(title=title):
                return LinkActivation(
                    ActivationKind.NAVIGATE, target,
                    f"Do you want to open the page '{title}'",
                )
            case AnchorLink(title=title):
                return LinkActivation(
                    ActivationKind.JUMP, target,
                    f"Do you want to jump to the section '{title}'",
                )
            case ExternalLink(url=url):
                return LinkActivation(
                    ActivationKind.EXTERNAL, target,
                    "This link doesn't point to another page. \n"
                    f"Instead, it leads to the following external webpage: \n\n{url}",
                )
            case RedLink(title=title):
                return LinkActivation(
                    ActivationKind.MISSING, target,
                    f"The page '{title}' doesn't exist yet",
                )
            case MediaLink() | InterwikiLink():
                logger.info("tried to open an unsupported link '%r'", target)
                return LinkActivation(
                    ActivationKind.UNSUPPORTED, target,
                    "This type of link is not supported yet",
                )
            case _:
                raise TypeError(f"unknown link target {target!r}")

    # Commands

    def dispatch(self, action: Action) -> ActionResult:
        """Apply one command from the shell."""
        match action:
            case ScrollUp(amount=amount):
                self.scroll_up(amount or self.config.navigation.scroll_amount)
            case ScrollDown(amount=amount):
                self.scroll_down(amount or self.config.navigation.scroll_amount)
            case GoToHeader(anchor=anchor):
                self.select_by_anchor(anchor)
            case SwitchRenderer(mode=mode):
                self.switch_renderer(mode)
            case Resize(width=width, height=height):
                self.resize(width, height)
            case PageAction.SCROLL_HALF_UP:
                self.scroll_up(self.viewport.half_page)
            case PageAction.SCROLL_HALF_DOWN:
                self.scroll_down(self.viewport.half_page)
            case PageAction.SCROLL_TO_TOP:
                self.scroll_to_top()
            case PageAction.SCROLL_TO_BOTTOM:
                self.scroll_to_bottom()
            case PageAction.SELECT_FIRST_LINK:
                self.select_first()
            case PageAction.SELECT_LAST_LINK:
                self.select_last()
            case PageAction.SELECT_NEXT_LINK:
                self.select_next()
            case PageAction.SELECT_PREV_LINK:
                self.select_prev()
            case PageAction.SELECT_TOP_LINK:
                self.select_top()
            case PageAction.SELECT_BOTTOM_LINK:
                self.select_bottom()
            case PageAction.TOGGLE_CONTENTS:
                self.toggle_contents()
            case PageAction.CYCLE_RENDERER:
                self.cycle_renderer()
            case PageAction.ACTIVATE:
                if self.is_contents:
                    if not self.open_contents_selection():
                        return ActionResult.ignored()
                    return ActionResult(consumed=True)
                activation = self.activate()
                if activation.kind is ActivationKind.NOT_A_LINK:
                    return ActionResult.ignored()
                return ActionResult(consumed=True, activation=activation)
            case _:
                return ActionResult.ignored()
        return ActionResult(consumed=True)

    def is_selected(self, index: int) -> bool:
        """Whether words of node index should get the selection highlight."""
        return self.selection.contains(index)
