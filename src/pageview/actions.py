"""
Commands the surrounding shell sends to a PageSession, and what it gets back.

Key decoding lives in the shell; by the time a command arrives here it is
already one of the values below.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from .document import LinkTarget
from .renderers import RenderMode


class PageAction(Enum):
    SELECT_FIRST_LINK = "select-first-link"
    SELECT_LAST_LINK = "select-last-link"
    SELECT_NEXT_LINK = "select-next-link"
    SELECT_PREV_LINK = "select-prev-link"
    SELECT_TOP_LINK = "select-top-link"
    SELECT_BOTTOM_LINK = "select-bottom-link"
    SCROLL_HALF_UP = "scroll-half-up"
    SCROLL_HALF_DOWN = "scroll-half-down"
    SCROLL_TO_TOP = "scroll-to-top"
    SCROLL_TO_BOTTOM = "scroll-to-bottom"
    TOGGLE_CONTENTS = "toggle-contents"
    CYCLE_RENDERER = "cycle-renderer"
    ACTIVATE = "activate"


@dataclass(frozen=True)
class ScrollUp:
    amount: int | None = None  # None: navigation.scroll_amount


@dataclass(frozen=True)
class ScrollDown:
    amount: int | None = None  # None: navigation.scroll_amount


@dataclass(frozen=True)
class GoToHeader:
    anchor: str


@dataclass(frozen=True)
class SwitchRenderer:
    mode: RenderMode


@dataclass(frozen=True)
class Resize:
    width: int
    height: int


Action = PageAction | ScrollUp | ScrollDown | GoToHeader | SwitchRenderer | Resize


class ActivationKind(Enum):
    NAVIGATE = "navigate"  # another page
    JUMP = "jump"  # a header of this page
    EXTERNAL = "external"  # a URL outside the wiki
    MISSING = "missing"  # red link, page doesn't exist yet
    UNSUPPORTED = "unsupported"  # media and cross-wiki links
    NOT_A_LINK = "not-a-link"


@dataclass(frozen=True)
class LinkActivation:
    """What activating the selection means; the shell decides what to do with it."""
    kind: ActivationKind
    target: LinkTarget | None = None
    message: str = ""

    @property
    def title(self) -> str | None:
        return None if self.target is None else self.target.title


@dataclass(frozen=True)
class ActionResult:
    consumed: bool
    activation: LinkActivation | None = None

    @classmethod
    def ignored(cls) -> ActionResult:
        return cls(consumed=False)
