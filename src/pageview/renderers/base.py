"""
Base renderer interface and registry.

Each rendering mode is implemented by one strategy. The default strategy lays
out the document for reading; the others dump the tree for diagnostics. All of
them produce a RenderedDocument, so switching modes never changes what the
rest of the package sees.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from enum import Enum

from ..config import LayoutConfig
from ..document import Document
from ..layout import RenderedDocument
from ..theme import Theme


class RenderMode(Enum):
    DEFAULT = "default"
    TREE_DATA = "tree-data"
    TREE_RAW = "tree-raw"
    NODE_RAW = "node-raw"

    def next(self, debug: bool = False) -> RenderMode:
        """
        Mode to switch to when cycling.

        The diagnostic modes are only part of the cycle when debug is on;
        otherwise cycling stays on DEFAULT.
        """
        if not debug:
            return RenderMode.DEFAULT
        modes = list(RenderMode)
        return modes[(modes.index(self) + 1) % len(modes)]


class RenderStrategy(ABC):
    """Base class for renderers."""

    @property
    @abstractmethod
    def mode(self) -> RenderMode:
        """Mode this strategy implements."""
        ...

    @abstractmethod
    def render(
        self,
        document: Document,
        width: int,
        theme: Theme,
        layout: LayoutConfig,
    ) -> RenderedDocument:
        """
        Lay out document for width cells.

        Must be a pure function of its arguments: the same inputs give the
        same RenderedDocument.
        """
        ...


class RendererRegistry:
    """Registry of render strategies by mode."""

    def __init__(self):
        self._by_mode: dict[RenderMode, RenderStrategy] = {}

    def register(self, strategy: RenderStrategy) -> None:
        """Register a strategy. Later registrations replace earlier ones."""
        self._by_mode[strategy.mode] = strategy

    def get(self, mode: RenderMode) -> RenderStrategy:
        strategy = self._by_mode.get(mode)
        if strategy is None:
            raise KeyError(f"No renderer registered for mode {mode.value!r}")
        return strategy

    @property
    def modes(self) -> list[RenderMode]:
        return list(self._by_mode)


# Global registry instance
registry = RendererRegistry()
