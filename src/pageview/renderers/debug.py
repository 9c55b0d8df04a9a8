"""
Diagnostic renderers.

They show the document tree itself instead of its reading layout:
- tree-data: indented tree, one node per line, with the full payload
- tree-raw: indented tree with index and variant name only
- node-raw: flat node table with parent and child indices

Lines still wrap at the requested width and words still carry node indices,
so selection and scrolling keep working while a diagnostic mode is active.
"""

from __future__ import annotations

from ..config import LayoutConfig
from ..document import Document, Link, is_linkable
from ..layout import LineBuilder, RenderedDocument
from ..theme import Theme
from .base import RenderMode, RenderStrategy, registry

TREE_INDENT = 2


def describe(document: Document, index: int) -> str:
    """Variant name, with the link kind for links (e.g. 'Link(ExternalLink)')."""
    data = document.data(index)
    name = type(data).__name__
    if isinstance(data, Link):
        return f"{name}({type(data.target).__name__})"
    return name


class _DumpRenderer(RenderStrategy):
    """One line (possibly wrapped) per node, in document order."""

    indented = True

    def label(self, document: Document, index: int) -> str:
        raise NotImplementedError

    def render(
        self,
        document: Document,
        width: int,
        theme: Theme,
        layout: LayoutConfig,
    ) -> RenderedDocument:
        builder = LineBuilder(width)
        for index in range(len(document)):
            builder.break_line()
            builder.indent = document.depth(index) * TREE_INDENT if self.indented else 0
            linkable = is_linkable(document.data(index))
            if linkable:
                builder.begin_link(index)
            builder.add_text(self.label(document, index), theme.debug, index)
            if linkable:
                builder.end_link(index)
        return builder.finish()


class TreeDataRenderer(_DumpRenderer):
    @property
    def mode(self) -> RenderMode:
        return RenderMode.TREE_DATA

    def label(self, document: Document, index: int) -> str:
        return repr(document.data(index))


class TreeRawRenderer(_DumpRenderer):
    @property
    def mode(self) -> RenderMode:
        return RenderMode.TREE_RAW

    def label(self, document: Document, index: int) -> str:
        return f"{index} {describe(document, index)}"


class NodeRawRenderer(_DumpRenderer):
    indented = False

    @property
    def mode(self) -> RenderMode:
        return RenderMode.NODE_RAW

    def label(self, document: Document, index: int) -> str:
        parent = document.parent(index)
        children = ",".join(str(c) for c in document.children(index)) or "-"
        parent_label = "-" if parent is None else str(parent)
        return f"{index}: {describe(document, index)} parent={parent_label} children={children}"


# Register the strategies
registry.register(TreeDataRenderer())
registry.register(TreeRawRenderer())
registry.register(NodeRawRenderer())
