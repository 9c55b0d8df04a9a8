"""
Default renderer: lays out a document for reading.

Structure:
- Headers sit between blank lines
- Paragraphs end with a blank line
- List items each start a line, indented per nesting level, with a hanging
  indent for wrapped continuation lines
- Emphasis and links only change the style of the words below them

The walk is iterative: every node is visited twice (enter, exit) from an
explicit stack, so the style and indentation stacks are pushed on enter and
popped on exit without recursion.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from rich.cells import cell_len
from rich.style import Style

from ..config import LayoutConfig
from ..document import (
    Division,
    Document,
    Emphasis,
    Header,
    Link,
    ListBlock,
    ListItem,
    Newline,
    Paragraph,
    Root,
    Text,
)
from ..layout import LineBuilder, RenderedDocument
from ..theme import EFFECT_STYLES, Theme
from .base import RenderMode, RenderStrategy, registry


@dataclass
class _ListFrame:
    ordered: bool
    counter: int = 0


@dataclass
class _Walk:
    """Mutable state of one layout pass."""
    document: Document
    builder: LineBuilder
    theme: Theme
    layout: LayoutConfig
    styles: list[Style] = field(default_factory=list)
    lists: list[_ListFrame] = field(default_factory=list)
    indents: list[int] = field(default_factory=list)

    def style(self) -> Style:
        return Style.combine([self.theme.text, *self.styles])

    def enter(self, index: int) -> None:
        builder = self.builder
        match self.document.data(index):
            case Root():
                pass
            case Header(text=text):
                builder.blank_line()
                self.styles.append(self.theme.header + Style(bold=True))
                if text:
                    builder.add_text(text, self.style(), index)
            case Paragraph():
                builder.break_line()
            case Text(contents=contents):
                builder.add_text(contents, self.style(), index)
            case Emphasis(effect=effect):
                self.styles.append(EFFECT_STYLES[effect])
            case Link(target=target) as link:
                self.styles.append(self.theme.link_style(target))
                builder.begin_link(index)
                if not self.document.children(index):
                    builder.add_text(link.title, self.style(), index)
            case ListBlock(ordered=ordered):
                builder.break_line()
                self.lists.append(_ListFrame(ordered))
            case ListItem():
                self._enter_item(index)
            case Division():
                builder.break_line()
            case Newline():
                builder.newline()

    def exit(self, index: int) -> None:
        builder = self.builder
        match self.document.data(index):
            case Header():
                self.styles.pop()
                builder.blank_line()
            case Paragraph():
                builder.blank_line()
            case Emphasis():
                self.styles.pop()
            case Link():
                builder.end_link(index)
                self.styles.pop()
            case ListBlock():
                self.lists.pop()
                if self.lists:
                    builder.break_line()
                else:
                    builder.blank_line()
            case ListItem():
                builder.break_line()
                builder.indent = self.indents.pop()
            case Division():
                builder.break_line()
            case _:
                pass

    def _enter_item(self, index: int) -> None:
        builder = self.builder
        builder.break_line()
        # A stray item outside any list renders as a top-level bullet
        frame = self.lists[-1] if self.lists else _ListFrame(ordered=False)
        frame.counter += 1
        depth = max(1, len(self.lists))

        prefix = f"{frame.counter}." if frame.ordered else self.layout.bullet
        base = depth * self.layout.list_indent

        self.indents.append(builder.indent)
        builder.indent = base
        builder.add_word(prefix, Style.combine([self.theme.bullet, *self.styles]), index)
        builder.indent = base + cell_len(prefix) + 1


def render_document(
    document: Document,
    width: int,
    theme: Theme | None = None,
    layout: LayoutConfig | None = None,
) -> RenderedDocument:
    """Lay out document at width using the default reading layout."""
    walk = _Walk(
        document=document,
        builder=LineBuilder(width),
        theme=theme or Theme(),
        layout=layout or LayoutConfig(),
    )
    if not len(document):
        return walk.builder.finish()

    # (index, entering)
    stack: list[tuple[int, bool]] = [(0, True)]
    while stack:
        index, entering = stack.pop()
        if not entering:
            walk.exit(index)
            continue
        walk.enter(index)
        stack.append((index, False))
        for child in reversed(document.children(index)):
            stack.append((child, True))

    return walk.builder.finish()


class DefaultRenderer(RenderStrategy):
    """Reading layout."""

    @property
    def mode(self) -> RenderMode:
        return RenderMode.DEFAULT

    def render(self, document, width, theme, layout) -> RenderedDocument:
        return render_document(document, width, theme, layout)


# Register the strategy
registry.register(DefaultRenderer())
