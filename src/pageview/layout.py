"""
Layout primitives for pageview.

Implements:
- Word: a wrapped text fragment carrying its style and source node index
- RenderedDocument: the width-specific layout result
- LineBuilder: greedy word wrap with hard breaks for over-long words

Renderers (see renderers/) walk a Document and feed words and line breaks
into a LineBuilder; the builder owns every wrapping decision.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field

from rich.cells import cell_len
from rich.style import Style

WORD_PATTERN = re.compile(r"(\S+)(\s*)")


@dataclass(frozen=True)
class Word:
    """A fragment of a line, followed by whitespace_width blank cells."""
    content: str
    whitespace_width: int
    style: Style
    node_index: int

    @property
    def width(self) -> int:
        """Display width of the content in terminal cells."""
        return cell_len(self.content)


Line = tuple[Word, ...]


@dataclass(frozen=True)
class RenderedDocument:
    """
    Layout of one document at one width.

    links holds one (line, node_index) entry per Link node, at the line
    where the link's first word landed, in line order.
    """
    width: int
    lines: tuple[Line, ...] = ()
    links: tuple[tuple[int, int], ...] = ()

    @property
    def line_count(self) -> int:
        return len(self.lines)

    def line_of(self, first: int, last: int) -> int | None:
        """First line holding a word whose node index is in [first, last]."""
        for y, line in enumerate(self.lines):
            if any(first <= word.node_index <= last for word in line):
                return y
        return None

    def line_of_node(self, index: int) -> int | None:
        return self.line_of(index, index)

    def links_within(self, top: int, bottom: int) -> list[tuple[int, int]]:
        """Link entries whose line lies in [top, bottom)."""
        return [(y, index) for y, index in self.links if top <= y < bottom]

    def line_text(self, y: int) -> str:
        """Plain text of a line, inter-word whitespace included."""
        line = self.lines[y]
        parts = []
        for i, word in enumerate(line):
            parts.append(word.content)
            if i < len(line) - 1:
                parts.append(" " * word.whitespace_width)
        return "".join(parts)

    def plain_lines(self) -> list[str]:
        return [self.line_text(y) for y in range(len(self.lines))]


def line_width(line: Line) -> int:
    """Cells used by a line: contents plus inter-word whitespace."""
    if not line:
        return 0
    return sum(w.width + w.whitespace_width for w in line) - line[-1].whitespace_width


def split_words(text: str) -> tuple[bool, list[tuple[str, int]]]:
    """
    Split a text run into (word, trailing whitespace) pairs.

    Whitespace collapses to a single cell. Also reports whether the run
    starts with whitespace, so the caller can separate it from the
    previous word.
    """
    leading = bool(text) and text[0].isspace()
    words = [(m.group(1), 1 if m.group(2) else 0) for m in WORD_PATTERN.finditer(text)]
    return leading, words


def chop(content: str, width: int) -> list[str]:
    """Hard-break content into chunks at most width cells wide."""
    chunks: list[str] = []
    current = ""
    used = 0
    for char in content:
        size = cell_len(char)
        if current and used + size > width:
            chunks.append(current)
            current = ""
            used = 0
        current += char
        used += size
    if current:
        chunks.append(current)
    return chunks


@dataclass
class LineBuilder:
    """
    Greedy line filler.

    A word goes on the current line when the line's contents, the spacing
    before the word and the word itself fit in width. Words wider than the
    whole width are chopped. indent is the number of blank cells that open
    every new line (list item continuation lines).
    """
    width: int
    indent: int = 0
    lines: list[Line] = field(default_factory=list)
    links: list[tuple[int, int]] = field(default_factory=list)
    _current: list[Word] = field(default_factory=list)
    _used: int = 0
    _last_index: int = 0
    _pending_links: list[int] = field(default_factory=list)

    def __post_init__(self):
        self.width = max(1, self.width)

    @property
    def effective_indent(self) -> int:
        """Indent, capped so at least one content cell remains."""
        return max(0, min(self.indent, self.width - 1))

    @property
    def at_line_start(self) -> bool:
        return not any(word.content for word in self._current)

    def begin_link(self, index: int) -> None:
        """The next placed word records the line of link index."""
        self._pending_links.append(index)

    def end_link(self, index: int) -> None:
        """Drop a link that produced no words."""
        if index in self._pending_links:
            self._pending_links.remove(index)

    def add_text(self, text: str, style: Style, index: int) -> int | None:
        """Wrap a text run. Returns the line of its first word, if any."""
        leading, words = split_words(text)
        if leading:
            self.separate()
        first_line = None
        for content, whitespace in words:
            y = self.add_word(content, style, index, whitespace)
            if first_line is None:
                first_line = y
        return first_line

    def add_word(self, content: str, style: Style, index: int, whitespace: int = 1) -> int:
        """Place one word, wrapping or chopping as needed. Returns its line."""
        self._last_index = max(self._last_index, index)
        available = self.width - self.effective_indent
        if cell_len(content) > available:
            pieces = chop(content, available)
        else:
            pieces = [content]

        first_line = None
        for i, piece in enumerate(pieces):
            last = i == len(pieces) - 1
            word = Word(piece, whitespace if last else 0, style, index)
            y = self._place(word)
            if first_line is None:
                first_line = y
        return first_line

    def _place(self, word: Word) -> int:
        if self._current:
            spacing = self._current[-1].whitespace_width
            if self._used + spacing + word.width > self.width and not self.at_line_start:
                self.break_line()
        if not self._current and self.effective_indent:
            self._current.append(Word("", self.effective_indent, Style.null(), self._last_index))
            self._used = 0
        if self._current:
            self._used += self._current[-1].whitespace_width
        self._current.append(word)
        self._used += word.width

        y = len(self.lines)
        for link in self._pending_links:
            self.links.append((y, link))
        self._pending_links.clear()
        return y

    def separate(self) -> None:
        """Make sure the next word is separated from the previous one."""
        if self._current and self._current[-1].content and not self._current[-1].whitespace_width:
            last = self._current[-1]
            self._current[-1] = Word(last.content, 1, last.style, last.node_index)

    def break_line(self) -> None:
        """End the current line if it holds anything."""
        if self._current:
            self._flush()

    def newline(self) -> None:
        """Explicit line break: ends the current line or emits an empty one."""
        if self._current:
            self._flush()
        else:
            self.lines.append(())

    def blank_line(self) -> None:
        """End the current line and leave exactly one blank line after content."""
        self.break_line()
        if self.lines and self.lines[-1]:
            self.lines.append(())

    def _flush(self) -> None:
        line = list(self._current)
        # the indent word alone is not content
        if all(not word.content for word in line):
            line = []
        self.lines.append(tuple(line))
        self._current = []
        self._used = 0

    def finish(self) -> RenderedDocument:
        self.break_line()
        return RenderedDocument(
            width=self.width,
            lines=tuple(self.lines),
            links=tuple(self.links),
        )
