"""
Table of contents derived from the document's headers.

Built once per document. Independent of the render width: it maps section
anchors to tree indices, and the session turns those into lines.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass

from .document import Document, Header

TOP_TITLE = "(Top)"


@dataclass(frozen=True)
class Section:
    number: str
    title: str
    anchor: str
    index: int | None = None  # tree index; None for the synthetic top entry

    @property
    def label(self) -> str:
        return f"{self.number} {self.title}" if self.number else self.title


def number_sections(levels: list[int]) -> list[str]:
    """
    Hierarchical numbers ("1", "1.1", "2") for a sequence of header levels.

    Levels are ranked relative to each other, so a page whose headers start at
    h2 still numbers them 1, 2, 3.
    """
    ranks = sorted(set(levels))
    counters = [0] * len(ranks)
    numbers = []
    for level in levels:
        rank = ranks.index(level)
        counters[rank] += 1
        for deeper in range(rank + 1, len(counters)):
            counters[deeper] = 0
        numbers.append(".".join(str(c) for c in counters[: rank + 1] if c))
    return numbers


class ContentsIndex:
    def __init__(self, sections: list[Section]):
        self._sections = tuple(sections)

    @classmethod
    def from_document(
        cls,
        document: Document,
        include_top: bool = True,
        top_anchor: str = "top",
    ) -> ContentsIndex:
        headers = [(i, document.data(i)) for i in document.headers()]
        numbers = number_sections([h.level for _, h in headers])
        sections = [
            Section(number=number, title=header.text, anchor=header.anchor, index=i)
            for number, (i, header) in zip(numbers, headers, strict=True)
        ]
        if include_top:
            sections.insert(0, Section(number="", title=TOP_TITLE, anchor=top_anchor))
        return cls(sections)

    def __len__(self) -> int:
        return len(self._sections)

    def __iter__(self) -> Iterator[Section]:
        return iter(self._sections)

    def __getitem__(self, position: int) -> Section:
        return self._sections[position]

    @property
    def sections(self) -> tuple[Section, ...]:
        return self._sections

    def labels(self) -> list[str]:
        return [s.label for s in self._sections]

    def anchor_at(self, position: int | None) -> str | None:
        """Anchor of the section under a list cursor, if the position is valid."""
        if position is None or not 0 <= position < len(self._sections):
            return None
        return self._sections[position].anchor

    def resolve(self, anchor: str) -> int | None:
        """Tree index of the header carrying anchor (the last one, if repeated)."""
        for section in reversed(self._sections):
            if section.anchor == anchor:
                return section.index
        return None


class ContentsCursor:
    """List cursor over the contents with wrap-around movement."""

    def __init__(self, count: int):
        self.count = count
        self.position: int | None = 0 if count else None

    def up(self) -> int | None:
        if not self.count:
            return None
        if self.position is None:
            self.position = 0
        elif self.position == 0:
            self.position = self.count - 1
        else:
            self.position -= 1
        return self.position

    def down(self) -> int | None:
        if not self.count:
            return None
        if self.position is None or self.position >= self.count - 1:
            self.position = 0
        else:
            self.position += 1
        return self.position
