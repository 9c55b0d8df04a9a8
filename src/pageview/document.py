"""
Document - indexed content tree for pageview

Upstream parsers build a tree of Nodes. Document freezes that tree and assigns
every node a dense pre-order index. The index is the only identity used by the
rest of the package: layouts, selections and the contents index refer to
nodes by index, never by object.

Key invariant: indices never change for the lifetime of a Document. Loading
new content means building a new Document.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator
from dataclasses import dataclass, field
from enum import Enum


class Effect(Enum):
    """Inline emphasis applied to a subtree."""
    BOLD = "bold"
    ITALIC = "italic"
    UNDERLINE = "underline"
    STRIKETHROUGH = "strikethrough"


# Link targets

@dataclass(frozen=True)
class InternalLink:
    """Reference to another page, optionally to a section of it."""
    page: str
    title: str
    anchor: str | None = None


@dataclass(frozen=True)
class AnchorLink:
    """Reference to a header in the current page."""
    anchor: str
    title: str


@dataclass(frozen=True)
class ExternalLink:
    url: str
    title: str


@dataclass(frozen=True)
class RedLink:
    """Reference to a page that doesn't exist yet."""
    title: str
    url: str = ""


@dataclass(frozen=True)
class MediaLink:
    url: str
    title: str


@dataclass(frozen=True)
class InterwikiLink:
    """Reference to a page on another wiki."""
    url: str
    title: str


LinkTarget = InternalLink | AnchorLink | ExternalLink | RedLink | MediaLink | InterwikiLink


# Node payloads

@dataclass(frozen=True)
class Root:
    pass


@dataclass(frozen=True)
class Header:
    text: str
    anchor: str
    level: int = 2


@dataclass(frozen=True)
class Paragraph:
    pass


@dataclass(frozen=True)
class Text:
    contents: str


@dataclass(frozen=True)
class Emphasis:
    effect: Effect


@dataclass(frozen=True)
class Link:
    target: LinkTarget

    @property
    def title(self) -> str:
        return self.target.title


@dataclass(frozen=True)
class ListBlock:
    ordered: bool = False


@dataclass(frozen=True)
class ListItem:
    pass


@dataclass(frozen=True)
class Division:
    """Generic block container: starts and ends on its own lines."""
    pass


@dataclass(frozen=True)
class Newline:
    pass


Data = (
    Root | Header | Paragraph | Text | Emphasis | Link
    | ListBlock | ListItem | Division | Newline
)


@dataclass
class Node:
    """A node of the tree as built upstream, before indexing."""
    data: Data
    children: list[Node] = field(default_factory=list)

    def add_child(self, child: Node) -> Node:
        """Add a child node and return it for chaining."""
        self.children.append(child)
        return child


class Document:
    """
    Immutable, index-addressed view of a Node tree.

    Indices are assigned in pre-order (document order): the root is 0, a
    node's descendants occupy the contiguous range that follows it.
    """

    def __init__(self, root: Node):
        self._data: list[Data] = []
        self._parents: list[int | None] = []
        self._children: list[tuple[int, ...]] = []
        self._depths: list[int] = []
        self._ends: list[int] = []

        child_lists: list[list[int]] = []
        # Explicit stack of (node, parent index, depth); children are pushed
        # in reverse so they pop in document order.
        stack: list[tuple[Node, int | None, int]] = [(root, None, 0)]
        while stack:
            node, parent, depth = stack.pop()
            index = len(self._data)
            self._data.append(node.data)
            self._parents.append(parent)
            self._depths.append(depth)
            child_lists.append([])
            if parent is not None:
                child_lists[parent].append(index)
            for child in reversed(node.children):
                stack.append((child, index, depth + 1))

        self._children = [tuple(c) for c in child_lists]

        # Subtree end (last descendant) for every node, computed bottom-up.
        self._ends = list(range(len(self._data)))
        for index in range(len(self._data) - 1, -1, -1):
            kids = self._children[index]
            if kids:
                self._ends[index] = self._ends[kids[-1]]

    def __len__(self) -> int:
        return len(self._data)

    def __contains__(self, index: object) -> bool:
        return isinstance(index, int) and 0 <= index < len(self._data)

    def data(self, index: int) -> Data | None:
        """Payload of the node at index, or None if out of range."""
        if index not in self:
            return None
        return self._data[index]

    def parent(self, index: int) -> int | None:
        if index not in self:
            return None
        return self._parents[index]

    def children(self, index: int) -> tuple[int, ...]:
        if index not in self:
            return ()
        return self._children[index]

    def depth(self, index: int) -> int | None:
        """Distance from the root (root is 0)."""
        if index not in self:
            return None
        return self._depths[index]

    def next_sibling(self, index: int) -> int | None:
        siblings = self._siblings(index)
        pos = siblings.index(index) if index in siblings else -1
        if pos < 0 or pos + 1 >= len(siblings):
            return None
        return siblings[pos + 1]

    def prev_sibling(self, index: int) -> int | None:
        siblings = self._siblings(index)
        pos = siblings.index(index) if index in siblings else -1
        if pos <= 0:
            return None
        return siblings[pos - 1]

    def _siblings(self, index: int) -> tuple[int, ...]:
        parent = self.parent(index)
        if parent is None:
            return ()
        return self._children[parent]

    def last_descendant(self, index: int) -> int | None:
        """Index of the deepest last descendant, or index itself for leaves."""
        if index not in self:
            return None
        return self._ends[index]

    def descendants(self, index: int = 0) -> Iterator[int]:
        """
        Lazily yield descendant indices of index in document order.

        Iterative with an explicit stack, so deeply nested documents never
        hit the recursion limit. Each call returns a fresh iterator.
        """
        if index not in self:
            return
        stack = list(reversed(self._children[index]))
        while stack:
            current = stack.pop()
            yield current
            stack.extend(reversed(self._children[current]))

    def find(self, predicate: Callable[[Data], bool], start: int = 0) -> Iterator[int]:
        """Yield indices of descendants of start whose data matches predicate."""
        for index in self.descendants(start):
            if predicate(self._data[index]):
                yield index

    def links(self) -> list[int]:
        """Indices of all Link nodes in document order."""
        return list(self.find(is_linkable))

    def headers(self) -> list[int]:
        return list(self.find(lambda data: isinstance(data, Header)))


def is_linkable(data: Data | None) -> bool:
    """Only Link nodes can be selected."""
    return isinstance(data, Link)
