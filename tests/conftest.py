"""
Shared documents for the test suite.
"""

import pytest

from pageview.config import Config
from pageview.document import (
    AnchorLink,
    Document,
    Effect,
    Emphasis,
    ExternalLink,
    Header,
    InternalLink,
    Link,
    ListBlock,
    ListItem,
    MediaLink,
    Newline,
    Node,
    Paragraph,
    RedLink,
    Root,
    Text,
)


def build_article() -> Document:
    """
    Small wiki-like page. Node indices:

     0 Root
     1   Header Rome
     2   Paragraph
     3     Text
     4     Link Italy (internal)
     5       Text
     6     Text
     7     Emphasis bold
     8       Text
     9     Text
    10   Header History
    11   Paragraph
    12     Text
    13     Link archive (external)
    14       Emphasis italic
    15         Text
    16     Text
    17     Link Founding myths (red, no children)
    18     Text
    19   ListBlock
    20     ListItem
    21       Text
    22     ListItem
    23       Link Legacy (anchor)
    24         Text
    25   Header Legacy
    26   Paragraph
    27     Link Colosseum (media, no children)
    """
    root = Node(Root(), [
        Node(Header("Rome", "Rome", level=1)),
        Node(Paragraph(), [
            Node(Text("Rome is the capital of ")),
            Node(Link(InternalLink("Italy", "Italy")), [Node(Text("Italy"))]),
            Node(Text(". It was founded in ")),
            Node(Emphasis(Effect.BOLD), [Node(Text("753 BC"))]),
            Node(Text(".")),
        ]),
        Node(Header("History", "History")),
        Node(Paragraph(), [
            Node(Text("See the ")),
            Node(Link(ExternalLink("https://example.org/archive", "archive")), [
                Node(Emphasis(Effect.ITALIC), [Node(Text("archive"))]),
            ]),
            Node(Text(" and ")),
            Node(Link(RedLink("Founding myths"))),
            Node(Text(".")),
        ]),
        Node(ListBlock(), [
            Node(ListItem(), [Node(Text("Kingdom"))]),
            Node(ListItem(), [
                Node(Link(AnchorLink("Legacy", "Legacy")), [Node(Text("Legacy"))]),
            ]),
        ]),
        Node(Header("Legacy", "Legacy")),
        Node(Paragraph(), [
            Node(Link(MediaLink("File:Colosseum.jpg", "Colosseum"))),
        ]),
    ])
    return Document(root)


def build_spaced(link_lines: list[int], total_lines: int) -> Document:
    """One link per entry of link_lines, at exactly that line; empty lines elsewhere."""
    root = Node(Root())
    lines = 0
    for n, target in enumerate(link_lines):
        while lines < target:
            root.add_child(Node(Newline()))
            lines += 1
        root.add_child(Node(Link(InternalLink(f"Page {n}", f"Page {n}")), [Node(Text(f"link{n}"))]))
        root.add_child(Node(Newline()))
        lines += 1
    while lines < total_lines:
        root.add_child(Node(Newline()))
        lines += 1
    return Document(root)


@pytest.fixture
def article() -> Document:
    return build_article()


@pytest.fixture
def spaced():
    """Factory for documents with links at given lines."""
    return build_spaced


@pytest.fixture
def config() -> Config:
    """Defaults only, unaffected by the user's config file or environment."""
    return Config()
