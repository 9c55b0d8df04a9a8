"""
Unit tests for the reading layout.
"""

import pytest
from rich.style import Style

from pageview.config import LayoutConfig
from pageview.document import (
    Division,
    Document,
    Effect,
    Emphasis,
    Header,
    InternalLink,
    Link,
    ListBlock,
    ListItem,
    Node,
    Paragraph,
    Root,
    Text,
)
from pageview.layout import line_width
from pageview.renderers import RenderMode, registry
from pageview.renderers.default import render_document
from pageview.theme import Theme


def doc(*children: Node) -> Document:
    return Document(Node(Root(), list(children)))


def plain(document: Document, width: int = 40, **layout) -> list[str]:
    return render_document(document, width, layout=LayoutConfig(**layout)).plain_lines()


class TestArticle:
    def test_lines(self, article):
        assert plain(article, 80) == [
            "Rome",
            "",
            "Rome is the capital of Italy. It was founded in 753 BC.",
            "",
            "History",
            "",
            "See the archive and Founding myths.",
            "",
            "  - Kingdom",
            "  - Legacy",
            "",
            "Legacy",
            "",
            "Colosseum",
            "",
        ]

    def test_links_index(self, article):
        rendered = render_document(article, 80)
        assert rendered.links == ((2, 4), (6, 13), (6, 17), (9, 23), (13, 27))

    def test_node_indices_monotonic(self, article):
        for width in (80, 20, 7, 1):
            rendered = render_document(article, width)
            indices = [w.node_index for line in rendered.lines for w in line]
            assert indices == sorted(indices)

    def test_wrap_bound(self, article):
        for width in range(1, 60):
            rendered = render_document(article, width)
            for line in rendered.lines:
                assert line_width(line) <= width

    def test_deterministic(self, article):
        assert render_document(article, 33) == render_document(article, 33)


class TestBlocks:
    def test_paragraph_wraps(self):
        d = doc(Node(Paragraph(), [Node(Text("the quick brown fox jumps"))]))
        assert plain(d, 10) == ["the quick", "brown fox", "jumps", ""]

    def test_header_after_text(self):
        d = doc(Node(Text("intro")), Node(Header("H", "H")))
        assert plain(d) == ["intro", "", "H", ""]

    def test_header_without_text(self):
        d = doc(Node(Header("", "empty")), Node(Text("body")))
        assert plain(d) == ["body"]

    def test_division_breaks_lines(self):
        d = doc(Node(Text("a")), Node(Division(), [Node(Text("b"))]), Node(Text("c")))
        assert plain(d) == ["a", "b", "c"]

    def test_empty_document(self):
        assert plain(doc()) == []


class TestLists:
    def test_nested(self):
        d = doc(Node(ListBlock(), [
            Node(ListItem(), [
                Node(Text("one")),
                Node(ListBlock(), [Node(ListItem(), [Node(Text("two"))])]),
            ]),
        ]))
        assert plain(d) == ["  - one", "    - two", ""]

    def test_ordered(self):
        d = doc(Node(ListBlock(ordered=True), [
            Node(ListItem(), [Node(Text("a"))]),
            Node(ListItem(), [Node(Text("b"))]),
        ]))
        assert plain(d) == ["  1. a", "  2. b", ""]

    def test_hanging_indent(self):
        d = doc(Node(ListBlock(), [Node(ListItem(), [Node(Text("alpha beta gamma"))])]))
        assert plain(d, 12) == ["  - alpha", "    beta", "    gamma", ""]

    def test_layout_config(self):
        d = doc(Node(ListBlock(), [Node(ListItem(), [Node(Text("x"))])]))
        assert plain(d, list_indent=4, bullet="*") == ["    * x", ""]


class TestStyles:
    def test_emphasis_and_links(self):
        d = doc(
            Node(Emphasis(Effect.BOLD), [Node(Text("bold"))]),
            Node(Link(InternalLink("P", "P")), [
                Node(Emphasis(Effect.ITALIC), [Node(Text("page"))]),
            ]),
            Node(Text(" plain")),
        )
        words = {w.content: w.style for line in render_document(d, 40).lines for w in line}
        assert words["bold"].bold
        assert words["page"].italic
        assert words["page"].color.name == "blue"
        assert not words["plain"].bold
        assert words["plain"].color is None or words["plain"].color.name == "default"

    def test_header_style(self, article):
        rendered = render_document(article, 80)
        header = rendered.lines[0][0]
        assert header.content == "Rome"
        assert header.style.bold
        assert header.style.color.name == "red"

    def test_theme_passed_in(self):
        d = doc(Node(Link(InternalLink("P", "P")), [Node(Text("page"))]))
        theme = Theme(link=Style(color="green"))
        rendered = render_document(d, 40, theme=theme)
        assert rendered.lines[0][0].style.color.name == "green"


class TestDeepNesting:
    def test_deep_emphasis_renders(self):
        root = Node(Root())
        current = root
        for _ in range(3000):
            current = current.add_child(Node(Emphasis(Effect.ITALIC)))
        current.add_child(Node(Text("deep")))
        assert plain(Document(root)) == ["deep"]


@pytest.mark.parametrize("mode", list(RenderMode))
def test_every_mode_registered(mode):
    assert registry.get(mode).mode is mode
