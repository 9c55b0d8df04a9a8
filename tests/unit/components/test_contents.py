"""
Unit tests for the table of contents.
"""

from pageview.contents import TOP_TITLE, ContentsCursor, ContentsIndex, number_sections
from pageview.document import Document, Header, Node, Root


class TestNumbering:
    def test_flat(self):
        assert number_sections([2, 2, 2]) == ["1", "2", "3"]

    def test_nested(self):
        assert number_sections([2, 3, 3, 2, 3]) == ["1", "1.1", "1.2", "2", "2.1"]

    def test_relative_levels(self):
        assert number_sections([1, 2, 2]) == ["1", "1.1", "1.2"]

    def test_deeper_first(self):
        assert number_sections([3, 2]) == ["1", "1"]


class TestIndex:
    def test_labels(self, article):
        contents = ContentsIndex.from_document(article)
        assert contents.labels() == [TOP_TITLE, "1 Rome", "1.1 History", "1.2 Legacy"]

    def test_without_top(self, article):
        contents = ContentsIndex.from_document(article, include_top=False)
        assert len(contents) == 3
        assert contents[0].index == 1

    def test_anchor_at(self, article):
        contents = ContentsIndex.from_document(article, top_anchor="start")
        assert contents.anchor_at(0) == "start"
        assert contents.anchor_at(2) == "History"
        assert contents.anchor_at(9) is None
        assert contents.anchor_at(None) is None

    def test_resolve(self, article):
        contents = ContentsIndex.from_document(article)
        assert contents.resolve("History") == 10
        assert contents.resolve("nope") is None

    def test_resolve_repeated_anchor_takes_last(self):
        doc = Document(Node(Root(), [
            Node(Header("Notes", "Notes")),
            Node(Header("Notes", "Notes")),
        ]))
        assert ContentsIndex.from_document(doc).resolve("Notes") == 2

    def test_no_headers(self):
        doc = Document(Node(Root()))
        assert ContentsIndex.from_document(doc).labels() == [TOP_TITLE]
        assert len(ContentsIndex.from_document(doc, include_top=False)) == 0


class TestCursor:
    def test_starts_at_first_entry(self):
        assert ContentsCursor(3).position == 0

    def test_down_wraps(self):
        cursor = ContentsCursor(3)
        assert [cursor.down() for _ in range(3)] == [1, 2, 0]

    def test_up_wraps(self):
        cursor = ContentsCursor(3)
        assert cursor.up() == 2
        assert cursor.up() == 1

    def test_empty(self):
        cursor = ContentsCursor(0)
        assert cursor.position is None
        assert cursor.up() is None
        assert cursor.down() is None

    def test_unset_position(self):
        cursor = ContentsCursor(3)
        cursor.position = None
        assert cursor.up() == 0
        cursor.position = None
        assert cursor.down() == 0
