"""Tests for the content document wrapper."""

from term_injector.document import (
    ContentDocument,
    extract_text,
    is_inside_forbidden,
    set_inner_markup,
)
from term_injector.models import BlockKind


class TestExtractText:
    """Tests for extract_text."""

    def test_tags_are_stripped(self):
        assert extract_text("<p>Hello <em>world</em>.</p>") == "Hello world."

    def test_empty_markup(self):
        assert extract_text("") == ""


class TestContentDocument:
    """Tests for ContentDocument."""

    def test_fragment_round_trip(self):
        """Test that an untouched fragment serializes back unchanged."""
        markup = '<h2>Title</h2><p>Hello <em>world</em>.</p><ul><li>One item</li></ul>'
        document = ContentDocument.parse(markup)
        assert document.serialize() == markup

    def test_blocks_in_document_order(self):
        document = ContentDocument.parse(
            "<p>First</p><ul><li>Second</li></ul><table><tr><td>Third</td></tr></table>"
        )

        assert [b.get_text() for b in document.blocks] == ["First", "Second", "Third"]
        assert document.block_kind(0) == BlockKind.PARAGRAPH
        assert document.block_kind(1) == BlockKind.LIST_ITEM
        assert document.block_kind(2) == BlockKind.CELL

    def test_block_text_is_lowercased(self):
        document = ContentDocument.parse("<p>Mixed CASE Text</p>")
        assert document.block_text(0) == "mixed case text"

    def test_headings(self):
        """Test that only the requested heading levels are returned."""
        document = ContentDocument.parse(
            "<h1>Top</h1><h2>Second</h2><h3>Third</h3><h4>Fourth</h4>"
        )

        assert [h.get_text() for h in document.headings()] == ["Second", "Third"]
        assert [h.get_text() for h in document.headings(["h1"])] == ["Top"]

    def test_full_document_uses_body(self):
        document = ContentDocument.parse(
            "<html><head><title>Page</title></head><body><p>Body text</p></body></html>"
        )
        assert document.serialize() == "<p>Body text</p>"
        assert document.text() == "Body text"


class TestMarkupHelpers:
    """Tests for forbidden zone detection and block rewrites."""

    def test_is_inside_forbidden(self):
        document = ContentDocument.parse(
            "<blockquote><p>Quoted</p></blockquote><p>Free</p>"
        )

        assert is_inside_forbidden(document.blocks[0]) is True
        assert is_inside_forbidden(document.blocks[1]) is False

    def test_set_inner_markup(self):
        """Test that a block's children are replaced in place."""
        document = ContentDocument.parse("<p>Old text.</p><p>Other.</p>")
        set_inner_markup(document.blocks[0], "New <strong>text</strong>.")

        assert document.serialize() == "<p>New <strong>text</strong>.</p><p>Other.</p>"
        assert document.blocks[0].find("strong").get_text() == "text"

    def test_refresh_blocks_after_outer_rewrite(self):
        """Test that rewriting a list item detaches its paragraph until refreshed."""
        document = ContentDocument.parse("<ul><li><p>Inner text.</p></li></ul>")
        old_paragraph = document.blocks[1]
        set_inner_markup(document.blocks[0], "<p>Inner text. Added.</p>")

        assert old_paragraph.parent is None

        document.refresh_blocks()
        assert len(document.blocks) == 2
        assert document.blocks[1].parent is document.blocks[0]
        assert document.block_text(1) == "inner text. added."
