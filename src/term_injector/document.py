"""
Markup tree handling for the term injector.

Content is parsed once per run into a ContentDocument. The document owns
an indexable list of candidate blocks (paragraphs, list items, table
cells) and the heading elements, so the insertion engine can address
blocks by index and only serialize back to markup at the end.

Rewriting a block re-creates every candidate nested inside it, so the
block list is re-queried before each term is placed. Splices only add
inline markup, which keeps the document-order index of every block
stable across re-queries.

Blocks nested inside links, headings, quotations, code or script/style
containers are forbidden zones and must stay verbatim.
"""

import logging
from typing import Iterable

from bs4 import BeautifulSoup
from bs4.element import Tag

from .models import BlockKind

logger = logging.getLogger(__name__)

PARSER = "lxml"
FRAGMENT_PARSER = "html.parser"

CANDIDATE_BLOCK_TAGS = ["p", "li", "td"]
HEADING_TAGS = ("h1", "h2", "h3", "h4", "h5", "h6")
FORBIDDEN_ANCESTOR_TAGS = frozenset(
    {"a", "blockquote", "code", "pre", "script", "style", *HEADING_TAGS}
)

BLOCK_KIND_BY_TAG = {
    "p": BlockKind.PARAGRAPH,
    "li": BlockKind.LIST_ITEM,
    "td": BlockKind.CELL,
}


def _content_root(soup: BeautifulSoup) -> Tag:
    """Return the element whose inner markup is the content."""
    return soup.body or soup


def extract_text(markup: str) -> str:
    """Return the text content of a markup string (tags stripped, no separators)."""
    if not markup:
        return ""
    soup = BeautifulSoup(markup, PARSER)
    return _content_root(soup).get_text()


def is_inside_forbidden(element: Tag) -> bool:
    """
    Check whether an element is nested inside a forbidden container.

    Only ancestors are inspected; the element itself may be any block.
    """
    for parent in element.parents:
        if parent.name in FORBIDDEN_ANCESTOR_TAGS:
            return True
    return False


def set_inner_markup(element: Tag, markup: str) -> None:
    """Replace an element's children with the nodes parsed from ``markup``."""
    fragment = BeautifulSoup(markup, FRAGMENT_PARSER)
    element.clear()
    for node in list(fragment.contents):
        element.append(node.extract())


class ContentDocument:
    """
    A parsed, mutable content tree.

    Attributes:
        soup: The underlying BeautifulSoup tree.
        blocks: Candidate blocks in document order; the index of a block in
            this list is its identity for the duration of a run. Call
            refresh_blocks() after rewriting a block.
    """

    def __init__(self, soup: BeautifulSoup):
        self.soup = soup
        self.root = _content_root(soup)
        self.blocks: list[Tag] = []
        self.refresh_blocks()

    def refresh_blocks(self) -> None:
        """Re-query the candidate blocks so the list only holds attached elements."""
        self.blocks = list(self.root.find_all(CANDIDATE_BLOCK_TAGS))

    @classmethod
    def parse(cls, markup: str) -> "ContentDocument":
        """Parse content markup into a document."""
        document = cls(BeautifulSoup(markup or "", PARSER))
        logger.debug(f"Parsed document with {len(document.blocks)} candidate blocks")
        return document

    def block_kind(self, index: int) -> BlockKind:
        """Kind of the block at ``index``."""
        return BLOCK_KIND_BY_TAG.get(self.blocks[index].name, BlockKind.CONTAINER)

    def block_text(self, index: int) -> str:
        """Lowercased text content of the block at ``index``."""
        return self.blocks[index].get_text().lower()

    def headings(self, levels: Iterable[str] = ("h2", "h3")) -> list[Tag]:
        """Heading elements of the given levels in document order."""
        return list(self.root.find_all(list(levels)))

    def text(self) -> str:
        """Text content of the whole document."""
        return self.root.get_text()

    def serialize(self) -> str:
        """Serialize the content subtree back to inner markup."""
        return self.root.decode_contents()
