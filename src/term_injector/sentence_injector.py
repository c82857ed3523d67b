"""
Sentence splicing.

A block's inner markup is split into sentence-like chunks and a rendered
template sentence is spliced in at the start, middle or end. The block's
inner content is replaced in one update; nothing outside the block is
touched.
"""

import logging
import re
from dataclasses import dataclass
from typing import Optional

from .document import set_inner_markup
from .models import InsertionPoint, InsertPosition, Term
from .templates import TemplateSelector, render_template

logger = logging.getLogger(__name__)

CHUNK_SPLIT_PATTERN = re.compile(r"(?<=[.!?])\s+")


@dataclass
class InsertionOutcome:
    """Result of one splice attempt."""
    success: bool
    template: str = ""
    category: Optional[str] = None


def split_into_chunks(markup: str) -> list[str]:
    """Split markup on sentence terminators followed by whitespace."""
    return [chunk for chunk in CHUNK_SPLIT_PATTERN.split(markup.strip()) if chunk]


def splice_sentence(markup: str, sentence: str, position: InsertPosition) -> Optional[str]:
    """
    Splice a sentence into block markup.

    Args:
        markup: The block's current inner markup.
        sentence: Rendered sentence markup.
        position: Where to splice.

    Returns:
        The new inner markup, or None if the markup has no chunk to splice
        around.
    """
    chunks = split_into_chunks(markup)
    if not chunks:
        return None

    original = markup.strip()
    if position == InsertPosition.START:
        return f"{sentence} {original}"
    if position == InsertPosition.END or len(chunks) == 1:
        return f"{original} {sentence}"

    midpoint = len(chunks) // 2
    before = " ".join(chunks[:midpoint])
    after = " ".join(chunks[midpoint:])
    return f"{before} {sentence} {after}"


class SentenceInjector:
    """Renders a template for a term and splices it into the chosen block."""

    def __init__(self, selector: Optional[TemplateSelector] = None):
        self.selector = selector or TemplateSelector()

    def insert(self, term: Term, point: InsertionPoint) -> InsertionOutcome:
        """
        Insert a sentence mentioning ``term`` into the block at ``point``.

        Returns:
            InsertionOutcome. On failure the document is left untouched.
        """
        category, template = self.selector.select(term, point)
        sentence = render_template(template, term.text)

        new_markup = splice_sentence(
            point.element.decode_contents(),
            sentence,
            point.insert_position,
        )
        if new_markup is None:
            logger.warning(f"Block {point.block_index} has no splice-able content for '{term.text}'")
            return InsertionOutcome(success=False)

        set_inner_markup(point.element, new_markup)
        logger.debug(
            f"Inserted '{term.text}' into block {point.block_index} "
            f"({category}, {point.insert_position.value})"
        )
        return InsertionOutcome(success=True, template=template, category=category)
