"""
Heading rewrites for high-value terms.

Unlike body insertion, the header pass overwrites the whole text of a
second or third level heading, either appending the term
("Heading: term") or prepending it ("term in Heading").
"""

import logging
import random
from typing import Optional

from .config import DEFAULT_LIMITS, InsertionLimits
from .document import ContentDocument
from .models import Term
from .related_terms import MIN_SIGNIFICANT_WORD_LENGTH

logger = logging.getLogger(__name__)

HEADER_LEVELS = ("h2", "h3")


def heading_accepts(
    heading_text: str,
    term: Term,
    limits: InsertionLimits = DEFAULT_LIMITS,
) -> bool:
    """
    Check whether a heading may be rewritten to include a term.

    The heading must not already contain the term, must be at most
    ``max_heading_length`` characters, and must share a significant word
    with the term unless the term's importance forces injection.
    """
    heading_lower = heading_text.lower()
    if term.key in heading_lower:
        return False
    if len(heading_lower) > limits.max_heading_length:
        return False

    overlap = sum(
        1 for word in term.words
        if len(word) > MIN_SIGNIFICANT_WORD_LENGTH and word in heading_lower
    )
    return overlap > 0 or term.importance >= limits.forced_header_importance


def rewrite_heading(
    heading_text: str,
    term_text: str,
    rng: random.Random,
    limits: InsertionLimits = DEFAULT_LIMITS,
) -> str:
    """Build the new heading text for a term."""
    if len(heading_text) < limits.short_heading_length and rng.random() < 0.5:
        separator = " — " if ":" in heading_text else ": "
        return f"{heading_text}{separator}{term_text}"
    return f"{term_text} in {heading_text}"


def inject_header_terms(
    document: ContentDocument,
    terms: list[Term],
    max_count: int = 5,
    rng: Optional[random.Random] = None,
    limits: InsertionLimits = DEFAULT_LIMITS,
) -> list[str]:
    """
    Rewrite headings to include header-class terms.

    Terms are tried in descending importance; for each term the first
    acceptable heading wins and is not reused in this pass.

    Args:
        document: Parsed content document (mutated in place).
        terms: Candidate terms, normally the missing title/header terms.
        max_count: Maximum number of successful rewrites.
        rng: Random source for the rewrite style.
        limits: Thresholds.

    Returns:
        Texts of the terms that were injected, in injection order.
    """
    rng = rng or random.Random()
    injected: list[str] = []
    headings = document.headings(HEADER_LEVELS)

    if not headings or not terms or max_count <= 0:
        return injected

    ordered = sorted(terms, key=lambda t: t.importance, reverse=True)

    for term in ordered:
        if len(injected) >= max_count:
            break

        for position, heading in enumerate(headings):
            current_text = heading.get_text()
            if not heading_accepts(current_text, term, limits):
                continue

            heading.string = rewrite_heading(current_text, term.text, rng, limits)
            del headings[position]
            injected.append(term.text)
            logger.debug(f"Heading rewritten for '{term.text}': {heading.get_text()!r}")
            break

    logger.info(f"Header pass injected {len(injected)} of {len(terms)} candidate terms")
    return injected
