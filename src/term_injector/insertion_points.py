"""
Insertion point scoring.

Every candidate block (paragraph, list item, table cell) is scored as a
destination for one specific term. Structural rejects run first so that
nothing that must stay verbatim is ever scored:

1. saturated blocks (per-block cap reached this run)
2. blocks outside the plausible length window
3. blocks already containing the term (plain substring check)
4. blocks nested in links, headings, quotations, code or script/style

Survivors are scored on related-word hits, term-word hits and a small
bonus for well-structured prose, then sorted best first.
"""

import logging
import re
from typing import Mapping, Optional

from .config import DEFAULT_LIMITS, InsertionLimits
from .document import ContentDocument, is_inside_forbidden
from .models import InsertionPoint, InsertPosition, Term
from .related_terms import MIN_SIGNIFICANT_WORD_LENGTH, get_related_terms

logger = logging.getLogger(__name__)

SENTENCE_MARK_PATTERN = re.compile(r"[.!?]")
SENTENCE_SPLIT_PATTERN = re.compile(r"[.!?]+")


def count_substantial_sentences(text: str, min_length: int = 20) -> int:
    """Count sentences longer than ``min_length`` characters."""
    return sum(
        1 for sentence in SENTENCE_SPLIT_PATTERN.split(text)
        if len(sentence.strip()) > min_length
    )


def choose_insert_position(text: str, limits: InsertionLimits = DEFAULT_LIMITS) -> InsertPosition:
    """Pick the splice position from the number of substantial sentences."""
    if count_substantial_sentences(text, limits.substantial_sentence_length) >= 3:
        return InsertPosition.MIDDLE
    return InsertPosition.END


def score_block(
    text: str,
    term: Term,
    related_terms: frozenset[str],
    limits: InsertionLimits = DEFAULT_LIMITS,
) -> tuple[int, list[str]]:
    """
    Score a block's text for a term.

    Returns:
        Tuple of (relevance_score, matched_related_terms).
    """
    score = 0
    matched: list[str] = []

    for related in sorted(related_terms):
        if related in text:
            score += limits.related_term_weight
            matched.append(related)

    for word in term.words:
        if len(word) > MIN_SIGNIFICANT_WORD_LENGTH and word in text:
            score += limits.term_word_weight

    if len(SENTENCE_MARK_PATTERN.findall(text)) >= 2:
        score += limits.structure_bonus

    return score, matched


def find_insertion_points(
    document: ContentDocument,
    term: Term,
    saturation: Optional[Mapping[int, int]] = None,
    limits: InsertionLimits = DEFAULT_LIMITS,
) -> list[InsertionPoint]:
    """
    Find and rank blocks that could receive a sentence for ``term``.

    Args:
        document: Parsed content document. Its block list is re-queried
            first, so blocks re-created by earlier splices are seen fresh.
        term: Term to place.
        saturation: Insertions already made per block index this run.
        limits: Thresholds and weights.

    Returns:
        Insertion points sorted by relevance score, best first. Ties keep
        document order.
    """
    document.refresh_blocks()
    saturation = saturation or {}
    related_terms = get_related_terms(term.key)
    points: list[InsertionPoint] = []

    for index, element in enumerate(document.blocks):
        if saturation.get(index, 0) >= limits.max_insertions_per_block:
            continue

        text = document.block_text(index)
        if not limits.min_block_length <= len(text) <= limits.max_block_length:
            continue

        if term.key in text:
            continue

        if is_inside_forbidden(element):
            continue

        score, matched = score_block(text, term, related_terms, limits)
        if score < limits.min_relevance_score:
            continue

        points.append(InsertionPoint(
            block_index=index,
            element=element,
            block_kind=document.block_kind(index),
            normalized_text=text,
            matched_related_terms=matched,
            relevance_score=score,
            insert_position=choose_insert_position(text, limits),
        ))

    points.sort(key=lambda point: point.relevance_score, reverse=True)
    logger.debug(f"'{term.text}': {len(points)} insertion points")
    return points
