"""
Term coverage analysis.

Coverage is lexical: a term is used when it occurs at least once as a
whole word (case-insensitive) in the text content of the markup. Two
scores are reported, the raw share of terms used and the share weighted
by term importance.
"""

import logging
import math
import re
from typing import Optional

from .document import extract_text
from .models import CoverageAnalysis, Term, TermUsage

logger = logging.getLogger(__name__)


def percent(part: float, whole: float) -> int:
    """Percentage of ``part`` in ``whole``, rounded half up."""
    return math.floor(part / whole * 100 + 0.5)


def term_pattern(term_text: str) -> re.Pattern:
    """Compile a literal, word-bounded, case-insensitive pattern for a term."""
    return re.compile(r"\b" + re.escape(term_text.lower()) + r"\b", re.IGNORECASE)


def find_term_positions(text: str, term_text: str) -> list[int]:
    """
    Find all non-overlapping whole-word occurrences of a term.

    Args:
        text: Text to scan (already lowercased by callers for speed, but
            matching is case-insensitive either way).
        term_text: Term phrase.

    Returns:
        Character offsets of each occurrence.
    """
    if not term_text:
        return []
    return [match.start() for match in term_pattern(term_text).finditer(text)]


def analyze_coverage(
    content: str,
    terms: list[Term],
    critical_threshold: int = 80,
) -> CoverageAnalysis:
    """
    Compute per-term usage and overall coverage scores for content.

    Args:
        content: Markup to analyze.
        terms: Terms to look for.
        critical_threshold: Importance at or above which a missing term is
            reported as critical.

    Returns:
        CoverageAnalysis. Empty content or an empty term list yields full
        coverage with empty buckets.
    """
    if not content or not terms:
        return CoverageAnalysis.vacuous()

    text = extract_text(content).lower()

    used_terms: list[TermUsage] = []
    missing_terms: list[Term] = []
    total_weight = 0
    used_weight = 0

    for term in terms:
        positions = find_term_positions(text, term.text)
        total_weight += term.importance

        if positions:
            used_terms.append(TermUsage(
                term=term,
                occurrence_count=len(positions),
                match_positions=positions,
            ))
            used_weight += term.importance
        else:
            missing_terms.append(term)

    raw_score = percent(len(used_terms), len(terms))
    weighted_score = percent(used_weight, total_weight) if total_weight > 0 else 100

    return CoverageAnalysis(
        raw_score=raw_score,
        weighted_score=weighted_score,
        used_terms=used_terms,
        missing_terms=missing_terms,
        critical_missing=[t for t in missing_terms if t.importance >= critical_threshold],
        header_missing=[t for t in missing_terms if t.category.is_heading_class],
        body_missing=[t for t in missing_terms if not t.category.is_heading_class],
    )


def coverage_gap(analysis: CoverageAnalysis, target_coverage: int) -> int:
    """
    Number of additional terms that must be used to reach a raw target.

    Returns 0 when the target is already met.
    """
    if analysis.raw_score >= target_coverage or analysis.term_count == 0:
        return 0
    for used in range(analysis.used_count + 1, analysis.term_count + 1):
        if percent(used, analysis.term_count) >= target_coverage:
            return used - analysis.used_count
    return analysis.term_count - analysis.used_count


def describe_coverage(analysis: CoverageAnalysis, label: Optional[str] = None) -> str:
    """One-line description of an analysis for logs."""
    prefix = f"{label}: " if label else ""
    return (
        f"{prefix}{analysis.raw_score}% raw, {analysis.weighted_score}% weighted "
        f"({analysis.used_count}/{analysis.term_count} terms)"
    )
