"""
Run reports for term injection.

Renders an InjectionResult as a human-readable text report or a plain
dict, and logs the end-of-run summary.
"""

import logging
from collections import Counter
from datetime import datetime
from typing import Any, Optional

from .models import InjectionResult

logger = logging.getLogger(__name__)


def placement_counts(result: InjectionResult) -> dict[str, int]:
    """Number of insertions per placement kind."""
    counts = Counter(detail.placement_kind.value for detail in result.insertion_report)
    return dict(counts)


def format_report_text(result: InjectionResult, title: Optional[str] = None) -> str:
    """
    Format an injection result as human-readable text.

    Args:
        result: InjectionResult to format.
        title: Optional document title for the header.

    Returns:
        Formatted text report.
    """
    lines = []
    lines.append("=" * 60)
    lines.append("NLP TERM INJECTION REPORT")
    lines.append("=" * 60)
    lines.append("")

    if title:
        lines.append(f"Document: {title}")
    lines.append(f"Timestamp: {datetime.now().isoformat(timespec='seconds')}")
    lines.append("")

    lines.append("-" * 40)
    lines.append("COVERAGE")
    lines.append("-" * 40)
    lines.append(f"Initial coverage: {result.initial_coverage}%")
    lines.append(f"Final coverage: {result.final_coverage}%")
    lines.append(f"Gain: {result.coverage_gain:+d} points")
    lines.append("")

    lines.append("-" * 40)
    lines.append("TERMS")
    lines.append("-" * 40)
    lines.append(f"Added: {len(result.added_terms)}")
    for kind, count in sorted(placement_counts(result).items()):
        lines.append(f"  - {kind}: {count}")
    lines.append(f"Failed: {len(result.failed_terms)}")
    if result.failed_terms:
        lines.append(f"  {', '.join(result.failed_terms)}")
    lines.append("")

    if result.insertion_report:
        lines.append("-" * 40)
        lines.append("INSERTIONS")
        lines.append("-" * 40)
        for detail in result.insertion_report:
            lines.append(
                f"[{detail.placement_kind.value}] {detail.term} "
                f"(score {detail.relevance_score}): {detail.template_used}"
            )
        lines.append("")

    lines.append("=" * 60)
    return "\n".join(lines)


def format_report_dict(result: InjectionResult) -> dict[str, Any]:
    """
    Format an injection result as a dictionary (without the content).

    Args:
        result: InjectionResult to format.

    Returns:
        Dictionary suitable for JSON serialization.
    """
    return {
        "coverage": {
            "initial": result.initial_coverage,
            "final": result.final_coverage,
            "gain": result.coverage_gain,
        },
        "terms": {
            "added": list(result.added_terms),
            "failed": list(result.failed_terms),
            "by_placement": placement_counts(result),
        },
        "insertions": [detail.to_dict() for detail in result.insertion_report],
    }


def log_injection_summary(result: InjectionResult) -> None:
    """Log a summary of an injection run."""
    logger.info(f"Coverage: {result.initial_coverage}% -> {result.final_coverage}%")
    logger.info(f"  Terms added: {len(result.added_terms)}")
    if result.failed_terms:
        logger.warning(f"  Terms without a placement: {', '.join(result.failed_terms)}")
