"""
Term injection orchestrator.

Drives one injection run end to end:

1. Degenerate input (empty content or no terms): pass through.
2. Initial coverage analysis; early exit if the target is already met.
3. Order the missing terms (critical first, then by importance).
4. Header pass: rewrite headings for title/header terms.
5. Body pass: for each remaining term, re-check the live score, find the
   best insertion point and splice a template sentence into it.
6. Serialize and run the final coverage analysis.

Each run parses its own document and keeps its own saturation counters
and report; nothing is shared between runs.
"""

import logging
import random
from typing import Any, Mapping, Optional

from .config import InjectionConfig
from .coverage import analyze_coverage, describe_coverage
from .document import ContentDocument
from .header_injector import inject_header_terms
from .insertion_points import find_insertion_points
from .models import (
    BlockKind,
    InjectionResult,
    InsertionDetail,
    PlacementKind,
    Term,
    TermLike,
    coerce_terms,
)
from .sentence_injector import SentenceInjector
from .templates import TemplateSelector

logger = logging.getLogger(__name__)

HEADER_TEMPLATE_LABEL = "header injection"
HEADER_RELEVANCE_SCORE = 100


def prioritize_terms(terms: list[Term], critical_importance: int = 80) -> list[Term]:
    """Stable sort: critical terms first, then by descending importance."""
    return sorted(
        terms,
        key=lambda t: (t.importance < critical_importance, -t.importance),
    )


def _unique_terms(terms: list[Term]) -> list[Term]:
    seen: set[str] = set()
    unique: list[Term] = []
    for term in terms:
        if term.key not in seen:
            seen.add(term.key)
            unique.append(term)
    return unique


class TermInjector:
    """
    Injects missing terms into content until a coverage target is met.

    Usage:
        injector = TermInjector(InjectionConfig(target_coverage=90))
        result = injector.inject(html, terms)
    """

    def __init__(
        self,
        config: Optional[InjectionConfig] = None,
        rng: Optional[random.Random] = None,
    ):
        """
        Initialize the injector.

        Args:
            config: Run options. Defaults to InjectionConfig().
            rng: Random source for template and heading style choice.
                Defaults to a Random seeded with ``config.seed``.
        """
        self.config = config or InjectionConfig()
        self.rng = rng or random.Random(self.config.seed)
        self.sentence_injector = SentenceInjector(TemplateSelector(self.rng))

    def inject(self, content: str, terms: list[TermLike]) -> InjectionResult:
        """
        Run the injection pipeline on content.

        Args:
            content: Content markup.
            terms: Term records (Term objects or mappings).

        Returns:
            InjectionResult with the final markup, added/failed terms,
            coverage before and after and the insertion report.
        """
        config = self.config
        limits = config.limits
        terms = coerce_terms(terms)

        if not content or not terms:
            logger.info("Nothing to inject: empty content or term list")
            return InjectionResult(final_content=content)

        initial = analyze_coverage(content, terms, limits.critical_importance)
        logger.info(describe_coverage(initial, "Initial coverage"))

        if initial.raw_score >= config.target_coverage:
            logger.info(f"Target {config.target_coverage}% already met, content unchanged")
            return InjectionResult(
                final_content=content,
                initial_coverage=initial.raw_score,
                final_coverage=initial.raw_score,
            )

        document = ContentDocument.parse(content)
        added: list[str] = []
        failed: list[str] = []
        report: list[InsertionDetail] = []
        saturation: dict[int, int] = {}

        work_list = _unique_terms(initial.missing_terms)
        if config.prioritize_critical:
            work_list = prioritize_terms(work_list, limits.critical_importance)

        if config.inject_headers:
            header_candidates = [t for t in work_list if t.category.is_heading_class]
            injected = inject_header_terms(
                document,
                header_candidates,
                max_count=config.header_budget,
                rng=self.rng,
                limits=limits,
            )
            for term_text in injected:
                added.append(term_text)
                report.append(InsertionDetail(
                    term=term_text,
                    placement_kind=PlacementKind.HEADING,
                    template_used=HEADER_TEMPLATE_LABEL,
                    relevance_score=HEADER_RELEVANCE_SCORE,
                ))
            injected_keys = {text.lower() for text in injected}
            work_list = [t for t in work_list if t.key not in injected_keys]

        for term in work_list:
            if len(added) >= config.max_insertions:
                logger.info(f"Insertion budget of {config.max_insertions} spent")
                break

            current = analyze_coverage(document.serialize(), terms, limits.critical_importance)
            if current.raw_score >= config.target_coverage:
                logger.info(f"Target reached at {current.raw_score}%, stopping body pass")
                break

            points = find_insertion_points(document, term, saturation, limits)
            if not points:
                logger.debug(f"No insertion point for '{term.text}'")
                failed.append(term.text)
                continue

            best = points[0]
            outcome = self.sentence_injector.insert(term, best)
            if not outcome.success:
                failed.append(term.text)
                continue

            added.append(term.text)
            saturation[best.block_index] = saturation.get(best.block_index, 0) + 1
            report.append(InsertionDetail(
                term=term.text,
                placement_kind=(
                    PlacementKind.LIST if best.block_kind == BlockKind.LIST_ITEM
                    else PlacementKind.PARAGRAPH
                ),
                template_used=outcome.template,
                relevance_score=best.relevance_score,
            ))

        final_content = document.serialize()
        final = analyze_coverage(final_content, terms, limits.critical_importance)
        logger.info(describe_coverage(final, "Final coverage"))

        return InjectionResult(
            final_content=final_content,
            added_terms=added,
            failed_terms=failed,
            initial_coverage=initial.raw_score,
            final_coverage=final.raw_score,
            insertion_report=report,
        )


def inject_missing_terms(
    content: str,
    terms: list[TermLike],
    options: Optional[Mapping[str, Any]] = None,
    rng: Optional[random.Random] = None,
    **overrides: Any,
) -> InjectionResult:
    """
    Convenience function for a single injection run.

    Args:
        content: Content markup.
        terms: Term records.
        options: Options mapping (snake_case or camelCase names).
        rng: Optional random source.
        **overrides: Option values given as keyword arguments.

    Returns:
        InjectionResult.
    """
    merged = dict(options or {})
    merged.update(overrides)
    injector = TermInjector(InjectionConfig.from_options(merged), rng=rng)
    return injector.inject(content, terms)
