"""
NLP Term Injector

A heuristic text-augmentation engine that:
- Measures lexical coverage of weighted terms in HTML content
- Finds relevant blocks for each missing term
- Splices template sentences and rewrites headings until a target
  coverage is met, with an auditable report of every change
"""

__version__ = "1.0.0"
__author__ = "NLP Term Injector Team"

from .config import InjectionConfig, InsertionLimits

from .models import (
    Term,
    TermCategory,
    TermUsage,
    CoverageAnalysis,
    BlockKind,
    InsertPosition,
    PlacementKind,
    InsertionPoint,
    InsertionDetail,
    InjectionResult,
    FAQItem,
)

from .coverage import (
    analyze_coverage,
    coverage_gap,
    find_term_positions,
)

from .related_terms import get_related_terms

from .document import ContentDocument

from .insertion_points import find_insertion_points

from .templates import TemplateSelector, INSERTION_TEMPLATES

from .sentence_injector import (
    SentenceInjector,
    InsertionOutcome,
    splice_sentence,
    split_into_chunks,
)

from .header_injector import inject_header_terms

from .injector import TermInjector, inject_missing_terms

from .enrichment import create_enriched_callout, generate_term_faqs

from .term_loader import (
    TermLoadError,
    load_terms,
    parse_terms_payload,
    deduplicate_terms,
    sort_terms_by_importance,
)

from .report import format_report_text, format_report_dict

__all__ = [
    # Configuration
    "InjectionConfig",
    "InsertionLimits",
    # Models
    "Term",
    "TermCategory",
    "TermUsage",
    "CoverageAnalysis",
    "BlockKind",
    "InsertPosition",
    "PlacementKind",
    "InsertionPoint",
    "InsertionDetail",
    "InjectionResult",
    "FAQItem",
    # Coverage
    "analyze_coverage",
    "coverage_gap",
    "find_term_positions",
    # Related terms
    "get_related_terms",
    # Document
    "ContentDocument",
    # Insertion
    "find_insertion_points",
    "TemplateSelector",
    "INSERTION_TEMPLATES",
    "SentenceInjector",
    "InsertionOutcome",
    "splice_sentence",
    "split_into_chunks",
    "inject_header_terms",
    # Orchestration
    "TermInjector",
    "inject_missing_terms",
    # Enrichment
    "create_enriched_callout",
    "generate_term_faqs",
    # Term loading
    "TermLoadError",
    "load_terms",
    "parse_terms_payload",
    "deduplicate_terms",
    "sort_terms_by_importance",
    # Reports
    "format_report_text",
    "format_report_dict",
]
