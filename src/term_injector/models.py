"""
Data models for the NLP term injector.

This module defines the core data structures shared by the coverage
analyzer, the insertion engine and the reporting layer.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional, Union

DEFAULT_IMPORTANCE = 50


class TermCategory(Enum):
    """Where a term is expected to appear."""
    TITLE = "title"
    HEADER = "header"
    BASIC = "basic"
    EXTENDED = "extended"

    @property
    def is_heading_class(self) -> bool:
        """Title and header terms belong in headings."""
        return self in (TermCategory.TITLE, TermCategory.HEADER)


class BlockKind(Enum):
    """Kinds of content blocks that can receive an insertion."""
    PARAGRAPH = "paragraph"
    LIST_ITEM = "listItem"
    CELL = "cell"
    CONTAINER = "container"


class InsertPosition(Enum):
    """Where a synthesized sentence is spliced into a block."""
    START = "start"
    MIDDLE = "middle"
    END = "end"


class PlacementKind(Enum):
    """Placement recorded in the insertion report."""
    PARAGRAPH = "paragraph"
    LIST = "list"
    HEADING = "heading"
    CALLOUT = "callout"


@dataclass(frozen=True, eq=False)
class Term:
    """
    A weighted keyword phrase the content should mention.

    Identity is case-insensitive text equality (see ``key``), so equality
    and hashing ignore case, category and importance. A missing or zero
    importance becomes ``DEFAULT_IMPORTANCE``.
    """
    text: str
    category: TermCategory = TermCategory.BASIC
    importance: Optional[int] = DEFAULT_IMPORTANCE

    def __post_init__(self) -> None:
        """Normalize text, category and importance."""
        object.__setattr__(self, "text", self.text.strip())
        if not isinstance(self.category, TermCategory):
            object.__setattr__(self, "category", TermCategory(str(self.category).lower()))
        importance = int(self.importance) if self.importance is not None else 0
        object.__setattr__(self, "importance", importance or DEFAULT_IMPORTANCE)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Term):
            return NotImplemented
        return self.key == other.key

    def __hash__(self) -> int:
        return hash(self.key)

    @property
    def key(self) -> str:
        """Case-insensitive identity of the term."""
        return self.text.lower()

    @property
    def words(self) -> list[str]:
        """Lowercased words of the term."""
        return self.key.split()

    def is_critical(self, threshold: int = 80) -> bool:
        """Check if the term's importance reaches the critical threshold."""
        return self.importance >= threshold

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Term":
        """Build a term from a loose mapping (``text``/``term`` plus ``category``/``type``)."""
        text = data.get("text") or data.get("term") or ""
        category = data.get("category") or data.get("type") or TermCategory.BASIC.value
        return cls(text=str(text), category=category, importance=data.get("importance"))

    def to_dict(self) -> dict[str, Any]:
        return {
            "text": self.text,
            "category": self.category.value,
            "importance": self.importance,
        }


TermLike = Union[Term, dict]


@dataclass
class TermUsage:
    """A term found in content, with its occurrence offsets."""
    term: Term
    occurrence_count: int
    match_positions: list[int] = field(default_factory=list)


@dataclass
class CoverageAnalysis:
    """
    Result of a coverage analysis run.

    ``used_terms`` and ``missing_terms`` partition the input terms.
    The three missing buckets are filtered views of ``missing_terms``.
    """
    raw_score: int
    weighted_score: int
    used_terms: list[TermUsage] = field(default_factory=list)
    missing_terms: list[Term] = field(default_factory=list)
    critical_missing: list[Term] = field(default_factory=list)
    header_missing: list[Term] = field(default_factory=list)
    body_missing: list[Term] = field(default_factory=list)

    @classmethod
    def vacuous(cls) -> "CoverageAnalysis":
        """Full coverage with nothing to do (empty content or empty term list)."""
        return cls(raw_score=100, weighted_score=100)

    @property
    def used_count(self) -> int:
        return len(self.used_terms)

    @property
    def term_count(self) -> int:
        return len(self.used_terms) + len(self.missing_terms)

    def to_dict(self) -> dict[str, Any]:
        """Serialize the analysis for reports and API responses."""
        return {
            "raw_score": self.raw_score,
            "weighted_score": self.weighted_score,
            "used_terms": [
                {
                    "term": usage.term.text,
                    "occurrence_count": usage.occurrence_count,
                    "match_positions": list(usage.match_positions),
                }
                for usage in self.used_terms
            ],
            "missing_terms": [t.text for t in self.missing_terms],
            "critical_missing": [t.text for t in self.critical_missing],
            "header_missing": [t.text for t in self.header_missing],
            "body_missing": [t.text for t in self.body_missing],
        }


@dataclass
class InsertionPoint:
    """
    A content block scored as a destination for one term.

    Ephemeral: recomputed for every term on every pass.
    """
    block_index: int
    element: Any  # bs4.element.Tag
    block_kind: BlockKind
    normalized_text: str
    matched_related_terms: list[str] = field(default_factory=list)
    relevance_score: int = 0
    insert_position: InsertPosition = InsertPosition.END


@dataclass
class InsertionDetail:
    """One entry of the append-only insertion report."""
    term: str
    placement_kind: PlacementKind
    template_used: str
    relevance_score: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "term": self.term,
            "placement_kind": self.placement_kind.value,
            "template_used": self.template_used,
            "relevance_score": self.relevance_score,
        }


@dataclass
class InjectionResult:
    """Full result bundle of one injection run."""
    final_content: str
    added_terms: list[str] = field(default_factory=list)
    failed_terms: list[str] = field(default_factory=list)
    initial_coverage: int = 100
    final_coverage: int = 100
    insertion_report: list[InsertionDetail] = field(default_factory=list)

    @property
    def was_modified(self) -> bool:
        return bool(self.added_terms)

    @property
    def coverage_gain(self) -> int:
        return self.final_coverage - self.initial_coverage

    def to_dict(self) -> dict[str, Any]:
        return {
            "final_content": self.final_content,
            "added_terms": list(self.added_terms),
            "failed_terms": list(self.failed_terms),
            "initial_coverage": self.initial_coverage,
            "final_coverage": self.final_coverage,
            "insertion_report": [d.to_dict() for d in self.insertion_report],
        }


@dataclass
class FAQItem:
    """A question/answer pair."""
    question: str
    answer: str

    def to_dict(self) -> dict[str, str]:
        return {"question": self.question, "answer": self.answer}


def coerce_terms(terms: list[TermLike]) -> list[Term]:
    """Accept Term objects or plain mappings and return Term objects."""
    return [t if isinstance(t, Term) else Term.from_dict(t) for t in terms]
