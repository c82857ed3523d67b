# -*- coding: utf-8 -*-
"""
Centralized configuration for the NLP term injector.

This module provides the run options of an injection pass and the
tuning constants shared by the insertion point locator and the header
injector.
"""

import math
from dataclasses import dataclass, field
from typing import Any, Mapping, Optional


@dataclass(frozen=True)
class InsertionLimits:
    """
    Thresholds and weights used when picking insertion points.

    Attributes:
        min_block_length: Blocks shorter than this lack context.
        max_block_length: Blocks longer than this risk incoherent splicing.
        max_insertions_per_block: Saturation cap for one block in one run.
        min_relevance_score: Candidates scoring below this are rejected.
        related_term_weight: Score per related word found in the block.
        term_word_weight: Score per term word (len > 3) found in the block.
        structure_bonus: Bonus for blocks with two or more sentence marks.
        substantial_sentence_length: Sentences longer than this count
            towards the splice position.
        critical_importance: Importance at or above which a term is critical.
        forced_header_importance: Importance at or above which a term may be
            injected into a heading without word overlap.
        max_heading_length: Headings longer than this are never rewritten.
        short_heading_length: Headings shorter than this may use the
            append style.
        max_header_injections: Hard cap on the header pass budget.
        header_budget_ratio: Share of the insertion budget the header pass gets.
    """
    min_block_length: int = 80
    max_block_length: int = 600
    max_insertions_per_block: int = 2
    min_relevance_score: int = 10
    related_term_weight: int = 15
    term_word_weight: int = 10
    structure_bonus: int = 5
    substantial_sentence_length: int = 20
    critical_importance: int = 80
    forced_header_importance: int = 90
    max_heading_length: int = 80
    short_heading_length: int = 40
    max_header_injections: int = 5
    header_budget_ratio: float = 0.2


DEFAULT_LIMITS = InsertionLimits()

# Option names accepted by from_options, camelCase as sent by the editor UI
_OPTION_ALIASES = {
    "targetCoverage": "target_coverage",
    "maxInsertions": "max_insertions",
    "injectHeaders": "inject_headers",
    "prioritizeCritical": "prioritize_critical",
}


@dataclass
class InjectionConfig:
    """
    Options for one injection run.

    Attributes:
        target_coverage: Raw coverage percentage at which the run stops.
        max_insertions: Maximum successful insertions (header + body).
        inject_headers: Run the header pass before the body pass.
        prioritize_critical: Try critical terms first, then by importance.
        seed: Seed for template and style choice. None means unseeded.
        limits: Tuning constants for point selection and header rewrites.
    """

    target_coverage: int = 85
    max_insertions: int = 30
    inject_headers: bool = True
    prioritize_critical: bool = True
    seed: Optional[int] = None
    limits: InsertionLimits = field(default_factory=InsertionLimits)

    def __post_init__(self):
        """Validate configuration values."""
        if not 0 <= self.target_coverage <= 100:
            raise ValueError(
                f"target_coverage must be between 0 and 100, got {self.target_coverage}"
            )
        if self.max_insertions < 0:
            raise ValueError(f"max_insertions must be >= 0, got {self.max_insertions}")
        if self.limits.min_block_length > self.limits.max_block_length:
            raise ValueError(
                f"min_block_length ({self.limits.min_block_length}) must be <= "
                f"max_block_length ({self.limits.max_block_length})"
            )

    @property
    def header_budget(self) -> int:
        """Number of heading rewrites the header pass may spend."""
        return min(
            self.limits.max_header_injections,
            math.ceil(self.max_insertions * self.limits.header_budget_ratio),
        )

    @classmethod
    def body_only(cls, **overrides) -> "InjectionConfig":
        """Create a config that skips the header pass.

        Args:
            **overrides: Override any config values.

        Returns:
            InjectionConfig with inject_headers disabled.
        """
        defaults: dict[str, Any] = {"inject_headers": False}
        defaults.update(overrides)
        return cls(**defaults)

    @classmethod
    def from_options(cls, options: Optional[Mapping[str, Any]] = None) -> "InjectionConfig":
        """Create a config from an options mapping.

        Accepts snake_case field names or their camelCase aliases. Keys
        whose value is None are ignored so callers can pass sparse options.

        Raises:
            ValueError: On unknown option names or invalid values.
        """
        kwargs: dict[str, Any] = {}
        for name, value in (options or {}).items():
            if value is None:
                continue
            field_name = _OPTION_ALIASES.get(name, name)
            if field_name not in cls.__dataclass_fields__:
                raise ValueError(f"Unknown injection option: '{name}'")
            kwargs[field_name] = value
        return cls(**kwargs)
