"""
Sentence templates and template selection.

Each category is a small fixed list of sentence frames with a ``{term}``
placeholder. The selector picks a category from the term and the
insertion point, then a frame uniformly at random within it. Randomness
comes from an injectable ``random.Random`` so runs can be reproduced.
"""

import html
import random
from types import MappingProxyType
from typing import Optional

from .models import InsertionPoint, InsertPosition, Term

TERM_PLACEHOLDER = "{term}"

INSERTION_TEMPLATES = MappingProxyType({
    "definition": (
        "{term} refers to the practices that shape the outcome described here.",
        "Understanding {term} is essential before going further.",
        "{term} plays a crucial role in this part of the picture.",
        "The concept of {term} ties these ideas together.",
        "When examining {term}, it helps to keep the bigger picture in mind.",
    ),
    "importance": (
        "{term} is particularly important at this stage.",
        "Many experts single out {term} as a deciding factor.",
        "The significance of {term} is hard to overstate here.",
        "{term} directly shapes how well this works in practice.",
        "Focusing on {term} helps keep the work on track.",
    ),
    "example": (
        "A good example of this is {term}.",
        "{term} shows how these ideas play out in practice.",
        "Consider how {term} applies in a situation like this.",
        "{term} is a common case where this comes up.",
        "Real-world applications of this include {term}.",
    ),
    "comparison": (
        "Unlike older approaches, {term} keeps the focus where it belongs.",
        "{term} differs from the alternatives in a few useful ways.",
        "Compared to the alternatives, {term} tends to hold up well.",
        "What sets {term} apart is how directly it addresses the problem.",
        "{term} stands out when the options are weighed side by side.",
    ),
    "action": (
        "To put {term} to work, start with the basics outlined here.",
        "Start by focusing on {term}.",
        "{term} requires careful attention from the outset.",
        "When applying {term}, keep the goals of the page in view.",
        "{term} works best when it is planned from the beginning.",
    ),
    "transition": (
        "This relates directly to {term}.",
        "Building on this, {term} deserves a closer look.",
        "Furthermore, {term} adds another useful angle.",
        "In addition to the above, {term} is worth keeping in mind.",
        "{term} also contributes to the overall picture.",
    ),
    "expert": (
        "Industry experts recommend paying close attention to {term}.",
        "Research consistently points to the value of {term}.",
        "Studies show that {term} makes a measurable difference.",
        "According to common guidance, {term} deserves a place in the plan.",
        "Professionals often rely on {term} to get consistent outcomes.",
    ),
})

TEMPLATE_CATEGORIES = tuple(INSERTION_TEMPLATES)
HEADING_CLASS_CATEGORIES = ("importance", "definition")
MIN_RELATED_FOR_EXAMPLE = 2


def emphasize(term_text: str) -> str:
    """Wrap term text in inline emphasis markup."""
    return f"<strong>{html.escape(term_text, quote=False)}</strong>"


def render_template(template: str, term_text: str) -> str:
    """Substitute the emphasized term for the placeholder."""
    return template.replace(TERM_PLACEHOLDER, emphasize(term_text))


class TemplateSelector:
    """
    Chooses a sentence template for a term at an insertion point.

    Category policy, first match wins:
    - title/header terms: importance or definition
    - two or more related words matched at the point: example
    - start position: action
    - end position: transition
    - otherwise: any category
    """

    def __init__(self, rng: Optional[random.Random] = None):
        self.rng = rng or random.Random()

    def select_category(self, term: Term, point: InsertionPoint) -> str:
        """Pick the template category."""
        if term.category.is_heading_class:
            return self.rng.choice(HEADING_CLASS_CATEGORIES)
        if len(point.matched_related_terms) >= MIN_RELATED_FOR_EXAMPLE:
            return "example"
        if point.insert_position == InsertPosition.START:
            return "action"
        if point.insert_position == InsertPosition.END:
            return "transition"
        return self.rng.choice(TEMPLATE_CATEGORIES)

    def select(self, term: Term, point: InsertionPoint) -> tuple[str, str]:
        """
        Pick a template for ``term`` at ``point``.

        Returns:
            Tuple of (category, template).
        """
        category = self.select_category(term, point)
        template = self.rng.choice(INSERTION_TEMPLATES[category])
        return category, template
