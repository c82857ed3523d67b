"""
Term-rich content additions.

Helpers that produce new content around a set of terms instead of
splicing into existing blocks: a styled callout listing the most
important terms, and FAQ top-ups for terms the existing FAQs miss.
"""

import html
from dataclasses import dataclass
from typing import Literal, Optional

from .models import FAQItem, Term
from .templates import emphasize

CalloutStyle = Literal["tip", "info", "warning", "expert"]

CALLOUT_TERM_LIMIT = 5


@dataclass(frozen=True)
class CalloutTheme:
    color: str
    icon: str
    label: str


CALLOUT_THEMES: dict[str, CalloutTheme] = {
    "tip": CalloutTheme(color="#10b981", icon="\U0001F4A1", label="Pro Tip"),
    "info": CalloutTheme(color="#3b82f6", icon="ℹ️", label="Key Concepts"),
    "warning": CalloutTheme(color="#f59e0b", icon="⚠️", label="Important"),
    "expert": CalloutTheme(color="#8b5cf6", icon="\U0001F3AF", label="Expert Insight"),
}

FAQ_QUESTION_TEMPLATES = (
    "What is {term} and why does it matter for {topic}?",
    "How does {term} improve {topic} results?",
    "What are the best practices for {term} in {topic}?",
    "Why is {term} essential for successful {topic}?",
    "How do experts use {term} to optimize {topic}?",
)

FAQ_ANSWER_TEMPLATE = (
    "{term} is a crucial aspect of {topic} that directly impacts overall success. "
    "Understanding and properly implementing {term} can significantly improve your outcomes. "
    "Experts recommend focusing on {term} early in your {topic} strategy to establish a "
    "strong foundation for long-term results."
)


def top_terms(terms: list[Term], limit: int = CALLOUT_TERM_LIMIT) -> list[Term]:
    """Most important terms first, at most ``limit``."""
    return sorted(terms, key=lambda t: t.importance, reverse=True)[:limit]


def create_enriched_callout(
    terms: list[Term],
    topic: str,
    style: CalloutStyle = "tip",
) -> str:
    """
    Build a callout block that mentions the top terms.

    Args:
        terms: Terms to feature; the five most important are used.
        topic: Topic of the page, used in the callout sentence.
        style: One of tip, info, warning, expert.

    Returns:
        Callout markup, or an empty string when there are no terms.

    Raises:
        ValueError: If the style is unknown.
    """
    if not terms:
        return ""
    if style not in CALLOUT_THEMES:
        raise ValueError(f"style must be one of {', '.join(CALLOUT_THEMES)}, got '{style}'")

    theme = CALLOUT_THEMES[style]
    term_list = ", ".join(emphasize(t.text) for t in top_terms(terms))
    safe_topic = html.escape(topic, quote=False)
    color = theme.color

    return (
        f'<div class="term-callout term-callout-{style}" style="background: linear-gradient(135deg, '
        f'{color}12 0%, {color}08 100%); border-left: 5px solid {color}; '
        f'border-radius: 0 16px 16px 0; padding: 28px 32px; margin: 32px 0;">\n'
        f'  <div style="display: flex; align-items: center; gap: 12px; margin-bottom: 14px;">\n'
        f'    <span style="font-size: 24px;">{theme.icon}</span>\n'
        f'    <span style="color: {color}; font-size: 12px; font-weight: 800; '
        f'text-transform: uppercase; letter-spacing: 2px;">{theme.label}</span>\n'
        f'  </div>\n'
        f'  <p style="font-size: 16px; line-height: 1.75; margin: 0;">When mastering {safe_topic}, '
        f'focus on these essential elements: {term_list}. '
        f'Each plays a vital role in achieving optimal results.</p>\n'
        f'</div>'
    )


def _faq_mentions(faqs: list[FAQItem], terms: list[Term]) -> set[str]:
    """Keys of terms mentioned anywhere in the FAQs (plain substring check)."""
    mentioned: set[str] = set()
    for faq in faqs:
        text = f"{faq.question} {faq.answer}".lower()
        mentioned.update(t.key for t in terms if t.key in text)
    return mentioned


def generate_term_faqs(
    topic: str,
    terms: list[Term],
    existing_faqs: Optional[list[FAQItem]] = None,
    target_count: int = 10,
) -> list[FAQItem]:
    """
    Top up an FAQ list with questions about terms it does not mention yet.

    Unmentioned terms are used in descending importance. The question
    template cycles with the current number of FAQs. The answers are
    placeholders meant to be rewritten by an editor.

    Args:
        topic: Topic of the page.
        terms: Candidate terms.
        existing_faqs: FAQs already on the page; returned first, unchanged.
        target_count: Size the list is topped up to.

    Returns:
        Existing FAQs followed by generated ones, never more than
        ``target_count`` in total unless the existing list is already longer.
    """
    faqs = list(existing_faqs or [])
    if not terms or len(faqs) >= target_count:
        return faqs

    mentioned = _faq_mentions(faqs, terms)
    unused = sorted(
        (t for t in terms if t.key not in mentioned),
        key=lambda t: t.importance,
        reverse=True,
    )

    for term in unused:
        if len(faqs) >= target_count:
            break
        template = FAQ_QUESTION_TEMPLATES[len(faqs) % len(FAQ_QUESTION_TEMPLATES)]
        faqs.append(FAQItem(
            question=template.format(term=term.text, topic=topic),
            answer=FAQ_ANSWER_TEMPLATE.format(term=term.text, topic=topic),
        ))

    return faqs
