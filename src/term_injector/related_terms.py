"""
Related-term resolution from static topic clusters.

Relevance is approximated by cluster membership and loose substring
overlap, not semantics. The tables are module-level constants loaded
once per process.
"""

from types import MappingProxyType

# Topic name -> hand-authored word list
TERM_CLUSTERS = MappingProxyType({
    "seo": ("ranking", "search", "google", "keyword", "optimization", "serp", "traffic", "visibility"),
    "content": ("writing", "article", "blog", "post", "copy", "text", "words", "quality"),
    "marketing": ("strategy", "campaign", "audience", "conversion", "leads", "funnel", "engagement"),
    "technical": ("code", "development", "api", "implementation", "system", "software", "integration"),
    "health": ("wellness", "fitness", "nutrition", "medical", "treatment", "symptoms", "diagnosis"),
    "business": ("company", "revenue", "profit", "growth", "market", "industry", "enterprise"),
    "finance": ("money", "investment", "budget", "cost", "price", "savings", "roi", "return"),
    "ecommerce": ("product", "store", "shop", "cart", "checkout", "shipping", "order", "purchase"),
})

# Always part of the result so every term has some relevance vocabulary
COMMON_RELATED = (
    "important", "effective", "strategy", "approach", "method", "process", "benefit", "result",
)

CLUSTER_MATCH_THRESHOLD = 2
MIN_SIGNIFICANT_WORD_LENGTH = 3


def cluster_match_score(term: str, cluster_words: tuple[str, ...]) -> int:
    """
    Score how strongly a term relates to one cluster.

    +2 for every cluster word that contains the term or is contained in it,
    +1 for every (term word longer than 3 chars, cluster word) pair where the
    cluster word contains the term word.
    """
    term_lower = term.lower()
    term_words = term_lower.split()
    score = 0
    for cluster_word in cluster_words:
        if cluster_word in term_lower or term_lower in cluster_word:
            score += 2
        for word in term_words:
            if len(word) > MIN_SIGNIFICANT_WORD_LENGTH and word in cluster_word:
                score += 1
    return score


def matching_clusters(term: str) -> list[str]:
    """Names of the clusters a term qualifies for, in table order."""
    return [
        name
        for name, words in TERM_CLUSTERS.items()
        if cluster_match_score(term, words) >= CLUSTER_MATCH_THRESHOLD
    ]


def get_related_terms(term: str) -> frozenset[str]:
    """
    Words topically related to a term.

    Args:
        term: Term phrase.

    Returns:
        Words of every qualifying cluster plus the common related words.
    """
    related: set[str] = set(COMMON_RELATED)
    for name in matching_clusters(term):
        related.update(TERM_CLUSTERS[name])
    return frozenset(related)
