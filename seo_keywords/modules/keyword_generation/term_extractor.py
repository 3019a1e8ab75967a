"""Salient-word extraction from free-text business descriptions."""

import re

MAX_TERMS = 5
MIN_TERM_LENGTH = 3

STOP_WORDS = frozenset({
    "a", "an", "the", "and", "or", "but", "in", "on", "at", "to", "for",
    "of", "with", "by", "is", "are", "was", "were", "be", "been", "have",
    "has", "had", "do", "does", "did", "will", "would", "could", "should",
    "may", "might", "can", "their", "there", "they", "them", "these",
    "those", "this", "that", "all", "your", "most",
})

_NON_WORD = re.compile(r"[^\w\s]+")


def extract_key_terms(business: str) -> list[str]:
    """Return up to five salient lowercase words from a business description.

    Punctuation becomes whitespace, tokens of two characters or fewer and
    stop-words are dropped, and the survivors keep their original order.
    Repeated words are not collapsed.

    Examples:
        >>> extract_key_terms("Professional pet grooming services for dogs and cats")
        ['professional', 'pet', 'grooming', 'services', 'dogs']
    """
    tokens = _NON_WORD.sub(" ", business.lower()).split()
    terms = [
        token for token in tokens
        if len(token) >= MIN_TERM_LENGTH and token not in STOP_WORDS
    ]
    return terms[:MAX_TERMS]
