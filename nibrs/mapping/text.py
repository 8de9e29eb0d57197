"""
Text helpers shared by the classifiers and extractors.

All term matching is boundary-aware at the start of a term, so "drug"
matches "drugs" but "man" never matches "woman".
"""

import re
from functools import lru_cache
from typing import Iterable, Mapping, Optional

_WHITESPACE = re.compile(r"\s+")
_SENTENCE_BREAK = re.compile(r"(?<=[.!?;])\s+")
_TOKEN = re.compile(r"[a-z0-9]+")


def normalize_text(text: Optional[str]) -> str:
    """Lowercase, trim and collapse whitespace."""
    if not text:
        return ""
    return _WHITESPACE.sub(" ", text).strip().lower()


@lru_cache(maxsize=2048)
def _term_regex(term: str) -> re.Pattern:
    return re.compile(r"\b" + re.escape(term.lower()))


def has_term(text: Optional[str], terms: Iterable[str]) -> bool:
    """True if any term occurs in text."""
    if not text:
        return False
    lowered = text.lower()
    return any(_term_regex(term).search(lowered) for term in terms)


def keyword_lookup(text: Optional[str], table: Mapping[str, str]) -> Optional[tuple[str, str]]:
    """
    Look up the longest table keyword that occurs in text.

    Returns:
        (keyword, code) or None
    """
    if not text:
        return None
    lowered = text.lower()
    for keyword in sorted(table, key=len, reverse=True):
        if _term_regex(keyword).search(lowered):
            return keyword, table[keyword]
    return None


def contains_words(haystack: str, needle: str) -> bool:
    """True if needle occurs in haystack on word boundaries at both ends."""
    if not needle:
        return False
    return re.search(r"(?<!\w)" + re.escape(needle) + r"(?!\w)", haystack) is not None


def tokens(text: str, min_length: int = 3) -> set[str]:
    """Distinct lowercase word tokens of at least min_length characters."""
    return {t for t in _TOKEN.findall(text.lower()) if len(t) >= min_length}


def split_sentences(text: Optional[str]) -> list[str]:
    """Split a narrative into sentences (semicolons count as breaks)."""
    if not text:
        return []
    return [s.strip() for s in _SENTENCE_BREAK.split(text) if s.strip()]


def sentence_containing(narrative: Optional[str], fragment: str) -> Optional[str]:
    """The first narrative sentence that contains fragment, case-insensitively."""
    needle = normalize_text(fragment)
    if not needle:
        return None
    for sentence in split_sentences(narrative):
        if needle in normalize_text(sentence):
            return sentence
    return None
