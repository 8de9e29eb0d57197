"""
Predicates — Yes/no questions the mapper and validator ask about codes
and narrative text.
"""

import re
from typing import Optional

from nibrs.codes.tables import (
    CLEARED_BY_ARREST_KEYWORDS,
    GROUP_B_CODES,
    IMPAIRMENT_TERMS,
    NEGATED_ARREST_PHRASES,
    NON_OFFENSE_PHRASES,
    PRESENT_ACTION_TERMS,
    RETROSPECTIVE_TERMS,
    TRAFFIC_EXCLUSION_PHRASES,
    VICTIMLESS_OFFENSE_CODES,
)
from nibrs.mapping.text import has_term, sentence_containing


def is_victimless_offense(code: Optional[str]) -> bool:
    """True iff the offense is reported against Society rather than a person."""
    return code in VICTIMLESS_OFFENSE_CODES


def is_group_b_offense(code: Optional[str]) -> bool:
    return code in GROUP_B_CODES


def is_non_offense(text: Optional[str]) -> bool:
    """True if text describes an incidental fact rather than a crime."""
    return has_term(text, NON_OFFENSE_PHRASES)


def is_traffic_offense(text: Optional[str]) -> bool:
    """
    True if text describes a traffic collision with no impairment.

    A collision alone is not NIBRS-reportable; one involving DUI vocabulary
    is, so impairment terms negate the match.
    """
    if not has_term(text, TRAFFIC_EXCLUSION_PHRASES):
        return False
    return not has_term(text, IMPAIRMENT_TERMS)


# A negator and auxiliaries before an arrest keyword: "no one was taken into
# custody", "nobody has been charged"
_AUXILIARY = r"(?:was|were|is|are|be|been|being|has|have|had|yet|ever|formally|immediately)"
_NEGATED_ARREST = re.compile(
    r"\b(?:no one|nobody|not|never|none)(?:\s+" + _AUXILIARY + r")*\s+(?:"
    + "|".join(re.escape(k) for k in sorted(CLEARED_BY_ARREST_KEYWORDS, key=len, reverse=True))
    + r")\b"
)


def _strip_negated_arrests(narrative: str) -> str:
    lowered = narrative.lower()
    for phrase in sorted(NEGATED_ARREST_PHRASES, key=len, reverse=True):
        lowered = re.sub(r"\b" + re.escape(phrase) + r"\b", " ", lowered)
    return _NEGATED_ARREST.sub(" ", lowered)


def was_cleared_by_arrest(narrative: Optional[str]) -> bool:
    """True if the narrative contains arrest evidence."""
    if not narrative:
        return False
    return has_term(_strip_negated_arrests(narrative), CLEARED_BY_ARREST_KEYWORDS)


def is_within_current_incident(text: Optional[str], narrative: Optional[str] = "") -> bool:
    """
    Decide whether a fact belongs to the incident being reported.

    Text with retrospective language ("prior arrest", "previously", "records
    check") is excluded unless its sentence also carries a present-action
    verb ("arrived", "observed", "seized"). Everything else, including text
    with neither kind of cue, counts as part of the current incident.
    """
    if not text or not text.strip():
        return True
    if not has_term(text, RETROSPECTIVE_TERMS):
        return True

    sentence = sentence_containing(narrative, text) or text
    return has_term(sentence, PRESENT_ACTION_TERMS)
