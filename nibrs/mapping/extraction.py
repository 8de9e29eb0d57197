"""
Narrative Extraction — Regex pulls of arrestees, property, evidence and
drug details from the raw narrative.

Each extractor deduplicates by normalized description text, and skips
sentences that describe earlier incidents.
"""

import re
from typing import Optional, Sequence

from nibrs.codes.tables import (
    DRUG_MEASUREMENT_UNITS,
    DRUG_PROPERTY_TERMS,
    DRUG_TYPE_KEYWORDS,
    EVIDENCE_TERMS,
)
from nibrs.core.logging import get_logger, LogChannel
from nibrs.ir.enums import ArrestType
from nibrs.ir.schema import Arrestee, Evidence, PropertyDescription
from nibrs.mapping.predicates import is_within_current_incident, was_cleared_by_arrest
from nibrs.mapping.text import has_term, normalize_text, split_sentences

log = get_logger(LogChannel.EXTRACT)


# ============================================================================
# Arrestees
# ============================================================================

SUMMONS_TERMS = ("summons", "summoned", "cited", "citation", "notice to appear")
ON_VIEW_TERMS = ("on-view", "on view", "at the scene", "on scene", "in the act")

_NAME = r"([A-Z][a-z]+(?:\s+[A-Z]\.)?(?:\s+[A-Z][a-z'\-]+)+)"
_ARREST_VERB = r"(?:arrested|booked|cited|summoned|taken into custody|placed under arrest)"

_NAME_PATTERNS = (
    re.compile(_NAME + r",?\s+(?:was|were|is)\s+" + _ARREST_VERB),
    re.compile(r"\b(?:arrested|booked|cited|summoned)\s+" + _NAME),
    re.compile(r"\btook\s+" + _NAME + r"\s+into custody"),
)

_TITLES = {
    "officer", "deputy", "sergeant", "sgt", "detective", "det", "trooper",
    "corporal", "lieutenant", "lt", "the", "a", "an", "suspect", "subject",
}


def _arrest_type_for(sentence: str) -> ArrestType:
    if has_term(sentence, SUMMONS_TERMS):
        return ArrestType.SUMMONED
    if has_term(sentence, ON_VIEW_TERMS):
        return ArrestType.ON_VIEW
    return ArrestType.TAKEN_INTO_CUSTODY


def _clean_name(raw: str) -> Optional[str]:
    words = raw.split()
    while words and words[0].lower().rstrip(".") in _TITLES:
        words = words[1:]
    if len(words) < 2:
        return None
    return " ".join(words)


def extract_arrestees(
    narrative: Optional[str],
    offense_codes: Sequence[str],
    incident_date: Optional[str] = None,
) -> list[Arrestee]:
    """
    Pull arrestees from the narrative.

    Returns an empty list unless the narrative contains arrest evidence.
    Named arrestees are deduplicated by name; an arrest with no captured
    name yields a single unnamed arrestee.
    """
    if not was_cleared_by_arrest(narrative):
        return []

    arrest_sentences = [
        s for s in split_sentences(narrative)
        if was_cleared_by_arrest(s) and is_within_current_incident(s, narrative)
    ]
    if not arrest_sentences:
        arrest_sentences = [narrative]

    arrestees: list[Arrestee] = []
    seen: set[str] = set()

    for sentence in arrest_sentences:
        arrest_type = _arrest_type_for(sentence)
        for pattern in _NAME_PATTERNS:
            for match in pattern.finditer(sentence):
                name = _clean_name(match.group(1))
                if not name or normalize_text(name) in seen:
                    continue
                seen.add(normalize_text(name))
                arrestees.append(
                    Arrestee(
                        arrest_date=incident_date,
                        arrest_type=arrest_type,
                        name=name,
                        offense_codes=list(offense_codes),
                        source_text=sentence,
                    )
                )

    if not arrestees:
        sentence = arrest_sentences[0]
        arrestees.append(
            Arrestee(
                arrest_date=incident_date,
                arrest_type=_arrest_type_for(sentence),
                offense_codes=list(offense_codes),
                source_text=sentence,
            )
        )

    for i, arrestee in enumerate(arrestees, start=1):
        arrestee.sequence_number = i

    log.verbose("arrestees_extracted", count=len(arrestees))
    return arrestees


# ============================================================================
# Property
# ============================================================================

_AMOUNT = r"\$(?P<value>\d[\d,]*(?:\.\d{1,2})?)"
_ITEM = r"(?P<item>(?:[a-z][a-z'\-]*\s+){0,2}[a-z][a-z'\-]*)"

_PROPERTY_PATTERNS = (
    # "laptop ($1,200)"
    re.compile(_ITEM + r"\s*\(\s*" + _AMOUNT + r"\s*\)"),
    # "$500 worth of jewelry"
    re.compile(_AMOUNT + r"\s+worth of\s+" + _ITEM),
    # "$40 in cash"
    re.compile(_AMOUNT + r"\s+in\s+(?P<item>cash|currency)"),
    # "a laptop valued at $1,200"
    re.compile(
        _ITEM + r"\s+(?:valued at|worth|with a value of|estimated at)\s+(?:approximately\s+|about\s+)?"
        + _AMOUNT
    ),
)

_LEADING_NOISE = {
    "a", "an", "the", "his", "her", "their", "my", "its", "one", "two", "some",
    "stole", "stolen", "took", "taken", "including", "and", "of", "was", "were",
    "with", "approximately", "about",
}


def _clean_item(raw: str) -> str:
    words = raw.split()
    while len(words) > 1 and words[0] in _LEADING_NOISE:
        words = words[1:]
    return " ".join(words)


def extract_multiple_properties(narrative: Optional[str]) -> list[PropertyDescription]:
    """
    Pull (item, value) pairs out of the narrative.

    The sentence an item was found in becomes its loss description, so the
    loss type can be inferred from verbs like "stole" or "damaged".
    """
    properties: list[PropertyDescription] = []
    seen: set[str] = set()

    for sentence in split_sentences(narrative):
        if not is_within_current_incident(sentence, narrative):
            continue
        lowered = sentence.lower()
        for pattern in _PROPERTY_PATTERNS:
            for match in pattern.finditer(lowered):
                item = _clean_item(match.group("item"))
                key = normalize_text(item)
                if not key or key in seen:
                    continue
                seen.add(key)
                value = float(match.group("value").replace(",", ""))
                properties.append(
                    PropertyDescription(description=item, value=value, loss_description=sentence)
                )

    if properties:
        log.verbose("properties_extracted", count=len(properties))
    return properties


# ============================================================================
# Evidence
# ============================================================================

def extract_evidence_details(narrative: Optional[str]) -> Optional[Evidence]:
    """Collect firearm, weapon and drug nouns mentioned in the narrative."""
    items: list[str] = []
    sentences: list[str] = []

    for sentence in split_sentences(narrative):
        if not is_within_current_incident(sentence, narrative):
            continue
        lowered = sentence.lower()
        found: list[tuple[int, str]] = []
        for term in EVIDENCE_TERMS:
            m = re.search(r"\b" + re.escape(term) + r"s?\b", lowered)
            if m:
                found.append((m.start(), term))
        for _, term in sorted(found):
            if term not in items:
                items.append(term)
        if found:
            sentences.append(sentence)

    if not items:
        return None

    log.verbose("evidence_extracted", items=items)
    return Evidence(description=" ".join(sentences), items=items)


# ============================================================================
# Drugs
# ============================================================================

_MEASUREMENT = re.compile(
    r"(?P<quantity>\d+(?:\.\d+)?)\s*(?P<unit>"
    + "|".join(re.escape(u) for u in sorted(DRUG_MEASUREMENT_UNITS, key=len, reverse=True))
    + r")\b",
    re.IGNORECASE,
)


def is_drug_text(text: Optional[str]) -> bool:
    return has_term(text, DRUG_PROPERTY_TERMS)


def extract_drug_details(text: Optional[str]) -> tuple[Optional[str], Optional[float], Optional[str]]:
    """
    Pull (drug type, quantity, measurement) from text.

    The drug type is the earliest-mentioned drug, "X" when more than three
    distinct types are present, or "U" for drug text naming no known drug.
    """
    if not text:
        return None, None, None
    lowered = text.lower()

    # Longest keywords claim their span first so "crack cocaine" is not
    # also counted as "cocaine".
    mentions: list[tuple[int, str]] = []
    claimed: list[tuple[int, int]] = []
    for keyword in sorted(DRUG_TYPE_KEYWORDS, key=len, reverse=True):
        for m in re.finditer(r"\b" + re.escape(keyword) + r"\b", lowered):
            if any(start <= m.start() < end for start, end in claimed):
                continue
            claimed.append(m.span())
            mentions.append((m.start(), DRUG_TYPE_KEYWORDS[keyword]))

    distinct = {code for _, code in mentions}
    if len(distinct) > 3:
        drug_type: Optional[str] = "X"
    elif mentions:
        drug_type = min(mentions)[1]
    elif is_drug_text(text):
        drug_type = "U"
    else:
        drug_type = None

    quantity: Optional[float] = None
    measurement: Optional[str] = None
    m = _MEASUREMENT.search(text)
    if m:
        quantity = float(m.group("quantity"))
        measurement = DRUG_MEASUREMENT_UNITS[m.group("unit").lower()]

    return drug_type, quantity, measurement
