"""
Classifiers — Free text to NIBRS codes.

Every classifier is two-tier: the ordered rules in the classification
ruleset decide first, then a generic fuzzy scorer runs against the
domain's keyword table. Results carry a confidence so review UIs can
separate auto-accepted codes from ones that need a human.
"""

from typing import Mapping, Optional

from nibrs.codes.tables import (
    CYBERSPACE_LOCATION_CODE,
    ETHNICITY_KEYWORDS,
    FALLBACK_KEYWORDS,
    GROUP_A_OFFENSE_CODES,
    GROUP_B_OFFENSE_CODES,
    INJURY_KEYWORDS,
    LOCATION_CODES,
    LOSS_TYPE_CODE_SPACE,
    LOSS_TYPE_KEYWORDS,
    PROPERTY_CODES,
    RACE_KEYWORDS,
    RELATIONSHIP_CODE_SPACE,
    RELATIONSHIP_CODES,
    RELATIONSHIP_NARRATIVE_CUES,
    SEX_KEYWORDS,
    UNKNOWN_RELATIONSHIP_CODE,
    VICTIM_TYPE_KEYWORDS,
    WEAPON_CODES,
)
from nibrs.core.logging import get_logger, LogChannel
from nibrs.ir.enums import Ethnicity, InjuryType, Race, Sex, VictimType
from nibrs.ir.schema import MappingResult
from nibrs.mapping.predicates import is_non_offense, is_traffic_offense
from nibrs.mapping.text import (
    contains_words,
    has_term,
    keyword_lookup,
    normalize_text,
    tokens,
)
from nibrs.policy.engine import get_policy_engine
from nibrs.policy.models import RuleDomain

log = get_logger(LogChannel.MAPPING)

GROUP_A_KEYWORD_CONFIDENCE = 0.85
GROUP_B_KEYWORD_CONFIDENCE = 0.8
FALLBACK_CONFIDENCE = 0.7
LAST_RESORT_CONFIDENCE = 0.2
MIN_MATCH_CONFIDENCE = 0.5


def _unmapped(text: Optional[str]) -> MappingResult:
    return MappingResult(code="", confidence=0.0, original_input=text or "")


# ============================================================================
# Fuzzy Scorer
# ============================================================================

def find_best_match(
    text: Optional[str],
    table: Mapping[str, str],
    domain: Optional[str] = None,
) -> MappingResult:
    """
    Score text against every entry of a keyword table.

    Scoring, best wins:
    - exact key: 1.0
    - one contains the other on word boundaries: 0.8 + 0.1 * length ratio,
      capped at 0.9
    - shared words (3+ letters): 0.6 + 0.3 * shared / larger word count

    Below 0.5 the domain's fallback keywords are tried (0.7). If nothing
    matched at all, the table's first entry is returned at 0.2. Keyword
    tables lead with their generic other/unknown code, so the last resort
    is an honest "unknown" that validation will flag for review.
    """
    if not text or not text.strip():
        return _unmapped(text)

    needle = normalize_text(text)
    if needle in table:
        return MappingResult(code=table[needle], confidence=1.0, original_input=text)

    best = _unmapped(text)
    needle_tokens = tokens(needle)

    for key, code in table.items():
        key_lower = key.lower()
        confidence = 0.0

        if contains_words(needle, key_lower) or contains_words(key_lower, needle):
            ratio = len(key_lower) / len(needle)
            confidence = min(0.9, 0.8 + 0.1 * ratio)
        else:
            key_tokens = tokens(key_lower)
            shared = needle_tokens & key_tokens
            if shared:
                overlap = len(shared) / max(len(needle_tokens), len(key_tokens))
                confidence = 0.6 + 0.3 * overlap

        if confidence > best.confidence:
            best = MappingResult(code=code, confidence=round(confidence, 4), original_input=text)

    if best.confidence < MIN_MATCH_CONFIDENCE and domain in FALLBACK_KEYWORDS:
        hit = keyword_lookup(needle, FALLBACK_KEYWORDS[domain])
        if hit:
            return MappingResult(code=hit[1], confidence=FALLBACK_CONFIDENCE, original_input=text)

    if best.confidence < MIN_MATCH_CONFIDENCE and table:
        first_code = next(iter(table.values()))
        log.debug("last_resort_match", domain=domain, text=text, code=first_code)
        return MappingResult(code=first_code, confidence=LAST_RESORT_CONFIDENCE, original_input=text)

    return best


def _classify(text: str, domain: RuleDomain, table: Mapping[str, str]) -> MappingResult:
    hit = get_policy_engine().classify(text, domain)
    if hit is not None:
        return MappingResult(code=hit.code, confidence=hit.confidence, original_input=text)
    return find_best_match(text, table, domain.value)


# ============================================================================
# Offense
# ============================================================================

def map_offense(text: Optional[str]) -> MappingResult:
    """
    Classify an offense description.

    Incidental facts and bare traffic collisions are rejected outright.
    Otherwise the ordered offense rules decide, then the Group A and
    Group B keyword tables.
    """
    if not text or not text.strip():
        return _unmapped(text)

    if is_non_offense(text):
        log.verbose("offense_rejected", reason="non_offense", text=text)
        return _unmapped(text)

    if is_traffic_offense(text):
        log.verbose("offense_rejected", reason="traffic_collision", text=text)
        return _unmapped(text)

    hit = get_policy_engine().classify(text, RuleDomain.OFFENSE)
    if hit is not None:
        return MappingResult(code=hit.code, confidence=hit.confidence, original_input=text)

    group_a = keyword_lookup(text, GROUP_A_OFFENSE_CODES)
    if group_a:
        return MappingResult(
            code=group_a[1], confidence=GROUP_A_KEYWORD_CONFIDENCE, original_input=text
        )

    group_b = keyword_lookup(text, GROUP_B_OFFENSE_CODES)
    if group_b:
        return MappingResult(
            code=group_b[1], confidence=GROUP_B_KEYWORD_CONFIDENCE, original_input=text
        )

    return _unmapped(text)


# ============================================================================
# Location / Weapon / Property
# ============================================================================

def map_location(text: Optional[str], offense_code: Optional[str] = None) -> MappingResult:
    """Classify a location description. Cyber offenses default to Cyberspace."""
    if not text or not text.strip():
        if offense_code and offense_code.startswith("26"):
            return MappingResult(code=CYBERSPACE_LOCATION_CODE, confidence=0.9, original_input="")
        return _unmapped(text)
    return _classify(text, RuleDomain.LOCATION, LOCATION_CODES)


def map_weapon(text: Optional[str]) -> MappingResult:
    if not text or not text.strip():
        return _unmapped(text)
    return _classify(text, RuleDomain.WEAPON, WEAPON_CODES)


def map_property(text: Optional[str]) -> MappingResult:
    if not text or not text.strip():
        return _unmapped(text)
    return _classify(text, RuleDomain.PROPERTY, PROPERTY_CODES)


# ============================================================================
# Relationship / Loss Type
# ============================================================================

def map_relationship(text: Optional[str], narrative: Optional[str] = None) -> str:
    """
    Map a relationship description to a relationship code.

    Empty or "unknown" text falls back to cues in the narrative
    ("neighbor", "stranger", ...). Defaults to RU.
    """
    desc = normalize_text(text)

    if desc and desc != "unknown":
        upper = desc.upper()
        if upper in RELATIONSHIP_CODE_SPACE:
            return upper
        if desc in RELATIONSHIP_CODES:
            return RELATIONSHIP_CODES[desc]
        hit = keyword_lookup(desc, RELATIONSHIP_CODES)
        if hit:
            return hit[1]

    if narrative:
        for cues, code in RELATIONSHIP_NARRATIVE_CUES:
            if has_term(narrative, cues):
                return code

    return UNKNOWN_RELATIONSHIP_CODE


def map_loss_type(text: Optional[str]) -> str:
    """Map a loss description to a loss type code ("1"-"9"), or ""."""
    desc = normalize_text(text)
    if not desc:
        return ""
    if desc in LOSS_TYPE_CODE_SPACE:
        return desc
    hit = keyword_lookup(desc, LOSS_TYPE_KEYWORDS)
    return hit[1] if hit else ""


# ============================================================================
# Demographics
# ============================================================================

def _normalize_code(
    value: Optional[str],
    codes: set[str],
    keywords: Mapping[str, str],
    default: Optional[str],
) -> Optional[str]:
    if value is None:
        return None
    text = value.strip()
    if not text:
        return None
    if text.upper() in codes and len(text) <= 2:
        return text.upper()
    hit = keyword_lookup(text, keywords)
    return hit[1] if hit else default


def normalize_victim_type(value: Optional[str]) -> str:
    codes = {v.value for v in VictimType}
    code = _normalize_code(value, codes, VICTIM_TYPE_KEYWORDS, VictimType.INDIVIDUAL.value)
    return code or VictimType.INDIVIDUAL.value


def normalize_sex(value: Optional[str]) -> Optional[str]:
    return _normalize_code(value, {v.value for v in Sex}, SEX_KEYWORDS, Sex.UNKNOWN.value)


def normalize_race(value: Optional[str]) -> Optional[str]:
    return _normalize_code(value, {v.value for v in Race}, RACE_KEYWORDS, Race.UNKNOWN.value)


def normalize_ethnicity(value: Optional[str]) -> Optional[str]:
    return _normalize_code(
        value, {v.value for v in Ethnicity}, ETHNICITY_KEYWORDS, Ethnicity.UNKNOWN.value
    )


def normalize_injury(value: Optional[str]) -> Optional[str]:
    # Unrecognized injury text stays unset rather than guessing a severity
    return _normalize_code(value, {v.value for v in InjuryType}, INJURY_KEYWORDS, None)


def normalize_attempted_completed(value: Optional[str]) -> str:
    if value and value.strip().upper().startswith("A"):
        return "A"
    return "C"
