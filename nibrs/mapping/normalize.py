"""
Normalization — Fill required NIBRS fields the mapper could not derive.

add_missing_required_fields never mutates its input. It works on a deep
copy and is idempotent: applying it to its own output changes nothing.
"""

import time
from typing import Optional, Sequence

from nibrs.codes.tables import (
    DRUG_PROPERTY_CODE,
    SEIZED_LOSS_TYPE,
    UNKNOWN_RELATIONSHIP_CODE,
)
from nibrs.core.logging import get_logger, LogChannel
from nibrs.ir.enums import Ethnicity, Race, Sex, VictimType
from nibrs.ir.schema import NibrsSegments, Property
from nibrs.mapping.extraction import extract_drug_details, is_drug_text
from nibrs.mapping.predicates import (
    is_victimless_offense,
    is_within_current_incident,
    was_cleared_by_arrest,
)

log = get_logger(LogChannel.MAPPING)

MIN_AGE = 0
MAX_AGE = 130

# Victim types whose demographics NIBRS requires
_PERSON_VICTIM_TYPES = {VictimType.INDIVIDUAL.value, VictimType.LAW_ENFORCEMENT.value}


def default_incident_number() -> str:
    """Timestamp-based incident number, INC-<epoch milliseconds>."""
    return f"INC-{int(time.time() * 1000)}"


def clamp_age(age: Optional[int]) -> Optional[int]:
    if age is None:
        return None
    return max(MIN_AGE, min(MAX_AGE, age))


def is_drug_property(prop: Property) -> bool:
    return prop.description_code == DRUG_PROPERTY_CODE or is_drug_text(prop.description)


def _renumber(items: Sequence) -> None:
    for i, item in enumerate(items, start=1):
        if item.sequence_number != i:
            item.sequence_number = i


def _current(items: list, narrative: str, *attrs: str) -> list:
    kept = []
    for item in items:
        texts = [getattr(item, attr) for attr in attrs]
        if all(is_within_current_incident(text, narrative) for text in texts if text):
            kept.append(item)
    return kept


def add_missing_required_fields(segments: NibrsSegments) -> NibrsSegments:
    """
    Return a normalized deep copy of segments.

    - incident number defaults to INC-<epoch ms>
    - cleared-by "A" when the narrative shows an arrest
    - facts from earlier incidents are dropped from every array
    - sequence numbers are re-derived 1..n from array order
    - ages are clamped into [0, 130]
    - drug properties are seized with loss type "6"
    - unknown demographics default to "U"
    - offender relationship defaults to "RU" unless every offense is
      victimless, where no relationship is reported
    """
    result = segments.model_copy(deep=True)
    narrative = result.narrative
    admin = result.administrative

    if not admin.incident_number:
        admin.incident_number = default_incident_number()
        log.verbose("incident_number_defaulted", incident_number=admin.incident_number)

    if admin.cleared_by is None and (result.arrestees or was_cleared_by_arrest(narrative)):
        admin.cleared_by = "A"

    # Within-incident filter
    result.offenses = _current(result.offenses, narrative, "source_text", "description")
    result.victims = _current(result.victims, narrative, "source_text")
    result.offenders = _current(result.offenders, narrative, "source_text")
    result.properties = _current(result.properties, narrative, "source_text", "description")
    result.arrestees = _current(result.arrestees, narrative, "source_text")

    for items in (result.offenses, result.victims, result.offenders, result.properties, result.arrestees):
        _renumber(items)

    for person in (*result.victims, *result.offenders, *result.arrestees):
        clamped = clamp_age(person.age)
        if clamped != person.age:
            person.age = clamped

    for victim in result.victims:
        if victim.victim_type in _PERSON_VICTIM_TYPES:
            _default_demographics(victim)

    all_victimless = bool(result.offenses) and all(
        is_victimless_offense(code) for code in result.offense_codes
    )
    for offender in result.offenders:
        _default_demographics(offender)
        if all_victimless:
            if offender.relationship_to_victim is not None:
                offender.relationship_to_victim = None
        elif offender.relationship_to_victim is None:
            offender.relationship_to_victim = UNKNOWN_RELATIONSHIP_CODE

    for prop in result.properties:
        if is_drug_property(prop):
            _seize_drug(prop)

    return result


def _default_demographics(person) -> None:
    if person.sex is None:
        person.sex = Sex.UNKNOWN
    if person.race is None:
        person.race = Race.UNKNOWN
    if person.ethnicity is None:
        person.ethnicity = Ethnicity.UNKNOWN


def _seize_drug(prop: Property) -> None:
    if not prop.seized:
        prop.seized = True
    if prop.loss_type != SEIZED_LOSS_TYPE:
        prop.loss_type = SEIZED_LOSS_TYPE
    if prop.suspected_drug_type is None:
        drug_type, quantity, measurement = extract_drug_details(prop.description or prop.source_text)
        if drug_type:
            prop.suspected_drug_type = drug_type
        if prop.drug_quantity is None and quantity is not None:
            prop.drug_quantity = quantity
        if prop.drug_measurement is None and measurement is not None:
            prop.drug_measurement = measurement
