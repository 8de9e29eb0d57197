"""
Victim assignment policy.

NIBRS models victimless offenses (drugs, weapons, liquor laws, ...)
against a single Society/Public victim, and every other offense against
the people or businesses harmed. An incident can mix both.
"""

from typing import Sequence

from nibrs.codes.tables import VIOLENT_OFFENSE_CODES
from nibrs.core.logging import get_logger, LogChannel
from nibrs.ir.enums import InjuryType, VictimType
from nibrs.ir.schema import DescriptiveExtract, Offense, Victim, VictimDescription
from nibrs.mapping.classify import (
    normalize_ethnicity,
    normalize_injury,
    normalize_race,
    normalize_sex,
    normalize_victim_type,
)
from nibrs.mapping.predicates import is_victimless_offense

log = get_logger(LogChannel.MAPPING)


def victim_from_description(description: VictimDescription, sequence_number: int = 1) -> Victim:
    """Build a Victim segment from an extracted victim description."""
    return Victim(
        sequence_number=sequence_number,
        victim_type=normalize_victim_type(description.type),
        age=description.age,
        sex=normalize_sex(description.sex),
        race=normalize_race(description.race),
        ethnicity=normalize_ethnicity(description.ethnicity),
        injury=normalize_injury(description.injury),
        source_text=description.description,
    )


def assign_professional_victims(
    offenses: Sequence[Offense],
    extract: DescriptiveExtract,
) -> list[Victim]:
    """
    Decide the victim segments for a set of offenses.

    - Any victimless offense: exactly one synthetic Society victim.
    - Any other offense: the extracted victims as given. If none were
      extracted and a violent offense is present, one default Individual
      victim with a minor injury is synthesized so a serious crime is not
      rejected for an extraction gap.
    """
    codes = [o.code for o in offenses]
    victims: list[Victim] = []

    if any(is_victimless_offense(code) for code in codes):
        victims.append(Victim(victim_type=VictimType.SOCIETY))

    if any(not is_victimless_offense(code) for code in codes):
        extracted = [victim_from_description(v) for v in extract.victims]
        if extracted:
            victims.extend(extracted)
        elif any(code in VIOLENT_OFFENSE_CODES for code in codes):
            log.verbose("default_victim_synthesized", offenses=codes)
            victims.append(
                Victim(victim_type=VictimType.INDIVIDUAL, injury=InjuryType.MINOR_INJURY)
            )

    for i, victim in enumerate(victims, start=1):
        victim.sequence_number = i

    return victims
