"""
Professional Validator — NIBRS reporting rules (layer 2).

Victim/offense consistency is analyzed across the full offense list, not
per offense: an incident can mix a drug offense (Society victim) with an
assault (Individual victim), and each class only needs one matching
victim.
"""

from nibrs.codes.tables import (
    GENERIC_LOCATION_CODE,
    GROUP_A_CODES,
    SERIOUS_OFFENSE_CODES,
    offense_name,
)
from nibrs.core.logging import get_logger, LogChannel
from nibrs.ir.enums import VictimType
from nibrs.ir.schema import NibrsSegments
from nibrs.mapping.predicates import is_traffic_offense, is_victimless_offense
from nibrs.validation.models import CorrectionContext, MissingVictim, ProfessionalValidation

log = get_logger(LogChannel.VALIDATION)

PERSON_VICTIM_TYPES = {VictimType.INDIVIDUAL.value, VictimType.BUSINESS.value}

TRAFFIC_WITHOUT_OFFENSE_MESSAGE = (
    "Narrative describes a traffic collision but no reportable offense was identified. "
    "A collision alone is not NIBRS-reportable."
)


def validate_professional_nibrs(segments: NibrsSegments) -> ProfessionalValidation:
    """
    Check a record against NIBRS professional reporting rules.

    Errors: no Group A offense, victim type inconsistent with the offense
    classes present, missing incident number or date, traffic collision
    with no offense. Warnings: generic location, no offender for a
    serious offense.
    """
    result = ProfessionalValidation()
    context = CorrectionContext()
    admin = segments.administrative
    offenses = segments.offenses

    if not offenses:
        if is_traffic_offense(segments.narrative):
            result.errors.append(TRAFFIC_WITHOUT_OFFENSE_MESSAGE)
        result.errors.append("At least one Group A offense is required")
        result.correction_suggestions.append("Describe the criminal act in the narrative")
        context.required_fields.append("offenses")
    elif not any(o.code in GROUP_A_CODES for o in offenses):
        result.errors.append("At least one Group A offense is required")
        result.correction_suggestions.append(
            "Group B offenses are reported on arrest reports; add the Group A offense if one occurred"
        )

    # Victim/offense consistency, across the offense list
    victim_types = {v.victim_type for v in segments.victims}
    victimless = [o for o in offenses if is_victimless_offense(o.code)]
    with_victims = [o for o in offenses if not is_victimless_offense(o.code)]

    if victimless and VictimType.SOCIETY.value not in victim_types:
        codes = ", ".join(o.code for o in victimless)
        result.errors.append(f"Victimless offense(s) {codes} require a Society/Public victim (type S)")
        for offense in victimless:
            context.missing_victims.append(
                MissingVictim(type="S", offense_code=offense.code, offense_description=offense.description)
            )

    if with_victims and not (victim_types & PERSON_VICTIM_TYPES):
        codes = ", ".join(o.code for o in with_victims)
        result.errors.append(f"Offense(s) {codes} require an Individual or Business victim")
        result.correction_suggestions.append("Add the person or business harmed by the offense")
        for offense in with_victims:
            context.missing_victims.append(
                MissingVictim(type="I", offense_code=offense.code, offense_description=offense.description)
            )

    if not admin.incident_number:
        result.errors.append("Incident number is required")
        context.required_fields.append("administrative.incident_number")

    if not admin.incident_date:
        result.errors.append("Incident date is required")
        result.correction_suggestions.append("Add the date the incident occurred")
        context.required_fields.append("administrative.incident_date")

    if segments.location_code == GENERIC_LOCATION_CODE:
        result.warnings.append(
            "Location is set to the generic 'Other/Unknown' code (25); specify the location type"
        )

    if not segments.offenders:
        for offense in offenses:
            if offense.code in SERIOUS_OFFENSE_CODES:
                result.warnings.append(
                    f"Offender information is recommended for offense {offense.code} "
                    f"({offense_name(offense.code)})"
                )

    result.correction_context = context
    log.verbose("professional_validation", errors=len(result.errors), warnings=len(result.warnings))
    return result
