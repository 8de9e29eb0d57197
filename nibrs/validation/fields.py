"""
Field Validators — Template and per-field checks (layer 3).

Each validator returns plain messages. The composing validator decides
which are errors and which are warnings.
"""

from dataclasses import dataclass, field
from datetime import date
from typing import Optional

from nibrs.codes.tables import (
    GENERIC_PROPERTY_CODE,
    LOSS_TYPE_CODE_SPACE,
    PROPERTY_CODES,
    WEAPON_FORCE_OFFENSE_CODES,
    property_name,
)
from nibrs.core.contracts import Validator
from nibrs.ir.dates import parse_date
from nibrs.ir.enums import VictimType
from nibrs.ir.schema import NibrsSegments
from nibrs.mapping.normalize import MAX_AGE, MIN_AGE, is_drug_property
from nibrs.mapping.predicates import is_victimless_offense
from nibrs.mapping.text import keyword_lookup, normalize_text
from nibrs.policy.engine import get_policy_engine
from nibrs.policy.models import RuleDomain
from nibrs.templates.registry import validate_with_template
from nibrs.validation.models import AmbiguousProperty, CorrectionContext, SuggestedCode

LOW_CONFIDENCE_THRESHOLD = 0.5
MAX_SUGGESTIONS = 3


@dataclass
class FieldFindings:
    """Errors, warnings and correction context from the field layer."""

    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    context: CorrectionContext = field(default_factory=CorrectionContext)


# ============================================================================
# Template
# ============================================================================

class TemplateValidator(Validator):
    """Validates per-offense required sub-fields against the template registry."""

    @property
    def name(self) -> str:
        return "offense_templates"

    def validate(self, segments: NibrsSegments) -> list[str]:
        return validate_with_template(segments)


# ============================================================================
# Property
# ============================================================================

def suggest_property_codes(description: Optional[str]) -> list[SuggestedCode]:
    """Specific property codes the description's words point at."""
    text = normalize_text(description)
    if not text:
        return []

    codes: list[str] = []
    for hit in get_policy_engine().find_matches(text, RuleDomain.PROPERTY):
        if hit.code not in codes:
            codes.append(hit.code)

    for word in text.split():
        hit = keyword_lookup(word, PROPERTY_CODES)
        if hit and hit[1] not in codes:
            codes.append(hit[1])

    return [
        SuggestedCode(code=code, description=property_name(code))
        for code in codes
        if code != GENERIC_PROPERTY_CODE
    ][:MAX_SUGGESTIONS]


def check_properties(segments: NibrsSegments, findings: FieldFindings) -> None:
    related = next(
        (o.code for o in segments.offenses if not is_victimless_offense(o.code)),
        segments.offenses[0].code if segments.offenses else None,
    )

    for prop in segments.properties:
        n = prop.sequence_number
        label = prop.description or f"#{n}"

        if prop.description_code == GENERIC_PROPERTY_CODE:
            suggestions = suggest_property_codes(prop.description)
            message = f"Property '{label}' is classified as generic 'Other' (77)"
            if suggestions:
                message += "; consider " + ", ".join(
                    f"{s.code} ({s.description})" for s in suggestions
                )
            findings.warnings.append(message)
            findings.context.ambiguous_properties.append(
                AmbiguousProperty(
                    description=prop.description or "",
                    suggested_codes=suggestions,
                    related_offense=related,
                )
            )

        if is_drug_property(prop):
            if not prop.seized:
                findings.warnings.append(f"Drug property '{label}' must be marked as seized")
            if prop.value is None:
                findings.warnings.append(f"Drug property '{label}' is missing a value")

        if prop.loss_type is None:
            findings.warnings.append(f"Property '{label}' has no loss type")
        elif prop.loss_type not in LOSS_TYPE_CODE_SPACE:
            findings.errors.append(
                f"Property '{label}' has invalid loss type '{prop.loss_type}' (must be 1-9)"
            )


# ============================================================================
# People
# ============================================================================

def check_ages(segments: NibrsSegments, findings: FieldFindings) -> None:
    people = (
        [("Victim", p) for p in segments.victims]
        + [("Offender", p) for p in segments.offenders]
        + [("Arrestee", p) for p in segments.arrestees]
    )
    for role, person in people:
        if person.age is not None and not MIN_AGE <= person.age <= MAX_AGE:
            findings.errors.append(
                f"{role} {person.sequence_number} age {person.age} is outside {MIN_AGE}-{MAX_AGE}"
            )


# ============================================================================
# Dates
# ============================================================================

def check_dates(segments: NibrsSegments, findings: FieldFindings, today: Optional[date] = None) -> None:
    admin = segments.administrative
    today = today or date.today()

    incident_date = parse_date(admin.incident_date)
    if admin.incident_date and incident_date is None:
        findings.errors.append(f"Incident date '{admin.incident_date}' is not a valid date")
    elif incident_date is not None and incident_date > today:
        findings.warnings.append(f"Incident date {incident_date.isoformat()} is in the future")

    if admin.cleared_exceptionally == "Y":
        if not admin.exceptional_clearance_date:
            findings.errors.append(
                "Exceptional clearance date is required when the incident is cleared exceptionally"
            )
            findings.context.required_fields.append("administrative.exceptional_clearance_date")
        if admin.cleared_by == "A" or segments.arrestees:
            findings.warnings.append(
                "Incident is marked both cleared by arrest and cleared exceptionally"
            )

    if admin.exceptional_clearance_date:
        clearance = parse_date(admin.exceptional_clearance_date)
        if clearance is None:
            findings.errors.append(
                f"Exceptional clearance date '{admin.exceptional_clearance_date}' is not a valid date"
            )
        elif incident_date is not None and clearance < incident_date:
            findings.warnings.append("Exceptional clearance date is before the incident date")

    for arrestee in segments.arrestees:
        if arrestee.arrest_date and parse_date(arrestee.arrest_date) is None:
            findings.errors.append(
                f"Arrestee {arrestee.sequence_number} arrest date '{arrestee.arrest_date}' is not a valid date"
            )


# ============================================================================
# Offenses
# ============================================================================

def check_offenses(segments: NibrsSegments, findings: FieldFindings) -> None:
    for offense in segments.offenses:
        if offense.confidence < LOW_CONFIDENCE_THRESHOLD:
            findings.warnings.append(
                f"Offense {offense.code} was classified with low confidence ({offense.confidence:.2f})"
            )
            findings.context.low_confidence.append(offense.code)
        if offense.weapon_codes and offense.code not in WEAPON_FORCE_OFFENSE_CODES:
            findings.warnings.append(
                f"Offense {offense.code} does not report weapon/force codes"
            )

    if len(segments.offenses) < 2:
        return

    victim_types = {v.victim_type for v in segments.victims}
    victimless = sorted({o.code for o in segments.offenses if is_victimless_offense(o.code)})
    with_victims = sorted({o.code for o in segments.offenses if not is_victimless_offense(o.code)})

    if victimless and VictimType.SOCIETY.value not in victim_types:
        issue = f"Victimless offense(s) {', '.join(victimless)} have no Society victim in this multi-offense incident"
        findings.warnings.append(issue)
        findings.context.multi_offense_issues.append(issue)

    if with_victims and victim_types <= {VictimType.SOCIETY.value}:
        issue = f"Offense(s) {', '.join(with_victims)} have no matching person victim in this multi-offense incident"
        findings.warnings.append(issue)
        findings.context.multi_offense_issues.append(issue)


def validate_fields(segments: NibrsSegments) -> FieldFindings:
    """Run every non-template field check."""
    findings = FieldFindings()
    check_properties(segments, findings)
    check_ages(segments, findings)
    check_dates(segments, findings)
    check_offenses(segments, findings)
    return findings
