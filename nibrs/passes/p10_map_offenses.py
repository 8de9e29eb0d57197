"""
Pass 10 — Offense Mapping

Classifies each extracted offense description into a NIBRS offense code,
attaches weapon/force codes, and records whether the narrative shows an
arrest (Group B offenses depend on it in p20).

Descriptions that fail classification, or that describe an earlier
incident, are kept in ctx.rejected_offenses for correction UIs. When the
extract carries no offense descriptions the narrative itself is
classified.
"""

from nibrs.codes.tables import WEAPON_FORCE_OFFENSE_CODES
from nibrs.core.context import MappingContext
from nibrs.core.logging import get_pass_logger
from nibrs.ir.schema import MappingResult, Offense, OffenseDescription
from nibrs.mapping.classify import map_offense, map_weapon, normalize_attempted_completed
from nibrs.mapping.predicates import is_within_current_incident, was_cleared_by_arrest

PASS_NAME = "p10_map_offenses"
log = get_pass_logger(PASS_NAME)

# NIBRS reports at most three weapon/force codes per offense
MAX_WEAPON_CODES = 3


def map_offenses(ctx: MappingContext) -> MappingContext:
    """Classify offense descriptions into Offense segments."""
    descriptions = list(ctx.extract.offenses)
    if not descriptions and ctx.narrative.strip():
        log.verbose("classifying_narrative", reason="no_offense_descriptions")
        descriptions = [OffenseDescription(description=ctx.narrative)]

    for desc in descriptions:
        text = desc.description
        if not is_within_current_incident(text, ctx.narrative):
            log.verbose("offense_outside_incident", text=text)
            ctx.rejected_offenses.append(MappingResult(original_input=text))
            continue

        result = map_offense(text)
        if not result.mapped:
            ctx.rejected_offenses.append(result)
            continue

        if result.code in ctx.offense_codes:
            log.debug("duplicate_offense_skipped", code=result.code)
            continue

        ctx.offense_results.append(result)
        ctx.offenses.append(
            Offense(
                code=result.code,
                description=text,
                attempted_completed=normalize_attempted_completed(desc.attempted_completed),
                sequence_number=len(ctx.offenses) + 1,
                confidence=result.confidence,
                bias_motivation=ctx.extract.bias_motivation,
                source_text=text,
            )
        )

    _attach_weapons(ctx)
    ctx.has_arrest_evidence = was_cleared_by_arrest(ctx.narrative)

    log.info(
        "offenses_mapped",
        mapped=ctx.offense_codes,
        rejected=len(ctx.rejected_offenses),
        arrest_evidence=ctx.has_arrest_evidence,
    )
    ctx.add_trace(
        pass_name=PASS_NAME,
        action="mapped_offenses",
        codes=ctx.offense_codes,
        rejected=[r.original_input for r in ctx.rejected_offenses],
    )
    return ctx


def _attach_weapons(ctx: MappingContext) -> None:
    weapon_codes: list[str] = []
    for text in ctx.extract.weapon_descriptions:
        result = map_weapon(text)
        if not result.mapped:
            continue
        ctx.weapon_results.append(result)
        if result.code not in weapon_codes:
            weapon_codes.append(result.code)

    if not weapon_codes:
        return

    for offense in ctx.offenses:
        if offense.code in WEAPON_FORCE_OFFENSE_CODES:
            offense.weapon_codes = weapon_codes[:MAX_WEAPON_CODES]
