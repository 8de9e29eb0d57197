"""
Pass 60 — Offender Mapping

Normalizes offender demographics and maps the offender-to-victim
relationship. Relationships are not reported when every offense is
victimless.
"""

from nibrs.core.context import MappingContext
from nibrs.core.logging import get_pass_logger
from nibrs.ir.schema import Offender
from nibrs.mapping.classify import (
    map_relationship,
    normalize_ethnicity,
    normalize_race,
    normalize_sex,
)
from nibrs.mapping.predicates import is_victimless_offense

PASS_NAME = "p60_map_offenders"
log = get_pass_logger(PASS_NAME)


def map_offenders(ctx: MappingContext) -> MappingContext:
    all_victimless = all(is_victimless_offense(code) for code in ctx.offense_codes)

    for i, desc in enumerate(ctx.extract.offenders, start=1):
        relationship = None
        if not all_victimless:
            relationship = map_relationship(desc.relationship_description, ctx.narrative)

        ctx.offenders.append(
            Offender(
                sequence_number=i,
                age=desc.age,
                sex=normalize_sex(desc.sex),
                race=normalize_race(desc.race),
                ethnicity=normalize_ethnicity(desc.ethnicity),
                relationship_to_victim=relationship,
                source_text=desc.description,
            )
        )

    log.verbose(
        "offenders_mapped",
        count=len(ctx.offenders),
        relationships=[o.relationship_to_victim for o in ctx.offenders],
    )
    ctx.add_trace(pass_name=PASS_NAME, action="mapped_offenders", count=len(ctx.offenders))
    return ctx
