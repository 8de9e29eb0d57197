"""
Pass 20 — Group B Filter

Group B offenses are reported only when someone was arrested. Drops them
when the narrative shows no arrest, then fails the mapping if no offense
survived p10 and this filter.
"""

from nibrs.core.context import MappingContext
from nibrs.core.logging import get_pass_logger
from nibrs.ir.schema import MappingResult
from nibrs.mapping.predicates import is_group_b_offense

PASS_NAME = "p20_filter_group_b"
log = get_pass_logger(PASS_NAME)

NO_OFFENSE_MESSAGE = (
    "No reportable NIBRS offense could be identified in the narrative. "
    "Provide a description of the criminal act."
)


def filter_group_b(ctx: MappingContext) -> MappingContext:
    if not ctx.has_arrest_evidence:
        kept = []
        for offense in ctx.offenses:
            if is_group_b_offense(offense.code):
                log.verbose("group_b_dropped", code=offense.code, reason="no_arrest")
                ctx.rejected_offenses.append(
                    MappingResult(
                        code=offense.code,
                        confidence=offense.confidence,
                        original_input=offense.description,
                    )
                )
                ctx.add_diagnostic(
                    level="warning",
                    code="GROUP_B_WITHOUT_ARREST",
                    message=f"Group B offense {offense.code} dropped: no arrest in narrative",
                    source=PASS_NAME,
                )
            else:
                kept.append(offense)

        if len(kept) != len(ctx.offenses):
            dropped = {o.code for o in ctx.offenses} - {o.code for o in kept}
            ctx.offense_results = [r for r in ctx.offense_results if r.code not in dropped]
            ctx.offenses = kept
            for i, offense in enumerate(ctx.offenses, start=1):
                offense.sequence_number = i

    if not ctx.offenses:
        log.warning("no_reportable_offense", rejected=len(ctx.rejected_offenses))
        ctx.fail(NO_OFFENSE_MESSAGE, source=PASS_NAME)
        return ctx

    ctx.add_trace(pass_name=PASS_NAME, action="filtered", codes=ctx.offense_codes)
    return ctx
