"""
Pass 40 — Victim Assignment

Applies the Society / Individual victim policy across the full offense
list (see nibrs.mapping.victims).
"""

from nibrs.core.context import MappingContext
from nibrs.core.logging import get_pass_logger
from nibrs.mapping.victims import assign_professional_victims

PASS_NAME = "p40_assign_victims"
log = get_pass_logger(PASS_NAME)


def assign_victims(ctx: MappingContext) -> MappingContext:
    ctx.victims = assign_professional_victims(ctx.offenses, ctx.extract)

    types = [v.victim_type for v in ctx.victims]
    if not ctx.victims:
        ctx.add_diagnostic(
            level="warning",
            code="NO_VICTIM",
            message="No victim could be assigned for the mapped offenses",
            source=PASS_NAME,
        )

    log.verbose("victims_assigned", count=len(ctx.victims), types=types)
    ctx.add_trace(pass_name=PASS_NAME, action="assigned_victims", types=types)
    return ctx
