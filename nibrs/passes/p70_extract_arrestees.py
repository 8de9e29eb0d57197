"""
Pass 70 — Arrestee Extraction

Pulls arrestees from the narrative and links each to every mapped
offense code.
"""

from nibrs.core.context import MappingContext
from nibrs.core.logging import get_pass_logger
from nibrs.mapping.extraction import extract_arrestees

PASS_NAME = "p70_extract_arrestees"
log = get_pass_logger(PASS_NAME)


def extract_incident_arrestees(ctx: MappingContext) -> MappingContext:
    if not ctx.has_arrest_evidence:
        ctx.add_trace(pass_name=PASS_NAME, action="skipped", reason="no_arrest")
        return ctx

    ctx.arrestees = extract_arrestees(
        ctx.narrative,
        ctx.offense_codes,
        incident_date=ctx.extract.incident_date,
    )

    log.verbose(
        "arrestees_extracted",
        count=len(ctx.arrestees),
        types=[a.arrest_type for a in ctx.arrestees],
    )
    ctx.add_trace(pass_name=PASS_NAME, action="extracted_arrestees", count=len(ctx.arrestees))
    return ctx
