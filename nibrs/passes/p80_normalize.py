"""
Pass 80 — Build and Normalize

Assembles the NibrsSegments record from the artifacts of earlier passes
and runs the normalization step over it.
"""

from nibrs.core.context import MappingContext
from nibrs.core.logging import get_pass_logger
from nibrs.ir.schema import Administrative, NibrsSegments
from nibrs.mapping.normalize import add_missing_required_fields

PASS_NAME = "p80_normalize"
log = get_pass_logger(PASS_NAME)


def build_segments(ctx: MappingContext) -> MappingContext:
    extract = ctx.extract

    administrative = Administrative(
        incident_number=extract.incident_number or None,
        incident_date=extract.incident_date,
        incident_time=extract.incident_time,
        cleared_exceptionally=extract.cleared_exceptionally or "N",
        exceptional_clearance_date=extract.exceptional_clearance_date,
        cleared_by="A" if ctx.arrestees else None,
        clearance_method="arrest" if ctx.arrestees else None,
    )

    segments = NibrsSegments(
        administrative=administrative,
        offenses=ctx.offenses,
        victims=ctx.victims,
        offenders=ctx.offenders,
        properties=ctx.properties,
        evidence=ctx.evidence,
        arrestees=ctx.arrestees,
        location_code=ctx.location_code or "25",
        narrative=ctx.narrative,
        mapping_confidence=ctx.mapping_confidence(),
    )
    ctx.segments = add_missing_required_fields(segments)

    log.info(
        "segments_built",
        incident_number=ctx.segments.administrative.incident_number,
        offenses=ctx.segments.offense_codes,
        victims=len(ctx.segments.victims),
        properties=len(ctx.segments.properties),
        arrestees=len(ctx.segments.arrestees),
    )
    ctx.add_trace(
        pass_name=PASS_NAME,
        action="built_segments",
        incident_number=ctx.segments.administrative.incident_number,
    )
    return ctx
