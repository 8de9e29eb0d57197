"""
Pass 30 — Location Mapping

Maps the extracted location description, keyed on the first surviving
offense. Without a description, only the high-confidence location rules
are tried against the narrative; the generic code 25 is the fallback.
"""

from nibrs.codes.tables import GENERIC_LOCATION_CODE
from nibrs.core.context import MappingContext
from nibrs.core.logging import get_pass_logger
from nibrs.ir.schema import MappingResult
from nibrs.mapping.classify import map_location
from nibrs.policy.engine import get_policy_engine
from nibrs.policy.models import RuleDomain

PASS_NAME = "p30_map_location"
log = get_pass_logger(PASS_NAME)


def map_incident_location(ctx: MappingContext) -> MappingContext:
    first_code = ctx.offenses[0].code if ctx.offenses else None
    result = map_location(ctx.extract.location_description, first_code)

    if not result.mapped and ctx.narrative:
        hit = get_policy_engine().classify(ctx.narrative, RuleDomain.LOCATION)
        if hit is not None:
            result = MappingResult(code=hit.code, confidence=hit.confidence, original_input=hit.matched_text)

    if result.mapped:
        ctx.location_result = result
        ctx.location_code = result.code
    else:
        ctx.location_code = GENERIC_LOCATION_CODE

    log.verbose("location_mapped", code=ctx.location_code, confidence=result.confidence)
    ctx.add_trace(
        pass_name=PASS_NAME,
        action="mapped_location",
        code=ctx.location_code,
        confidence=result.confidence,
    )
    return ctx
