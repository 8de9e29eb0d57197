"""
Mapper — DescriptiveExtract to NibrsSegments.

map_descriptive_to_nibrs runs the default pass pipeline and returns a
MappingOutcome value: a record, or a MappingFailure explaining why no
reportable offense survived. validate_and_map_extract wraps that into a
flat errors/warnings shape for callers that want one.
"""

from typing import Any, Optional, Union

from pydantic import BaseModel, Field, ValidationError

from nibrs.core.context import MappingRequest
from nibrs.core.engine import DEFAULT_PIPELINE_ID, Engine, Pipeline, get_engine
from nibrs.core.logging import get_logger, LogChannel
from nibrs.ir.enums import DiagnosticLevel
from nibrs.ir.schema import DescriptiveExtract, MappingOutcome, NibrsSegments, Offense
from nibrs.passes import (
    assign_victims,
    build_segments,
    extract_incident_arrestees,
    filter_group_b,
    map_incident_location,
    map_offenders,
    map_offenses,
    map_properties,
)

log = get_logger(LogChannel.PIPELINE)

DEFAULT_CONFIDENCE_THRESHOLD = 0.5


def setup_default_pipeline(engine: Engine) -> None:
    """Register the default mapping pipeline."""
    default_pipeline = Pipeline(
        id=DEFAULT_PIPELINE_ID,
        name="Default NIBRS Mapping Pipeline",
        passes=[
            map_offenses,                # Classify offenses, attach weapons
            filter_group_b,              # Drop Group B without arrest, fail if empty
            map_incident_location,
            assign_victims,              # Society / Individual policy
            map_properties,              # Property, drugs, evidence
            map_offenders,
            extract_incident_arrestees,
            build_segments,              # Assemble + normalize
        ],
    )
    engine.register_pipeline(default_pipeline)


def _coerce_extract(extract: Union[DescriptiveExtract, dict[str, Any]]) -> DescriptiveExtract:
    if isinstance(extract, DescriptiveExtract):
        return extract
    return DescriptiveExtract.model_validate(extract)


def map_descriptive_to_nibrs(
    extract: Union[DescriptiveExtract, dict[str, Any]],
    request_id: Optional[str] = None,
) -> MappingOutcome:
    """
    Map an extract to a NIBRS record.

    Args:
        extract: The extract, or its JSON dict (camelCase or snake_case)
        request_id: Optional correlation ID for logs and the outcome

    Returns:
        MappingOutcome. Call .unwrap() to get the segments or raise
        MappingFailureError.

    Raises:
        pydantic.ValidationError: if a dict extract is malformed
    """
    engine = get_engine()
    if not engine.has_pipeline(DEFAULT_PIPELINE_ID):
        setup_default_pipeline(engine)

    request = MappingRequest(extract=_coerce_extract(extract), request_id=request_id)
    return engine.run(request, DEFAULT_PIPELINE_ID)


# ============================================================================
# Mapper Validation
# ============================================================================

class MapperValidation(BaseModel):
    """Flat result of mapping an extract, for callers that do not want a Result."""

    data: Optional[NibrsSegments] = None
    errors: list[str] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)
    missing_fields: list[str] = Field(default_factory=list)
    outcome: Optional[MappingOutcome] = Field(None, exclude=True)

    @property
    def ok(self) -> bool:
        return self.data is not None and not self.errors

    @property
    def offenses(self) -> list[Offense]:
        return list(self.data.offenses) if self.data is not None else []


def validate_and_map_extract(
    extract: Union[DescriptiveExtract, dict[str, Any]],
    confidence_threshold: float = DEFAULT_CONFIDENCE_THRESHOLD,
) -> MapperValidation:
    """
    Map an extract, reporting failures as errors instead of raising.

    Offenses mapped below confidence_threshold are reported as warnings.
    """
    try:
        outcome = map_descriptive_to_nibrs(extract)
    except ValidationError as e:
        errors = [
            f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in e.errors()
        ]
        return MapperValidation(errors=errors, missing_fields=[])

    warnings = [d.message for d in outcome.diagnostics if d.level == DiagnosticLevel.WARNING]

    if not outcome.ok:
        message = outcome.failure.message if outcome.failure else "Mapping failed"
        log.warning("extract_not_mappable", reason=message)
        return MapperValidation(
            errors=[message],
            warnings=warnings,
            missing_fields=["offenses"],
            outcome=outcome,
        )

    segments = outcome.segments
    for offense in segments.offenses:
        if offense.confidence < confidence_threshold:
            warnings.append(
                f"Offense {offense.code} mapped with low confidence "
                f"({offense.confidence:.2f}); review recommended"
            )

    return MapperValidation(data=segments, warnings=warnings, outcome=outcome)
