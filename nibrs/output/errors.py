"""
Error Responses — One error shape for every failure layer.

Mapping failures, schema violations, professional-rule violations and
template gaps all reach callers as a StandardErrorResponse. The builder
only renames and aggregates; it makes no validation decisions.
"""

from __future__ import annotations

from typing import Any, Optional, Union

from pydantic import BaseModel, Field, ValidationError

from nibrs.ir.enums import DiagnosticLevel
from nibrs.ir.schema import MappingFailure, MappingOutcome, NibrsSegments
from nibrs.mapping.mapper import MapperValidation
from nibrs.templates.registry import missing_field_from_template_error
from nibrs.validation.models import CorrectionContext, ProfessionalValidation, ValidationResult
from nibrs.validation.structural import schema_errors


PROFESSIONAL_LEVEL = "Police Agency Professional"

# First matching category wins, in this order
FIELD_CATEGORIES: dict[str, tuple[str, ...]] = {
    "personal": ("victim", "offender", "age", "sex", "race", "ethnicity", "gender", "name", "suspect", "person"),
    "incident": ("date", "time", "location", "offense", "incident", "description", "circumstances", "motive"),
    "property": ("property", "value", "description", "loss", "item", "stolen", "damage", "vehicle"),
    "evidence": ("evidence", "weapon", "injury", "medical", "examination", "forensic"),
    "administrative": ("incident", "report", "officer", "number", "id", "agency"),
}


class StandardErrorResponse(BaseModel):
    """The single failure shape returned to callers."""

    error: str
    missing_fields: list[str] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)
    suggestions: list[str] = Field(default_factory=list)
    nibrs_data: Optional[dict[str, Any]] = Field(None, description="Best-effort partial record")
    required_level: Optional[str] = None
    correction_context: Optional[CorrectionContext] = None
    categorized_fields: dict[str, list[str]] = Field(default_factory=dict)
    status_code: Optional[int] = None


def _dump(data: Union[NibrsSegments, dict[str, Any], None]) -> Optional[dict[str, Any]]:
    if data is None:
        return None
    if isinstance(data, BaseModel):
        return data.model_dump(mode="json")
    return dict(data)


def categorize_missing_fields(missing_fields: list[str]) -> dict[str, list[str]]:
    """
    Group missing field names by keyword.

    Returns:
        {category: [fields]} with only non-empty categories; fields matching
        no keyword go under "other"
    """
    categorized: dict[str, list[str]] = {}
    for name in missing_fields:
        lowered = name.lower()
        category = next(
            (cat for cat, keywords in FIELD_CATEGORIES.items() if any(k in lowered for k in keywords)),
            "other",
        )
        categorized.setdefault(category, []).append(name)
    return categorized


def extract_missing_fields_from_template_errors(template_errors: list[str]) -> list[str]:
    """Field paths ("victim.sex", "property") named by template errors."""
    fields: list[str] = []
    for message in template_errors:
        name = missing_field_from_template_error(message)
        if name and name not in fields:
            fields.append(name)
    return fields


def error_details_from_message(message: str) -> tuple[list[str], list[str]]:
    """
    Guess missing fields and suggestions from a free-text error message.

    Returns:
        (missing_fields, suggestions)
    """
    lowered = message.lower()
    missing: list[str] = []
    suggestions: list[str] = []

    if "victim" in lowered:
        missing.append("Victim information")
        suggestions += [
            "Add victim type (Individual, Society/Public, or Business)",
            "For drug/weapon offenses, use 'Society/Public' victim type",
            "For assaults/thefts, use 'Individual' victim type",
        ]
    if "offense" in lowered:
        missing.append("Offense description")
        suggestions += [
            "Specify the criminal offense type (e.g., Burglary, Assault, Theft)",
            "Use NIBRS-standard offense descriptions",
        ]
    if "property" in lowered:
        missing.append("Property details")
        suggestions += ["Describe stolen/damaged property", "Include property values if available"]
    if "location" in lowered:
        missing.append("Location information")
        suggestions.append("Provide specific location or address")
    if "date" in lowered:
        missing.append("Incident date")
        suggestions.append("Include when the incident occurred")

    if not missing:
        suggestions += [
            "Review the narrative for missing crime details",
            "Ensure all required NIBRS fields are provided",
        ]
    return missing, suggestions


class ErrorResponseBuilder:
    """Builds StandardErrorResponse from each failure shape."""

    @staticmethod
    def from_professional_validation(
        validation: ProfessionalValidation,
        nibrs_data: Union[NibrsSegments, dict[str, Any], None] = None,
    ) -> StandardErrorResponse:
        return StandardErrorResponse(
            error="Incomplete report for NIBRS standards",
            missing_fields=list(validation.errors),
            warnings=list(validation.warnings),
            suggestions=list(validation.correction_suggestions),
            required_level=PROFESSIONAL_LEVEL,
            nibrs_data=_dump(nibrs_data),
            correction_context=validation.correction_context,
            categorized_fields=categorize_missing_fields(validation.errors),
            status_code=422,
        )

    @staticmethod
    def from_schema_validation(
        errors: Union[list[str], ValidationError],
        warnings: Optional[list[str]] = None,
        nibrs_data: Union[NibrsSegments, dict[str, Any], None] = None,
        correction_context: Optional[CorrectionContext] = None,
    ) -> StandardErrorResponse:
        if isinstance(errors, ValidationError):
            flattened = schema_errors(errors)
            messages = [message for _, message in flattened]
            missing = [path for path, _ in flattened if path]
        else:
            messages = list(errors)
            missing = []
        return StandardErrorResponse(
            error="NIBRS validation failed",
            warnings=list(warnings or []),
            nibrs_data=_dump(nibrs_data),
            correction_context=correction_context,
            suggestions=[f"Validation error: {m}" for m in messages],
            missing_fields=missing,
            categorized_fields=categorize_missing_fields(missing),
            status_code=422,
        )

    @staticmethod
    def from_template_validation(
        template_errors: list[str],
        warnings: Optional[list[str]] = None,
        nibrs_data: Union[NibrsSegments, dict[str, Any], None] = None,
        correction_context: Optional[CorrectionContext] = None,
    ) -> StandardErrorResponse:
        missing = extract_missing_fields_from_template_errors(template_errors)
        return StandardErrorResponse(
            error="Template validation failed",
            warnings=list(warnings or []),
            nibrs_data=_dump(nibrs_data),
            correction_context=correction_context,
            suggestions=[f"Template error: {e}" for e in template_errors],
            missing_fields=missing,
            categorized_fields=categorize_missing_fields(missing),
            status_code=422,
        )

    @staticmethod
    def from_mapper_validation(result: MapperValidation) -> StandardErrorResponse:
        """From validate_and_map_extract."""
        return StandardErrorResponse(
            error="NIBRS mapping validation failed",
            warnings=list(result.warnings),
            nibrs_data=_dump(result.data),
            suggestions=[f"Mapping error: {e}" for e in result.errors],
            missing_fields=list(result.errors),
            categorized_fields=categorize_missing_fields(list(result.missing_fields)),
            status_code=422,
        )

    @staticmethod
    def from_validation_result(result: ValidationResult) -> StandardErrorResponse:
        """From the combined validate_nibrs_payload result."""
        return StandardErrorResponse(
            error="NIBRS validation failed",
            missing_fields=list(result.missing_fields),
            warnings=list(result.warnings),
            suggestions=list(result.errors),
            nibrs_data=_dump(result.data),
            required_level=PROFESSIONAL_LEVEL,
            correction_context=result.correction_context,
            categorized_fields=categorize_missing_fields(result.missing_fields),
            status_code=422,
        )

    @staticmethod
    def from_mapping_failure(
        failure: Union[MappingFailure, MappingOutcome],
    ) -> StandardErrorResponse:
        """From a MappingFailure, or a failed MappingOutcome."""
        warnings: list[str] = []
        if isinstance(failure, MappingOutcome):
            warnings = [d.message for d in failure.diagnostics if d.level == DiagnosticLevel.WARNING]
            failure = failure.failure or MappingFailure(message="Mapping failed")

        missing, suggestions = error_details_from_message(failure.message)
        rejected = [r.original_input for r in failure.rejected_offenses if r.original_input]
        if rejected:
            suggestions.append(
                "These descriptions could not be classified: " + "; ".join(rejected)
            )
        return StandardErrorResponse(
            error=failure.message,
            missing_fields=missing,
            warnings=warnings,
            suggestions=suggestions,
            nibrs_data=failure.partial,
            categorized_fields=categorize_missing_fields(missing),
            status_code=422,
        )

    @staticmethod
    def from_generic_error(
        error: Union[str, Exception],
        nibrs_data: Union[NibrsSegments, dict[str, Any], None] = None,
        status_code: int = 500,
    ) -> StandardErrorResponse:
        message = str(error) or "NIBRS report generation failed"
        return StandardErrorResponse(
            error=message,
            nibrs_data=_dump(nibrs_data) or {},
            suggestions=["Please review your input and try again"],
            status_code=status_code,
        )
