"""Assist — Confidence scores and field examples for review UIs."""

from nibrs.assist.confidence import (
    ConfidenceAssessment,
    ConfidenceBand,
    ConfidenceLevel,
    calculate_accuracy_score,
    calculate_validation_confidence,
    confidence_band,
)
from nibrs.assist.field_examples import (
    FIELD_EXAMPLES,
    QUICK_FILL_OPTIONS,
    contextual_fields,
    get_field_examples,
    get_quick_fill_options,
    offense_category,
    resolve_field_category,
)

__all__ = [
    "ConfidenceAssessment",
    "ConfidenceBand",
    "ConfidenceLevel",
    "FIELD_EXAMPLES",
    "QUICK_FILL_OPTIONS",
    "calculate_accuracy_score",
    "calculate_validation_confidence",
    "confidence_band",
    "contextual_fields",
    "get_field_examples",
    "get_quick_fill_options",
    "offense_category",
    "resolve_field_category",
]
