"""Output formatters for NIBRS results."""

from nibrs.output.errors import (
    ErrorResponseBuilder,
    StandardErrorResponse,
    categorize_missing_fields,
    error_details_from_message,
    extract_missing_fields_from_template_errors,
)

__all__ = [
    "ErrorResponseBuilder",
    "StandardErrorResponse",
    "categorize_missing_fields",
    "error_details_from_message",
    "extract_missing_fields_from_template_errors",
]
