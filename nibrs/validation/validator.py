"""
Validator — Composes the three validation layers.

1. Structural: schema conformance. Fatal, short-circuits.
2. Professional: NIBRS reporting rules.
3. Template and field checks.

The record is never rewritten; the result carries the parsed record in
`data` when layer 1 succeeded.
"""

from typing import Any, Union

from nibrs.core.logging import get_logger, LogChannel
from nibrs.ir.enums import DiagnosticLevel, ErrorKind
from nibrs.ir.schema import NibrsSegments
from nibrs.templates.registry import missing_field_from_template_error
from nibrs.validation.fields import TemplateValidator, validate_fields
from nibrs.validation.models import ValidationResult
from nibrs.validation.professional import validate_professional_nibrs
from nibrs.validation.structural import parse_segments

log = get_logger(LogChannel.VALIDATION)

_template_validator = TemplateValidator()


def validate_nibrs_payload(payload: Union[NibrsSegments, dict[str, Any]]) -> ValidationResult:
    """
    Validate a NIBRS record.

    Args:
        payload: A NibrsSegments instance or its JSON dict

    Returns:
        ValidationResult; ok is False when any fatal error was found
    """
    result = ValidationResult()

    # Layer 1: structural
    segments, schema_errors = parse_segments(payload)
    if segments is None:
        for path, message in schema_errors:
            result.add_issue(
                ErrorKind.SCHEMA_VIOLATION,
                DiagnosticLevel.ERROR,
                code="SCHEMA_VIOLATION",
                message=message,
                field=path or None,
            )
            if path and path not in result.missing_fields:
                result.missing_fields.append(path)
        log.info("validation_complete", ok=False, layer="structural", errors=len(result.errors))
        return result

    result.data = segments

    # Layer 2: professional rules
    professional = validate_professional_nibrs(segments)
    for message in professional.errors:
        result.add_issue(
            ErrorKind.PROFESSIONAL_RULE_VIOLATION,
            DiagnosticLevel.ERROR,
            code="PROFESSIONAL_RULE",
            message=message,
        )
    for message in professional.warnings:
        result.add_issue(
            ErrorKind.AMBIGUOUS_CLASSIFICATION,
            DiagnosticLevel.WARNING,
            code="PROFESSIONAL_RULE",
            message=message,
        )
    result.correction_context.merge(professional.correction_context)

    # Layer 3: templates
    for message in _template_validator.validate(segments):
        missing = missing_field_from_template_error(message)
        result.add_issue(
            ErrorKind.TEMPLATE_FIELD_MISSING,
            DiagnosticLevel.ERROR,
            code="TEMPLATE_FIELD_MISSING",
            message=message,
            field=missing,
        )
        if missing and missing not in result.missing_fields:
            result.missing_fields.append(missing)

    # Layer 3: fields
    findings = validate_fields(segments)
    for message in findings.errors:
        result.add_issue(
            ErrorKind.SCHEMA_VIOLATION,
            DiagnosticLevel.ERROR,
            code="FIELD_INVALID",
            message=message,
        )
    for message in findings.warnings:
        result.add_issue(
            ErrorKind.AMBIGUOUS_CLASSIFICATION,
            DiagnosticLevel.WARNING,
            code="FIELD_WARNING",
            message=message,
        )
    result.correction_context.merge(findings.context)

    for name in result.correction_context.required_fields:
        if name not in result.missing_fields:
            result.missing_fields.append(name)

    log.info(
        "validation_complete",
        ok=result.ok,
        errors=len(result.errors),
        warnings=len(result.warnings),
        missing_fields=result.missing_fields,
    )
    return result
