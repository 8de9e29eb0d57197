"""
Validation Models — Results and correction context.

CorrectionContext carries structured suggestions (candidate property
codes, which offense needs which victim) so a caller can drive a guided
correction UI without parsing error prose.
"""

from typing import Optional

from pydantic import BaseModel, Field

from nibrs.ir.enums import DiagnosticLevel, ErrorKind
from nibrs.ir.schema import NibrsSegments


class ValidationIssue(BaseModel):
    """One typed finding from a validation layer."""

    kind: ErrorKind
    level: DiagnosticLevel
    code: str = Field(..., description="Machine-readable issue code")
    message: str
    field: Optional[str] = Field(None, description="Dotted path of the offending field")


class MissingVictim(BaseModel):
    type: str = Field(..., description="Victim type code the offense needs")
    offense_code: str
    offense_description: str = ""


class SuggestedCode(BaseModel):
    code: str
    description: str


class AmbiguousProperty(BaseModel):
    description: str
    suggested_codes: list[SuggestedCode] = Field(default_factory=list)
    related_offense: Optional[str] = None


class CorrectionContext(BaseModel):
    """Structured, re-usable correction suggestions."""

    missing_victims: list[MissingVictim] = Field(default_factory=list)
    ambiguous_properties: list[AmbiguousProperty] = Field(default_factory=list)
    required_fields: list[str] = Field(default_factory=list)
    multi_offense_issues: list[str] = Field(default_factory=list)
    low_confidence: list[str] = Field(default_factory=list)

    def is_empty(self) -> bool:
        return not (
            self.missing_victims
            or self.ambiguous_properties
            or self.required_fields
            or self.multi_offense_issues
            or self.low_confidence
        )

    def merge(self, other: "CorrectionContext") -> None:
        """Append other's entries to this context."""
        self.missing_victims.extend(other.missing_victims)
        self.ambiguous_properties.extend(other.ambiguous_properties)
        for name in other.required_fields:
            if name not in self.required_fields:
                self.required_fields.append(name)
        self.multi_offense_issues.extend(other.multi_offense_issues)
        self.low_confidence.extend(other.low_confidence)


class ProfessionalValidation(BaseModel):
    """Result of the professional rules layer."""

    errors: list[str] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)
    correction_suggestions: list[str] = Field(default_factory=list)
    correction_context: CorrectionContext = Field(default_factory=CorrectionContext)

    @property
    def ok(self) -> bool:
        return not self.errors


class ValidationResult(BaseModel):
    """Combined result of all validation layers."""

    ok: bool = True
    errors: list[str] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)
    correction_context: CorrectionContext = Field(default_factory=CorrectionContext)
    missing_fields: list[str] = Field(default_factory=list)
    issues: list[ValidationIssue] = Field(default_factory=list)
    data: Optional[NibrsSegments] = Field(
        None, description="The validated record, when structural parsing succeeded"
    )

    def add_issue(
        self,
        kind: ErrorKind,
        level: DiagnosticLevel,
        code: str,
        message: str,
        field: Optional[str] = None,
    ) -> None:
        """Record an issue. Errors of a fatal kind clear ok."""
        self.issues.append(
            ValidationIssue(kind=kind, level=level, code=code, message=message, field=field)
        )
        if level == DiagnosticLevel.ERROR:
            if message not in self.errors:
                self.errors.append(message)
            if kind.is_fatal:
                self.ok = False
        elif level == DiagnosticLevel.WARNING:
            if message not in self.warnings:
                self.warnings.append(message)

    def issues_of(self, kind: ErrorKind) -> list[ValidationIssue]:
        return [i for i in self.issues if i.kind == kind]
