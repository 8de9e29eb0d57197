"""
MappingContext — Mutable state passed between mapping passes.

Each pass reads prior artifacts and mutates only its allowed fields.
The extract itself is frozen and is never modified.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Optional
from uuid import uuid4

from nibrs.ir.enums import DiagnosticLevel, MappingStatus
from nibrs.ir.schema import (
    Arrestee,
    DescriptiveExtract,
    Diagnostic,
    Evidence,
    MappingConfidence,
    MappingFailure,
    MappingOutcome,
    MappingResult,
    NibrsSegments,
    Offender,
    Offense,
    Property,
    TraceEntry,
    Victim,
)


@dataclass
class MappingRequest:
    """Input to the mapping pipeline."""

    extract: DescriptiveExtract
    request_id: Optional[str] = None
    metadata: dict[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if self.request_id is None:
            self.request_id = str(uuid4())


@dataclass
class MappingContext:
    """
    Mutable context passed through mapping passes.

    Each pass may read all fields but should only mutate
    the fields it is responsible for.
    """

    # Input
    request: MappingRequest
    extract: DescriptiveExtract

    # Offenses (p10, p20)
    offenses: list[Offense] = field(default_factory=list)
    offense_results: list[MappingResult] = field(default_factory=list)
    rejected_offenses: list[MappingResult] = field(default_factory=list)
    has_arrest_evidence: bool = False

    # Location (p30)
    location_code: Optional[str] = None
    location_result: Optional[MappingResult] = None
    weapon_results: list[MappingResult] = field(default_factory=list)

    # People and property (p40-p70)
    victims: list[Victim] = field(default_factory=list)
    offenders: list[Offender] = field(default_factory=list)
    properties: list[Property] = field(default_factory=list)
    property_results: list[MappingResult] = field(default_factory=list)
    evidence: Optional[Evidence] = None
    arrestees: list[Arrestee] = field(default_factory=list)

    # Output (p80)
    segments: Optional[NibrsSegments] = None
    failure_message: Optional[str] = None

    # Trace and diagnostics
    trace: list[TraceEntry] = field(default_factory=list)
    diagnostics: list[Diagnostic] = field(default_factory=list)
    status: MappingStatus = MappingStatus.SUCCESS

    # Internal
    start_time: datetime = field(default_factory=datetime.now)

    @classmethod
    def from_request(cls, request: MappingRequest) -> "MappingContext":
        """Create a context from a mapping request."""
        return cls(request=request, extract=request.extract)

    @property
    def narrative(self) -> str:
        return self.extract.narrative or ""

    @property
    def offense_codes(self) -> list[str]:
        return [o.code for o in self.offenses]

    def add_trace(self, pass_name: str, action: str, **detail: Any) -> None:
        """Add a trace entry."""
        self.trace.append(
            TraceEntry(
                timestamp=datetime.now(),
                pass_name=pass_name,
                action=action,
                detail=detail,
            )
        )

    def add_diagnostic(self, level: str, code: str, message: str, source: str) -> None:
        """Add a diagnostic message."""
        self.diagnostics.append(
            Diagnostic(
                level=DiagnosticLevel(level),
                code=code,
                message=message,
                source=source,
            )
        )

    def fail(self, message: str, source: str) -> None:
        """Mark the mapping as failed. The pipeline halts after this pass."""
        self.status = MappingStatus.FAILED
        self.failure_message = message
        self.add_diagnostic(level="error", code="MAPPING_FAILURE", message=message, source=source)

    def mapping_confidence(self) -> MappingConfidence:
        """Per-field classification results gathered so far."""
        return MappingConfidence(
            offenses=list(self.offense_results),
            location=self.location_result,
            weapons=list(self.weapon_results),
            properties=list(self.property_results),
        )

    def partial_record(self) -> dict[str, Any]:
        """Best-effort partial record for correction UIs."""
        return {
            "incident_number": self.extract.incident_number,
            "incident_date": self.extract.incident_date,
            "offenses": [o.model_dump(mode="json") for o in self.offenses],
            "location_code": self.location_code,
            "narrative": self.narrative,
            "mapping_confidence": self.mapping_confidence().model_dump(mode="json"),
        }

    def to_outcome(self) -> MappingOutcome:
        """Convert context to the final MappingOutcome."""
        if self.status == MappingStatus.SUCCESS and self.segments is not None:
            return MappingOutcome(
                status=self.status,
                segments=self.segments,
                diagnostics=self.diagnostics,
                trace=self.trace,
                request_id=self.request.request_id or "",
            )

        status = self.status
        if status == MappingStatus.SUCCESS:
            # Passes finished without producing a record
            status = MappingStatus.ERROR
        message = self.failure_message
        if message is None:
            errors = [d.message for d in self.diagnostics if d.level == DiagnosticLevel.ERROR]
            message = errors[-1] if errors else "Mapping produced no record"

        return MappingOutcome(
            status=status,
            failure=MappingFailure(
                message=message,
                rejected_offenses=list(self.rejected_offenses),
                partial=self.partial_record(),
            ),
            diagnostics=self.diagnostics,
            trace=self.trace,
            request_id=self.request.request_id or "",
        )
