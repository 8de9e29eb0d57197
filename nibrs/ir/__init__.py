"""
IR — The NIBRS record model.

NibrsSegments is the source of truth; XML is a rendering of it.
"""

from nibrs.ir.enums import (
    ArrestType,
    DiagnosticLevel,
    ErrorKind,
    InjuryType,
    LossType,
    MappingStatus,
    SegmentType,
    VictimType,
)
from nibrs.ir.schema import (
    Administrative,
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
    OffenderDescription,
    Offense,
    OffenseDescription,
    Property,
    PropertyDescription,
    SegmentRecord,
    Victim,
    VictimDescription,
    parse_segment_record,
)

__all__ = [
    # Enums
    "ArrestType",
    "DiagnosticLevel",
    "ErrorKind",
    "InjuryType",
    "LossType",
    "MappingStatus",
    "SegmentType",
    "VictimType",
    # Input
    "DescriptiveExtract",
    "OffenseDescription",
    "VictimDescription",
    "OffenderDescription",
    "PropertyDescription",
    # Segments
    "Administrative",
    "Offense",
    "Victim",
    "Offender",
    "Property",
    "Evidence",
    "Arrestee",
    "NibrsSegments",
    "SegmentRecord",
    "parse_segment_record",
    # Mapping
    "MappingResult",
    "MappingConfidence",
    "MappingFailure",
    "MappingOutcome",
    "Diagnostic",
]
