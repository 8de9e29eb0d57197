"""
IR Schema — Pydantic models for the NIBRS record and its input.

Three groups of models live here:

- DescriptiveExtract: the immutable, loosely-structured input produced by
  the upstream extraction step.
- NibrsSegments: the canonical, code-normalized NIBRS record. Every code
  field is checked against its code space at construction, so an invalid
  offense/location/weapon/property/relationship code can never exist in a
  built record.
- MappingOutcome: the result value returned by the mapper. A failure to
  classify the incident is a value, not an exception.
"""

from __future__ import annotations

from datetime import datetime
from typing import Annotated, Any, Iterator, Literal, Optional, Union

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    TypeAdapter,
    field_validator,
    model_validator,
)
from pydantic.alias_generators import to_camel

from nibrs.codes.tables import (
    DRUG_TYPE_CODE_SPACE,
    LOCATION_CODE_SPACE,
    OFFENSE_CODES,
    PROPERTY_CODE_SPACE,
    RELATIONSHIP_CODE_SPACE,
    WEAPON_CODE_SPACE,
)
from nibrs.core.errors import MappingFailureError
from nibrs.ir.enums import (
    ArrestType,
    DiagnosticLevel,
    DrugMeasurement,
    Ethnicity,
    InjuryType,
    MappingStatus,
    Race,
    Sex,
    VictimType,
)

SCHEMA_VERSION = "1.0.0"


def _check_code(value: Optional[str], space: frozenset, label: str) -> Optional[str]:
    if value is None:
        return value
    if value not in space:
        raise ValueError(f"'{value}' is not a valid NIBRS {label} code")
    return value


# ============================================================================
# Input: DescriptiveExtract
# ============================================================================

class _ExtractModel(BaseModel):
    """Frozen base accepting both snake_case and camelCase keys."""

    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
        alias_generator=to_camel,
        extra="ignore",
    )


class OffenseDescription(_ExtractModel):
    description: str = Field(default="", description="Free-text offense description")
    attempted_completed: Optional[str] = Field(None, description="'A' or 'C' if stated")


class VictimDescription(_ExtractModel):
    type: Optional[str] = Field(None, description="Victim type, code or words")
    age: Optional[int] = None
    sex: Optional[str] = None
    race: Optional[str] = None
    ethnicity: Optional[str] = None
    injury: Optional[str] = Field(None, description="Injury code or description")
    description: Optional[str] = Field(None, description="Source text for this victim")


class OffenderDescription(_ExtractModel):
    age: Optional[int] = None
    sex: Optional[str] = None
    race: Optional[str] = None
    ethnicity: Optional[str] = None
    relationship_description: Optional[str] = Field(
        None, description="Relationship of the offender to the victim, in words"
    )
    description: Optional[str] = Field(None, description="Source text for this offender")


class PropertyDescription(_ExtractModel):
    description: Optional[str] = None
    value: Optional[float] = None
    loss_description: Optional[str] = Field(None, description="How the property was lost")


class DescriptiveExtract(_ExtractModel):
    """
    Free-text-derived input to the mapper.

    Produced once by the upstream extractor and never mutated. The legacy
    single-valued keys (offenseDescription, victim, offender, property,
    weaponDescription) are folded into the list fields on load.
    """

    incident_number: Optional[str] = None
    incident_date: Optional[str] = None
    incident_time: Optional[str] = None
    cleared_exceptionally: Optional[Literal["Y", "N"]] = None
    exceptional_clearance_date: Optional[str] = None
    offenses: tuple[OffenseDescription, ...] = ()
    location_description: Optional[str] = None
    weapon_descriptions: tuple[str, ...] = ()
    bias_motivation: Optional[str] = None
    victims: tuple[VictimDescription, ...] = ()
    offenders: tuple[OffenderDescription, ...] = ()
    properties: tuple[PropertyDescription, ...] = ()
    narrative: str = ""

    @model_validator(mode="before")
    @classmethod
    def _fold_legacy_keys(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        data = dict(data)

        legacy_offense = data.pop("offenseDescription", None) or data.pop("offense_description", None)
        attempted = data.pop("offenseAttemptedCompleted", None) or data.pop("offense_attempted_completed", None)
        if legacy_offense and not data.get("offenses"):
            data["offenses"] = [{"description": legacy_offense, "attempted_completed": attempted}]

        legacy_weapon = data.pop("weaponDescription", None) or data.pop("weapon_description", None)
        if legacy_weapon and not (data.get("weaponDescriptions") or data.get("weapon_descriptions")):
            data["weapon_descriptions"] = [legacy_weapon]

        for single, plural in (("victim", "victims"), ("offender", "offenders")):
            legacy = data.pop(single, None)
            if legacy and not data.get(plural):
                data[plural] = [legacy]

        legacy_property = data.pop("property", None)
        if legacy_property and not data.get("properties"):
            item = dict(legacy_property)
            if "propertyDescription" in item and "description" not in item:
                item["description"] = item.pop("propertyDescription")
            data["properties"] = [item]

        if data.get("narrative") is None:
            data["narrative"] = ""
        return data


# ============================================================================
# Mapping Confidence
# ============================================================================

class MappingResult(BaseModel):
    """Result of classifying one piece of free text into a code."""

    code: str = Field(default="", description="Mapped code, empty when unmapped")
    confidence: float = Field(default=0.0, ge=0.0, le=1.0)
    original_input: str = Field(default="", description="The text that was classified")

    @property
    def mapped(self) -> bool:
        return bool(self.code)


class MappingConfidence(BaseModel):
    """Per-field classification results kept for review UIs."""

    offenses: list[MappingResult] = Field(default_factory=list)
    location: Optional[MappingResult] = None
    weapons: list[MappingResult] = Field(default_factory=list)
    properties: list[MappingResult] = Field(default_factory=list)


# ============================================================================
# Segments
# ============================================================================

class _SegmentModel(BaseModel):
    model_config = ConfigDict(use_enum_values=True, validate_assignment=True, validate_default=True)


class Administrative(_SegmentModel):
    """Administrative segment: incident identity and clearance."""

    incident_number: Optional[str] = Field(None, min_length=1, description="Unique per record")
    incident_date: Optional[str] = Field(None, description="ISO or common US date")
    incident_time: Optional[str] = None
    cleared_exceptionally: Literal["Y", "N"] = "N"
    exceptional_clearance_date: Optional[str] = None
    cleared_by: Optional[Literal["A"]] = Field(None, description="'A' when cleared by arrest")
    clearance_method: Optional[str] = None


class Offense(_SegmentModel):
    """Offense segment."""

    code: str = Field(..., description="NIBRS Group A or Group B offense code")
    description: str = ""
    attempted_completed: Literal["A", "C"] = "C"
    sequence_number: int = Field(default=1, ge=1)
    confidence: float = Field(default=1.0, ge=0.0, le=1.0)
    weapon_codes: list[str] = Field(default_factory=list)
    bias_motivation: Optional[str] = None
    source_text: Optional[str] = None

    @field_validator("code")
    @classmethod
    def _valid_offense_code(cls, v: str) -> str:
        return _check_code(v, OFFENSE_CODES, "offense")

    @field_validator("weapon_codes")
    @classmethod
    def _valid_weapon_codes(cls, v: list[str]) -> list[str]:
        for code in v:
            _check_code(code, WEAPON_CODE_SPACE, "weapon")
        return v


class Victim(_SegmentModel):
    """Victim segment."""

    segment_type: Literal["victim"] = "victim"
    sequence_number: int = Field(default=1, ge=1)
    victim_type: VictimType = VictimType.INDIVIDUAL
    age: Optional[int] = None
    sex: Optional[Sex] = None
    race: Optional[Race] = None
    ethnicity: Optional[Ethnicity] = None
    injury: Optional[InjuryType] = None
    source_text: Optional[str] = None


class Offender(_SegmentModel):
    """Offender segment."""

    segment_type: Literal["offender"] = "offender"
    sequence_number: int = Field(default=1, ge=1)
    age: Optional[int] = None
    sex: Optional[Sex] = None
    race: Optional[Race] = None
    ethnicity: Optional[Ethnicity] = None
    relationship_to_victim: Optional[str] = None
    source_text: Optional[str] = None

    @field_validator("relationship_to_victim")
    @classmethod
    def _valid_relationship(cls, v: Optional[str]) -> Optional[str]:
        return _check_code(v, RELATIONSHIP_CODE_SPACE, "relationship")


class Property(_SegmentModel):
    """Property segment. Drug properties are always seized."""

    segment_type: Literal["property"] = "property"
    sequence_number: int = Field(default=1, ge=1)
    description_code: str = Field(..., description="NIBRS property description code")
    description: Optional[str] = None
    loss_type: Optional[str] = Field(None, description="Loss type '1'-'9'")
    value: Optional[float] = Field(None, ge=0)
    seized: bool = False
    suspected_drug_type: Optional[str] = None
    drug_quantity: Optional[float] = Field(None, ge=0)
    drug_measurement: Optional[DrugMeasurement] = None
    confidence: float = Field(default=1.0, ge=0.0, le=1.0)
    source_text: Optional[str] = None

    @field_validator("description_code")
    @classmethod
    def _valid_property_code(cls, v: str) -> str:
        return _check_code(v, PROPERTY_CODE_SPACE, "property description")

    @field_validator("suspected_drug_type")
    @classmethod
    def _valid_drug_type(cls, v: Optional[str]) -> Optional[str]:
        return _check_code(v, DRUG_TYPE_CODE_SPACE, "drug type")


class Evidence(_SegmentModel):
    """Evidence block: items recovered or seized at the scene."""

    description: str = ""
    items: list[str] = Field(default_factory=list)
    value: Optional[float] = Field(None, ge=0)


class Arrestee(_SegmentModel):
    """Arrestee segment."""

    segment_type: Literal["arrestee"] = "arrestee"
    sequence_number: int = Field(default=1, ge=1)
    arrest_date: Optional[str] = None
    arrest_type: ArrestType = ArrestType.TAKEN_INTO_CUSTODY
    age: Optional[int] = None
    sex: Optional[Sex] = None
    race: Optional[Race] = None
    ethnicity: Optional[Ethnicity] = None
    name: Optional[str] = None
    offense_codes: list[str] = Field(default_factory=list)
    source_text: Optional[str] = None

    @field_validator("offense_codes")
    @classmethod
    def _valid_offense_codes(cls, v: list[str]) -> list[str]:
        for code in v:
            _check_code(code, OFFENSE_CODES, "offense")
        return v


SegmentRecord = Annotated[
    Union[Victim, Offender, Property, Arrestee],
    Field(discriminator="segment_type"),
]

_segment_record_adapter: TypeAdapter = TypeAdapter(SegmentRecord)


def parse_segment_record(data: dict) -> Union[Victim, Offender, Property, Arrestee]:
    """Parse a per-person/per-item record by its segment_type tag."""
    return _segment_record_adapter.validate_python(data)


class NibrsSegments(_SegmentModel):
    """
    The canonical NIBRS record.

    Constructed fresh by the mapper; the validator reads it and never
    rewrites it; the codec serializes it read-only.
    """

    administrative: Administrative = Field(default_factory=Administrative)
    offenses: list[Offense] = Field(default_factory=list)
    victims: list[Victim] = Field(default_factory=list)
    offenders: list[Offender] = Field(default_factory=list)
    properties: list[Property] = Field(default_factory=list)
    evidence: Optional[Evidence] = None
    arrestees: list[Arrestee] = Field(default_factory=list)
    location_code: str = Field(default="25", description="NIBRS location type code")
    narrative: str = ""
    mapping_confidence: MappingConfidence = Field(default_factory=MappingConfidence)

    @field_validator("location_code")
    @classmethod
    def _valid_location_code(cls, v: str) -> str:
        return _check_code(v, LOCATION_CODE_SPACE, "location")

    @property
    def offense_codes(self) -> list[str]:
        return [o.code for o in self.offenses]

    def records(self) -> Iterator[Union[Victim, Offender, Property, Arrestee]]:
        """Iterate every per-person/per-item segment record."""
        yield from self.victims
        yield from self.offenders
        yield from self.properties
        yield from self.arrestees


# ============================================================================
# Diagnostics
# ============================================================================

class Diagnostic(BaseModel):
    """A diagnostic message emitted during mapping."""

    level: DiagnosticLevel
    code: str = Field(..., description="Machine-readable code")
    message: str
    source: str = Field(..., description="Pass or component that emitted it")


class TraceEntry(BaseModel):
    """A record of a pass action."""

    timestamp: datetime
    pass_name: str
    action: str
    detail: dict[str, Any] = Field(default_factory=dict)


# ============================================================================
# Mapping Outcome
# ============================================================================

class MappingFailure(BaseModel):
    """Why an extract could not be mapped to a reportable record."""

    message: str
    rejected_offenses: list[MappingResult] = Field(
        default_factory=list,
        description="Offense classifications that were attempted and dropped",
    )
    partial: Optional[dict[str, Any]] = Field(
        None, description="Best-effort partial record for correction UIs"
    )


class MappingOutcome(BaseModel):
    """
    Result value of map_descriptive_to_nibrs.

    Exactly one of `segments` / `failure` is set.
    """

    status: MappingStatus
    segments: Optional[NibrsSegments] = None
    failure: Optional[MappingFailure] = None
    diagnostics: list[Diagnostic] = Field(default_factory=list)
    trace: list[TraceEntry] = Field(default_factory=list)
    request_id: str = ""

    @property
    def ok(self) -> bool:
        return self.status == MappingStatus.SUCCESS and self.segments is not None

    def unwrap(self) -> NibrsSegments:
        """Return the segments or raise MappingFailureError."""
        if self.ok:
            return self.segments
        message = self.failure.message if self.failure else "Mapping failed"
        raise MappingFailureError(message, failure=self.failure)
