"""
IR Enums — NIBRS data-element values and internal status codes.

No stringly-typed constants scattered across the mapper and validator.
"""

from enum import Enum


# ============================================================================
# NIBRS Data Elements
# ============================================================================

class VictimType(str, Enum):
    """NIBRS Data Element 25 — Type of Victim."""

    INDIVIDUAL = "I"
    BUSINESS = "B"
    FINANCIAL_INSTITUTION = "F"
    GOVERNMENT = "G"
    LAW_ENFORCEMENT = "L"
    OTHER = "O"
    RELIGIOUS_ORGANIZATION = "R"
    SOCIETY = "S"          # Society/Public, used for victimless offenses
    UNKNOWN = "U"
    PUBLIC_OTHER = "P"


class Sex(str, Enum):
    MALE = "M"
    FEMALE = "F"
    UNKNOWN = "U"


class Race(str, Enum):
    WHITE = "W"
    BLACK = "B"
    AMERICAN_INDIAN = "I"
    ASIAN = "A"
    PACIFIC_ISLANDER = "P"
    UNKNOWN = "U"


class Ethnicity(str, Enum):
    HISPANIC = "H"
    NOT_HISPANIC = "N"
    UNKNOWN = "U"


class InjuryType(str, Enum):
    """NIBRS Data Element 33 — Type Injury."""

    NONE = "N"
    BROKEN_BONES = "B"
    INTERNAL_INJURY = "I"
    SEVERE_LACERATION = "L"
    MINOR_INJURY = "M"
    OTHER_MAJOR_INJURY = "O"
    LOSS_OF_TEETH = "T"
    UNCONSCIOUSNESS = "U"


class AttemptedCompleted(str, Enum):
    ATTEMPTED = "A"
    COMPLETED = "C"


class ClearedExceptionally(str, Enum):
    YES = "Y"
    NO = "N"


class ArrestType(str, Enum):
    """NIBRS Data Element 43 — Type of Arrest."""

    ON_VIEW = "O"
    SUMMONED = "S"             # Summoned/Cited
    TAKEN_INTO_CUSTODY = "T"


class LossType(str, Enum):
    """NIBRS Data Element 14 — Type Property Loss/Etc."""

    NONE = "1"
    BURNED = "2"
    COUNTERFEITED = "3"
    DESTROYED = "4"            # Destroyed/Damaged/Vandalized
    RECOVERED = "5"
    SEIZED = "6"
    STOLEN = "7"
    UNKNOWN = "8"
    OTHER = "9"


class DrugMeasurement(str, Enum):
    """NIBRS Data Element 22 — Type Drug Measurement."""

    GRAM = "GM"
    KILOGRAM = "KG"
    OUNCE = "OZ"
    POUND = "LB"
    MILLILITER = "ML"
    LITER = "LT"
    FLUID_OUNCE = "FO"
    GALLON = "GL"
    DOSAGE_UNITS = "DU"
    NUMBER_OF_PLANTS = "NP"
    NOT_REPORTED = "XX"


# ============================================================================
# Internal Status Codes
# ============================================================================

class MappingStatus(str, Enum):
    """Outcome status of a mapping run."""

    SUCCESS = "success"
    FAILED = "failed"      # No reportable offense survived mapping
    ERROR = "error"        # A pass raised


class DiagnosticLevel(str, Enum):
    """Severity of a diagnostic."""

    ERROR = "error"
    WARNING = "warning"
    INFO = "info"


class ErrorKind(str, Enum):
    """
    Error taxonomy for the mapping and validation layers.

    Fatal kinds block XML output; AMBIGUOUS_CLASSIFICATION never does.
    """

    MAPPING_FAILURE = "mapping_failure"
    SCHEMA_VIOLATION = "schema_violation"
    PROFESSIONAL_RULE_VIOLATION = "professional_rule_violation"
    TEMPLATE_FIELD_MISSING = "template_field_missing"
    AMBIGUOUS_CLASSIFICATION = "ambiguous_classification"

    @property
    def is_fatal(self) -> bool:
        return self is not ErrorKind.AMBIGUOUS_CLASSIFICATION


class SegmentType(str, Enum):
    """Discriminator values for per-person/per-item segment records."""

    VICTIM = "victim"
    OFFENDER = "offender"
    PROPERTY = "property"
    ARRESTEE = "arrestee"
