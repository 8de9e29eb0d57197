"""
Template Schema — Pydantic models for per-offense required-field policy.

Templates are validated on load via model_validate, so a malformed
configuration fails at startup rather than during validation.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


VictimAttribute = Literal["type", "age", "sex", "race", "ethnicity", "injury"]
OffenderAttribute = Literal["age", "sex", "race", "ethnicity", "relationship"]

# Template attribute name -> segment model field name
VICTIM_FIELDS = {
    "type": "victim_type",
    "age": "age",
    "sex": "sex",
    "race": "race",
    "ethnicity": "ethnicity",
    "injury": "injury",
}

OFFENDER_FIELDS = {
    "age": "age",
    "sex": "sex",
    "race": "race",
    "ethnicity": "ethnicity",
    "relationship": "relationship_to_victim",
}


class OffenseTemplate(BaseModel):
    """Which sub-fields an offense requires before it is reportable."""

    model_config = ConfigDict(frozen=True)

    name: str = Field("", description="Human-readable offense name")
    required_victim: tuple[VictimAttribute, ...] = Field(
        default=(),
        description="Victim attributes that must be present",
    )
    required_offender: tuple[OffenderAttribute, ...] = Field(
        default=(),
        description="Offender attributes that must be present",
    )
    required_property: bool = Field(False, description="Property or evidence must exist")
    required_evidence: bool = Field(False, description="An evidence block must exist")
    is_victimless: bool = Field(False, description="Reported against Society, not a person")


class TemplateRegistry(BaseModel):
    """All offense templates plus the permissive default."""

    model_config = ConfigDict(frozen=True)

    version: str = "1.0"
    default: OffenseTemplate = Field(default_factory=OffenseTemplate)
    templates: dict[str, OffenseTemplate] = Field(default_factory=dict)
