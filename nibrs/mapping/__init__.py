"""Mapping — Free text to NIBRS codes and segments."""

from nibrs.mapping.classify import (
    find_best_match,
    map_location,
    map_loss_type,
    map_offense,
    map_property,
    map_relationship,
    map_weapon,
)
from nibrs.mapping.extraction import (
    extract_arrestees,
    extract_drug_details,
    extract_evidence_details,
    extract_multiple_properties,
)
from nibrs.mapping.normalize import add_missing_required_fields
from nibrs.mapping.predicates import (
    is_traffic_offense,
    is_victimless_offense,
    is_within_current_incident,
    was_cleared_by_arrest,
)
from nibrs.mapping.victims import assign_professional_victims

__all__ = [
    "add_missing_required_fields",
    "assign_professional_victims",
    "extract_arrestees",
    "extract_drug_details",
    "extract_evidence_details",
    "extract_multiple_properties",
    "find_best_match",
    "is_traffic_offense",
    "is_victimless_offense",
    "is_within_current_incident",
    "map_location",
    "map_loss_type",
    "map_offense",
    "map_property",
    "map_relationship",
    "map_weapon",
    "was_cleared_by_arrest",
]
