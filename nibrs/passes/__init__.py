"""Passes — Pipeline stages for NIBRS mapping."""

from nibrs.passes.p10_map_offenses import map_offenses
from nibrs.passes.p20_filter_group_b import filter_group_b
from nibrs.passes.p30_map_location import map_incident_location
from nibrs.passes.p40_assign_victims import assign_victims
from nibrs.passes.p50_map_properties import map_properties
from nibrs.passes.p60_map_offenders import map_offenders
from nibrs.passes.p70_extract_arrestees import extract_incident_arrestees
from nibrs.passes.p80_normalize import build_segments

__all__ = [
    "map_offenses",
    "filter_group_b",
    "map_incident_location",
    "assign_victims",
    "map_properties",
    "map_offenders",
    "extract_incident_arrestees",
    "build_segments",
]
