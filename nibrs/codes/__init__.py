"""
Codes — NIBRS code spaces and vocabulary tables.
"""

from nibrs.codes.tables import (
    GROUP_A_CODES,
    GROUP_B_CODES,
    LOCATION_CODE_SPACE,
    OFFENSE_CODES,
    PROPERTY_CODE_SPACE,
    RELATIONSHIP_CODE_SPACE,
    SERIOUS_OFFENSE_CODES,
    VICTIMLESS_OFFENSE_CODES,
    VIOLENT_OFFENSE_CODES,
    WEAPON_CODE_SPACE,
    offense_name,
    property_name,
)

__all__ = [
    "GROUP_A_CODES",
    "GROUP_B_CODES",
    "LOCATION_CODE_SPACE",
    "OFFENSE_CODES",
    "PROPERTY_CODE_SPACE",
    "RELATIONSHIP_CODE_SPACE",
    "SERIOUS_OFFENSE_CODES",
    "VICTIMLESS_OFFENSE_CODES",
    "VIOLENT_OFFENSE_CODES",
    "WEAPON_CODE_SPACE",
    "offense_name",
    "property_name",
]
