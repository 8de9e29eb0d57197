"""
XML Codec — NIBRS 4.0 XML serialization.

The document is built as an lxml element tree, so text content is always
escaped and the output is well-formed. Output is deterministic: the same
record always yields byte-identical XML.

Victims and offender relationships are left out entirely when any offense
in the incident is victimless.
"""

import re
from typing import Iterable, Optional, Union

from lxml import etree

from nibrs.core.logging import get_logger, LogChannel
from nibrs.ir.schema import (
    Arrestee,
    Evidence,
    NibrsSegments,
    Offender,
    Offense,
    Property,
    Victim,
)
from nibrs.mapping.predicates import is_victimless_offense

log = get_logger(LogChannel.CODEC)

NIBRS_NAMESPACE = "http://fbi.gov/cjis/nibrs/4.0"
_NS = f"{{{NIBRS_NAMESPACE}}}"

_UNSAFE_FILENAME = re.compile(r"[^A-Za-z0-9_.-]+")

# Characters outside the XML 1.0 Char production; lxml refuses them
_XML_ILLEGAL = re.compile("[^\t\n\r\u0020-\uD7FF\uE000-\uFFFD\U00010000-\U0010FFFF]")


# ============================================================================
# Element Helpers
# ============================================================================

def _text(value: Union[str, int, float, bool, None]) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "Y" if value else "N"
    if isinstance(value, float):
        return str(int(value)) if value.is_integer() else repr(value)
    return _XML_ILLEGAL.sub("", str(value))


def _add(parent: etree._Element, tag: str, value=None, required: bool = False) -> Optional[etree._Element]:
    """Append a child element. Optional children with no value are skipped."""
    if value is None or value == "":
        if not required:
            return None
    child = etree.SubElement(parent, _NS + tag)
    child.text = _text(value)
    return child


def _add_all(parent: etree._Element, tag: str, values: Iterable) -> None:
    for value in values:
        _add(parent, tag, value)


# ============================================================================
# Segments
# ============================================================================

def _offense(parent: etree._Element, offense: Offense, location_code: str) -> None:
    el = etree.SubElement(parent, _NS + "Offense")
    _add(el, "SequenceNumber", offense.sequence_number, required=True)
    _add(el, "OffenseCode", offense.code, required=True)
    _add(el, "AttemptedCompleted", offense.attempted_completed, required=True)
    _add(el, "LocationCode", location_code, required=True)
    _add_all(el, "WeaponCode", offense.weapon_codes)
    _add(el, "BiasMotivation", offense.bias_motivation)


def _victim(parent: etree._Element, victim: Victim) -> None:
    el = etree.SubElement(parent, _NS + "Victim")
    _add(el, "SequenceNumber", victim.sequence_number, required=True)
    _add(el, "VictimType", victim.victim_type, required=True)
    _add(el, "Age", victim.age)
    _add(el, "Sex", victim.sex)
    _add(el, "Race", victim.race)
    _add(el, "Ethnicity", victim.ethnicity)
    _add(el, "Injury", victim.injury)


def _offender(parent: etree._Element, offender: Offender, include_relationship: bool) -> None:
    el = etree.SubElement(parent, _NS + "Offender")
    _add(el, "SequenceNumber", offender.sequence_number, required=True)
    _add(el, "Age", offender.age)
    _add(el, "Sex", offender.sex)
    _add(el, "Race", offender.race)
    _add(el, "Ethnicity", offender.ethnicity)
    if include_relationship:
        _add(el, "RelationshipToVictim", offender.relationship_to_victim)


def _property(parent: etree._Element, prop: Property) -> None:
    el = etree.SubElement(parent, _NS + "Property")
    _add(el, "SequenceNumber", prop.sequence_number, required=True)
    _add(el, "LossType", prop.loss_type)
    _add(el, "DescriptionCode", prop.description_code, required=True)
    _add(el, "Description", prop.description)
    _add(el, "Value", prop.value)
    if prop.seized:
        _add(el, "Seized", True)
    _add(el, "SuspectedDrugType", prop.suspected_drug_type)
    _add(el, "DrugQuantity", prop.drug_quantity)
    _add(el, "DrugMeasurement", prop.drug_measurement)


def _evidence(parent: etree._Element, evidence: Evidence) -> None:
    el = etree.SubElement(parent, _NS + "Evidence")
    _add(el, "Description", evidence.description)
    _add_all(el, "Item", evidence.items)
    _add(el, "Value", evidence.value)


def _arrestee(parent: etree._Element, arrestee: Arrestee) -> None:
    el = etree.SubElement(parent, _NS + "Arrestee")
    _add(el, "SequenceNumber", arrestee.sequence_number, required=True)
    _add(el, "ArrestDate", arrestee.arrest_date, required=True)
    _add(el, "ArrestType", arrestee.arrest_type, required=True)
    _add(el, "Age", arrestee.age)
    _add(el, "Sex", arrestee.sex)
    _add(el, "Race", arrestee.race)
    _add(el, "Ethnicity", arrestee.ethnicity)
    _add_all(el, "OffenseCode", arrestee.offense_codes)


# ============================================================================
# Document
# ============================================================================

def build_nibrs_element(segments: NibrsSegments) -> etree._Element:
    """Build the NIBRSReport element tree for a record."""
    admin = segments.administrative
    has_victimless = any(is_victimless_offense(code) for code in segments.offense_codes)

    root = etree.Element(_NS + "NIBRSReport", nsmap={None: NIBRS_NAMESPACE})
    incident = etree.SubElement(root, _NS + "Incident")

    _add(incident, "IncidentNumber", admin.incident_number, required=True)
    _add(incident, "IncidentDate", admin.incident_date, required=True)
    _add(incident, "IncidentTime", admin.incident_time)
    _add(incident, "ClearedExceptionally", admin.cleared_exceptionally, required=True)
    _add(incident, "ClearedBy", admin.cleared_by)
    _add(incident, "ExceptionalClearanceDate", admin.exceptional_clearance_date)

    for offense in segments.offenses:
        _offense(incident, offense, segments.location_code)

    if not has_victimless:
        for victim in segments.victims:
            _victim(incident, victim)

    for offender in segments.offenders:
        _offender(incident, offender, include_relationship=not has_victimless)

    for prop in segments.properties:
        _property(incident, prop)

    if segments.evidence is not None:
        _evidence(incident, segments.evidence)

    for arrestee in segments.arrestees:
        _arrestee(incident, arrestee)

    _add(incident, "Narrative", segments.narrative, required=True)
    return root


def build_nibrs_xml(segments: NibrsSegments) -> str:
    """
    Serialize a record to a NIBRS 4.0 XML document.

    Returns:
        The document as a string, with an XML declaration
    """
    root = build_nibrs_element(segments)
    xml = etree.tostring(
        root,
        xml_declaration=True,
        encoding="UTF-8",
        pretty_print=True,
    ).decode("utf-8")

    log.verbose(
        "xml_built",
        incident_number=segments.administrative.incident_number,
        offenses=len(segments.offenses),
        size=len(xml),
    )
    return xml


def xml_filename(segments: NibrsSegments) -> str:
    """Download filename for a record's XML: NIBRS_<incident number>.xml."""
    number = segments.administrative.incident_number or "report"
    return f"NIBRS_{_UNSAFE_FILENAME.sub('_', number)}.xml"
