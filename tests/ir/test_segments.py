"""
Tests for the IR schema: extract loading, segment code checks, outcomes.
"""

import pytest
from pydantic import ValidationError

from nibrs.core.errors import MappingFailureError
from nibrs.ir.enums import ErrorKind, MappingStatus
from nibrs.ir.schema import (
    Administrative,
    Arrestee,
    DescriptiveExtract,
    MappingFailure,
    MappingOutcome,
    NibrsSegments,
    Offender,
    Offense,
    Property,
    Victim,
    parse_segment_record,
)
from nibrs.ir.serialization import from_json, to_json


class TestDescriptiveExtract:
    """Loading extracts from JSON dicts."""

    def test_camel_case_keys(self):
        extract = DescriptiveExtract.model_validate({
            "incidentNumber": "A-1",
            "locationDescription": "parking lot",
            "weaponDescriptions": ["handgun"],
        })
        assert extract.incident_number == "A-1"
        assert extract.location_description == "parking lot"
        assert extract.weapon_descriptions == ("handgun",)

    def test_snake_case_keys(self):
        extract = DescriptiveExtract.model_validate({"incident_number": "A-2"})
        assert extract.incident_number == "A-2"

    def test_legacy_single_offense_is_folded(self):
        extract = DescriptiveExtract.model_validate({
            "offenseDescription": "burglary",
            "offenseAttemptedCompleted": "A",
        })
        assert len(extract.offenses) == 1
        assert extract.offenses[0].description == "burglary"
        assert extract.offenses[0].attempted_completed == "A"

    def test_legacy_singletons_are_folded(self):
        extract = DescriptiveExtract.model_validate({
            "victim": {"type": "individual"},
            "offender": {"sex": "male"},
            "weaponDescription": "knife",
            "property": {"propertyDescription": "laptop", "value": 900},
        })
        assert extract.victims[0].type == "individual"
        assert extract.offenders[0].sex == "male"
        assert extract.weapon_descriptions == ("knife",)
        assert extract.properties[0].description == "laptop"
        assert extract.properties[0].value == 900

    def test_null_narrative_becomes_empty(self):
        extract = DescriptiveExtract.model_validate({"narrative": None})
        assert extract.narrative == ""

    def test_extract_is_frozen(self):
        extract = DescriptiveExtract.model_validate({"narrative": "text"})
        with pytest.raises(ValidationError):
            extract.narrative = "changed"


class TestSegmentCodeChecks:
    """Invalid codes can never exist in a built record."""

    def test_invalid_offense_code(self):
        with pytest.raises(ValidationError):
            Offense(code="999")

    def test_invalid_weapon_code(self):
        with pytest.raises(ValidationError):
            Offense(code="13A", weapon_codes=["12", "XX"])

    def test_invalid_location_code(self):
        with pytest.raises(ValidationError):
            NibrsSegments(location_code="99")

    def test_invalid_property_code(self):
        with pytest.raises(ValidationError):
            Property(description_code="00")

    def test_invalid_relationship_code(self):
        with pytest.raises(ValidationError):
            Offender(relationship_to_victim="ZZ")

    def test_invalid_arrestee_offense_code(self):
        with pytest.raises(ValidationError):
            Arrestee(offense_codes=["13B", "nope"])

    def test_assignment_is_validated(self):
        offense = Offense(code="13B")
        with pytest.raises(ValidationError):
            offense.code = "BAD"

    def test_enums_are_stored_as_codes(self):
        victim = Victim(victim_type="S", sex="F")
        assert victim.victim_type == "S"
        assert victim.sex == "F"

    def test_empty_incident_number_rejected(self):
        with pytest.raises(ValidationError):
            Administrative(incident_number="")

    def test_negative_property_value_rejected(self):
        with pytest.raises(ValidationError):
            Property(description_code="20", value=-5)


class TestSegmentRecords:
    def test_parse_by_segment_type(self):
        record = parse_segment_record({"segment_type": "property", "description_code": "20"})
        assert isinstance(record, Property)

    def test_records_iterates_people_and_items(self, theft_segments):
        kinds = [r.segment_type for r in theft_segments.records()]
        assert kinds == ["victim", "offender", "property"]

    def test_offense_codes(self, theft_segments):
        assert theft_segments.offense_codes == ["23H"]

    def test_json_round_trip(self, theft_segments):
        restored = from_json(to_json(theft_segments))
        assert restored.model_dump() == theft_segments.model_dump()


class TestMappingOutcome:
    def test_unwrap_success(self, theft_segments):
        outcome = MappingOutcome(status=MappingStatus.SUCCESS, segments=theft_segments)
        assert outcome.ok
        assert outcome.unwrap().offense_codes == ["23H"]

    def test_unwrap_failure_raises(self):
        outcome = MappingOutcome(
            status=MappingStatus.FAILED,
            failure=MappingFailure(message="nothing to report"),
        )
        assert not outcome.ok
        with pytest.raises(MappingFailureError, match="nothing to report") as info:
            outcome.unwrap()
        assert info.value.failure.message == "nothing to report"


class TestErrorKind:
    def test_only_ambiguity_is_non_fatal(self):
        fatal = {kind for kind in ErrorKind if kind.is_fatal}
        assert ErrorKind.AMBIGUOUS_CLASSIFICATION not in fatal
        assert len(fatal) == len(ErrorKind) - 1
