"""
End-to-end tests for the default mapping pipeline.
"""

import pytest
from pydantic import ValidationError

from nibrs.core.errors import MappingFailureError
from nibrs.ir.enums import MappingStatus
from nibrs.mapping.mapper import map_descriptive_to_nibrs, validate_and_map_extract
from nibrs.passes.p20_filter_group_b import NO_OFFENSE_MESSAGE


class TestDrugIncident:
    """Possession found during a traffic stop."""

    def test_offense(self, drug_extract):
        segments = map_descriptive_to_nibrs(drug_extract).unwrap()
        assert segments.offense_codes == ["35A"]
        assert segments.offenses[0].confidence >= 0.85

    def test_single_society_victim(self, drug_extract):
        segments = map_descriptive_to_nibrs(drug_extract).unwrap()
        assert [v.victim_type for v in segments.victims] == ["S"]

    def test_drug_property_synthesized(self, drug_extract):
        segments = map_descriptive_to_nibrs(drug_extract).unwrap()
        assert len(segments.properties) == 1
        prop = segments.properties[0]
        assert prop.description_code == "10"
        assert prop.seized is True
        assert prop.loss_type == "6"
        assert prop.suspected_drug_type == "E"
        assert prop.drug_quantity == 28.0
        assert prop.drug_measurement == "GM"

    def test_no_relationship_for_victimless(self, drug_extract):
        segments = map_descriptive_to_nibrs(drug_extract).unwrap()
        assert segments.offenders[0].relationship_to_victim is None

    def test_location_and_evidence(self, drug_extract):
        segments = map_descriptive_to_nibrs(drug_extract).unwrap()
        assert segments.location_code == "18"
        assert segments.evidence.items == ["marijuana"]

    def test_no_arrest(self, drug_extract):
        segments = map_descriptive_to_nibrs(drug_extract).unwrap()
        assert segments.arrestees == []
        assert segments.administrative.cleared_by is None


class TestAssaultWithArrest:
    def test_offense_and_location(self, assault_arrest_extract):
        segments = map_descriptive_to_nibrs(assault_arrest_extract).unwrap()
        assert segments.offense_codes == ["13B"]
        assert segments.location_code == "20"

    def test_victim(self, assault_arrest_extract):
        victim = map_descriptive_to_nibrs(assault_arrest_extract).unwrap().victims[0]
        assert (victim.victim_type, victim.age, victim.sex, victim.injury) == ("I", 31, "F", "M")
        assert (victim.race, victim.ethnicity) == ("U", "U")

    def test_offender_relationship(self, assault_arrest_extract):
        offender = map_descriptive_to_nibrs(assault_arrest_extract).unwrap().offenders[0]
        assert offender.relationship_to_victim == "BG"

    def test_arrestee(self, assault_arrest_extract):
        segments = map_descriptive_to_nibrs(assault_arrest_extract).unwrap()
        assert len(segments.arrestees) == 1
        arrestee = segments.arrestees[0]
        assert arrestee.arrest_type == "T"
        assert arrestee.offense_codes == ["13B"]
        assert arrestee.arrest_date == "2024-04-02"
        assert segments.administrative.cleared_by == "A"

    def test_trace_covers_every_pass(self, assault_arrest_extract):
        outcome = map_descriptive_to_nibrs(assault_arrest_extract)
        passes = {entry.pass_name for entry in outcome.trace}
        assert {"p10_map_offenses", "p50_map_properties", "p80_normalize"} <= passes


class TestFailures:
    def test_traffic_collision_is_not_reportable(self, traffic_extract):
        outcome = map_descriptive_to_nibrs(traffic_extract)
        assert not outcome.ok
        assert outcome.status == MappingStatus.FAILED
        assert outcome.failure.message == NO_OFFENSE_MESSAGE
        assert outcome.failure.rejected_offenses[0].original_input.startswith("Vehicle was rear-ended")

    def test_unwrap_raises(self, traffic_extract):
        with pytest.raises(MappingFailureError):
            map_descriptive_to_nibrs(traffic_extract).unwrap()

    def test_group_b_without_arrest_dropped(self):
        outcome = map_descriptive_to_nibrs({
            "offenses": [{"description": "Disorderly conduct"}],
            "narrative": "The subject was yelling at customers.",
        })
        assert not outcome.ok
        codes = [d.code for d in outcome.diagnostics]
        assert "GROUP_B_WITHOUT_ARREST" in codes
        assert outcome.failure.rejected_offenses[-1].code == "90C"

    def test_malformed_extract(self):
        with pytest.raises(ValidationError):
            map_descriptive_to_nibrs({"victims": [{"age": "old"}]})


class TestOtherIncidents:
    def test_group_b_with_arrest_kept(self):
        segments = map_descriptive_to_nibrs({
            "incidentDate": "2024-07-04",
            "offenses": [{"description": "Disorderly conduct"}],
            "narrative": "The subject was yelling at customers and was arrested.",
        }).unwrap()
        assert segments.offense_codes == ["90C"]
        assert len(segments.arrestees) == 1
        assert [v.victim_type for v in segments.victims] == ["S"]

    def test_narrative_classified_without_descriptions(self):
        segments = map_descriptive_to_nibrs({
            "narrative": "The suspect robbed the clerk at gunpoint.",
        }).unwrap()
        assert segments.offense_codes == ["120"]

    def test_weapons_attached(self):
        segments = map_descriptive_to_nibrs({
            "offenses": [{"description": "Aggravated assault"}],
            "weaponDescriptions": ["knife"],
            "victims": [{"type": "individual", "sex": "male"}],
            "narrative": "The victim was cut during a fight.",
        }).unwrap()
        assert segments.offenses[0].code == "13A"
        assert segments.offenses[0].weapon_codes == ["20"]

    def test_duplicate_offense_collapsed(self):
        segments = map_descriptive_to_nibrs({
            "offenses": [{"description": "Simple assault"}, {"description": "Punched the victim"}],
            "victims": [{"type": "individual", "sex": "female"}],
            "narrative": "The suspect punched the victim.",
        }).unwrap()
        assert segments.offense_codes == ["13B"]

    def test_property_from_narrative(self):
        segments = map_descriptive_to_nibrs({
            "incidentNumber": "24-000300",
            "offenses": [{"description": "Theft of a bicycle"}],
            "victims": [{"type": "individual", "sex": "male"}],
            "narrative": "Someone stole a bicycle valued at $350 from the front yard.",
        }).unwrap()
        assert segments.offense_codes == ["23H"]
        prop = segments.properties[0]
        assert (prop.description_code, prop.value, prop.loss_type) == ("04", 350.0, "7")

    def test_negated_custody_is_not_an_arrest(self):
        segments = map_descriptive_to_nibrs({
            "offenses": [{"description": "Vandalism"}],
            "victims": [{"type": "business"}],
            "narrative": "Suspect smashed the window of the store and fled. No one was taken into custody.",
        }).unwrap()
        assert segments.offense_codes == ["290"]
        assert segments.arrestees == []
        assert segments.administrative.cleared_by is None

    def test_request_id_echoed(self, drug_extract):
        outcome = map_descriptive_to_nibrs(drug_extract, request_id="req-1")
        assert outcome.request_id == "req-1"


class TestValidateAndMapExtract:
    def test_success(self, drug_extract):
        result = validate_and_map_extract(drug_extract)
        assert result.ok
        assert [o.code for o in result.offenses] == ["35A"]

    def test_low_confidence_warning(self, drug_extract):
        result = validate_and_map_extract(drug_extract, confidence_threshold=0.95)
        assert "Offense 35A mapped with low confidence (0.90); review recommended" in result.warnings

    def test_failure_reported_as_error(self, traffic_extract):
        result = validate_and_map_extract(traffic_extract)
        assert not result.ok
        assert result.errors == [NO_OFFENSE_MESSAGE]
        assert result.missing_fields == ["offenses"]
        assert result.offenses == []

    def test_malformed_reported_as_error(self):
        result = validate_and_map_extract({"victims": [{"age": "old"}]})
        assert not result.ok
        assert result.errors[0].startswith("victims.0.age")
