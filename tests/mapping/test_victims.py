"""
Tests for the Society / Individual victim assignment policy.
"""

from nibrs.ir.schema import DescriptiveExtract, Offense
from nibrs.mapping.victims import assign_professional_victims, victim_from_description


def _extract(**data):
    return DescriptiveExtract.model_validate(data)


class TestAssignProfessionalVictims:
    def test_victimless_gets_single_society_victim(self):
        extract = _extract(victims=[{"type": "individual", "sex": "male"}])
        victims = assign_professional_victims([Offense(code="35A"), Offense(code="35B")], extract)
        assert [v.victim_type for v in victims] == ["S"]

    def test_person_offense_uses_extracted_victims(self):
        extract = _extract(victims=[
            {"type": "individual", "age": 31, "sex": "female"},
            {"type": "business"},
        ])
        victims = assign_professional_victims([Offense(code="23H")], extract)
        assert [v.victim_type for v in victims] == ["I", "B"]
        assert [v.sequence_number for v in victims] == [1, 2]
        assert victims[0].sex == "F"
        assert victims[0].age == 31

    def test_mixed_incident(self):
        extract = _extract(victims=[{"type": "individual", "sex": "male"}])
        victims = assign_professional_victims([Offense(code="13B"), Offense(code="35A")], extract)
        assert [v.victim_type for v in victims] == ["S", "I"]
        assert [v.sequence_number for v in victims] == [1, 2]

    def test_violent_offense_without_victim_synthesizes_one(self):
        victims = assign_professional_victims([Offense(code="13A")], _extract())
        assert len(victims) == 1
        assert victims[0].victim_type == "I"
        assert victims[0].injury == "M"

    def test_property_offense_without_victim_stays_empty(self):
        assert assign_professional_victims([Offense(code="220")], _extract()) == []


class TestVictimFromDescription:
    def test_words_become_codes(self):
        extract = _extract(victims=[{
            "type": "law enforcement officer",
            "sex": "woman",
            "race": "black",
            "ethnicity": "not hispanic",
            "injury": "laceration to the arm",
            "description": "Officer was cut while making the arrest.",
        }])
        victim = victim_from_description(extract.victims[0], sequence_number=3)
        assert victim.sequence_number == 3
        assert victim.victim_type == "L"
        assert (victim.sex, victim.race, victim.ethnicity, victim.injury) == ("F", "B", "N", "L")
        assert victim.source_text == "Officer was cut while making the arrest."
