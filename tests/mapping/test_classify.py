"""
Tests for the free-text classifiers and the fuzzy scorer.
"""

import pytest

from nibrs.mapping.classify import (
    LAST_RESORT_CONFIDENCE,
    find_best_match,
    map_location,
    map_loss_type,
    map_offense,
    map_property,
    map_relationship,
    map_weapon,
    normalize_attempted_completed,
    normalize_ethnicity,
    normalize_injury,
    normalize_race,
    normalize_sex,
    normalize_victim_type,
)

TABLE = {
    "other/unknown": "25",
    "residence": "20",
    "parking lot": "18",
}


class TestFindBestMatch:
    """Scoring against a keyword table."""

    def test_exact_key(self):
        result = find_best_match("  Residence ", TABLE)
        assert result.code == "20"
        assert result.confidence == 1.0
        assert result.original_input == "  Residence "

    def test_text_contains_key(self):
        result = find_best_match("parking lot behind the store", TABLE)
        assert result.code == "18"
        assert 0.8 < result.confidence < 0.9

    def test_key_contains_text_is_capped(self):
        result = find_best_match("lot", TABLE)
        assert result.code == "18"
        assert result.confidence == 0.9

    def test_shared_words(self):
        result = find_best_match("lot parking nearby", TABLE)
        assert result.code == "18"
        assert result.confidence == pytest.approx(0.8)

    def test_no_partial_word_matches(self):
        result = find_best_match("residences", {"other": "77", "residence": "20"})
        assert result.code == "77"
        assert result.confidence == LAST_RESORT_CONFIDENCE

    def test_domain_fallback_keywords(self):
        result = find_best_match("back porch", TABLE, "location")
        assert result.code == "20"
        assert result.confidence == 0.7

    def test_last_resort_is_first_entry(self):
        result = find_best_match("zzz", TABLE)
        assert result.code == "25"
        assert result.confidence == LAST_RESORT_CONFIDENCE

    @pytest.mark.parametrize("text", [None, "", "   "])
    def test_empty_text(self, text):
        result = find_best_match(text, TABLE)
        assert result.code == ""
        assert result.confidence == 0.0
        assert not result.mapped


class TestMapOffense:
    def test_rule_hit(self):
        result = map_offense("Possession of marijuana")
        assert result.code == "35A"
        assert result.confidence == 0.9

    def test_group_a_keyword_fallback(self):
        result = map_offense("running a betting ring")
        assert result.code == "39A"
        assert result.confidence == 0.85

    def test_group_b_keyword_fallback(self):
        result = map_offense("family offense")
        assert result.code == "90F"
        assert result.confidence == 0.8

    @pytest.mark.parametrize("text", [
        "kidnapping",
        "Abduction of a child",
        "The suspect kidnapped the victim at gunpoint",
        "Suspect held her against her will in the basement",
    ])
    def test_kidnapping(self, text):
        result = map_offense(text)
        assert result.code == "100"
        assert result.confidence == 0.9

    def test_robbery_at_gunpoint_still_robbery(self):
        assert map_offense("The suspect robbed the clerk at gunpoint").code == "120"

    def test_traffic_collision_rejected(self):
        assert map_offense("Vehicle was rear-ended at a stop light").code == ""

    def test_collision_with_impairment_is_dui(self):
        assert map_offense("Crash caused by a DUI driver").code == "90D"

    def test_incidental_fact_rejected(self):
        assert map_offense("Welfare check, no crime").code == ""

    def test_unclassifiable(self):
        result = map_offense("paperwork filed")
        assert result.code == ""
        assert result.original_input == "paperwork filed"

    def test_empty(self):
        assert map_offense(None).code == ""


class TestMapLocationWeaponProperty:
    def test_location_rule(self):
        result = map_location("parking lot")
        assert result.code == "18"
        assert result.confidence == 0.95

    def test_location_residence(self):
        assert map_location("single family home").code == "20"

    def test_cyber_offense_defaults_to_cyberspace(self):
        result = map_location(None, offense_code="26A")
        assert result.code == "58"

    def test_empty_location(self):
        assert map_location("", offense_code="13B").code == ""

    def test_weapon_handgun(self):
        assert map_weapon("a 9mm Glock").code == "12"

    def test_weapon_personal(self):
        assert map_weapon("fists").code == "40"

    def test_weapon_none(self):
        assert map_weapon("none").code == "99"

    def test_property_phone(self):
        assert map_property("iPhone 14").code == "75"

    def test_property_drugs(self):
        assert map_property("bag of cocaine").code == "10"

    def test_property_unknown_is_other(self):
        result = map_property("zzz")
        assert result.code == "77"
        assert result.confidence == LAST_RESORT_CONFIDENCE


class TestMapRelationship:
    def test_code_passthrough(self):
        assert map_relationship("se") == "SE"

    def test_keyword(self):
        assert map_relationship("her boyfriend") == "BG"

    def test_narrative_cue(self):
        assert map_relationship(None, "The suspect is the victim's neighbor.") == "NE"

    def test_unknown_uses_narrative(self):
        assert map_relationship("unknown", "A stranger approached the victim.") == "ST"

    def test_default(self):
        assert map_relationship(None) == "RU"


class TestMapLossType:
    @pytest.mark.parametrize("text, code", [
        ("6", "6"),
        ("stolen", "7"),
        ("Seized by officers", "6"),
        ("recovered", "5"),
        ("", ""),
        ("whatever", ""),
    ])
    def test_codes(self, text, code):
        assert map_loss_type(text) == code


class TestDemographics:
    def test_victim_type(self):
        assert normalize_victim_type("society") == "S"
        assert normalize_victim_type("B") == "B"
        assert normalize_victim_type(None) == "I"
        assert normalize_victim_type("martian") == "I"

    def test_sex(self):
        assert normalize_sex("female") == "F"
        assert normalize_sex("m") == "M"
        assert normalize_sex("robot") == "U"
        assert normalize_sex(None) is None
        assert normalize_sex("  ") is None

    def test_race_and_ethnicity(self):
        assert normalize_race("Caucasian") == "W"
        assert normalize_ethnicity("not hispanic") == "N"
        assert normalize_ethnicity("Hispanic") == "H"

    def test_injury(self):
        assert normalize_injury("bruising") == "M"
        assert normalize_injury("broken arm") == "B"
        assert normalize_injury("something odd") is None

    def test_attempted_completed(self):
        assert normalize_attempted_completed("attempted") == "A"
        assert normalize_attempted_completed(None) == "C"
