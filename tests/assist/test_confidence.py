"""
Tests for review-UI confidence scores.
"""

import pytest

from nibrs.assist.confidence import (
    ConfidenceBand,
    ConfidenceLevel,
    calculate_accuracy_score,
    calculate_validation_confidence,
    confidence_band,
)
from nibrs.ir.schema import NibrsSegments


class TestAccuracyScore:
    def test_complete_record(self, theft_segments):
        assert calculate_accuracy_score(theft_segments) == 100

    def test_errors_and_warnings_deducted(self, theft_segments):
        assert calculate_accuracy_score(theft_segments, errors=["e"], warnings=["w1", "w2"]) == 80

    def test_empty_record(self):
        assert calculate_accuracy_score(NibrsSegments()) == 55

    @pytest.mark.parametrize("confidence,expected", [(0.5, 85), (0.7, 95), (0.8, 100)])
    def test_offense_confidence(self, theft_segments, confidence, expected):
        theft_segments.offenses[0].confidence = confidence
        assert calculate_accuracy_score(theft_segments) == expected

    def test_floor_at_zero(self, theft_segments):
        assert calculate_accuracy_score(theft_segments, errors=["e"] * 11) == 0


class TestValidationConfidence:
    def test_nothing_to_validate(self):
        assessment = calculate_validation_confidence([], [])
        assert assessment.score == 0.0
        assert assessment.level == ConfidenceLevel.LOW
        assert assessment.message == "No fields to validate"

    def test_complete(self):
        assessment = calculate_validation_confidence(["a", "b", "c"], [])
        assert assessment.score == 1.0
        assert assessment.level == ConfidenceLevel.COMPLETE
        assert assessment.color == "green"

    def test_high_score_with_missing_field_is_not_complete(self):
        present = [f"f{i}" for i in range(19)]
        assessment = calculate_validation_confidence(present, ["missing"])
        assert assessment.score == pytest.approx(0.975)
        assert assessment.level == ConfidenceLevel.HIGH

    def test_critical_fields_weighted(self):
        assessment = calculate_validation_confidence(["a"], ["b"], critical_fields=["a"])
        assert assessment.score == pytest.approx(0.75)
        assert assessment.level == ConfidenceLevel.HIGH

    def test_medium(self):
        assessment = calculate_validation_confidence(["a", "b"], ["c", "d"], critical_fields=["c", "a"])
        assert assessment.score == pytest.approx(0.5)
        assert assessment.level == ConfidenceLevel.MEDIUM
        assert assessment.color == "orange"

    def test_low(self):
        assessment = calculate_validation_confidence(["a"], ["b", "c", "d"], critical_fields=["b"])
        assert assessment.score == pytest.approx(0.125)
        assert assessment.level == ConfidenceLevel.LOW


class TestConfidenceBand:
    @pytest.mark.parametrize("confidence,band", [
        (0.95, ConfidenceBand.AUTO_ACCEPT),
        (0.85, ConfidenceBand.AUTO_ACCEPT),
        (0.84, ConfidenceBand.REVIEW),
        (0.5, ConfidenceBand.REVIEW),
        (0.49, ConfidenceBand.REJECT),
        (0.0, ConfidenceBand.REJECT),
    ])
    def test_bands(self, confidence, band):
        assert confidence_band(confidence) == band
