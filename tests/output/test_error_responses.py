"""
Tests for the standard error response builder.
"""

import json

import pytest
from pydantic import ValidationError

from nibrs.ir.schema import Offense
from nibrs.mapping.mapper import map_descriptive_to_nibrs, validate_and_map_extract
from nibrs.output.errors import (
    PROFESSIONAL_LEVEL,
    ErrorResponseBuilder,
    categorize_missing_fields,
    error_details_from_message,
    extract_missing_fields_from_template_errors,
)
from nibrs.passes.p20_filter_group_b import NO_OFFENSE_MESSAGE
from nibrs.validation.professional import validate_professional_nibrs
from nibrs.validation.validator import validate_nibrs_payload


class TestHelpers:
    def test_categorize(self):
        categorized = categorize_missing_fields([
            "victim.sex",
            "administrative.incident_date",
            "property",
            "evidence",
            "xyz",
        ])
        assert categorized == {
            "personal": ["victim.sex"],
            "incident": ["administrative.incident_date"],
            "property": ["property"],
            "evidence": ["evidence"],
            "other": ["xyz"],
        }

    def test_categorize_empty(self):
        assert categorize_missing_fields([]) == {}

    def test_template_fields_deduplicated(self):
        fields = extract_missing_fields_from_template_errors([
            "Victim sex is required for offense 13A",
            "Victim sex is required for offense 13B",
            "Property information is required for offense 220",
            "not a template error",
        ])
        assert fields == ["victim.sex", "property"]

    def test_details_from_offense_message(self):
        missing, suggestions = error_details_from_message(NO_OFFENSE_MESSAGE)
        assert missing == ["Offense description"]
        assert len(suggestions) == 2

    def test_details_from_unknown_message(self):
        missing, suggestions = error_details_from_message("boom")
        assert missing == []
        assert "Ensure all required NIBRS fields are provided" in suggestions


class TestBuilder:
    def test_from_mapping_failure(self, traffic_extract):
        outcome = map_descriptive_to_nibrs(traffic_extract)
        response = ErrorResponseBuilder.from_mapping_failure(outcome)
        assert response.error == NO_OFFENSE_MESSAGE
        assert response.status_code == 422
        assert response.missing_fields == ["Offense description"]
        assert response.categorized_fields == {"incident": ["Offense description"]}
        assert response.suggestions[-1] == (
            "These descriptions could not be classified: Vehicle was rear-ended at a stop light"
        )
        assert response.nibrs_data["incident_number"] == "24-000103"

    def test_from_mapping_failure_value(self, traffic_extract):
        failure = map_descriptive_to_nibrs(traffic_extract).failure
        response = ErrorResponseBuilder.from_mapping_failure(failure)
        assert response.error == NO_OFFENSE_MESSAGE
        assert response.warnings == []

    def test_from_validation_result(self, theft_segments):
        theft_segments.administrative.incident_number = None
        response = ErrorResponseBuilder.from_validation_result(validate_nibrs_payload(theft_segments))
        assert response.error == "NIBRS validation failed"
        assert response.required_level == PROFESSIONAL_LEVEL
        assert "administrative.incident_number" in response.missing_fields
        assert "Incident number is required" in response.suggestions
        assert response.nibrs_data["location_code"] == "20"

    def test_from_professional_validation(self, theft_segments):
        theft_segments.administrative.incident_date = None
        validation = validate_professional_nibrs(theft_segments)
        response = ErrorResponseBuilder.from_professional_validation(validation, theft_segments)
        assert response.missing_fields == ["Incident date is required"]
        assert response.suggestions == ["Add the date the incident occurred"]
        assert response.categorized_fields == {"incident": ["Incident date is required"]}

    def test_from_schema_validation_error(self):
        with pytest.raises(ValidationError) as info:
            Offense(code="999")
        response = ErrorResponseBuilder.from_schema_validation(info.value)
        assert response.missing_fields == ["code"]
        assert response.suggestions[0].startswith("Validation error: code:")

    def test_from_schema_messages(self):
        response = ErrorResponseBuilder.from_schema_validation(["bad record"], warnings=["w"])
        assert response.suggestions == ["Validation error: bad record"]
        assert response.missing_fields == []
        assert response.warnings == ["w"]

    def test_from_template_validation(self):
        response = ErrorResponseBuilder.from_template_validation([
            "Victim sex is required for offense 13A",
            "Victim sex is required for offense 13B",
        ])
        assert response.missing_fields == ["victim.sex"]
        assert response.categorized_fields == {"personal": ["victim.sex"]}

    def test_from_mapper_validation(self, traffic_extract):
        response = ErrorResponseBuilder.from_mapper_validation(validate_and_map_extract(traffic_extract))
        assert response.error == "NIBRS mapping validation failed"
        assert response.missing_fields == [NO_OFFENSE_MESSAGE]
        assert response.categorized_fields == {"incident": ["offenses"]}

    def test_from_generic_error(self):
        response = ErrorResponseBuilder.from_generic_error(ValueError(""))
        assert response.error == "NIBRS report generation failed"
        assert response.nibrs_data == {}
        assert response.status_code == 500

    def test_json_shape(self, traffic_extract):
        response = ErrorResponseBuilder.from_mapping_failure(map_descriptive_to_nibrs(traffic_extract))
        body = json.loads(response.model_dump_json(exclude_none=True))
        assert "required_level" not in body
        assert body["error"] == NO_OFFENSE_MESSAGE
