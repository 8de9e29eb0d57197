"""
Tests for the layered record validator.
"""

from nibrs.ir.enums import ErrorKind
from nibrs.ir.schema import Property, Victim
from nibrs.mapping.mapper import map_descriptive_to_nibrs
from nibrs.validation.models import CorrectionContext
from nibrs.validation.validator import validate_nibrs_payload


class TestValidRecords:
    def test_theft_record(self, theft_segments):
        result = validate_nibrs_payload(theft_segments)
        assert result.ok
        assert result.errors == []
        assert result.missing_fields == []
        assert result.data.offense_codes == ["23H"]

    def test_drug_record(self, drug_segments):
        result = validate_nibrs_payload(drug_segments)
        assert result.ok
        assert result.errors == []

    def test_dict_payload(self, theft_segments):
        result = validate_nibrs_payload(theft_segments.model_dump())
        assert result.ok

    def test_validation_does_not_rewrite(self, theft_segments):
        before = theft_segments.model_dump()
        validate_nibrs_payload(theft_segments)
        assert theft_segments.model_dump() == before

    def test_mapped_drug_incident(self, drug_extract):
        segments = map_descriptive_to_nibrs(drug_extract).unwrap()
        result = validate_nibrs_payload(segments)
        assert result.ok
        assert any("is missing a value" in w for w in result.warnings)

    def test_mapped_assault_incident(self, assault_arrest_extract):
        segments = map_descriptive_to_nibrs(assault_arrest_extract).unwrap()
        assert validate_nibrs_payload(segments).ok


class TestStructuralLayer:
    """Schema violations are fatal and short-circuit the other layers."""

    def test_bad_offense_code(self, theft_segments):
        payload = theft_segments.model_dump()
        payload["offenses"][0]["code"] = "999"
        result = validate_nibrs_payload(payload)
        assert not result.ok
        assert result.data is None
        assert result.missing_fields == ["offenses.0.code"]
        assert [i.kind for i in result.issues] == [ErrorKind.SCHEMA_VIOLATION]
        assert result.issues[0].field == "offenses.0.code"

    def test_not_an_object(self):
        result = validate_nibrs_payload(["not", "a", "record"])
        assert not result.ok
        assert result.errors == ["Payload must be an object, got list"]
        assert result.missing_fields == []


class TestProfessionalLayer:
    def test_missing_incident_number(self, theft_segments):
        theft_segments.administrative.incident_number = None
        result = validate_nibrs_payload(theft_segments)
        assert not result.ok
        assert "Incident number is required" in result.errors
        assert "administrative.incident_number" in result.missing_fields
        assert result.issues_of(ErrorKind.PROFESSIONAL_RULE_VIOLATION)

    def test_warnings_are_not_fatal(self, theft_segments):
        theft_segments.location_code = "25"
        result = validate_nibrs_payload(theft_segments)
        assert result.ok
        assert any("generic 'Other/Unknown'" in w for w in result.warnings)


class TestTemplateLayer:
    def test_missing_victim_sex(self, theft_segments):
        theft_segments.offenses[0].code = "13B"
        theft_segments.victims = [Victim(victim_type="I")]
        result = validate_nibrs_payload(theft_segments)
        assert not result.ok
        assert "Victim sex is required for offense 13B" in result.errors
        assert "victim.sex" in result.missing_fields
        issue = result.issues_of(ErrorKind.TEMPLATE_FIELD_MISSING)[0]
        assert issue.field == "victim.sex"


class TestFieldLayer:
    def test_generic_property_is_warning_with_context(self, theft_segments):
        theft_segments.properties = [
            Property(description_code="77", description="gold necklace", loss_type="7", value=300.0)
        ]
        result = validate_nibrs_payload(theft_segments)
        assert result.ok
        assert any("generic 'Other' (77)" in w for w in result.warnings)
        ambiguous = result.correction_context.ambiguous_properties
        assert ambiguous[0].description == "gold necklace"
        assert ambiguous[0].related_offense == "23H"

    def test_invalid_loss_type_is_error(self, theft_segments):
        theft_segments.properties[0].loss_type = "X"
        result = validate_nibrs_payload(theft_segments)
        assert not result.ok
        assert "Property 'bicycle' has invalid loss type 'X' (must be 1-9)" in result.errors

    def test_out_of_range_age_is_error(self, theft_segments):
        theft_segments.victims[0].age = 150
        result = validate_nibrs_payload(theft_segments)
        assert not result.ok
        assert "Victim 1 age 150 is outside 0-130" in result.errors


class TestCorrectionContext:
    def test_empty(self):
        assert CorrectionContext().is_empty()
        assert not CorrectionContext(low_confidence=["23H"]).is_empty()

    def test_merge_deduplicates_required_fields(self):
        context = CorrectionContext(required_fields=["offenses"])
        context.merge(CorrectionContext(
            required_fields=["offenses", "administrative.incident_date"],
            multi_offense_issues=["issue"],
        ))
        assert context.required_fields == ["offenses", "administrative.incident_date"]
        assert context.multi_offense_issues == ["issue"]
