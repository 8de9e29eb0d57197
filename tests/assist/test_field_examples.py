"""
Tests for correction-UI field examples.
"""

import pytest

from nibrs.assist.field_examples import (
    DEFAULT_FIELD_CATEGORY,
    FIELD_EXAMPLES,
    QUICK_FILL_OPTIONS,
    FieldExamplesError,
    contextual_fields,
    get_field_examples,
    get_quick_fill_options,
    load_field_data,
    offense_category,
    resolve_field_category,
)


class TestLoading:
    def test_packaged_tables(self):
        data = load_field_data()
        assert "substance" in FIELD_EXAMPLES
        assert set(data["field_mappings"].values()) <= set(FIELD_EXAMPLES)
        assert set(QUICK_FILL_OPTIONS) == set(FIELD_EXAMPLES)

    def test_missing_file(self, tmp_path):
        with pytest.raises(FieldExamplesError, match="not found"):
            load_field_data(tmp_path / "nope.yaml")

    def test_invalid_yaml(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("field_examples: [unclosed\n")
        with pytest.raises(FieldExamplesError, match="not valid YAML"):
            load_field_data(path)

    def test_missing_section(self, tmp_path):
        path = tmp_path / "partial.yaml"
        path.write_text("field_examples: {victim: {}}\nquick_fill: {}\n")
        with pytest.raises(FieldExamplesError, match="field_mappings, contextual, offense_categories"):
            load_field_data(path)

    def test_mapping_to_unknown_category(self, tmp_path):
        path = tmp_path / "unknown.yaml"
        path.write_text(
            "field_examples: {victim: {}}\n"
            "quick_fill: {}\n"
            "field_mappings: {pet: animal}\n"
            "contextual: {}\n"
            "offense_categories: {}\n"
        )
        with pytest.raises(FieldExamplesError, match="unknown categories: animal"):
            load_field_data(path)


class TestResolveFieldCategory:
    @pytest.mark.parametrize("field,category", [
        ("Drug quantity", "substance"),
        ("Incident date", "time"),
        ("Suspect description", "offender"),
        ("Weapon used", "weapon"),
        ("Injury details", "injuries"),
        ("Victim age", "victim"),
        ("Stolen items", "property"),
    ])
    def test_keywords(self, field, category):
        assert resolve_field_category(field) == category

    def test_unknown_field(self):
        assert resolve_field_category("zzz") == DEFAULT_FIELD_CATEGORY


class TestOffenseCategory:
    @pytest.mark.parametrize("code,category", [
        ("35A", "Drugs"),
        ("90F", "Assault"),
        ("240", "Motor Vehicle Theft"),
        ("100", "Assault"),
    ])
    def test_known(self, code, category):
        assert offense_category(code) == category

    def test_unknown(self):
        assert offense_category("999") is None


class TestGetFieldExamples:
    def test_by_category(self):
        assert get_field_examples("Drug quantity", "Drugs") == (
            "Marijuana, approximately 28 grams in plastic baggies"
        )

    def test_by_offense_code(self):
        assert get_field_examples("Drug quantity", "35A") == get_field_examples("Drug quantity", "Drugs")

    def test_generic_prompt(self):
        assert get_field_examples("Drug quantity", "Theft") == (
            "Provide specific details about drug quantity"
        )


class TestQuickFillAndContext:
    def test_quick_fill(self):
        options = get_quick_fill_options("Arrest details")
        assert options[0] == "Subject taken into custody without incident"
        options.append("mutated")
        assert "mutated" not in QUICK_FILL_OPTIONS["arrest"]

    def test_quick_fill_unknown_field(self):
        assert get_quick_fill_options("zzz") == QUICK_FILL_OPTIONS[DEFAULT_FIELD_CATEGORY]

    def test_contextual_by_code(self):
        assert contextual_fields("240")[0] == "vehicleDescription"
        assert contextual_fields("240") == contextual_fields("Motor Vehicle Theft")

    def test_contextual_unknown(self):
        assert contextual_fields("999") == []
