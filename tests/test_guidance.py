"""
Tests for filing suggestions and warnings.
"""

from courtfile.services.filing import (
    GuidanceGenerator,
    Priority,
    Severity,
    SuggestionType,
    ValidationOutcome,
)


def emergency_warnings(warnings):
    return [w for w in warnings if "emergency" in w.message.lower()]


# ============================================================================
# SUGGESTIONS
# ============================================================================

class TestSuggestions:
    """Suggestions derived from the document type and raw data."""

    def test_missing_required_attachment(self, restraining_order_type, long_incident_details):
        suggestions = GuidanceGenerator().generate_suggestions(
            restraining_order_type, {"incidentDetails": long_incident_details},
        )
        assert len(suggestions) == 1
        suggestion = suggestions[0]
        assert suggestion.type == SuggestionType.ATTACHMENT
        assert suggestion.priority == Priority.HIGH
        assert "Declaration" in suggestion.message
        assert "10MB" in suggestion.action
        assert "PDF" in suggestion.action

    def test_present_attachment_not_suggested(self, restraining_order_type, long_incident_details):
        data = {"incidentDetails": long_incident_details, "attachment_Declaration": "decl.pdf"}
        suggestions = GuidanceGenerator().generate_suggestions(restraining_order_type, data)
        assert suggestions == []

    def test_attachment_flagged_false_is_suggested(self, restraining_order_type, long_incident_details):
        data = {"incidentDetails": long_incident_details, "attachment_Declaration": False}
        suggestions = GuidanceGenerator().generate_suggestions(restraining_order_type, data)
        assert [s.type for s in suggestions] == [SuggestionType.ATTACHMENT]
        assert "Declaration" in suggestions[0].message

    def test_short_incident_details(self, restraining_order_type):
        data = {"incidentDetails": "He yelled at me outside the grocery store", "attachment_Declaration": "d.pdf"}
        assert len(data["incidentDetails"]) < 100
        suggestions = GuidanceGenerator().generate_suggestions(restraining_order_type, data)
        field_suggestions = [s for s in suggestions if s.type == SuggestionType.FIELD]
        assert len(field_suggestions) == 1
        assert field_suggestions[0].priority == Priority.MEDIUM
        assert "dates" in field_suggestions[0].action

    def test_absent_incident_details_not_flagged(self, restraining_order_type):
        suggestions = GuidanceGenerator().generate_suggestions(
            restraining_order_type, {"attachment_Declaration": "d.pdf"},
        )
        assert suggestions == []

    def test_configurable_incident_fields(self, motion_type):
        generator = GuidanceGenerator(incident_fields=["reliefSought"], min_length=20)
        suggestions = generator.generate_suggestions(motion_type, {"reliefSought": "More time"})
        assert any(s.type == SuggestionType.FIELD for s in suggestions)

    def test_fee_suggestion(self, motion_type):
        suggestions = GuidanceGenerator().generate_suggestions(motion_type, {})
        fee = [s for s in suggestions if s.type == SuggestionType.FEE]
        assert len(fee) == 1
        assert fee[0].priority == Priority.MEDIUM
        assert "435.00" in fee[0].message
        assert "fee waiver" in fee[0].action

    def test_free_filing_has_no_fee_suggestion(self, restraining_order_type):
        suggestions = GuidanceGenerator().generate_suggestions(restraining_order_type, {})
        assert not any(s.type == SuggestionType.FEE for s in suggestions)

    def test_suggestion_order(self, restraining_order_type):
        doc_type = restraining_order_type.model_copy(update={"fees": 50})
        suggestions = GuidanceGenerator().generate_suggestions(doc_type, {"incidentDetails": "short"})
        assert [s.type for s in suggestions] == [
            SuggestionType.ATTACHMENT,
            SuggestionType.FIELD,
            SuggestionType.FEE,
        ]


# ============================================================================
# WARNINGS
# ============================================================================

class TestWarnings:
    """Warnings derived from data, restrictions and validation results."""

    def test_emergency_without_justification(self, restraining_order_type):
        warnings = GuidanceGenerator().generate_warnings(
            restraining_order_type, {"urgency": "emergency"}, [],
        )
        assert len(warnings) == 1
        assert len(emergency_warnings(warnings)) == 1
        assert "justification" in warnings[0].message.lower()

    def test_emergency_with_justification(self, restraining_order_type):
        data = {"urgency": "emergency", "exParteJustification": "Respondent has threatened to return tonight"}
        warnings = GuidanceGenerator().generate_warnings(restraining_order_type, data, [])
        assert emergency_warnings(warnings) == []

    def test_blank_justification_counts_as_missing(self, restraining_order_type):
        data = {"urgency": "emergency", "exParteJustification": "   "}
        warnings = GuidanceGenerator().generate_warnings(restraining_order_type, data, [])
        assert len(emergency_warnings(warnings)) == 1

    def test_standard_urgency_no_warning(self, restraining_order_type):
        warnings = GuidanceGenerator().generate_warnings(restraining_order_type, {"urgency": "standard"}, [])
        assert warnings == []

    def test_restrictions_warning(self, motion_type):
        warnings = GuidanceGenerator().generate_warnings(
            motion_type, {}, ["Complex cases may require paper filing"],
        )
        assert len(warnings) == 1
        assert "rejected" in warnings[0].impact
        assert "Complex cases may require paper filing" in warnings[0].recommendation

    def test_error_count_warning(self, motion_type):
        results = [
            ValidationOutcome("caseNumber", False, "Case number is required", Severity.ERROR),
            ValidationOutcome("reliefSought", False, "Relief sought is required", Severity.ERROR),
            ValidationOutcome("attorneyBarNumber", False, "Bad", Severity.WARNING),
        ]
        warnings = GuidanceGenerator().generate_warnings(motion_type, {}, [], results)
        assert len(warnings) == 1
        assert warnings[0].message == "2 validation errors found"

    def test_warning_order(self, restraining_order_type):
        results = [ValidationOutcome("incidentDetails", False, "Required", Severity.ERROR)]
        warnings = GuidanceGenerator().generate_warnings(
            restraining_order_type,
            {"urgency": "emergency"},
            ["Some document types require attorney filing"],
            results,
        )
        assert [w.message for w in warnings] == [
            "This filing has jurisdiction-specific restrictions",
            "Emergency filing without justification",
            "1 validation error found",
        ]
