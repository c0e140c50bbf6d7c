"""
Filing guidance: suggestions and warnings derived from the document type
and the raw user data.
"""

from typing import Any, List, Mapping, Sequence

from .field_validator import is_attachment_missing, is_empty_value
from .models import (
    DocumentTypeDefinition,
    FilingSuggestion,
    FilingWarning,
    Priority,
    Severity,
    SuggestionType,
    ValidationOutcome,
)

DEFAULT_INCIDENT_FIELDS = ("incidentDetails",)
DEFAULT_INCIDENT_MIN_LENGTH = 100
DEFAULT_JUSTIFICATION_FIELD = "exParteJustification"
EMERGENCY_URGENCY = "emergency"


class GuidanceGenerator:
    """Builds suggestions and warnings for one filing."""

    def __init__(
        self,
        incident_fields: Sequence[str] = DEFAULT_INCIDENT_FIELDS,
        min_length: int = DEFAULT_INCIDENT_MIN_LENGTH,
        justification_field: str = DEFAULT_JUSTIFICATION_FIELD,
    ):
        self.incident_fields = tuple(incident_fields)
        self.min_length = min_length
        self.justification_field = justification_field

    def generate_suggestions(
        self,
        doc_type: DocumentTypeDefinition,
        data: Mapping[str, Any],
    ) -> List[FilingSuggestion]:
        suggestions: List[FilingSuggestion] = []

        # Missing required attachments
        for attachment in doc_type.required_attachments:
            if not is_attachment_missing(data.get(attachment.data_key)):
                continue
            formats = ", ".join(attachment.formats) or "any format"
            size = attachment.max_size or "no stated limit"
            suggestions.append(FilingSuggestion(
                type=SuggestionType.ATTACHMENT,
                message=f"{attachment.type} is required for this filing",
                action=f"Upload {attachment.type} (max {size}, formats: {formats})",
                priority=Priority.HIGH,
            ))

        # Short incident descriptions
        for name in self.incident_fields:
            value = data.get(name)
            if is_empty_value(value):
                continue
            if len(str(value).strip()) < self.min_length:
                suggestions.append(FilingSuggestion(
                    type=SuggestionType.FIELD,
                    message="Provide more specific details about the incident",
                    action="Include dates, times, locations, and specific actions taken",
                    priority=Priority.MEDIUM,
                ))

        if doc_type.fees > 0:
            suggestions.append(FilingSuggestion(
                type=SuggestionType.FEE,
                message=f"Filing fee of ${doc_type.fees:.2f} required",
                action="Make sure funds are available or check whether you qualify for a fee waiver",
                priority=Priority.MEDIUM,
            ))

        return suggestions

    def generate_warnings(
        self,
        doc_type: DocumentTypeDefinition,
        data: Mapping[str, Any],
        restrictions: Sequence[str],
        validation_results: Sequence[ValidationOutcome] = (),
    ) -> List[FilingWarning]:
        warnings: List[FilingWarning] = []

        if restrictions:
            warnings.append(FilingWarning(
                message="This filing has jurisdiction-specific restrictions",
                impact="The filing may be rejected or require additional steps",
                recommendation="Review the portal restrictions before submitting: "
                + "; ".join(restrictions),
            ))

        if self._is_emergency(data) and is_empty_value(data.get(self.justification_field)):
            warnings.append(FilingWarning(
                message="Emergency filing without justification",
                impact="Emergency relief may be denied without a stated justification",
                recommendation="Explain why immediate relief is needed before the other party is notified",
            ))

        error_count = sum(1 for r in validation_results if r.severity == Severity.ERROR)
        if error_count:
            noun = "error" if error_count == 1 else "errors"
            warnings.append(FilingWarning(
                message=f"{error_count} validation {noun} found",
                impact="The filing will likely be rejected by the court",
                recommendation="Fix all validation errors before submitting",
            ))

        return warnings

    @staticmethod
    def _is_emergency(data: Mapping[str, Any]) -> bool:
        urgency = data.get("urgency")
        return isinstance(urgency, str) and urgency.strip().lower() == EMERGENCY_URGENCY
