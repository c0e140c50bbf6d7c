"""
Filing Assistant
================

Facade over validation, relevance and guidance. Produces the FilingReport
the UI shows before a filer submits to a portal, plus a pre-fill checklist.

Every call is self-contained: pass the document type, the user data and
the portal restrictions each time.

Usage:
    assistant = FilingAssistant.from_settings(get_settings())
    report = assistant.assemble(doc_type, data, restrictions=portal.restrictions)
    if not report.is_ready:
        ...
"""

import copy
import logging
from typing import Any, List, Mapping, Optional, Sequence

from courtfile.core.config import Settings
from .document_validator import (
    AttachmentSizeCheck,
    ByteLimitSizeCheck,
    DocumentValidator,
    PassThroughSizeCheck,
)
from .field_validator import FieldValidator
from .guidance import GuidanceGenerator
from .models import (
    DocumentTypeDefinition,
    FilingReport,
    RuleDiagnostic,
    Severity,
    ValidationOutcome,
)
from .predicates import PredicateRegistry
from .relevance import KeywordRelevanceScorer, RelevanceScorer

logger = logging.getLogger(__name__)


FIX_ERRORS_STEP = "Fix all validation errors above"

NEXT_STEPS = [
    "Review all information for accuracy",
    "Confirm all required attachments are uploaded",
    "Verify the filing fee amount and payment method",
    "Submit the filing through the court's e-filing portal",
    "Save or print the filing confirmation",
    "Monitor the case status for court updates",
]

CHECKLIST_REMINDERS = [
    "☐ Review every field for spelling and accuracy",
    "☐ Sign and date the document where required",
    "☐ Make copies of everything you file",
    "☐ Have the filing fee or fee waiver ready",
    "☐ Note the filing deadline on your calendar",
]


class FilingAssistant:
    """Assembles filing reports and checklists."""

    def __init__(
        self,
        validator: Optional[DocumentValidator] = None,
        guidance: Optional[GuidanceGenerator] = None,
        scorer: Optional[RelevanceScorer] = None,
    ):
        self.validator = validator or DocumentValidator()
        self.guidance = guidance or GuidanceGenerator()
        self.scorer = scorer or KeywordRelevanceScorer()

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        registry: Optional[PredicateRegistry] = None,
    ) -> "FilingAssistant":
        """Build an assistant tuned by application settings."""
        size_check: AttachmentSizeCheck = (
            ByteLimitSizeCheck() if settings.enforce_attachment_size else PassThroughSizeCheck()
        )
        return cls(
            validator=DocumentValidator(FieldValidator(registry), size_check),
            guidance=GuidanceGenerator(
                incident_fields=settings.incident_detail_fields_list,
                min_length=settings.incident_details_min_length,
                justification_field=settings.emergency_justification_field,
            ),
            scorer=KeywordRelevanceScorer(
                token_weight=settings.relevance_token_weight,
                threshold=settings.relevance_threshold,
            ),
        )

    # =========================================================================
    # Pass-throughs
    # =========================================================================

    def suggest_document_types(
        self,
        free_text: str,
        candidates: Sequence[DocumentTypeDefinition],
    ) -> List[DocumentTypeDefinition]:
        return self.scorer.rank(free_text, candidates)

    def validate_document(
        self,
        doc_type: DocumentTypeDefinition,
        data: Mapping[str, Any],
        diagnostics: Optional[List[RuleDiagnostic]] = None,
    ) -> List[ValidationOutcome]:
        return self.validator.validate_document(doc_type, data, diagnostics)

    # =========================================================================
    # Report
    # =========================================================================

    def assemble(
        self,
        doc_type: DocumentTypeDefinition,
        data: Mapping[str, Any],
        restrictions: Sequence[str] = (),
    ) -> FilingReport:
        """
        Validate, then derive suggestions, warnings and next steps.

        Suggestions depend only on the document type and data; warnings also
        see the validation outcomes.
        """
        diagnostics: List[RuleDiagnostic] = []
        results = self.validator.validate_document(doc_type, data, diagnostics)
        suggestions = self.guidance.generate_suggestions(doc_type, data)
        warnings = self.guidance.generate_warnings(doc_type, data, restrictions, results)

        has_errors = any(r.severity == Severity.ERROR for r in results)
        next_steps = ([FIX_ERRORS_STEP] if has_errors else []) + list(NEXT_STEPS)

        report = FilingReport(
            document_type=doc_type,
            user_data=copy.deepcopy(dict(data)),
            validation_results=results,
            suggestions=suggestions,
            warnings=warnings,
            next_steps=next_steps,
            diagnostics=diagnostics,
        )

        logger.debug(
            "Assembled report for %s: %d errors, %d suggestions, %d warnings, %d diagnostics",
            doc_type.id, len(report.errors), len(suggestions), len(warnings), len(diagnostics),
        )
        return report

    def build_checklist(self, doc_type: DocumentTypeDefinition) -> List[str]:
        """Pre-fill checklist: required fields, required attachments, reminders."""
        checklist = [f"☐ {spec.label}" for spec in doc_type.required_fields]

        for attachment in doc_type.required_attachments:
            details = []
            if attachment.formats:
                details.append(", ".join(attachment.formats))
            if attachment.max_size:
                details.append(f"max {attachment.max_size}")
            suffix = f" ({'; '.join(details)})" if details else ""
            checklist.append(f"☐ Attach {attachment.type}{suffix}")

        checklist.extend(CHECKLIST_REMINDERS)
        return checklist
