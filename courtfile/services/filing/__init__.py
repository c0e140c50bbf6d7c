"""
Document Validation & Filing Guidance Engine
============================================

Checks a filer's data against a court document type before it goes to a
state e-filing portal, and tells them what to fix.

Architecture:
- Predicate Registry: named custom checks (case_number, past_date, ...)
- Field Validator: one value against one FieldSpec
- Document Validator: all fields and required attachments of a document
- Relevance Scorer: free-text description -> ranked document types
- Guidance Generator: suggestions and warnings
- Filing Assistant: facade producing a FilingReport and a checklist
- Portal Catalog: state portals and their document types
- Registration Guides: how to sign up with each portal

Usage:
    from courtfile.services.filing import FilingAssistant, get_portal_catalog

    catalog = get_portal_catalog()
    doc_type = catalog.get_document_type("ca-family-motion")
    portal = catalog.get_portal_for_document_type(doc_type.id)

    assistant = FilingAssistant()
    report = assistant.assemble(doc_type, {"caseNumber": "FL-200001"}, portal.restrictions)

    print(f"Ready: {report.is_ready}")
    for step in report.next_steps:
        print(step)
"""

from .assistant import CHECKLIST_REMINDERS, NEXT_STEPS, FilingAssistant
from .document_validator import (
    AttachmentSizeCheck,
    ByteLimitSizeCheck,
    DocumentValidator,
    PassThroughSizeCheck,
    parse_max_size,
)
from .exceptions import (
    FilingEngineError,
    ReferenceDataError,
    UnknownDocumentTypeError,
    UnknownPortalError,
    UnknownRegistrationGuideError,
)
from .field_validator import FieldValidator, is_attachment_missing, is_empty_value
from .guidance import GuidanceGenerator
from .models import (
    AttachmentSpec,
    DocumentExample,
    DocumentTypeDefinition,
    FieldSpec,
    FilingReport,
    FilingSuggestion,
    FilingWarning,
    Priority,
    RuleDiagnostic,
    RuleKind,
    Severity,
    SuggestionType,
    ValidationOutcome,
    ValidationRule,
    ValueKind,
)
from .portals import (
    EFilePortal,
    PortalCatalog,
    PortalStatus,
    get_portal_catalog,
    load_portals,
)
from .registration import (
    RegistrationGuide,
    RegistrationGuideCatalog,
    RegistrationStep,
    get_registration_guides,
    load_registration_guides,
)
from .predicates import BUILTIN_PREDICATES, PredicateRegistry, default_registry
from .relevance import KeywordRelevanceScorer, RelevanceScorer, suggest_document_types

__all__ = [
    # Facade
    "FilingAssistant",
    "NEXT_STEPS",
    "CHECKLIST_REMINDERS",
    # Components
    "FieldValidator",
    "DocumentValidator",
    "GuidanceGenerator",
    "RelevanceScorer",
    "KeywordRelevanceScorer",
    "suggest_document_types",
    "PredicateRegistry",
    "BUILTIN_PREDICATES",
    "default_registry",
    "is_empty_value",
    "is_attachment_missing",
    # Attachment size checks
    "AttachmentSizeCheck",
    "PassThroughSizeCheck",
    "ByteLimitSizeCheck",
    "parse_max_size",
    # Models
    "ValueKind",
    "RuleKind",
    "Severity",
    "SuggestionType",
    "Priority",
    "ValidationRule",
    "FieldSpec",
    "AttachmentSpec",
    "DocumentExample",
    "DocumentTypeDefinition",
    "ValidationOutcome",
    "FilingSuggestion",
    "FilingWarning",
    "RuleDiagnostic",
    "FilingReport",
    # Portals
    "EFilePortal",
    "PortalStatus",
    "PortalCatalog",
    "get_portal_catalog",
    "load_portals",
    # Registration guides
    "RegistrationGuide",
    "RegistrationStep",
    "RegistrationGuideCatalog",
    "get_registration_guides",
    "load_registration_guides",
    # Errors
    "FilingEngineError",
    "ReferenceDataError",
    "UnknownDocumentTypeError",
    "UnknownPortalError",
    "UnknownRegistrationGuideError",
]
