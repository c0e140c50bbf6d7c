"""
Filing Engine Data Models
=========================

Reference data (document types, field specs, attachment specs) is parsed
with pydantic so portal data exported from the web client loads as-is
(camelCase keys are accepted). Results produced by the engine are plain
dataclasses with a to_dict() for API responses.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


# ============================================================================
# ENUMERATIONS
# ============================================================================

class ValueKind(str, Enum):
    """Kind of value a form field holds"""
    TEXT = "text"
    TEXTAREA = "textarea"
    NUMBER = "number"
    DATE = "date"
    SELECT = "select"
    FILE = "file"


class RuleKind(str, Enum):
    """Declarative validation rule types"""
    REQUIRED = "required"
    FORMAT = "format"
    LENGTH = "length"
    PATTERN = "pattern"
    CUSTOM = "custom"


class Severity(str, Enum):
    """Validation outcome severity"""
    ERROR = "error"        # Required field or attachment failed
    WARNING = "warning"    # Optional field has an invalid value
    INFO = "info"          # Passed


class SuggestionType(str, Enum):
    FIELD = "field"
    ATTACHMENT = "attachment"
    FEE = "fee"
    TIMING = "timing"


class Priority(str, Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


# ============================================================================
# REFERENCE DATA
# ============================================================================

class ReferenceModel(BaseModel):
    """Base for immutable reference data; accepts snake_case or camelCase keys."""
    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
        alias_generator=to_camel,
    )


class ValidationRule(ReferenceModel):
    """A single declarative check attached to a field."""
    type: RuleKind
    message: str
    condition: Optional[str] = None  # Regex source, length clauses, or predicate key


class FieldSpec(ReferenceModel):
    """One field of a court document."""
    name: str
    label: str
    type: ValueKind = ValueKind.TEXT
    required: bool = False
    min_length: Optional[int] = None
    max_length: Optional[int] = None
    validation: List[ValidationRule] = Field(default_factory=list)
    help_text: str = ""
    options: List[str] = Field(default_factory=list)  # Allowed values for select fields


class AttachmentSpec(ReferenceModel):
    """An attachment a document type accepts or requires."""
    type: str
    required: bool = False
    max_size: str = ""  # Display string, e.g. "10MB"
    formats: List[str] = Field(default_factory=list)
    description: str = ""

    @property
    def data_key(self) -> str:
        """Key under which callers supply this attachment in the user data."""
        return f"attachment_{self.type}"


class DocumentExample(ReferenceModel):
    name: str
    description: str = ""
    url: str = ""


class DocumentTypeDefinition(ReferenceModel):
    """
    A jurisdiction-specific court filing form.

    required_fields and optional_fields must be present (possibly empty);
    everything else has a default.
    """
    id: str
    name: str
    jurisdiction: str = ""  # State code, e.g. "CA"
    code: str = ""
    category: str = ""
    subcategory: str = ""
    required_fields: List[FieldSpec]
    optional_fields: List[FieldSpec]
    attachments: List[AttachmentSpec] = Field(default_factory=list)
    fees: float = 0.0
    processing_time: str = ""
    restrictions: List[str] = Field(default_factory=list)
    examples: List[DocumentExample] = Field(default_factory=list)

    @property
    def required_attachments(self) -> List[AttachmentSpec]:
        return [a for a in self.attachments if a.required]


# ============================================================================
# ENGINE RESULTS
# ============================================================================

@dataclass
class ValidationOutcome:
    """Result of validating one field or attachment."""
    field: str
    is_valid: bool
    message: str
    severity: Severity
    suggestion: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "field": self.field,
            "is_valid": self.is_valid,
            "message": self.message,
            "severity": self.severity.value,
            "suggestion": self.suggestion,
        }


@dataclass
class FilingSuggestion:
    """Actionable advice derived from the document type and user data."""
    type: SuggestionType
    message: str
    action: str
    priority: Priority

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": self.type.value,
            "message": self.message,
            "action": self.action,
            "priority": self.priority.value,
        }


@dataclass
class FilingWarning:
    """Something that may cause the filing to be rejected or delayed."""
    message: str
    impact: str
    recommendation: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "message": self.message,
            "impact": self.impact,
            "recommendation": self.recommendation,
        }


@dataclass
class RuleDiagnostic:
    """
    Record of a rule that could not be evaluated and was treated as passing.
    Points at bad reference data, never at bad user data.
    """
    field: str
    rule_type: RuleKind
    condition: Optional[str]
    reason: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "field": self.field,
            "rule_type": self.rule_type.value,
            "condition": self.condition,
            "reason": self.reason,
        }


@dataclass
class FilingReport:
    """Everything the UI needs to show filing readiness for one document."""
    document_type: DocumentTypeDefinition
    user_data: Dict[str, Any]
    validation_results: List[ValidationOutcome] = field(default_factory=list)
    suggestions: List[FilingSuggestion] = field(default_factory=list)
    warnings: List[FilingWarning] = field(default_factory=list)
    next_steps: List[str] = field(default_factory=list)
    diagnostics: List[RuleDiagnostic] = field(default_factory=list)

    @property
    def errors(self) -> List[ValidationOutcome]:
        return [r for r in self.validation_results if r.severity == Severity.ERROR]

    @property
    def is_ready(self) -> bool:
        """True when nothing blocks submission."""
        return not self.errors

    def to_dict(self) -> Dict[str, Any]:
        return {
            "document_type": self.document_type.model_dump(mode="json"),
            "user_data": self.user_data,
            "validation_results": [r.to_dict() for r in self.validation_results],
            "suggestions": [s.to_dict() for s in self.suggestions],
            "warnings": [w.to_dict() for w in self.warnings],
            "next_steps": list(self.next_steps),
            "diagnostics": [d.to_dict() for d in self.diagnostics],
            "error_count": len(self.errors),
            "is_ready": self.is_ready,
        }
