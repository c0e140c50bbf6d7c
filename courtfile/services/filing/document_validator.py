"""
Document Validator
==================

Validates a whole user data record against a DocumentTypeDefinition.

Outcomes come back flat and in declaration order:
required fields, then optional fields that have a value, then required
attachments. Unknown keys in the data are ignored.

Attachments are supplied under "attachment_<type>" as either a file name
or a mapping of metadata:

    data["attachment_Supporting Affidavits"] = {
        "filename": "affidavit.pdf",
        "size_bytes": 120_000,
    }

A list or tuple of either form is checked file by file; any other value
fails. File contents are never inspected.
"""

import logging
import re
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Mapping, Optional

from .field_validator import FieldValidator, is_attachment_missing, is_empty_value
from .models import (
    AttachmentSpec,
    DocumentTypeDefinition,
    RuleDiagnostic,
    Severity,
    ValidationOutcome,
)
from .predicates import to_number

logger = logging.getLogger(__name__)

SIZE_PATTERN = re.compile(r"^\s*(\d+(?:\.\d+)?)\s*([KMG]?B)\s*$", re.IGNORECASE)
SIZE_UNITS = {
    "B": 1,
    "KB": 1024,
    "MB": 1024 ** 2,
    "GB": 1024 ** 3,
}


def parse_max_size(max_size: str) -> Optional[int]:
    """
    Convert a display size like "10MB" or "500 KB" to bytes.

    Returns None when the string is not a recognisable size.
    """
    if not max_size:
        return None
    match = SIZE_PATTERN.match(max_size)
    if not match:
        return None
    amount, unit = match.groups()
    return int(float(amount) * SIZE_UNITS[unit.upper()])


# =============================================================================
# ATTACHMENT SIZE CHECKS
# =============================================================================

class AttachmentSizeCheck(ABC):
    """Decides whether a declared attachment size is acceptable."""

    @abstractmethod
    def check(self, spec: AttachmentSpec, declared_size: Any) -> bool:
        pass


class PassThroughSizeCheck(AttachmentSizeCheck):
    """Accepts every size. Used until portals publish enforceable limits."""

    def check(self, spec: AttachmentSpec, declared_size: Any) -> bool:
        return True


class ByteLimitSizeCheck(AttachmentSizeCheck):
    """
    Compares a caller-supplied byte count against the attachment's max_size.

    Passes when the byte count is missing or not numeric, or when max_size
    cannot be parsed.
    """

    def check(self, spec: AttachmentSpec, declared_size: Any) -> bool:
        limit = parse_max_size(spec.max_size)
        size = to_number(declared_size)
        if limit is None or size is None:
            return True
        return size <= limit


# =============================================================================
# DOCUMENT VALIDATOR
# =============================================================================

class DocumentValidator:
    """Runs field and attachment checks for one document instance."""

    def __init__(
        self,
        field_validator: Optional[FieldValidator] = None,
        size_check: Optional[AttachmentSizeCheck] = None,
    ):
        self.field_validator = field_validator or FieldValidator()
        self.size_check = size_check or PassThroughSizeCheck()

    def validate_document(
        self,
        doc_type: DocumentTypeDefinition,
        data: Mapping[str, Any],
        diagnostics: Optional[List[RuleDiagnostic]] = None,
    ) -> List[ValidationOutcome]:
        results: List[ValidationOutcome] = []

        for spec in doc_type.required_fields:
            results.append(self.field_validator.validate_field(
                spec, data.get(spec.name), diagnostics, required=True,
            ))

        for spec in doc_type.optional_fields:
            value = data.get(spec.name)
            if is_empty_value(value):
                continue
            results.append(self.field_validator.validate_field(
                spec, value, diagnostics, required=False,
            ))

        for attachment in doc_type.required_attachments:
            results.append(self.validate_attachment(attachment, data.get(attachment.data_key)))

        logger.debug(
            "Validated %s: %d outcomes, %d errors",
            doc_type.id, len(results),
            sum(1 for r in results if r.severity == Severity.ERROR),
        )
        return results

    def validate_attachment(self, spec: AttachmentSpec, value: Any) -> ValidationOutcome:
        """Presence, then declared format, then declared size, for every file given."""
        if is_attachment_missing(value):
            return ValidationOutcome(
                field=spec.data_key,
                is_valid=False,
                message=f"{spec.type} is required",
                severity=Severity.ERROR,
                suggestion=self._remediation(spec),
            )

        files = self._attachment_files(value)
        if files is None:
            return ValidationOutcome(
                field=spec.data_key,
                is_valid=False,
                message=f"{spec.type} must be given as a file name or file details",
                severity=Severity.ERROR,
                suggestion=self._remediation(spec),
            )

        if not all(self._format_allowed(spec, metadata) for metadata in files):
            return ValidationOutcome(
                field=spec.data_key,
                is_valid=False,
                message=f"{spec.type} must be one of: {', '.join(spec.formats)}",
                severity=Severity.ERROR,
                suggestion=f"Convert the file to {' or '.join(spec.formats)} and upload it again",
            )

        if not all(self.size_check.check(spec, metadata.get("size")) for metadata in files):
            return ValidationOutcome(
                field=spec.data_key,
                is_valid=False,
                message=f"{spec.type} exceeds the maximum size of {spec.max_size}",
                severity=Severity.ERROR,
                suggestion="Compress the file or split it into smaller parts",
            )

        return ValidationOutcome(
            field=spec.data_key,
            is_valid=True,
            message=f"{spec.type} attached",
            severity=Severity.INFO,
        )

    @classmethod
    def _attachment_files(cls, value: Any) -> Optional[List[Dict[str, Any]]]:
        """
        Normalise an attachment value to one metadata dict per file.

        Returns None when any entry is neither a file name nor a mapping.
        """
        items = list(value) if isinstance(value, (list, tuple)) else [value]
        files = []
        for item in items:
            metadata = cls._attachment_metadata(item)
            if metadata is None:
                return None
            files.append(metadata)
        return files

    @staticmethod
    def _attachment_metadata(value: Any) -> Optional[Dict[str, Any]]:
        if isinstance(value, str):
            return {"filename": value.strip(), "format": None, "size": None}
        if isinstance(value, Mapping):
            size = value.get("size")
            if size is None:
                size = value.get("size_bytes")
            return {
                "filename": value.get("filename") or value.get("name"),
                "format": value.get("format"),
                "size": size,
            }
        return None

    @staticmethod
    def _format_allowed(spec: AttachmentSpec, metadata: Dict[str, Any]) -> bool:
        if not spec.formats:
            return True
        allowed = [f.lower().lstrip(".") for f in spec.formats]

        declared_format = metadata.get("format")
        if declared_format:
            return str(declared_format).lower().lstrip(".") in allowed

        filename = metadata.get("filename")
        if filename:
            name = str(filename).lower()
            return any(name.endswith(f".{ext}") for ext in allowed)

        # Nothing to match against the declared formats
        return False

    @staticmethod
    def _remediation(spec: AttachmentSpec) -> str:
        parts = [f"Upload {spec.type}"]
        if spec.formats:
            parts.append(f"accepted formats: {', '.join(spec.formats)}")
        if spec.max_size:
            parts.append(f"maximum size: {spec.max_size}")
        return "; ".join(parts)
