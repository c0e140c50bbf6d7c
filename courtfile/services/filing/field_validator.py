"""
Field Validator
===============

Validates one field value against its FieldSpec.

Order of checks:
1. Emptiness - required fields fail immediately, optional ones pass
2. Declared rules, in declaration order; the first failing rule wins
3. The field's own min_length / max_length

Rules that cannot be evaluated because the reference data is bad (invalid
regex, unknown predicate, unreadable length clause) pass. Each such case is
logged and recorded as a RuleDiagnostic when a diagnostics list is given.
"""

import logging
import re
from typing import Any, List, Optional, Tuple

from courtfile.core.dates import parse_date_flexible
from .models import (
    FieldSpec,
    RuleDiagnostic,
    RuleKind,
    Severity,
    ValidationOutcome,
    ValidationRule,
    ValueKind,
)
from .predicates import PredicateRegistry, default_registry, to_number

logger = logging.getLogger(__name__)

LENGTH_CLAUSE_PATTERN = re.compile(r"^(min|max|exact)\s*[:=]?\s*(\d+)$", re.IGNORECASE)


def is_empty_value(value: Any) -> bool:
    """None, blank strings and empty collections count as not provided."""
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    if isinstance(value, (list, tuple, set, dict)):
        return len(value) == 0
    return False


def is_attachment_missing(value: Any) -> bool:
    """Attachments are also absent when flagged False."""
    return value is False or is_empty_value(value)


def value_length(value: Any) -> int:
    if isinstance(value, (list, tuple)):
        return len(value)
    return len(str(value))


def parse_length_condition(condition: str) -> Tuple[List[Tuple[str, int]], List[str]]:
    """
    Split "min 5, max 20" into [("min", 5), ("max", 20)].

    Returns:
        (constraints, unreadable clauses)
    """
    constraints = []
    unreadable = []
    for clause in condition.split(","):
        clause = clause.strip()
        if not clause:
            continue
        match = LENGTH_CLAUSE_PATTERN.match(clause)
        if match:
            constraints.append((match.group(1).lower(), int(match.group(2))))
        else:
            unreadable.append(clause)
    return constraints, unreadable


class FieldValidator:
    """Applies a field's declared rules to a single value."""

    def __init__(self, registry: Optional[PredicateRegistry] = None):
        self.registry = registry if registry is not None else default_registry()

    def validate_field(
        self,
        spec: FieldSpec,
        value: Any,
        diagnostics: Optional[List[RuleDiagnostic]] = None,
        required: Optional[bool] = None,
    ) -> ValidationOutcome:
        """
        Validate a value against a field spec.

        Args:
            spec: Field definition
            value: Value supplied by the filer
            diagnostics: Optional sink for fail-open rule diagnostics
            required: Overrides spec.required (the document validator
                      decides by list membership)

        Returns:
            ValidationOutcome; failures are errors for required fields and
            warnings for optional ones
        """
        is_required = spec.required if required is None else required

        if is_empty_value(value):
            if is_required:
                return ValidationOutcome(
                    field=spec.name,
                    is_valid=False,
                    message=self._required_message(spec),
                    severity=Severity.ERROR,
                    suggestion=spec.help_text or f"Please provide {spec.label}",
                )
            return ValidationOutcome(
                field=spec.name,
                is_valid=True,
                message=f"{spec.label} is optional and was left blank",
                severity=Severity.INFO,
            )

        failure_severity = Severity.ERROR if is_required else Severity.WARNING

        for rule in spec.validation:
            if not self._check_rule(spec, rule, value, diagnostics):
                return self._failure(spec, rule.message, failure_severity)

        bound_message = self._check_declared_bounds(spec, value)
        if bound_message:
            return self._failure(spec, bound_message, failure_severity)

        return ValidationOutcome(
            field=spec.name,
            is_valid=True,
            message=f"{spec.label} is valid",
            severity=Severity.INFO,
        )

    # =========================================================================
    # Rule dispatch
    # =========================================================================

    def _check_rule(
        self,
        spec: FieldSpec,
        rule: ValidationRule,
        value: Any,
        diagnostics: Optional[List[RuleDiagnostic]],
    ) -> bool:
        if rule.type == RuleKind.REQUIRED:
            # Emptiness was already handled before any rule runs
            return True
        if rule.type == RuleKind.FORMAT:
            return self._check_format(spec, value)
        if rule.type == RuleKind.LENGTH:
            return self._check_length_rule(spec, rule, value, diagnostics)
        if rule.type == RuleKind.PATTERN:
            return self._check_pattern(spec, rule, value, diagnostics)
        if rule.type == RuleKind.CUSTOM:
            return self._check_custom(spec, rule, value, diagnostics)
        raise ValueError(f"Unhandled rule type: {rule.type}")

    def _check_format(self, spec: FieldSpec, value: Any) -> bool:
        kind = spec.type
        if kind == ValueKind.DATE:
            return parse_date_flexible(value) is not None
        if kind == ValueKind.NUMBER:
            return to_number(value) is not None
        if kind == ValueKind.SELECT:
            if not spec.options:
                return True
            choices = value if isinstance(value, (list, tuple)) else [value]
            return all(str(choice) in spec.options for choice in choices)
        if kind in (ValueKind.TEXT, ValueKind.TEXTAREA, ValueKind.FILE):
            return True
        raise ValueError(f"Unhandled value kind: {kind}")

    def _check_length_rule(
        self,
        spec: FieldSpec,
        rule: ValidationRule,
        value: Any,
        diagnostics: Optional[List[RuleDiagnostic]],
    ) -> bool:
        if not rule.condition:
            self._fail_open(spec, rule, "length rule has no condition", diagnostics)
            return True

        constraints, unreadable = parse_length_condition(rule.condition)
        for clause in unreadable:
            self._fail_open(spec, rule, f"unreadable length clause '{clause}'", diagnostics)

        length = value_length(value)
        for kind, limit in constraints:
            if kind == "min" and length < limit:
                return False
            if kind == "max" and length > limit:
                return False
            if kind == "exact" and length != limit:
                return False
        return True

    def _check_pattern(
        self,
        spec: FieldSpec,
        rule: ValidationRule,
        value: Any,
        diagnostics: Optional[List[RuleDiagnostic]],
    ) -> bool:
        if not rule.condition:
            self._fail_open(spec, rule, "pattern rule has no condition", diagnostics)
            return True
        try:
            pattern = re.compile(rule.condition)
        except re.error as e:
            self._fail_open(spec, rule, f"invalid regular expression: {e}", diagnostics)
            return True
        return pattern.search(str(value)) is not None

    def _check_custom(
        self,
        spec: FieldSpec,
        rule: ValidationRule,
        value: Any,
        diagnostics: Optional[List[RuleDiagnostic]],
    ) -> bool:
        if not rule.condition:
            self._fail_open(spec, rule, "custom rule has no predicate name", diagnostics)
            return True
        if rule.condition not in self.registry:
            self._fail_open(spec, rule, f"unknown predicate '{rule.condition}'", diagnostics)
            return True
        return self.registry.evaluate(rule.condition, value)

    # =========================================================================
    # Helpers
    # =========================================================================

    def _check_declared_bounds(self, spec: FieldSpec, value: Any) -> Optional[str]:
        length = value_length(value)
        if spec.min_length is not None and length < spec.min_length:
            return f"{spec.label} must be at least {spec.min_length} characters"
        if spec.max_length is not None and length > spec.max_length:
            return f"{spec.label} must be at most {spec.max_length} characters"
        return None

    @staticmethod
    def _required_message(spec: FieldSpec) -> str:
        for rule in spec.validation:
            if rule.type == RuleKind.REQUIRED:
                return rule.message
        return f"{spec.label} is required"

    @staticmethod
    def _failure(spec: FieldSpec, message: str, severity: Severity) -> ValidationOutcome:
        return ValidationOutcome(
            field=spec.name,
            is_valid=False,
            message=message,
            severity=severity,
            suggestion=spec.help_text or None,
        )

    @staticmethod
    def _fail_open(
        spec: FieldSpec,
        rule: ValidationRule,
        reason: str,
        diagnostics: Optional[List[RuleDiagnostic]],
    ) -> None:
        logger.warning(
            "Rule %s on field '%s' treated as passing: %s",
            rule.type.value, spec.name, reason,
        )
        if diagnostics is not None:
            diagnostics.append(RuleDiagnostic(
                field=spec.name,
                rule_type=rule.type,
                condition=rule.condition,
                reason=reason,
            ))
