"""
Rule Predicate Registry
=======================

Named boolean checks referenced by `custom` validation rules in document
type definitions, e.g. {"type": "custom", "condition": "case_number"}.

Unknown predicate names evaluate to True. Rule authors must test new rule
names before relying on them; the field validator reports every unknown
name it meets as a diagnostic.

Usage:
    registry = default_registry()
    registry.register("county_code", lambda v: str(v).isdigit())
    registry.evaluate("zip_code", "55401")  # True
"""

import logging
import math
import re
from datetime import timedelta
from typing import Any, Callable, Dict, List, Optional

from courtfile.core.dates import parse_date_flexible, utc_today

logger = logging.getLogger(__name__)

Predicate = Callable[[Any], bool]


# =============================================================================
# PATTERNS
# =============================================================================

ALPHA_ONLY_PATTERN = re.compile(r"^[A-Za-z\s\-'.]+$")
PROPER_NAME_PATTERN = re.compile(r"^[A-Z][a-z]+(\s[A-Z][a-z]+)*$")
PHONE_PATTERN = re.compile(r"^\(\d{3}\) \d{3}-\d{4}$")
SSN_PATTERN = re.compile(r"^\d{3}-\d{2}-\d{4}$")
CURRENCY_PATTERN = re.compile(r"^\d+(\.\d{2})?$")
ZIP_PATTERN = re.compile(r"^\d{5}(-\d{4})?$")
CASE_NUMBER_PATTERN = re.compile(r"^[A-Z]{2}-\d{6}$")
BAR_NUMBER_PATTERN = re.compile(r"^\d{6,8}$")

MIN_ADDRESS_LENGTH = 10


def to_number(value: Any) -> Optional[float]:
    """Coerce a form value to a finite float, or None."""
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            return None
    else:
        return None
    return number if math.isfinite(number) else None


def _matches(pattern: re.Pattern) -> Predicate:
    return lambda value: bool(pattern.match(str(value).strip()))


# =============================================================================
# DATE PREDICATES
# =============================================================================

def is_future_date(value: Any) -> bool:
    parsed = parse_date_flexible(value)
    return parsed is not None and parsed > utc_today()


def is_past_date(value: Any) -> bool:
    parsed = parse_date_flexible(value)
    return parsed is not None and parsed < utc_today()


def is_within_last_year(value: Any) -> bool:
    parsed = parse_date_flexible(value)
    if parsed is None:
        return False
    today = utc_today()
    return today - timedelta(days=365) <= parsed <= today


# =============================================================================
# NUMERIC PREDICATES
# =============================================================================

def is_positive_number(value: Any) -> bool:
    number = to_number(value)
    return number is not None and number > 0


def is_percentage(value: Any) -> bool:
    number = to_number(value)
    return number is not None and 0 <= number <= 100


# =============================================================================
# DOMAIN PREDICATES
# =============================================================================

def is_plausible_address(value: Any) -> bool:
    """Street address sanity: long enough, has a space and a house number."""
    text = str(value).strip()
    return (
        len(text) >= MIN_ADDRESS_LENGTH
        and " " in text
        and any(ch.isdigit() for ch in text)
    )


BUILTIN_PREDICATES: Dict[str, Predicate] = {
    "future_date": is_future_date,
    "past_date": is_past_date,
    "within_last_year": is_within_last_year,
    "alpha_only": _matches(ALPHA_ONLY_PATTERN),
    "proper_name": _matches(PROPER_NAME_PATTERN),
    "phone_number": _matches(PHONE_PATTERN),
    "ssn_format": _matches(SSN_PATTERN),
    "positive_number": is_positive_number,
    "currency_format": _matches(CURRENCY_PATTERN),
    "percentage": is_percentage,
    "valid_address": is_plausible_address,
    "zip_code": _matches(ZIP_PATTERN),
    "case_number": _matches(CASE_NUMBER_PATTERN),
    "bar_number": _matches(BAR_NUMBER_PATTERN),
}


# =============================================================================
# REGISTRY
# =============================================================================

class PredicateRegistry:
    """Maps rule names to predicates. Each instance is independent."""

    def __init__(self, predicates: Optional[Dict[str, Predicate]] = None):
        self._predicates: Dict[str, Predicate] = dict(predicates or {})

    def register(self, name: str, predicate: Predicate) -> None:
        """Add or replace a predicate."""
        if not callable(predicate):
            raise TypeError(f"Predicate for '{name}' must be callable")
        self._predicates[name] = predicate

    def evaluate(self, name: str, value: Any) -> bool:
        """
        Run the named predicate against a value.

        Unknown names pass. A predicate that raises counts as a failure.
        """
        predicate = self._predicates.get(name)
        if predicate is None:
            return True
        try:
            return bool(predicate(value))
        except Exception as e:
            logger.warning("Predicate '%s' raised on value %r: %s", name, value, e)
            return False

    def names(self) -> List[str]:
        return sorted(self._predicates)

    def copy(self) -> "PredicateRegistry":
        return PredicateRegistry(self._predicates)

    def __contains__(self, name: object) -> bool:
        return name in self._predicates

    def __len__(self) -> int:
        return len(self._predicates)


def default_registry() -> PredicateRegistry:
    """Fresh registry loaded with the built-in predicates."""
    return PredicateRegistry(BUILTIN_PREDICATES)
