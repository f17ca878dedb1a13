"""
Label Field Validation Functions

Implements validation for the fields of a logistics (DUN) label:
- GTIN-14 check digit validation (GS1 Mod10)
- Expiry date validation (YYYYMMDD, YYYY-MM-DD, DD/MM/YYYY)
- SKU, product name and quantity-per-box checks

Every validator is total: bad input yields False, never an exception.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from datetime import date
from typing import Any, List, Optional, Tuple


@dataclass
class ValidationResult:
    """Result of a validation operation."""
    valid: bool
    errors: List[str] = field(default_factory=list)


GTIN14_LENGTH = 14

MIN_SKU_LENGTH = 3
MIN_PRODUCT_LENGTH = 2

_WHITESPACE = re.compile(r'\s', re.ASCII)

# Accepted expiry shapes, tried in this order
EXPIRY_FORMATS: List[Tuple[str, re.Pattern]] = [
    ('YYYYMMDD', re.compile(r'^(\d{4})(\d{2})(\d{2})$', re.ASCII)),
    ('YYYY-MM-DD', re.compile(r'^(\d{4})-(\d{2})-(\d{2})$', re.ASCII)),
    ('DD/MM/YYYY', re.compile(r'^(\d{2})/(\d{2})/(\d{4})$', re.ASCII)),
]


def calculate_check_digit_mod10(digits: str) -> int:
    """
    Calculate GS1 Mod10 check digit.

    Algorithm (GS1 General Specifications):
    1. From right to left, alternate multipliers 3 and 1
    2. Sum all products
    3. Check digit = (10 - (sum mod 10)) mod 10

    Args:
        digits: Numeric string without check digit

    Returns:
        Calculated check digit (0-9)
    """
    if not digits or not digits.isdigit():
        raise ValueError("Input must be a non-empty numeric string")

    total = 0
    for i, digit in enumerate(reversed(digits)):
        multiplier = 3 if i % 2 == 0 else 1
        total += int(digit) * multiplier

    return (10 - (total % 10)) % 10


def validate_gtin14(value: Any) -> bool:
    """
    Validate a GTIN-14 (DUN-14) identifier.

    Whitespace is removed first. The cleaned value must be exactly 14 ASCII
    digits; the 13 payload digits are weighted 3/1 from the left (index 0
    weighs 3) and the last digit must equal (10 - sum mod 10) mod 10.
    """
    if not isinstance(value, str):
        return False

    cleaned = _WHITESPACE.sub('', value)
    if len(cleaned) != GTIN14_LENGTH or not cleaned.isascii() or not cleaned.isdigit():
        return False

    payload = cleaned[:-1]
    check_digit = int(cleaned[-1])

    total = 0
    for i, digit in enumerate(payload):
        total += int(digit) * (3 if i % 2 == 0 else 1)

    return check_digit == (10 - (total % 10)) % 10


def validate_sku(value: Any) -> bool:
    """SKU must have at least 3 characters after trimming."""
    return isinstance(value, str) and len(value.strip()) >= MIN_SKU_LENGTH


def validate_product(value: Any) -> bool:
    """Product name must have at least 2 characters after trimming."""
    return isinstance(value, str) and len(value.strip()) >= MIN_PRODUCT_LENGTH


def validate_quantity(value: Any) -> bool:
    """Quantity per box must be a positive integer."""
    if isinstance(value, bool):
        return False
    if isinstance(value, int):
        return value > 0
    if isinstance(value, float):
        return value.is_integer() and value > 0
    return False


def parse_expiry(value: str) -> Optional[Tuple[str, date]]:
    """
    Detect the shape of an expiry string and parse it into a date.

    Returns:
        (format_name, date) or None when no accepted shape matches or the
        components do not form a calendar date.
    """
    for format_name, pattern in EXPIRY_FORMATS:
        match = pattern.fullmatch(value)
        if not match:
            continue
        if format_name == 'DD/MM/YYYY':
            day, month, year = (int(g) for g in match.groups())
        else:
            year, month, day = (int(g) for g in match.groups())
        try:
            return format_name, date(year, month, day)
        except ValueError:
            return None
    return None


def validate_expiry_date(value: Optional[str], today: Optional[date] = None) -> bool:
    """
    Validate an optional expiry date.

    Empty values are accepted (the field is optional). Otherwise the value
    must match one of EXPIRY_FORMATS and denote a date strictly after today,
    so an expiry of today is rejected.

    Args:
        value: Expiry string or None
        today: Reference date, defaults to the local current date
    """
    if not value:
        return True
    if not isinstance(value, str):
        return False

    parsed = parse_expiry(value)
    if parsed is None:
        return False

    reference = today or date.today()
    return parsed[1] > reference


def normalize_expiry(value: Optional[str]) -> Optional[str]:
    """
    Rewrite an accepted expiry shape as ISO YYYY-MM-DD.

    Values that do not parse are returned unchanged so that validation
    reports them; empty values become None.
    """
    if value is None:
        return None
    value = value.strip()
    if not value:
        return None

    parsed = parse_expiry(value)
    if parsed is None:
        return value
    return parsed[1].isoformat()

