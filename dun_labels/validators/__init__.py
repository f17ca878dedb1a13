"""
Validation modules for DUN label fields.
"""

from .validators import (
    validate_gtin14,
    validate_sku,
    validate_product,
    validate_quantity,
    validate_expiry_date,
    normalize_expiry,
    parse_expiry,
    calculate_check_digit_mod10,
    ValidationResult,
    EXPIRY_FORMATS,
)

__all__ = [
    "validate_gtin14",
    "validate_sku",
    "validate_product",
    "validate_quantity",
    "validate_expiry_date",
    "normalize_expiry",
    "parse_expiry",
    "calculate_check_digit_mod10",
    "ValidationResult",
    "EXPIRY_FORMATS",
]
