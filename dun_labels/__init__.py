"""
DUN / GS1 Logistics Label Toolkit

Validates shipping-label data (GTIN-14, SKU, product, quantity, expiry),
builds GS1-128 element strings for AIs (01), (17) and (10), imports label
batches from CSV, persists named label sets and renders printable PDF
label sheets.
"""

from .core.gs1_builder import build_gs1_strings, to_yymmdd, GS1Strings
from .core.label_validation import validate_label, validate_label_list
from .models import (
    LabelRecord,
    QrEntry,
    InvalidLabel,
    LabelListValidation,
    SavedLabelSet,
    SavedQrSet,
    DUN_SAMPLE,
)
from .validators.validators import (
    validate_gtin14,
    validate_expiry_date,
    validate_sku,
    validate_product,
    validate_quantity,
    normalize_expiry,
    calculate_check_digit_mod10,
    ValidationResult,
)

__version__ = "1.0.0"
__all__ = [
    "build_gs1_strings",
    "to_yymmdd",
    "GS1Strings",
    "validate_label",
    "validate_label_list",
    "LabelRecord",
    "QrEntry",
    "InvalidLabel",
    "LabelListValidation",
    "SavedLabelSet",
    "SavedQrSet",
    "DUN_SAMPLE",
    "validate_gtin14",
    "validate_expiry_date",
    "validate_sku",
    "validate_product",
    "validate_quantity",
    "normalize_expiry",
    "calculate_check_digit_mod10",
    "ValidationResult",
]
