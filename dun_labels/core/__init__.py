"""
Core GS1 string construction and label validation.
"""

from .gs1_builder import build_gs1_strings, to_yymmdd, GS1Strings
from .label_validation import validate_label, validate_label_list, label_errors

__all__ = [
    "build_gs1_strings",
    "to_yymmdd",
    "GS1Strings",
    "validate_label",
    "validate_label_list",
    "label_errors",
]
