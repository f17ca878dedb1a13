"""
Output formatters for labels and label sets.
"""

from .exporters import (
    export_invalid_labels_csv,
    export_label_set_json,
    export_labels_csv,
    label_set_to_json,
    labels_to_csv,
    labels_to_dataframe,
)

__all__ = [
    "export_invalid_labels_csv",
    "export_label_set_json",
    "export_labels_csv",
    "label_set_to_json",
    "labels_to_csv",
    "labels_to_dataframe",
]
