"""
CSV importers for labels and QR code lists.
"""

from .csv_importer import (
    FIELD_ALIASES,
    LABEL_CSV_TEMPLATE,
    QR_CSV_TEMPLATE,
    import_labels_csv,
    import_qr_csv,
    parse_quantity,
    resolve_field,
    row_to_label,
)

__all__ = [
    "FIELD_ALIASES",
    "LABEL_CSV_TEMPLATE",
    "QR_CSV_TEMPLATE",
    "import_labels_csv",
    "import_qr_csv",
    "parse_quantity",
    "resolve_field",
    "row_to_label",
]
