"""
CSV import for DUN labels and QR code lists.

Column headers vary between spreadsheets (case, language and punctuation
variants), so each canonical field has an ordered list of accepted aliases.
The first alias present in a row with a non-empty value wins.
"""

from __future__ import annotations

import math
from datetime import date
from typing import IO, Any, Dict, List, Mapping, Optional, Union
from pathlib import Path

import pandas as pd

from ..core.label_validation import validate_label_list
from ..exceptions import LabelImportError
from ..logger import get_logger
from ..models import LabelListValidation, LabelRecord, QrEntry
from ..validators.validators import normalize_expiry


logger = get_logger(__name__)

CsvSource = Union[str, Path, IO]

FIELD_ALIASES: Dict[str, List[str]] = {
    "sku": ["sku", "SKU"],
    "gtin14": ["gtin14", "GTIN14", "GTIN-14"],
    "product": ["product", "produto", "Produto"],
    "qtyPerBox": [
        "qtyPerBox",
        "qtdPerBox",
        "qtd_caixa",
        "qtd",
        "QUANTIDADE POR CAIXA",
        "quantidade",
        "Quantidade",
    ],
    "boxSize": ["boxSize", "tamCaixa", "tam_caixa", "TAMANHO CAIXA"],
    "weightKg": ["weightKg", "pesoKg", "PESO KG"],
    "lot": ["lot", "Lote", "lote"],
    "expiry": ["expiry", "validade", "Validade"],
}

LABEL_CSV_TEMPLATE = (
    "sku,gtin14,product,qtyPerBox,boxSize,weightKg,lot,expiry\n"
    'D24-ALV26278,27898971826272,Pasta de Dente Relax - Limão e Canela Vegano Alva 90g,24,32X25X16,"3,095",L2409-A,2027-03-31\n'
)

QR_CSV_TEMPLATE = (
    "label,value\n"
    "Site,https://example.com\n"
    "Produto 1,SKU-0001\n"
)


def _clean(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, float) and math.isnan(value):
        return ""
    return str(value).strip()


def resolve_field(row: Mapping[str, Any], field_name: str) -> str:
    """Return the first non-empty value among the aliases of ``field_name``."""
    for alias in FIELD_ALIASES[field_name]:
        value = _clean(row.get(alias))
        if value:
            return value
    return ""


def parse_quantity(raw: Any) -> Union[int, float]:
    """
    Parse a quantity cell, accepting a decimal comma.

    Integral values become int. Fractional values stay float so validation
    rejects them. Empty or unparsable cells become 0.
    """
    text = _clean(raw).replace(",", ".", 1)
    if not text:
        return 0
    try:
        number = float(text)
    except ValueError:
        return 0
    if not math.isfinite(number):
        return 0
    if number.is_integer():
        return int(number)
    return number


def row_to_label(row: Mapping[str, Any]) -> LabelRecord:
    """Map a CSV row with any accepted headers onto a LabelRecord."""
    return LabelRecord(
        sku=resolve_field(row, "sku"),
        gtin14=resolve_field(row, "gtin14"),
        product=resolve_field(row, "product"),
        qty_per_box=parse_quantity(resolve_field(row, "qtyPerBox")),
        box_size=resolve_field(row, "boxSize"),
        weight_kg=resolve_field(row, "weightKg"),
        lot=resolve_field(row, "lot") or None,
        expiry=normalize_expiry(resolve_field(row, "expiry")),
    )


def read_csv_rows(source: CsvSource) -> List[Dict[str, Any]]:
    """Read a CSV into row dicts, every cell as text."""
    try:
        df = pd.read_csv(
            source,
            dtype=str,
            keep_default_na=False,
            skip_blank_lines=True,
            skipinitialspace=True,
        )
    except pd.errors.EmptyDataError:
        return []
    except (pd.errors.ParserError, UnicodeDecodeError, OSError) as exc:
        raise LabelImportError(f"Erro ao processar CSV: {exc}") from exc

    df.columns = [str(c).strip() for c in df.columns]
    rows = df.to_dict(orient="records")
    return [row for row in rows if any(_clean(v) for v in row.values())]


def import_labels_csv(source: CsvSource, today: Optional[date] = None) -> LabelListValidation:
    """
    Import DUN labels from CSV and partition them into valid/invalid records.

    Args:
        source: Path or file-like object with CSV content
        today: Optional reference date for expiry validation

    Returns:
        LabelListValidation
    """
    rows = read_csv_rows(source)
    labels = [row_to_label(row) for row in rows]
    result = validate_label_list(labels, today=today)

    logger.info(
        "Imported %d label rows: %d valid, %d invalid",
        len(labels), result.valid_count, result.invalid_count,
    )
    if result.invalid_labels:
        logger.warning(
            "Processamento concluído: %d etiquetas válidas, %d inválidas",
            result.valid_count, result.invalid_count,
        )
    return result


def import_qr_csv(source: CsvSource) -> List[QrEntry]:
    """Import QR entries (``label``, ``value`` columns); rows without value are dropped."""
    entries: List[QrEntry] = []
    for row in read_csv_rows(source):
        value = _clean(row.get("value"))
        if not value:
            continue
        label: Optional[str] = _clean(row.get("label")) or None
        entries.append(QrEntry(value=value, label=label))

    logger.info("Imported %d QR entries", len(entries))
    return entries
