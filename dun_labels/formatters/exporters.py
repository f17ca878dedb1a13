"""
JSON and CSV export of labels and saved label sets.
"""

from __future__ import annotations

import csv
import json
import os
import re
import time
from pathlib import Path
from typing import Iterable, List, Optional

import pandas as pd

from ..models import LABEL_FIELDS, InvalidLabel, LabelRecord, SavedLabelSet


EXPORTS_DIR = Path(
    os.getenv("DUN_LABELS_EXPORTS_DIR", str(Path(__file__).resolve().parent.parent.parent / "exports"))
)

_UNSAFE_FILENAME = re.compile(r'[^\w\-. ]+')


def ensure_exports_dir(directory: Optional[Path] = None) -> Path:
    directory = Path(directory) if directory else EXPORTS_DIR
    directory.mkdir(parents=True, exist_ok=True)
    return directory


def label_set_to_json(label_set: SavedLabelSet) -> str:
    return json.dumps(label_set.to_dict(), indent=2, ensure_ascii=False)


def export_label_set_json(label_set: SavedLabelSet, directory: Optional[Path] = None) -> Path:
    """Write ``etiquetas-<name>-<id>.json`` and return its path."""
    safe_name = _UNSAFE_FILENAME.sub('_', label_set.name).strip() or "set"
    path = ensure_exports_dir(directory) / f"etiquetas-{safe_name}-{label_set.id}.json"
    path.write_text(label_set_to_json(label_set), encoding="utf-8")
    return path


def labels_to_dataframe(labels: Iterable[LabelRecord]) -> pd.DataFrame:
    """One row per label, columns in canonical order, empty text for missing lot/expiry."""
    rows = []
    for label in labels:
        data = label.to_dict()
        data["lot"] = data["lot"] or ""
        data["expiry"] = data["expiry"] or ""
        data["qtyPerBox"] = str(data["qtyPerBox"])
        rows.append(data)
    return pd.DataFrame(rows, columns=LABEL_FIELDS)


def labels_to_csv(labels: Iterable[LabelRecord]) -> str:
    """CSV text with every cell quoted, so decimal commas survive."""
    df = labels_to_dataframe(labels)
    return df.to_csv(index=False, quoting=csv.QUOTE_ALL, lineterminator="\n")


def export_labels_csv(
    labels: Iterable[LabelRecord],
    filename: Optional[str] = None,
    directory: Optional[Path] = None,
) -> Path:
    filename = filename or f"etiquetas-{int(time.time() * 1000)}.csv"
    path = ensure_exports_dir(directory) / filename
    path.write_text(labels_to_csv(labels), encoding="utf-8")
    return path


def invalid_labels_to_dataframe(invalid_labels: Iterable[InvalidLabel]) -> pd.DataFrame:
    rows: List[dict] = []
    for item in invalid_labels:
        data = item.to_dict()
        data["errors"] = "; ".join(item.errors)
        rows.append(data)
    return pd.DataFrame(rows, columns=LABEL_FIELDS + ["errors"])


def export_invalid_labels_csv(
    invalid_labels: Iterable[InvalidLabel],
    filename: str = "etiquetas-invalidas.csv",
    directory: Optional[Path] = None,
) -> Path:
    path = ensure_exports_dir(directory) / filename
    invalid_labels_to_dataframe(invalid_labels).to_csv(path, index=False)
    return path
