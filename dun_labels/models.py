"""
Data models for logistics labels, QR entries and saved label sets.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional


# Canonical field order for serialized records (CSV headers, JSON keys)
LABEL_FIELDS = ["sku", "gtin14", "product", "qtyPerBox", "boxSize", "weightKg", "lot", "expiry"]

ORIENTATIONS = ("portrait", "landscape")

_SNAKE_KEYS = {
    "qty_per_box": "qtyPerBox",
    "box_size": "boxSize",
    "weight_kg": "weightKg",
}


@dataclass(frozen=True)
class LabelRecord:
    """
    A DUN shipping label.

    ``weight_kg`` is kept as text so decimal-comma values such as "3,095"
    are printed verbatim. ``lot`` maps to GS1 AI (10), ``expiry`` to AI (17).
    """
    sku: str
    gtin14: str
    product: str
    qty_per_box: Any
    box_size: str = ""
    weight_kg: str = ""
    lot: Optional[str] = None
    expiry: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "sku": self.sku,
            "gtin14": self.gtin14,
            "product": self.product,
            "qtyPerBox": self.qty_per_box,
            "boxSize": self.box_size,
            "weightKg": self.weight_kg,
            "lot": self.lot,
            "expiry": self.expiry,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "LabelRecord":
        """Build a record from camelCase (stored) or snake_case keys."""
        values = {_SNAKE_KEYS.get(k, k): v for k, v in data.items()}
        return cls(
            sku=str(values.get("sku") or ""),
            gtin14=str(values.get("gtin14") or ""),
            product=str(values.get("product") or ""),
            qty_per_box=values.get("qtyPerBox", 0),
            box_size=str(values.get("boxSize") or ""),
            weight_kg=str(values.get("weightKg") or ""),
            lot=values.get("lot") or None,
            expiry=values.get("expiry") or None,
        )


@dataclass(frozen=True)
class QrEntry:
    value: str
    label: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {"label": self.label, "value": self.value}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "QrEntry":
        return cls(value=str(data.get("value") or ""), label=data.get("label") or None)


@dataclass
class InvalidLabel:
    """A record that failed validation, with one message per failing field."""
    label: LabelRecord
    errors: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        data = self.label.to_dict()
        data["errors"] = list(self.errors)
        return data


@dataclass
class LabelListValidation:
    """Stable partition of a batch of records."""
    valid_labels: List[LabelRecord] = field(default_factory=list)
    invalid_labels: List[InvalidLabel] = field(default_factory=list)

    @property
    def valid_count(self) -> int:
        return len(self.valid_labels)

    @property
    def invalid_count(self) -> int:
        return len(self.invalid_labels)


@dataclass
class SavedLabelSet:
    id: str
    name: str
    labels: List[LabelRecord]
    created_at: str
    orientation: str = "portrait"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "labels": [label.to_dict() for label in self.labels],
            "createdAt": self.created_at,
            "orientation": self.orientation,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "SavedLabelSet":
        return cls(
            id=str(data["id"]),
            name=data.get("name", ""),
            labels=[LabelRecord.from_dict(d) for d in data.get("labels", [])],
            created_at=data.get("createdAt", ""),
            orientation=data.get("orientation") or "portrait",
        )


@dataclass
class SavedQrSet:
    id: str
    name: str
    qr_list: List[QrEntry]
    created_at: str
    orientation: str = "portrait"
    settings: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "qrList": [entry.to_dict() for entry in self.qr_list],
            "createdAt": self.created_at,
            "orientation": self.orientation,
            "settings": dict(self.settings),
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "SavedQrSet":
        return cls(
            id=str(data["id"]),
            name=data.get("name", ""),
            qr_list=[QrEntry.from_dict(d) for d in data.get("qrList", [])],
            created_at=data.get("createdAt", ""),
            orientation=data.get("orientation") or "portrait",
            settings=dict(data.get("settings") or {}),
        )


# Reference label used by the manual form and the CLI examples
DUN_SAMPLE = LabelRecord(
    sku="D24-ALV26278",
    gtin14="27898971826272",
    product="Pasta de Dente Relax - Limão e Canela Vegano Alva 90g",
    qty_per_box=24,
    box_size="32X25X16",
    weight_kg="3,095",
    lot="L2409-A",
    expiry="2026-03-31",
)
