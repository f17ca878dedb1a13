"""
PDF label sheets (DUN shipping labels and QR cards).
"""

from __future__ import annotations

import os
from dataclasses import asdict, dataclass, fields
from pathlib import Path
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple

from reportlab.graphics import renderPDF
from reportlab.graphics.barcode.code128 import Code128
from reportlab.graphics.barcode.qr import QrCodeWidget
from reportlab.graphics.shapes import Drawing
from reportlab.lib.colors import HexColor, black, white
from reportlab.lib.pagesizes import A4
from reportlab.lib.units import mm
from reportlab.lib.utils import simpleSplit
from reportlab.pdfgen import canvas

from .core.gs1_builder import build_gs1_strings
from .exceptions import LabelRenderError
from .logger import get_logger
from .models import ORIENTATIONS, LabelRecord, QrEntry


logger = get_logger(__name__)

EXPORTS_DIR = Path(
    os.getenv("DUN_LABELS_EXPORTS_DIR", str(Path(__file__).resolve().parent.parent / "exports"))
)

LAYOUTS = ("single", "double")

# 100x150 mm thermal label stock
LABEL_PAGE = (100 * mm, 150 * mm)
DOUBLE_LABEL = (96 * mm, 68 * mm)

QR_PAPER_SIZES = {
    "A4": A4,
    "60x40": (60 * mm, 40 * mm),
    "100x150": (100 * mm, 150 * mm),
}

PX_PER_MM = 4
QR_MIN_PX = 24
QR_MAX_PX = 300
QR_LABEL_MAX_CHARS = 30
QR_VALUE_MAX_CHARS = 40


def _resolve_path(filename) -> Path:
    path = Path(filename)
    if not path.is_absolute() and path.parent == Path("."):
        EXPORTS_DIR.mkdir(parents=True, exist_ok=True)
        path = EXPORTS_DIR / path
    path.parent.mkdir(parents=True, exist_ok=True)
    return path


def _truncate(text: str, limit: int) -> str:
    return f"{text[:limit]}..." if len(text) > limit else text


def _fit_code128(value: str, max_width: float, bar_height: float, human_readable: bool = True) -> Code128:
    bar_width = 0.5 * mm
    barcode = Code128(value, barHeight=bar_height, barWidth=bar_width, humanReadable=human_readable, quiet=0)
    width, _ = barcode.wrap(0, 0)
    if width > max_width:
        bar_width = bar_width * max_width / width
        barcode = Code128(value, barHeight=bar_height, barWidth=bar_width, humanReadable=human_readable, quiet=0)
    return barcode


def _draw_barcode_centered(c: canvas.Canvas, barcode: Code128, x: float, y: float, width: float) -> float:
    bc_width, bc_height = barcode.wrap(0, 0)
    barcode.drawOn(c, x + (width - bc_width) / 2, y)
    return bc_height


def _info_rows(label: LabelRecord, compact: bool, show_box_size: bool, show_weight: bool) -> List[Tuple[str, str]]:
    if compact:
        return [
            ("GTIN-14:", label.gtin14),
            ("Qtd/Caixa:", str(label.qty_per_box)),
            ("SKU:", label.sku),
        ]
    rows = [
        ("GTIN-14:", label.gtin14),
        ("SKU:", label.sku),
        ("Qtd/Caixa:", str(label.qty_per_box)),
    ]
    if show_box_size:
        rows.append(("Tam. Caixa:", label.box_size))
    if show_weight:
        rows.append(("Peso (kg):", label.weight_kg))
    return rows


def _draw_info(
    c: canvas.Canvas,
    label: LabelRecord,
    x: float,
    top: float,
    width: float,
    compact: bool,
    show_box_size: bool,
    show_weight: bool,
) -> float:
    """Draw header and field rows from ``top`` downwards; return the lowest y used."""
    title_size = 12 if compact else 26
    product_size = 7 if compact else 12
    row_size = 7 if compact else 11

    y = top - title_size
    c.setFont("Helvetica-Bold", title_size)
    c.drawString(x, y, "ETIQUETA DUN")

    c.setFont("Helvetica", product_size)
    for line in simpleSplit(label.product, "Helvetica", product_size, width)[:2]:
        y -= product_size * 1.3
        c.drawString(x, y, line)

    y -= product_size * 0.8
    c.setLineWidth(0.5)
    c.line(x, y, x + width, y)

    key_width = 24 * mm if not compact else 16 * mm
    for key, value in _info_rows(label, compact, show_box_size, show_weight):
        y -= row_size * 1.4
        c.setFont("Helvetica-Bold", row_size)
        c.drawString(x, y, key)
        c.setFont("Helvetica", row_size)
        c.drawString(x + key_width, y, value)
    return y


def _draw_barcodes(
    c: canvas.Canvas,
    label: LabelRecord,
    x: float,
    bottom: float,
    width: float,
    height: float,
    compact: bool,
) -> None:
    """Stack the GTIN-14, SKU and (full size only) GS1-128 barcodes inside the box."""
    values = [label.gtin14, label.sku]
    gs1 = None
    if not compact:
        gs1 = build_gs1_strings(label.gtin14, lot=label.lot, expiry=label.expiry)

    slots = len(values) + (1 if gs1 else 0)
    slot_height = height / slots
    bar_height = slot_height * (0.45 if compact else 0.6)

    y = bottom + height
    for value in values:
        y -= slot_height
        barcode = _fit_code128(value, width, bar_height)
        _draw_barcode_centered(c, barcode, x, y + slot_height * 0.15, width)

    if gs1:
        y -= slot_height
        barcode = _fit_code128(gs1.value_for_encoding, width, bar_height, human_readable=False)
        _draw_barcode_centered(c, barcode, x, y + slot_height * 0.25, width)
        c.setFont("Helvetica", 8)
        c.drawCentredString(x + width / 2, y + slot_height * 0.08, gs1.human_readable)


def draw_dun_label(
    c: canvas.Canvas,
    label: LabelRecord,
    x: float,
    y: float,
    width: float,
    height: float,
    compact: bool = False,
    show_box_size: bool = True,
    show_weight: bool = True,
) -> None:
    """Draw one label in the box (x, y, width, height); landscape when wider than tall."""
    pad = 2 * mm if compact else 4 * mm
    if not compact:
        c.setLineWidth(1)
        c.rect(x + pad / 2, y + pad / 2, width - pad, height - pad)

    inner_x, inner_y = x + pad, y + pad
    inner_w, inner_h = width - 2 * pad, height - 2 * pad

    if width > height:
        half = inner_w / 2
        _draw_info(c, label, inner_x, inner_y + inner_h, half - pad, compact, show_box_size, show_weight)
        _draw_barcodes(c, label, inner_x + half, inner_y, half, inner_h, compact)
    else:
        lowest = _draw_info(c, label, inner_x, inner_y + inner_h, inner_w, compact, show_box_size, show_weight)
        _draw_barcodes(c, label, inner_x, inner_y, inner_w, lowest - inner_y - pad, compact)


def render_labels_pdf(
    labels: Iterable[LabelRecord],
    filename,
    orientation: str = "portrait",
    layout: str = "single",
    show_box_size: bool = True,
    show_weight: bool = True,
) -> Path:
    """
    Render one 100x150 mm page per label.

    The ``double`` layout prints two identical compact labels per page.
    """
    if orientation not in ORIENTATIONS:
        raise LabelRenderError(f"Invalid orientation: {orientation!r}")
    if layout not in LAYOUTS:
        raise LabelRenderError(f"Invalid layout: {layout!r}")
    labels = list(labels)
    if not labels:
        raise LabelRenderError("No labels to render.")

    page_w, page_h = LABEL_PAGE
    if orientation == "landscape":
        page_w, page_h = page_h, page_w

    path = _resolve_path(filename)
    c = canvas.Canvas(str(path), pagesize=(page_w, page_h))
    c.setTitle("Etiquetas DUN")

    for label in labels:
        if layout == "single":
            draw_dun_label(c, label, 0, 0, page_w, page_h, False, show_box_size, show_weight)
        else:
            box_w, box_h = DOUBLE_LABEL
            if orientation == "landscape":
                box_w, box_h = box_h, box_w
                gap = (page_w - 2 * box_w) / 3
                boxes = [(gap, (page_h - box_h) / 2), (2 * gap + box_w, (page_h - box_h) / 2)]
            else:
                gap = (page_h - 2 * box_h) / 3
                boxes = [((page_w - box_w) / 2, 2 * gap + box_h), ((page_w - box_w) / 2, gap)]
            for bx, by in boxes:
                draw_dun_label(c, label, bx, by, box_w, box_h, True, show_box_size, show_weight)
        c.showPage()

    c.save()
    logger.info("Rendered %d labels (%s, %s) to %s", len(labels), orientation, layout, path)
    return path


@dataclass
class QrSheetSettings:
    """Print settings for QR cards; sizes in mm, font sizes in px."""
    paper_size: str = "60x40"
    width_mm: float = 60
    height_mm: float = 40
    qr_size_percent: float = 70
    label_font_size: float = 8
    value_font_size: float = 6
    auto_font: bool = False
    color: str = "#000000"
    bg_color: str = "#FFFFFF"
    show_label: bool = True
    show_value: bool = True
    orientation: str = "portrait"

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Optional[Mapping[str, Any]]) -> "QrSheetSettings":
        known = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in (data or {}).items() if k in known})

    def font_sizes(self) -> Tuple[float, float]:
        """(label, value) font sizes; auto mode scales with the card height."""
        if self.auto_font:
            return round(self.height_mm * 0.35), round(self.height_mm * 0.25)
        return self.label_font_size, self.value_font_size

    def card_size_mm(self) -> Tuple[float, float]:
        if self.orientation == "landscape":
            return self.height_mm, self.width_mm
        return self.width_mm, self.height_mm

    def page_size(self) -> Tuple[float, float]:
        if self.paper_size == "custom":
            width, height = self.card_size_mm()
            return width * mm, height * mm
        try:
            return QR_PAPER_SIZES[self.paper_size]
        except KeyError:
            raise LabelRenderError(f"Unknown paper size: {self.paper_size!r}") from None


def qr_card_size(
    width_mm: float,
    height_mm: float,
    qr_size_percent: float,
    label_font_size: float = 8,
    value_font_size: float = 6,
    show_label: bool = True,
    show_value: bool = True,
) -> int:
    """
    QR side length in px for a card, after the label and value text rows.

    Clamped to QR_MIN_PX..QR_MAX_PX.
    """
    width_px = width_mm * PX_PER_MM
    height_px = height_mm * PX_PER_MM
    label_height = label_font_size * 1.5 + 4 if show_label else 0
    value_height = value_font_size * 1.5 + 4 if show_value else 0
    padding = 16

    available_width = width_px - padding
    available_height = height_px - label_height - value_height - padding
    base = min(available_width, available_height)
    return max(QR_MIN_PX, min(QR_MAX_PX, int(base * (qr_size_percent / 100))))


def _px(value: float) -> float:
    return value / PX_PER_MM * mm


def draw_qr_card(c: canvas.Canvas, entry: QrEntry, x: float, y: float, settings: QrSheetSettings) -> None:
    width_mm, height_mm = settings.card_size_mm()
    width, height = width_mm * mm, height_mm * mm
    label_font, value_font = settings.font_sizes()
    show_label = settings.show_label and bool(entry.label)

    fg = HexColor(settings.color)
    bg = HexColor(settings.bg_color)

    c.setFillColor(bg)
    c.setStrokeColor(fg)
    c.rect(x, y, width, height, fill=1, stroke=1)

    size_px = qr_card_size(
        width_mm, height_mm, settings.qr_size_percent,
        label_font, value_font, show_label, settings.show_value,
    )
    size = _px(size_px)

    widget = QrCodeWidget(entry.value, barLevel="M")
    widget.barFillColor = fg
    widget.barStrokeColor = fg
    bx1, by1, bx2, by2 = widget.getBounds()
    drawing = Drawing(size, size, transform=[size / (bx2 - bx1), 0, 0, size / (by2 - by1), 0, 0])
    drawing.add(widget)
    renderPDF.draw(drawing, c, x + (width - size) / 2, y + (height - size) / 2)

    c.setFillColor(fg)
    if show_label:
        c.setFont("Helvetica-Bold", _px(label_font))
        c.drawCentredString(
            x + width / 2,
            y + height - _px(4 + label_font * 1.2),
            _truncate(entry.label, QR_LABEL_MAX_CHARS),
        )
    if settings.show_value:
        c.setFont("Helvetica", _px(value_font))
        c.drawCentredString(x + width / 2, y + _px(4), _truncate(entry.value, QR_VALUE_MAX_CHARS))
    c.setFillColor(black)
    c.setStrokeColor(black)


def render_qr_pdf(
    entries: Iterable[QrEntry],
    filename,
    settings: Optional[QrSheetSettings] = None,
) -> Path:
    """Render one QR card per page, centered on the selected paper."""
    settings = settings or QrSheetSettings()
    if settings.orientation not in ORIENTATIONS:
        raise LabelRenderError(f"Invalid orientation: {settings.orientation!r}")
    entries = list(entries)
    if not entries:
        raise LabelRenderError("No QR entries to render.")

    page_w, page_h = settings.page_size()
    card_w_mm, card_h_mm = settings.card_size_mm()
    path = _resolve_path(filename)
    c = canvas.Canvas(str(path), pagesize=(page_w, page_h))
    c.setTitle("Etiquetas QR")

    for entry in entries:
        c.setFillColor(white)
        c.rect(0, 0, page_w, page_h, fill=1, stroke=0)
        draw_qr_card(
            c, entry,
            (page_w - card_w_mm * mm) / 2,
            (page_h - card_h_mm * mm) / 2,
            settings,
        )
        c.showPage()

    c.save()
    logger.info("Rendered %d QR cards to %s", len(entries), path)
    return path
