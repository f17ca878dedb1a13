"""
Application settings persistence.
"""

from __future__ import annotations

from typing import Any, Dict

import streamlit as st

from dun_labels.reports import QrSheetSettings
from dun_labels.storage import get_setting, set_setting


DEFAULT_SETTINGS: Dict[str, Any] = {
    "orientation": "portrait",  # portrait or landscape
    "layout": "single",  # single or double (2 labels per 100x150 sheet)
    "show_box_size": True,
    "show_weight": True,
    "qr_paper_size": "60x40",
    "qr_width_mm": 60,
    "qr_height_mm": 40,
    "qr_size_percent": 70,
    "qr_label_font_size": 8,
    "qr_value_font_size": 6,
    "qr_auto_font": False,
    "qr_color": "#000000",
    "qr_bg_color": "#FFFFFF",
    "qr_show_label": True,
    "qr_show_value": True,
}


@st.cache_data(ttl=300)
def load_settings() -> Dict[str, Any]:
    settings = {}
    for key, default in DEFAULT_SETTINGS.items():
        settings[key] = get_setting(key, default)
    return settings


def save_settings(updates: Dict[str, Any]) -> None:
    for key, value in updates.items():
        set_setting(key, value)
    load_settings.clear()


def qr_sheet_from_settings(settings: Dict[str, Any]) -> QrSheetSettings:
    """Build the QR sheet defaults from the stored qr_* settings."""
    return QrSheetSettings(
        paper_size=settings["qr_paper_size"],
        width_mm=settings["qr_width_mm"],
        height_mm=settings["qr_height_mm"],
        qr_size_percent=settings["qr_size_percent"],
        label_font_size=settings["qr_label_font_size"],
        value_font_size=settings["qr_value_font_size"],
        auto_font=settings["qr_auto_font"],
        color=settings["qr_color"],
        bg_color=settings["qr_bg_color"],
        show_label=settings["qr_show_label"],
        show_value=settings["qr_show_value"],
        orientation=settings["orientation"],
    )
