"""
Tests for the app settings helpers and restoring a saved QR sheet.
"""

import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[2]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from dun_labels import QrEntry  # noqa: E402
from dun_labels.reports import QrSheetSettings  # noqa: E402
from modules.settings import DEFAULT_SETTINGS, qr_sheet_from_settings  # noqa: E402


class TestQrSheetFromSettings:

    def test_defaults_match_sheet_defaults(self):
        assert qr_sheet_from_settings(DEFAULT_SETTINGS) == QrSheetSettings()

    def test_maps_stored_keys(self):
        settings = dict(
            DEFAULT_SETTINGS,
            orientation="landscape",
            qr_paper_size="A4",
            qr_width_mm=50,
            qr_show_value=False,
        )

        sheet = qr_sheet_from_settings(settings)

        assert sheet.orientation == "landscape"
        assert sheet.paper_size == "A4"
        assert sheet.width_mm == 50
        assert sheet.show_value is False


class TestRestoreSavedQrSheet:

    def test_loaded_set_restores_its_own_sheet(self, label_store):
        sheet = QrSheetSettings(
            paper_size="custom",
            width_mm=80,
            height_mm=50,
            color="#112233",
            show_label=False,
            orientation="landscape",
        )
        saved = label_store.save_qr_set("qr", [QrEntry("SKU-1")], sheet.orientation, sheet.to_dict())

        restored = QrSheetSettings.from_dict(label_store.load_qr_set(saved.id).settings)

        assert restored == sheet
        assert restored != qr_sheet_from_settings(DEFAULT_SETTINGS)
