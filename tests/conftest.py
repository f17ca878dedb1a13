"""
Shared fixtures: an isolated JSON label store and export directory per test.
"""

import logging
from datetime import date

import pytest

from dun_labels import LabelRecord
from dun_labels import reports, storage
from dun_labels.formatters import exporters


# Reference date for expiry checks, so results do not depend on the clock
TODAY = date(2025, 1, 15)


@pytest.fixture
def today():
    return TODAY


@pytest.fixture
def sample_label():
    return LabelRecord(
        sku="D24-ALV26278",
        gtin14="27898971826272",
        product="Pasta de Dente Relax - Limão e Canela Vegano Alva 90g",
        qty_per_box=24,
        box_size="32X25X16",
        weight_kg="3,095",
        lot="L2409-A",
        expiry="2026-03-31",
    )


@pytest.fixture
def label_store(tmp_path, monkeypatch):
    """Point the storage layer at a fresh JSON file."""
    monkeypatch.setattr(storage, "PERSISTENCE_BACKEND", "json")
    monkeypatch.setattr(storage, "JSON_PATH", tmp_path / "data" / "label_sets.json")
    return storage


@pytest.fixture
def exports_dir(tmp_path, monkeypatch):
    directory = tmp_path / "exports"
    monkeypatch.setattr(exporters, "EXPORTS_DIR", directory)
    monkeypatch.setattr(reports, "EXPORTS_DIR", directory)
    return directory


@pytest.fixture(autouse=True)
def restore_root_logging():
    """The CLI installs its own root handlers; put pytest's back afterwards."""
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    root.handlers = handlers
    root.setLevel(level)
